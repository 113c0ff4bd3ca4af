import sys
from typing import Any, Dict

from ape.utils import ZERO_ADDRESS


def _ask(prompt: str) -> None:
    """Aborts the deployment when the user answers no."""
    answer = input(f"{prompt} Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        sys.exit(-1)


def _confirm_resolution(named_args: Dict[str, Any], contract_name: str) -> None:
    """Lists the constructor arguments by their ABI names and asks to deploy."""
    if not named_args:
        print(f"\n(i) No constructor arguments for {contract_name}")
    else:
        print(f"\nConstructor arguments for {contract_name}")
        width = max(len(name) for name in named_args)
        for name, value in named_args.items():
            print(f"\t{name.ljust(width)} = {value}")
    _ask(f"Deploy {contract_name}")
    if ZERO_ADDRESS in named_args.values():
        _ask(f"Zero address passed to the {contract_name} constructor; continue")
