import typing
from typing import Any, Dict, Sequence, Union

from ape import networks
from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance, ContractTransactionHandler
from ape.logging import logger
from ethpm_types.abi import ConstructorABI, MethodABI
from web3.auto import w3

from deployment.confirm import _ask, _confirm_resolution
from deployment.networks import NetworkConfig, is_local_network


def _name_args(
    abis: Sequence[Union[MethodABI, ConstructorABI]], args: Sequence[Any], label: str
) -> Dict[str, Any]:
    """
    Names the arguments after the inputs of the first ABI that can encode them.
    Unnamed inputs are keyed by position.
    """
    if len(abis) == 0:
        raise ValueError(f"No ABI to validate the arguments of {label}")

    for abi in abis:
        if len(abi.inputs) != len(args):
            continue
        named_args = {}
        for position, (arg, abi_input) in enumerate(zip(args, abi.inputs)):
            if not w3.is_encodable(abi_input.type, arg):
                break
            named_args[abi_input.name or f"[{position}]"] = arg
        else:
            return named_args
    raise ValueError(f"No ABI of {label} accepts {len(args)} argument(s) of the given type(s)")


class Transactor:
    """
    Represents an ape account plus validated/annotated transaction execution.
    """

    def __init__(self, account: typing.Optional[AccountAPI] = None, autosign: bool = False):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            logger.warning("Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign
        self._account.set_autosign(autosign)

    def get_account(self) -> AccountAPI:
        return self._account

    def _get_kwargs(self) -> typing.Dict[str, Any]:
        """Returns the transaction kwargs."""
        return {}

    def transact(self, method: ContractTransactionHandler, *args) -> ReceiptAPI:
        contract_name = method.contract.contract_type.name
        named_args = _name_args(method.abis, args, f"{contract_name}.{method}")
        call = f"{contract_name}[{method.contract.address[:10]}].{method}"
        if named_args:
            pretty_args = "\n\t".join(f"{name}={value}" for name, value in named_args.items())
            logger.info(f"Transacting {call} with arguments:\n\t{pretty_args}")
        else:
            logger.info(f"Transacting {call} with no arguments")
        if not self._autosign:
            _ask("Continue")

        return method(*args, sender=self._account, **self._get_kwargs())


class Deployer(Transactor):
    """
    Represents an ape account bound to the network configuration of one chain.
    Every transaction it submits blocks until the configured number of
    confirmations has been observed.
    """

    def __init__(
        self,
        network_config: NetworkConfig,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
    ):
        super().__init__(account, autosign)
        self.network_config = network_config
        self._next_nonce = network_config.nonce
        self._print_deployment_info()

    @property
    def confirmations(self) -> int:
        return self.network_config.confirmations

    def _get_kwargs(self) -> typing.Dict[str, Any]:
        kwargs = {"required_confirmations": self.confirmations}
        if self.network_config.gas_price is not None:
            kwargs["gas_price"] = self.network_config.gas_price
        if self._next_nonce is not None:
            kwargs["nonce"] = self._next_nonce
            self._next_nonce += 1
        return kwargs

    def validate_chain(self) -> None:
        """Refuses to deploy when connected to a chain other than the configured one."""
        expected_chain_id = self.network_config.chain_id
        if expected_chain_id is None or is_local_network():
            return
        connected_chain_id = networks.provider.chain_id
        if connected_chain_id != expected_chain_id:
            raise ValueError(
                f"chain_id of {self.network_config.name} ({expected_chain_id}) does not match "
                f"chain_id of current network ({connected_chain_id})."
            )

    def await_confirmations(self, receipt: ReceiptAPI) -> ReceiptAPI:
        receipt.await_confirmations()
        logger.info(
            f"Transaction {receipt.txn_hash} confirmed after {self.confirmations} block(s)"
        )
        return receipt

    def transact(self, method: ContractTransactionHandler, *args) -> ReceiptAPI:
        receipt = super().transact(method, *args)
        return self.await_confirmations(receipt)

    def deploy(self, container: ContractContainer, *args) -> ContractInstance:
        contract_name = container.contract_type.name
        named_args = _name_args([container.constructor.abi], args, f"{contract_name} constructor")
        if not self._autosign:
            _confirm_resolution(named_args, contract_name)

        logger.info(
            f"Deploying {contract_name}; waiting {self.confirmations} blocks "
            f"for the transaction to be confirmed..."
        )
        instance = self.get_account().deploy(container, *args, **self._get_kwargs())
        self.await_confirmations(instance.receipt)
        logger.info(f"{contract_name} deployed to: {instance.address}")
        return instance

    def _print_deployment_info(self):
        logger.info(
            "\n".join(
                (
                    f"Account: {self.get_account().address}",
                    f"Chain: {self.network_config.name}",
                    f"Chain ID: {self.network_config.chain_id}",
                    f"Chain Selector: {self.network_config.chain_selector}",
                    f"RPC: {self.network_config.url}",
                    f"Confirmations: {self.confirmations}",
                    f"Gas Price: {self.network_config.gas_price or 'provider default'}",
                )
            )
        )
