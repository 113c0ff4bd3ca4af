from ape import networks, project
from ape.contracts import ContractContainer
from ape.logging import logger

from deployment.networks import is_local_network


def check_explorer_plugin() -> None:
    """
    Checks that the ape-etherscan plugin is installed and that
    the active network has a block explorer to publish to.
    """
    if is_local_network():
        # unnecessary for local deployment
        return
    try:
        import ape_etherscan  # noqa: F401
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to verify contracts.")
    if networks.provider.network.explorer is None:
        raise ValueError(
            f"No block explorer configured for network {networks.provider.network.name}."
        )


def check_plugins(verify: bool = False) -> None:
    logger.info("Checking plugins...")
    try:
        import ape_solidity  # noqa: F401
    except ImportError:
        raise ImportError("Please install the ape-solidity plugin to compile the contracts.")
    if verify:
        check_explorer_plugin()


def get_contract_container(contract_name: str) -> ContractContainer:
    """
    Looks a contract up in the project sources, then in the dependencies in the
    order ape-config.yaml lists them: ERC1967Proxy comes from openzeppelin and the
    token pools from chainlink-ccip.
    """
    try:
        return getattr(project, contract_name)
    except AttributeError:
        pass

    for dependency in project.dependencies.specified:
        try:
            container = getattr(dependency.project, contract_name)
        except AttributeError:
            continue
        logger.debug(f"Using {contract_name} from {dependency.name} {dependency.version}")
        return container
    raise ValueError(f"No contract named '{contract_name}' in the project or its dependencies.")
