from typing import Any, Optional, Sequence

from ape import networks
from ape.api import ExplorerAPI
from ape.logging import logger

from deployment.networks import ExplorerConfig

ALREADY_VERIFIED_MESSAGE = "already verified"


class ContractVerifier:
    """
    Publishes deployed contracts to the block explorer of the active network.

    Verification is best effort: failures are logged and never raised,
    so a deployment run is not aborted by an explorer outage.
    """

    def __init__(
        self,
        explorer: Optional[ExplorerAPI] = None,
        explorer_config: Optional[ExplorerConfig] = None,
    ):
        self._explorer = explorer
        self.explorer_config = explorer_config

    @property
    def explorer(self) -> ExplorerAPI:
        explorer = self._explorer or networks.provider.network.explorer
        if explorer is None:
            raise ValueError(
                f"No block explorer plugin available for {networks.provider.network.name}"
            )
        return explorer

    def verify(
        self, address: str, constructor_arguments: Sequence[Any], contract_name: str
    ) -> None:
        logger.info(f"Verifying {contract_name} contract at {address}...")
        if constructor_arguments:
            pretty_args = ", ".join(str(arg) for arg in constructor_arguments)
            logger.debug(f"{contract_name} constructor arguments: {pretty_args}")
        try:
            self.explorer.publish_contract(address)
        except Exception as error:
            message = str(error)
            if ALREADY_VERIFIED_MESSAGE in message.lower():
                logger.warning(f"{contract_name} contract deployed but already verified")
            else:
                logger.error(message or repr(error))
                logger.warning(
                    f"{contract_name} contract deployed but not verified. "
                    f"Ensure you are waiting for enough confirmation blocks"
                )
            return

        logger.info(f"{contract_name} contract ({address}) deployed and verified")
        if self.explorer_config:
            logger.info(f"See {self.explorer_config.address_url(address)}")
