from typing import Any, List, NamedTuple, Optional, Union

from ape.api import AccountAPI
from ape.contracts.base import ContractInstance
from ape.logging import logger
from eth_typing import ChecksumAddress

from deployment.constants import PROXY_CONTRACT_NAME, PoolType, TokenContractName
from deployment.networks import (
    InvalidNetworkConfig,
    NetworkConfig,
    NetworkConfigError,
    NetworkRegistry,
    validate_network_config,
)
from deployment.params import Deployer
from deployment.utils import get_contract_container
from deployment.verification import ContractVerifier


class UnsupportedPoolType(NetworkConfigError):
    """Raised for a pool type other than burnMint or lockRelease."""


class DeploymentRecord(NamedTuple):
    """A contract deployed during one run, kept in memory to drive verification."""

    address: ChecksumAddress
    constructor_arguments: List[Any]
    contract_name: str


def parse_pool_type(pool_type: Union[str, PoolType]) -> PoolType:
    if isinstance(pool_type, PoolType):
        return pool_type
    try:
        return PoolType(pool_type)
    except ValueError:
        raise UnsupportedPoolType(f"Invalid poolType: {pool_type}")


def pool_constructor_args(
    pool_type: PoolType,
    token: ChecksumAddress,
    rmn_proxy: ChecksumAddress,
    router: ChecksumAddress,
    accept_liquidity: Optional[bool] = None,
) -> List[Any]:
    """Returns the pool constructor arguments; the allowlist is always empty."""
    allowlist = []
    if pool_type is PoolType.BURN_MINT:
        return [token, allowlist, rmn_proxy, router]
    elif pool_type is PoolType.LOCK_RELEASE:
        accept_liquidity = bool(accept_liquidity) if accept_liquidity is not None else False
        return [token, allowlist, rmn_proxy, accept_liquidity, router]
    raise UnsupportedPoolType(f"Invalid poolType: {pool_type}")


class TokenPoolDeployment:
    """
    Deploys a token behind an ERC1967 proxy plus a CCIP token pool for it.

    Stages run strictly in order and each one waits for its transaction to be
    confirmed. Nothing is rolled back when a later stage fails: contracts that
    were already confirmed stay on chain, and running again deploys new ones.
    """

    class Failed(Exception):
        """Raised when a deployment or role wiring transaction fails."""

    def __init__(
        self,
        network_config: NetworkConfig,
        deployer: Deployer,
        pool_type: Union[str, PoolType] = PoolType.BURN_MINT,
        accept_liquidity: Optional[bool] = None,
        verify: bool = False,
        token_contract: TokenContractName = TokenContractName.ASTAR_TOKEN,
        verifier: Optional[ContractVerifier] = None,
    ):
        validate_network_config(network_config)
        self.network_config = network_config
        self.deployer = deployer
        self.pool_type = parse_pool_type(pool_type)
        self.accept_liquidity = accept_liquidity
        self.verify = verify
        self.token_contract = token_contract
        if verify and verifier is None:
            verifier = ContractVerifier(explorer_config=network_config.explorer)
        self.verifier = verifier
        self.records: List[DeploymentRecord] = list()

    @classmethod
    def from_registry(
        cls,
        registry: NetworkRegistry,
        chain_name: str,
        account: Optional[AccountAPI] = None,
        autosign: bool = False,
        pool_type: Union[str, PoolType] = PoolType.BURN_MINT,
        gas_price: Optional[int] = None,
        nonce: Optional[int] = None,
        **kwargs,
    ) -> "TokenPoolDeployment":
        """
        Resolves and validates the chain configuration before any signer is used.
        `gas_price` and `nonce` override the registry settings for this run only.
        """
        network_config = registry.resolve(chain_name)
        validate_network_config(network_config)
        overrides = dict(gas_price=gas_price, nonce=nonce)
        network_config = network_config._replace(
            **{setting: value for setting, value in overrides.items() if value is not None}
        )
        pool_type = parse_pool_type(pool_type)
        deployer = Deployer(network_config=network_config, account=account, autosign=autosign)
        return cls(network_config, deployer, pool_type=pool_type, **kwargs)

    def _record(self, instance: ContractInstance, args: List[Any], name: str) -> None:
        record = DeploymentRecord(
            address=instance.address, constructor_arguments=args, contract_name=name
        )
        self.records.append(record)

    def deploy_token(self) -> ContractInstance:
        container = get_contract_container(self.token_contract.value)
        token = self.deployer.deploy(container)
        self._record(token, [], self.token_contract.value)
        return token

    def deploy_proxy(self, token: ContractInstance) -> ContractInstance:
        admin = self.deployer.get_account().address
        logger.info(f"Encoding {self.token_contract.value}.initialize({admin}) for the proxy")
        initialize_data = token.initialize.encode_input(admin)
        container = get_contract_container(PROXY_CONTRACT_NAME)
        constructor_args = [token.address, initialize_data]
        proxy = self.deployer.deploy(container, *constructor_args)
        self._record(proxy, constructor_args, PROXY_CONTRACT_NAME)
        return proxy

    def deploy_pool(self, proxy: ContractInstance) -> ContractInstance:
        if self.network_config.confirmations is None:
            raise InvalidNetworkConfig(
                f"confirmations is not defined for {self.network_config.name}"
            )
        constructor_args = pool_constructor_args(
            pool_type=self.pool_type,
            token=proxy.address,
            rmn_proxy=self.network_config.rmn_proxy,
            router=self.network_config.router,
            accept_liquidity=self.accept_liquidity,
        )
        container = get_contract_container(self.pool_type.contract_name)
        pool = self.deployer.deploy(container, *constructor_args)
        self._record(pool, constructor_args, self.pool_type.display_name)
        return pool

    def grant_mint_and_burn_roles(self, proxy: ContractInstance, pool: ContractInstance) -> None:
        logger.info(f"Granting mint and burn roles to {pool.address} on token {proxy.address}")
        token_container = get_contract_container(self.token_contract.value)
        proxied_token = token_container.at(proxy.address)
        self.deployer.transact(proxied_token.grantMintAndBurnRoles, pool.address)
        logger.info(f"Mint and burn roles granted to {pool.address}")

    def verify_contracts(self) -> None:
        for record in self.records:
            self.verifier.verify(
                record.address, record.constructor_arguments, record.contract_name
            )

    def run(self) -> List[DeploymentRecord]:
        self.records = list()
        logger.info(
            f"Deploying {self.token_contract.value} with {self.pool_type.contract_name} "
            f"on {self.network_config.name}"
        )
        try:
            token = self.deploy_token()
            proxy = self.deploy_proxy(token)
            pool = self.deploy_pool(proxy)
            if self.pool_type is PoolType.BURN_MINT:
                self.grant_mint_and_burn_roles(proxy, pool)
        except Exception as error:
            logger.error(f"{type(error).__name__}: {error}")
            raise self.Failed("Error with deploying contracts") from error

        if self.verify:
            self.verify_contracts()
        else:
            logger.success("All contracts deployed successfully")
        return list(self.records)
