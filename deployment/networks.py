import os
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Optional, Tuple

import yaml
from ape import networks
from ape.api.networks import LOCAL_NETWORK_NAME
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.constants import (
    APE_NETWORKS,
    CHAINS_FILEPATH,
    DEFAULT_RPC_URLS,
    EXPLORERS,
    PRIVATE_KEY_ENVVARS,
    RPC_URL_ENVVARS,
)

# persisted key -> ChainConfig field
CHAIN_CONFIG_KEYS = {
    "chainId": "chain_id",
    "chainSelector": "chain_selector",
    "router": "router",
    "rmnProxy": "rmn_proxy",
    "tokenAdminRegistry": "token_admin_registry",
    "registryModuleOwnerCustom": "registry_module_owner_custom",
    "link": "link",
    "confirmations": "confirmations",
    "nativeCurrencySymbol": "native_currency_symbol",
}

ADDRESS_FIELDS = (
    "router",
    "rmn_proxy",
    "token_admin_registry",
    "registry_module_owner_custom",
    "link",
)


class NetworkConfigError(ValueError):
    """Base class for fatal network configuration errors."""


class ConfigNotFound(NetworkConfigError):
    """Raised when a chain has no network configuration."""


class InvalidNetworkConfig(NetworkConfigError):
    """Raised when a network configuration lacks a required setting."""


class ChainConfig(NamedTuple):
    """Static CCIP metadata for a single chain."""

    name: str
    chain_id: Optional[int]
    chain_selector: str
    router: Optional[ChecksumAddress]
    rmn_proxy: Optional[ChecksumAddress]
    token_admin_registry: Optional[ChecksumAddress]
    registry_module_owner_custom: Optional[ChecksumAddress]
    link: Optional[ChecksumAddress]
    confirmations: Optional[int]
    native_currency_symbol: str


class ExplorerConfig(NamedTuple):
    api_url: str
    browser_url: str
    api_key: str = " "

    def address_url(self, address: str) -> str:
        return f"{self.browser_url}/address/{address}"


class NetworkConfig(NamedTuple):
    """A ChainConfig plus the deploy-time settings of the current process."""

    name: str
    chain_id: Optional[int]
    chain_selector: str
    router: Optional[ChecksumAddress]
    rmn_proxy: Optional[ChecksumAddress]
    token_admin_registry: Optional[ChecksumAddress]
    registry_module_owner_custom: Optional[ChecksumAddress]
    link: Optional[ChecksumAddress]
    confirmations: Optional[int]
    native_currency_symbol: str
    url: str
    gas_price: Optional[int] = None
    nonce: Optional[int] = None
    accounts: Tuple[str, ...] = ()
    explorer: Optional[ExplorerConfig] = None

    @classmethod
    def from_chain_config(cls, chain_config: ChainConfig, **settings) -> "NetworkConfig":
        return cls(**chain_config._asdict(), **settings)

    @property
    def network_choice(self) -> str:
        """ape network choice string, with the RPC url as provider."""
        ecosystem, network = APE_NETWORKS.get(self.name, (self.name, self.name))
        return f"{ecosystem}:{network}:{self.url}"


def _parse_chain_config(name: str, data: Dict) -> ChainConfig:
    if not isinstance(data, dict):
        raise InvalidNetworkConfig(f"Chain {name} must be a mapping of settings, got {data!r}")
    unknown_keys = set(data) - set(CHAIN_CONFIG_KEYS)
    if unknown_keys:
        raise InvalidNetworkConfig(
            f"Unknown keys for chain {name}: {', '.join(sorted(unknown_keys))}"
        )

    values = {field: data.get(key) for key, field in CHAIN_CONFIG_KEYS.items()}
    for field in ADDRESS_FIELDS:
        if values[field]:
            values[field] = to_checksum_address(values[field])

    confirmations = values["confirmations"]
    if confirmations is not None:
        confirmations = int(confirmations)
        if confirmations < 0:
            raise InvalidNetworkConfig(f"confirmations must be non-negative for {name}")
        values["confirmations"] = confirmations

    if values["chain_id"] is not None:
        values["chain_id"] = int(values["chain_id"])
    values["chain_selector"] = str(values["chain_selector"] or "")
    values["native_currency_symbol"] = values["native_currency_symbol"] or ""

    return ChainConfig(name=name, **values)


def load_chain_configs(filepath: Path = CHAINS_FILEPATH) -> Dict[str, ChainConfig]:
    """Loads the static per-chain metadata from a YAML file."""
    with open(filepath, "r") as file:
        data = yaml.safe_load(file) or dict()
    return {name: _parse_chain_config(name, chain_data) for name, chain_data in data.items()}


def _accounts_from_environment(environ: Mapping[str, str]) -> Tuple[str, ...]:
    accounts = list()
    for envvar in PRIVATE_KEY_ENVVARS:
        private_key = environ.get(envvar)
        if private_key:
            accounts.append(private_key)
    return tuple(accounts)


def _rpc_url(chain_name: str, environ: Mapping[str, str]) -> str:
    envvar = RPC_URL_ENVVARS.get(chain_name)
    if envvar and environ.get(envvar):
        return environ[envvar]
    return DEFAULT_RPC_URLS.get(chain_name, "")


class NetworkRegistry:
    """Read-only mapping of chain names to network configurations."""

    def __init__(self, network_configs: Mapping[str, NetworkConfig]):
        self._network_configs = MappingProxyType(dict(network_configs))

    @classmethod
    def from_environment(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        filepath: Path = CHAINS_FILEPATH,
    ) -> "NetworkRegistry":
        """Merges static chain metadata with environment-supplied settings."""
        environ = os.environ if environ is None else environ
        accounts = _accounts_from_environment(environ)

        network_configs = dict()
        for name, chain_config in load_chain_configs(filepath).items():
            explorer = EXPLORERS.get(name)
            network_configs[name] = NetworkConfig.from_chain_config(
                chain_config,
                url=_rpc_url(name, environ),
                gas_price=None,
                nonce=None,
                accounts=accounts,
                explorer=ExplorerConfig(**explorer) if explorer else None,
            )
        return cls(network_configs)

    @property
    def chain_names(self) -> Tuple[str, ...]:
        return tuple(self._network_configs)

    def resolve(self, chain_name: str) -> NetworkConfig:
        try:
            return self._network_configs[chain_name]
        except KeyError:
            raise ConfigNotFound(f"Network {chain_name} not found in config")

    def __contains__(self, chain_name: str) -> bool:
        return chain_name in self._network_configs


def validate_network_config(network_config: NetworkConfig) -> None:
    """Checks the settings every deployment step relies on."""
    if not network_config.router or not network_config.rmn_proxy:
        raise InvalidNetworkConfig(f"Router or RMN Proxy not defined for {network_config.name}")
    if network_config.confirmations is None:
        raise InvalidNetworkConfig(f"confirmations is not defined for {network_config.name}")


def is_local_network() -> bool:
    return networks.provider.network.name == LOCAL_NETWORK_NAME
