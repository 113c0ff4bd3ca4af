from enum import Enum
from pathlib import Path

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
CHAINS_FILEPATH = DEPLOYMENT_DIR / "chains.yml"

#
# Chains
#

SONEIUM_MINATO = "soneiumMinato"
SONEIUM = "soneium"

SUPPORTED_CHAINS = [SONEIUM_MINATO, SONEIUM]

# chain name -> (ape ecosystem, ape network)
APE_NETWORKS = {
    SONEIUM_MINATO: ("soneium", "minato"),
    SONEIUM: ("soneium", "mainnet"),
}

DEFAULT_RPC_URLS = {
    SONEIUM_MINATO: "https://rpc.minato.soneium.org",
    SONEIUM: "https://rpc.soneium.org",
}

RPC_URL_ENVVARS = {
    SONEIUM: "SONEIUM_RPC_URL",
}

#
# Signers
#

PRIVATE_KEY_ENVVARS = ["PRIVATE_KEY", "PRIVATE_KEY_2"]
SIGNER_PASSPHRASE_ENVVAR = "SIGNER_PASSPHRASE"
SIGNER_ALIASES = ["DEPLOYER", "DEPLOYER_2"]

#
# Block explorers (blockscout, etherscan-compatible API)
#

EXPLORERS = {
    SONEIUM_MINATO: {
        "api_url": "https://soneium-minato.blockscout.com/api",
        "browser_url": "https://soneium-minato.blockscout.com",
        "api_key": " ",
    },
    SONEIUM: {
        "api_url": "https://soneium.blockscout.com/api",
        "browser_url": "https://soneium.blockscout.com",
        "api_key": " ",
    },
}

#
# Contracts
#

PROXY_CONTRACT_NAME = "ERC1967Proxy"


class TokenContractName(Enum):
    ASTAR_TOKEN = "AstarToken"
    SHIBUYA_TOKEN = "ShibuyaToken"


class PoolType(Enum):
    BURN_MINT = "burnMint"
    LOCK_RELEASE = "lockRelease"

    @property
    def contract_name(self) -> str:
        """Name of the pool contract in the project, e.g. BurnMintTokenPool."""
        return f"{self.value[0].upper()}{self.value[1:]}TokenPool"

    @property
    def display_name(self) -> str:
        return f"{self.value}TokenPool"
