import click

from deployment.constants import SUPPORTED_CHAINS, PoolType, TokenContractName
from deployment.types import PoolTypeChoice

chain_option = click.option(
    "--chain",
    "-c",
    help="Chain to deploy to",
    type=click.Choice(SUPPORTED_CHAINS),
    required=True,
)

verify_contract_option = click.option(
    "--verifycontract",
    "verify_contract",
    help="Verify the contracts on the chain's block explorer",
    is_flag=True,
    default=False,
)

pool_type_option = click.option(
    "--pooltype",
    "pool_type",
    help="Type of the pool (burnMint or lockRelease)",
    type=PoolTypeChoice(),
    default=PoolType.BURN_MINT.value,
    show_default=True,
)

accept_liquidity_option = click.option(
    "--acceptliquidity",
    "accept_liquidity",
    help="Accept liquidity (only for lockRelease pool)",
    is_flag=True,
    default=False,
)

token_option = click.option(
    "--token",
    "token_contract",
    help="Token contract to deploy behind the proxy",
    type=click.Choice([token.value for token in TokenContractName]),
    default=TokenContractName.ASTAR_TOKEN.value,
    show_default=True,
    callback=lambda ctx, param, value: TokenContractName(value),
)

gas_price_option = click.option(
    "--gas-price",
    help="Gas price override, in wei",
    type=click.IntRange(min=0),
    required=False,
)

nonce_option = click.option(
    "--nonce",
    help="Nonce of the first transaction; following transactions increment it",
    type=click.IntRange(min=0),
    required=False,
)

autosign_option = click.option(
    "--autosign",
    help="Automatically sign transactions.",
    is_flag=True,
)
