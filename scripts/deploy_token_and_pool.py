#!/usr/bin/python3

import click
from ape import networks
from ape.cli import account_option
from ape.logging import logger

from deployment.constants import PoolType
from deployment.networks import NetworkConfigError, NetworkRegistry
from deployment.options import (
    accept_liquidity_option,
    autosign_option,
    chain_option,
    gas_price_option,
    nonce_option,
    pool_type_option,
    token_option,
    verify_contract_option,
)
from deployment.token_pool import TokenPoolDeployment
from deployment.utils import check_plugins


@click.command(name="deploy-token-and-pool")
@chain_option
@account_option()
@verify_contract_option
@pool_type_option
@accept_liquidity_option
@token_option
@gas_price_option
@nonce_option
@autosign_option
def cli(
    chain,
    account,
    verify_contract,
    pool_type,
    accept_liquidity,
    token_contract,
    gas_price,
    nonce,
    autosign,
):
    """
    Deploys a token behind an ERC1967 proxy and a CCIP token pool for it.

    ape run deploy_token_and_pool --chain soneiumMinato --account DEPLOYER --pooltype burnMint
    ape run deploy_token_and_pool -c soneium --pooltype lockRelease --acceptliquidity
    """
    registry = NetworkRegistry.from_environment()
    try:
        deployment = TokenPoolDeployment.from_registry(
            registry,
            chain,
            account=account,
            autosign=autosign,
            pool_type=pool_type,
            gas_price=gas_price,
            nonce=nonce,
            accept_liquidity=accept_liquidity,
            verify=verify_contract,
            token_contract=token_contract,
        )
    except NetworkConfigError as error:
        raise click.ClickException(str(error))

    if accept_liquidity and deployment.pool_type is PoolType.BURN_MINT:
        logger.warning("--acceptliquidity only applies to lockRelease pools; ignoring it.")

    with networks.parse_network_choice(deployment.network_config.network_choice):
        check_plugins(verify=verify_contract)
        try:
            deployment.deployer.validate_chain()
        except ValueError as error:
            raise click.ClickException(str(error))
        try:
            records = deployment.run()
        except TokenPoolDeployment.Failed as error:
            raise click.ClickException(f"{error}: {error.__cause__}")

    for record in records:
        logger.info(f"{record.contract_name}: {record.address}")


if __name__ == "__main__":
    cli()
