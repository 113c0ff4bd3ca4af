import click
from click.testing import CliRunner

from deployment.constants import PoolType, TokenContractName
from deployment.options import (
    accept_liquidity_option,
    nonce_option,
    pool_type_option,
    token_option,
    verify_contract_option,
)


@click.command()
@verify_contract_option
@pool_type_option
@accept_liquidity_option
@token_option
@nonce_option
def echo(verify_contract, pool_type, accept_liquidity, token_contract, nonce):
    click.echo(repr((verify_contract, pool_type, accept_liquidity, token_contract, nonce)))


def test_defaults():
    result = CliRunner().invoke(echo, [])
    assert result.exit_code == 0
    expected = (False, PoolType.BURN_MINT, False, TokenContractName.ASTAR_TOKEN, None)
    assert result.output.strip() == repr(expected)


def test_lock_release_options():
    result = CliRunner().invoke(
        echo,
        ["--pooltype", "lockRelease", "--acceptliquidity", "--verifycontract", "--nonce", "3"],
    )
    assert result.exit_code == 0
    expected = (True, PoolType.LOCK_RELEASE, True, TokenContractName.ASTAR_TOKEN, 3)
    assert result.output.strip() == repr(expected)


def test_shibuya_token_option():
    result = CliRunner().invoke(echo, ["--token", "ShibuyaToken"])
    assert result.exit_code == 0
    assert "TokenContractName.SHIBUYA_TOKEN" in result.output


def test_invalid_pool_type():
    result = CliRunner().invoke(echo, ["--pooltype", "mintBurn"])
    assert result.exit_code == 2
    assert "mintBurn" in result.output


def test_negative_nonce():
    result = CliRunner().invoke(echo, ["--nonce", "-1"])
    assert result.exit_code == 2
    assert "x>=0" in result.output
