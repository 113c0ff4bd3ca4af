#!/usr/bin/env python3

import os

from ape.logging import logger
from ape_accounts import import_account_from_private_key

from deployment.constants import SIGNER_ALIASES, SIGNER_PASSPHRASE_ENVVAR
from deployment.networks import NetworkRegistry


def main():
    """
    Imports the PRIVATE_KEY / PRIVATE_KEY_2 signers into the ape keystore,
    so that deploy_token_and_pool can use them with --account DEPLOYER.
    """
    try:
        passphrase = os.environ[SIGNER_PASSPHRASE_ENVVAR]
    except KeyError:
        raise Exception(f"Please set {SIGNER_PASSPHRASE_ENVVAR} to encrypt the imported keys.")

    registry = NetworkRegistry.from_environment()
    # every chain shares the same signer list
    network_config = registry.resolve(registry.chain_names[0])
    if not network_config.accounts:
        raise Exception("There are no signers to import. Please set PRIVATE_KEY.")

    for alias, private_key in zip(SIGNER_ALIASES, network_config.accounts):
        account = import_account_from_private_key(alias, passphrase, private_key)
        logger.success(f"Account imported as {alias}: {account.address}")


if __name__ == "__main__":
    main()
