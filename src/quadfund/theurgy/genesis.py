"""
Genesis - Provision the local identity.

``setup`` loads the encrypted key file, creating it when missing, then
asks the faucet for fee tokens if the account is new to the chain.
``mnemonic`` prints the recovery phrase stored in the key file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..config import Options
from ..pneuma.client import SigningClient
from ..pneuma.network import Network
from .common import QUADFUND_ERRORS, echo_field, fail, key_file_option, password_option, run, with_client


@click.command()
@password_option
@key_file_option
@click.pass_obj
def setup(options: Options, password: str, key_file: Optional[Path]) -> None:
    """
    Create or load the key file and fund the account.

    The faucet is only contacted when one is configured and the chain
    has never seen the address.
    """

    async def _status(client: SigningClient):
        return client.sender_address, await client.get_account()

    address, account = run(with_client(options, password, key_file, _status))

    echo_field("Address:", address)
    echo_field("Key file:", key_file or options.default_key_file)
    if account is None:
        click.secho("  Account not yet known to the chain.", fg="yellow")
        return
    echo_field("Account #:", account.account_number)
    balance = ", ".join(f"{c.amount}{c.denom}" for c in account.balance) or "0"
    echo_field("Balance:", balance)


@click.command()
@password_option
@key_file_option
@click.pass_obj
def mnemonic(options: Options, password: str, key_file: Optional[Path]) -> None:
    """Print the recovery mnemonic (creates the key file if missing)."""
    try:
        phrase = Network(options).recover_mnemonic(password, key_file)
    except QUADFUND_ERRORS as exc:
        fail(str(exc), exc.exit_code)

    click.secho("Keep this phrase secret. Anyone holding it controls the account.", fg="yellow", err=True)
    click.echo(phrase)
