"""
Invoke - Contract actions.

Each command sends exactly one execute transaction and prints its hash.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..config import Options
from ..pneuma.tx import Coin, parse_coins
from ..quadratic.contract import QuadraticFundingInstance
from .common import contract_option, echo_field, key_file_option, password_option, run, with_instance


def _coins(value: str) -> list[Coin]:
    try:
        return parse_coins(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--amount") from exc


def _report(tx_hash: str) -> None:
    click.secho("SUCCESS: Transaction confirmed!", fg="green")
    echo_field("TX:", tx_hash)


@click.command("create-proposal")
@click.option("--name", required=True, help="Proposal name")
@click.option("--title", required=True, help="Proposal title")
@click.option("--description", required=True, help="Proposal description")
@click.option("--fund-address", required=True, help="Address receiving the matched funds")
@click.option("--amount", default="", help="Funds sent with the proposal, e.g. 100ucosm")
@click.option("--metadata", default=None, help="Opaque metadata stored with the proposal")
@contract_option
@password_option
@key_file_option
@click.pass_obj
def create_proposal(
    options: Options,
    name: str,
    title: str,
    description: str,
    fund_address: str,
    amount: str,
    metadata: Optional[str],
    contract: str,
    password: str,
    key_file: Optional[Path],
) -> None:
    """Submit a new proposal."""
    funds = _coins(amount)

    async def _create(instance: QuadraticFundingInstance) -> str:
        return await instance.create_proposal(name, title, description, fund_address, funds, metadata)

    _report(run(with_instance(options, password, key_file, contract, _create)))


@click.command()
@click.option("--proposal-id", required=True, type=int, help="Proposal to vote for")
@click.option("--amount", required=True, help="Vote funds, e.g. 100ucosm")
@contract_option
@password_option
@key_file_option
@click.pass_obj
def vote(
    options: Options,
    proposal_id: int,
    amount: str,
    contract: str,
    password: str,
    key_file: Optional[Path],
) -> None:
    """Vote for a proposal by sending funds to it."""
    funds = _coins(amount)

    async def _vote(instance: QuadraticFundingInstance) -> str:
        return await instance.vote_proposal(proposal_id, funds)

    _report(run(with_instance(options, password, key_file, contract, _vote)))


@click.command()
@contract_option
@password_option
@key_file_option
@click.pass_obj
def distribute(options: Options, contract: str, password: str, key_file: Optional[Path]) -> None:
    """Trigger distribution of the matching pool."""

    async def _distribute(instance: QuadraticFundingInstance) -> str:
        return await instance.trigger_distribution()

    _report(run(with_instance(options, password, key_file, contract, _distribute)))
