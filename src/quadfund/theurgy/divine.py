"""
Divine - Read-only contract queries.

Queries cost no fees and never send a transaction.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import click

from ..config import Options
from ..quadratic.contract import QuadraticFundingInstance
from ..quadratic.messages import ContractConfig, Proposal
from .common import contract_option, key_file_option, password_option, run, with_instance


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


@click.command()
@click.option("--id", "proposal_id", type=int, default=None, help="Proposal ID")
@click.option("--fund-address", default=None, help="Look the proposal up by its fund address")
@contract_option
@password_option
@key_file_option
@click.pass_obj
def proposal(
    options: Options,
    proposal_id: Optional[int],
    fund_address: Optional[str],
    contract: str,
    password: str,
    key_file: Optional[Path],
) -> None:
    """Show one proposal, by ID or by fund address."""
    if (proposal_id is None) == (fund_address is None):
        raise click.UsageError("Pass exactly one of --id or --fund-address")

    async def _query(instance: QuadraticFundingInstance) -> Proposal:
        if proposal_id is not None:
            return await instance.proposal(proposal_id)
        return await instance.proposal_by_fund_address(fund_address)

    result = run(with_instance(options, password, key_file, contract, _query))
    _echo_json(result.to_dict())


@click.command()
@contract_option
@password_option
@key_file_option
@click.pass_obj
def proposals(options: Options, contract: str, password: str, key_file: Optional[Path]) -> None:
    """List every proposal."""

    async def _query(instance: QuadraticFundingInstance) -> list[Proposal]:
        return await instance.all_proposals()

    result = run(with_instance(options, password, key_file, contract, _query))
    _echo_json([p.to_dict() for p in result])


@click.command()
@contract_option
@password_option
@key_file_option
@click.pass_obj
def config(options: Options, contract: str, password: str, key_file: Optional[Path]) -> None:
    """Show the contract configuration."""

    async def _query(instance: QuadraticFundingInstance) -> ContractConfig:
        return await instance.config()

    result = run(with_instance(options, password, key_file, contract, _query))
    _echo_json(result.to_dict())
