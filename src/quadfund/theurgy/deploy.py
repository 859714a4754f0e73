"""
Deploy - Upload and instantiate the quadratic-funding contract.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import click

from ..config import Options
from ..pneuma.client import SigningClient
from ..quadratic.contract import DEFAULT_BUILDER, QuadraticFunding
from .common import echo_field, fail, key_file_option, password_option, run, with_client


def _load_init_msg(value: str) -> dict[str, Any]:
    """Accept inline JSON or ``@path`` to a JSON file."""
    try:
        if value.startswith("@"):
            payload = json.loads(Path(value[1:]).expanduser().read_text(encoding="utf-8"))
        else:
            payload = json.loads(value)
    except (OSError, json.JSONDecodeError) as exc:
        fail(f"Invalid init message: {exc}", 2)
    if not isinstance(payload, dict):
        fail("Init message must be a JSON object", 2)
    return payload


@click.command()
@click.option("--source-url", required=True, help="Contract bytecode URL")
@click.option("--source", required=True, help="Source reference recorded on chain")
@click.option("--builder", default=DEFAULT_BUILDER, help="Builder image recorded on chain")
@password_option
@key_file_option
@click.pass_obj
def upload(
    options: Options,
    source_url: str,
    source: str,
    builder: str,
    password: str,
    key_file: Optional[Path],
) -> None:
    """Download the contract bytecode and store it on chain."""

    async def _upload(client: SigningClient) -> int:
        return await QuadraticFunding(client, source_url=source_url, source=source, builder=builder).upload()

    code_id = run(with_client(options, password, key_file, _upload))
    click.secho("SUCCESS: Code uploaded", fg="green")
    echo_field("Code ID:", code_id)


@click.command()
@click.option("--code-id", required=True, type=int, help="Stored code ID")
@click.option("--label", required=True, help="Human readable contract label")
@click.option("--init-msg", "init_msg", required=True, help="Init message as JSON, or @file.json")
@password_option
@key_file_option
@click.pass_obj
def instantiate(
    options: Options,
    code_id: int,
    label: str,
    init_msg: str,
    password: str,
    key_file: Optional[Path],
) -> None:
    """Instantiate a quadratic-funding contract from stored code."""
    payload = _load_init_msg(init_msg)

    async def _instantiate(client: SigningClient) -> str:
        instance = await QuadraticFunding(client).instantiate(code_id, payload, label)
        return instance.contract_address

    address = run(with_client(options, password, key_file, _instantiate))
    click.secho("SUCCESS: Contract instantiated", fg="green")
    echo_field("Contract:", address)
