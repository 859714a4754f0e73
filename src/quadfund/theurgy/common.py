"""
Shared plumbing for the theurgy commands: options, sessions, error exits.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Coroutine, NoReturn, Optional, TypeVar

import click
import httpx

from ..config import Options
from ..pneuma.client import SigningClient
from ..pneuma.faucet import FaucetError
from ..pneuma.network import Network
from ..pneuma.transport import ChainError
from ..quadratic.contract import DownloadError, QuadraticFunding, QuadraticFundingInstance
from ..quadratic.registry import MessageValidationError
from ..sigil.crypto import CryptoError
from ..sigil.keystore import KeystoreError

T = TypeVar("T")

# Errors that carry their own exit code.
QUADFUND_ERRORS = (
    CryptoError,
    KeystoreError,
    ChainError,
    FaucetError,
    DownloadError,
    MessageValidationError,
)


password_option = click.option(
    "--password",
    envvar="QUADFUND_PASSWORD",
    prompt=True,
    hide_input=True,
    help="Key file password (or set QUADFUND_PASSWORD)",
)

key_file_option = click.option(
    "--key-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Encrypted key file (defaults to the network's key file)",
)

contract_option = click.option(
    "--contract",
    envvar="QUADFUND_CONTRACT",
    required=True,
    help="Quadratic-funding contract address (or set QUADFUND_CONTRACT)",
)


def fail(message: str, exit_code: int = 1) -> NoReturn:
    click.secho(f"ERROR: {message}", fg="red", err=True)
    sys.exit(exit_code)


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run ``coro`` to completion, turning known failures into exit codes."""
    try:
        return asyncio.run(coro)
    except QUADFUND_ERRORS as exc:
        fail(str(exc), exc.exit_code)
    except httpx.HTTPError as exc:
        fail(f"Network error: {exc}", 5)


async def open_client(options: Options, password: str, key_file: Optional[Path]) -> SigningClient:
    return await Network(options).setup(password, key_file)


async def with_client(
    options: Options,
    password: str,
    key_file: Optional[Path],
    action: Callable[[SigningClient], Awaitable[T]],
) -> T:
    client = await open_client(options, password, key_file)
    async with client:
        return await action(client)


async def with_instance(
    options: Options,
    password: str,
    key_file: Optional[Path],
    contract: str,
    action: Callable[[QuadraticFundingInstance], Awaitable[T]],
) -> T:
    async def _use(client: SigningClient) -> T:
        return await action(QuadraticFunding(client).use(contract))

    return await with_client(options, password, key_file, _use)


def echo_field(label: str, value: Any) -> None:
    click.echo(click.style(f"  {label:<14}", dim=True) + click.style(str(value), fg="bright_white"))
