"""
quadfund CLI

Command-line client for the quadratic-funding contract on a CosmWasm chain.

Identity = BIP-39 mnemonic in a password-encrypted key file.  The first
HD account signs every transaction; fees are paid in the network's fee
token at the configured gas price.

Commands:
  setup            - Create or load the key file, fund it from the faucet
  mnemonic         - Print the recovery phrase
  upload           - Store the contract bytecode on chain
  instantiate      - Create a contract instance
  proposal         - Show one proposal
  proposals        - List proposals
  config           - Show contract configuration
  create-proposal  - Submit a proposal
  vote             - Vote for a proposal
  distribute       - Trigger distribution
  whoami           - Show current wallet address
  info             - Show network configuration
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .config import Options, load_options
from .sigil.keystore import load
from .theurgy.common import QUADFUND_ERRORS, fail, key_file_option


# ============ Constants ============

VERSION = "0.1.0"


# ============ Banner ============


def _print_banner() -> None:
    """Print the quadfund CLI banner."""
    border = click.style("  ◆ ═══════════════════════════════════════ ◆", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo()
    click.echo(
        click.style("        Q U A D F U N D", fg="bright_white", bold=True)
        + click.style(f"        v{VERSION}", dim=True)
    )
    click.secho("        ─── Quadratic Funding on CosmWasm ───", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="quadfund")
@click.option("--verbose", "-v", is_flag=True, help="Log wire-level detail")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (defaults to ~/.quadfund/.env)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, env_file: Optional[Path]) -> None:
    """quadfund: quadratic funding on CosmWasm."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_options(env_file)
    except ValueError as exc:
        fail(f"Invalid configuration: {exc}", 2)

    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.genesis import setup, mnemonic
from .theurgy.deploy import upload, instantiate
from .theurgy.divine import proposal, proposals, config
from .theurgy.invoke import create_proposal, vote, distribute

cli.add_command(setup)
cli.add_command(mnemonic)
cli.add_command(upload)
cli.add_command(instantiate)
cli.add_command(proposal)
cli.add_command(proposals)
cli.add_command(config)
cli.add_command(create_proposal)
cli.add_command(vote)
cli.add_command(distribute)


# ============ Identity ============


@cli.command()
@click.option("--password", envvar="QUADFUND_PASSWORD", prompt=True, hide_input=True, help="Key file password")
@key_file_option
@click.pass_obj
def whoami(options: Options, password: str, key_file: Optional[Path]) -> None:
    """Show current wallet identity."""
    path = key_file or options.default_key_file
    try:
        wallet = load(path, password)
    except FileNotFoundError:
        click.echo("No wallet found.")
        click.echo("Run 'quadfund setup' to create one.")
        sys.exit(1)
    except QUADFUND_ERRORS as exc:
        fail(str(exc), exc.exit_code)

    for account in wallet.accounts:
        click.echo(f"Address: {account.address}")


# ============ Info ============


@cli.command()
@click.pass_obj
def info(options: Options) -> None:
    """Show network configuration."""
    _print_banner()

    # ── Network ──
    click.secho("  Network ────────────────────────────────", fg="cyan")
    click.echo()

    rows = [
        ("LCD:        ", options.http_url),
        ("Chain ID:   ", options.network_id),
        ("Fee token:  ", options.fee_token),
        ("Gas price:  ", str(options.gas_price)),
        ("Prefix:     ", options.bech32_prefix),
        ("HD path:    ", options.hd_path),
    ]
    for label, value in rows:
        click.echo(click.style(f"  {label}", dim=True) + click.style(value, fg="bright_white"))

    if options.faucet_url:
        faucet = click.style(options.faucet_url, fg="bright_white")
    else:
        faucet = click.style("disabled", fg="yellow")
    click.echo(click.style("  Faucet:     ", dim=True) + faucet)

    key_file = options.default_key_file
    if key_file.exists():
        key_text = click.style(str(key_file), fg="bright_white")
    else:
        key_text = click.style(str(key_file), fg="yellow") + click.style("  (run: quadfund setup)", dim=True)
    click.echo(click.style("  Key file:   ", dim=True) + key_text)

    click.echo()

    # ── Commands ──
    click.secho("  Commands ───────────────────────────────", fg="cyan")
    click.echo()

    commands = [
        ("setup          ", "Create or load the key file"),
        ("mnemonic       ", "Print the recovery phrase"),
        ("upload         ", "Store contract bytecode"),
        ("instantiate    ", "Create a contract instance"),
        ("proposal       ", "Show one proposal"),
        ("proposals      ", "List proposals"),
        ("config         ", "Show contract configuration"),
        ("create-proposal", "Submit a proposal"),
        ("vote           ", "Vote for a proposal"),
        ("distribute     ", "Trigger distribution"),
        ("whoami         ", "Show current wallet address"),
    ]
    for cmd, desc in commands:
        click.echo(
            click.style("  ", dim=True)
            + click.style(cmd, fg="bright_white", bold=True)
            + click.style("  ◇  ", fg="cyan")
            + click.style(desc, dim=True)
        )

    click.echo()


# ============ Entry Points ============


def main() -> None:
    """quadfund CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
