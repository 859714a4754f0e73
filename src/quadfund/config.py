"""
Network options.

``Options`` is fixed at construction and never mutated; use
``dataclasses.replace`` to derive a variant.  ``load_options`` layers
``~/.quadfund/.env`` and ``QUADFUND_*`` environment variables over a base
set (the heldernet defaults unless told otherwise).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

QUADFUND_DIR = Path.home() / ".quadfund"
QUADFUND_ENV = QUADFUND_DIR / ".env"

_GAS_PRICE_RE = re.compile(r"^([0-9]+(?:\.[0-9]+)?)([a-zA-Z][a-zA-Z0-9/:._-]{2,127})$")


@dataclass(frozen=True)
class GasPrice:
    amount: Decimal
    denom: str

    @classmethod
    def from_string(cls, value: str) -> "GasPrice":
        """Parse a gas price such as ``0.025ucosm``."""
        match = _GAS_PRICE_RE.match(value.strip())
        if not match:
            raise ValueError(f"Invalid gas price string: {value!r}")
        try:
            amount = Decimal(match.group(1))
        except InvalidOperation as exc:
            raise ValueError(f"Invalid gas price amount: {value!r}") from exc
        return cls(amount=amount, denom=match.group(2))

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


@dataclass(frozen=True)
class GasLimits:
    upload: int = 1_500_000
    init: int = 500_000
    exec: int = 200_000
    migrate: int = 200_000
    send: int = 80_000
    change_admin: int = 80_000
    register: int = 800_000
    transfer: int = 80_000


@dataclass(frozen=True)
class Options:
    http_url: str
    network_id: str
    fee_token: str
    gas_price: GasPrice
    bech32_prefix: str
    hd_path: str
    default_key_file: Path
    faucet_url: Optional[str] = None
    gas_limits: GasLimits = field(default_factory=GasLimits)


HELDERNET_OPTIONS = Options(
    http_url="https://lcd.heldernet.cosmwasm.com",
    network_id="hackatom-wasm",
    fee_token="ucosm",
    gas_price=GasPrice.from_string("0.025ucosm"),
    bech32_prefix="cosmos",
    hd_path="m/44'/118'/0'/0/0",
    default_key_file=Path.home() / ".heldernet.key",
    faucet_url="https://faucet.heldernet.cosmwasm.com/credit",
    gas_limits=GasLimits(
        upload=1_500_000,
        init=600_000,
        register=800_000,
        transfer=80_000,
    ),
)

_GAS_LIMIT_ENV = {
    "upload": "QUADFUND_GAS_UPLOAD",
    "init": "QUADFUND_GAS_INIT",
    "exec": "QUADFUND_GAS_EXEC",
    "register": "QUADFUND_GAS_REGISTER",
    "transfer": "QUADFUND_GAS_TRANSFER",
}


def load_options(env_path: Optional[Path] = None, base: Options = HELDERNET_OPTIONS) -> Options:
    """
    Build options from ``base`` plus ``.env`` and environment overrides.

    Recognised variables: QUADFUND_HTTP_URL, QUADFUND_NETWORK_ID,
    QUADFUND_FEE_TOKEN, QUADFUND_GAS_PRICE, QUADFUND_BECH32_PREFIX,
    QUADFUND_HD_PATH, QUADFUND_FAUCET_URL (empty disables the faucet),
    QUADFUND_KEY_FILE and QUADFUND_GAS_{UPLOAD,INIT,EXEC,REGISTER,TRANSFER}.
    """
    env_path = env_path or QUADFUND_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)

    env = os.environ
    options = base

    simple = {
        "http_url": env.get("QUADFUND_HTTP_URL"),
        "network_id": env.get("QUADFUND_NETWORK_ID"),
        "fee_token": env.get("QUADFUND_FEE_TOKEN"),
        "bech32_prefix": env.get("QUADFUND_BECH32_PREFIX"),
        "hd_path": env.get("QUADFUND_HD_PATH"),
    }
    overrides = {k: v for k, v in simple.items() if v}
    if env.get("QUADFUND_GAS_PRICE"):
        overrides["gas_price"] = GasPrice.from_string(env["QUADFUND_GAS_PRICE"])
    if env.get("QUADFUND_KEY_FILE"):
        overrides["default_key_file"] = Path(env["QUADFUND_KEY_FILE"]).expanduser()
    if "QUADFUND_FAUCET_URL" in env:
        overrides["faucet_url"] = env["QUADFUND_FAUCET_URL"] or None

    limits = {name: int(env[var]) for name, var in _GAS_LIMIT_ENV.items() if env.get(var)}
    if limits:
        overrides["gas_limits"] = replace(options.gas_limits, **limits)

    return replace(options, **overrides) if overrides else options
