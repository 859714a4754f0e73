"""Unit tests for config.py."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, replace
from decimal import Decimal
from pathlib import Path

import pytest

from quadfund.config import HELDERNET_OPTIONS, GasLimits, GasPrice, load_options

_VARS = [
    "QUADFUND_HTTP_URL",
    "QUADFUND_NETWORK_ID",
    "QUADFUND_FEE_TOKEN",
    "QUADFUND_GAS_PRICE",
    "QUADFUND_BECH32_PREFIX",
    "QUADFUND_HD_PATH",
    "QUADFUND_FAUCET_URL",
    "QUADFUND_KEY_FILE",
    "QUADFUND_GAS_UPLOAD",
    "QUADFUND_GAS_INIT",
    "QUADFUND_GAS_EXEC",
    "QUADFUND_GAS_REGISTER",
    "QUADFUND_GAS_TRANSFER",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so teardown also removes values python-dotenv writes
    for name in _VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture()
def no_env_file(tmp_path: Path) -> Path:
    return tmp_path / "absent.env"


class TestGasPrice:
    def test_parse(self) -> None:
        price = GasPrice.from_string("0.025ucosm")
        assert price.amount == Decimal("0.025")
        assert price.denom == "ucosm"
        assert str(price) == "0.025ucosm"

    def test_integer_amount(self) -> None:
        assert GasPrice.from_string("1ustake").amount == Decimal(1)

    @pytest.mark.parametrize("value", ["", "ucosm", "0.025", "abc0.1", "0.1u"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            GasPrice.from_string(value)


class TestDefaults:
    def test_heldernet(self) -> None:
        assert HELDERNET_OPTIONS.http_url == "https://lcd.heldernet.cosmwasm.com"
        assert HELDERNET_OPTIONS.network_id == "hackatom-wasm"
        assert HELDERNET_OPTIONS.fee_token == "ucosm"
        assert HELDERNET_OPTIONS.bech32_prefix == "cosmos"
        assert HELDERNET_OPTIONS.hd_path == "m/44'/118'/0'/0/0"
        assert HELDERNET_OPTIONS.faucet_url == "https://faucet.heldernet.cosmwasm.com/credit"
        assert HELDERNET_OPTIONS.default_key_file.name == ".heldernet.key"

    def test_heldernet_gas_limits(self) -> None:
        limits = HELDERNET_OPTIONS.gas_limits
        assert (limits.upload, limits.init, limits.register, limits.transfer) == (1_500_000, 600_000, 800_000, 80_000)
        assert limits.exec == GasLimits().exec

    def test_immutable(self) -> None:
        with pytest.raises(FrozenInstanceError):
            HELDERNET_OPTIONS.http_url = "https://elsewhere"  # type: ignore[misc]


class TestLoadOptions:
    def test_no_overrides_returns_base(self, no_env_file: Path) -> None:
        assert load_options(no_env_file) == HELDERNET_OPTIONS

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, no_env_file: Path) -> None:
        monkeypatch.setenv("QUADFUND_HTTP_URL", "http://localhost:1317")
        monkeypatch.setenv("QUADFUND_NETWORK_ID", "localnet")
        monkeypatch.setenv("QUADFUND_GAS_PRICE", "0.5ustake")
        monkeypatch.setenv("QUADFUND_GAS_EXEC", "300000")
        monkeypatch.setenv("QUADFUND_KEY_FILE", "~/local.key")

        options = load_options(no_env_file)
        assert options.http_url == "http://localhost:1317"
        assert options.network_id == "localnet"
        assert str(options.gas_price) == "0.5ustake"
        assert options.gas_limits.exec == 300_000
        assert options.gas_limits.upload == HELDERNET_OPTIONS.gas_limits.upload
        assert options.default_key_file == Path("~/local.key").expanduser()
        assert options.fee_token == HELDERNET_OPTIONS.fee_token

    def test_empty_faucet_disables(self, monkeypatch: pytest.MonkeyPatch, no_env_file: Path) -> None:
        monkeypatch.setenv("QUADFUND_FAUCET_URL", "")
        assert load_options(no_env_file).faucet_url is None

    def test_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("QUADFUND_NETWORK_ID=from-file\nQUADFUND_BECH32_PREFIX=wasm\n", encoding="utf-8")
        options = load_options(env_file)
        assert options.network_id == "from-file"
        assert options.bech32_prefix == "wasm"

    def test_environment_beats_env_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("QUADFUND_NETWORK_ID=from-file\n", encoding="utf-8")
        monkeypatch.setenv("QUADFUND_NETWORK_ID", "from-env")
        assert load_options(env_file).network_id == "from-env"

    def test_custom_base(self, no_env_file: Path) -> None:
        base = replace(HELDERNET_OPTIONS, network_id="other")
        assert load_options(no_env_file, base=base).network_id == "other"

    def test_bad_gas_price(self, monkeypatch: pytest.MonkeyPatch, no_env_file: Path) -> None:
        monkeypatch.setenv("QUADFUND_GAS_PRICE", "cheap")
        with pytest.raises(ValueError):
            load_options(no_env_file)
