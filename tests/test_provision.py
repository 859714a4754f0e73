"""Unit tests for wallet provisioning (sigil/provision.py)."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from quadfund.sigil import keystore
from quadfund.sigil.keystore import DecryptError, KeystoreFormatError
from quadfund.sigil.provision import WalletNotDurableError, load_or_create, recover_mnemonic
from quadfund.sigil.wallet import HdWallet, make_cosmoshub_path

from conftest import FAST_PARAMS, MNEMONIC


class TestLoadOrCreate:
    def test_creates_when_missing(self, key_file: Path) -> None:
        wallet = load_or_create(key_file, "pw", params=FAST_PARAMS)
        assert key_file.exists()
        assert keystore.load(key_file, "pw") == wallet

    def test_second_call_loads_same_wallet(self, key_file: Path) -> None:
        first = load_or_create(key_file, "pw", params=FAST_PARAMS)
        second = load_or_create(key_file, "pw", params=FAST_PARAMS)
        assert first == second
        assert first.accounts[0].address == second.accounts[0].address

    def test_loads_existing(self, known_wallet: HdWallet, key_file: Path) -> None:
        keystore.save(key_file, known_wallet, "pw", FAST_PARAMS)
        assert load_or_create(key_file, "pw").mnemonic == MNEMONIC

    def test_uses_path_and_prefix(self, key_file: Path) -> None:
        wallet = load_or_create(key_file, "pw", hd_path=make_cosmoshub_path(5), prefix="wasm", params=FAST_PARAMS)
        assert wallet.hd_paths == (make_cosmoshub_path(5),)
        assert wallet.accounts[0].address.startswith("wasm1")

    def test_wrong_password_never_regenerates(self, known_wallet: HdWallet, key_file: Path) -> None:
        keystore.save(key_file, known_wallet, "right", FAST_PARAMS)
        before = key_file.read_bytes()
        with pytest.raises(DecryptError):
            load_or_create(key_file, "wrong", params=FAST_PARAMS)
        assert key_file.read_bytes() == before

    def test_corrupt_file_never_regenerates(self, key_file: Path) -> None:
        key_file.parent.mkdir(parents=True)
        key_file.write_text("garbage", encoding="utf-8")
        with pytest.raises(KeystoreFormatError):
            load_or_create(key_file, "pw", params=FAST_PARAMS)
        assert key_file.read_text(encoding="utf-8") == "garbage"

    def test_save_failure_surfaces_wallet(self, key_file: Path) -> None:
        with patch("quadfund.sigil.provision.save", side_effect=PermissionError("read-only")):
            with pytest.raises(WalletNotDurableError) as excinfo:
                load_or_create(key_file, "pw", params=FAST_PARAMS)
        assert excinfo.value.path == key_file
        assert isinstance(excinfo.value.wallet, HdWallet)
        assert excinfo.value.exit_code == 4
        assert not key_file.exists()

    def test_logs_generation_without_secrets(self, key_file: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="quadfund.sigil.provision"):
            wallet = load_or_create(key_file, "secret-pw", params=FAST_PARAMS)
        assert wallet.accounts[0].address in caplog.text
        assert "secret-pw" not in caplog.text
        assert wallet.mnemonic.split()[0] + " " + wallet.mnemonic.split()[1] not in caplog.text


class TestRecoverMnemonic:
    def test_returns_stored_mnemonic(self, known_wallet: HdWallet, key_file: Path) -> None:
        keystore.save(key_file, known_wallet, "pw", FAST_PARAMS)
        assert recover_mnemonic(key_file, "pw") == MNEMONIC

    def test_creates_when_missing(self, key_file: Path) -> None:
        phrase = recover_mnemonic(key_file, "pw", params=FAST_PARAMS)
        assert keystore.load(key_file, "pw").mnemonic == phrase
