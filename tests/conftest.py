"""Shared fixtures: cheap key-file params, a known wallet, and chain fakes."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import pytest

from quadfund.config import HELDERNET_OPTIONS, Options
from quadfund.pneuma.transport import (
    Account,
    ExecuteResult,
    InstantiateResult,
    TxResult,
    UploadResult,
)
from quadfund.pneuma.tx import normalize_coins
from quadfund.sigil.crypto import Argon2Params
from quadfund.sigil.wallet import HdWallet

# Argon2id minimum memory is 8 KiB per lane; enough for tests.
FAST_PARAMS = Argon2Params(mem_kib=8, iterations=1, parallelism=1)

MNEMONIC = "enlist hip relief stomach skate base shallow young switch frequent cry park"
ADDRESS = "cosmos14qemq0vw6y3gc3u3e0aty2e764u4gs5le3hada"


class FakeTransport:
    """In-memory ``ChainTransport`` recording every call."""

    def __init__(
        self,
        accounts: Optional[dict[str, Account]] = None,
        tx_results: Optional[list[TxResult]] = None,
        query_responses: Optional[list[Any]] = None,
    ) -> None:
        self.accounts = dict(accounts or {})
        self.tx_results = list(tx_results or [])
        self.query_responses = list(query_responses or [])
        self.account_lookups: list[str] = []
        self.queries: list[tuple[str, dict[str, Any]]] = []
        self.broadcasts: list[dict[str, Any]] = []
        self.closed = False

    async def get_account(self, address: str) -> Optional[Account]:
        self.account_lookups.append(address)
        return self.accounts.get(address)

    async def query_contract_smart(self, address: str, query: Mapping[str, Any]) -> Any:
        self.queries.append((address, dict(query)))
        return self.query_responses.pop(0)

    async def broadcast(self, std_tx: Mapping[str, Any]) -> TxResult:
        self.broadcasts.append(dict(std_tx))
        if self.tx_results:
            return self.tx_results.pop(0)
        return TxResult(tx_hash="A" * 64, height=100)

    async def close(self) -> None:
        self.closed = True


class RecordingClient:
    """``WasmClient`` that records calls instead of touching a chain."""

    sender_address = ADDRESS

    def __init__(self, query_responses: Optional[dict[str, Any]] = None) -> None:
        self.query_responses = dict(query_responses or {})
        self.queries: list[tuple[str, dict[str, Any]]] = []
        self.executions: list[dict[str, Any]] = []
        self.uploads: list[tuple[bytes, dict[str, str]]] = []
        self.instantiations: list[dict[str, Any]] = []

    @property
    def call_count(self) -> int:
        return len(self.queries) + len(self.executions) + len(self.uploads) + len(self.instantiations)

    async def query_contract_smart(self, address: str, query: Mapping[str, Any]) -> Any:
        self.queries.append((address, dict(query)))
        (name,) = query.keys()
        return self.query_responses[name]

    async def execute(
        self,
        contract_address: str,
        msg: Mapping[str, Any],
        memo: str = "",
        funds: Optional[Sequence[Any]] = None,
    ) -> ExecuteResult:
        self.executions.append(
            {
                "contract": contract_address,
                "msg": dict(msg),
                "memo": memo,
                "funds": normalize_coins(funds),
            }
        )
        return ExecuteResult(tx_hash=f"TX{len(self.executions)}")

    async def upload(self, wasm: bytes, meta: Optional[Mapping[str, str]] = None, memo: str = "") -> UploadResult:
        self.uploads.append((wasm, dict(meta or {})))
        return UploadResult(code_id=7, original_size=len(wasm), compressed_size=len(wasm), tx_hash="UPLOAD")

    async def instantiate(
        self,
        code_id: int,
        init_msg: Mapping[str, Any],
        label: str,
        memo: str = "",
        transfer_amount: Optional[Sequence[Any]] = None,
    ) -> InstantiateResult:
        self.instantiations.append({"code_id": code_id, "init_msg": dict(init_msg), "label": label, "memo": memo})
        return InstantiateResult(contract_address="cosmos1contract", tx_hash="INIT")


@pytest.fixture(scope="session")
def known_wallet() -> HdWallet:
    return HdWallet.from_mnemonic(MNEMONIC)


@pytest.fixture()
def key_file(tmp_path: Path) -> Path:
    return tmp_path / "keys" / "test.key"


@pytest.fixture()
def options(tmp_path: Path) -> Options:
    return replace(
        HELDERNET_OPTIONS,
        http_url="https://lcd.test",
        faucet_url="https://faucet.test/credit",
        default_key_file=tmp_path / "default.key",
    )


@pytest.fixture()
def funded_account() -> Account:
    return Account(address=ADDRESS, account_number=42, sequence=7)


@pytest.fixture()
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def recording_client() -> RecordingClient:
    return RecordingClient()
