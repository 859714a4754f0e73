"""
Transport interfaces between the signing client, the chain and contract code.

``ChainTransport`` is the wire: account lookup, smart queries and
broadcast of a signed transaction.  ``WasmClient`` is the capability set
contract helpers need (query, execute, upload, instantiate);
``SigningClient`` implements it on top of a ``ChainTransport``, and tests
substitute their own implementations of either.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence

from .tx import Coin


class ChainError(RuntimeError):
    exit_code: int = 5


class LcdError(ChainError):
    """The LCD endpoint answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str, path: str) -> None:
        super().__init__(f"LCD error on {path}: {status_code} - {body}")
        self.status_code = status_code
        self.body = body
        self.path = path


class ChainSubmissionError(ChainError):
    """The chain rejected a transaction; ``raw_log`` is passed through verbatim."""

    def __init__(self, code: int, raw_log: str, tx_hash: Optional[str] = None) -> None:
        super().__init__(f"Transaction failed with code {code}: {raw_log}")
        self.code = code
        self.raw_log = raw_log
        self.tx_hash = tx_hash


class AccountNotFoundError(ChainError):
    def __init__(self, address: str) -> None:
        super().__init__(
            f"Account {address} does not exist on chain. "
            "Send some tokens there before trying to sign."
        )
        self.address = address


@dataclass(frozen=True)
class Account:
    address: str
    account_number: int
    sequence: int
    balance: tuple[Coin, ...] = ()
    pubkey: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class TxResult:
    tx_hash: str
    height: int
    code: int = 0
    raw_log: str = ""
    logs: list[dict[str, Any]] = field(default_factory=list)

    @property
    def is_failure(self) -> bool:
        return self.code != 0


@dataclass(frozen=True)
class ExecuteResult:
    tx_hash: str
    logs: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class UploadResult:
    code_id: int
    original_size: int
    compressed_size: int
    tx_hash: str


@dataclass(frozen=True)
class InstantiateResult:
    contract_address: str
    tx_hash: str


class ChainTransport(Protocol):
    async def get_account(self, address: str) -> Optional[Account]:
        ...

    async def query_contract_smart(self, address: str, query: Mapping[str, Any]) -> Any:
        ...

    async def broadcast(self, std_tx: Mapping[str, Any]) -> TxResult:
        ...

    async def close(self) -> None:
        ...


class WasmClient(Protocol):
    sender_address: str

    async def query_contract_smart(self, address: str, query: Mapping[str, Any]) -> Any:
        ...

    async def execute(
        self,
        contract_address: str,
        msg: Mapping[str, Any],
        memo: str = "",
        funds: Optional[Sequence[Coin]] = None,
    ) -> ExecuteResult:
        ...

    async def upload(self, wasm: bytes, meta: Optional[Mapping[str, str]] = None, memo: str = "") -> UploadResult:
        ...

    async def instantiate(
        self,
        code_id: int,
        init_msg: Mapping[str, Any],
        label: str,
        memo: str = "",
        transfer_amount: Optional[Sequence[Coin]] = None,
    ) -> InstantiateResult:
        ...
