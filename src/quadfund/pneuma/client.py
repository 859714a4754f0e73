"""
Signing client: one wallet, one sender, one endpoint and gas policy.

``connect`` is purely local.  Every submission looks up the sender's
account number and sequence, signs, and broadcasts exactly once; chain
rejections are raised as ``ChainSubmissionError`` without retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..config import GasLimits, GasPrice, Options
from ..sigil.wallet import HdWallet
from ..utils import b64decode
from .lcd import LcdTransport
from .transport import (
    Account,
    AccountNotFoundError,
    ChainSubmissionError,
    ChainTransport,
    ExecuteResult,
    InstantiateResult,
    TxResult,
    UploadResult,
)
from .tx import (
    CoinLike,
    StdFee,
    calculate_fee,
    find_attribute,
    make_sign_doc,
    make_std_tx,
    msg_execute_contract,
    msg_instantiate_contract,
    msg_store_code,
    normalize_coins,
)

logger = logging.getLogger("quadfund.pneuma.client")


@dataclass(frozen=True)
class SigningClient:
    transport: ChainTransport
    wallet: HdWallet
    sender_address: str
    chain_id: str
    gas_price: GasPrice
    gas_limits: GasLimits

    async def get_account(self, address: Optional[str] = None) -> Optional[Account]:
        """Account of ``address`` (default: the sender), or None if unknown to the chain."""
        return await self.transport.get_account(address or self.sender_address)

    async def query_contract_smart(self, address: str, query: Mapping[str, Any]) -> Any:
        return await self.transport.query_contract_smart(address, query)

    def fee(self, kind: str) -> StdFee:
        return calculate_fee(getattr(self.gas_limits, kind), self.gas_price)

    async def sign_and_broadcast(
        self,
        msgs: Sequence[Mapping[str, Any]],
        fee: StdFee,
        memo: str = "",
    ) -> TxResult:
        account = await self.transport.get_account(self.sender_address)
        if account is None:
            raise AccountNotFoundError(self.sender_address)

        sign_doc = make_sign_doc(msgs, fee, self.chain_id, memo, account.account_number, account.sequence)
        signature = self.wallet.sign_amino(self.sender_address, sign_doc)
        result = await self.transport.broadcast(make_std_tx(sign_doc, [signature.to_dict()]))
        if result.is_failure:
            raise ChainSubmissionError(result.code, result.raw_log, result.tx_hash or None)
        logger.info(f"Transaction {result.tx_hash} included at height {result.height}")
        return result

    async def upload(
        self,
        wasm: bytes,
        meta: Optional[Mapping[str, str]] = None,
        memo: str = "",
    ) -> UploadResult:
        meta = meta or {}
        msg = msg_store_code(self.sender_address, wasm, meta.get("source", ""), meta.get("builder", ""))
        result = await self.sign_and_broadcast([msg], self.fee("upload"), memo)
        code_id = int(find_attribute(result.logs, "message", "code_id"))
        compressed = len(b64decode(msg["value"]["wasm_byte_code"]))
        return UploadResult(
            code_id=code_id,
            original_size=len(wasm),
            compressed_size=compressed,
            tx_hash=result.tx_hash,
        )

    async def instantiate(
        self,
        code_id: int,
        init_msg: Mapping[str, Any],
        label: str,
        memo: str = "",
        transfer_amount: Optional[Sequence[CoinLike]] = None,
        admin: Optional[str] = None,
    ) -> InstantiateResult:
        msg = msg_instantiate_contract(
            self.sender_address,
            code_id,
            label,
            init_msg,
            normalize_coins(transfer_amount),
            admin,
        )
        result = await self.sign_and_broadcast([msg], self.fee("init"), memo)
        address = find_attribute(result.logs, "message", "contract_address")
        return InstantiateResult(contract_address=address, tx_hash=result.tx_hash)

    async def execute(
        self,
        contract_address: str,
        msg: Mapping[str, Any],
        memo: str = "",
        funds: Optional[Sequence[CoinLike]] = None,
    ) -> ExecuteResult:
        execute_msg = msg_execute_contract(self.sender_address, contract_address, msg, normalize_coins(funds))
        result = await self.sign_and_broadcast([execute_msg], self.fee("exec"), memo)
        return ExecuteResult(tx_hash=result.tx_hash, logs=result.logs)

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "SigningClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


def connect(
    wallet: HdWallet,
    options: Options,
    transport: Optional[ChainTransport] = None,
) -> SigningClient:
    """
    Bind ``wallet`` to the endpoint and gas policy in ``options``.

    The sender is the wallet's first account.  No network call is made.
    """
    sender = wallet.accounts[0].address
    return SigningClient(
        transport=transport or LcdTransport(options.http_url),
        wallet=wallet,
        sender_address=sender,
        chain_id=options.network_id,
        gas_price=options.gas_price,
        gas_limits=options.gas_limits,
    )
