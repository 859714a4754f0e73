"""
Transaction Builder - amino JSON messages, fees, sign docs and StdTx.

Legacy (amino JSON) signing as served by the LCD ``/txs`` endpoint:
the sign doc is serialised as sorted, compact JSON, hashed with SHA-256
and signed with the sender's secp256k1 key.
"""

from __future__ import annotations

import gzip
import re
from dataclasses import dataclass
from decimal import ROUND_CEILING
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ..config import GasPrice
from ..utils import b64encode, sorted_json_bytes

MSG_STORE_CODE = "wasm/MsgStoreCode"
MSG_INSTANTIATE_CONTRACT = "wasm/MsgInstantiateContract"
MSG_EXECUTE_CONTRACT = "wasm/MsgExecuteContract"


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: str

    def __post_init__(self) -> None:
        if not str(self.amount).isdigit():
            raise ValueError(f"Coin amount must be a non-negative integer string: {self.amount!r}")

    def to_dict(self) -> dict[str, str]:
        return {"denom": self.denom, "amount": str(self.amount)}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Coin":
        return cls(denom=str(payload["denom"]), amount=str(payload["amount"]))


CoinLike = Union[Coin, Mapping[str, Any]]

_COIN_RE = re.compile(r"^([0-9]+)([a-zA-Z][a-zA-Z0-9/:._-]{2,127})$")


def coins(amount: int, denom: str) -> list[Coin]:
    return [Coin(denom=denom, amount=str(amount))]


def parse_coins(value: str) -> list[Coin]:
    """Parse ``"100ucosm,5uatom"`` into coins; an empty string is no coins."""
    result = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        match = _COIN_RE.match(part)
        if not match:
            raise ValueError(f"Invalid coin: {part!r}")
        result.append(Coin(denom=match.group(2), amount=match.group(1)))
    return result


def normalize_coins(items: Optional[Iterable[CoinLike]]) -> list[Coin]:
    """Accept ``Coin`` objects or ``{"denom", "amount"}`` mappings."""
    if not items:
        return []
    return [item if isinstance(item, Coin) else Coin.from_dict(item) for item in items]


@dataclass(frozen=True)
class StdFee:
    amount: tuple[Coin, ...]
    gas: int

    def to_dict(self) -> dict[str, Any]:
        return {"amount": [c.to_dict() for c in self.amount], "gas": str(self.gas)}


def calculate_fee(gas_limit: int, gas_price: GasPrice) -> StdFee:
    """Fee paying ``gas_price`` per unit for ``gas_limit`` units, rounded up."""
    amount = (gas_price.amount * gas_limit).to_integral_value(rounding=ROUND_CEILING)
    return StdFee(amount=(Coin(denom=gas_price.denom, amount=str(int(amount))),), gas=gas_limit)


def msg_store_code(sender: str, wasm: bytes, source: str = "", builder: str = "") -> dict[str, Any]:
    return {
        "type": MSG_STORE_CODE,
        "value": {
            "sender": sender,
            "wasm_byte_code": b64encode(gzip.compress(wasm, compresslevel=9)),
            "source": source,
            "builder": builder,
        },
    }


def msg_instantiate_contract(
    sender: str,
    code_id: int,
    label: str,
    init_msg: Mapping[str, Any],
    init_funds: Sequence[Coin] = (),
    admin: Optional[str] = None,
) -> dict[str, Any]:
    value: dict[str, Any] = {
        "sender": sender,
        "code_id": str(code_id),
        "label": label,
        "init_msg": dict(init_msg),
        "init_funds": [c.to_dict() for c in init_funds],
    }
    if admin:
        value["admin"] = admin
    return {"type": MSG_INSTANTIATE_CONTRACT, "value": value}


def msg_execute_contract(
    sender: str,
    contract: str,
    msg: Mapping[str, Any],
    sent_funds: Sequence[Coin] = (),
) -> dict[str, Any]:
    return {
        "type": MSG_EXECUTE_CONTRACT,
        "value": {
            "sender": sender,
            "contract": contract,
            "msg": dict(msg),
            "sent_funds": [c.to_dict() for c in sent_funds],
        },
    }


def make_sign_doc(
    msgs: Sequence[Mapping[str, Any]],
    fee: StdFee,
    chain_id: str,
    memo: str,
    account_number: int,
    sequence: int,
) -> dict[str, Any]:
    return {
        "chain_id": chain_id,
        "account_number": str(account_number),
        "sequence": str(sequence),
        "fee": fee.to_dict(),
        "msgs": [dict(m) for m in msgs],
        "memo": memo,
    }


def serialize_sign_doc(sign_doc: Mapping[str, Any]) -> bytes:
    """Bytes that get signed: sorted compact JSON with Go HTML escaping."""
    return sorted_json_bytes(dict(sign_doc))


def make_std_tx(sign_doc: Mapping[str, Any], signatures: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
    return {
        "msg": sign_doc["msgs"],
        "fee": sign_doc["fee"],
        "signatures": list(signatures),
        "memo": sign_doc["memo"],
    }


def find_attribute(logs: Sequence[Mapping[str, Any]], event_type: str, key: str) -> str:
    """Return the first ``key`` attribute of an ``event_type`` event in tx logs."""
    for log in logs:
        for event in log.get("events", []):
            if event.get("type") != event_type:
                continue
            for attribute in event.get("attributes", []):
                if attribute.get("key") == key:
                    return attribute["value"]
    raise ValueError(f"Could not find attribute {key!r} in {event_type!r} events")
