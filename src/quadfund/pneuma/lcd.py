"""
LCD (REST) client for CosmWasm chains.

Uses httpx with a lazily created ``AsyncClient``: constructing the
transport performs no I/O, the first request opens the connection.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

import httpx

from ..utils import b64decode, compact_json
from .transport import Account, LcdError, TxResult
from .tx import Coin

logger = logging.getLogger("quadfund.pneuma.lcd")

DEFAULT_TIMEOUT = 30.0


class LcdTransport:
    """``ChainTransport`` over the legacy LCD REST API."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT, broadcast_mode: str = "block") -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.broadcast_mode = broadcast_mode
        self._client: Optional[httpx.AsyncClient] = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def _get(self, path: str, params: Optional[Mapping[str, str]] = None) -> Any:
        response = await self._http().get(path, params=params)
        if response.status_code != 200:
            raise LcdError(response.status_code, response.text, path)
        return response.json()

    async def _post(self, path: str, payload: Mapping[str, Any]) -> Any:
        response = await self._http().post(path, json=payload)
        if not response.is_success:
            raise LcdError(response.status_code, response.text, path)
        return response.json()

    async def get_account(self, address: str) -> Optional[Account]:
        """
        Look up an account.

        Returns:
            The account, or None when the chain has never seen the address
        """
        data = await self._get(f"/auth/accounts/{address}")
        value = data.get("result", {}).get("value") or {}
        if not value.get("address"):
            return None
        return Account(
            address=value["address"],
            account_number=int(value.get("account_number") or 0),
            sequence=int(value.get("sequence") or 0),
            balance=tuple(Coin.from_dict(c) for c in value.get("coins") or []),
            pubkey=value.get("public_key") or None,
        )

    async def query_contract_smart(self, address: str, query: Mapping[str, Any]) -> Any:
        encoded = compact_json(query).encode("utf-8").hex()
        data = await self._get(
            f"/wasm/contract/{address}/smart/{encoded}",
            params={"encoding": "hex"},
        )
        smart = data.get("result", {}).get("smart")
        if smart is None:
            raise LcdError(200, json.dumps(data), f"/wasm/contract/{address}/smart")
        return json.loads(b64decode(smart).decode("utf-8"))

    async def broadcast(self, std_tx: Mapping[str, Any]) -> TxResult:
        data = await self._post("/txs", {"tx": dict(std_tx), "mode": self.broadcast_mode})
        result = TxResult(
            tx_hash=data.get("txhash", ""),
            height=int(data.get("height") or 0),
            code=int(data.get("code") or 0),
            raw_log=data.get("raw_log", ""),
            logs=data.get("logs") or [],
        )
        logger.debug(f"Broadcast {result.tx_hash} at height {result.height} (code {result.code})")
        return result

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
