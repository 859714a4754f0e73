"""
Faucet bootstrap for dev and test networks.

``ensure_funded`` asks the faucet for tokens only when the chain has no
record of the account, so running it again on a funded account is a
no-op.  Faucet failures are raised to the caller, never retried.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx

logger = logging.getLogger("quadfund.pneuma.faucet")


class FaucetError(RuntimeError):
    exit_code: int = 6

    def __init__(self, status_code: int, body: str, url: str) -> None:
        super().__init__(f"Faucet error: {status_code} - {body}")
        self.status_code = status_code
        self.body = body
        self.url = url


class _AccountSource(Protocol):
    sender_address: str

    async def get_account(self, address: Optional[str] = None) -> Any:
        ...


async def hit_faucet(faucet_url: str, address: str, denom: str, timeout: float = 30.0) -> None:
    """POST ``{"denom", "address"}`` to the faucet; any 2xx is success."""
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.post(faucet_url, json={"denom": denom, "address": address})
    if not response.is_success:
        raise FaucetError(response.status_code, response.text, faucet_url)


async def ensure_funded(client: _AccountSource, faucet_url: str, fee_token: str) -> bool:
    """
    Make sure the client's sender has an on-chain account.

    Returns:
        True if the faucet was asked for tokens, False if the account
        already existed
    """
    account = await client.get_account()
    if account is not None:
        return False

    logger.info(f"Getting {fee_token} from faucet for {client.sender_address}")
    await hit_faucet(faucet_url, client.sender_address, fee_token)
    return True
