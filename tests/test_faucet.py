"""Faucet bootstrap tests."""

from __future__ import annotations

import json
import logging

import httpx
import pytest
import respx

from quadfund.pneuma.client import connect
from quadfund.pneuma.faucet import FaucetError, ensure_funded, hit_faucet

from conftest import ADDRESS, FakeTransport

FAUCET = "https://faucet.test/credit"

pytestmark = pytest.mark.asyncio


@respx.mock
async def test_hit_faucet_posts_denom_and_address() -> None:
    route = respx.post(FAUCET).mock(return_value=httpx.Response(201, text="ok"))
    await hit_faucet(FAUCET, ADDRESS, "ucosm")
    assert json.loads(route.calls.last.request.content) == {"denom": "ucosm", "address": ADDRESS}


@respx.mock
async def test_hit_faucet_error() -> None:
    respx.post(FAUCET).mock(return_value=httpx.Response(429, text="slow down"))
    with pytest.raises(FaucetError) as excinfo:
        await hit_faucet(FAUCET, ADDRESS, "ucosm")
    assert excinfo.value.status_code == 429
    assert excinfo.value.body == "slow down"


@respx.mock
async def test_existing_account_skips_faucet(known_wallet, options, funded_account) -> None:
    route = respx.post(FAUCET).mock(return_value=httpx.Response(200))
    client = connect(known_wallet, options, FakeTransport(accounts={ADDRESS: funded_account}))

    assert await ensure_funded(client, FAUCET, "ucosm") is False
    assert route.call_count == 0


@respx.mock
async def test_new_account_hits_faucet_once(known_wallet, options, caplog) -> None:
    route = respx.post(FAUCET).mock(return_value=httpx.Response(200))
    client = connect(known_wallet, options, FakeTransport())

    with caplog.at_level(logging.INFO, logger="quadfund.pneuma.faucet"):
        assert await ensure_funded(client, FAUCET, "ucosm") is True

    assert route.call_count == 1
    assert ADDRESS in caplog.text


@respx.mock
async def test_faucet_failure_not_retried(known_wallet, options) -> None:
    route = respx.post(FAUCET).mock(return_value=httpx.Response(500, text="down"))
    client = connect(known_wallet, options, FakeTransport())

    with pytest.raises(FaucetError):
        await ensure_funded(client, FAUCET, "ucosm")
    assert route.call_count == 1
