"""
Quadratic-funding contract client.

``QuadraticFunding`` deploys the contract (download, upload, instantiate)
or attaches to an existing address; ``QuadraticFundingInstance`` wraps
its queries and actions.  Queries never pay fees; every action is one
``execute`` whose funds travel beside the message, not inside it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

import httpx

from ..pneuma.transport import WasmClient
from ..pneuma.tx import CoinLike
from .messages import ContractConfig, InitMsg, Proposal
from .registry import INIT_MSG_SCHEMA, SchemaRegistry

logger = logging.getLogger("quadfund.quadratic.contract")

# The release these defaults point at is the nameservice example, not a
# quadratic-funding build. Pass the real bytecode URL and source explicitly.
DEFAULT_WASM_URL = "https://github.com/CosmWasm/cosmwasm-examples/releases/download/nameservice-0.7.0/contract.wasm"
DEFAULT_SOURCE = "https://github.com/CosmWasm/cosmwasm-examples/tree/nameservice-0.7.0/nameservice"
DEFAULT_BUILDER = "cosmwasm/rust-optimizer:0.10.4"


class DownloadError(RuntimeError):
    exit_code: int = 5

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Download error: {status_code}")
        self.status_code = status_code
        self.url = url


async def download_wasm(url: str, timeout: float = 60.0) -> bytes:
    """Fetch contract bytecode; anything but HTTP 200 is a ``DownloadError``."""
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await client.get(url)
    if response.status_code != 200:
        raise DownloadError(response.status_code, url)
    return response.content


@dataclass(frozen=True)
class QuadraticFundingInstance:
    client: WasmClient
    contract_address: str

    # -- queries --

    async def proposal(self, proposal_id: int) -> Proposal:
        data = await self.client.query_contract_smart(self.contract_address, {"proposal": {"id": proposal_id}})
        return Proposal.from_dict(data)

    async def proposal_by_fund_address(self, fund_address: str) -> Proposal:
        data = await self.client.query_contract_smart(
            self.contract_address,
            {"proposal_by_fund_address": {"fund_address": fund_address}},
        )
        return Proposal.from_dict(data)

    async def all_proposals(self) -> list[Proposal]:
        data = await self.client.query_contract_smart(self.contract_address, {"all_proposals": {}})
        return [Proposal.from_dict(item) for item in data.get("proposals", [])]

    async def config(self) -> ContractConfig:
        data = await self.client.query_contract_smart(self.contract_address, {"config": {}})
        return ContractConfig.from_dict(data)

    # -- actions --

    async def create_proposal(
        self,
        name: str,
        title: str,
        description: str,
        fund_address: str,
        amount: Sequence[CoinLike],
        metadata: Optional[str] = None,
    ) -> str:
        body: dict[str, Any] = {
            "name": name,
            "title": title,
            "description": description,
            "fundAddress": fund_address,
        }
        if metadata is not None:
            body["metadata"] = metadata
        result = await self.client.execute(self.contract_address, {"create_proposal": body}, "", amount)
        return result.tx_hash

    async def vote_proposal(self, proposal_id: int, amount: Sequence[CoinLike]) -> str:
        result = await self.client.execute(
            self.contract_address,
            {"vote": {"proposalId": proposal_id}},
            "",
            amount,
        )
        return result.tx_hash

    async def trigger_distribution(self) -> str:
        result = await self.client.execute(self.contract_address, {"trigger_distribution": {}}, "")
        return result.tx_hash


class QuadraticFunding:
    """Factory for quadratic-funding contract instances."""

    def __init__(
        self,
        client: WasmClient,
        source_url: str = DEFAULT_WASM_URL,
        source: str = DEFAULT_SOURCE,
        builder: str = DEFAULT_BUILDER,
        registry: Optional[SchemaRegistry] = None,
    ) -> None:
        self.client = client
        self.source_url = source_url
        self.source = source
        self.builder = builder
        self.registry = registry or SchemaRegistry.default()

    async def upload(self) -> int:
        wasm = await download_wasm(self.source_url)
        result = await self.client.upload(wasm, {"source": self.source, "builder": self.builder})
        logger.info(
            f"Uploaded code {result.code_id} ({result.original_size} bytes, "
            f"{result.compressed_size} compressed) in {result.tx_hash}"
        )
        return result.code_id

    async def instantiate(
        self,
        code_id: int,
        init_msg: Union[InitMsg, Mapping[str, Any]],
        label: str,
    ) -> QuadraticFundingInstance:
        if isinstance(init_msg, InitMsg):
            payload = init_msg.validate(self.registry)
        else:
            payload = dict(init_msg)
            self.registry.validate_instance(payload, INIT_MSG_SCHEMA)

        result = await self.client.instantiate(code_id, payload, label, memo=f"Init {label}")
        logger.info(f"Instantiated {label} at {result.contract_address}")
        return self.use(result.contract_address)

    def use(self, contract_address: str) -> QuadraticFundingInstance:
        return QuadraticFundingInstance(client=self.client, contract_address=contract_address)
