"""
Quadratic-funding contract messages and query responses.

Outgoing messages are built from dataclasses and checked against the
bundled JSON schemas before they reach the chain; query responses are
validated and decoded the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..pneuma.tx import Coin
from .registry import (
    CONFIG_SCHEMA,
    INIT_MSG_SCHEMA,
    PROPOSAL_SCHEMA,
    MessageValidationError,
    SchemaRegistry,
)


# ============ Expiration ============


@dataclass(frozen=True)
class AtHeight:
    height: int

    def to_dict(self) -> dict[str, Any]:
        return {"at_height": int(self.height)}


@dataclass(frozen=True)
class AtTime:
    seconds: int

    def to_dict(self) -> dict[str, Any]:
        return {"at_time": int(self.seconds)}


@dataclass(frozen=True)
class Never:
    def to_dict(self) -> dict[str, Any]:
        return {"never": {}}


Expiration = Union[AtHeight, AtTime, Never]

_EXPIRATION_TAGS = ("at_height", "at_time", "never")


def expiration_from_dict(payload: Mapping[str, Any]) -> Expiration:
    """Decode ``{"at_height": n}`` / ``{"at_time": n}`` / ``{"never": {}}``."""
    tags = [tag for tag in _EXPIRATION_TAGS if tag in payload]
    if len(tags) != 1 or len(payload) != 1:
        raise MessageValidationError(f"Expiration must have exactly one of {_EXPIRATION_TAGS}: {dict(payload)!r}")
    tag = tags[0]
    if tag == "never":
        return Never()
    # Older deployments encode the integer as a string.
    value = int(payload[tag])
    return AtHeight(value) if tag == "at_height" else AtTime(value)


# ============ Init ============


@dataclass(frozen=True)
class InitMsg:
    admin: str
    voting_period: Expiration
    proposal_period: Expiration
    budget_denom: str
    algorithm: Mapping[str, Any]
    create_proposal_whitelist: Optional[tuple[str, ...]] = None
    vote_proposal_whitelist: Optional[tuple[str, ...]] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "admin": self.admin,
            "voting_period": self.voting_period.to_dict(),
            "proposal_period": self.proposal_period.to_dict(),
            "budget_denom": self.budget_denom,
            "algorithm": dict(self.algorithm),
        }
        if self.create_proposal_whitelist is not None:
            payload["create_proposal_whitelist"] = list(self.create_proposal_whitelist)
        if self.vote_proposal_whitelist is not None:
            payload["vote_proposal_whitelist"] = list(self.vote_proposal_whitelist)
        return payload

    def validate(self, registry: SchemaRegistry | None = None) -> dict[str, Any]:
        """Return the wire form after checking it against the init schema."""
        payload = self.to_dict()
        (registry or SchemaRegistry.default()).validate_instance(payload, INIT_MSG_SCHEMA)
        return payload


# ============ Query responses ============


@dataclass(frozen=True)
class Proposal:
    id: int
    title: str
    description: str
    fund_address: str
    metadata: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], registry: SchemaRegistry | None = None) -> "Proposal":
        (registry or SchemaRegistry.default()).validate_instance(dict(payload), PROPOSAL_SCHEMA)
        return cls(
            id=int(payload["id"]),
            title=payload["title"],
            description=payload["description"],
            fund_address=payload["fund_address"],
            metadata=payload.get("metadata"),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "fund_address": self.fund_address,
        }
        if self.metadata is not None:
            payload["metadata"] = self.metadata
        return payload


@dataclass(frozen=True)
class Vote:
    proposal_id: int
    voter: str
    fund: Coin

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Vote":
        proposal_id = payload.get("proposal_id", payload.get("proposalId"))
        if proposal_id is None:
            raise MessageValidationError(f"Vote is missing proposal_id: {dict(payload)!r}")
        return cls(
            proposal_id=int(proposal_id),
            voter=str(payload["voter"]),
            fund=Coin.from_dict(payload["fund"]),
        )


@dataclass(frozen=True)
class ContractConfig:
    admin: str
    voting_period: Expiration
    proposal_period: Expiration
    budget: Coin
    algorithm: Mapping[str, Any]
    create_proposal_whitelist: Optional[tuple[str, ...]] = None
    vote_proposal_whitelist: Optional[tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], registry: SchemaRegistry | None = None) -> "ContractConfig":
        (registry or SchemaRegistry.default()).validate_instance(dict(payload), CONFIG_SCHEMA)
        create = payload.get("create_proposal_whitelist")
        vote = payload.get("vote_proposal_whitelist")
        return cls(
            admin=payload["admin"],
            voting_period=expiration_from_dict(payload["voting_period"]),
            proposal_period=expiration_from_dict(payload["proposal_period"]),
            budget=Coin.from_dict(payload["budget"]),
            algorithm=dict(payload["algorithm"]),
            create_proposal_whitelist=tuple(create) if create is not None else None,
            vote_proposal_whitelist=tuple(vote) if vote is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "admin": self.admin,
            "voting_period": self.voting_period.to_dict(),
            "proposal_period": self.proposal_period.to_dict(),
            "budget": self.budget.to_dict(),
            "algorithm": dict(self.algorithm),
        }
        if self.create_proposal_whitelist is not None:
            payload["create_proposal_whitelist"] = list(self.create_proposal_whitelist)
        if self.vote_proposal_whitelist is not None:
            payload["vote_proposal_whitelist"] = list(self.vote_proposal_whitelist)
        return payload


__all__ = [
    "AtHeight",
    "AtTime",
    "ContractConfig",
    "Expiration",
    "InitMsg",
    "MessageValidationError",
    "Never",
    "Proposal",
    "SchemaRegistry",
    "Vote",
    "expiration_from_dict",
]
