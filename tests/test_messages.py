"""Contract message and response model tests."""

from __future__ import annotations

import pytest

from quadfund.pneuma.tx import Coin
from quadfund.quadratic.messages import (
    AtHeight,
    AtTime,
    ContractConfig,
    InitMsg,
    MessageValidationError,
    Never,
    Proposal,
    SchemaRegistry,
    Vote,
    expiration_from_dict,
)
from quadfund.quadratic.registry import INIT_MSG_SCHEMA


def _init(**overrides) -> InitMsg:
    values = {
        "admin": "cosmos1admin",
        "voting_period": AtHeight(257_600),
        "proposal_period": AtTime(1_700_000_000),
        "budget_denom": "ucosm",
        "algorithm": {"capital_constrained_liberal_radicalism": {"parameter": "1"}},
    }
    values.update(overrides)
    return InitMsg(**values)


CONFIG = {
    "admin": "cosmos1admin",
    "create_proposal_whitelist": None,
    "vote_proposal_whitelist": ["cosmos1voter"],
    "voting_period": {"at_height": 100},
    "proposal_period": {"never": {}},
    "budget": {"denom": "ucosm", "amount": "5000"},
    "algorithm": {"type": "clr"},
}


class TestExpiration:
    def test_to_dict(self) -> None:
        assert AtHeight(15).to_dict() == {"at_height": 15}
        assert AtTime(99).to_dict() == {"at_time": 99}
        assert Never().to_dict() == {"never": {}}

    def test_from_dict(self) -> None:
        assert expiration_from_dict({"at_height": 15}) == AtHeight(15)
        assert expiration_from_dict({"at_time": "99"}) == AtTime(99)
        assert expiration_from_dict({"never": {}}) == Never()

    @pytest.mark.parametrize("payload", [{}, {"at_height": 1, "at_time": 2}, {"forever": {}}])
    def test_exactly_one_tag(self, payload: dict) -> None:
        with pytest.raises(MessageValidationError):
            expiration_from_dict(payload)


class TestInitMsg:
    def test_wire_form(self) -> None:
        payload = _init().validate()
        assert payload == {
            "admin": "cosmos1admin",
            "voting_period": {"at_height": 257_600},
            "proposal_period": {"at_time": 1_700_000_000},
            "budget_denom": "ucosm",
            "algorithm": {"capital_constrained_liberal_radicalism": {"parameter": "1"}},
        }

    def test_whitelists_included_when_set(self) -> None:
        payload = _init(create_proposal_whitelist=("cosmos1a",), vote_proposal_whitelist=()).validate()
        assert payload["create_proposal_whitelist"] == ["cosmos1a"]
        assert payload["vote_proposal_whitelist"] == []

    def test_algorithm_passed_through(self) -> None:
        algorithm = {"anything": {"nested": [1, 2, 3]}}
        assert _init(algorithm=algorithm).validate()["algorithm"] == algorithm

    def test_empty_admin_rejected(self) -> None:
        with pytest.raises(MessageValidationError) as excinfo:
            _init(admin="").validate()
        assert any(error.startswith("admin") for error in excinfo.value.errors)

    def test_raw_mapping_validation(self) -> None:
        payload = _init().to_dict()
        del payload["voting_period"]
        with pytest.raises(MessageValidationError):
            SchemaRegistry.default().validate_instance(payload, INIT_MSG_SCHEMA)

    def test_raw_mapping_extra_fields_pass_through(self) -> None:
        payload = _init().to_dict()
        payload["quadratic_funding_algorithm"] = payload.pop("algorithm")
        SchemaRegistry.default().validate_instance(payload, INIT_MSG_SCHEMA)


class TestResponses:
    def test_proposal(self) -> None:
        proposal = Proposal.from_dict({"id": 3, "title": "t", "description": "d", "fund_address": "cosmos1fund"})
        assert proposal == Proposal(3, "t", "d", "cosmos1fund")
        assert proposal.to_dict() == {"id": 3, "title": "t", "description": "d", "fund_address": "cosmos1fund"}

    def test_proposal_with_metadata(self) -> None:
        proposal = Proposal.from_dict(
            {"id": 1, "title": "t", "description": "d", "fund_address": "cosmos1fund", "metadata": "aGk="}
        )
        assert proposal.metadata == "aGk="

    def test_proposal_missing_field(self) -> None:
        with pytest.raises(MessageValidationError):
            Proposal.from_dict({"id": 1, "title": "t"})

    def test_vote_accepts_both_spellings(self) -> None:
        fund = {"denom": "ucosm", "amount": "10"}
        assert Vote.from_dict({"proposal_id": 2, "voter": "cosmos1v", "fund": fund}) == Vote(2, "cosmos1v", Coin("ucosm", "10"))
        assert Vote.from_dict({"proposalId": 2, "voter": "cosmos1v", "fund": fund}).proposal_id == 2

    def test_vote_missing_proposal(self) -> None:
        with pytest.raises(MessageValidationError):
            Vote.from_dict({"voter": "cosmos1v", "fund": {"denom": "ucosm", "amount": "1"}})

    def test_config(self) -> None:
        config = ContractConfig.from_dict(CONFIG)
        assert config.voting_period == AtHeight(100)
        assert config.proposal_period == Never()
        assert config.budget == Coin("ucosm", "5000")
        assert config.create_proposal_whitelist is None
        assert config.vote_proposal_whitelist == ("cosmos1voter",)
        assert config.to_dict()["vote_proposal_whitelist"] == ["cosmos1voter"]
        assert "create_proposal_whitelist" not in config.to_dict()

    def test_config_bad_budget(self) -> None:
        payload = dict(CONFIG, budget={"denom": "ucosm", "amount": "-5"})
        with pytest.raises(MessageValidationError):
            ContractConfig.from_dict(payload)


class TestRegistry:
    def test_bundled_schemas_are_valid(self) -> None:
        registry = SchemaRegistry.default()
        for name in ("init_msg.schema.json", "proposal.schema.json", "config.schema.json"):
            assert registry.validator_for(name) is registry.validator_for(name)
