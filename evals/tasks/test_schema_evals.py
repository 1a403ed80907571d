"""
Schema Evals -- boundary parsing and wire rendering with stable enum strings.
"""

import json

import pytest
from pydantic import ValidationError

from action_governance.config import GovernancePolicy
from action_governance.errors import InvalidModeError, InvalidStatusError, InvalidValueError
from action_governance.governance.models import AutomationMode, DenialReason, RiskClass
from action_governance.schemas import (
    ExplainableActionModel,
    GovernanceDecisionModel,
    GovernanceRequestModel,
)


def _request(**overrides):
    payload = {
        "action_id": "aeo-1",
        "kind": "aeo_bundle",
        "label": "Send AEO Snippet Bundle",
        "target": "seo",
        "mode_ceiling": "autopilot",
        "risk_class": "low",
        "confidence": 0.4,
        "requested_mode": "autopilot",
        "validation_status": "passed",
    }
    payload.update(overrides)
    return GovernanceRequestModel(**payload)


class TestRequestParsing:
    """Eval: Untrusted input is parsed strictly at the boundary."""

    def test_to_domain(self):
        action, ctx = _request().to_domain()
        assert action.mode_ceiling == AutomationMode.AUTOPILOT
        assert action.risk_class == RiskClass.LOW
        assert ctx.requested_mode == AutomationMode.AUTOPILOT
        assert ctx.confidence_threshold == 0.70

    def test_policy_threshold_used_when_not_overridden(self):
        policy = GovernancePolicy(kind_thresholds={"aeo_bundle": 0.3})
        _, ctx = _request().to_domain(policy)
        assert ctx.confidence_threshold == 0.3

    def test_explicit_threshold_wins(self):
        policy = GovernancePolicy(kind_thresholds={"aeo_bundle": 0.3})
        _, ctx = _request(confidence_threshold=0.5).to_domain(policy)
        assert ctx.confidence_threshold == 0.5

    def test_bad_mode(self):
        with pytest.raises(InvalidModeError):
            _request(requested_mode="warp").to_domain()

    def test_bad_status(self):
        with pytest.raises(InvalidStatusError):
            _request(validation_status="approved").to_domain()

    def test_bad_risk_class(self):
        with pytest.raises(InvalidValueError):
            _request(risk_class="extreme").to_domain()

    def test_confidence_range_checked_by_pydantic(self):
        with pytest.raises(ValidationError):
            _request(confidence=1.7)


class TestRendering:
    """Eval: Records render to JSON with the wire enum strings."""

    def test_decision_model(self, governor):
        action, ctx = _request().to_domain()
        model = GovernanceDecisionModel.from_domain(governor.decide(action, ctx))
        assert model.reason == "confidence_downgraded"
        assert model.effective_mode == "manual"
        assert model.admitted is True

    def test_explainable_action_model(self, governor, builder, fixed_now):
        action, ctx = _request(validation_status="blocked").to_domain()
        record = builder.build(action, governor.decide(action, ctx))
        model = ExplainableActionModel.from_domain(record)

        data = json.loads(model.model_dump_json())
        assert data["reason"] == DenialReason.VALIDATION_BLOCKED.value
        assert data["admitted"] is False
        assert data["created_at"] == fixed_now.isoformat()
        assert data["technical_detail"]["risk_level"] == "High"
        assert [s["step"] for s in data["causal_chain"]] == ["Action Initiated"]
        assert data["causal_chain"][0]["actor"] == "user"
        assert data["target"] == "seo"
