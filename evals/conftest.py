"""Eval fixtures -- fixed clock, sample actions, governor and builder."""

from datetime import datetime, timezone

import pytest

from action_governance.governance import (
    ActionDescriptor,
    ActionGovernor,
    AutomationMode,
    ExplanationBuilder,
    RequestContext,
    RiskClass,
    Reversibility,
    ValidationStatus,
)

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def clock():
    """Deterministic clock for ExplanationBuilder."""
    return lambda: FIXED_NOW


@pytest.fixture
def governor():
    return ActionGovernor()


@pytest.fixture
def builder(clock):
    return ExplanationBuilder(clock=clock)


@pytest.fixture
def autopilot_action():
    """Autopilot-ceiling action with low confidence (0.4)."""
    return ActionDescriptor(
        id="aeo_bundle-001",
        kind="aeo_bundle",
        mode_ceiling=AutomationMode.AUTOPILOT,
        risk_class=RiskClass.LOW,
        reversibility=Reversibility.FULLY_REVERSIBLE,
        confidence=0.4,
        label="Send AEO Snippet Bundle",
    )


@pytest.fixture
def confident_action():
    """Copilot-ceiling action with high confidence (0.9)."""
    return ActionDescriptor(
        id="pr_hook-001",
        kind="pr_hook",
        mode_ceiling=AutomationMode.COPILOT,
        risk_class=RiskClass.MEDIUM,
        reversibility=Reversibility.FULLY_REVERSIBLE,
        confidence=0.9,
        label="Generate PR Pitch Hooks",
    )


@pytest.fixture
def make_context():
    def _make(
        requested=AutomationMode.AUTOPILOT,
        status=ValidationStatus.PASSED,
        acknowledged=False,
        threshold=0.7,
    ):
        return RequestContext(
            requested_mode=requested,
            validation_status=status,
            warning_acknowledged=acknowledged,
            confidence_threshold=threshold,
        )

    return _make
