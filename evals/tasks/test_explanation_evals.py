"""
Explanation Evals -- causal chain structure, summaries, technical detail.
"""

from datetime import datetime, timedelta, timezone

import pytest

from action_governance.catalog import ActionCatalog
from action_governance.errors import CausalChainError
from action_governance.governance import (
    ACTION_INITIATED_STEP,
    EXECUTION_STEP,
    PREVIOUS_ACTION_INITIATED_STEP,
    ExplanationBuilder,
)
from action_governance.governance.explanation import (
    CEILING_RATIONALE,
    assess_risk,
    check_causal_chain,
    merge_causal_chain,
)
from action_governance.governance.models import (
    ActionDescriptor,
    Actor,
    AutomationMode,
    CausalStep,
    DenialReason,
    RiskClass,
    ValidationStatus,
)


def _step(name, when, actor=Actor.SYSTEM):
    return CausalStep(step=name, timestamp=when, actor=actor)


class TestCausalChain:
    """Eval: Is the chain ordered with exactly one current-action marker?"""

    def test_admitted_chain_ends_with_initiation_then_execution(
        self, governor, builder, confident_action, make_context, fixed_now
    ):
        decision = governor.decide(confident_action, make_context())
        prior = [
            _step("Content Published", fixed_now - timedelta(hours=24), Actor.USER),
            _step("Derivative Generated", fixed_now - timedelta(hours=1)),
        ]
        record = builder.build(confident_action, decision, prior)

        steps = [s.step for s in record.causal_chain]
        assert steps == [
            "Content Published",
            "Derivative Generated",
            ACTION_INITIATED_STEP,
            EXECUTION_STEP,
        ]
        assert record.causal_chain[2].actor == Actor.USER
        assert record.causal_chain[3].actor == Actor.SYSTEM
        assert record.created_at == fixed_now

    def test_denied_chain_has_no_execution(
        self, governor, builder, confident_action, make_context
    ):
        decision = governor.decide(
            confident_action, make_context(status=ValidationStatus.BLOCKED)
        )
        record = builder.build(confident_action, decision)
        assert [s.step for s in record.causal_chain] == [ACTION_INITIATED_STEP]
        assert record.admitted is False

    def test_out_of_order_prior_events_are_resorted(
        self, governor, builder, confident_action, make_context, fixed_now
    ):
        decision = governor.decide(confident_action, make_context())
        prior = [
            _step("Approval", fixed_now - timedelta(hours=12)),
            _step("Signal Detection", fixed_now - timedelta(hours=48)),
            _step("Proposal Generation", fixed_now - timedelta(hours=24)),
        ]
        record = builder.build(confident_action, decision, prior)

        timestamps = [s.timestamp for s in record.causal_chain]
        assert timestamps == sorted(timestamps)
        assert [s.step for s in record.causal_chain][:3] == [
            "Signal Detection",
            "Proposal Generation",
            "Approval",
        ]

    def test_ties_keep_insertion_order(self, fixed_now):
        when = fixed_now - timedelta(minutes=5)
        chain = merge_causal_chain(
            [_step("first", when), _step("second", when)],
            [_step(ACTION_INITIATED_STEP, fixed_now)],
        )
        assert [s.step for s in chain] == ["first", "second", ACTION_INITIATED_STEP]

    def test_exactly_one_marker(
        self, governor, builder, autopilot_action, make_context, fixed_now
    ):
        for status in ValidationStatus:
            decision = governor.decide(autopilot_action, make_context(status=status))
            record = builder.build(
                autopilot_action,
                decision,
                [_step("Asset Published", fixed_now - timedelta(days=7))],
            )
            markers = [s for s in record.causal_chain if s.step == ACTION_INITIATED_STEP]
            assert len(markers) == 1

    def test_retry_chains_the_previous_record(
        self, governor, confident_action, make_context, fixed_now
    ):
        ticks = iter([fixed_now, fixed_now + timedelta(minutes=3)])
        builder = ExplanationBuilder(clock=lambda: next(ticks))

        denied = governor.decide(
            confident_action, make_context(status=ValidationStatus.WARNING)
        )
        first = builder.build(confident_action, denied)
        assert first.admitted is False

        admitted = governor.decide(
            confident_action,
            make_context(status=ValidationStatus.WARNING, acknowledged=True),
        )
        second = builder.build(confident_action, admitted, first.causal_chain)

        assert [s.step for s in second.causal_chain] == [
            PREVIOUS_ACTION_INITIATED_STEP,
            ACTION_INITIATED_STEP,
            EXECUTION_STEP,
        ]
        assert second.causal_chain[0].timestamp == fixed_now
        assert second.causal_chain[1].timestamp == fixed_now + timedelta(minutes=3)
        check_causal_chain(second.causal_chain)

    def test_naive_prior_events_under_default_clock(
        self, governor, confident_action, make_context
    ):
        builder = ExplanationBuilder()
        decision = governor.decide(confident_action, make_context())
        naive_now = datetime.now(timezone.utc).replace(tzinfo=None)
        prior = [
            _step("Derivative Generated", naive_now - timedelta(hours=1)),
            _step("Content Published", naive_now - timedelta(hours=2), Actor.USER),
        ]
        record = builder.build(confident_action, decision, prior)

        assert [s.step for s in record.causal_chain] == [
            "Content Published",
            "Derivative Generated",
            ACTION_INITIATED_STEP,
            EXECUTION_STEP,
        ]
        check_causal_chain(record.causal_chain)

    def test_naive_and_aware_events_interleave(self, fixed_now):
        naive_earlier = (fixed_now - timedelta(hours=1)).replace(tzinfo=None)
        chain = merge_causal_chain(
            [_step("later", fixed_now - timedelta(minutes=30)), _step("earlier", naive_earlier)],
            [_step(ACTION_INITIATED_STEP, fixed_now)],
        )
        assert [s.step for s in chain] == ["earlier", "later", ACTION_INITIATED_STEP]

    def test_future_prior_events_sort_after_marker(
        self, governor, builder, confident_action, make_context, fixed_now
    ):
        decision = governor.decide(confident_action, make_context())
        record = builder.build(
            confident_action,
            decision,
            [_step("Outcome Review", fixed_now + timedelta(hours=48))],
        )
        assert record.causal_chain[-1].step == "Outcome Review"
        check_causal_chain(record.causal_chain)

    def test_check_rejects_missing_marker(self, fixed_now):
        with pytest.raises(CausalChainError):
            check_causal_chain((_step("Execution", fixed_now),))


class TestSummaries:
    """Eval: Is every decision explained in plain language?"""

    def test_every_reason_has_a_summary(
        self, governor, builder, autopilot_action, confident_action, make_context
    ):
        seen = set()
        for action in (autopilot_action, confident_action):
            for status in ValidationStatus:
                decision = governor.decide(action, make_context(status=status))
                record = builder.build(action, decision)
                assert record.user_summary
                assert action.label in record.user_summary
                seen.add(record.reason)
        assert seen == set(DenialReason)

    def test_downgrade_summary_mentions_confidence(
        self, governor, builder, autopilot_action, make_context
    ):
        decision = governor.decide(autopilot_action, make_context())
        record = builder.build(autopilot_action, decision)
        assert "40%" in record.user_summary
        assert "70%" in record.user_summary

    def test_kind_specific_template(
        self, governor, clock, confident_action, make_context
    ):
        builder = ExplanationBuilder(
            clock=clock,
            templates={("pr_hook", DenialReason.OK): "Pitch hooks drafted ({mode})."},
        )
        decision = governor.decide(confident_action, make_context())
        record = builder.build(confident_action, decision)
        assert record.user_summary == "Pitch hooks drafted (copilot)."

    def test_label_falls_back_to_kind(self, governor, builder, make_context):
        action = ActionDescriptor(
            id="r-1",
            kind="report_generation",
            mode_ceiling=AutomationMode.AUTOPILOT,
            confidence=0.9,
        )
        record = builder.build(action, governor.decide(action, make_context()))
        assert record.user_summary.startswith("Report generation")


class TestTechnicalDetail:
    """Eval: Does level 2 capture the numbers behind the decision?"""

    def test_detail_fields(self, governor, builder, autopilot_action, make_context):
        decision = governor.decide(autopilot_action, make_context())
        detail = builder.build(autopilot_action, decision).technical_detail
        assert detail.requested_mode == AutomationMode.AUTOPILOT
        assert detail.effective_mode == AutomationMode.MANUAL
        assert detail.reason == DenialReason.CONFIDENCE_DOWNGRADED
        assert detail.confidence == 0.4
        assert detail.confidence_threshold == 0.7
        assert detail.ceiling_rationale == CEILING_RATIONALE[AutomationMode.AUTOPILOT]

    def test_record_copies_action_metadata(
        self, governor, builder, confident_action, make_context
    ):
        record = builder.build(
            confident_action, governor.decide(confident_action, make_context())
        )
        assert record.action_id == confident_action.id
        assert record.risk_class == confident_action.risk_class
        assert record.reversibility == confident_action.reversibility
        assert record.mode == AutomationMode.COPILOT

    def test_record_carries_target_pillar(self, governor, builder, make_context):
        action = ActionCatalog().descriptor("aeo_bundle", action_id="aeo-1", confidence=0.9)
        record = builder.build(action, governor.decide(action, make_context()))
        assert record.target == "seo"

    def test_repeated_builds_are_separate_records(
        self, governor, confident_action, make_context, fixed_now
    ):
        ticks = iter([fixed_now, fixed_now + timedelta(minutes=10)])
        builder = ExplanationBuilder(clock=lambda: next(ticks))
        decision = governor.decide(confident_action, make_context())
        first = builder.build(confident_action, decision)
        second = builder.build(confident_action, decision)
        assert first.action_id == second.action_id
        assert first.created_at < second.created_at


class TestRiskAssessment:
    """Eval: Validation findings outrank the static risk class."""

    @pytest.mark.parametrize(
        "status, risk, expected",
        [
            (ValidationStatus.BLOCKED, RiskClass.LOW, "High"),
            (ValidationStatus.WARNING, RiskClass.LOW, "Medium"),
            (ValidationStatus.PASSED, RiskClass.CRITICAL, "High"),
            (ValidationStatus.PASSED, RiskClass.MEDIUM, "Medium"),
            (ValidationStatus.PASSED, RiskClass.LOW, "Low"),
        ],
    )
    def test_levels(self, status, risk, expected):
        action = ActionDescriptor(
            id="a", kind="k", mode_ceiling=AutomationMode.COPILOT, risk_class=risk
        )
        level, rationale = assess_risk(action, status)
        assert level == expected
        assert rationale
