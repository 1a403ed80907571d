"""
ExplanationBuilder -- three-level explainable action records.

  Level 1: user_summary      plain-language template keyed on (kind, reason)
  Level 2: technical_detail  modes, ceiling, confidence vs threshold, risk
  Level 3: causal_chain      caller events + "Action Initiated" (+ "Execution")

The chain is merged and sorted here rather than assembled at call sites:
it is always ordered by timestamp (stable on ties, naive times read as
UTC) and always holds exactly one "Action Initiated" node. Markers from an
earlier attempt, e.g. a retry fed the previous record's chain, become
"Previous Action Initiated". Denied decisions still get a record.

The clock is the only impure input and can be injected for tests.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from types import MappingProxyType

from ..errors import CausalChainError
from .models import (
    ActionDescriptor,
    Actor,
    AutomationMode,
    CausalStep,
    DenialReason,
    ExplainableAction,
    GovernanceDecision,
    RiskClass,
    TechnicalDetail,
    ValidationStatus,
)

logger = logging.getLogger(__name__)

ACTION_INITIATED_STEP = "Action Initiated"
PREVIOUS_ACTION_INITIATED_STEP = "Previous Action Initiated"
EXECUTION_STEP = "Execution"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# LEVEL 1: SUMMARY TEMPLATES
# =============================================================================

# Placeholders: {label} {mode} {requested} {ceiling} {confidence} {threshold}
DEFAULT_SUMMARY_TEMPLATES: Mapping[DenialReason, str] = MappingProxyType({
    DenialReason.OK: "{label} ran in {mode} mode.",
    DenialReason.CONFIDENCE_DOWNGRADED: (
        "{label} was moved to manual mode because confidence ({confidence}) "
        "is below the {threshold} threshold for {requested} mode."
    ),
    DenialReason.VALIDATION_BLOCKED: (
        "{label} did not run: content validation found critical issues "
        "that must be resolved first."
    ),
    DenialReason.WARNING_UNACKNOWLEDGED: (
        "{label} did not run: content validation raised warnings that "
        "have not been acknowledged."
    ),
    DenialReason.VALIDATION_INCOMPLETE: (
        "{label} did not run: content validation has not finished yet."
    ),
})


def render_summary(
    action: ActionDescriptor,
    decision: GovernanceDecision,
    templates: Mapping[tuple[str, DenialReason], str] | None = None,
) -> str:
    """Fill the template for (kind, reason), falling back to the reason default."""
    template = (templates or {}).get(
        (action.kind, decision.reason), DEFAULT_SUMMARY_TEMPLATES[decision.reason]
    )
    return template.format(
        label=action.display_name,
        mode=decision.effective_mode.value,
        requested=decision.requested_mode.value,
        ceiling=decision.mode_ceiling.value,
        confidence=f"{action.confidence:.0%}",
        threshold=f"{decision.confidence_threshold:.0%}",
    )


# =============================================================================
# LEVEL 2: CEILING RATIONALE + RISK ASSESSMENT
# =============================================================================

CEILING_RATIONALE: Mapping[AutomationMode, str] = MappingProxyType({
    AutomationMode.MANUAL: (
        "This action requires human judgment and cannot be automated."
    ),
    AutomationMode.COPILOT: (
        "AI can assist with suggestions and completions, but final approval "
        "is required."
    ),
    AutomationMode.AUTOPILOT: (
        "This action meets confidence thresholds for automated execution."
    ),
})


def assess_risk(
    action: ActionDescriptor, status: ValidationStatus
) -> tuple[str, str]:
    """Return (level, rationale). Validation findings outrank the risk class."""
    if status == ValidationStatus.BLOCKED:
        return (
            "High",
            "Content validation identified critical issues that must be "
            "resolved before proceeding.",
        )
    if status == ValidationStatus.WARNING:
        return (
            "Medium",
            "Content validation flagged potential issues. Review recommended "
            "before proceeding.",
        )
    if action.risk_class in (RiskClass.HIGH, RiskClass.CRITICAL):
        return (
            "High",
            f"{action.risk_class.value.capitalize()}-risk action "
            f"({action.reversibility.value.replace('_', ' ')}).",
        )
    if action.risk_class == RiskClass.MEDIUM:
        return (
            "Medium",
            f"Medium-risk action ({action.reversibility.value.replace('_', ' ')}).",
        )
    return "Low", "Standard action with no identified risks. Safe to proceed."


# =============================================================================
# LEVEL 3: CAUSAL CHAIN
# =============================================================================


def _ordering_key(step: CausalStep) -> datetime:
    """Timestamp for ordering; naive values are read as UTC."""
    ts = step.timestamp
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def retire_markers(prior_events: Iterable[CausalStep]) -> list[CausalStep]:
    """Rename earlier "Action Initiated" steps so the new one stays unique."""
    return [
        replace(s, step=PREVIOUS_ACTION_INITIATED_STEP)
        if s.step == ACTION_INITIATED_STEP
        else s
        for s in prior_events
    ]


def merge_causal_chain(
    prior_events: Iterable[CausalStep], new_steps: Iterable[CausalStep]
) -> tuple[CausalStep, ...]:
    """Append new_steps to prior_events and sort by timestamp (stable)."""
    merged = list(prior_events) + list(new_steps)
    return tuple(sorted(merged, key=_ordering_key))


def check_causal_chain(chain: tuple[CausalStep, ...]) -> None:
    """Raise CausalChainError unless ordered with exactly one marker node."""
    markers = sum(1 for s in chain if s.step == ACTION_INITIATED_STEP)
    if markers != 1:
        raise CausalChainError(
            f"Causal chain must hold exactly one '{ACTION_INITIATED_STEP}' "
            f"step, found {markers}"
        )
    for earlier, later in zip(chain, chain[1:]):
        if _ordering_key(later) < _ordering_key(earlier):
            raise CausalChainError(
                f"Causal chain out of order at '{later.step}'"
            )


# =============================================================================
# BUILDER
# =============================================================================


class ExplanationBuilder:
    """
    Builds ExplainableAction records from a decision and prior events.

    Usage:
        builder = ExplanationBuilder()
        record = builder.build(action, decision, prior_events=history)

    Args:
        clock: Returns "now". Defaults to timezone-aware UTC.
        templates: Kind-specific summaries keyed on (kind, DenialReason).
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        templates: Mapping[tuple[str, DenialReason], str] | None = None,
    ):
        self._clock = clock or utc_now
        self._templates = MappingProxyType(dict(templates or {}))

    def build(
        self,
        action: ActionDescriptor,
        decision: GovernanceDecision,
        prior_events: Iterable[CausalStep] = (),
    ) -> ExplainableAction:
        prior = retire_markers(prior_events)

        now = self._clock()
        new_steps = [CausalStep(
            step=ACTION_INITIATED_STEP,
            timestamp=now,
            actor=Actor.USER,
            detail=(
                f"Requested {decision.requested_mode.value} mode, "
                f"governed to {decision.effective_mode.value}"
            ),
        )]
        if decision.admitted:
            new_steps.append(CausalStep(
                step=EXECUTION_STEP,
                timestamp=now,
                actor=Actor.SYSTEM,
                detail=f"Executed in {decision.effective_mode.value} mode",
            ))

        chain = merge_causal_chain(prior, new_steps)
        check_causal_chain(chain)

        risk_level, risk_rationale = assess_risk(action, decision.validation_status)
        detail = TechnicalDetail(
            requested_mode=decision.requested_mode,
            effective_mode=decision.effective_mode,
            reason=decision.reason,
            confidence=action.confidence,
            mode_ceiling=decision.mode_ceiling,
            ceiling_applied=decision.ceiling_applied,
            confidence_threshold=decision.confidence_threshold,
            validation_status=decision.validation_status,
            ceiling_rationale=CEILING_RATIONALE[decision.mode_ceiling],
            risk_level=risk_level,
            risk_rationale=risk_rationale,
        )

        record = ExplainableAction(
            action_id=action.id,
            kind=action.kind,
            mode=decision.effective_mode,
            admitted=decision.admitted,
            reason=decision.reason,
            confidence=action.confidence,
            risk_class=action.risk_class,
            reversibility=action.reversibility,
            user_summary=render_summary(action, decision, self._templates),
            technical_detail=detail,
            causal_chain=chain,
            created_at=now,
            target=action.target,
        )
        logger.debug(
            f"[Explanation] {action.id}: {len(chain)} causal steps, "
            f"reason={decision.reason.value}"
        )
        return record
