"""
Pydantic wire models -- the boundary between the governance core and a UI/API.

Parse at the boundary: GovernanceRequestModel takes untrusted strings from
a client and turns them into an ActionDescriptor + RequestContext, raising
InvalidModeError / InvalidStatusError / InvalidValueError for anything
outside the enumerations.

The response models render decisions and explainable actions with plain
enum string values and ISO-8601 timestamps, ready for JSON and audit logs.
"""

from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, Field

from .config import GovernancePolicy
from .errors import InvalidValueError
from .governance.mode_ladder import parse_mode
from .governance.models import (
    ActionDescriptor,
    CausalStep,
    ExplainableAction,
    GovernanceDecision,
    RequestContext,
    Reversibility,
    RiskClass,
    TechnicalDetail,
)
from .governance.validation_gate import parse_status

E = TypeVar("E", bound=Enum)


def _parse_enum(enum_cls: type[E], value: str, field_name: str) -> E:
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        raise InvalidValueError(f"Invalid {field_name} {value!r}") from None


# =============================================================================
# REQUESTS (client -> core)
# =============================================================================


class GovernanceRequestModel(BaseModel):
    """One decide() request as submitted by a client."""

    action_id: str = Field(..., min_length=1)
    kind: str = Field(..., min_length=1)
    label: str = ""
    target: str = ""
    mode_ceiling: str
    risk_class: str = RiskClass.LOW.value
    reversibility: str = Reversibility.FULLY_REVERSIBLE.value
    confidence: float = Field(..., ge=0.0, le=1.0)
    requested_mode: str
    validation_status: str
    warning_acknowledged: bool = False
    confidence_threshold: float | None = Field(
        None, ge=0.0, le=1.0, description="Override the policy threshold for this kind"
    )

    def to_domain(
        self, policy: GovernancePolicy | None = None
    ) -> tuple[ActionDescriptor, RequestContext]:
        policy = policy or GovernancePolicy()
        action = ActionDescriptor(
            id=self.action_id,
            kind=self.kind,
            mode_ceiling=parse_mode(self.mode_ceiling),
            risk_class=_parse_enum(RiskClass, self.risk_class, "risk class"),
            reversibility=_parse_enum(
                Reversibility, self.reversibility, "reversibility"
            ),
            confidence=self.confidence,
            label=self.label,
            target=self.target,
        )
        threshold = (
            self.confidence_threshold
            if self.confidence_threshold is not None
            else policy.threshold_for(self.kind)
        )
        ctx = RequestContext(
            requested_mode=parse_mode(self.requested_mode),
            validation_status=parse_status(self.validation_status),
            warning_acknowledged=self.warning_acknowledged,
            confidence_threshold=threshold,
        )
        return action, ctx


# =============================================================================
# RESPONSES (core -> client)
# =============================================================================


class GovernanceDecisionModel(BaseModel):
    effective_mode: str
    admitted: bool
    reason: str
    requested_mode: str
    mode_ceiling: str
    ceiling_applied: bool
    validation_status: str
    confidence_threshold: float

    @classmethod
    def from_domain(cls, decision: GovernanceDecision) -> "GovernanceDecisionModel":
        return cls(
            effective_mode=decision.effective_mode.value,
            admitted=decision.admitted,
            reason=decision.reason.value,
            requested_mode=decision.requested_mode.value,
            mode_ceiling=decision.mode_ceiling.value,
            ceiling_applied=decision.ceiling_applied,
            validation_status=decision.validation_status.value,
            confidence_threshold=decision.confidence_threshold,
        )


class CausalStepModel(BaseModel):
    step: str
    timestamp: str
    actor: str
    detail: str = ""

    @classmethod
    def from_domain(cls, step: CausalStep) -> "CausalStepModel":
        return cls(
            step=step.step,
            timestamp=step.timestamp.isoformat(),
            actor=step.actor.value,
            detail=step.detail,
        )


class TechnicalDetailModel(BaseModel):
    requested_mode: str
    effective_mode: str
    reason: str
    confidence: float
    mode_ceiling: str
    ceiling_applied: bool
    confidence_threshold: float
    validation_status: str
    ceiling_rationale: str = ""
    risk_level: str = ""
    risk_rationale: str = ""

    @classmethod
    def from_domain(cls, detail: TechnicalDetail) -> "TechnicalDetailModel":
        return cls(
            requested_mode=detail.requested_mode.value,
            effective_mode=detail.effective_mode.value,
            reason=detail.reason.value,
            confidence=detail.confidence,
            mode_ceiling=detail.mode_ceiling.value,
            ceiling_applied=detail.ceiling_applied,
            confidence_threshold=detail.confidence_threshold,
            validation_status=detail.validation_status.value,
            ceiling_rationale=detail.ceiling_rationale,
            risk_level=detail.risk_level,
            risk_rationale=detail.risk_rationale,
        )


class ExplainableActionModel(BaseModel):
    """Complete three-level explanation returned to the client."""

    action_id: str
    kind: str
    mode: str
    admitted: bool
    reason: str
    confidence: float
    risk_class: str
    reversibility: str
    user_summary: str
    technical_detail: TechnicalDetailModel
    causal_chain: list[CausalStepModel] = Field(default_factory=list)
    created_at: str
    target: str = ""

    @classmethod
    def from_domain(cls, record: ExplainableAction) -> "ExplainableActionModel":
        return cls(
            action_id=record.action_id,
            kind=record.kind,
            mode=record.mode.value,
            admitted=record.admitted,
            reason=record.reason.value,
            confidence=record.confidence,
            risk_class=record.risk_class.value,
            reversibility=record.reversibility.value,
            user_summary=record.user_summary,
            technical_detail=TechnicalDetailModel.from_domain(record.technical_detail),
            causal_chain=[CausalStepModel.from_domain(s) for s in record.causal_chain],
            created_at=record.created_at.isoformat(),
            target=record.target,
        )
