"""
Governance data models -- enums, action descriptors, decisions, records.

The enum string values are a wire contract: they are rendered directly by
the UI layer and persisted in audit history, so they must never change.

Everything here is immutable. A RequestContext is built fresh for each
decide() call instead of being mutated in place.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..errors import InvalidValueError


# =============================================================================
# ENUMERATIONS (wire contract)
# =============================================================================


class AutomationMode(str, Enum):
    """Degree of AI autonomy. Ordered manual < copilot < autopilot.

    Never compare members by value; use mode_ladder.index() instead.
    """

    MANUAL = "manual"
    COPILOT = "copilot"
    AUTOPILOT = "autopilot"


class ValidationStatus(str, Enum):
    """Content validation lifecycle states."""

    PENDING = "pending"
    ANALYZING = "analyzing"
    PASSED = "passed"
    WARNING = "warning"
    BLOCKED = "blocked"


class DenialReason(str, Enum):
    """Why a decision was denied or downgraded. OK when neither."""

    OK = "ok"
    CONFIDENCE_DOWNGRADED = "confidence_downgraded"
    VALIDATION_BLOCKED = "validation_blocked"
    WARNING_UNACKNOWLEDGED = "warning_unacknowledged"
    VALIDATION_INCOMPLETE = "validation_incomplete"


class RiskClass(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Reversibility(str, Enum):
    FULLY_REVERSIBLE = "fully_reversible"
    PARTIALLY_REVERSIBLE = "partially_reversible"
    IRREVERSIBLE = "irreversible"


class Actor(str, Enum):
    SYSTEM = "system"
    USER = "user"


TERMINAL_STATUSES = frozenset(
    {ValidationStatus.PASSED, ValidationStatus.WARNING, ValidationStatus.BLOCKED}
)

DEFAULT_CONFIDENCE_THRESHOLD = 0.70


def check_unit_interval(value: float, field_name: str) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{field_name} must be within [0, 1], got {value}")


# =============================================================================
# ACTION DESCRIPTOR + REQUEST CONTEXT (inputs)
# =============================================================================


@dataclass(frozen=True)
class ActionDescriptor:
    """
    Immutable description of one requestable action instance.

    id: Opaque identifier, unique per logical action instance.
    kind: Domain tag such as "content_hook" or "report_generation".
    mode_ceiling: Highest mode this kind of action may ever run at.
    risk_class / reversibility: Informational, surfaced in explanations.
    confidence: Estimated likelihood that automating this instance is correct.
    label: Optional display name used by summary templates.
    target: Pillar the action lands in ("pr", "seo", ...), if any.
    """

    id: str
    kind: str
    mode_ceiling: AutomationMode
    risk_class: RiskClass = RiskClass.LOW
    reversibility: Reversibility = Reversibility.FULLY_REVERSIBLE
    confidence: float = 0.0
    label: str = ""
    target: str = ""

    def __post_init__(self):
        check_unit_interval(self.confidence, "confidence")

    @property
    def display_name(self) -> str:
        return self.label or self.kind.replace("_", " ").capitalize()


@dataclass(frozen=True)
class RequestContext:
    """Per-call inputs owned by the calling collaborator."""

    requested_mode: AutomationMode
    validation_status: ValidationStatus
    warning_acknowledged: bool = False
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD

    def __post_init__(self):
        # "false" from a form field is truthy; only a real bool may open the gate
        if not isinstance(self.warning_acknowledged, bool):
            raise InvalidValueError(
                f"warning_acknowledged must be a bool, "
                f"got {self.warning_acknowledged!r}"
            )
        check_unit_interval(self.confidence_threshold, "confidence_threshold")


# =============================================================================
# GOVERNANCE DECISION (output of the governor)
# =============================================================================


@dataclass(frozen=True)
class GovernanceDecision:
    """
    Result of ActionGovernor.decide().

    effective_mode is always at or below both requested_mode and
    mode_ceiling. When admitted is False it is kept for display only.
    """

    effective_mode: AutomationMode
    admitted: bool
    reason: DenialReason
    requested_mode: AutomationMode
    mode_ceiling: AutomationMode
    ceiling_applied: bool
    validation_status: ValidationStatus
    confidence_threshold: float


# =============================================================================
# EXPLAINABLE ACTION (output of the builder)
# =============================================================================


@dataclass(frozen=True)
class CausalStep:
    """One timestamped event in a causal chain."""

    step: str
    timestamp: datetime
    actor: Actor
    detail: str = ""


@dataclass(frozen=True)
class TechnicalDetail:
    """Level 2 of an explanation: the numbers behind the decision."""

    requested_mode: AutomationMode
    effective_mode: AutomationMode
    reason: DenialReason
    confidence: float
    mode_ceiling: AutomationMode
    ceiling_applied: bool
    confidence_threshold: float
    validation_status: ValidationStatus
    ceiling_rationale: str = ""
    risk_level: str = ""
    risk_rationale: str = ""


@dataclass(frozen=True)
class ExplainableAction:
    """
    Auditable record of one governance decision + execution attempt.

    Level 1: user_summary. Level 2: technical_detail. Level 3: causal_chain.
    Records are history: a new one is built for every attempt.
    """

    action_id: str
    kind: str
    mode: AutomationMode
    admitted: bool
    reason: DenialReason
    confidence: float
    risk_class: RiskClass
    reversibility: Reversibility
    user_summary: str
    technical_detail: TechnicalDetail
    causal_chain: tuple[CausalStep, ...]
    created_at: datetime
    target: str = ""
