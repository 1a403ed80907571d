"""
Governance core -- decides how far an action may be automated and explains why.

Components (leaves first):
  - mode_ladder.py: Total order manual < copilot < autopilot, clamp, parse
  - validation_gate.py: Validation status -> proceed / denial reason
  - confidence_gate.py: Low confidence forces manual mode
  - governor.py: ActionGovernor composing the three gates into one decision
  - explanation.py: ExplanationBuilder producing ExplainableAction records

All of it is pure: no I/O, no shared mutable state, safe to call from any
thread.
"""

from .explanation import (
    ACTION_INITIATED_STEP,
    EXECUTION_STEP,
    PREVIOUS_ACTION_INITIATED_STEP,
    ExplanationBuilder,
)
from .governor import ActionGovernor
from .models import (
    ActionDescriptor,
    Actor,
    AutomationMode,
    CausalStep,
    DenialReason,
    ExplainableAction,
    GovernanceDecision,
    RequestContext,
    Reversibility,
    RiskClass,
    TechnicalDetail,
    ValidationStatus,
)

__all__ = [
    "ACTION_INITIATED_STEP",
    "EXECUTION_STEP",
    "PREVIOUS_ACTION_INITIATED_STEP",
    "ActionDescriptor",
    "ActionGovernor",
    "Actor",
    "AutomationMode",
    "CausalStep",
    "DenialReason",
    "ExplainableAction",
    "ExplanationBuilder",
    "GovernanceDecision",
    "RequestContext",
    "Reversibility",
    "RiskClass",
    "TechnicalDetail",
    "ValidationStatus",
]
