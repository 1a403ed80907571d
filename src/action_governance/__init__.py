"""
Action Governance & Explainability Core.

Decides at what automation mode (manual / copilot / autopilot) an action may
run, whether content validation lets it run at all, and builds an auditable
three-level explanation of each decision.

Packages:
  - governance/: Pure decision core (ModeLadder, gates, ActionGovernor,
                 ExplanationBuilder)
  - validation/: Collaborator-side validation lifecycle and citation check

Modules:
  - catalog.py: Static action definitions (mode ceiling, risk, reversibility)
  - preferences.py: Global / per-pillar requested mode with ceiling resolution
  - config.py: GovernancePolicy loaded from environment
  - schemas.py: Pydantic wire models for UI/API boundaries
  - errors.py: Exception hierarchy (denials are never exceptions)
"""

from .catalog import ActionCatalog, ActionDefinition
from .config import GovernancePolicy
from .errors import (
    CausalChainError,
    GovernanceError,
    InvalidModeError,
    InvalidStatusError,
    InvalidTransitionError,
    InvalidValueError,
    MissingDerivativeError,
    StaleValidationError,
    UnknownActionKindError,
)
from .governance import (
    ActionDescriptor,
    ActionGovernor,
    Actor,
    AutomationMode,
    CausalStep,
    DenialReason,
    ExplainableAction,
    ExplanationBuilder,
    GovernanceDecision,
    RequestContext,
    Reversibility,
    RiskClass,
    ValidationStatus,
)
from .preferences import ModePreferences, ModeResolution

__all__ = [
    "ActionCatalog",
    "ActionDefinition",
    "ActionDescriptor",
    "ActionGovernor",
    "Actor",
    "AutomationMode",
    "CausalChainError",
    "CausalStep",
    "DenialReason",
    "ExplainableAction",
    "ExplanationBuilder",
    "GovernanceDecision",
    "GovernanceError",
    "GovernancePolicy",
    "InvalidModeError",
    "InvalidStatusError",
    "InvalidTransitionError",
    "InvalidValueError",
    "MissingDerivativeError",
    "ModePreferences",
    "ModeResolution",
    "RequestContext",
    "Reversibility",
    "RiskClass",
    "StaleValidationError",
    "UnknownActionKindError",
    "ValidationStatus",
]
