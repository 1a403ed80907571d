"""
ActionCatalog -- static action definitions, fixed at definition time.

Each definition pins the mode ceiling, risk class, reversibility and target
pillar for a kind of action. Per-instance data (id, confidence) is supplied
when a descriptor is minted for a concrete request.

Some hooks build on a derivative of the source asset (a pitch excerpt, an
AEO snippet). They are only offered once that derivative exists.

Usage:
    catalog = ActionCatalog()                      # ships DEFAULT_ACTIONS
    catalog.register(ActionDefinition(kind="report_generation", ...))

    catalog.available_kinds(derivatives={"aeo_snippet"})
    action = catalog.descriptor(
        "aeo_bundle", action_id="aeo-123", confidence=0.85,
        derivatives={"aeo_snippet"},
    )
    decision = governor.decide(action, ctx)
"""

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass

from .errors import MissingDerivativeError, UnknownActionKindError
from .governance.mode_ladder import parse_mode
from .governance.models import ActionDescriptor, AutomationMode, Reversibility, RiskClass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionDefinition:
    """Governance metadata shared by every instance of one action kind."""

    kind: str
    label: str
    mode_ceiling: AutomationMode
    risk_class: RiskClass = RiskClass.LOW
    reversibility: Reversibility = Reversibility.FULLY_REVERSIBLE
    target: str = ""
    requires_derivative: str = ""

    def __post_init__(self):
        object.__setattr__(self, "mode_ceiling", parse_mode(self.mode_ceiling))
        object.__setattr__(self, "risk_class", RiskClass(self.risk_class))
        object.__setattr__(self, "reversibility", Reversibility(self.reversibility))

    def is_available(self, derivatives: Collection[str]) -> bool:
        return not self.requires_derivative or self.requires_derivative in derivatives


# Cross-pillar hooks offered from a published content asset.
DEFAULT_ACTIONS: tuple[ActionDefinition, ...] = (
    ActionDefinition(
        kind="pr_hook",
        label="Generate PR Pitch Hooks",
        # creates an external-facing draft
        mode_ceiling=AutomationMode.COPILOT,
        risk_class=RiskClass.MEDIUM,
        reversibility=Reversibility.FULLY_REVERSIBLE,
        target="pr",
        requires_derivative="pr_pitch_excerpt",
    ),
    ActionDefinition(
        kind="aeo_bundle",
        label="Send AEO Snippet Bundle",
        mode_ceiling=AutomationMode.AUTOPILOT,
        risk_class=RiskClass.LOW,
        reversibility=Reversibility.FULLY_REVERSIBLE,
        target="seo",
        requires_derivative="aeo_snippet",
    ),
    ActionDefinition(
        kind="command_center",
        label="Add to Command Center",
        mode_ceiling=AutomationMode.AUTOPILOT,
        risk_class=RiskClass.LOW,
        reversibility=Reversibility.FULLY_REVERSIBLE,
        target="command",
    ),
)


class ActionCatalog:
    """Registry of action definitions keyed by kind."""

    def __init__(self, definitions: Iterable[ActionDefinition] = DEFAULT_ACTIONS):
        self._definitions: dict[str, ActionDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: ActionDefinition) -> None:
        """Add or replace the definition for definition.kind."""
        if definition.kind in self._definitions:
            logger.warning(f"[Catalog] Replacing definition for '{definition.kind}'")
        self._definitions[definition.kind] = definition
        logger.debug(
            f"[Catalog] Registered {definition.kind} "
            f"(ceiling={definition.mode_ceiling.value})"
        )

    def get(self, kind: str) -> ActionDefinition:
        try:
            return self._definitions[kind]
        except KeyError:
            raise UnknownActionKindError(kind) from None

    def kinds(self) -> list[str]:
        return list(self._definitions)

    def available_kinds(self, derivatives: Iterable[str]) -> list[str]:
        """Kinds whose required derivative (if any) is among derivatives."""
        have = set(derivatives)
        return [k for k, d in self._definitions.items() if d.is_available(have)]

    def __contains__(self, kind: str) -> bool:
        return kind in self._definitions

    def descriptor(
        self,
        kind: str,
        action_id: str,
        confidence: float,
        derivatives: Iterable[str] | None = None,
    ) -> ActionDescriptor:
        """
        Mint an ActionDescriptor for one instance of kind.

        Args:
            derivatives: Derivatives generated so far for the source asset.
                None skips the prerequisite check for callers that do not
                track derivatives.

        Raises:
            UnknownActionKindError: kind is not registered.
            MissingDerivativeError: the required derivative is not present.
        """
        definition = self.get(kind)
        if derivatives is not None and not definition.is_available(set(derivatives)):
            raise MissingDerivativeError(kind, definition.requires_derivative)
        return ActionDescriptor(
            id=action_id,
            kind=definition.kind,
            mode_ceiling=definition.mode_ceiling,
            risk_class=definition.risk_class,
            reversibility=definition.reversibility,
            confidence=confidence,
            label=definition.label,
            target=definition.target,
        )
