"""
Governance policy configuration.

Configuration via environment:
  GOVERNANCE_CONFIDENCE_THRESHOLD=0.70
      Default minimum confidence for copilot/autopilot (default: 0.70)
  GOVERNANCE_KIND_THRESHOLDS=pr_hook=0.8,report_generation=0.75
      Per-kind overrides, comma-separated kind=value pairs

Malformed or out-of-range environment values are skipped with a warning so
a bad deployment setting never takes the governor down. A policy built in
code with an out-of-range threshold raises ValueError on construction.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .governance.mode_ladder import parse_mode
from .governance.models import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    AutomationMode,
    RequestContext,
    ValidationStatus,
    check_unit_interval,
)
from .governance.validation_gate import parse_status

logger = logging.getLogger(__name__)


def _parse_threshold(raw: str, source: str) -> float | None:
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"[Config] {source}: '{raw}' is not a number, ignoring")
        return None
    if not 0.0 <= value <= 1.0:
        logger.warning(f"[Config] {source}: {value} is outside [0, 1], ignoring")
        return None
    return value


def _get_default_threshold() -> float:
    """Load the default confidence threshold from environment."""
    raw = os.environ.get("GOVERNANCE_CONFIDENCE_THRESHOLD", "").strip()
    if not raw:
        return DEFAULT_CONFIDENCE_THRESHOLD
    value = _parse_threshold(raw, "GOVERNANCE_CONFIDENCE_THRESHOLD")
    return DEFAULT_CONFIDENCE_THRESHOLD if value is None else value


def _get_kind_thresholds() -> dict[str, float]:
    """Load per-kind thresholds from environment."""
    raw = os.environ.get("GOVERNANCE_KIND_THRESHOLDS", "")
    thresholds: dict[str, float] = {}
    for pair in raw.split(","):
        if not pair.strip():
            continue
        kind, sep, value = pair.partition("=")
        if not sep or not kind.strip():
            logger.warning(f"[Config] GOVERNANCE_KIND_THRESHOLDS: bad entry '{pair}'")
            continue
        parsed = _parse_threshold(value.strip(), f"threshold for '{kind.strip()}'")
        if parsed is not None:
            thresholds[kind.strip()] = parsed
    return thresholds


@dataclass(frozen=True)
class GovernancePolicy:
    """
    Confidence thresholds per action kind.

    Usage:
        policy = GovernancePolicy.from_env()
        ctx = policy.context("pr_hook", requested_mode="autopilot",
                             validation_status="passed")
    """

    default_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    kind_thresholds: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        check_unit_interval(self.default_threshold, "default_threshold")
        for kind, threshold in self.kind_thresholds.items():
            check_unit_interval(threshold, f"threshold for '{kind}'")
        object.__setattr__(
            self, "kind_thresholds", MappingProxyType(dict(self.kind_thresholds))
        )

    @classmethod
    def from_env(cls) -> "GovernancePolicy":
        policy = cls(
            default_threshold=_get_default_threshold(),
            kind_thresholds=_get_kind_thresholds(),
        )
        logger.debug(
            f"[Config] Loaded policy: default={policy.default_threshold}, "
            f"{len(policy.kind_thresholds)} kind overrides"
        )
        return policy

    def threshold_for(self, kind: str) -> float:
        return self.kind_thresholds.get(kind, self.default_threshold)

    def context(
        self,
        kind: str,
        requested_mode: AutomationMode | str,
        validation_status: ValidationStatus | str,
        warning_acknowledged: bool = False,
    ) -> RequestContext:
        """Build a RequestContext carrying this kind's threshold."""
        return RequestContext(
            requested_mode=parse_mode(requested_mode),
            validation_status=parse_status(validation_status),
            warning_acknowledged=warning_acknowledged,
            confidence_threshold=self.threshold_for(kind),
        )
