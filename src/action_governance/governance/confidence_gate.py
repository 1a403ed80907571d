"""
ConfidenceGate -- forces low-confidence actions down to manual.

A low-confidence action never runs at copilot or autopilot, whatever its
ceiling allows. The downgrade is reported on the decision, it does not deny.
"""

from .mode_ladder import parse_mode
from .models import AutomationMode


def apply(
    requested_mode: AutomationMode | str, confidence: float, threshold: float
) -> AutomationMode:
    """Return manual when confidence is below threshold, else requested_mode.

    Idempotent: apply(apply(m, c, t), c, t) == apply(m, c, t).
    """
    mode = parse_mode(requested_mode)
    if mode == AutomationMode.MANUAL:
        return mode
    if confidence < threshold:
        return AutomationMode.MANUAL
    return mode
