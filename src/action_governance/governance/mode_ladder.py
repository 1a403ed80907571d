"""
ModeLadder -- total order over automation modes.

    manual (0) < copilot (1) < autopilot (2)

Every ceiling check and clamp in the package goes through index(). Mode
values may arrive as raw strings from a UI layer, so each function parses
its arguments and raises InvalidModeError for anything outside the ladder.
"""

from ..errors import InvalidModeError
from .models import AutomationMode

MODE_ORDER: tuple[AutomationMode, ...] = (
    AutomationMode.MANUAL,
    AutomationMode.COPILOT,
    AutomationMode.AUTOPILOT,
)

_INDEX = {mode: position for position, mode in enumerate(MODE_ORDER)}


def parse_mode(value: AutomationMode | str) -> AutomationMode:
    """Coerce an enum member or its string value into an AutomationMode."""
    if isinstance(value, AutomationMode):
        return value
    if isinstance(value, str):
        try:
            return AutomationMode(value.strip().lower())
        except ValueError:
            pass
    raise InvalidModeError(value)


def index(mode: AutomationMode | str) -> int:
    """Position of a mode on the ladder."""
    return _INDEX[parse_mode(mode)]


def clamp(
    requested: AutomationMode | str, ceiling: AutomationMode | str
) -> AutomationMode:
    """Return requested unless it is above ceiling, in which case ceiling."""
    requested_mode = parse_mode(requested)
    ceiling_mode = parse_mode(ceiling)
    if _INDEX[requested_mode] <= _INDEX[ceiling_mode]:
        return requested_mode
    return ceiling_mode


def is_at_or_below(a: AutomationMode | str, b: AutomationMode | str) -> bool:
    """True when a is not more automated than b."""
    return index(a) <= index(b)
