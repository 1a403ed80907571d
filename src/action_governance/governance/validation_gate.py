"""
ValidationGate -- may an action proceed given its content validation state?

    blocked             -> never (hard stop)
    warning             -> only once the warning has been acknowledged
    passed              -> yes
    pending / analyzing -> not yet (caller waits or re-polls)

The gate only reads the status it is handed. Lifecycle transitions are
driven by the caller (see validation.lifecycle.ValidationTracker).
"""

from ..errors import InvalidStatusError
from .models import DenialReason, ValidationStatus


def parse_status(value: ValidationStatus | str) -> ValidationStatus:
    """Coerce an enum member or its string value into a ValidationStatus."""
    if isinstance(value, ValidationStatus):
        return value
    if isinstance(value, str):
        try:
            return ValidationStatus(value.strip().lower())
        except ValueError:
            pass
    raise InvalidStatusError(value)


def can_proceed(
    status: ValidationStatus | str, warning_acknowledged: bool
) -> bool:
    return reason_for(status, warning_acknowledged) is None


def reason_for(
    status: ValidationStatus | str, warning_acknowledged: bool
) -> DenialReason | None:
    """Map a status to the reason it denies an action, or None if it does not."""
    status = parse_status(status)

    if status == ValidationStatus.BLOCKED:
        return DenialReason.VALIDATION_BLOCKED
    if status == ValidationStatus.WARNING:
        return None if warning_acknowledged else DenialReason.WARNING_UNACKNOWLEDGED
    if status == ValidationStatus.PASSED:
        return None
    return DenialReason.VALIDATION_INCOMPLETE
