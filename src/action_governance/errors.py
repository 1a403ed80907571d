"""
Governance exceptions.

Only programming errors and misuse of the collaborator helpers raise.
A denied action is never an exception: it is a GovernanceDecision with
admitted=False and a DenialReason.
"""


class GovernanceError(Exception):
    """Base class for every error raised by this package."""

    pass


class InvalidValueError(GovernanceError, ValueError):
    """Raised when an enumerated value is outside its closed set."""

    pass


class InvalidModeError(InvalidValueError):
    """Raised for anything that is not manual, copilot or autopilot."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Invalid automation mode {value!r}; "
            f"expected one of 'manual', 'copilot', 'autopilot'"
        )


class InvalidStatusError(InvalidValueError):
    """Raised for an unrecognized validation status."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid validation status {value!r}")


class InvalidTransitionError(GovernanceError):
    """Raised when a validation lifecycle transition is not allowed."""

    def __init__(self, subject_id: str, current: str, attempted: str):
        self.subject_id = subject_id
        self.current = current
        self.attempted = attempted
        super().__init__(
            f"Subject '{subject_id}' cannot go from '{current}' to '{attempted}'"
        )


class StaleValidationError(GovernanceError):
    """Raised when a validation result belongs to an outdated revision."""

    def __init__(self, subject_id: str, expected: int, actual: int):
        self.subject_id = subject_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Validation result for '{subject_id}' targets revision {expected}, "
            f"current revision is {actual}"
        )


class UnknownActionKindError(GovernanceError, KeyError):
    """Raised when the action catalog has no definition for a kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(kind)

    def __str__(self) -> str:
        return f"No action definition registered for kind '{self.kind}'"


class MissingDerivativeError(GovernanceError):
    """Raised when an action is requested before the derivative it builds on."""

    def __init__(self, kind: str, derivative: str):
        self.kind = kind
        self.derivative = derivative
        super().__init__(
            f"Action '{kind}' requires a '{derivative}' derivative, "
            f"which has not been generated"
        )


class CausalChainError(GovernanceError):
    """Raised when a causal chain is out of order or lacks a single marker."""

    pass
