"""Data models for content validation results."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..governance.models import ValidationStatus


class IssueSeverity:
    """Issue severities. "critical" blocks; "warning" needs acknowledgment."""

    CRITICAL = "critical"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem found in the subject content.

    Attributes:
        rule: Category of issue (e.g. "citation:unknown_source").
        severity: IssueSeverity.CRITICAL or IssueSeverity.WARNING.
        message: Human-readable explanation of what's wrong.
        location: The text fragment that triggered the issue.
        suggestion: How to fix it.
    """

    rule: str
    severity: str
    message: str
    location: str = ""
    suggestion: str = ""


@dataclass(frozen=True)
class ValidationReport:
    """Terminal outcome of one validation run: status plus the issues behind it."""

    status: ValidationStatus
    issues: tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @classmethod
    def from_issues(cls, issues: Iterable[ValidationIssue]) -> "ValidationReport":
        issues = tuple(issues)
        return cls(status=status_from_issues(issues), issues=issues)


def status_from_issues(issues: Iterable[ValidationIssue]) -> ValidationStatus:
    """Any critical issue blocks; any warning warns; otherwise passed."""
    severities = {issue.severity for issue in issues}
    if IssueSeverity.CRITICAL in severities:
        return ValidationStatus.BLOCKED
    if severities:
        return ValidationStatus.WARNING
    return ValidationStatus.PASSED
