"""
ValidationTracker -- per-subject validation status state machine.

Lifecycle: PENDING -> ANALYZING -> PASSED / WARNING / BLOCKED
           any state -> PENDING on reset (subject content changed)

This is the collaborator-side owner of ValidationStatus and the warning
acknowledgment flag; the governance core only reads snapshots of it.

Each subject carries a revision number that reset() bumps. start() hands
the current revision to the validation run, and complete() refuses a
result whose revision is no longer current, so a slow run cannot
overwrite the status of content that was edited while it was in flight.
All mutations are serialized by one lock.
"""

import logging
import threading
from dataclasses import dataclass, field, replace

from ..config import GovernancePolicy
from ..errors import InvalidTransitionError, InvalidValueError, StaleValidationError
from ..governance.mode_ladder import parse_mode
from ..governance.models import (
    TERMINAL_STATUSES,
    AutomationMode,
    RequestContext,
    ValidationStatus,
)
from .models import ValidationIssue, ValidationReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationRecord:
    """Snapshot of one subject's validation state."""

    subject_id: str
    status: ValidationStatus = ValidationStatus.PENDING
    issues: tuple[ValidationIssue, ...] = field(default_factory=tuple)
    warning_acknowledged: bool = False
    revision: int = 0


class ValidationTracker:
    """
    Tracks validation status per subject and enforces legal transitions.

    Usage:
        tracker = ValidationTracker()
        tracker.register("asset-42")
        revision = tracker.start("asset-42")
        tracker.complete("asset-42", check.run(content), revision=revision)
        tracker.acknowledge_warning("asset-42")
        ctx = tracker.context_for("asset-42", "copilot", policy, kind="pr_hook")

    Unknown subject ids raise KeyError.
    """

    def __init__(self):
        self._records: dict[str, ValidationRecord] = {}
        self._lock = threading.Lock()

    def register(self, subject_id: str) -> ValidationRecord:
        """Start tracking a new subject in PENDING."""
        with self._lock:
            if subject_id in self._records:
                current = self._records[subject_id].status
                raise InvalidTransitionError(subject_id, current.value, "registered")
            record = ValidationRecord(subject_id=subject_id)
            self._records[subject_id] = record
        logger.debug(f"[ValidationTracker] Registered {subject_id}")
        return record

    def get(self, subject_id: str) -> ValidationRecord:
        with self._lock:
            return self._records[subject_id]

    def start(self, subject_id: str) -> int:
        """PENDING -> ANALYZING. Returns the revision the run belongs to."""
        with self._lock:
            record = self._records[subject_id]
            self._require(record, {ValidationStatus.PENDING}, ValidationStatus.ANALYZING)
            self._records[subject_id] = replace(record, status=ValidationStatus.ANALYZING)
        logger.debug(
            f"[ValidationTracker] {subject_id} analyzing (revision {record.revision})"
        )
        return record.revision

    def complete(
        self,
        subject_id: str,
        report: ValidationReport,
        revision: int | None = None,
    ) -> ValidationRecord:
        """ANALYZING -> terminal status from the report."""
        with self._lock:
            record = self._records[subject_id]
            if revision is not None and revision != record.revision:
                raise StaleValidationError(subject_id, revision, record.revision)
            self._require(record, {ValidationStatus.ANALYZING}, report.status)
            if report.status not in TERMINAL_STATUSES:
                raise InvalidTransitionError(
                    subject_id, record.status.value, report.status.value
                )
            record = replace(
                record,
                status=report.status,
                issues=tuple(report.issues),
                warning_acknowledged=False,
            )
            self._records[subject_id] = record
        logger.info(
            f"[ValidationTracker] {subject_id} -> {report.status.value} "
            f"({len(report.issues)} issues)"
        )
        return record

    def reset(self, subject_id: str) -> ValidationRecord:
        """Any state -> PENDING. Call when the subject content changes."""
        with self._lock:
            record = replace(
                self._records[subject_id],
                status=ValidationStatus.PENDING,
                issues=(),
                warning_acknowledged=False,
                revision=self._records[subject_id].revision + 1,
            )
            self._records[subject_id] = record
        logger.debug(
            f"[ValidationTracker] {subject_id} reset (revision {record.revision})"
        )
        return record

    def acknowledge_warning(
        self, subject_id: str, acknowledged: bool = True
    ) -> ValidationRecord:
        """Set the warning acknowledgment. Only legal while in WARNING."""
        if not isinstance(acknowledged, bool):
            raise InvalidValueError(
                f"acknowledged must be a bool, got {acknowledged!r}"
            )
        with self._lock:
            record = self._records[subject_id]
            if record.status != ValidationStatus.WARNING:
                raise InvalidTransitionError(
                    subject_id, record.status.value, "acknowledged"
                )
            record = replace(record, warning_acknowledged=acknowledged)
            self._records[subject_id] = record
        logger.info(
            f"[ValidationTracker] {subject_id} warning acknowledged={acknowledged}"
        )
        return record

    def context_for(
        self,
        subject_id: str,
        requested_mode: AutomationMode | str,
        policy: GovernancePolicy | None = None,
        kind: str = "",
    ) -> RequestContext:
        """Snapshot the subject into a RequestContext for ActionGovernor.decide()."""
        record = self.get(subject_id)
        policy = policy or GovernancePolicy()
        return RequestContext(
            requested_mode=parse_mode(requested_mode),
            validation_status=record.status,
            warning_acknowledged=record.warning_acknowledged,
            confidence_threshold=policy.threshold_for(kind),
        )

    @staticmethod
    def _require(
        record: ValidationRecord,
        allowed: set[ValidationStatus],
        target: ValidationStatus,
    ) -> None:
        if record.status not in allowed:
            raise InvalidTransitionError(
                record.subject_id, record.status.value, target.value
            )
