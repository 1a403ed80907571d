"""
CitationCheck -- checks that evidence tags in content cite real sources.

Recognized tags:
  [VERIFIED: source:reference]     direct proof at a specific location
  [CORROBORATED: source_1 + source_2]  two or more independent sources
  [INDICATED: source]              single source suggests a pattern

Uses a pluggable SourceRegistry protocol so callers can wire in their own
data sources. DefaultSourceRegistry accepts everything (permissive mode).

An unknown source is critical (blocks the action). Unknown references,
VERIFIED tags without a reference and under-sourced CORROBORATED tags are
warnings (the action needs an explicit acknowledgment).
"""

import logging
import re
from typing import Protocol, runtime_checkable

from .models import IssueSeverity, ValidationIssue, ValidationReport

logger = logging.getLogger(__name__)

EVIDENCE_TAG_PATTERN = re.compile(
    r"\[(VERIFIED|CORROBORATED|INDICATED):\s*([^\]]*)\]", re.IGNORECASE
)


@runtime_checkable
class SourceRegistry(Protocol):
    """Protocol for validating that cited sources exist."""

    def source_exists(self, source_name: str) -> bool:
        """Check if a named source is known to the system."""
        ...

    def reference_exists(self, source_name: str, reference: str) -> bool:
        """Check if a specific reference within a source exists."""
        ...


class DefaultSourceRegistry:
    """Permissive registry that accepts all sources."""

    def source_exists(self, source_name: str) -> bool:
        return True

    def reference_exists(self, source_name: str, reference: str) -> bool:
        return True


class CitationCheck:
    """Validates evidence tags in content against a source registry.

    Usage:
        check = CitationCheck(registry=MySourceRegistry())
        report = check.run("[VERIFIED: analytics:row_42] Traffic doubled")
        tracker.complete(subject_id, report, revision=revision)
    """

    def __init__(self, registry: SourceRegistry | None = None):
        self._registry = registry or DefaultSourceRegistry()

    def run(self, content: str) -> ValidationReport:
        """Scan content and return a terminal ValidationReport."""
        issues: list[ValidationIssue] = []

        for match in EVIDENCE_TAG_PATTERN.finditer(content):
            level = match.group(1).upper()
            body = match.group(2).strip()
            tag = match.group(0)

            if level == "VERIFIED":
                issues.extend(self._check_verified(body, tag))
            elif level == "CORROBORATED":
                issues.extend(self._check_corroborated(body, tag))
            else:
                issues.extend(self._check_sources([body], tag))

        report = ValidationReport.from_issues(issues)
        if issues:
            logger.info(
                f"[CitationCheck] {len(issues)} issue(s), status={report.status.value}"
            )
        return report

    def _check_verified(self, body: str, tag: str) -> list[ValidationIssue]:
        source, sep, reference = body.partition(":")
        source, reference = source.strip(), reference.strip()
        if not sep or not reference:
            return [ValidationIssue(
                rule="citation:verified_missing_reference",
                severity=IssueSeverity.WARNING,
                message="VERIFIED claims must cite source:reference",
                location=tag,
                suggestion=f"Add a specific reference: [VERIFIED: {source}:reference]",
            )]

        issues = self._check_sources([source], tag)
        if not issues and not self._registry.reference_exists(source, reference):
            issues.append(ValidationIssue(
                rule="citation:unknown_reference",
                severity=IssueSeverity.WARNING,
                message=f"Reference '{reference}' in source '{source}' could not be verified",
                location=tag,
                suggestion=f"Check that '{reference}' exists in '{source}'",
            ))
        return issues

    def _check_corroborated(self, body: str, tag: str) -> list[ValidationIssue]:
        sources = [s.strip() for s in body.split("+") if s.strip()]
        issues = self._check_sources(sources, tag)
        if len(sources) < 2:
            issues.append(ValidationIssue(
                rule="citation:corroborated_insufficient_sources",
                severity=IssueSeverity.WARNING,
                message="CORROBORATED claims must name 2+ sources separated by +",
                location=tag,
                suggestion=f"Add a second source: [CORROBORATED: {body} + another_source]",
            ))
        return issues

    def _check_sources(self, sources: list[str], tag: str) -> list[ValidationIssue]:
        issues = []
        for source in sources:
            if not source:
                issues.append(ValidationIssue(
                    rule="citation:missing_source",
                    severity=IssueSeverity.WARNING,
                    message="Evidence tag does not name a source",
                    location=tag,
                    suggestion="Name the data source in the tag",
                ))
            elif not self._registry.source_exists(source):
                issues.append(ValidationIssue(
                    rule="citation:unknown_source",
                    severity=IssueSeverity.CRITICAL,
                    message=f"Source '{source}' is not a known data source",
                    location=tag,
                    suggestion=f"Verify that '{source}' is a valid source name",
                ))
        return issues
