"""
Content validation -- the collaborator side of the validation gate.

Components:
  - models.py: ValidationIssue, ValidationReport, status_from_issues
  - citation_check.py: CitationCheck (evidence tags vs a pluggable SourceRegistry)
  - lifecycle.py: ValidationTracker (pending -> analyzing -> terminal, reset)
"""

from .citation_check import CitationCheck, DefaultSourceRegistry, SourceRegistry
from .lifecycle import ValidationRecord, ValidationTracker
from .models import IssueSeverity, ValidationIssue, ValidationReport, status_from_issues

__all__ = [
    "CitationCheck",
    "DefaultSourceRegistry",
    "IssueSeverity",
    "SourceRegistry",
    "ValidationIssue",
    "ValidationRecord",
    "ValidationReport",
    "ValidationTracker",
    "status_from_issues",
]
