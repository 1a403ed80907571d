"""
Property Grader -- exhaustive invariant checks over small input spaces.

The governance inputs are a handful of closed enums plus a couple of
numbers, so invariants can be checked on every combination instead of a
sample. Each failing case is reported with the case that broke it.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)


@dataclass
class PropertyGraderResult:
    """Result from grading one or more properties over a case grid."""

    eval_name: str
    passed: bool
    cases_checked: int = 0
    failures: list[str] = field(default_factory=list)


class PropertyGrader:
    """Runs named property functions over every case in a grid.

    Usage:
        grader = PropertyGrader("blocked_dominance")
        grader.add_property("never_admitted", lambda case: not decide(*case).admitted)
        result = grader.grade(PropertyGrader.grid(modes, confidences))
    """

    def __init__(self, eval_name: str):
        self.eval_name = eval_name
        self._properties: list[tuple[str, Callable[[Any], bool]]] = []

    @staticmethod
    def grid(*axes: Iterable[Any]) -> list[tuple]:
        """Cartesian product of the given axes."""
        return list(itertools.product(*axes))

    def add_property(
        self, name: str, check_fn: Callable[[Any], bool]
    ) -> "PropertyGrader":
        """Add a named property. Returns self for chaining."""
        self._properties.append((name, check_fn))
        return self

    def grade(self, cases: Iterable[Any]) -> PropertyGraderResult:
        failures = []
        checked = 0

        for case in cases:
            checked += 1
            for name, check_fn in self._properties:
                try:
                    if not check_fn(case):
                        failures.append(f"FAIL: {name} for {case!r}")
                except Exception as e:
                    failures.append(f"ERROR: {name} for {case!r} -- {e}")

        if failures:
            logger.debug(f"[PropertyGrader] {self.eval_name}: {len(failures)} failures")

        return PropertyGraderResult(
            eval_name=self.eval_name,
            passed=not failures,
            cases_checked=checked,
            failures=failures,
        )
