"""
Eval graders.

- PropertyGrader: Exhaustive invariant checks over enum input grids
"""

from .property_grader import PropertyGrader, PropertyGraderResult
