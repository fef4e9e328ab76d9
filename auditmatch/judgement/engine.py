"""
Judgement engine — decides named checks with Z3.

Every fact a matcher observes about its subject is turned into a named Z3
Boolean expression, and each expression is checked on its own solver so a
failure can be reported by name:

    judge([check("audited/enabled", True),
           check("audited/comment-required", False)])
    → {"satisfied": False,
       "constraints": [{"label": "audited/enabled", "passed": True}, ...],
       "violations": ["audited/comment-required"]}
"""
from __future__ import annotations

from z3 import BoolVal, Solver, sat


def named(label: str, expr):
    """Attach a human-readable name to any Z3 expression."""
    expr._repr = label
    return expr


def check(label: str, value) -> object:
    """A named Z3 constant for one already-evaluated fact."""
    return named(label, BoolVal(bool(value)))


def column_constraints(actual, expected) -> list:
    """
    One constraint per column: it must be excluded in both sets or in neither.

    Labels are "columns/<name>" so violations point at the disagreeing column.
    """
    actual   = {str(c) for c in actual}
    expected = {str(c) for c in expected}
    return [
        named(f"columns/{name}",
              BoolVal(name in actual) == BoolVal(name in expected))
        for name in sorted(actual | expected)
    ]


def judge(constraints: list) -> dict:
    """
    Solve each constraint separately.

    Returns:
        {
            "satisfied":   bool,
            "constraints": [{"label": str, "passed": bool}],
            "violations":  [str],
        }
    """
    if not constraints:
        return {"satisfied": True, "constraints": [], "violations": []}

    results    = []
    violations = []
    for i, c in enumerate(constraints):
        label = getattr(c, "_repr", None) or f"constraint[{i}]"
        solver = Solver()
        solver.add(c)
        ok = solver.check() == sat
        results.append({"label": label, "passed": ok})
        if not ok:
            violations.append(label)

    return {
        "satisfied":   not violations,
        "constraints": results,
        "violations":  violations,
    }
