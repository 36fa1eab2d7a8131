"""
Cultural Kernel — Invariant Checks

Hard-fail validation. Every check raises InvariantViolationError on failure.

Partition rules:
  - every input participant appears exactly once
  - no unknown participant ids
  - no empty group (unless the input itself was empty)

Matrix rules:
  - zero diagonal, symmetric, non-negative, finite
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from .matrix import DistanceMatrix


class InvariantViolationError(Exception):
    """Raised when a partition or matrix invariant is violated."""

    def __init__(self, rule: str, detail: str) -> None:
        self.rule = rule
        self.detail = detail
        super().__init__(f"[INVARIANT:{rule}] {detail}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_partition(groups: Sequence[Sequence[str]], participant_ids: Iterable[str]) -> None:
    """
    Run all partition checks. Raises InvariantViolationError on the
    first failure.
    """
    expected = list(participant_ids)
    _check_no_empty_groups(groups, expected)
    _check_no_duplicates(groups)
    _check_no_unknown_members(groups, set(expected))
    _check_coverage(groups, expected)


def validate_matrix(matrix: DistanceMatrix) -> None:
    """Run all matrix checks."""
    values = matrix.values
    if not np.all(np.isfinite(values)):
        raise InvariantViolationError("matrix_finite", "Matrix contains non-finite distances")
    if np.any(np.diag(values) != 0.0):
        raise InvariantViolationError("matrix_diagonal", "Self-distance must be 0")
    if np.any(values < 0.0):
        raise InvariantViolationError("matrix_negative", "Negative distance in matrix")
    if not np.array_equal(values, values.T):
        raise InvariantViolationError("matrix_symmetry", "Matrix is not symmetric")


# ---------------------------------------------------------------------------
# Individual checks (private)
# ---------------------------------------------------------------------------

def _check_no_empty_groups(groups: Sequence[Sequence[str]], expected: list) -> None:
    if not expected:
        return
    for i, group in enumerate(groups):
        if not group:
            raise InvariantViolationError("empty_group", f"Group {i} is empty")


def _check_no_duplicates(groups: Sequence[Sequence[str]]) -> None:
    seen: set[str] = set()
    for i, group in enumerate(groups):
        for pid in group:
            if pid in seen:
                raise InvariantViolationError(
                    "duplicate_member",
                    f"Participant {pid!r} appears more than once (again in group {i})",
                )
            seen.add(pid)


def _check_no_unknown_members(groups: Sequence[Sequence[str]], expected: set) -> None:
    for i, group in enumerate(groups):
        for pid in group:
            if pid not in expected:
                raise InvariantViolationError(
                    "unknown_member",
                    f"Group {i} contains unknown participant {pid!r}",
                )


def _check_coverage(groups: Sequence[Sequence[str]], expected: list) -> None:
    assigned = {pid for group in groups for pid in group}
    missing = [pid for pid in expected if pid not in assigned]
    if missing:
        raise InvariantViolationError(
            "coverage",
            f"{len(missing)} participant(s) not assigned: {', '.join(missing)}",
        )
