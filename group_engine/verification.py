"""
Verification Harness — partition, re-run, and verify determinism.

Provides single-run verification and a suite of smoke tests when
run as __main__.

Run:  python -m group_engine.verification
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from culture_kernel.diagnostics import compute_diagnostics
from culture_kernel.domain_types import CulturalProfile, Framework
from culture_kernel.matrix import build_distance_matrix

from .engine import partition_with_report
from .genetic import SearchConfig
from .sizing import GroupSizeSpec


class DeterminismError(Exception):
    """Raised when two identical runs produce different assignments."""

    def __init__(self, seed: Optional[str], expected: str, actual: str) -> None:
        self.seed = seed
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Determinism failure for seed {seed!r}: "
            f"first hash={expected!r}, second hash={actual!r}"
        )


def verify_determinism(
    participants: Iterable[Tuple[str, CulturalProfile]],
    framework: Framework | str,
    group_size: GroupSizeSpec,
    seed: Optional[str] = None,
    config: Optional[SearchConfig] = None,
) -> dict:
    """
    Partition twice with identical inputs and compare assignment hashes.

    Returns:
        {
            "assignment_hash": str,
            "path": str,
            "diagnostics": dict,
        }

    Raises DeterminismError if the two runs differ.
    """
    participants = list(participants)
    first = partition_with_report(participants, framework, group_size, seed, config)
    second = partition_with_report(participants, framework, group_size, seed, config)
    if first.assignment_hash != second.assignment_hash:
        raise DeterminismError(seed, first.assignment_hash, second.assignment_hash)

    matrix = build_distance_matrix(participants, framework)
    return {
        "assignment_hash": first.assignment_hash,
        "path": first.path.value,
        "timed_out": first.timed_out,
        "diagnostics": compute_diagnostics(first.groups, matrix),
    }


# ---------------------------------------------------------------------------
# CLI smoke tests
# ---------------------------------------------------------------------------

def _run_smoke_tests() -> None:
    """Run a suite of deterministic smoke tests."""
    import json

    from culture_kernel.test_harness import generate_participants

    # A generous budget so both runs complete every generation.
    config = SearchConfig(generations=30, timeout_ms=60_000)
    cases = [
        ("lewis_6_fixed3", 6, Framework.LEWIS, 3, "workshop-42"),
        ("hofstede_10_flexible", 10, Framework.HOFSTEDE, "flexible", "workshop-7"),
        ("combined_13_fixed4", 13, Framework.COMBINED, 4, "ws-13"),
        ("hall_9_greedy", 9, Framework.HALL, 3, None),
    ]

    all_ok = True

    for label, n, framework, size, seed in cases:
        print(f"\n{'-'*60}")
        print(f"  {label}  (seed={seed})")
        print(f"{'-'*60}")

        try:
            participants = generate_participants(42, n)
            result = verify_determinism(participants, framework, size, seed, config)
            print(json.dumps(result, indent=2, default=str))
            print("  OK: Deterministic (hash stable)")
        except Exception as exc:
            print(f"  FAIL: {exc}")
            all_ok = False

    print(f"\n{'='*60}")
    if all_ok:
        print("  ALL SMOKE TESTS PASSED")
    else:
        print("  SOME TESTS FAILED")
    print(f"{'='*60}")


if __name__ == "__main__":
    _run_smoke_tests()
