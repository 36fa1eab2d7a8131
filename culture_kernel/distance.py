"""
Cultural Kernel — Distance Engine

distance(a, b, framework) → float

Single frameworks: plain Euclidean distance over the framework's
dimensions, range [0, sqrt(dimensions)].

Combined: each framework both profiles share is normalised by its
maximum distance to [0, 1], then averaged with equal weight. A
6-dimensional framework therefore counts exactly as much as a
3-dimensional one.

Pure functions. No side effects.
"""

from __future__ import annotations

import math
from typing import List

from .constants import MAX_FRAMEWORK_DISTANCES
from .domain_types import (
    INDIVIDUAL_FRAMEWORKS,
    CulturalProfile,
    DimensionalDistance,
    Framework,
)


# ══════════════════════════════════════════════════════════════
# Exception Hierarchy
# ══════════════════════════════════════════════════════════════

class CulturalDataError(Exception):
    """Base exception for missing or unusable cultural score data."""


class MissingFrameworkDataError(CulturalDataError):
    """Raised when a profile lacks the vector a framework needs."""

    def __init__(self, framework: Framework, side: str = "", message: str = "") -> None:
        self.framework = framework
        self.side = side
        if not message:
            where = f" ({side})" if side else ""
            message = f"Missing {framework.label} scores{where}"
        super().__init__(message)


class NoSharedFrameworkDataError(CulturalDataError):
    """Raised when two profiles have no framework in common."""

    def __init__(self, a_frameworks: List[Framework], b_frameworks: List[Framework]) -> None:
        self.a_frameworks = a_frameworks
        self.b_frameworks = b_frameworks
        super().__init__(
            "No cultural scores available for combined calculation: "
            f"{[f.value for f in a_frameworks]} vs {[f.value for f in b_frameworks]}"
        )


# ══════════════════════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════════════════════

def distance(a: CulturalProfile, b: CulturalProfile, framework: Framework | str) -> float:
    """Cultural distance between two profiles under one framework."""
    framework = Framework.parse(framework)
    if framework is Framework.COMBINED:
        return combined_distance(a, b)
    return framework_distance(a, b, framework)


def framework_distance(a: CulturalProfile, b: CulturalProfile, framework: Framework) -> float:
    """Raw Euclidean distance for an individual framework."""
    va, vb = _require_pair(a, b, framework)
    return _euclidean([x - y for x, y in zip(va.as_tuple(), vb.as_tuple())])


def normalized_distance(a: CulturalProfile, b: CulturalProfile, framework: Framework) -> float:
    """Framework distance scaled to [0, 1] by the framework's maximum."""
    return framework_distance(a, b, framework) / MAX_FRAMEWORK_DISTANCES[framework]


def combined_distance(a: CulturalProfile, b: CulturalProfile) -> float:
    """
    Mean of the normalised distances over every framework both profiles
    carry. Always within [0, 1].
    """
    shared = shared_frameworks(a, b)
    if not shared:
        raise NoSharedFrameworkDataError(a.frameworks(), b.frameworks())
    total = 0.0
    for fw in shared:
        total += normalized_distance(a, b, fw)
    return total / len(shared)


def shared_frameworks(a: CulturalProfile, b: CulturalProfile) -> List[Framework]:
    """Individual frameworks present on both profiles, canonical order."""
    return [
        fw for fw in INDIVIDUAL_FRAMEWORKS
        if a.get(fw) is not None and b.get(fw) is not None
    ]


def dimensional_distances(
    a: CulturalProfile,
    b: CulturalProfile,
    framework: Framework | str,
) -> List[DimensionalDistance]:
    """
    Per-dimension absolute differences. Scores live on a 0–1 scale, so
    each value is already normalised.

    For "combined", dimensions of every shared framework are concatenated.
    """
    framework = Framework.parse(framework)
    if framework is not Framework.COMBINED:
        return _framework_dimensions(a, b, framework)

    shared = shared_frameworks(a, b)
    if not shared:
        raise NoSharedFrameworkDataError(a.frameworks(), b.frameworks())
    result: List[DimensionalDistance] = []
    for fw in shared:
        result.extend(_framework_dimensions(a, b, fw))
    return result


# ── Internals ────────────────────────────────────────────────

def _euclidean(diffs: List[float]) -> float:
    # Opposite corners give exactly math.sqrt(dims) == MAX_FRAMEWORK_DISTANCES[fw].
    return math.sqrt(sum(d * d for d in diffs))


def _require_pair(a: CulturalProfile, b: CulturalProfile, framework: Framework):
    va = a.get(framework)
    if va is None:
        raise MissingFrameworkDataError(framework, "first profile")
    vb = b.get(framework)
    if vb is None:
        raise MissingFrameworkDataError(framework, "second profile")
    return va, vb


def _framework_dimensions(
    a: CulturalProfile,
    b: CulturalProfile,
    framework: Framework,
) -> List[DimensionalDistance]:
    va, vb = _require_pair(a, b, framework)
    return [
        DimensionalDistance(
            framework=framework,
            dimension=name,
            label=label,
            distance=abs(x - y),
            source_value=x,
            target_value=y,
        )
        for name, label, x, y in zip(va.dimensions(), va.LABELS, va.as_tuple(), vb.as_tuple())
    ]
