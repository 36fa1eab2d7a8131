"""
Cultural Kernel — Core Domain Types

Pure data. No distance logic, no grouping logic.
All scores: floats normalised to [0, 1].

────────────────────────────────────────────────
DOMAIN GLOSSARY
────────────────────────────────────────────────

Framework:
    One of the three published cultural-dimension systems
    (Lewis, Hall, Hofstede) or "combined", an equal-weight aggregate.

Cultural Profile:
    The per-framework score vectors attached to a participant's
    country of origin. Any framework may be missing.

────────────────────────────────────────────────
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import ClassVar, List, NamedTuple, Optional, Tuple


class Framework(str, Enum):
    """Cultural framework selector."""

    LEWIS = "lewis"
    HALL = "hall"
    HOFSTEDE = "hofstede"
    COMBINED = "combined"

    @classmethod
    def parse(cls, value: "Framework | str") -> "Framework":
        """Accept an enum member or its string value. Hard fail otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown framework: {value!r}") from None

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Individual frameworks in canonical order. "combined" is an aggregate over these.
INDIVIDUAL_FRAMEWORKS: Tuple[Framework, ...] = (
    Framework.LEWIS,
    Framework.HALL,
    Framework.HOFSTEDE,
)


# ── Score Validation ──────────────────────────────────────────

def validate_score(name: str, value: float) -> None:
    """Scores must be finite and within [0, 1]. Hard fail."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Score {name!r} must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0.0 or value > 1.0:
        raise ValueError(f"Score {name!r}={value!r} outside [0, 1]")


class _ScoreVector:
    """Shared behaviour of the fixed-arity score records."""

    FRAMEWORK: ClassVar[Framework]
    LABELS: ClassVar[Tuple[str, ...]]

    def __post_init__(self) -> None:
        for f in fields(self):
            validate_score(f.name, getattr(self, f.name))

    @classmethod
    def dimensions(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def as_tuple(self) -> Tuple[float, ...]:
        return tuple(float(getattr(self, f.name)) for f in fields(self))

    def to_dict(self) -> dict:
        return {f.name: float(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class LewisScores(_ScoreVector):
    """Lewis model — 3 dimensions."""

    FRAMEWORK: ClassVar[Framework] = Framework.LEWIS
    LABELS: ClassVar[Tuple[str, ...]] = ("Linear Active", "Multi Active", "Reactive")

    linear_active: float
    multi_active: float
    reactive: float


@dataclass(frozen=True)
class HallScores(_ScoreVector):
    """Hall model — 3 dimensions."""

    FRAMEWORK: ClassVar[Framework] = Framework.HALL
    LABELS: ClassVar[Tuple[str, ...]] = (
        "Context (High)", "Time (Polychronic)", "Space (Private)",
    )

    context_high: float
    time_polychronic: float
    space_private: float


@dataclass(frozen=True)
class HofstedeScores(_ScoreVector):
    """Hofstede model — 6 dimensions."""

    FRAMEWORK: ClassVar[Framework] = Framework.HOFSTEDE
    LABELS: ClassVar[Tuple[str, ...]] = (
        "Power Distance",
        "Individualism",
        "Masculinity",
        "Uncertainty Avoidance",
        "Long-term Orientation",
        "Indulgence",
    )

    power_distance: float
    individualism: float
    masculinity: float
    uncertainty_avoidance: float
    long_term_orientation: float
    indulgence: float


SCORE_TYPES = {
    Framework.LEWIS: LewisScores,
    Framework.HALL: HallScores,
    Framework.HOFSTEDE: HofstedeScores,
}


@dataclass(frozen=True)
class CulturalProfile:
    """
    A participant's per-framework score vectors.

    Any framework may be None when the country lacks published values.
    """

    lewis: Optional[LewisScores] = None
    hall: Optional[HallScores] = None
    hofstede: Optional[HofstedeScores] = None

    def get(self, framework: Framework) -> Optional[_ScoreVector]:
        """Vector for an individual framework (None if absent)."""
        framework = Framework.parse(framework)
        if framework is Framework.COMBINED:
            raise ValueError("'combined' has no single score vector")
        return getattr(self, framework.value)

    def frameworks(self) -> List[Framework]:
        """Individual frameworks with data, in canonical order."""
        return [fw for fw in INDIVIDUAL_FRAMEWORKS if getattr(self, fw.value) is not None]

    def is_empty(self) -> bool:
        return not self.frameworks()

    def to_dict(self) -> dict:
        return {
            fw.value: getattr(self, fw.value).to_dict()
            for fw in self.frameworks()
        }


class Participant(NamedTuple):
    """(participant id, profile) — unpacks like a plain pair."""

    id: str
    profile: CulturalProfile


@dataclass(frozen=True)
class DimensionalDistance:
    """Distance along a single dimension (scores on a 0–1 scale)."""

    framework: Framework
    dimension: str
    label: str
    distance: float
    source_value: float
    target_value: float
