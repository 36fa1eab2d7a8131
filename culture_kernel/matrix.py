"""
Cultural Kernel — Distance Matrix

Dense, symmetric, read-only pairwise distance table.

Row/column order = participant order supplied by the caller.
Each unordered pair is evaluated once; the diagonal is 0 without
calling the distance engine.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .distance import distance
from .domain_types import CulturalProfile, Framework


class DistanceMatrix:
    """
    Square distance matrix indexed by a stable id → row mapping.

    The backing array is flagged read-only once built.
    """

    def __init__(self, ids: Sequence[str], values: np.ndarray, framework: Framework) -> None:
        n = len(ids)
        if values.shape != (n, n):
            raise ValueError(f"Matrix shape {values.shape} does not match {n} ids")
        self._ids: Tuple[str, ...] = tuple(ids)
        self._index: Dict[str, int] = {pid: i for i, pid in enumerate(self._ids)}
        if len(self._index) != n:
            raise ValueError("Duplicate participant ids in distance matrix")
        self._values = np.array(values, dtype=np.float64)
        self._values.setflags(write=False)
        self.framework = framework

    # -- Access -------------------------------------------------------------

    @property
    def ids(self) -> Tuple[str, ...]:
        return self._ids

    @property
    def values(self) -> np.ndarray:
        return self._values

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, pid: object) -> bool:
        return pid in self._index

    def index_of(self, pid: str) -> int:
        try:
            return self._index[pid]
        except KeyError:
            raise KeyError(f"Unknown participant id {pid!r}") from None

    def get(self, a: str, b: str) -> float:
        """Distance between two participant ids."""
        return float(self._values[self.index_of(a), self.index_of(b)])

    def to_nested(self) -> Dict[str, Dict[str, float]]:
        """id → id → distance, in matrix order."""
        return {
            a: {b: float(self._values[i, j]) for j, b in enumerate(self._ids)}
            for i, a in enumerate(self._ids)
        }

    def summary(self) -> dict:
        """Off-diagonal statistics (all zeros for fewer than 2 participants)."""
        n = len(self._ids)
        if n < 2:
            return {"participants": n, "pairs": 0, "mean": 0.0, "min": 0.0, "max": 0.0}
        upper = self._values[np.triu_indices(n, k=1)]
        return {
            "participants": n,
            "pairs": int(upper.size),
            "mean": float(upper.mean()),
            "min": float(upper.min()),
            "max": float(upper.max()),
        }


def build_distance_matrix(
    participants: Iterable[Tuple[str, CulturalProfile]],
    framework: Framework | str,
) -> DistanceMatrix:
    """
    Compute every pairwise distance once.

    Propagates MissingFrameworkDataError / NoSharedFrameworkDataError.
    Raises ValueError on duplicate ids.
    """
    framework = Framework.parse(framework)
    ids: List[str] = []
    profiles: List[CulturalProfile] = []
    seen = set()
    for pid, profile in participants:
        if pid in seen:
            raise ValueError(f"Duplicate participant id {pid!r}")
        seen.add(pid)
        ids.append(pid)
        profiles.append(profile)

    n = len(ids)
    values = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            d = distance(profiles[i], profiles[j], framework)
            values[i, j] = d
            values[j, i] = d

    return DistanceMatrix(ids, values, framework)
