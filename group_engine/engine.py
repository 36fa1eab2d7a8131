"""
Group Engine — top-level orchestrator.

partition(participants, framework, group_size, seed) → List[Group]

  1. Reject fewer than MIN_PARTICIPANTS participants
  2. Build the distance matrix once (data errors propagate)
  3. With a seed: seeded genetic search. Any error inside the search is
     logged and recorded, and the greedy construction takes over
  4. Without a seed: deterministic greedy construction
  5. Validate coverage/disjointness before returning

Every call owns its matrix, population and stream; concurrent calls
share nothing.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple, Union

from culture_kernel.constants import MIN_PARTICIPANTS
from culture_kernel.domain_types import CulturalProfile, Framework
from culture_kernel.hashing import canonical_hash
from culture_kernel.invariants import validate_partition
from culture_kernel.matrix import DistanceMatrix, build_distance_matrix
from culture_kernel.metrics import partition_fitness

from .deterministic_rng import SeededStream
from .genetic import SearchConfig, run_search
from .greedy import greedy_partition
from .sizing import GroupSizeSpec, GroupSizing, resolve_group_size

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════
# Exception Hierarchy
# ══════════════════════════════════════════════════════════════

class PartitionError(Exception):
    """Base exception for partitioning failures."""


class InsufficientParticipantsError(PartitionError):
    """Raised when too few participants are supplied to form any group."""

    def __init__(self, count: int, minimum: int = MIN_PARTICIPANTS) -> None:
        self.count = count
        self.minimum = minimum
        super().__init__(
            f"Need at least {minimum} participants to form groups, got {count}"
        )


# ══════════════════════════════════════════════════════════════
# Result
# ══════════════════════════════════════════════════════════════

class PartitionPath(str, Enum):
    """Which construction produced the groups."""

    GENETIC = "genetic"
    GREEDY = "greedy"
    FALLBACK = "fallback"   # genetic search failed, greedy took over


@dataclass(frozen=True)
class PartitionResult:
    """Structured, immutable outcome of a partitioning run."""

    groups: List[List[str]]
    path: PartitionPath
    framework: Framework
    group_size: Union[int, str]
    seed: Optional[str] = None
    fitness: float = 0.0
    generations_run: int = 0
    timed_out: bool = False
    fallback_reason: str = ""
    assignment_hash: str = ""
    config: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "groups": [list(g) for g in self.groups],
            "path": self.path.value,
            "framework": self.framework.value,
            "group_size": self.group_size,
            "seed": self.seed,
            "fitness": self.fitness,
            "generations_run": self.generations_run,
            "timed_out": self.timed_out,
            "fallback_reason": self.fallback_reason,
            "assignment_hash": self.assignment_hash,
            "config": dict(self.config),
        }


# ══════════════════════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════════════════════

def partition(
    participants: Iterable[Tuple[str, CulturalProfile]],
    framework: Framework | str,
    group_size: GroupSizeSpec,
    seed: Optional[str] = None,
    config: Optional[SearchConfig] = None,
) -> List[List[str]]:
    """Partition participants into maximally diverse groups."""
    return partition_with_report(participants, framework, group_size, seed, config).groups


def partition_with_report(
    participants: Iterable[Tuple[str, CulturalProfile]],
    framework: Framework | str,
    group_size: GroupSizeSpec,
    seed: Optional[str] = None,
    config: Optional[SearchConfig] = None,
    clock: Callable[[], float] = time.monotonic,
) -> PartitionResult:
    """
    Same as partition(), plus which path ran and why.

    Raises InsufficientParticipantsError for fewer than 3 participants,
    ValueError for an invalid group size or duplicate ids, and the
    distance engine's CulturalDataError subclasses when profiles lack the
    framework's data (callers should validate beforehand).
    """
    participants = list(participants)
    framework = Framework.parse(framework)
    sizing = resolve_group_size(group_size)
    config = config or SearchConfig()

    if len(participants) < MIN_PARTICIPANTS:
        raise InsufficientParticipantsError(len(participants))

    matrix = build_distance_matrix(participants, framework)
    ids = list(matrix.ids)

    base = dict(
        framework=framework,
        group_size=sizing.label,
        seed=seed or None,
        config=config.to_dict(),
    )

    if seed:
        try:
            outcome = run_search(ids, matrix, sizing, SeededStream(seed), config, clock)
            groups = [list(g) for g in outcome.best.groups]
            validate_partition(groups, ids)
        except Exception as exc:
            reason = f"{type(exc).__name__}: {exc}"
            logger.warning("Genetic search failed, falling back to greedy: %s", reason)
            return _greedy_result(ids, matrix, sizing, PartitionPath.FALLBACK, reason, base)

        return PartitionResult(
            groups=groups,
            path=PartitionPath.GENETIC,
            fitness=outcome.best.fitness,
            generations_run=outcome.generations_run,
            timed_out=outcome.timed_out,
            assignment_hash=canonical_hash(groups),
            **base,
        )

    return _greedy_result(ids, matrix, sizing, PartitionPath.GREEDY, "", base)


# ── Internals ────────────────────────────────────────────────

def _greedy_result(
    ids: List[str],
    matrix: DistanceMatrix,
    sizing: GroupSizing,
    path: PartitionPath,
    reason: str,
    base: dict,
) -> PartitionResult:
    groups = greedy_partition(ids, matrix, sizing)
    validate_partition(groups, ids)
    return PartitionResult(
        groups=groups,
        path=path,
        fitness=partition_fitness(groups, matrix),
        fallback_reason=reason,
        assignment_hash=canonical_hash(groups),
        **base,
    )
