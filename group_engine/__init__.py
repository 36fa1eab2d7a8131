"""
Diverse Group Partitioning Engine.

Seeded genetic search with a deterministic greedy fallback, over the
distance matrices produced by culture_kernel.
"""

from .deterministic_rng import SeededStream, hash_seed
from .sizing import GroupSizing, resolve_group_size, slice_into_groups
from .genetic import Chromosome, Population, SearchConfig, SearchOutcome, run_search
from .greedy import greedy_partition
from .engine import (
    PartitionError,
    InsufficientParticipantsError,
    PartitionPath,
    PartitionResult,
    partition,
    partition_with_report,
)
from .verification import DeterminismError, verify_determinism
from .settings import load_search_config

__all__ = [
    "SeededStream",
    "hash_seed",
    "GroupSizing",
    "resolve_group_size",
    "slice_into_groups",
    "Chromosome",
    "Population",
    "SearchConfig",
    "SearchOutcome",
    "run_search",
    "greedy_partition",
    "PartitionError",
    "InsufficientParticipantsError",
    "PartitionPath",
    "PartitionResult",
    "partition",
    "partition_with_report",
    "DeterminismError",
    "verify_determinism",
    "load_search_config",
]
