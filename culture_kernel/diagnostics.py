"""
Cultural Kernel — Partition Diagnostics

Compute a diagnostic snapshot of a group assignment.
"""

from __future__ import annotations

from typing import Sequence

from .constants import MIN_GROUP_SIZE
from .hashing import canonical_hash, membership_hash
from .matrix import DistanceMatrix
from .metrics import group_mean_distance, group_min_distance, partition_fitness


def compute_diagnostics(groups: Sequence[Sequence[str]], matrix: DistanceMatrix) -> dict:
    """
    Return a diagnostic dict summarising partition quality.
    Distances are in the matrix framework's units.
    """
    sizes = [len(g) for g in groups]
    per_group = [
        {
            "members": list(g),
            "size": len(g),
            "mean_distance": group_mean_distance(g, matrix),
            "min_distance": group_min_distance(g, matrix),
        }
        for g in groups
    ]

    warnings: list[str] = []

    undersized = [i for i, s in enumerate(sizes) if s < MIN_GROUP_SIZE]
    if undersized:
        warnings.append(
            f"{len(undersized)} group(s) below {MIN_GROUP_SIZE} members: "
            f"{', '.join(str(i) for i in undersized)}"
        )
    uniform = [
        i for i, g in enumerate(per_group)
        if g["size"] >= 2 and g["min_distance"] == 0.0
    ]
    if uniform:
        warnings.append(
            f"{len(uniform)} group(s) pair participants with identical profiles: "
            f"{', '.join(str(i) for i in uniform)}"
        )

    return {
        "framework": matrix.framework.value,
        "participant_count": sum(sizes),
        "group_count": len(groups),
        "group_sizes": sizes,
        "fitness": partition_fitness(groups, matrix),
        "groups": per_group,
        "matrix": matrix.summary(),
        "assignment_hash": canonical_hash(groups),
        "membership_hash": membership_hash(groups),
        "warnings": warnings,
    }
