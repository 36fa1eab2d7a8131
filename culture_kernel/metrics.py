from __future__ import annotations

from typing import Sequence

from .matrix import DistanceMatrix


def group_mean_distance(group: Sequence[str], matrix: DistanceMatrix) -> float:
    """
    Average pairwise distance inside one group.

    Average rather than total, so groups of 3 and 4 are comparable.
    Returns 0.0 for groups with fewer than 2 members.
    """
    idx = [matrix.index_of(pid) for pid in group]
    n = len(idx)
    if n < 2:
        return 0.0
    values = matrix.values
    total = 0.0
    for i in range(n):
        row = values[idx[i]]
        for j in range(i + 1, n):
            total += float(row[idx[j]])
    return total / (n * (n - 1) // 2)


def group_min_distance(group: Sequence[str], matrix: DistanceMatrix) -> float:
    """Closest pair inside one group. 0.0 for fewer than 2 members."""
    idx = [matrix.index_of(pid) for pid in group]
    if len(idx) < 2:
        return 0.0
    values = matrix.values
    return min(
        float(values[idx[i], idx[j]])
        for i in range(len(idx))
        for j in range(i + 1, len(idx))
    )


def partition_fitness(groups: Sequence[Sequence[str]], matrix: DistanceMatrix) -> float:
    """
    Sum over groups of the group's average intra-group distance.
    Higher is better (more internally diverse groups).
    """
    total = 0.0
    for group in groups:
        total += group_mean_distance(group, matrix)
    return total
