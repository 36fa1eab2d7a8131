"""
Greedy Group Construction — deterministic max-min diversification.

No randomness. Identical inputs → identical groups.

Algorithm:
  1. Sort participant ids lexicographically
  2. Seed each group with the remaining participant whose average
     distance to all other remaining participants is highest
  3. Grow the group with the remaining participant that maximizes the
     minimum distance to every current member
  4. Stop at the target size (flexible: stop at 3 unless enough
     participants would remain to justify a fourth member)

Ties are broken by encounter order (first wins).
O(N² · group size).
"""

from __future__ import annotations

from typing import List, Sequence

from culture_kernel.constants import MIN_GROUP_SIZE
from culture_kernel.matrix import DistanceMatrix

from .sizing import GroupSizing, greedy_continue_past_minimum


def greedy_partition(
    ids: Sequence[str],
    matrix: DistanceMatrix,
    sizing: GroupSizing,
) -> List[List[str]]:
    """Partition ids into diverse groups without randomness."""
    pool = sorted(ids)
    total = len(pool)
    groups: List[List[str]] = []
    assigned = 0

    while pool:
        group = form_group(pool, matrix, sizing, total - assigned)
        groups.append(group)
        members = set(group)
        pool = [pid for pid in pool if pid not in members]
        assigned += len(group)

    return groups


def form_group(
    candidates: List[str],
    matrix: DistanceMatrix,
    sizing: GroupSizing,
    unassigned: int,
) -> List[str]:
    """Build one group from the candidate pool (pool order = tie order)."""
    first = select_seed_participant(candidates, matrix)
    group = [first]
    remaining = [pid for pid in candidates if pid != first]

    while len(group) < sizing.target and remaining:
        if sizing.flexible and len(group) == MIN_GROUP_SIZE:
            if not greedy_continue_past_minimum(unassigned):
                break
        nxt = most_distant_candidate(group, remaining, matrix)
        group.append(nxt)
        remaining.remove(nxt)

    return group


def select_seed_participant(candidates: Sequence[str], matrix: DistanceMatrix) -> str:
    """Candidate with the highest average distance to the other candidates."""
    if len(candidates) == 1:
        return candidates[0]

    values = matrix.values
    idx = [matrix.index_of(pid) for pid in candidates]
    best = candidates[0]
    best_avg = -1.0
    for pos, i in enumerate(idx):
        total = 0.0
        for other_pos, j in enumerate(idx):
            if other_pos != pos:
                total += float(values[i, j])
        avg = total / (len(idx) - 1)
        if avg > best_avg:
            best_avg = avg
            best = candidates[pos]
    return best


def most_distant_candidate(
    group: Sequence[str],
    candidates: Sequence[str],
    matrix: DistanceMatrix,
) -> str:
    """Candidate maximizing the minimum distance to any group member."""
    values = matrix.values
    members = [matrix.index_of(pid) for pid in group]
    best = candidates[0]
    best_min = -1.0
    for pid in candidates:
        i = matrix.index_of(pid)
        nearest = min(float(values[i, m]) for m in members)
        if nearest > best_min:
            best_min = nearest
            best = pid
    return best
