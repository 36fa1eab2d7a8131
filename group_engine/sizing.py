"""
Group Sizing — target size semantics and the flexible remainder rule.

Fixed size (3 or 4): every group has that size except a final
remainder group holding whatever is left.

Flexible: each group's size is decided as it is formed, from the
number of participants still ungrouped:
  remaining <= 3     → one final group with all of them
  remaining in {4,5} → 3
  otherwise          → 3 or 4, chosen by the seeded stream
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from culture_kernel.constants import (
    ALLOWED_GROUP_SIZES,
    FLEXIBLE,
    FLEXIBLE_TARGET_SIZE,
    MIN_GROUP_SIZE,
)

from .deterministic_rng import SeededStream

GroupSizeSpec = Union[int, str, None]


@dataclass(frozen=True)
class GroupSizing:
    """Resolved size rule: target size plus whether it is flexible."""

    target: int
    flexible: bool

    @property
    def label(self) -> Union[int, str]:
        return FLEXIBLE if self.flexible else self.target


def resolve_group_size(value: GroupSizeSpec) -> GroupSizing:
    """
    Accept 3, 4, "flexible" or None (flexible). Hard fail otherwise.
    """
    if isinstance(value, GroupSizing):
        return value
    if value is None or (isinstance(value, str) and value.lower() == FLEXIBLE):
        return GroupSizing(target=FLEXIBLE_TARGET_SIZE, flexible=True)
    if isinstance(value, str) and value.isdigit():
        value = int(value)
    if isinstance(value, int) and not isinstance(value, bool) and value in ALLOWED_GROUP_SIZES:
        return GroupSizing(target=value, flexible=False)
    raise ValueError(
        f"Group size must be one of {ALLOWED_GROUP_SIZES} or {FLEXIBLE!r}, got {value!r}"
    )


def next_group_size(remaining: int, sizing: GroupSizing, rng: Optional[SeededStream]) -> int:
    """Size of the next group given how many participants remain."""
    if not sizing.flexible:
        return min(sizing.target, remaining)

    if remaining <= MIN_GROUP_SIZE:
        return remaining
    if remaining in (4, 5):
        return MIN_GROUP_SIZE
    if rng is None:
        raise ValueError("Flexible sizing with more than 5 remaining needs a seeded stream")
    return MIN_GROUP_SIZE if rng.coin(0.5) else FLEXIBLE_TARGET_SIZE


def slice_into_groups(
    ids: Sequence[str],
    sizing: GroupSizing,
    rng: Optional[SeededStream],
) -> List[List[str]]:
    """Cut an ordered id list into consecutive groups per the size rule."""
    groups: List[List[str]] = []
    index = 0
    while index < len(ids):
        size = next_group_size(len(ids) - index, sizing, rng)
        groups.append(list(ids[index:index + size]))
        index += size
    return groups


def greedy_continue_past_minimum(unassigned: int) -> bool:
    """
    Flexible rule for incremental construction: a group that already has
    MIN_GROUP_SIZE members grows to FLEXIBLE_TARGET_SIZE only if at least
    MIN_GROUP_SIZE participants would still be left afterwards.

    unassigned counts every participant not yet placed in a finished
    group, including the members of the group being built.
    """
    return unassigned - FLEXIBLE_TARGET_SIZE >= MIN_GROUP_SIZE
