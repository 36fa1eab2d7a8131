"""
Group size rule tests: fixed sizes, flexible remainder rule,
greedy continuation threshold.

Run:  python -m pytest group_engine/test_sizing.py
"""

from __future__ import annotations

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from group_engine.deterministic_rng import SeededStream
from group_engine.sizing import (
    GroupSizing,
    greedy_continue_past_minimum,
    next_group_size,
    resolve_group_size,
    slice_into_groups,
)

FLEX = GroupSizing(target=4, flexible=True)


def _ids(n):
    return [f"p{i:02d}" for i in range(n)]


def test_resolve_group_size():
    assert resolve_group_size(3) == GroupSizing(3, False)
    assert resolve_group_size("4") == GroupSizing(4, False)
    assert resolve_group_size("flexible") == FLEX
    assert resolve_group_size("FLEXIBLE") == FLEX
    assert resolve_group_size(None) == FLEX
    assert resolve_group_size(None).label == "flexible"
    assert resolve_group_size(4).label == 4


def test_resolve_group_size_rejects_other_values():
    for bad in (2, 5, 0, "five", True, 3.0):
        try:
            resolve_group_size(bad)
            raise AssertionError(f"Expected ValueError for {bad!r}")
        except ValueError:
            pass


def test_fixed_size_leaves_remainder_last():
    assert [len(g) for g in slice_into_groups(_ids(7), GroupSizing(3, False), None)] == [3, 3, 1]
    assert [len(g) for g in slice_into_groups(_ids(6), GroupSizing(4, False), None)] == [4, 2]
    assert [len(g) for g in slice_into_groups(_ids(8), GroupSizing(4, False), None)] == [4, 4]


def test_flexible_small_remainders():
    assert next_group_size(3, FLEX, None) == 3
    assert next_group_size(2, FLEX, None) == 2
    assert next_group_size(4, FLEX, None) == 3
    assert next_group_size(5, FLEX, None) == 3
    assert [len(g) for g in slice_into_groups(_ids(4), FLEX, None)] == [3, 1]
    assert [len(g) for g in slice_into_groups(_ids(5), FLEX, None)] == [3, 2]


def test_flexible_large_needs_stream():
    try:
        next_group_size(6, FLEX, None)
        raise AssertionError("Expected ValueError")
    except ValueError:
        pass


def test_flexible_slices_cover_in_order():
    ids = _ids(23)
    for seed in ("s1", "s2", "s3", "s4"):
        groups = slice_into_groups(ids, FLEX, SeededStream(seed))
        assert [pid for g in groups for pid in g] == ids
        for group in groups[:-1]:
            assert len(group) in (3, 4)


def test_flexible_slicing_is_seed_deterministic():
    ids = _ids(30)
    a = slice_into_groups(ids, FLEX, SeededStream("same"))
    b = slice_into_groups(ids, FLEX, SeededStream("same"))
    assert a == b


def test_greedy_continue_threshold():
    assert greedy_continue_past_minimum(7)
    assert greedy_continue_past_minimum(10)
    assert not greedy_continue_past_minimum(6)
    assert not greedy_continue_past_minimum(4)
