"""
Distance Engine tests.

Covers:
  - Euclidean distance per framework
  - Symmetry and zero self-distance
  - Missing framework data (single framework)
  - Combined: normalisation, shared-framework averaging, no shared data
  - Per-dimension distances
  - Score validation on the vector types

Run:  python -m pytest culture_kernel/test_distance.py
"""

from __future__ import annotations

import math
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from culture_kernel.domain_types import (
    CulturalProfile,
    Framework,
    HallScores,
    HofstedeScores,
    LewisScores,
)
from culture_kernel.distance import (
    MissingFrameworkDataError,
    NoSharedFrameworkDataError,
    combined_distance,
    dimensional_distances,
    distance,
    shared_frameworks,
)
from culture_kernel.test_harness import generate_participants


def _lewis(*scores) -> CulturalProfile:
    return CulturalProfile(lewis=LewisScores(*scores))


ORIGIN = CulturalProfile(
    lewis=LewisScores(0, 0, 0),
    hall=HallScores(0, 0, 0),
    hofstede=HofstedeScores(0, 0, 0, 0, 0, 0),
)
CORNER = CulturalProfile(
    lewis=LewisScores(1, 1, 1),
    hall=HallScores(1, 1, 1),
    hofstede=HofstedeScores(1, 1, 1, 1, 1, 1),
)


# ---------------------------------------------------------------------------
# Single frameworks
# ---------------------------------------------------------------------------

def test_lewis_euclidean():
    a = _lewis(1.0, 0.0, 0.0)
    b = _lewis(0.0, 1.0, 0.0)
    assert math.isclose(distance(a, b, Framework.LEWIS), math.sqrt(2))


def test_framework_accepts_string():
    a = _lewis(0.2, 0.4, 0.6)
    b = _lewis(0.5, 0.4, 0.2)
    assert distance(a, b, "lewis") == distance(a, b, Framework.LEWIS)
    assert math.isclose(distance(a, b, "lewis"), 0.5)


def test_single_framework_max_is_sqrt_dimensions():
    assert distance(ORIGIN, CORNER, Framework.LEWIS) == math.sqrt(3)
    assert distance(ORIGIN, CORNER, Framework.HALL) == math.sqrt(3)
    assert distance(ORIGIN, CORNER, Framework.HOFSTEDE) == math.sqrt(6)


def test_symmetry_and_self_distance():
    participants = generate_participants(7, 8)
    for fw in Framework:
        for _, a in participants:
            assert distance(a, a, fw) == 0.0
            for _, b in participants:
                assert distance(a, b, fw) == distance(b, a, fw)


def test_missing_single_framework():
    a = CulturalProfile(hall=HallScores(0.1, 0.2, 0.3))
    b = _lewis(0.1, 0.2, 0.3)
    try:
        distance(a, b, Framework.LEWIS)
        raise AssertionError("Expected MissingFrameworkDataError")
    except MissingFrameworkDataError as exc:
        assert exc.framework is Framework.LEWIS
        assert exc.side == "first profile"


def test_empty_profile_lewis_fails():
    try:
        distance(CulturalProfile(), CulturalProfile(), Framework.LEWIS)
        raise AssertionError("Expected MissingFrameworkDataError")
    except MissingFrameworkDataError:
        pass


def test_unknown_framework_rejected():
    try:
        distance(ORIGIN, CORNER, "schwartz")
        raise AssertionError("Expected ValueError")
    except ValueError:
        pass


# ---------------------------------------------------------------------------
# Combined
# ---------------------------------------------------------------------------

def test_combined_extremes_normalise_to_one():
    assert combined_distance(ORIGIN, CORNER) == 1.0
    assert distance(ORIGIN, ORIGIN, Framework.COMBINED) == 0.0


def test_combined_averages_only_shared_frameworks():
    a = CulturalProfile(lewis=LewisScores(1, 1, 1), hall=HallScores(0, 0, 0))
    b = CulturalProfile(hall=HallScores(1, 0, 0), hofstede=HofstedeScores(0, 0, 0, 0, 0, 0))
    assert shared_frameworks(a, b) == [Framework.HALL]
    assert math.isclose(distance(a, b, Framework.COMBINED), 1 / math.sqrt(3))


def test_combined_weights_frameworks_equally():
    # Lewis fully apart (1.0 normalised), Hofstede identical (0.0) → 0.5
    a = CulturalProfile(lewis=LewisScores(0, 0, 0), hofstede=HofstedeScores(*[0.3] * 6))
    b = CulturalProfile(lewis=LewisScores(1, 1, 1), hofstede=HofstedeScores(*[0.3] * 6))
    assert math.isclose(distance(a, b, Framework.COMBINED), 0.5)


def test_combined_no_shared_framework():
    a = CulturalProfile(lewis=LewisScores(0.1, 0.2, 0.3))
    b = CulturalProfile(hall=HallScores(0.1, 0.2, 0.3))
    try:
        distance(a, b, Framework.COMBINED)
        raise AssertionError("Expected NoSharedFrameworkDataError")
    except NoSharedFrameworkDataError as exc:
        assert exc.a_frameworks == [Framework.LEWIS]
        assert exc.b_frameworks == [Framework.HALL]


def test_combined_always_in_unit_interval():
    participants = generate_participants(11, 15)
    for _, a in participants:
        for _, b in participants:
            d = distance(a, b, Framework.COMBINED)
            assert 0.0 <= d <= 1.0


# ---------------------------------------------------------------------------
# Per-dimension distances
# ---------------------------------------------------------------------------

def test_dimensional_distances_lewis():
    a = _lewis(0.2, 0.5, 0.9)
    b = _lewis(0.7, 0.5, 0.1)
    dims = dimensional_distances(a, b, Framework.LEWIS)
    assert [d.dimension for d in dims] == ["linear_active", "multi_active", "reactive"]
    assert [d.label for d in dims] == ["Linear Active", "Multi Active", "Reactive"]
    assert math.isclose(dims[0].distance, 0.5)
    assert dims[1].distance == 0.0
    assert math.isclose(dims[2].distance, 0.8)
    assert dims[0].source_value == 0.2 and dims[0].target_value == 0.7


def test_dimensional_distances_combined_concatenates():
    dims = dimensional_distances(ORIGIN, CORNER, Framework.COMBINED)
    assert len(dims) == 3 + 3 + 6
    assert [d.framework for d in dims[:3]] == [Framework.LEWIS] * 3
    assert dims[-1].dimension == "indulgence"
    assert all(d.distance == 1.0 for d in dims)


def test_dimensional_distances_no_shared():
    try:
        dimensional_distances(_lewis(0, 0, 0), CulturalProfile(), Framework.COMBINED)
        raise AssertionError("Expected NoSharedFrameworkDataError")
    except NoSharedFrameworkDataError:
        pass


# ---------------------------------------------------------------------------
# Vector validation
# ---------------------------------------------------------------------------

def test_score_out_of_range_rejected():
    for bad in (1.5, -0.1, float("nan"), float("inf")):
        try:
            LewisScores(bad, 0.0, 0.0)
            raise AssertionError(f"Expected ValueError for {bad!r}")
        except ValueError:
            pass


def test_profile_helpers():
    profile = CulturalProfile(hofstede=HofstedeScores(*[0.5] * 6), lewis=LewisScores(0, 0, 1))
    assert profile.frameworks() == [Framework.LEWIS, Framework.HOFSTEDE]
    assert profile.get(Framework.HALL) is None
    assert not profile.is_empty()
    assert CulturalProfile().is_empty()
    assert HofstedeScores.dimensions()[0] == "power_distance"
    assert profile.to_dict()["lewis"] == {"linear_active": 0.0, "multi_active": 0.0, "reactive": 1.0}
    try:
        profile.get(Framework.COMBINED)
        raise AssertionError("Expected ValueError")
    except ValueError:
        pass
