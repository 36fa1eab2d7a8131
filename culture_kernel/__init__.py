"""
Cultural Kernel
Deterministic cultural-distance computation over per-country
Lewis / Hall / Hofstede score vectors.
"""

from .domain_types import (
    Framework,
    INDIVIDUAL_FRAMEWORKS,
    LewisScores,
    HallScores,
    HofstedeScores,
    CulturalProfile,
    Participant,
    DimensionalDistance,
)
from .distance import (
    CulturalDataError,
    MissingFrameworkDataError,
    NoSharedFrameworkDataError,
    distance,
    combined_distance,
    dimensional_distances,
    shared_frameworks,
)
from .matrix import DistanceMatrix, build_distance_matrix
from .metrics import group_mean_distance, partition_fitness
from .availability import (
    has_framework_data,
    validate_framework_scores,
    validate_participants,
    available_frameworks,
    best_available_framework,
    profiles_missing_framework,
)
from .invariants import InvariantViolationError, validate_partition, validate_matrix
from .hashing import canonical_serialize, canonical_hash, membership_hash
from .diagnostics import compute_diagnostics
from .constants import (
    FLEXIBLE,
    MIN_PARTICIPANTS,
    MAX_FRAMEWORK_DISTANCES,
)

__all__ = [
    "Framework",
    "INDIVIDUAL_FRAMEWORKS",
    "LewisScores",
    "HallScores",
    "HofstedeScores",
    "CulturalProfile",
    "Participant",
    "DimensionalDistance",
    "CulturalDataError",
    "MissingFrameworkDataError",
    "NoSharedFrameworkDataError",
    "distance",
    "combined_distance",
    "dimensional_distances",
    "shared_frameworks",
    "DistanceMatrix",
    "build_distance_matrix",
    "group_mean_distance",
    "partition_fitness",
    "has_framework_data",
    "validate_framework_scores",
    "validate_participants",
    "available_frameworks",
    "best_available_framework",
    "profiles_missing_framework",
    "InvariantViolationError",
    "validate_partition",
    "validate_matrix",
    "canonical_serialize",
    "canonical_hash",
    "membership_hash",
    "compute_diagnostics",
    "FLEXIBLE",
    "MIN_PARTICIPANTS",
    "MAX_FRAMEWORK_DISTANCES",
]
