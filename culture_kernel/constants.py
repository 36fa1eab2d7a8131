"""
Cultural Kernel — Constants (Default Values)

All magic numbers live here as module-level defaults.
Runtime search parameters are injected via SearchConfig
(group_engine.genetic) and may be loaded from the environment.
"""

import math

from .domain_types import Framework

# --- Framework geometry ---
DIMENSION_COUNTS = {
    Framework.LEWIS: 3,
    Framework.HALL: 3,
    Framework.HOFSTEDE: 6,
}

# Largest possible Euclidean distance for scores in [0, 1]: sqrt(dimensions).
MAX_FRAMEWORK_DISTANCES = {
    fw: math.sqrt(count) for fw, count in DIMENSION_COUNTS.items()
}

# --- Group sizing ---
MIN_PARTICIPANTS: int = 3
ALLOWED_GROUP_SIZES = (3, 4)
FLEXIBLE: str = "flexible"

# Flexible mode grows groups towards this size and settles for MIN_GROUP_SIZE.
FLEXIBLE_TARGET_SIZE: int = 4
MIN_GROUP_SIZE: int = 3

# --- Genetic search defaults ---
DEFAULT_POPULATION_SIZE: int = 50
DEFAULT_GENERATIONS: int = 100
DEFAULT_MUTATION_RATE: float = 0.1
DEFAULT_ELITISM_RATE: float = 0.2
DEFAULT_TOURNAMENT_SIZE: int = 3
DEFAULT_TIMEOUT_MS: int = 2000
DEFAULT_SWAP_FRACTION: float = 0.1
