"""
Search configuration from the environment.

A .env file (current directory by default) is loaded first when present;
variables already set in the environment win.

  GROUPING_POPULATION_SIZE   GROUPING_GENERATIONS
  GROUPING_MUTATION_RATE     GROUPING_ELITISM_RATE
  GROUPING_TOURNAMENT_SIZE   GROUPING_TIMEOUT_MS
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

from .genetic import SearchConfig

_INT_VARS = {
    "GROUPING_POPULATION_SIZE": "population_size",
    "GROUPING_GENERATIONS": "generations",
    "GROUPING_TOURNAMENT_SIZE": "tournament_size",
    "GROUPING_TIMEOUT_MS": "timeout_ms",
}

_FLOAT_VARS = {
    "GROUPING_MUTATION_RATE": "mutation_rate",
    "GROUPING_ELITISM_RATE": "elitism_rate",
}


def load_search_config(env_path: Optional[str] = None) -> SearchConfig:
    """Build a SearchConfig from .env / environment, defaults otherwise."""
    env_path = env_path or os.path.join(os.getcwd(), ".env")
    if os.path.exists(env_path):
        load_dotenv(env_path)

    overrides = {}
    for var, name in _INT_VARS.items():
        raw = os.environ.get(var, "").strip()
        if raw:
            try:
                overrides[name] = int(raw)
            except ValueError:
                raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    for var, name in _FLOAT_VARS.items():
        raw = os.environ.get(var, "").strip()
        if raw:
            try:
                overrides[name] = float(raw)
            except ValueError:
                raise ValueError(f"{var} must be a number, got {raw!r}") from None

    return SearchConfig(**overrides)
