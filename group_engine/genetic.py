"""
Genetic Group Search — seeded, bounded, reproducible.

run_search(ids, matrix, sizing, rng, config) → SearchOutcome

  1. Population of random partitions (seeded shuffle + size rule)
  2. Fitness = sum of each group's average intra-group distance
  3. Per generation: elites carried over unchanged, the rest bred by
     tournament selection → crossover → mutation → repair
  4. Stops after config.generations or when the wall-clock budget is
     spent (checked once per generation); returns the fittest found

Every stochastic choice draws from the supplied SeededStream.
Populations are immutable values handed from one generation to the next.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Sequence, Tuple

from culture_kernel.constants import (
    DEFAULT_ELITISM_RATE,
    DEFAULT_GENERATIONS,
    DEFAULT_MUTATION_RATE,
    DEFAULT_POPULATION_SIZE,
    DEFAULT_SWAP_FRACTION,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_TOURNAMENT_SIZE,
)
from culture_kernel.matrix import DistanceMatrix
from culture_kernel.metrics import partition_fitness

from .deterministic_rng import SeededStream
from .sizing import GroupSizing, slice_into_groups

logger = logging.getLogger(__name__)

Groups = Tuple[Tuple[str, ...], ...]


# ── Configuration ─────────────────────────────────────────────

@dataclass(frozen=True)
class SearchConfig:
    """Immutable genetic search parameters."""

    population_size: int = DEFAULT_POPULATION_SIZE
    generations: int = DEFAULT_GENERATIONS
    mutation_rate: float = DEFAULT_MUTATION_RATE
    elitism_rate: float = DEFAULT_ELITISM_RATE
    tournament_size: int = DEFAULT_TOURNAMENT_SIZE
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    swap_fraction: float = DEFAULT_SWAP_FRACTION

    def __post_init__(self) -> None:
        if self.population_size < 1:
            raise ValueError(f"population_size must be >= 1, got {self.population_size}")
        if self.generations < 0:
            raise ValueError(f"generations must be >= 0, got {self.generations}")
        if self.tournament_size < 1:
            raise ValueError(f"tournament_size must be >= 1, got {self.tournament_size}")
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {self.timeout_ms}")
        for name in ("mutation_rate", "elitism_rate", "swap_fraction"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

    @property
    def elite_count(self) -> int:
        return int(self.population_size * self.elitism_rate)

    def to_dict(self) -> dict:
        return {
            "population_size": self.population_size,
            "generations": self.generations,
            "mutation_rate": self.mutation_rate,
            "elitism_rate": self.elitism_rate,
            "tournament_size": self.tournament_size,
            "timeout_ms": self.timeout_ms,
            "swap_fraction": self.swap_fraction,
        }


# ── Search Values ─────────────────────────────────────────────

@dataclass(frozen=True)
class Chromosome:
    """A complete candidate partition and its fitness."""

    groups: Groups
    fitness: float


@dataclass(frozen=True)
class Population:
    """One generation of candidates. Never mutated after creation."""

    chromosomes: Tuple[Chromosome, ...]
    generation: int = 0

    def ranked(self) -> List[Chromosome]:
        """Fittest first. Stable, so equal fitness keeps creation order."""
        return sorted(self.chromosomes, key=lambda c: -c.fitness)

    def best(self) -> Chromosome:
        return self.ranked()[0]


@dataclass(frozen=True)
class SearchOutcome:
    best: Chromosome
    generations_run: int
    timed_out: bool
    elapsed_ms: float


# ── Public API ────────────────────────────────────────────────

def run_search(
    ids: Sequence[str],
    matrix: DistanceMatrix,
    sizing: GroupSizing,
    rng: SeededStream,
    config: SearchConfig | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> SearchOutcome:
    """
    Evolve partitions of ids. Timeout is not an error: the best candidate
    found so far is returned.
    """
    config = config or SearchConfig()
    ids = list(ids)
    if not ids:
        raise ValueError("Cannot search over an empty participant list")

    start = clock()
    population = initialize_population(ids, matrix, sizing, config, rng)
    timed_out = False

    for _ in range(config.generations):
        elapsed_ms = (clock() - start) * 1000.0
        if elapsed_ms > config.timeout_ms:
            logger.warning(
                "Genetic search timed out after %.0f ms at generation %d; "
                "using best solution so far",
                elapsed_ms, population.generation,
            )
            timed_out = True
            break
        population = next_generation(population, ids, matrix, sizing, config, rng)

    best = population.best()
    elapsed_ms = (clock() - start) * 1000.0
    logger.debug(
        "Genetic search finished: seed=%r generations=%d fitness=%.6f elapsed=%.1fms",
        rng.seed, population.generation, best.fitness, elapsed_ms,
    )
    return SearchOutcome(
        best=best,
        generations_run=population.generation,
        timed_out=timed_out,
        elapsed_ms=elapsed_ms,
    )


def evaluate(groups: Sequence[Sequence[str]], matrix: DistanceMatrix) -> Chromosome:
    """Freeze groups into a Chromosome with its fitness."""
    frozen = tuple(tuple(g) for g in groups)
    return Chromosome(groups=frozen, fitness=partition_fitness(frozen, matrix))


def random_partition(
    ids: Sequence[str],
    sizing: GroupSizing,
    rng: SeededStream,
) -> List[List[str]]:
    """Seeded shuffle, then slice per the size rule."""
    shuffled = list(ids)
    rng.shuffle(shuffled)
    return slice_into_groups(shuffled, sizing, rng)


def initialize_population(
    ids: Sequence[str],
    matrix: DistanceMatrix,
    sizing: GroupSizing,
    config: SearchConfig,
    rng: SeededStream,
) -> Population:
    chromosomes = tuple(
        evaluate(random_partition(ids, sizing, rng), matrix)
        for _ in range(config.population_size)
    )
    return Population(chromosomes=chromosomes, generation=0)


def next_generation(
    population: Population,
    ids: Sequence[str],
    matrix: DistanceMatrix,
    sizing: GroupSizing,
    config: SearchConfig,
    rng: SeededStream,
) -> Population:
    """Elites survive unchanged; the remainder is bred from the ranked pool."""
    ranked = population.ranked()
    offspring: List[Chromosome] = ranked[:config.elite_count]

    while len(offspring) < config.population_size:
        parent_a = tournament_select(ranked, rng, config.tournament_size)
        parent_b = tournament_select(ranked, rng, config.tournament_size)
        child = crossover(parent_a, parent_b, ids, sizing, config, rng)
        child = mutate(child, ids, sizing, config, rng)
        offspring.append(evaluate(child, matrix))

    return Population(chromosomes=tuple(offspring), generation=population.generation + 1)


def tournament_select(
    candidates: Sequence[Chromosome],
    rng: SeededStream,
    size: int = DEFAULT_TOURNAMENT_SIZE,
) -> Chromosome:
    """Sample `size` candidates with replacement; the fittest wins (first on ties)."""
    best = candidates[rng.rand_index(len(candidates))]
    for _ in range(size - 1):
        challenger = candidates[rng.rand_index(len(candidates))]
        if challenger.fitness > best.fitness:
            best = challenger
    return best


def crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    ids: Sequence[str],
    sizing: GroupSizing,
    config: SearchConfig,
    rng: SeededStream,
) -> List[List[str]]:
    """
    Child starts as a copy of parent A's groups. Participants that parent
    B groups with different partners are displaced (about swap_fraction of
    all participants); displaced participants are swapped into random
    groups, any still unplaced are assigned to random groups, then the
    result is repaired.
    """
    child = [list(g) for g in parent_a.groups]
    swap_count = max(1, math.floor(len(ids) * config.swap_fraction))

    mates_a = _partner_sets(parent_a.groups)
    mates_b = _partner_sets(parent_b.groups)
    differing = [pid for pid in ids if mates_a.get(pid) != mates_b.get(pid)]

    unassigned: List[str] = []
    for _ in range(swap_count):
        if not differing:
            break
        pid = differing.pop(rng.rand_index(len(differing)))
        for group in child:
            if pid in group:
                group.remove(pid)
                break
        unassigned.append(pid)

    child = [g for g in child if g]
    if not child:
        child = [[]]

    for _ in range(swap_count):
        if unassigned and rng.coin(0.5):
            pid = unassigned.pop(rng.rand_index(len(unassigned)))
            child[rng.rand_index(len(child))].append(pid)

    placed = {pid for g in child for pid in g}
    for pid in ids:
        if pid not in placed:
            child[rng.rand_index(len(child))].append(pid)
            placed.add(pid)

    return repair(child, ids, sizing, rng)


def mutate(
    groups: List[List[str]],
    ids: Sequence[str],
    sizing: GroupSizing,
    config: SearchConfig,
    rng: SeededStream,
) -> List[List[str]]:
    """
    With probability mutation_rate, move one random participant to a
    different random group, then repair.
    """
    if not rng.coin(config.mutation_rate):
        return groups

    mutated = [list(g) for g in groups]
    members = [pid for g in mutated for pid in g]
    if not members:
        return groups

    pid = rng.rand_choice(members)
    source = next(i for i, g in enumerate(mutated) if pid in g)
    if len(mutated) > 1:
        mutated[source].remove(pid)
        target = rng.rand_index(len(mutated))
        if target == source:
            target = (target + 1) % len(mutated)
        mutated[target].append(pid)

    return repair(mutated, ids, sizing, rng)


def repair(
    groups: Sequence[Sequence[str]],
    ids: Sequence[str],
    sizing: GroupSizing,
    rng: SeededStream,
) -> List[List[str]]:
    """
    Restore coverage, disjointness and size rules:
      1. drop ids that do not belong, and repeated occurrences
      2. add missing ids to random groups
      3. flatten and re-slice per the size rule
    """
    valid = set(ids)
    seen: set[str] = set()
    cleaned: List[List[str]] = []
    for group in groups:
        kept = []
        for pid in group:
            if pid in valid and pid not in seen:
                kept.append(pid)
                seen.add(pid)
        cleaned.append(kept)

    missing = [pid for pid in ids if pid not in seen]
    if missing and not cleaned:
        cleaned.append([])
    for pid in missing:
        cleaned[rng.rand_index(len(cleaned))].append(pid)

    flat = [pid for g in cleaned for pid in g]
    return slice_into_groups(flat, sizing, rng)


# ── Internals ────────────────────────────────────────────────

def _partner_sets(groups: Groups) -> Dict[str, FrozenSet[str]]:
    """participant → the set of its group mates."""
    mates: Dict[str, FrozenSet[str]] = {}
    for group in groups:
        members = frozenset(group)
        for pid in group:
            mates[pid] = members - {pid}
    return mates
