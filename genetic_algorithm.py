"""
Genetic Algorithm Solver for the fixed-endpoint shortest path problem.
Truncation selection, ordered crossover with repair and swap mutation.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

import numpy as np

from path_core import DistanceMatrix, InvalidConfigurationError, Path, validate_endpoints

logger = logging.getLogger(__name__)

DEFAULT_POPULATION_SIZE = 100
DEFAULT_GENERATIONS = 500
DEFAULT_MUTATION_RATE = 0.1


class GAState(Enum):
    INITIALIZED = "initialized"
    EVALUATING = "evaluating"
    TRACKING_BEST = "tracking_best"
    SELECTING = "selecting"
    RECOMBINING = "recombining"
    MUTATING = "mutating"
    TERMINATED = "terminated"


@dataclass
class GAResult:
    """Outcome of a full run."""
    best_path: Path
    best_length: float
    history: List[float] = field(default_factory=list)
    elapsed: float = 0.0


class Population:
    """Represents a population of candidate paths."""

    def __init__(self, population_size: int, distance_matrix: DistanceMatrix, rng: random.Random):
        self.population_size = population_size
        self.distance_matrix = distance_matrix
        self.rng = rng
        self.paths: List[Path] = []

    def _shuffle(self, buffer: List[int]):
        # Fisher-Yates over the fixed-size buffer
        for i in range(len(buffer) - 1, 0, -1):
            j = self.rng.randint(0, i)
            buffer[i], buffer[j] = buffer[j], buffer[i]

    def initialize(self, start_node: int, end_node: int):
        """Initialize population with random paths from start_node to end_node."""
        intermediates = [
            city for city in range(self.distance_matrix.city_count)
            if city != start_node and city != end_node
        ]

        self.paths = []
        for _ in range(self.population_size):
            buffer = intermediates.copy()
            self._shuffle(buffer)
            self.paths.append(Path([start_node] + buffer + [end_node], self.distance_matrix))

    def get_fittest(self) -> Path:
        return min(self.paths, key=lambda path: path.get_total_distance())

    def get_average_distance(self) -> float:
        return float(np.mean([p.get_total_distance() for p in self.paths]))

    def __len__(self):
        return len(self.paths)


class ShortestPathGA:
    """
    Genetic Algorithm searching for a short path that visits every node once,
    starting at a fixed start node and ending at a fixed end node.

    All randomness is drawn from `rng` (or a `random.Random(seed)`), so two
    solvers built with the same seed produce identical runs.
    """

    def __init__(
        self,
        distance_matrix,
        population_size: int = DEFAULT_POPULATION_SIZE,
        generations: int = DEFAULT_GENERATIONS,
        mutation_rate: float = DEFAULT_MUTATION_RATE,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None
    ):
        if not isinstance(distance_matrix, DistanceMatrix):
            distance_matrix = DistanceMatrix(distance_matrix)

        self.distance_matrix = distance_matrix
        self.city_count = distance_matrix.city_count
        self.population_size = population_size
        self.generations = generations
        self.mutation_rate = mutation_rate
        self.rng = rng if rng is not None else random.Random(seed)

        self._validate_parameters()

        # GA state
        self.state = GAState.INITIALIZED
        self.population: Optional[Population] = None
        self.generation = 0
        self.best_path: Optional[Path] = None
        self.best_length = float("inf")
        self.best_distance_history: List[float] = []
        self.start_node: Optional[int] = None
        self.end_node: Optional[int] = None

    def _validate_parameters(self):
        if isinstance(self.population_size, bool) or not isinstance(self.population_size, int):
            raise InvalidConfigurationError(
                f"population_size must be an integer, got {self.population_size!r}"
            )
        if self.population_size < 2:
            raise InvalidConfigurationError(
                f"population_size must be at least 2 so the breeding pool is not empty, "
                f"got {self.population_size}"
            )
        if isinstance(self.generations, bool) or not isinstance(self.generations, int):
            raise InvalidConfigurationError(
                f"generations must be an integer, got {self.generations!r}"
            )
        if self.generations < 1:
            raise InvalidConfigurationError(
                f"generations must be at least 1, got {self.generations}"
            )
        if isinstance(self.mutation_rate, bool) or not isinstance(self.mutation_rate, (int, float)) \
                or not 0.0 <= self.mutation_rate <= 1.0:
            raise InvalidConfigurationError(
                f"mutation_rate must be within [0, 1], got {self.mutation_rate!r}"
            )

    # ---------------------------------------
    # Initialization
    # ---------------------------------------

    def initialize_population(self, start_node: int, end_node: int) -> List[Path]:
        self.population = Population(self.population_size, self.distance_matrix, self.rng)
        self.population.initialize(start_node, end_node)
        return self.population.paths

    def initialize(self, start_node: int, end_node: int):
        """Validate endpoints and build generation 0."""
        validate_endpoints(self.city_count, start_node, end_node)

        self.initialize_population(start_node, end_node)
        self.start_node = start_node
        self.end_node = end_node
        self.generation = 0
        self.best_path = None
        self.best_length = float("inf")
        self.best_distance_history = []
        self.state = GAState.INITIALIZED

    # ---------------------------------------
    # Genetic operators
    # ---------------------------------------

    def evaluate_population(self, paths: List[Path]) -> List[Tuple[Path, float]]:
        """Pair every path with its freshly computed length, in population order."""
        evaluated = []
        for path in paths:
            path.invalidate_cache()
            evaluated.append((path, path.get_total_distance()))
        return evaluated

    def select_population(self, evaluated: List[Tuple[Path, float]]) -> List[Path]:
        """Truncation selection: keep the population_size // 2 shortest paths."""
        selection_count = self.population_size // 2
        ranked = sorted(evaluated, key=lambda pair: pair[1])
        return [path.clone() for path, _ in ranked[:selection_count]]

    def ordered_crossover(self, parent1: Path, parent2: Path, start_node: int, end_node: int) -> Path:
        """
        Single-point ordered crossover with repair.

        The child keeps parent1's prefix up to the cut point, then takes the
        remaining nodes in parent2's order. Nodes already in the child and the
        end node are skipped during that walk, and the end node is appended
        last, so the child is always a valid permutation.
        """
        size = len(parent1)
        cut = self.rng.randint(1, size - 3) if size >= 4 else 1

        child = parent1.nodes[:cut]
        seen = set(child)
        for city in parent2.nodes:
            if city in seen or city == end_node:
                continue
            child.append(city)
            seen.add(city)
        child.append(end_node)

        return Path(child, self.distance_matrix)

    def crossover_population(self, selected: List[Path], start_node: int, end_node: int) -> List[Path]:
        """Breed a full population_size set of children from the selected pool."""
        if not selected:
            raise InvalidConfigurationError("Cannot recombine an empty breeding pool")

        offspring = []
        while len(offspring) < self.population_size:
            parent1 = selected[self.rng.randrange(len(selected))]
            parent2 = selected[self.rng.randrange(len(selected))]
            offspring.append(self.ordered_crossover(parent1, parent2, start_node, end_node))
        return offspring

    def swap_mutation(self, path: Path):
        """Swap two distinct interior positions of `path` in place."""
        interior = range(1, len(path) - 1)
        if len(interior) < 2:
            return
        i, j = self.rng.sample(interior, 2)
        path.swap(i, j)

    def mutate_population(self, paths: List[Path]):
        for path in paths:
            if self.rng.random() < self.mutation_rate:
                self.swap_mutation(path)

    # ---------------------------------------
    # Single generation evolution
    # ---------------------------------------

    def _track_best(self, evaluated: List[Tuple[Path, float]]):
        path, length = min(evaluated, key=lambda pair: pair[1])
        if length < self.best_length:
            logger.debug(
                "Generation %d improved best length %.4f -> %.4f",
                self.generation + 1, self.best_length, length
            )
            self.best_length = length
            self.best_path = path.clone()

    def evolve_generation(self, start_node: int, end_node: int) -> float:
        """Run one evaluate/select/recombine/mutate pass. Returns the best-so-far length."""
        if self.population is None:
            self.initialize(start_node, end_node)
        elif (start_node, end_node) != (self.start_node, self.end_node):
            logger.info(
                "Endpoints changed from %s -> %s to %s -> %s, starting a new population",
                self.start_node, self.end_node, start_node, end_node
            )
            self.initialize(start_node, end_node)

        self.state = GAState.EVALUATING
        evaluated = self.evaluate_population(self.population.paths)

        self.state = GAState.TRACKING_BEST
        self._track_best(evaluated)

        self.state = GAState.SELECTING
        selected = self.select_population(evaluated)

        self.state = GAState.RECOMBINING
        offspring = self.crossover_population(selected, start_node, end_node)

        self.state = GAState.MUTATING
        self.mutate_population(offspring)

        self.population.paths = offspring
        self.generation += 1
        self.best_distance_history.append(self.best_length)
        return self.best_length

    # ---------------------------------------
    # Solve function
    # ---------------------------------------

    def solve(
        self,
        start_node: int,
        end_node: int,
        callback: Optional[Callable[[int, float], None]] = None
    ) -> GAResult:
        """
        Run the full generation budget and return the best path seen in any generation.

        Args:
            start_node: First node of every path
            end_node: Last node of every path
            callback: Called as callback(generation, best_length) after each generation

        Returns:
            GAResult with the best path, its length and the per-generation
            best-so-far history
        """
        self.initialize(start_node, end_node)

        logger.info(
            "Starting GA: %d cities, population=%d, generations=%d, mutation_rate=%.3f",
            self.city_count, self.population_size, self.generations, self.mutation_rate
        )
        start = time.time()

        for _ in range(self.generations):
            best_length = self.evolve_generation(start_node, end_node)
            if callback:
                callback(self.generation, best_length)

        self.state = GAState.TERMINATED
        elapsed = time.time() - start
        logger.info("GA finished in %.3fs, best length %.4f", elapsed, self.best_length)

        return GAResult(
            best_path=self.best_path.clone(),
            best_length=self.best_length,
            history=list(self.best_distance_history),
            elapsed=elapsed
        )

    def get_best_path(self) -> Optional[Path]:
        return self.best_path.clone() if self.best_path else None
