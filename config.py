"""
Run configuration: GA parameters plus optional problem inputs.
"""

import json
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from genetic_algorithm import DEFAULT_GENERATIONS, DEFAULT_MUTATION_RATE, DEFAULT_POPULATION_SIZE
from path_core import InvalidConfigurationError


@dataclass
class GAConfig:
    """GA configuration parameters"""
    population_size: int = DEFAULT_POPULATION_SIZE
    generations: int = DEFAULT_GENERATIONS
    mutation_rate: float = DEFAULT_MUTATION_RATE
    seed: Optional[int] = None
    start_node: Optional[int] = None
    end_node: Optional[int] = None
    matrix_file: Optional[str] = None

    def validate(self):
        """Raise InvalidConfigurationError for out-of-range parameters."""
        if isinstance(self.population_size, bool) or not isinstance(self.population_size, int) or self.population_size < 2:
            raise InvalidConfigurationError(
                f"population_size must be an integer >= 2, got {self.population_size!r}"
            )
        if isinstance(self.generations, bool) or not isinstance(self.generations, int) or self.generations < 1:
            raise InvalidConfigurationError(
                f"generations must be an integer >= 1, got {self.generations!r}"
            )
        if isinstance(self.mutation_rate, bool) or not isinstance(self.mutation_rate, (int, float)) \
                or not 0.0 <= self.mutation_rate <= 1.0:
            raise InvalidConfigurationError(
                f"mutation_rate must be within [0, 1], got {self.mutation_rate!r}"
            )
        return self

    def merged(self, **overrides) -> 'GAConfig':
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def solver_kwargs(self) -> dict:
        return {
            "population_size": self.population_size,
            "generations": self.generations,
            "mutation_rate": self.mutation_rate,
            "seed": self.seed,
        }


def load_config(path) -> GAConfig:
    """Load a GAConfig from a JSON object; unknown keys are rejected."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfigurationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Config in {path} must be a JSON object")

    known = {f.name for f in fields(GAConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidConfigurationError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    return GAConfig(**data).validate()
