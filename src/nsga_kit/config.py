"""Configuration for the NSGA-II optimizer.

NSGA2Config gathers every tunable parameter of a run in one dataclass. Fields
may be reassigned freely between runs; the optimizer takes a snapshot at the
start of each run, so changes made while a run is in progress do not affect it.

Example:
    >>> config = NSGA2Config(population_size=40, max_generations=100)
    >>> config.mutation_strength = 0.05
    >>> config.validate()
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

import numpy as np

Bound = float | np.ndarray
"""A scalar bound applied to every variable, or an array matching the candidate shape."""


@dataclass
class NSGA2Config:
    """Parameters of an NSGA-II run.

    The default values are not necessarily suitable for a given problem; they
    are a starting point and should be tuned.

    Attributes:
        population_size: Number of candidates kept each generation. Must be at
            least 4 and a multiple of 4.
        max_generations: Number of generations to run.
        crossover_prob: Probability that two parents are recombined.
        mutation_prob: Per-coordinate probability of mutation.
        mutation_strength: Scale of the gaussian mutation noise.
        epsilon: Tolerance under which objective values count as equal when
            checking dominance.
        lower_bound: Lower box bound of the decision space.
        upper_bound: Upper box bound of the decision space.
        crossover: Name of a registered crossover operator.
        crossover_eta: Distribution index for SBX crossover.
        mutation: Name of a registered mutation operator.
        mutation_eta: Distribution index for polynomial mutation.
        n_workers: Parallel workers for objective evaluation. 1 is sequential,
            -1 uses every core.
    """

    population_size: int = 100
    max_generations: int = 2000
    crossover_prob: float = 0.6
    mutation_prob: float = 0.3
    mutation_strength: float = 1e-3
    epsilon: float = 1e-6
    lower_bound: Bound = -np.inf
    upper_bound: Bound = np.inf
    crossover: str = "sbx"
    crossover_eta: float = 15.0
    mutation: str = "gaussian"
    mutation_eta: float = 20.0
    n_workers: int = 1

    def validate(self) -> None:
        """Check every parameter, raising on the first invalid one.

        Raises:
            TypeError: If a count parameter is not an integer.
            ValueError: If any parameter is outside its valid range.
        """
        for name in ("population_size", "max_generations", "n_workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
        if self.population_size < 4 or self.population_size % 4 != 0:
            raise ValueError(f"population_size must be at least 4 and a multiple of 4, got {self.population_size}")
        if self.max_generations < 0:
            raise ValueError(f"max_generations must be non-negative, got {self.max_generations}")
        for name in ("crossover_prob", "mutation_prob"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.mutation_strength < 0:
            raise ValueError(f"mutation_strength must be non-negative, got {self.mutation_strength}")
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}")
        if self.crossover_eta < 0:
            raise ValueError(f"crossover_eta must be non-negative, got {self.crossover_eta}")
        if self.mutation_eta < 0:
            raise ValueError(f"mutation_eta must be non-negative, got {self.mutation_eta}")
        if np.any(np.asarray(self.lower_bound) > np.asarray(self.upper_bound)):
            raise ValueError(f"lower_bound must not exceed upper_bound, got {self.lower_bound} > {self.upper_bound}")
        if self.n_workers < 1 and self.n_workers != -1:
            raise ValueError(f"n_workers must be positive or -1 (all cores), got {self.n_workers}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NSGA2Config:
        """Build a configuration from a mapping, e.g. a parsed config file.

        Raises:
            ValueError: If the mapping contains keys that are not configuration fields.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration fields: {', '.join(unknown)}")
        return cls(**data)
