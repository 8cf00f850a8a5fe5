"""Result type of an NSGA-II run.

NSGA2Result wraps the final population together with its Pareto ranks and
crowding distances and the run's bookkeeping counters. It is a frozen
dataclass and copies its arrays on construction, so a result handed to a
callback cannot be used to alter the running optimizer.
"""

from dataclasses import dataclass

import numpy as np

from nsga_kit.population import Population


@dataclass(frozen=True)
class NSGA2Result:
    """Results from NSGA-II multi-objective optimization.

    Attributes:
        population: The final population (flattened candidates and objectives).
        rank: Pareto rank for each candidate, shape (n,). Rank 0 marks the
            non-dominated candidates.
        crowding_distance: Crowding distance for each candidate, shape (n,).
            Candidates at the extremes of their front have infinite distance.
        generations: Number of generations completed.
        evaluations: Total number of candidate evaluations (each evaluation
            calls every objective once).
        candidate_shape: Shape of a candidate as the objectives see it, i.e.
            the shape of the starting point. Defaults to the flat shape.

    Example:
        >>> x = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        >>> obj = np.array([[0.5, 0.5], [0.3, 0.7], [0.6, 0.6]])
        >>> result = NSGA2Result(
        ...     population=Population(x=x, objectives=obj),
        ...     rank=np.array([0, 0, 1]),
        ...     crowding_distance=np.array([np.inf, np.inf, np.inf]),
        ...     generations=10,
        ...     evaluations=33,
        ... )
        >>> len(result.pareto_front)
        2
    """

    population: Population
    rank: np.ndarray
    crowding_distance: np.ndarray
    generations: int
    evaluations: int
    candidate_shape: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        """Validate shapes and copy the population and arrays for immutability.

        Raises:
            TypeError: If rank or crowding_distance are not numpy arrays.
            ValueError: If array shapes are inconsistent.
        """
        population = self.population
        object.__setattr__(
            self,
            "population",
            Population(
                x=population.x,
                objectives=population.objectives,
                rank=population.rank,
                crowding_distance=population.crowding_distance,
            ),
        )
        n = len(self.population)

        for name in ("rank", "crowding_distance"):
            value = getattr(self, name)
            if not isinstance(value, np.ndarray):
                raise TypeError(f"{name} must be a numpy array, got {type(value).__name__}")
            if value.ndim != 1:
                raise ValueError(f"{name} must be 1D, got shape {value.shape}")
            if value.shape[0] != n:
                raise ValueError(f"{name} has {value.shape[0]} elements, expected {n} to match population size")
            object.__setattr__(self, name, value.copy())

        if self.candidate_shape is None:
            object.__setattr__(self, "candidate_shape", (self.population.n_vars,))
        elif int(np.prod(self.candidate_shape)) != self.population.n_vars:
            raise ValueError(
                f"candidate_shape {self.candidate_shape} does not hold {self.population.n_vars} variables"
            )

    @property
    def pareto_front(self) -> Population:
        """The rank-0 candidates as a new Population.

        Candidates are ordered lexicographically by their objective values
        (first objective ascending, ties broken by the next objective).
        """
        front_idx = np.flatnonzero(self.rank == 0)
        objectives = self.population.objectives
        if objectives is not None and len(front_idx) > 0:
            # np.lexsort treats the last key as primary
            order = np.lexsort(objectives[front_idx].T[::-1])
            front_idx = front_idx[order]
        return self.population.take(front_idx)

    @property
    def pareto_set(self) -> list[np.ndarray]:
        """The rank-0 candidates, each reshaped to the starting point's shape."""
        return [row.reshape(self.candidate_shape) for row in self.pareto_front.x]

    @property
    def pareto_objectives(self) -> np.ndarray:
        """Objective vectors of the rank-0 candidates, shape (n_front, n_obj).

        Rows are aligned with :attr:`pareto_set`.

        Raises:
            ValueError: If the population was never evaluated.
        """
        front = self.pareto_front
        if front.objectives is None:
            raise ValueError("Population has no objectives")
        return front.objectives
