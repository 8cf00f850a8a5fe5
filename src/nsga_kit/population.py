"""Population data structures for NSGA-II optimization.

A population stores its candidates in a struct-of-arrays layout:

- Population: decision vectors plus their cached objective matrix and,
  once sorted, their Pareto ranks and crowding distances
- IndividualView: a read-only view of a single candidate

Candidates are stored flattened, one row per candidate, whatever the shape of
the starting point; the optimizer reshapes them at the objective boundary.
Both classes are frozen dataclasses and every array is copied on construction,
so a population never changes once built. New generations are new objects.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class IndividualView:
    """Read-only view of a single candidate in a population.

    Attributes:
        x: Flattened decision vector, shape (n_vars,).
        objectives: Objective values, shape (n_obj,), or None if not evaluated.
        rank: Pareto front rank (0 = first front), or None if not sorted.
        crowding_distance: Crowding distance, or None if not computed.

    Example:
        >>> pop = Population(x=np.array([[1.0, 2.0], [3.0, 4.0]]))
        >>> pop[1].x
        array([3., 4.])
    """

    x: np.ndarray
    objectives: np.ndarray | None
    rank: int | None
    crowding_distance: float | None


def _checked_copy(name: str, value: np.ndarray, ndim: int, n: int) -> np.ndarray:
    if not isinstance(value, np.ndarray):
        raise TypeError(f"{name} must be a numpy array, got {type(value).__name__}")
    if value.ndim != ndim:
        raise ValueError(f"{name} must be {ndim}D, got shape {value.shape}")
    if value.shape[0] != n:
        raise ValueError(f"{name} has {value.shape[0]} individuals, expected {n} to match x")
    return value.copy()


@dataclass(frozen=True)
class Population:
    """Immutable struct-of-arrays representation of a set of candidates.

    Attributes:
        x: Flattened decision vectors, shape (n, n_vars).
        objectives: Objective matrix, shape (n, n_obj), or None if not evaluated.
        rank: Pareto front ranks, shape (n,), or None if not sorted.
        crowding_distance: Crowding distances, shape (n,), or None if not computed.

    Example:
        >>> x = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        >>> obj = np.array([[0.5, 0.5], [0.3, 0.7], [0.4, 0.6]])
        >>> pop = Population(x=x, objectives=obj)
        >>> len(pop), pop.n_vars, pop.n_obj
        (3, 2, 2)
    """

    x: np.ndarray
    objectives: np.ndarray | None = None
    rank: np.ndarray | None = None
    crowding_distance: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays so the population cannot change.

        Raises:
            TypeError: If any array argument is not a numpy array.
            ValueError: If array shapes or dtypes are inconsistent.
        """
        if not isinstance(self.x, np.ndarray):
            raise TypeError(f"x must be a numpy array, got {type(self.x).__name__}")
        if self.x.ndim != 2:
            raise ValueError(f"x must be 2D, got shape {self.x.shape}")

        n = self.x.shape[0]
        object.__setattr__(self, "x", self.x.copy())

        if self.objectives is not None:
            object.__setattr__(self, "objectives", _checked_copy("objectives", self.objectives, 2, n))

        if self.rank is not None:
            rank = _checked_copy("rank", self.rank, 1, n)
            if not np.issubdtype(rank.dtype, np.integer):
                raise ValueError(f"rank must have integer dtype, got {rank.dtype}")
            object.__setattr__(self, "rank", rank)

        if self.crowding_distance is not None:
            cd = _checked_copy("crowding_distance", self.crowding_distance, 1, n)
            if not np.issubdtype(cd.dtype, np.floating):
                raise ValueError(f"crowding_distance must have float dtype, got {cd.dtype}")
            object.__setattr__(self, "crowding_distance", cd)

    def __len__(self) -> int:
        return self.x.shape[0]

    def __getitem__(self, idx: int) -> IndividualView:
        """Get a read-only view of a single candidate.

        Args:
            idx: Index of the candidate (supports negative indexing).

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        original_idx = idx
        if idx < 0:
            idx = n + idx
        if idx < 0 or idx >= n:
            raise IndexError(f"index {original_idx} is out of bounds for population with {n} individuals")

        return IndividualView(
            x=self.x[idx],
            objectives=self.objectives[idx] if self.objectives is not None else None,
            rank=int(self.rank[idx]) if self.rank is not None else None,
            crowding_distance=float(self.crowding_distance[idx]) if self.crowding_distance is not None else None,
        )

    @property
    def n_vars(self) -> int:
        """Number of decision variables per candidate."""
        return self.x.shape[1]

    @property
    def n_obj(self) -> int | None:
        """Number of objectives, or None if the population is not evaluated."""
        if self.objectives is None:
            return None
        return self.objectives.shape[1]

    def take(
        self,
        indices: np.ndarray,
        rank: np.ndarray | None = None,
        crowding_distance: np.ndarray | None = None,
    ) -> Population:
        """Return a new population holding the candidates at ``indices``.

        Ranks and crowding distances of this population are dropped, since
        they are only meaningful for the set they were computed on. Pass the
        values computed for the selected set, e.g. the state returned by
        ``nsga2_survival``, to attach them instead.

        Args:
            indices: Integer index array into this population.
            rank: Pareto ranks of the selected candidates, aligned with ``indices``.
            crowding_distance: Crowding distances of the selected candidates.

        Returns:
            A new Population with x and objectives selected.
        """
        return Population(
            x=self.x[indices],
            objectives=self.objectives[indices] if self.objectives is not None else None,
            rank=rank,
            crowding_distance=crowding_distance,
        )

    def combine(self, other: Population) -> Population:
        """Concatenate two evaluated populations (e.g. parents and offspring).

        Args:
            other: Population with the same number of variables and objectives.

        Returns:
            A new, unsorted Population with the candidates of ``self`` first.

        Raises:
            ValueError: If either population is not evaluated or the shapes differ.
        """
        if self.objectives is None or other.objectives is None:
            raise ValueError("Both populations must have objectives computed to be combined")
        if self.n_vars != other.n_vars:
            raise ValueError(f"Cannot combine populations with {self.n_vars} and {other.n_vars} variables")
        if self.n_obj != other.n_obj:
            raise ValueError(f"Cannot combine populations with {self.n_obj} and {other.n_obj} objectives")
        return Population(
            x=np.concatenate([self.x, other.x]),
            objectives=np.concatenate([self.objectives, other.objectives]),
        )
