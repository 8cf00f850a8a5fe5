"""NSGA-II primitives for Pareto-based ranking and diversity.

This module provides the core pure functions for NSGA-II:
- dominates: scalar Pareto dominance check with a tie tolerance
- dominates_matrix: vectorized pairwise dominance
- fast_non_dominated_sort: Deb's fast non-dominated sorting, fronts and ranks
- non_dominated_sort: ranks-only form of the above
- crowding_distance: diversity metric for solutions in a Pareto front
- assign_crowding_distance: crowding distance for every front of a population

Rows containing NaN or infinite objective values are treated as the worst
possible solutions: they never dominate and are dominated by every finite row.
"""

import numpy as np


def _is_finite_row(objectives: np.ndarray) -> np.ndarray:
    return np.all(np.isfinite(objectives), axis=-1)


def dominates(a: np.ndarray, b: np.ndarray, epsilon: float = 0.0) -> bool:
    """Check if solution a Pareto-dominates solution b (minimization).

    A solution a dominates b if and only if:
      - a[i] <= b[i] + epsilon for ALL objectives (a is no worse anywhere)
      - a[i] < b[i] - epsilon for AT LEAST ONE objective (a is strictly
        better somewhere, beyond the tolerance)

    Values closer than ``epsilon`` are treated as equal.

    Args:
        a: Objective values for solution a. Shape (n_obj,).
        b: Objective values for solution b. Shape (n_obj,).
        epsilon: Non-negative tie tolerance. Default 0.0 (exact comparison).

    Returns:
        True if a dominates b, False otherwise.

    Examples:
        >>> dominates(np.array([1.0, 2.0]), np.array([2.0, 3.0]))
        True
        >>> dominates(np.array([1.0, 2.0]), np.array([1.0 + 1e-9, 2.0]), epsilon=1e-6)
        False
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if not _is_finite_row(a):
        return False
    if not _is_finite_row(b):
        return True
    return bool(np.all(a <= b + epsilon) and np.any(a < b - epsilon))


def dominates_matrix(objectives: np.ndarray, epsilon: float = 0.0) -> np.ndarray:
    """Compute pairwise dominance for all individuals (vectorized).

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        epsilon: Non-negative tie tolerance, see :func:`dominates`.

    Returns:
        Boolean array of shape (n, n) where result[i, j] = True iff
        individual i dominates individual j.

    Examples:
        >>> objs = np.array([[1.0, 1.0], [2.0, 2.0], [1.0, 2.0]])
        >>> dom = dominates_matrix(objs)
        >>> dom[0, 1]
        True
        >>> dom[1, 2]
        False
    """
    a = objectives[:, np.newaxis, :]  # (n, 1, n_obj)
    b = objectives[np.newaxis, :, :]  # (1, n, n_obj)

    no_worse = np.all(a <= b + epsilon, axis=2)
    strictly_better = np.any(a < b - epsilon, axis=2)
    dom = no_worse & strictly_better

    finite = _is_finite_row(objectives)
    if not np.all(finite):
        # Non-finite rows lose against everything finite and beat nothing
        dom[~finite, :] = False
        dom[np.ix_(finite, ~finite)] = True

    return dom


def fast_non_dominated_sort(
    objectives: np.ndarray, epsilon: float = 0.0
) -> tuple[list[np.ndarray], np.ndarray]:
    """Partition individuals into Pareto fronts using Deb's fast algorithm.

    Every individual p gets a domination count (how many individuals dominate
    it) and a dominated set (the individuals it dominates). Front 0 holds all
    individuals with a zero count. Each following front is built by walking the
    dominated sets of the current front, decrementing counts, and collecting
    the individuals whose count drops to zero.

    Time complexity: O(M * N^2) where M = number of objectives, N = population size.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        epsilon: Non-negative tie tolerance used for dominance checks.

    Returns:
        Tuple of (fronts, ranks) where fronts is a list of integer index arrays
        ordered from best (front 0) to worst, and ranks is an integer array of
        shape (n,) with ranks[i] equal to the index of the front holding i.

    Examples:
        >>> objs = np.array([[1.0, 1.0], [2.0, 2.0], [1.0, 3.0]])
        >>> fronts, ranks = fast_non_dominated_sort(objs)
        >>> [f.tolist() for f in fronts]
        [[0], [1, 2]]
        >>> ranks
        array([0, 1, 1])
    """
    n = objectives.shape[0]

    if n == 0:
        return [], np.array([], dtype=np.int64)

    dom_matrix = dominates_matrix(objectives, epsilon)

    domination_count = dom_matrix.sum(axis=0).astype(np.int64)
    dominated_sets = [np.flatnonzero(dom_matrix[p]) for p in range(n)]

    ranks = np.full(n, -1, dtype=np.int64)
    fronts: list[np.ndarray] = []

    current = np.flatnonzero(domination_count == 0)
    while len(current) > 0:
        ranks[current] = len(fronts)
        fronts.append(current)

        next_front: list[int] = []
        for p in current:
            dominated = dominated_sets[p]
            domination_count[dominated] -= 1
            next_front.extend(dominated[domination_count[dominated] == 0].tolist())

        current = np.array(sorted(next_front), dtype=np.intp)

    unassigned = np.flatnonzero(ranks < 0)
    if len(unassigned) > 0:
        # A tolerance larger than the objective steps can make dominance
        # cyclic; whatever is left shares the last rank.
        ranks[unassigned] = len(fronts)
        fronts.append(unassigned)

    return fronts, ranks


def non_dominated_sort(objectives: np.ndarray, epsilon: float = 0.0) -> np.ndarray:
    """Assign each individual to a Pareto front, returning ranks only.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        epsilon: Non-negative tie tolerance used for dominance checks.

    Returns:
        Integer array of shape (n,) where rank[i] is the front index for
        individual i. Rank 0 = Pareto optimal (first front).

    Examples:
        >>> objs = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        >>> non_dominated_sort(objs)
        array([0, 1, 2])
    """
    _, ranks = fast_non_dominated_sort(objectives, epsilon)
    return ranks


def crowding_distance(front_objectives: np.ndarray) -> np.ndarray:
    """Compute crowding distance for individuals in a single Pareto front.

    Crowding distance measures how isolated a solution is in objective space.
    Higher values indicate more isolated solutions (preferred for diversity).

    Boundary solutions (with min/max values for any objective) receive
    infinite distance. Interior solutions receive the sum of normalized
    neighbor distances across all objectives. An objective with zero spread
    over the front contributes nothing. Rows with non-finite values get a
    distance of zero and are left out of the computation for the others.

    Args:
        front_objectives: Objective values for individuals in ONE front only.
            Shape (n_front, n_obj).

    Returns:
        Array of shape (n_front,) containing crowding distances.

    Examples:
        >>> objs = np.array([[0.0, 10.0], [5.0, 5.0], [10.0, 0.0]])
        >>> crowding_distance(objs)
        array([inf,  2., inf])
    """
    n_front = front_objectives.shape[0]

    if n_front == 0:
        return np.array([], dtype=np.float64)

    finite = _is_finite_row(front_objectives)
    if not np.all(finite):
        distances = np.zeros(n_front, dtype=np.float64)
        distances[finite] = crowding_distance(front_objectives[finite])
        return distances

    if n_front <= 2:
        # Every member is both a minimum and a maximum
        return np.full(n_front, np.inf)

    n_obj = front_objectives.shape[1]
    distances = np.zeros(n_front, dtype=np.float64)

    for m in range(n_obj):
        values = front_objectives[:, m]
        order = np.argsort(values, kind="stable")

        distances[order[0]] = np.inf
        distances[order[-1]] = np.inf

        obj_range = values[order[-1]] - values[order[0]]
        if obj_range > 0:
            gaps = values[order[2:]] - values[order[:-2]]
            distances[order[1:-1]] += gaps / obj_range

    return distances


def assign_crowding_distance(objectives: np.ndarray, fronts: list[np.ndarray]) -> np.ndarray:
    """Compute crowding distance for every individual, front by front.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        fronts: Index arrays as returned by :func:`fast_non_dominated_sort`.

    Returns:
        Array of shape (n,) with each individual's distance within its own front.
    """
    cd = np.zeros(len(objectives), dtype=np.float64)
    for front in fronts:
        cd[front] = crowding_distance(objectives[front])
    return cd
