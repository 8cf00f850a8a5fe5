"""Crowded comparison and binary tournament selection.

The crowding operator is the single comparison key of NSGA-II: a lower Pareto
rank wins, and within a rank the larger crowding distance (the more isolated
candidate) wins. Tournament selection and survivor truncation both use it.
"""

import numpy as np


def crowding_operator(p: int, q: int, rank: np.ndarray, crowding_distance: np.ndarray) -> bool:
    """Return True if candidate p is preferred over candidate q.

    Args:
        p: Index of the first candidate.
        q: Index of the second candidate.
        rank: Pareto front ranks for all candidates. Shape (n,).
        crowding_distance: Crowding distances for all candidates. Shape (n,).

    Returns:
        True if p has a lower rank, or the same rank and a strictly larger
        crowding distance. False otherwise, including exact ties.

    Example:
        >>> rank = np.array([0, 0, 1])
        >>> cd = np.array([np.inf, 0.5, np.inf])
        >>> crowding_operator(1, 2, rank, cd)
        True
        >>> crowding_operator(1, 0, rank, cd)
        False
    """
    if rank[p] != rank[q]:
        return bool(rank[p] < rank[q])
    return bool(crowding_distance[p] > crowding_distance[q])


def crowded_order(rank: np.ndarray, crowding_distance: np.ndarray) -> np.ndarray:
    """Sort candidate indices from most to least preferred.

    Sorting is lexicographic on (rank ascending, crowding distance descending),
    the total order induced by :func:`crowding_operator`. Ties keep their
    original index order.

    Args:
        rank: Pareto front ranks. Shape (n,).
        crowding_distance: Crowding distances. Shape (n,).

    Returns:
        Index array of shape (n,), best candidate first.
    """
    # np.lexsort uses the last key as the primary one
    return np.lexsort((-crowding_distance, rank))


def binary_tournament(
    n_parents: int,
    rng: np.random.Generator,
    rank: np.ndarray,
    crowding_distance: np.ndarray,
) -> np.ndarray:
    """Select parents by binary tournament using the crowding operator.

    Each tournament draws two candidates uniformly at random (with
    replacement, so a candidate may face itself) and keeps the preferred one.
    On a tie the first drawn candidate wins.

    Args:
        n_parents: Number of parents to select.
        rng: Random number generator for reproducibility.
        rank: Pareto front ranks for all candidates. Shape (n,).
        crowding_distance: Crowding distances for all candidates. Shape (n,).

    Returns:
        Array of shape (n_parents,) containing indices into the population.

    Example:
        >>> rng = np.random.default_rng(42)
        >>> parents = binary_tournament(8, rng, np.zeros(4, dtype=int), np.ones(4))
        >>> parents.shape
        (8,)
    """
    n = len(rank)
    if n == 0:
        raise ValueError("Cannot run a tournament on an empty population")

    candidates = rng.integers(0, n, size=(n_parents, 2))
    first, second = candidates[:, 0], candidates[:, 1]

    second_wins = (rank[second] < rank[first]) | (
        (rank[second] == rank[first]) & (crowding_distance[second] > crowding_distance[first])
    )

    return np.where(second_wins, second, first).astype(np.intp)
