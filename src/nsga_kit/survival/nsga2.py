"""NSGA-II survivor selection.

Survival takes the combined parent + offspring population and keeps exactly
``n_survivors`` of them. Whole fronts are admitted in rank order while they
fit; the first front that would overflow is sorted with the crowding operator
and cut to fill the remaining slots. The best fronts therefore always survive
intact (elitism), and the cut prefers isolated candidates (diversity).
"""

import numpy as np

from nsga_kit.population import Population
from nsga_kit.primitives import assign_crowding_distance, crowding_distance, fast_non_dominated_sort
from nsga_kit.selection.crowded import crowded_order


def survivor_state(objectives: np.ndarray, epsilon: float = 0.0) -> dict[str, np.ndarray]:
    """Rank a population and compute crowding distances for all of its fronts.

    Args:
        objectives: Objective matrix. Shape (n, n_obj).
        epsilon: Tie tolerance for dominance checks.

    Returns:
        Dictionary with 'rank' (int64, shape (n,)) and 'crowding_distance'
        (float64, shape (n,)).
    """
    fronts, ranks = fast_non_dominated_sort(objectives, epsilon)
    cd = assign_crowding_distance(objectives, fronts)
    return {"rank": ranks, "crowding_distance": cd}


def nsga2_survival(
    pop: Population,
    n_survivors: int,
    epsilon: float = 0.0,
) -> tuple[np.ndarray, dict[str, np.ndarray]]:
    """Select survivors using NSGA-II crowded truncation.

    Args:
        pop: Combined population (parents + offspring) with objectives.
        n_survivors: Number of survivors to select for the next generation.
        epsilon: Tie tolerance for dominance checks.

    Returns:
        Tuple of (indices, state) where:
        - indices: Array of shape (n_survivors,) containing indices of selected
          survivors in the input population, best fronts first.
        - state: Dictionary with keys:
            - 'rank': Pareto front ranks of the survivors. Shape (n_survivors,).
            - 'crowding_distance': Crowding distances of the survivors,
              recomputed within the surviving part of each front.

    Raises:
        ValueError: If population has no objectives, n_survivors is not
            positive, or n_survivors exceeds population size.

    Example:
        >>> x = np.array([[1.0], [2.0], [3.0], [4.0]])
        >>> obj = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])
        >>> indices, state = nsga2_survival(Population(x=x, objectives=obj), n_survivors=2)
        >>> sorted(indices.tolist())
        [0, 3]
    """
    if pop.objectives is None:
        raise ValueError("Population must have objectives computed for survivor selection")
    if n_survivors <= 0:
        raise ValueError(f"n_survivors must be positive, got {n_survivors}")
    if n_survivors > len(pop):
        raise ValueError(f"n_survivors ({n_survivors}) cannot exceed population size ({len(pop)})")

    objectives = pop.objectives
    fronts, all_ranks = fast_non_dominated_sort(objectives, epsilon)

    selected: list[int] = []
    for front in fronts:
        remaining = n_survivors - len(selected)
        if remaining == 0:
            break
        if len(front) <= remaining:
            selected.extend(front.tolist())
        else:
            # Critical front: keep the most isolated members
            front_cd = crowding_distance(objectives[front])
            order = crowded_order(all_ranks[front], front_cd)
            selected.extend(front[order[:remaining]].tolist())

    selected_arr = np.array(selected, dtype=np.intp)
    selected_ranks = all_ranks[selected_arr]

    # Crowding distance is relative to the members that actually survived
    selected_cd = np.zeros(n_survivors, dtype=np.float64)
    for r in np.unique(selected_ranks):
        members = np.flatnonzero(selected_ranks == r)
        selected_cd[members] = crowding_distance(objectives[selected_arr[members]])

    return selected_arr, {
        "rank": selected_ranks,
        "crowding_distance": selected_cd,
    }
