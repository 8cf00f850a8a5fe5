"""Objective evaluation helpers.

This module bridges user objectives and the population arrays:

- objective_vector: bundle per-objective callables into one evaluator that
  accepts a flattened candidate and returns its objective vector
- check_objectives: validate objectives against the starting point
- lift / lift_parallel: apply a per-candidate evaluator to a whole population
"""

from collections.abc import Callable, Sequence

import numpy as np

from nsga_kit.protocols import ObjectiveFunction


def objective_vector(
    objectives: Sequence[ObjectiveFunction], shape: tuple[int, ...]
) -> Callable[[np.ndarray], np.ndarray]:
    """Combine scalar objectives into one vector-valued evaluator.

    Each objective sees the candidate in the shape of the starting point, even
    though the population stores candidates flattened.

    Args:
        objectives: Callables mapping a candidate to a scalar. Order defines
            the column order of the objective matrix.
        shape: Shape of a candidate as the objectives expect it.

    Returns:
        A function with signature (n_vars,) -> (n_obj,).

    Example:
        >>> evaluate = objective_vector([np.sum, np.max], shape=(2, 2))
        >>> evaluate(np.array([1.0, 2.0, 3.0, 4.0]))
        array([10.,  4.])
    """
    fns = tuple(objectives)

    def evaluate(x: np.ndarray) -> np.ndarray:
        candidate = x.reshape(shape)
        return np.array([float(f(candidate)) for f in fns], dtype=np.float64)

    return evaluate


def check_objectives(objectives: Sequence[ObjectiveFunction], start: np.ndarray) -> None:
    """Validate the objectives by evaluating each one on the starting point.

    Exceptions raised by an objective propagate unchanged; an objective that
    cannot digest the starting point fails here, before any generation runs.

    Args:
        objectives: Objective callables to check.
        start: The starting point, in the shape the objectives expect.

    Raises:
        ValueError: If there are no objectives or one returns a non-scalar.
        TypeError: If an objective is not callable.
    """
    if len(objectives) == 0:
        raise ValueError("At least one objective function is required")
    for i, f in enumerate(objectives):
        if not callable(f):
            raise TypeError(f"objective {i} must be callable, got {type(f).__name__}")
        value = f(start)
        if np.ndim(value) != 0:
            raise ValueError(
                f"objective {i} must return a scalar for a candidate of shape {start.shape}, "
                f"got a value of shape {np.shape(value)}"
            )


def lift(fn: Callable[[np.ndarray], np.ndarray]) -> Callable[[np.ndarray], np.ndarray]:
    """Lift a per-candidate function to work on a population.

    Args:
        fn: Function that operates on a single candidate.
            Signature: (n_vars,) -> (n_out,)

    Returns:
        A function that operates on a population.
        Signature: (n, n_vars) -> (n, n_out)

    Example:
        >>> evaluate = lift(lambda x: np.array([x.sum(), x.prod()]))
        >>> evaluate(np.array([[1.0, 2.0], [3.0, 4.0]]))
        array([[ 3.,  2.],
               [ 7., 12.]])
    """

    def lifted(x: np.ndarray) -> np.ndarray:
        return np.stack([fn(x[i]) for i in range(x.shape[0])])

    return lifted


def lift_parallel(
    fn: Callable[[np.ndarray], np.ndarray], n_workers: int
) -> Callable[[np.ndarray], np.ndarray]:
    """Lift a per-candidate function to a population, evaluating in parallel.

    Candidates are independent, so each one can be evaluated by a separate
    worker. Results are stacked in candidate order before returning.

    Args:
        fn: Function that operates on a single candidate.
            Signature: (n_vars,) -> (n_out,)
            Must be serializable by joblib (closures are fine with the loky backend).
        n_workers: Number of parallel workers. Use -1 for all CPU cores.

    Returns:
        A function that operates on a population in parallel.
        Signature: (n, n_vars) -> (n, n_out)
    """
    from joblib import Parallel, delayed

    def lifted(x: np.ndarray) -> np.ndarray:
        results: list[np.ndarray] = Parallel(n_jobs=n_workers)(  # type: ignore[assignment]
            delayed(fn)(x[i]) for i in range(x.shape[0])
        )
        return np.stack(results)

    return lifted
