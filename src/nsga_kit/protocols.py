"""Protocol definitions for the pluggable pieces of NSGA-II.

Three kinds of callables plug into the optimizer:

1. **Objective functions**: map one candidate (in the starting point's shape)
   to a scalar to be minimized. A maximized quantity must be negated.

2. **Crossover operators**: recombine two parents into two children. Whether
   recombination happens at all is decided inside the operator, using the
   configured crossover probability.

3. **Mutation operators**: perturb one child after crossover.

Variation operators receive the run's random generator explicitly, so a
seeded run is reproducible and operators hold no random state of their own.

Example:
    ```python
    def midpoint_crossover(p1, p2, rng):
        mid = (p1 + p2) / 2
        return mid, mid.copy()

    def jitter(x, rng):
        return x + 0.01 * rng.standard_normal(x.shape)
    ```
"""

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class ObjectiveFunction(Protocol):
    """A single objective to minimize.

    Must be a pure function of the candidate: the optimizer may evaluate
    candidates in any order and in parallel workers.
    """

    def __call__(self, candidate: np.ndarray) -> float:
        ...


@runtime_checkable
class Crossover(Protocol):
    """Protocol for crossover operators.

    Parameters:
        p1: First parent, flattened decision vector of shape (n_vars,).
        p2: Second parent, same shape as p1.
        rng: Random number generator of the running optimizer.

    Returns:
        Two children with the shape of the parents. Implementations must not
        modify the parents in place.
    """

    def __call__(
        self,
        p1: np.ndarray,
        p2: np.ndarray,
        rng: np.random.Generator,
    ) -> tuple[np.ndarray, np.ndarray]:
        ...


@runtime_checkable
class Mutation(Protocol):
    """Protocol for mutation operators.

    Parameters:
        x: Flattened decision vector of shape (n_vars,).
        rng: Random number generator of the running optimizer.

    Returns:
        A new array of the same shape. The input is left untouched.
    """

    def __call__(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        ...
