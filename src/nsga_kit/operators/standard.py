"""Standard variation operators for NSGA-II.

Crossover operators (two parents in, two children out):

- SBX (Simulated Binary Crossover): simulates single-point crossover
  behavior for real-valued variables
- Uniform crossover: swaps whole coordinates between the parents

Mutation operators (one child in, one child out):

- Gaussian mutation: adds zero-mean normal noise to coordinates
- Polynomial mutation: a bounded perturbation with controllable spread

All operators are factory functions. The returned callables take the run's
random generator as their last argument and clip their output to the bounds.
"""

from collections.abc import Callable

import numpy as np

Bounds = tuple[float, float] | tuple[np.ndarray, np.ndarray]
"""Bounds for decision variables.

A scalar pair ``(lower, upper)`` applies the same bounds to all variables.
A pair of arrays ``(lower_array, upper_array)`` specifies per-variable bounds;
each array must have the same length as the flattened decision vector.
"""

UNBOUNDED: Bounds = (-np.inf, np.inf)

CrossoverFn = Callable[[np.ndarray, np.ndarray, np.random.Generator], tuple[np.ndarray, np.ndarray]]
MutationFn = Callable[[np.ndarray, np.random.Generator], np.ndarray]


def _check_prob(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


def sbx_crossover(
    crossover_prob: float = 0.9,
    eta: float = 15.0,
    bounds: Bounds = UNBOUNDED,
) -> CrossoverFn:
    """Create a Simulated Binary Crossover (SBX) operator.

    With probability ``crossover_prob`` the parents are recombined: for each
    variable a spread factor beta is drawn from the SBX distribution, the two
    symmetric children are formed around the parents' mean, and the children
    swap that variable with probability 0.5. Otherwise the children are copies
    of the parents.

    Args:
        crossover_prob: Probability that recombination happens at all.
        eta: Distribution index (default 15.0). Higher values produce children
            closer to parents; lower values allow more exploration.
        bounds: Lower and upper bounds; children are clipped to them.

    Returns:
        A crossover function with signature (p1, p2, rng) -> (c1, c2).

    Example:
        >>> crossover = sbx_crossover(crossover_prob=1.0, eta=15.0, bounds=(0.0, 1.0))
        >>> rng = np.random.default_rng(42)
        >>> c1, c2 = crossover(np.array([0.2, 0.4]), np.array([0.3, 0.5]), rng)
        >>> c1.shape
        (2,)

    References:
        Deb, K., & Agrawal, R. B. (1995). Simulated binary crossover for
        continuous search space. Complex Systems, 9(2), 115-148.
    """
    _check_prob("crossover_prob", crossover_prob)
    lower, upper = bounds
    exponent = 1.0 / (eta + 1.0)

    def crossover(p1: np.ndarray, p2: np.ndarray, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
        if rng.random() >= crossover_prob:
            return p1.copy(), p2.copy()

        n_vars = len(p1)
        u = rng.random(n_vars)
        beta = np.where(u <= 0.5, (2.0 * u) ** exponent, (1.0 / (2.0 * (1.0 - u))) ** exponent)

        c1 = 0.5 * ((1.0 + beta) * p1 + (1.0 - beta) * p2)
        c2 = 0.5 * ((1.0 - beta) * p1 + (1.0 + beta) * p2)

        swap = rng.random(n_vars) < 0.5
        child_a = np.where(swap, c2, c1)
        child_b = np.where(swap, c1, c2)

        return np.clip(child_a, lower, upper), np.clip(child_b, lower, upper)

    return crossover


def uniform_crossover(
    crossover_prob: float = 0.9,
    bounds: Bounds = UNBOUNDED,
) -> CrossoverFn:
    """Create a uniform crossover operator.

    With probability ``crossover_prob`` each coordinate of the first child is
    taken from either parent with equal chance, and the second child receives
    the complementary coordinate. Otherwise the children are copies.

    Args:
        crossover_prob: Probability that recombination happens at all.
        bounds: Lower and upper bounds; children are clipped to them.

    Returns:
        A crossover function with signature (p1, p2, rng) -> (c1, c2).
    """
    _check_prob("crossover_prob", crossover_prob)
    lower, upper = bounds

    def crossover(p1: np.ndarray, p2: np.ndarray, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
        if rng.random() >= crossover_prob:
            return p1.copy(), p2.copy()

        from_first = rng.random(len(p1)) < 0.5
        child_a = np.where(from_first, p1, p2)
        child_b = np.where(from_first, p2, p1)
        return np.clip(child_a, lower, upper), np.clip(child_b, lower, upper)

    return crossover


def gaussian_mutation(
    prob: float = 0.3,
    strength: float = 1e-3,
    bounds: Bounds = UNBOUNDED,
) -> MutationFn:
    """Create a gaussian mutation operator.

    Each coordinate is mutated independently with probability ``prob`` by
    adding ``strength * N(0, 1)`` noise.

    Args:
        prob: Per-coordinate mutation probability.
        strength: Standard deviation of the added noise.
        bounds: Lower and upper bounds; the result is clipped to them.

    Returns:
        A mutation function with signature (x, rng) -> x'.

    Example:
        >>> mutate = gaussian_mutation(prob=1.0, strength=0.1)
        >>> mutate(np.zeros(3), np.random.default_rng(0)).shape
        (3,)
    """
    _check_prob("prob", prob)
    if strength < 0:
        raise ValueError(f"strength must be non-negative, got {strength}")
    lower, upper = bounds

    def mutate(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        n_vars = len(x)
        mask = rng.random(n_vars) < prob
        noise = strength * rng.standard_normal(n_vars)
        return np.clip(np.where(mask, x + noise, x), lower, upper)

    return mutate


def polynomial_mutation(
    prob: float | None = None,
    eta: float = 20.0,
    bounds: Bounds = (0.0, 1.0),
) -> MutationFn:
    """Create a polynomial mutation operator.

    Polynomial mutation applies a bounded perturbation to each variable
    with probability prob. The spread of the mutation is controlled by
    the distribution index eta and scaled by the width of the bounds, so the
    bounds must be finite.

    Args:
        prob: Mutation probability per variable (default None, which uses 1/n_vars).
        eta: Distribution index (default 20.0). Higher values produce smaller
            perturbations (more local search); lower values allow larger jumps.
        bounds: Finite lower and upper bounds for decision variables.

    Returns:
        A mutation function with signature (x, rng) -> x'.

    Raises:
        ValueError: If the bounds are not finite or prob is outside [0, 1].

    References:
        Deb, K., & Goyal, M. (1996). A combined genetic adaptive search (GeneAS)
        for engineering design. Computer Science and Informatics, 26(4), 30-45.
    """
    if prob is not None:
        _check_prob("prob", prob)
    lower, upper = bounds
    if not (np.all(np.isfinite(lower)) and np.all(np.isfinite(upper))):
        raise ValueError("polynomial mutation requires finite bounds")
    delta_max = np.asarray(upper, dtype=np.float64) - np.asarray(lower, dtype=np.float64)
    # Zero-width variables cannot move; avoid dividing by zero for them
    safe_delta = np.where(delta_max > 0, delta_max, 1.0)

    def mutate(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        n_vars = len(x)
        mutation_prob = prob if prob is not None else 1.0 / n_vars

        mask = rng.random(n_vars) < mutation_prob
        u = rng.random(n_vars)
        if not np.any(mask):
            return x.copy()

        delta_l = (x - lower) / safe_delta
        delta_r = (upper - x) / safe_delta

        # Each branch is only valid for its half of u; the other half is discarded
        with np.errstate(invalid="ignore"):
            val_left = 2.0 * u + (1.0 - 2.0 * u) * ((1.0 - delta_l) ** (eta + 1.0))
            delta_q_left = val_left ** (1.0 / (eta + 1.0)) - 1.0

            val_right = 2.0 * (1.0 - u) + 2.0 * (u - 0.5) * ((1.0 - delta_r) ** (eta + 1.0))
            delta_q_right = 1.0 - val_right ** (1.0 / (eta + 1.0))

        delta_q = np.where(u < 0.5, delta_q_left, delta_q_right)
        mutated = np.where(mask, x + delta_q * delta_max, x)

        return np.clip(mutated, lower, upper)

    return mutate
