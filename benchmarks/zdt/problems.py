"""ZDT test problems for multi-objective optimization benchmarking.

The ZDT (Zitzler-Deb-Thiele) test suite is a standard benchmark for
multi-objective evolutionary algorithms. All problems have:
- n decision variables in [0, 1]
- 2 objectives to minimize
- Known Pareto-optimal fronts for validation

Each problem is given as a list of two scalar objectives, the form
``NSGA2.optimize`` expects, plus a vector form for libraries that evaluate
all objectives at once.

References:
    Zitzler, E., Deb, K., & Thiele, L. (2000). Comparison of multiobjective
    evolutionary algorithms: Empirical results. Evolutionary computation, 8(2), 173-195.
"""

from collections.abc import Callable

import numpy as np

from nsga_kit import non_dominated_sort

# Problem configuration
N_VARS: int = 30
BOUNDS: tuple[float, float] = (0.0, 1.0)

Objective = Callable[[np.ndarray], float]


def _g(x: np.ndarray) -> float:
    return float(1 + 9 * np.sum(x[1:]) / (len(x) - 1))


def f1(x: np.ndarray) -> float:
    """First objective shared by ZDT1-3: the first variable."""
    return float(x[0])


def zdt1_f2(x: np.ndarray) -> float:
    """ZDT1 second objective: convex front f2 = 1 - sqrt(f1)."""
    g = _g(x)
    return g * (1 - np.sqrt(x[0] / g))


def zdt2_f2(x: np.ndarray) -> float:
    """ZDT2 second objective: concave front f2 = 1 - f1^2."""
    g = _g(x)
    return g * (1 - (x[0] / g) ** 2)


def zdt3_f2(x: np.ndarray) -> float:
    """ZDT3 second objective: front split into disconnected convex pieces."""
    g = _g(x)
    ratio = x[0] / g
    return g * (1 - np.sqrt(ratio) - ratio * np.sin(10 * np.pi * x[0]))


# Registry of all ZDT problems
PROBLEMS: dict[str, list[Objective]] = {
    "zdt1": [f1, zdt1_f2],
    "zdt2": [f1, zdt2_f2],
    "zdt3": [f1, zdt3_f2],
}


def as_vector(objectives: list[Objective]) -> Callable[[np.ndarray], np.ndarray]:
    """Bundle scalar objectives into one (n_vars,) -> (n_obj,) function."""

    def evaluate(x: np.ndarray) -> np.ndarray:
        return np.array([f(x) for f in objectives])

    return evaluate


def true_front(problem_name: str, n_points: int = 200) -> np.ndarray:
    """Sample the analytic Pareto front of a ZDT problem.

    Args:
        problem_name: One of the keys of PROBLEMS.
        n_points: Number of f1 values sampled in [0, 1].

    Returns:
        Array of shape (n, 2). For ZDT3 only the non-dominated samples are kept.
    """
    f1_values = np.linspace(0.0, 1.0, n_points)
    if problem_name == "zdt1":
        return np.column_stack([f1_values, 1 - np.sqrt(f1_values)])
    if problem_name == "zdt2":
        return np.column_stack([f1_values, 1 - f1_values**2])
    if problem_name == "zdt3":
        front = np.column_stack(
            [f1_values, 1 - np.sqrt(f1_values) - f1_values * np.sin(10 * np.pi * f1_values)]
        )
        return front[non_dominated_sort(front) == 0]
    raise KeyError(f"Unknown problem '{problem_name}'. Available problems: {', '.join(PROBLEMS)}")
