"""Shared test fixtures for nsga-kit tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- simple_population: Four-candidate population with rank/crowding computed
- Objective sets for small problems
"""

import numpy as np
import pytest

from nsga_kit import Population, assign_crowding_distance, fast_non_dominated_sort


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_population() -> Population:
    """A population of 4 mutually non-dominated candidates.

    All four objective vectors lie on one front, so every rank is 0 and the
    two extremes have infinite crowding distance.
    """
    x = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0], [7.0, 8.0]])
    objectives = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])

    fronts, ranks = fast_non_dominated_sort(objectives)
    cd = assign_crowding_distance(objectives, fronts)

    return Population(x=x, objectives=objectives, rank=ranks, crowding_distance=cd)


@pytest.fixture
def parabola_objectives() -> list:
    """Schaffer's problem: f1 = x^2, f2 = (x - 2)^2 on a scalar x.

    The Pareto-optimal set is x in [0, 2].
    """

    def f1(x: np.ndarray) -> float:
        return float(x[0] ** 2)

    def f2(x: np.ndarray) -> float:
        return float((x[0] - 2.0) ** 2)

    return [f1, f2]


@pytest.fixture
def matrix_objectives() -> list:
    """Two objectives over a (2, 3) matrix-shaped candidate.

    Each objective asserts the candidate shape, so any reshaping mistake in
    the optimizer fails loudly.
    """

    def distance_to_zero(x: np.ndarray) -> float:
        assert x.shape == (2, 3)
        return float(np.sum(x**2))

    def distance_to_one(x: np.ndarray) -> float:
        assert x.shape == (2, 3)
        return float(np.sum((x - 1.0) ** 2))

    return [distance_to_zero, distance_to_one]


@pytest.fixture
def zdt1_objectives() -> list:
    """ZDT1 on 5 variables in [0, 1], split into its two objectives."""

    def f1(x: np.ndarray) -> float:
        return float(x[0])

    def f2(x: np.ndarray) -> float:
        g = 1 + 9 * np.mean(x[1:])
        return float(g * (1 - np.sqrt(x[0] / g)))

    return [f1, f2]
