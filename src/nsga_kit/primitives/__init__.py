"""NSGA-II primitives for Pareto-based ranking and diversity.

This package provides core pure functions for multi-objective optimization.
"""

from nsga_kit.primitives.pareto import (
    assign_crowding_distance,
    crowding_distance,
    dominates,
    dominates_matrix,
    fast_non_dominated_sort,
    non_dominated_sort,
)

__all__ = [
    "dominates",
    "dominates_matrix",
    "fast_non_dominated_sort",
    "non_dominated_sort",
    "crowding_distance",
    "assign_crowding_distance",
]
