"""nsga-kit: NSGA-II multi-objective optimization on numpy.

Evolves a population of candidates from a starting point towards the Pareto
front of a set of objective functions, using fast non-dominated sorting,
crowding distance, binary tournament selection, crossover and mutation.

Example:
    >>> import numpy as np
    >>> from nsga_kit import NSGA2
    >>> f1 = lambda x: float(x[0] ** 2)
    >>> f2 = lambda x: float((x[0] - 2) ** 2)
    >>> optimizer = NSGA2(population_size=8, max_generations=50, seed=42,
    ...                   lower_bound=0.0, upper_bound=2.0, mutation_strength=0.1)
    >>> result = optimizer.optimize([f1, f2], np.array([1.0]))
    >>> len(result.population)
    8
"""

from nsga_kit.algorithms import NSGA2, nsga2
from nsga_kit.config import NSGA2Config
from nsga_kit.operators import (
    gaussian_mutation,
    lift,
    lift_parallel,
    objective_vector,
    polynomial_mutation,
    sbx_crossover,
    uniform_crossover,
)
from nsga_kit.population import IndividualView, Population
from nsga_kit.primitives import (
    assign_crowding_distance,
    crowding_distance,
    dominates,
    dominates_matrix,
    fast_non_dominated_sort,
    non_dominated_sort,
)
from nsga_kit.registry import (
    CrossoverRegistry,
    MutationRegistry,
    list_crossovers,
    list_mutations,
)
from nsga_kit.results import NSGA2Result
from nsga_kit.selection import binary_tournament, crowded_order, crowding_operator
from nsga_kit.survival import nsga2_survival, survivor_state

__version__ = "0.1.0"

__all__ = [
    # Algorithm
    "NSGA2",
    "nsga2",
    "NSGA2Config",
    # Selection
    "binary_tournament",
    "crowding_operator",
    "crowded_order",
    # Survival
    "nsga2_survival",
    "survivor_state",
    # Variation operators
    "sbx_crossover",
    "uniform_crossover",
    "gaussian_mutation",
    "polynomial_mutation",
    # Evaluation helpers
    "objective_vector",
    "lift",
    "lift_parallel",
    # Primitives
    "dominates",
    "dominates_matrix",
    "fast_non_dominated_sort",
    "non_dominated_sort",
    "crowding_distance",
    "assign_crowding_distance",
    # Registry system
    "CrossoverRegistry",
    "MutationRegistry",
    "list_crossovers",
    "list_mutations",
    # Data structures
    "Population",
    "IndividualView",
    "NSGA2Result",
]
