"""Variation operators and objective evaluation helpers.

This package provides:
- objective_vector / check_objectives: objective evaluation at the candidate boundary
- lift / lift_parallel: apply per-candidate functions to whole populations
- sbx_crossover / uniform_crossover: two-parent, two-child crossover factories
- gaussian_mutation / polynomial_mutation: mutation factories

Importing this package registers the built-in operators by name.
"""

from nsga_kit.operators.base import check_objectives, lift, lift_parallel, objective_vector
from nsga_kit.operators.standard import (
    gaussian_mutation,
    polynomial_mutation,
    sbx_crossover,
    uniform_crossover,
)
from nsga_kit.registry import CrossoverRegistry, MutationRegistry

# Register built-in variation operators
CrossoverRegistry.register(
    "sbx",
    lambda config, bounds: sbx_crossover(config.crossover_prob, config.crossover_eta, bounds),
)
CrossoverRegistry.register(
    "uniform",
    lambda config, bounds: uniform_crossover(config.crossover_prob, bounds),
)
MutationRegistry.register(
    "gaussian",
    lambda config, bounds: gaussian_mutation(config.mutation_prob, config.mutation_strength, bounds),
)
MutationRegistry.register(
    "polynomial",
    lambda config, bounds: polynomial_mutation(config.mutation_prob, config.mutation_eta, bounds),
)

__all__ = [
    "objective_vector",
    "check_objectives",
    "lift",
    "lift_parallel",
    "sbx_crossover",
    "uniform_crossover",
    "gaussian_mutation",
    "polynomial_mutation",
]
