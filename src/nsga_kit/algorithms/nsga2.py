"""NSGA-II optimizer.

The NSGA2 class runs the generational loop of the Non-dominated Sorting
Genetic Algorithm II on a sequence of objective functions, starting from a
single point of any array shape:

1. Seed ``population_size`` candidates around the starting point and evaluate them
2. For each generation:
   a. Call the callback with the current state (early stopping if it returns True)
   b. Select parents by binary tournament on (rank, crowding distance)
   c. Create two children per parent pair via crossover, then mutate each
   d. Evaluate the offspring
   e. Combine parents + offspring and keep ``population_size`` survivors by
      non-dominated sorting and crowded truncation
3. Return an NSGA2Result whose ``pareto_set`` is the final first front

Example:
    >>> optimizer = NSGA2(population_size=20, max_generations=50, seed=42,
    ...                   lower_bound=0.0, upper_bound=2.0, mutation_strength=0.1)
    >>> result = optimizer.optimize(
    ...     [lambda x: float(x[0] ** 2), lambda x: float((x[0] - 2) ** 2)],
    ...     np.array([1.0]),
    ... )
    >>> front = result.pareto_set

References:
    Deb, K., Pratap, A., Agarwal, S., & Meyarivan, T. (2002). A fast and
    elitist multiobjective genetic algorithm: NSGA-II. IEEE Transactions on
    Evolutionary Computation, 6(2), 182-197.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from nsga_kit.config import NSGA2Config
# Importing operators registers the built-in variation operators
from nsga_kit.operators import check_objectives, lift, lift_parallel, objective_vector
from nsga_kit.population import Population
from nsga_kit.protocols import ObjectiveFunction
from nsga_kit.registry import CrossoverRegistry, MutationRegistry
from nsga_kit.results import NSGA2Result
from nsga_kit.selection import binary_tournament
from nsga_kit.survival import nsga2_survival, survivor_state

logger = logging.getLogger(__name__)

# Half-width of the uniform box the initial population is drawn from
INIT_SPREAD = 0.5

Callback = Callable[[NSGA2Result, int], bool]


def _resolve_bound(name: str, value: Any, shape: tuple[int, ...]) -> np.ndarray:
    bound = np.asarray(value, dtype=np.float64)
    if bound.ndim != 0 and bound.shape != shape:
        raise ValueError(f"{name} has shape {bound.shape}, expected a scalar or the starting point's shape {shape}")
    return np.broadcast_to(bound, shape).reshape(-1).copy()


def _evaluate(evaluate: Callable[[np.ndarray], np.ndarray], x: np.ndarray) -> np.ndarray:
    objectives = evaluate(x)
    n_bad = int(np.sum(~np.all(np.isfinite(objectives), axis=1)))
    if n_bad:
        logger.warning("%d of %d candidates produced non-finite objective values; ranking them last", n_bad, len(x))
    return objectives


class NSGA2:
    """NSGA-II multi-objective optimizer.

    The optimizer owns a configuration and an optional seed. Each call to
    :meth:`optimize` snapshots the configuration and creates its own random
    generator from the seed, so runs with the same seed are reproducible and
    reassigning ``optimizer.config`` fields never affects a run in progress.
    An instance must not run two optimizations concurrently.

    Args:
        config: Base configuration. Defaults to ``NSGA2Config()``.
        seed: Random seed for reproducibility. If None, uses system entropy.
        **overrides: Configuration fields overriding those of ``config``.

    Raises:
        ValueError: If an override is not a configuration field.

    Example:
        >>> optimizer = NSGA2(population_size=40, max_generations=200, seed=1)
        >>> optimizer.config.crossover_prob = 0.9
    """

    def __init__(self, config: NSGA2Config | None = None, seed: int | None = None, **overrides: Any) -> None:
        base = config if config is not None else NSGA2Config()
        self.config = NSGA2Config.from_dict({**base.to_dict(), **overrides})
        self.seed = seed

    def optimize(
        self,
        objectives: Sequence[ObjectiveFunction],
        start: np.ndarray,
        callback: Callback | None = None,
    ) -> NSGA2Result:
        """Run NSGA-II from a starting point.

        Args:
            objectives: Objective functions to minimize. Each maps a candidate
                with the shape of ``start`` to a scalar.
            start: Starting point. The initial population is drawn uniformly
                within +/-0.5 of it (clipped to the bounds).
            callback: Optional callback called at the start of each generation.
                Signature: (result: NSGA2Result, generation: int) -> bool
                If it returns True, optimization stops early.

        Returns:
            NSGA2Result for the final population. ``result.pareto_set`` holds
            the first front in the shape of ``start``.

        Raises:
            ValueError: If the configuration is invalid, the starting point is
                empty, the bounds do not match the starting point, or an
                objective does not return a scalar for the starting point.
            TypeError: If objectives is not a sequence of callables.
            KeyError: If the configured operator names are not registered.
        """
        config = NSGA2Config.from_dict(self.config.to_dict())
        config.validate()

        if callable(objectives):
            raise TypeError("objectives must be a sequence of callables, got a single callable")
        objective_fns = list(objectives)

        start = np.asarray(start, dtype=np.float64)
        if start.size == 0:
            raise ValueError("start must contain at least one decision variable")
        shape = start.shape
        check_objectives(objective_fns, start)

        lower = _resolve_bound("lower_bound", config.lower_bound, shape)
        upper = _resolve_bound("upper_bound", config.upper_bound, shape)
        bounds = (lower, upper)

        crossover = CrossoverRegistry.get(config.crossover, config=config, bounds=bounds)
        mutate = MutationRegistry.get(config.mutation, config=config, bounds=bounds)

        evaluate_one = objective_vector(objective_fns, shape)
        evaluate = lift_parallel(evaluate_one, config.n_workers) if config.n_workers != 1 else lift(evaluate_one)

        rng = np.random.default_rng(self.seed)
        pop_size = config.population_size

        logger.info(
            "Starting NSGA-II: %d objectives, %d variables, config=%s",
            len(objective_fns),
            start.size,
            config.to_dict(),
        )

        init_x = start.reshape(-1) + rng.uniform(-INIT_SPREAD, INIT_SPREAD, size=(pop_size, start.size))
        init_x = np.clip(init_x, lower, upper)
        init_objectives = _evaluate(evaluate, init_x)
        pop = Population(x=init_x, objectives=init_objectives, **survivor_state(init_objectives, config.epsilon))
        assert pop.rank is not None and pop.crowding_distance is not None

        total_evaluations = pop_size
        generations_completed = 0

        for gen in range(config.max_generations):
            if callback is not None:
                current = NSGA2Result(
                    population=pop,
                    rank=pop.rank,
                    crowding_distance=pop.crowding_distance,
                    generations=generations_completed,
                    evaluations=total_evaluations,
                    candidate_shape=shape,
                )
                if callback(current, gen):
                    logger.info("Callback requested stop at generation %d", gen)
                    break

            parent_idx = binary_tournament(pop_size, rng, pop.rank, pop.crowding_distance)

            offspring_x = np.empty_like(pop.x)
            for i in range(0, pop_size, 2):
                child_a, child_b = crossover(pop.x[parent_idx[i]], pop.x[parent_idx[i + 1]], rng)
                offspring_x[i] = mutate(child_a, rng)
                offspring_x[i + 1] = mutate(child_b, rng)

            offspring = Population(x=offspring_x, objectives=_evaluate(evaluate, offspring_x))
            total_evaluations += pop_size

            combined = pop.combine(offspring)
            survivor_idx, state = nsga2_survival(combined, pop_size, config.epsilon)
            pop = combined.take(survivor_idx, **state)
            assert pop.rank is not None and pop.crowding_distance is not None

            generations_completed += 1
            logger.debug(
                "Generation %d: %d candidates on the first front",
                gen,
                int(np.sum(pop.rank == 0)),
            )

        result = NSGA2Result(
            population=pop,
            rank=pop.rank,
            crowding_distance=pop.crowding_distance,
            generations=generations_completed,
            evaluations=total_evaluations,
            candidate_shape=shape,
        )
        logger.info(
            "NSGA-II finished after %d generations and %d evaluations, %d candidates on the Pareto front",
            generations_completed,
            total_evaluations,
            int(np.sum(result.rank == 0)),
        )
        return result


def nsga2(
    objectives: Sequence[ObjectiveFunction],
    start: np.ndarray,
    seed: int | None = None,
    callback: Callback | None = None,
    **config: Any,
) -> NSGA2Result:
    """Run NSGA-II in one call.

    Shorthand for ``NSGA2(seed=seed, **config).optimize(objectives, start, callback)``.

    Args:
        objectives: Objective functions to minimize.
        start: Starting point of any array shape.
        seed: Random seed for reproducibility.
        callback: Optional early-stopping callback, see :meth:`NSGA2.optimize`.
        **config: NSGA2Config fields, e.g. ``population_size=40``.

    Returns:
        NSGA2Result for the final population.

    Example:
        >>> result = nsga2(
        ...     [lambda x: float(np.sum(x**2)), lambda x: float(np.sum((x - 1) ** 2))],
        ...     np.zeros((2, 2)),
        ...     seed=0,
        ...     population_size=12,
        ...     max_generations=10,
        ... )
        >>> result.pareto_set[0].shape
        (2, 2)
    """
    return NSGA2(seed=seed, **config).optimize(objectives, start, callback)
