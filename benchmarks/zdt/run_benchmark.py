"""Benchmark runner comparing nsga-kit, Pymoo, and DEAP on ZDT problems.

This script runs NSGA-II on ZDT1-3 using three different libraries with
consistent parameters to enable fair comparison. Each run is scored by the
hypervolume and the inverted generational distance of its final population.

Usage:
    uv run python benchmarks/zdt/run_benchmark.py
"""

import json
import logging
import sys
import time
from collections import defaultdict
from datetime import UTC, datetime
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
from pymoo.algorithms.moo.nsga2 import NSGA2 as PymooNSGA2
from pymoo.core.problem import Problem as PymooProblem
from pymoo.operators.crossover.sbx import SBX
from pymoo.operators.mutation.pm import PM
from pymoo.operators.sampling.rnd import FloatRandomSampling
from pymoo.optimize import minimize
from pymoo.termination import get_termination

from benchmarks.metrics import hypervolume, inverted_generational_distance
from benchmarks.zdt.problems import BOUNDS, N_VARS, PROBLEMS, Objective, as_vector, true_front

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
POP_SIZE = 100
N_GENERATIONS = 250
CROSSOVER_PROB = 1.0
SBX_ETA = 15.0
PM_ETA = 20.0
MUTATION_PROB = 1.0 / N_VARS
N_RUNS = 10
SEEDS = list(range(N_RUNS))
LIBRARIES = ["nsga-kit", "pymoo", "deap"]


def run_nsga_kit(objectives: list[Objective], seed: int) -> tuple[np.ndarray, float]:
    """Run NSGA-II using nsga-kit.

    The starting point is the centre of the unit box, so the initial
    population (start +/- 0.5) covers the whole decision space.

    Args:
        objectives: The problem's scalar objectives.
        seed: Random seed for reproducibility.

    Returns:
        Tuple of (final objectives, elapsed_time_seconds).
    """
    from nsga_kit import NSGA2, NSGA2Config

    config = NSGA2Config(
        population_size=POP_SIZE,
        max_generations=N_GENERATIONS,
        crossover="sbx",
        crossover_prob=CROSSOVER_PROB,
        crossover_eta=SBX_ETA,
        mutation="polynomial",
        mutation_prob=MUTATION_PROB,
        mutation_eta=PM_ETA,
        lower_bound=BOUNDS[0],
        upper_bound=BOUNDS[1],
        epsilon=0.0,
    )

    start_time = time.perf_counter()
    result = NSGA2(config, seed=seed).optimize(objectives, np.full(N_VARS, 0.5))
    elapsed = time.perf_counter() - start_time

    return result.population.objectives, elapsed


class PymooZDTProblem(PymooProblem):
    """Wrapper to use ZDT objectives with Pymoo."""

    def __init__(self, objectives: list[Objective]) -> None:
        super().__init__(n_var=N_VARS, n_obj=len(objectives), xl=BOUNDS[0], xu=BOUNDS[1])
        self._evaluate_one = as_vector(objectives)

    def _evaluate(self, x: np.ndarray, out: dict, *args, **kwargs) -> None:
        out["F"] = np.array([self._evaluate_one(xi) for xi in x])


def run_pymoo(objectives: list[Objective], seed: int) -> tuple[np.ndarray, float]:
    """Run NSGA-II using Pymoo.

    Args:
        objectives: The problem's scalar objectives.
        seed: Random seed for reproducibility.

    Returns:
        Tuple of (final objectives, elapsed_time_seconds).
    """
    algorithm = PymooNSGA2(
        pop_size=POP_SIZE,
        sampling=FloatRandomSampling(),
        crossover=SBX(eta=SBX_ETA, prob=CROSSOVER_PROB),
        mutation=PM(eta=PM_ETA, prob=MUTATION_PROB),
        eliminate_duplicates=False,
    )

    start_time = time.perf_counter()
    result = minimize(
        PymooZDTProblem(objectives),
        algorithm,
        get_termination("n_gen", N_GENERATIONS),
        seed=seed,
        verbose=False,
    )
    elapsed = time.perf_counter() - start_time

    return result.pop.get("F"), elapsed


def _setup_deap() -> None:
    """Set up DEAP creator classes (handles cleanup for multiple runs)."""
    from deap import base, creator

    if hasattr(creator, "FitnessMin"):
        del creator.FitnessMin
    if hasattr(creator, "Individual"):
        del creator.Individual

    creator.create("FitnessMin", base.Fitness, weights=(-1.0, -1.0))
    creator.create("Individual", list, fitness=creator.FitnessMin)


def run_deap(objectives: list[Objective], seed: int) -> tuple[np.ndarray, float]:
    """Run NSGA-II using DEAP.

    Args:
        objectives: The problem's scalar objectives.
        seed: Random seed for reproducibility.

    Returns:
        Tuple of (final objectives, elapsed_time_seconds).
    """
    import random

    from deap import base, creator, tools

    _setup_deap()
    evaluate_one = as_vector(objectives)

    toolbox = base.Toolbox()
    toolbox.register("attr_float", random.random)
    toolbox.register("individual", tools.initRepeat, creator.Individual, toolbox.attr_float, n=N_VARS)
    toolbox.register("population", tools.initRepeat, list, toolbox.individual)
    toolbox.register("evaluate", lambda individual: tuple(evaluate_one(np.array(individual))))
    toolbox.register("mate", tools.cxSimulatedBinaryBounded, eta=SBX_ETA, low=BOUNDS[0], up=BOUNDS[1])
    toolbox.register(
        "mutate",
        tools.mutPolynomialBounded,
        eta=PM_ETA,
        low=BOUNDS[0],
        up=BOUNDS[1],
        indpb=MUTATION_PROB,
    )
    toolbox.register("select", tools.selNSGA2)

    random.seed(seed)

    start_time = time.perf_counter()

    pop = toolbox.population(n=POP_SIZE)
    for ind in pop:
        ind.fitness.values = toolbox.evaluate(ind)

    # Assign crowding distance for the initial population (required for selTournamentDCD)
    pop = toolbox.select(pop, len(pop))

    for _ in range(N_GENERATIONS):
        offspring = [toolbox.clone(ind) for ind in tools.selTournamentDCD(pop, len(pop))]

        for i in range(0, len(offspring), 2):
            toolbox.mate(offspring[i], offspring[i + 1])

        for mutant in offspring:
            toolbox.mutate(mutant)
            mutant.fitness.values = toolbox.evaluate(mutant)

        pop = toolbox.select(pop + offspring, POP_SIZE)

    elapsed = time.perf_counter() - start_time

    return np.array([ind.fitness.values for ind in pop]), elapsed


RUNNERS = {
    "nsga-kit": run_nsga_kit,
    "pymoo": run_pymoo,
    "deap": run_deap,
}


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary containing metadata and results.
    """
    metadata = {
        "timestamp": datetime.now(UTC).isoformat(),
        "parameters": {
            "pop_size": POP_SIZE,
            "n_generations": N_GENERATIONS,
            "n_vars": N_VARS,
            "bounds": list(BOUNDS),
            "crossover_prob": CROSSOVER_PROB,
            "sbx_eta": SBX_ETA,
            "pm_eta": PM_ETA,
            "mutation_prob": MUTATION_PROB,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
        },
    }

    results = []
    total_runs = len(PROBLEMS) * len(RUNNERS) * N_RUNS
    current_run = 0

    for problem_name, objectives in PROBLEMS.items():
        reference_front = true_front(problem_name)
        for library_name, runner in RUNNERS.items():
            for seed in SEEDS:
                current_run += 1
                logger.info(
                    f"Running [{current_run}/{total_runs}]: {library_name} on {problem_name.upper()} (seed={seed})"
                )

                final_objectives, elapsed = runner(objectives, seed)
                hv = hypervolume(final_objectives)
                igd = inverted_generational_distance(final_objectives, reference_front)

                results.append(
                    {
                        "library": library_name,
                        "problem": problem_name.upper(),
                        "seed": seed,
                        "hypervolume": hv,
                        "igd": igd,
                        "time_seconds": elapsed,
                    }
                )

                logger.info(f"  HV: {hv:.4f}, IGD: {igd:.4f}, Time: {elapsed:.2f}s")

    return {"metadata": metadata, "results": results}


def print_summary(results: dict) -> None:
    """Print a summary table of the benchmark results.

    Args:
        results: The benchmark results dictionary.
    """
    data = defaultdict(lambda: defaultdict(list))
    for r in results["results"]:
        data[r["problem"]][r["library"]].append(r)

    problems = sorted(data.keys())

    print("\n" + "=" * 80)
    print("BENCHMARK SUMMARY")
    print("=" * 80)
    print(f"\nParameters: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}")

    for metric, label in (("hypervolume", "Hypervolume (higher is better)"), ("igd", "IGD (lower is better)")):
        print(f"\n{label}:")
        header = f"{'Problem':<10}" + "".join(f"{lib:>22}" for lib in LIBRARIES)
        print(header)
        print("-" * 76)
        for problem in problems:
            row = f"{problem:<10}"
            for lib in LIBRARIES:
                values = [r[metric] for r in data[problem][lib]]
                if values:
                    row += f"{np.mean(values):>14.4f} +/- {np.std(values):.4f}"
                else:
                    row += f"{'N/A':>22}"
            print(row)
        print("-" * 76)

    print("\nTiming (mean seconds per run):")
    print(f"{'Problem':<10}" + "".join(f"{lib:>15}" for lib in LIBRARIES))
    print("-" * 55)
    for problem in problems:
        row = f"{problem:<10}"
        for lib in LIBRARIES:
            times = [r["time_seconds"] for r in data[problem][lib]]
            row += f"{np.mean(times):>15.2f}" if times else f"{'N/A':>15}"
        print(row)

    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting ZDT benchmark suite")
    logger.info(f"Parameters: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}")

    results = run_benchmark()

    output_path = Path(__file__).parent / "results" / "benchmark_results.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {output_path}")

    print_summary(results)


if __name__ == "__main__":
    main()
