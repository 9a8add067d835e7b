"""Benchmark runner for the five evo-viz algorithms.

Runs every algorithm with its default visualizer configuration, a larger
generation budget and several seeds, then reports the final best fitness and
the time per run.

Usage:
    uv run python benchmarks/run_benchmark.py
"""

import json
import logging
import time
from collections import defaultdict
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

import numpy as np

from evo_viz import EAConfig, Runner, list_algorithms

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
POP_SIZE = 20
N_GENERATIONS = 50
N_RUNS = 10
SEEDS = list(range(N_RUNS))
PROBLEMS = {
    "GA": [None],
    "DE": ["Sphere", "Ackley"],
    "PSO": ["Sphere", "Ackley"],
    "ES": ["Sphere", "Ackley"],
    "GP": ["Linear", "Sine"],
}


def make_config(algorithm: str, problem: str | None) -> EAConfig:
    """Build the benchmark configuration for one algorithm/problem pair.

    Args:
        algorithm: Registered algorithm name.
        problem: Landscape for DE/PSO/ES, GP problem for GP, None for GA.

    Returns:
        A configuration with the genome length the visualizer would use.
    """
    config = replace(EAConfig(), population_size=POP_SIZE, max_generations=N_GENERATIONS)
    if algorithm == "GP" and problem is not None:
        config = config.with_gp_problem(problem)
    elif problem is not None:
        config = replace(config, problem_type=problem)
    return config.for_algorithm(algorithm)


def run_once(algorithm: str, config: EAConfig, seed: int) -> tuple[float, float]:
    """Run one algorithm to its generation ceiling.

    Returns:
        Tuple of (final best fitness, elapsed_time_seconds).
    """
    start = time.perf_counter()
    result = Runner(algorithm, config, seed=seed).run()
    elapsed = time.perf_counter() - start
    return result.history[-1].best_fitness, elapsed


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary with metadata and per-run results.
    """
    metadata = {
        "timestamp": datetime.now(UTC).isoformat(),
        "parameters": {
            "pop_size": POP_SIZE,
            "n_generations": N_GENERATIONS,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
        },
    }

    results = []
    total_runs = sum(len(problems) for problems in PROBLEMS.values()) * N_RUNS
    current_run = 0

    for algorithm in list_algorithms():
        for problem in PROBLEMS[algorithm]:
            config = make_config(algorithm, problem)
            label = problem or "Knapsack"
            for seed in SEEDS:
                current_run += 1
                logger.info(f"Running [{current_run}/{total_runs}]: {algorithm} on {label} (seed={seed})")

                best, elapsed = run_once(algorithm, config, seed)

                results.append(
                    {
                        "algorithm": algorithm,
                        "problem": label,
                        "seed": seed,
                        "best_fitness": best,
                        "time_seconds": elapsed,
                    }
                )

                logger.info(f"  Best: {best:.4f}, Time: {elapsed:.3f}s")

    return {"metadata": metadata, "results": results}


def print_summary(results: dict) -> None:
    """Print a summary table of the benchmark results.

    Args:
        results: The benchmark results dictionary.
    """
    data = defaultdict(list)
    times = defaultdict(list)
    for r in results["results"]:
        key = (r["algorithm"], r["problem"])
        data[key].append(r["best_fitness"])
        times[key].append(r["time_seconds"])

    print("\n" + "=" * 64)
    print("BENCHMARK SUMMARY")
    print("=" * 64)
    print(f"\nParameters: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}")
    print()

    header = f"{'Algorithm':<10}{'Problem':<12}{'Best fitness':>24}{'Time (s)':>14}"
    print(header)
    print("-" * 60)

    for (algorithm, problem), values in sorted(data.items()):
        row = f"{algorithm:<10}{problem:<12}"
        row += f"{np.mean(values):>14.4f} +/- {np.std(values):.4f}"
        row += f"{np.mean(times[(algorithm, problem)]):>12.3f}"
        print(row)

    print("-" * 60)
    print("GA reports knapsack value (higher is better), all others report error.")
    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting evo-viz benchmark suite")
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
