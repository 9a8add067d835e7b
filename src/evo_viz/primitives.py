"""Fitness functions and random draws shared by all algorithms.

This module provides the pure evaluation functions of the engine:

- sphere, ackley: Continuous landscapes minimised by DE, PSO and ES
- knapsack: Value/weight/feasibility of a GA bit string
- evaluate_gp, gp_fitness, render_program: Interpretation of GP programs

and thin wrappers around a numpy Generator for the uniform-integer and
Gaussian draws. Evaluators never draw random numbers, so the same genome
always gets the same fitness.
"""

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from evo_viz.config import EAConfig, GPOperation, KnapsackItem

GP_LINEAR_START = 50.0
GP_SINE_START = 0.0
SINE_SAMPLES = 30


def ensure_rng(rng: np.random.Generator | None) -> np.random.Generator:
    """Return ``rng``, or a fresh entropy-seeded Generator if it is None."""
    return np.random.default_rng() if rng is None else rng


def random_int(rng: np.random.Generator, low: int, high: int, size: int | tuple[int, ...] | None = None):
    """Draw uniform integers from the inclusive range [low, high]."""
    return rng.integers(low, high + 1, size=size)


def random_gaussian(rng: np.random.Generator, mean: float, sigma: float, size: int | tuple[int, ...] | None = None):
    """Draw Gaussian noise with the given mean and standard deviation."""
    return rng.normal(mean, sigma, size=size)


def sphere(genes: np.ndarray) -> float:
    """Sphere function, the sum of squared genes. Minimum 0 at the origin.

    Example:
        >>> sphere(np.array([1.0, -2.0]))
        5.0
    """
    x = np.asarray(genes, dtype=np.float64)
    return float(np.sum(x * x))


def ackley(genes: np.ndarray) -> float:
    """Ackley function with a=20, b=0.2, c=2π. Minimum 0 at the origin.

    For two genes this is the surface drawn by the 3-D view:
    ``-20·exp(-0.2·sqrt((x²+y²)/2)) - exp((cos 2πx + cos 2πy)/2) + 20 + e``.
    Longer genomes divide by the genome length instead of 2.
    """
    x = np.asarray(genes, dtype=np.float64)
    n = x.shape[0]
    if n == 0:
        raise ValueError("ackley requires at least one gene")
    term1 = -20.0 * math.exp(-0.2 * math.sqrt(float(np.sum(x * x)) / n))
    term2 = -math.exp(float(np.sum(np.cos(2.0 * math.pi * x))) / n)
    return term1 + term2 + 20.0 + math.e


def continuous_fitness(problem_type: str) -> Callable[[np.ndarray], float]:
    """Return the landscape selected by ``problem_type``.

    Raises:
        KeyError: If the problem type is unknown.
    """
    landscapes = {"Sphere": sphere, "Ackley": ackley}
    if problem_type not in landscapes:
        raise KeyError(f"Problem type '{problem_type}' not found. Available: {', '.join(landscapes)}")
    return landscapes[problem_type]


@dataclass(frozen=True)
class KnapsackEvaluation:
    """Outcome of evaluating a knapsack bit string."""

    fitness: float
    weight: float
    is_valid: bool


def knapsack(genes: np.ndarray, items: Sequence[KnapsackItem], capacity: float) -> KnapsackEvaluation:
    """Evaluate a knapsack selection.

    Genes equal to 1 select the item at the same position; positions beyond
    the item list are ignored. Overweight selections are infeasible and score
    zero rather than a proportional penalty.

    Example:
        >>> items = [KnapsackItem(id=0, weight=5, value=10)]
        >>> knapsack(np.array([1]), items, capacity=4)
        KnapsackEvaluation(fitness=0.0, weight=5.0, is_valid=False)
    """
    total_value = 0.0
    total_weight = 0.0
    for i, gene in enumerate(genes):
        if gene == 1 and i < len(items):
            total_value += items[i].value
            total_weight += items[i].weight

    is_valid = total_weight <= capacity
    return KnapsackEvaluation(fitness=total_value if is_valid else 0.0, weight=total_weight, is_valid=is_valid)


_GP_SEMANTICS: dict[str, Callable[[float, float], float]] = {
    "ADD_X": lambda val, x: val + x,
    "ADD_1": lambda val, x: val + 1,
    "SUB_1": lambda val, x: val - 1,
    "SUB_10": lambda val, x: val - 10,
    "MUL_2": lambda val, x: val * 2,
    "DIV_2": lambda val, x: val / 2,
    "SIN": lambda val, x: math.sin(val),
    "COS": lambda val, x: math.cos(val),
    "ADD_CONST": lambda val, x: val + 5,
}

_GP_TEMPLATES: dict[str, str] = {
    "ADD_X": "({} + x)",
    "ADD_1": "({} + 1)",
    "SUB_1": "({} - 1)",
    "SUB_10": "({} - 10)",
    "MUL_2": "({} * 2)",
    "DIV_2": "({} / 2)",
    "SIN": "sin({})",
    "COS": "cos({})",
    "ADD_CONST": "({} + 5)",
}


def gp_start_value(gp_problem: str) -> float:
    """Initial register value: 50 for the Linear problem, 0 for Sine."""
    return GP_LINEAR_START if gp_problem == "Linear" else GP_SINE_START


def _resolve_ops(genes: np.ndarray, operations: Sequence[GPOperation]) -> list[GPOperation]:
    n_ops = len(operations)
    ops = []
    for g in genes:
        idx = int(g)
        if idx < 0 or idx >= n_ops:
            raise IndexError(f"instruction index {idx} is out of range for {n_ops} GP operations")
        ops.append(operations[idx])
    return ops


def evaluate_gp(genes: np.ndarray, x: float, config: EAConfig) -> float:
    """Run a GP program on input ``x``.

    The program is a left-to-right fold over a single register, starting from
    ``gp_start_value(config.gp_problem)``. Each gene indexes into
    ``config.gp_operations``.

    Raises:
        IndexError: If a gene does not index a configured operation.

    Example:
        >>> config = EAConfig()  # Linear problem, ops: +1, -1, -10, /2
        >>> evaluate_gp(np.array([2, 3]), 0.0, config)
        20.0
    """
    val = gp_start_value(config.gp_problem)
    for op in _resolve_ops(genes, config.gp_operations):
        val = _GP_SEMANTICS[op.type](val, x)
    return float(val)


def sine_samples() -> np.ndarray:
    """Return the 31 sample points of [0, 2π] used for the Sine problem."""
    return np.arange(SINE_SAMPLES + 1, dtype=np.float64) / SINE_SAMPLES * 2.0 * math.pi


def gp_fitness(genes: np.ndarray, config: EAConfig) -> float:
    """Error of a GP program, lower is better.

    Linear: absolute distance of the program output (x = 0) from 0.
    Sine: mean absolute error between the program output and sin(x) over
    ``sine_samples()``, with each sample fed to ``ADD_X``.
    """
    if config.gp_problem == "Linear":
        return abs(evaluate_gp(genes, 0.0, config))
    xs = sine_samples()
    errors = [abs(evaluate_gp(genes, float(x), config) - math.sin(x)) for x in xs]
    return float(np.mean(errors))


def best_program_curve(genes: np.ndarray, config: EAConfig) -> list[dict[str, float]]:
    """Target and program output over the sine samples, rounded for charting."""
    return [
        {
            "x": round(float(x), 2),
            "target": round(math.sin(x), 2),
            "best": round(evaluate_gp(genes, float(x), config), 2),
        }
        for x in sine_samples()
    ]


def render_program(genes: np.ndarray, config: EAConfig) -> str:
    """Render a GP program as a nested expression.

    Example:
        >>> render_program(np.array([2, 3]), EAConfig())
        '((50 - 10) / 2)'
    """
    expr = f"{gp_start_value(config.gp_problem):g}"
    for op in _resolve_ops(genes, config.gp_operations):
        expr = _GP_TEMPLATES[op.type].format(expr)
    return expr
