"""Standard variation operators.

This module provides the crossover and mutation operators used by the five
algorithms:

- single_point_crossover: Two children from two parents (GA, GP)
- flip_bit: One-bit mutation of a binary genome (GA)
- replace_instruction: One-instruction mutation of a GP program
- differential_mutation: a + F·(b − c) mutant vector (DE)
- binomial_crossover: Per-gene mix of target and mutant (DE)
- gaussian_perturbation: Additive Gaussian noise (ES)

Operators take the random generator explicitly and never modify their inputs.
"""

from collections.abc import Sequence

import numpy as np

from evo_viz.primitives import random_gaussian

Bounds = tuple[float, float]


def crossover_point(n_genes: int, rng: np.random.Generator) -> int:
    """Draw a cut position in [1, n_genes - 1], or 0 for genomes shorter than 2."""
    return int(rng.integers(1, n_genes)) if n_genes > 1 else 0


def single_point_crossover(
    p1: np.ndarray, p2: np.ndarray, point: int
) -> tuple[np.ndarray, np.ndarray]:
    """Swap the tails of two parents at ``point``.

    Returns:
        Tuple (p1[:point] + p2[point:], p2[:point] + p1[point:]).

    Example:
        >>> single_point_crossover(np.array([1, 1, 1]), np.array([0, 0, 0]), 1)
        (array([1, 0, 0]), array([0, 1, 1]))
    """
    child1 = np.concatenate([p1[:point], p2[point:]])
    child2 = np.concatenate([p2[:point], p1[point:]])
    return child1, child2


def flip_bit(
    genes: np.ndarray, rate: float, rng: np.random.Generator
) -> tuple[np.ndarray, int | None]:
    """With probability ``rate`` flip one uniformly chosen bit.

    Returns:
        Tuple of (mutated copy, flipped position or None).
    """
    mutated = genes.copy()
    if rng.random() < rate and len(genes) > 0:
        idx = int(rng.integers(0, len(genes)))
        mutated[idx] = 0 if mutated[idx] == 1 else 1
        return mutated, idx
    return mutated, None


def replace_instruction(
    genes: np.ndarray,
    rate: float,
    n_ops: int,
    rng: np.random.Generator,
    locked: Sequence[int] = (),
) -> tuple[np.ndarray, int | None]:
    """With probability ``rate`` replace one instruction by a different one.

    The position is drawn among positions that do not hold a locked
    instruction, and the replacement is never a locked instruction, so locked
    instructions are neither removed nor duplicated by mutation.

    Args:
        genes: Program as instruction indices.
        rate: Mutation probability.
        n_ops: Size of the instruction set.
        rng: Random number generator.
        locked: Indices of locked instructions.

    Returns:
        Tuple of (mutated copy, mutated position or None). None is also
        returned when no mutable position or alternative instruction exists.
    """
    mutated = genes.copy()
    if rng.random() >= rate:
        return mutated, None

    locked_set = set(locked)
    positions = [i for i, g in enumerate(genes) if int(g) not in locked_set]
    if not positions:
        return mutated, None
    pos = positions[int(rng.integers(0, len(positions)))]

    choices = [op for op in range(n_ops) if op != int(genes[pos]) and op not in locked_set]
    if not choices:
        return mutated, None
    mutated[pos] = choices[int(rng.integers(0, len(choices)))]
    return mutated, pos


def differential_mutation(
    a: np.ndarray, b: np.ndarray, c: np.ndarray, F: float, bounds: Bounds
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Build the DE mutant vector ``a + F·(b − c)``, clipped to ``bounds``.

    Returns:
        Tuple of (difference b − c, weighted difference, clipped mutant).
    """
    diff = b - c
    weighted = F * diff
    lower, upper = bounds
    mutant = np.clip(a + weighted, lower, upper)
    return diff, weighted, mutant


def binomial_crossover(
    target: np.ndarray, mutant: np.ndarray, crossover_rate: float, rng: np.random.Generator
) -> np.ndarray:
    """Mix target and mutant gene by gene.

    A forced index R is drawn first and always takes the mutant gene; every
    other gene takes the mutant gene with probability ``crossover_rate``.
    """
    n_genes = len(target)
    forced = int(rng.integers(0, n_genes))
    take_mutant = rng.random(n_genes) < crossover_rate
    take_mutant[forced] = True
    return np.where(take_mutant, mutant, target)


def gaussian_perturbation(
    genes: np.ndarray, sigma: float, bounds: Bounds, rng: np.random.Generator
) -> tuple[np.ndarray, np.ndarray]:
    """Add N(0, sigma) noise to every gene and clip to ``bounds``.

    Returns:
        Tuple of (noise vector, clipped child).
    """
    noise = np.asarray(random_gaussian(rng, 0.0, sigma, size=len(genes)), dtype=np.float64)
    lower, upper = bounds
    return noise, np.clip(genes + noise, lower, upper)
