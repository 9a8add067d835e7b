"""Genetic algorithm for the 0/1 knapsack problem.

Each individual is a bit string with one bit per knapsack item; its fitness is
the total value of the selected items, or 0 if they exceed the capacity. The
GA maximises fitness.

One step:
    1. Sort the population by fitness, best first (stable).
    2. Copy the two best individuals unchanged into slots 0 and 1.
    3. Until the population is full: pick two parents by tournament from the
       unsorted population, cut both at one random point, swap the tails,
       give each child a chance of one bit flip, evaluate, append.
    4. Ids are the slots of the new population.

Tournament size follows ``config.tournament_size``; the visualizer's
default configuration uses 3. A tournament of size 2 reproduces a plain binary
tournament.

Example:
    >>> from evo_viz import EAConfig
    >>> from evo_viz.algorithms.ga import init_ga, step_ga
    >>> config = EAConfig(population_size=8)
    >>> rng = np.random.default_rng(42)
    >>> pop = init_ga(config, rng)
    >>> next_pop, log = step_ga(pop, config, rng)
    >>> len(next_pop), len(log)
    (8, 6)
"""

import logging

import numpy as np

# Import selection and survival modules to trigger strategy registration
import evo_viz.selection  # noqa: F401
import evo_viz.survival  # noqa: F401
from evo_viz.config import EAConfig
from evo_viz.logs import GALogEntry
from evo_viz.operators import crossover_point, flip_bit, single_point_crossover
from evo_viz.population import Population
from evo_viz.primitives import ensure_rng, knapsack, random_int
from evo_viz.registry import SelectionRegistry, SurvivalRegistry
from evo_viz.results import StepResult

logger = logging.getLogger(__name__)

ELITE_COUNT = 2


def _validate(config: EAConfig) -> None:
    if not config.knapsack_items:
        raise ValueError("GA requires at least one knapsack item")
    if config.population_size < ELITE_COUNT:
        raise ValueError(f"GA requires population_size >= {ELITE_COUNT}, got {config.population_size}")


def init_ga(config: EAConfig, rng: np.random.Generator | None = None) -> Population:
    """Create ``population_size`` random bit strings, one bit per knapsack item.

    Raises:
        ValueError: If there are no knapsack items or fewer than two individuals.
    """
    _validate(config)
    rng = ensure_rng(rng)

    n_genes = len(config.knapsack_items)
    genes = np.asarray(random_int(rng, 0, 1, size=(config.population_size, n_genes)), dtype=np.int64)
    fitness = np.array(
        [knapsack(g, config.knapsack_items, config.knapsack_capacity).fitness for g in genes],
        dtype=np.float64,
    )
    return Population(genes=genes, fitness=fitness)


def step_ga(pop: Population, config: EAConfig, rng: np.random.Generator | None = None) -> StepResult:
    """Produce the next knapsack generation.

    Args:
        pop: Current generation.
        config: Run configuration; uses population_size, mutation_rate,
            tournament_size, knapsack_items and knapsack_capacity.
        rng: Random number generator.

    Returns:
        StepResult with the next population (elites in slots 0 and 1) and one
        GALogEntry per non-elite child.

    Raises:
        ValueError: If the configuration is not valid for GA or the population
            has fewer than two individuals.
    """
    _validate(config)
    if len(pop) < ELITE_COUNT:
        raise ValueError(f"GA requires at least {ELITE_COUNT} individuals, got {len(pop)}")
    rng = ensure_rng(rng)

    n_genes = len(config.knapsack_items)
    select = SelectionRegistry.get("tournament", tournament_size=config.tournament_size, maximize=True)
    survive = SurvivalRegistry.get("elitist", elite_count=ELITE_COUNT, maximize=True)

    elite_indices, _ = survive(pop, config.population_size)
    next_genes: list[np.ndarray] = [pop.genes[i].copy() for i in elite_indices]
    next_fitness: list[float] = [float(pop.fitness[i]) for i in elite_indices]
    logs: list[GALogEntry] = []

    def add_child(genes: np.ndarray, first_parent: int, second_parent: int, cut: int) -> None:
        final, mutation_index = flip_bit(genes, config.mutation_rate, rng)
        evaluation = knapsack(final, config.knapsack_items, config.knapsack_capacity)
        logs.append(
            GALogEntry(
                id=len(next_genes),
                parents=(first_parent, second_parent),
                crossover_point=cut,
                pre_mutation=genes,
                mutation_index=mutation_index,
                final=final,
                is_valid=evaluation.is_valid,
                weight=evaluation.weight,
            )
        )
        next_genes.append(final)
        next_fitness.append(evaluation.fitness)

    while len(next_genes) < config.population_size:
        p1_idx, p2_idx = select(pop, 2, rng)
        p1, p2 = pop[int(p1_idx)], pop[int(p2_idx)]

        cut = crossover_point(n_genes, rng)
        child1, child2 = single_point_crossover(p1.genes, p2.genes, cut)

        add_child(child1, p1.id, p2.id, cut)
        if len(next_genes) < config.population_size:
            add_child(child2, p2.id, p1.id, cut)

    next_pop = Population(genes=np.stack(next_genes), fitness=np.array(next_fitness, dtype=np.float64))
    n_mutated = sum(entry.mutation_index is not None for entry in logs)
    logger.debug(f"GA step: best value {float(next_pop.fitness.max()):g}, {len(logs)} children, {n_mutated} mutated")
    return StepResult(next_population=next_pop, log=logs)
