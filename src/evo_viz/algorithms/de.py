"""Differential evolution (DE/rand/1/bin) on the Sphere or Ackley landscape.

For every target vector, index for index:
    1. Draw three distinct helpers r1, r2, r3, all different from the target.
    2. Mutant = a + F·(b − c), clipped to [-10, 10].
    3. Binomial crossover of target and mutant with one forced mutant gene.
    4. Greedy replacement: the trial takes the slot if its fitness is lower
       than or equal to the target's.

Ids stay with their slot; DE never renumbers. The differential weight is
``config.F``.
"""

import logging

import numpy as np

from evo_viz.config import EAConfig
from evo_viz.logs import DELogEntry
from evo_viz.operators import binomial_crossover, differential_mutation, lift
from evo_viz.population import Population
from evo_viz.primitives import continuous_fitness, ensure_rng, random_int
from evo_viz.results import StepResult

logger = logging.getLogger(__name__)

INIT_BOUNDS = (-5, 5)
MUTANT_BOUNDS = (-10.0, 10.0)
MIN_POPULATION = 4


def init_de(config: EAConfig, rng: np.random.Generator | None = None) -> Population:
    """Create ``population_size`` vectors of integer genes drawn from [-5, 5].

    Raises:
        ValueError: If population_size is below 4.
    """
    if config.population_size < MIN_POPULATION:
        raise ValueError(f"DE requires population_size >= {MIN_POPULATION}, got {config.population_size}")
    rng = ensure_rng(rng)

    low, high = INIT_BOUNDS
    genes = np.asarray(
        random_int(rng, low, high, size=(config.population_size, config.genes_count)), dtype=np.float64
    )
    evaluate = lift(continuous_fitness(config.problem_type))
    return Population(genes=genes, fitness=evaluate(genes))


def _draw_helpers(target: int, pop_size: int, rng: np.random.Generator) -> tuple[int, int, int]:
    """Draw three distinct indices different from ``target``, in draw order."""
    drawn = [target]
    while len(drawn) < 4:
        idx = int(rng.integers(0, pop_size))
        if idx not in drawn:
            drawn.append(idx)
    return drawn[1], drawn[2], drawn[3]


def step_de(pop: Population, config: EAConfig, rng: np.random.Generator | None = None) -> StepResult:
    """Produce the next DE generation.

    Args:
        pop: Current generation.
        config: Run configuration; uses F, crossover_rate and problem_type.
        rng: Random number generator.

    Returns:
        StepResult where slot i holds either the trial vector of target i or
        target i itself, and one DELogEntry per target.

    Raises:
        ValueError: If the population has fewer than 4 individuals.
    """
    pop_size = len(pop)
    if pop_size < MIN_POPULATION:
        raise ValueError(f"DE requires at least {MIN_POPULATION} individuals, got {pop_size}")
    rng = ensure_rng(rng)
    fitness_fn = continuous_fitness(config.problem_type)

    next_genes = pop.genes.astype(np.float64)
    next_fitness = pop.fitness.copy()
    logs: list[DELogEntry] = []

    for i in range(pop_size):
        target = pop[i]
        r1, r2, r3 = _draw_helpers(i, pop_size, rng)

        diff, weighted, mutant = differential_mutation(
            pop.genes[r1], pop.genes[r2], pop.genes[r3], config.F, MUTANT_BOUNDS
        )
        trial = binomial_crossover(target.genes, mutant, config.crossover_rate, rng)

        trial_fitness = fitness_fn(trial)
        replaces = trial_fitness <= target.fitness
        if replaces:
            next_genes[i] = trial
            next_fitness[i] = trial_fitness

        logs.append(
            DELogEntry(
                id=target.id,
                target_id=target.id,
                target_fitness=target.fitness,
                r1=int(pop.ids[r1]),
                r2=int(pop.ids[r2]),
                r3=int(pop.ids[r3]),
                diff_vector=diff,
                weighted_diff=weighted,
                mutant_vector=mutant,
                mutant_fitness=fitness_fn(mutant),
                trial_vector=trial.astype(np.float64),
                trial_fitness=trial_fitness,
                replaces_target=replaces,
            )
        )

    next_pop = Population(genes=next_genes, fitness=next_fitness, ids=pop.ids)
    logger.debug(f"DE step: {sum(e.replaces_target for e in logs)}/{pop_size} targets replaced")
    return StepResult(next_population=next_pop, log=logs)
