"""(mu + lambda) evolution strategy on the Sphere or Ackley landscape.

One step:
    1. Create lambda = ``config.n_offspring`` children. Each picks a parent
       uniformly at random (with replacement) and adds N(0, sigma) noise to
       every gene, clipped to [-5, 5]. Child k gets the temporary id mu + k.
    2. Pool parents and children, sort ascending by fitness (stable) and keep
       the first mu = ``config.population_size``.
    3. Survivors are renumbered 0..mu-1 in sorted order.

The log records, per child, whether the child and its parent are among the
survivors. The two flags are independent.
"""

import logging

import numpy as np

# Import survival module to trigger strategy registration
import evo_viz.survival  # noqa: F401
from evo_viz.config import EAConfig
from evo_viz.logs import ESLogEntry
from evo_viz.operators import gaussian_perturbation, lift
from evo_viz.population import Population
from evo_viz.primitives import continuous_fitness, ensure_rng, random_int
from evo_viz.registry import SurvivalRegistry
from evo_viz.results import StepResult

logger = logging.getLogger(__name__)

INIT_BOUNDS = (-5, 5)
CHILD_BOUNDS = (-5.0, 5.0)


def init_es(config: EAConfig, rng: np.random.Generator | None = None) -> Population:
    """Create mu = ``population_size`` vectors of integer genes drawn from [-5, 5]."""
    rng = ensure_rng(rng)
    genes = np.asarray(
        random_int(rng, *INIT_BOUNDS, size=(config.population_size, config.genes_count)), dtype=np.float64
    )
    return Population(genes=genes, fitness=lift(continuous_fitness(config.problem_type))(genes))


def step_es(pop: Population, config: EAConfig, rng: np.random.Generator | None = None) -> StepResult:
    """Produce the next (mu + lambda) generation.

    Args:
        pop: Current parents.
        config: Run configuration; uses population_size (mu), offspring_size
            (lambda), sigma and problem_type.
        rng: Random number generator.

    Returns:
        StepResult with the mu survivors and one ESLogEntry per child.

    Raises:
        ValueError: If the population is empty.
    """
    if len(pop) == 0:
        raise ValueError("ES requires at least one parent")
    rng = ensure_rng(rng)
    fitness_fn = continuous_fitness(config.problem_type)

    mu = config.population_size
    n_offspring = config.n_offspring
    survive = SurvivalRegistry.get("truncation")

    child_genes = np.empty((n_offspring, pop.n_genes), dtype=np.float64)
    child_fitness = np.empty(n_offspring, dtype=np.float64)
    # Temporary child ids start at mu and never collide with parent ids
    first_child_id = max(mu, int(pop.ids.max()) + 1)
    child_ids = np.arange(first_child_id, first_child_id + n_offspring, dtype=np.intp)
    parent_positions = np.empty(n_offspring, dtype=np.intp)
    noise_vectors = np.empty((n_offspring, pop.n_genes), dtype=np.float64)

    for k in range(n_offspring):
        parent_idx = int(random_int(rng, 0, len(pop) - 1))
        noise, child = gaussian_perturbation(pop.genes[parent_idx], config.sigma, CHILD_BOUNDS, rng)
        parent_positions[k] = parent_idx
        noise_vectors[k] = noise
        child_genes[k] = child
        child_fitness[k] = fitness_fn(child)

    pool = Population(
        genes=np.concatenate([pop.genes.astype(np.float64), child_genes]),
        fitness=np.concatenate([pop.fitness, child_fitness]),
        ids=np.concatenate([pop.ids, child_ids]),
    )
    survivor_indices, _ = survive(pool, min(mu, len(pool)))
    survivor_ids = {int(i) for i in pool.ids[survivor_indices]}

    logs = []
    for k in range(n_offspring):
        parent = pop[int(parent_positions[k])]
        logs.append(
            ESLogEntry(
                id=int(child_ids[k]),
                parent_id=parent.id,
                parent_genes=parent.genes.copy(),
                parent_fitness=parent.fitness,
                noise_vector=noise_vectors[k],
                child_genes=child_genes[k],
                child_fitness=float(child_fitness[k]),
                is_child_survivor=int(child_ids[k]) in survivor_ids,
                is_parent_survivor=parent.id in survivor_ids,
            )
        )

    next_pop = pool.take(survivor_indices, renumber=True)
    logger.debug(
        f"ES step: {sum(e.is_child_survivor for e in logs)}/{n_offspring} children survived, "
        f"best fitness {float(next_pop.fitness[0]):.4f}"
    )
    return StepResult(next_population=next_pop, log=logs)
