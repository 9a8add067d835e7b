"""Linear genetic programming on fixed-length instruction sequences.

A program is a sequence of ``genes_count`` indices into
``config.gp_operations``, run as a left-to-right fold over one register (see
``evo_viz.primitives.evaluate_gp``). Fitness is the program's error, so GP
minimises:

- Linear: distance of the output from 0, starting from 50.
- Sine: mean absolute error against sin(x) over 31 samples of [0, 2π].

The step mirrors the GA: the two lowest-error programs are carried unchanged
into slots 0 and 1, the rest are tournament-selected pairs recombined by
single-point crossover, each child then has a ``mutation_rate`` chance of one
instruction being replaced by a different one.

Locked instructions (``GPOperation.is_locked``) are mandatory. Every program
holds each locked instruction at least once: initial programs and crossover
children missing one get it written over a random unlocked position, and
mutation never overwrites or introduces a locked instruction.
"""

import logging

import numpy as np

# Import selection and survival modules to trigger strategy registration
import evo_viz.selection  # noqa: F401
import evo_viz.survival  # noqa: F401
from evo_viz.config import EAConfig
from evo_viz.logs import GPLogEntry
from evo_viz.operators import crossover_point, replace_instruction, single_point_crossover
from evo_viz.population import Population
from evo_viz.primitives import ensure_rng, gp_fitness, random_int, render_program
from evo_viz.registry import SelectionRegistry, SurvivalRegistry
from evo_viz.results import StepResult

logger = logging.getLogger(__name__)

ELITE_COUNT = 2


def locked_operations(config: EAConfig) -> list[int]:
    """Return the indices of the locked instructions of ``config``."""
    return [i for i, op in enumerate(config.gp_operations) if op.is_locked]


def _validate(config: EAConfig) -> None:
    if not config.gp_operations:
        raise ValueError("GP requires at least one operation")
    n_locked = len(locked_operations(config))
    if n_locked > config.genes_count:
        raise ValueError(
            f"GP programs of length {config.genes_count} cannot hold {n_locked} locked operations"
        )


def _enforce_locked(genes: np.ndarray, locked: list[int], rng: np.random.Generator) -> np.ndarray:
    """Write every missing locked instruction over a random replaceable position.

    A position is replaceable if it holds an unlocked instruction or a
    duplicate of a locked one.
    """
    repaired = genes.copy()
    for op in locked:
        if op in repaired:
            continue
        counts = np.bincount(repaired, minlength=max(locked) + 1)
        free = [i for i, g in enumerate(repaired) if int(g) not in locked or counts[int(g)] > 1]
        repaired[free[int(rng.integers(0, len(free)))]] = op
    return repaired


def init_gp(config: EAConfig, rng: np.random.Generator | None = None) -> Population:
    """Create ``population_size`` random programs of ``genes_count`` instructions.

    Raises:
        ValueError: If the instruction set is empty or the programs are too
            short to hold every locked instruction.
    """
    _validate(config)
    rng = ensure_rng(rng)

    n_ops = len(config.gp_operations)
    locked = locked_operations(config)
    raw = np.asarray(random_int(rng, 0, n_ops - 1, size=(config.population_size, config.genes_count)), dtype=np.int64)
    genes = np.stack([_enforce_locked(program, locked, rng) for program in raw])
    fitness = np.array([gp_fitness(program, config) for program in genes], dtype=np.float64)
    return Population(genes=genes, fitness=fitness)


def step_gp(pop: Population, config: EAConfig, rng: np.random.Generator | None = None) -> StepResult:
    """Produce the next generation of programs.

    Args:
        pop: Current generation.
        config: Run configuration; uses population_size, mutation_rate,
            tournament_size, gp_problem and gp_operations.
        rng: Random number generator.

    Returns:
        StepResult with the next population (elites in slots 0 and 1) and one
        GPLogEntry per non-elite child.

    Raises:
        ValueError: If the configuration is not valid for GP or the population
            has fewer than two individuals.
    """
    _validate(config)
    if len(pop) < ELITE_COUNT or config.population_size < ELITE_COUNT:
        raise ValueError(f"GP requires at least {ELITE_COUNT} individuals")
    rng = ensure_rng(rng)

    n_ops = len(config.gp_operations)
    locked = locked_operations(config)
    select = SelectionRegistry.get("tournament", tournament_size=config.tournament_size, maximize=False)
    survive = SurvivalRegistry.get("elitist", elite_count=ELITE_COUNT, maximize=False)

    elite_indices, _ = survive(pop, config.population_size)
    next_genes: list[np.ndarray] = [pop.genes[i].copy() for i in elite_indices]
    next_fitness: list[float] = [float(pop.fitness[i]) for i in elite_indices]
    logs: list[GPLogEntry] = []

    def add_child(genes: np.ndarray, first_parent: int, second_parent: int, cut: int) -> None:
        before = _enforce_locked(genes, locked, rng)
        after, mutation_index = replace_instruction(before, config.mutation_rate, n_ops, rng, locked=locked)
        logs.append(
            GPLogEntry(
                id=len(next_genes),
                parents=(first_parent, second_parent),
                crossover_point=cut,
                mutation_index=mutation_index,
                expression_before=render_program(before, config),
                expression_after=render_program(after, config),
            )
        )
        next_genes.append(after)
        next_fitness.append(gp_fitness(after, config))

    while len(next_genes) < config.population_size:
        p1_idx, p2_idx = select(pop, 2, rng)
        p1, p2 = pop[int(p1_idx)], pop[int(p2_idx)]

        cut = crossover_point(pop.n_genes, rng)
        child1, child2 = single_point_crossover(p1.genes, p2.genes, cut)

        add_child(child1, p1.id, p2.id, cut)
        if len(next_genes) < config.population_size:
            add_child(child2, p2.id, p1.id, cut)

    next_pop = Population(genes=np.stack(next_genes), fitness=np.array(next_fitness, dtype=np.float64))
    logger.debug(f"GP step: best error {float(next_pop.fitness.min()):.4f}, {len(logs)} children")
    return StepResult(next_population=next_pop, log=logs)
