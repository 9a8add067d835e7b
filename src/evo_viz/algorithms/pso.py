"""Particle swarm optimization on the Sphere or Ackley landscape.

Velocity update per particle and dimension j, with fresh r1, r2 ~ U(0, 1):

    v_j' = w·v_j + c1·r1·(pbest_j − x_j) + c2·r2·(gbest_j − x_j)

The new velocity is clipped to [-5, 5] and rounded to the nearest integer
(halves round up), then the position x + v' is clipped to [-10, 10]. A
particle's personal best only moves on strict improvement. The global best is
the first particle with the lowest personal best fitness.

Ids stay with their slot; PSO never renumbers.
"""

import logging

import numpy as np

from evo_viz.config import EAConfig
from evo_viz.logs import PSOLogEntry
from evo_viz.operators import lift
from evo_viz.population import Population
from evo_viz.primitives import continuous_fitness, ensure_rng, random_int
from evo_viz.results import StepResult

logger = logging.getLogger(__name__)

INIT_POSITION_BOUNDS = (-5, 5)
INIT_VELOCITY_BOUNDS = (-2, 2)
VELOCITY_BOUNDS = (-5.0, 5.0)
POSITION_BOUNDS = (-10.0, 10.0)


def init_pso(config: EAConfig, rng: np.random.Generator | None = None) -> Population:
    """Create a swarm with integer positions in [-5, 5] and velocities in [-2, 2].

    Each particle's personal best starts at its initial position.
    """
    rng = ensure_rng(rng)
    shape = (config.population_size, config.genes_count)

    positions = np.asarray(random_int(rng, *INIT_POSITION_BOUNDS, size=shape), dtype=np.float64)
    velocity = np.asarray(random_int(rng, *INIT_VELOCITY_BOUNDS, size=shape), dtype=np.float64)
    fitness = lift(continuous_fitness(config.problem_type))(positions)

    return Population(
        genes=positions,
        fitness=fitness,
        velocity=velocity,
        best_position=positions,
        best_fitness=fitness,
    )


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def step_pso(pop: Population, config: EAConfig, rng: np.random.Generator | None = None) -> StepResult:
    """Move every particle once.

    Args:
        pop: Current swarm. Must carry velocity and personal best arrays.
        config: Run configuration; uses w, c1, c2 and problem_type.
        rng: Random number generator.

    Returns:
        StepResult with the moved swarm and one PSOLogEntry per particle.

    Raises:
        ValueError: If the population carries no particle state or is empty.
    """
    if not pop.is_swarm:
        raise ValueError("PSO requires a population with velocity and personal best state")
    if len(pop) == 0:
        raise ValueError("PSO requires at least one particle")
    rng = ensure_rng(rng)
    fitness_fn = continuous_fitness(config.problem_type)

    # np.argmin keeps the first particle on ties
    global_best = pop.best_position[int(np.argmin(pop.best_fitness))]

    n, n_genes = pop.genes.shape
    new_genes = np.empty((n, n_genes), dtype=np.float64)
    new_velocity = np.empty((n, n_genes), dtype=np.float64)
    new_fitness = np.empty(n, dtype=np.float64)
    best_position = pop.best_position.astype(np.float64)
    best_fitness = pop.best_fitness.copy()
    logs: list[PSOLogEntry] = []

    for i in range(n):
        x = pop.genes[i]
        v = pop.velocity[i]

        # r1, r2 drawn in pairs per dimension
        r = rng.random((n_genes, 2))
        inertia = config.w * v
        cognitive = config.c1 * r[:, 0] * (pop.best_position[i] - x)
        social = config.c2 * r[:, 1] * (global_best - x)

        velocity = _round_half_up(np.clip(inertia + cognitive + social, *VELOCITY_BOUNDS))
        position = np.clip(x + velocity, *POSITION_BOUNDS)
        fitness = fitness_fn(position)

        if fitness < best_fitness[i]:
            best_position[i] = position
            best_fitness[i] = fitness

        new_genes[i] = position
        new_velocity[i] = velocity
        new_fitness[i] = fitness

        logs.append(
            PSOLogEntry(
                id=int(pop.ids[i]),
                old_velocity=v.copy(),
                inertia_term=inertia,
                cognitive_term=cognitive,
                social_term=social,
                new_velocity=velocity,
                new_position=position,
            )
        )

    next_pop = Population(
        genes=new_genes,
        fitness=new_fitness,
        ids=pop.ids,
        velocity=new_velocity,
        best_position=best_position,
        best_fitness=best_fitness,
    )
    logger.debug(f"PSO step: global best fitness {float(best_fitness.min()):.4f}")
    return StepResult(next_population=next_pop, log=logs)
