"""evo-viz: Step-by-step evolutionary computation engine.

A numpy implementation of five evolutionary strategies designed to be watched
one generation at a time:

- GA: genetic algorithm on a 0/1 knapsack
- DE: differential evolution on Sphere or Ackley
- PSO: particle swarm optimization on Sphere or Ackley
- ES: (mu + lambda) evolution strategy on Sphere or Ackley
- GP: linear genetic programming reaching a number or fitting sin(x)

Every algorithm exposes ``init(config, rng)`` and ``step(pop, config, rng)``;
``step`` returns the next population and a per-individual log of what
happened.

Example (single step):
    >>> import numpy as np
    >>> from evo_viz import EAConfig, init_de, step_de
    >>> config = EAConfig(population_size=6, genes_count=2)
    >>> rng = np.random.default_rng(42)
    >>> pop = init_de(config, rng)
    >>> next_pop, log = step_de(pop, config, rng)
    >>> len(log)
    6

Example (full run):
    >>> from evo_viz import Runner
    >>> result = Runner("ga", seed=42).run()
    >>> len(result.history)
    11
"""

from evo_viz.algorithms import (
    init_de,
    init_es,
    init_ga,
    init_gp,
    init_pso,
    step_de,
    step_es,
    step_ga,
    step_gp,
    step_pso,
)
from evo_viz.config import (
    DEFAULT_CAPACITY,
    DEFAULT_CONFIG,
    DEFAULT_GP_LINEAR_OPS,
    DEFAULT_GP_SINE_OPS,
    DEFAULT_KNAPSACK_ITEMS,
    EAConfig,
    GPOperation,
    KnapsackItem,
)
from evo_viz.logs import DELogEntry, ESLogEntry, GALogEntry, GPLogEntry, PSOLogEntry
from evo_viz.operators import lift
from evo_viz.population import Individual, Population
from evo_viz.primitives import (
    ackley,
    evaluate_gp,
    gp_fitness,
    knapsack,
    random_gaussian,
    random_int,
    render_program,
    sphere,
)
from evo_viz.registry import (
    AlgorithmRegistry,
    AlgorithmSpec,
    SelectionRegistry,
    SurvivalRegistry,
    list_algorithms,
    list_selections,
    list_survivals,
)
from evo_viz.results import HistoryPoint, RunResult, StepResult
from evo_viz.runner import Runner
from evo_viz.selection import fitness_tournament
from evo_viz.survival import elitist_survival, truncation_survival

__all__ = [
    # Algorithms
    "init_ga",
    "step_ga",
    "init_de",
    "step_de",
    "init_pso",
    "step_pso",
    "init_es",
    "step_es",
    "init_gp",
    "step_gp",
    # Driver
    "Runner",
    # Configuration
    "EAConfig",
    "KnapsackItem",
    "GPOperation",
    "DEFAULT_CONFIG",
    "DEFAULT_KNAPSACK_ITEMS",
    "DEFAULT_CAPACITY",
    "DEFAULT_GP_LINEAR_OPS",
    "DEFAULT_GP_SINE_OPS",
    # Fitness functions and random draws
    "sphere",
    "ackley",
    "knapsack",
    "evaluate_gp",
    "gp_fitness",
    "render_program",
    "random_int",
    "random_gaussian",
    "lift",
    # Selection and survival strategies
    "fitness_tournament",
    "elitist_survival",
    "truncation_survival",
    # Registry system
    "AlgorithmRegistry",
    "AlgorithmSpec",
    "SelectionRegistry",
    "SurvivalRegistry",
    "list_algorithms",
    "list_selections",
    "list_survivals",
    # Data structures
    "Population",
    "Individual",
    # Results and logs
    "StepResult",
    "HistoryPoint",
    "RunResult",
    "GALogEntry",
    "DELogEntry",
    "PSOLogEntry",
    "ESLogEntry",
    "GPLogEntry",
]
