"""Evolutionary algorithm implementations.

Each algorithm exposes ``init_<name>(config, rng)`` and
``step_<name>(pop, config, rng)``. Importing this package registers all five
with the AlgorithmRegistry.
"""

from evo_viz.algorithms.de import init_de, step_de
from evo_viz.algorithms.es import init_es, step_es
from evo_viz.algorithms.ga import init_ga, step_ga
from evo_viz.algorithms.gp import init_gp, step_gp
from evo_viz.algorithms.pso import init_pso, step_pso
from evo_viz.registry import AlgorithmRegistry, AlgorithmSpec

# Register built-in algorithms
AlgorithmRegistry.register(AlgorithmSpec("GA", init_ga, step_ga, maximize=True, renumbers_ids=True))
AlgorithmRegistry.register(AlgorithmSpec("DE", init_de, step_de, renumbers_ids=False))
AlgorithmRegistry.register(AlgorithmSpec("PSO", init_pso, step_pso, renumbers_ids=False))
AlgorithmRegistry.register(AlgorithmSpec("ES", init_es, step_es, renumbers_ids=True))
AlgorithmRegistry.register(AlgorithmSpec("GP", init_gp, step_gp, renumbers_ids=True))

__all__ = [
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
]
