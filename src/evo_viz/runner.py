"""Run driver for a single algorithm.

The Runner plays the part of the visualizer page: it holds the configuration,
the current population and the fitness history, and calls the active
algorithm's ``init`` on reset and ``step`` on every tick until the generation
ceiling is reached. Calls are synchronous; a step either completes or is not
issued.

Example:
    >>> from evo_viz import EAConfig, Runner
    >>> runner = Runner("pso", seed=42)
    >>> result = runner.run()
    >>> result.generations
    10
    >>> len(result.history)
    11
"""

import logging

import numpy as np

# Import algorithms to trigger registration
import evo_viz.algorithms  # noqa: F401
from evo_viz.config import EAConfig
from evo_viz.logs import StepLog
from evo_viz.population import Population
from evo_viz.registry import AlgorithmRegistry
from evo_viz.results import HistoryPoint, RunResult

logger = logging.getLogger(__name__)


class Runner:
    """Drives one algorithm generation by generation.

    Args:
        algorithm: Registered algorithm name, case-insensitive.
        config: Run configuration. Defaults to ``EAConfig().for_algorithm(algorithm)``.
        seed: Seed for the random generator. If None, uses system entropy.
        rng: Explicit random generator; takes precedence over ``seed``.

    Raises:
        KeyError: If the algorithm is not registered.

    Attributes:
        population: The current generation.
        generation: Number of steps applied since the last reset.
        history: One HistoryPoint per generation, starting at generation 0.
        log: Step log of the last step, empty right after a reset.
    """

    def __init__(
        self,
        algorithm: str,
        config: EAConfig | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.spec = AlgorithmRegistry.get(algorithm)
        self.config = config if config is not None else EAConfig().for_algorithm(self.spec.name)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.population: Population
        self.generation = 0
        self.history: list[HistoryPoint] = []
        self.log: StepLog = []
        self.reset()

    @property
    def done(self) -> bool:
        """True once the generation ceiling has been reached."""
        return self.generation >= self.config.max_generations

    def update_config(self, config: EAConfig) -> None:
        """Replace the configuration used by subsequent steps.

        The caller is responsible for keeping it consistent with the current
        population (genome length, instruction set).
        """
        self.config = config

    def reset(self) -> Population:
        """Create generation 0 and restart the history."""
        self.population = self.spec.init(self.config, self.rng)
        self.generation = 0
        self.history = [HistoryPoint.from_population(0, self.population, maximize=self.spec.maximize)]
        self.log = []
        logger.info(
            f"{self.spec.name} reset: {len(self.population)} individuals, "
            f"best fitness {self.history[0].best_fitness:g}"
        )
        return self.population

    def step(self) -> HistoryPoint | None:
        """Advance one generation.

        Returns:
            The new HistoryPoint, or None if the generation ceiling was
            already reached (nothing is computed in that case).
        """
        if self.done:
            logger.info(f"{self.spec.name} reached max_generations={self.config.max_generations}")
            return None

        result = self.spec.step(self.population, self.config, self.rng)
        self.population = result.next_population
        self.log = result.log
        self.generation += 1

        point = HistoryPoint.from_population(self.generation, self.population, maximize=self.spec.maximize)
        self.history.append(point)
        logger.debug(
            f"{self.spec.name} generation {point.generation}: "
            f"best={point.best_fitness:g} avg={point.avg_fitness:g}"
        )
        return point

    def run(self) -> RunResult:
        """Step until the generation ceiling and return the final state."""
        while self.step() is not None:
            pass
        return self.result()

    def result(self) -> RunResult:
        """Return a snapshot of the current state."""
        return RunResult(
            algorithm=self.spec.name,
            population=self.population,
            history=tuple(self.history),
            generations=self.generation,
            log=list(self.log),
            maximize=self.spec.maximize,
        )
