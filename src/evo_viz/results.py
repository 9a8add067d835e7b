"""Result types produced by the algorithms and the run driver.

- StepResult: The next generation plus the step log of one step
- HistoryPoint: Best and average fitness of one generation
- RunResult: Final state of a run driven to its generation ceiling

All classes are immutable (frozen dataclasses).
"""

from dataclasses import dataclass, field

import numpy as np

from evo_viz.logs import StepLog
from evo_viz.population import Population


@dataclass(frozen=True)
class StepResult:
    """Outcome of one ``step`` call.

    Attributes:
        next_population: The new generation.
        log: One entry per relevant individual. Replaces the previous step's log.

    Example:
        >>> next_pop, log = step_de(pop, config, rng)
    """

    next_population: Population
    log: StepLog = field(default_factory=list)

    def __iter__(self):
        yield self.next_population
        yield self.log


@dataclass(frozen=True)
class HistoryPoint:
    """Summary statistics of one generation.

    ``best_fitness`` is the maximum for GA (knapsack value) and the minimum
    for every other algorithm.
    """

    generation: int
    best_fitness: float
    avg_fitness: float

    @classmethod
    def from_population(cls, generation: int, pop: Population, maximize: bool = False) -> "HistoryPoint":
        """Compute the history point of ``pop``.

        Raises:
            ValueError: If the population is empty.
        """
        if len(pop) == 0:
            raise ValueError("cannot summarise an empty population")
        best = np.max(pop.fitness) if maximize else np.min(pop.fitness)
        return cls(generation=generation, best_fitness=float(best), avg_fitness=float(np.mean(pop.fitness)))

    def to_dict(self) -> dict[str, float]:
        return {"generation": self.generation, "bestFitness": self.best_fitness, "avgFitness": self.avg_fitness}


@dataclass(frozen=True)
class RunResult:
    """Final state of a run.

    Attributes:
        algorithm: Registered algorithm name.
        population: The last generation.
        history: One point per generation, starting at generation 0.
        generations: Number of steps completed.
        log: Step log of the last step (empty if no step ran).
        maximize: Whether higher fitness is better for this algorithm.
    """

    algorithm: str
    population: Population
    history: tuple[HistoryPoint, ...]
    generations: int
    log: StepLog = field(default_factory=list)
    maximize: bool = False

    @property
    def best(self) -> tuple[np.ndarray, float]:
        """Return the genes and fitness of the best individual of the last generation."""
        idx = self.population.best_index(maximize=self.maximize)
        return self.population.genes[idx], float(self.population.fitness[idx])
