"""Protocol definitions for algorithms and selection strategies.

This module defines the interfaces the engine is assembled from:

1. **Initializer / Stepper**: The two operations every algorithm exposes to
   the run driver, ``init(config, rng)`` and ``step(pop, config, rng)``.

2. **ParentSelector**: Chooses parents for GA and GP offspring.

3. **SurvivorSelector**: Chooses which individuals of a pool survive (GA and
   GP elites, the ES (mu + lambda) cut).

Example usage:
    ```python
    def my_step(pop: Population, config: EAConfig, rng: np.random.Generator | None = None) -> StepResult:
        parents = parent_selector(pop, n_parents=2, rng=rng)
        survivor_indices, state = survivor_selector(pool, n_survivors=config.population_size)
        ...
    ```
"""

from typing import Protocol, runtime_checkable

import numpy as np

from evo_viz.config import EAConfig
from evo_viz.population import Population
from evo_viz.results import StepResult


@runtime_checkable
class Initializer(Protocol):
    """Creates generation 0 of an algorithm from a configuration."""

    def __call__(self, config: EAConfig, rng: np.random.Generator | None = None) -> Population:
        """Create the initial population.

        Args:
            config: Run configuration.
            rng: Random source. A fresh Generator is used if None.

        Returns:
            Generation 0 with fitness evaluated.
        """
        ...


@runtime_checkable
class Stepper(Protocol):
    """Advances an algorithm by one generation."""

    def __call__(
        self,
        pop: Population,
        config: EAConfig,
        rng: np.random.Generator | None = None,
    ) -> StepResult:
        """Produce the next generation and its step log.

        Args:
            pop: The current generation. It is not modified.
            config: Run configuration.
            rng: Random source. A fresh Generator is used if None.

        Returns:
            StepResult with the next population and the step log.
        """
        ...


@runtime_checkable
class ParentSelector(Protocol):
    """Protocol for parent selection strategies.

    Parameters:
        pop: The current population to select parents from.
        n_parents: Number of parent indices to return. The same individual may
            be selected several times.
        rng: NumPy random number generator.
        **kwargs: Strategy-specific data, e.g. an explicit 'fitness' array.

    Returns:
        Array of shape (n_parents,) with positions in [0, len(pop)).
    """

    def __call__(
        self,
        pop: Population,
        n_parents: int,
        rng: np.random.Generator,
        **kwargs: np.ndarray,
    ) -> np.ndarray:
        ...


@runtime_checkable
class SurvivorSelector(Protocol):
    """Protocol for survivor selection strategies.

    Parameters:
        pop: The pool to select survivors from.
        n_survivors: Number of individuals to keep.
        **kwargs: Strategy-specific data, e.g. an explicit 'fitness' array.

    Returns:
        A tuple of:
        - indices: Positions of the survivors in ``pop``, best first.
        - state: Dictionary with the 'fitness' of the survivors.
    """

    def __call__(
        self,
        pop: Population,
        n_survivors: int,
        **kwargs: np.ndarray,
    ) -> tuple[np.ndarray, dict[str, np.ndarray]]:
        ...
