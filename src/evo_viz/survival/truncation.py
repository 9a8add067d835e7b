"""Truncation survival for the (mu + lambda) evolution strategy."""

from __future__ import annotations

import numpy as np

from evo_viz.population import Population


def truncation_survival():
    """Create a (mu + lambda) cut.

    The pool of parents and children is ranked by ascending fitness and the
    first ``n_survivors`` are kept. Members with equal fitness keep their pool
    order, so parents (which come first in the pool) win ties against
    children.

    Returns:
        A SurvivorSelector callable.

    Example:
        >>> pool = Population(genes=np.zeros((4, 1)), fitness=np.array([4.0, 2.0, 3.0, 1.0]))
        >>> indices, state = truncation_survival()(pool, n_survivors=2)
        >>> indices
        array([3, 1])
    """

    def selector(
        pop: Population,
        n_survivors: int,
        **kwargs: np.ndarray,
    ) -> tuple[np.ndarray, dict[str, np.ndarray]]:
        """Keep the ``n_survivors`` lowest-fitness members of ``pop``.

        Args:
            pop: Combined parent and child pool.
            n_survivors: mu, the size of the next generation.
            **kwargs: A 'fitness' array overrides pop.fitness.

        Returns:
            Tuple (indices, state): pool positions of the survivors, best
            first, and their 'fitness'.

        Raises:
            ValueError: If n_survivors is not positive or larger than the pool.
        """
        if n_survivors <= 0:
            raise ValueError(f"n_survivors must be positive, got {n_survivors}")
        if n_survivors > len(pop):
            raise ValueError(f"n_survivors ({n_survivors}) cannot exceed population size ({len(pop)})")

        fitness = kwargs.get("fitness", pop.fitness)
        ranked = np.argsort(fitness, kind="stable")[:n_survivors].astype(np.intp)
        return ranked, {"fitness": fitness[ranked].copy()}

    return selector
