"""Elitist survival selection for GA and GP."""

from __future__ import annotations

import numpy as np

from evo_viz.population import Population


def elitist_survival(elite_count: int = 2, maximize: bool = False):
    """Create elitist survivor selector.

    Elitist survival picks the best `elite_count` individuals of the current
    generation so they can be carried unchanged into the next one. Ties keep
    the original population order.

    Args:
        elite_count: Number of elites to preserve. Default is 2.
        maximize: If True higher fitness is better (GA knapsack).

    Returns:
        A survivor selector function.

    Raises:
        ValueError: If elite_count is not positive.

    Example:
        >>> selector = elitist_survival(elite_count=2, maximize=True)
        >>> indices, state = selector(pop, n_survivors=2)
    """
    if elite_count <= 0:
        raise ValueError(f"elite_count must be positive, got {elite_count}")

    def selector(
        pop: Population,
        n_survivors: int,
        **kwargs: np.ndarray,
    ) -> tuple[np.ndarray, dict[str, np.ndarray]]:
        """Select the elites of a population.

        Args:
            pop: Population to pick elites from.
            n_survivors: Size of the next generation. Must be at least elite_count.
            **kwargs: If 'fitness' is provided it is used instead of pop.fitness.

        Returns:
            Tuple of (indices, state) where indices holds the positions of the
            ``elite_count`` best individuals (best first) and state has their
            'fitness'.

        Raises:
            ValueError: If elite_count exceeds the population size or n_survivors.
        """
        if elite_count > len(pop):
            raise ValueError(
                f"elite_count ({elite_count}) cannot exceed population size ({len(pop)})"
            )
        if elite_count > n_survivors:
            raise ValueError(
                f"elite_count ({elite_count}) cannot exceed n_survivors ({n_survivors})"
            )

        fitness = kwargs.get("fitness")
        if fitness is None:
            fitness = pop.fitness

        # Stable sort for deterministic tie-breaking
        order = np.argsort(-fitness if maximize else fitness, kind="stable")
        elite_indices = order[:elite_count].astype(np.intp)

        return elite_indices, {"fitness": fitness[elite_indices].copy()}

    return selector
