"""Fitness tournament selection for single-objective optimization."""

import numpy as np

from evo_viz.population import Population


def fitness_tournament(tournament_size: int = 2, maximize: bool = False):
    """Create a fitness-based tournament parent selector.

    Each tournament draws ``tournament_size`` competitors uniformly with
    replacement from the whole population, in its given order, and keeps the
    best. On equal fitness the competitor drawn first wins.

    Args:
        tournament_size: Number of individuals competing in each tournament (default: 2).
        maximize: If True higher fitness wins (GA knapsack), otherwise lower (default).

    Returns:
        A ParentSelector callable that selects parent indices based on fitness.

    Raises:
        ValueError: If tournament_size is not positive.

    Example:
        >>> selector = fitness_tournament(tournament_size=3, maximize=True)
        >>> parents = selector(pop, n_parents=2, rng=rng)
    """
    if tournament_size <= 0:
        raise ValueError(f"tournament_size must be positive, got {tournament_size}")

    def selector(
        pop: Population,
        n_parents: int,
        rng: np.random.Generator,
        **kwargs: np.ndarray,
    ) -> np.ndarray:
        """Select parents using fitness tournament selection.

        Args:
            pop: Population to select from.
            n_parents: Number of parents to select.
            rng: Random number generator.
            **kwargs: May include a 'fitness' array (1D) overriding pop.fitness.

        Returns:
            Array of selected parent indices.

        Raises:
            ValueError: If the population is empty.
        """
        fitness = kwargs.get("fitness", pop.fitness)
        pop_size = len(pop)
        if pop_size == 0:
            raise ValueError("cannot run a tournament on an empty population")

        selected = np.empty(n_parents, dtype=np.intp)

        for i in range(n_parents):
            candidates = [int(rng.integers(0, pop_size)) for _ in range(tournament_size)]

            best_idx = candidates[0]
            for c in candidates[1:]:
                better = fitness[c] > fitness[best_idx] if maximize else fitness[c] < fitness[best_idx]
                if better:
                    best_idx = c

            selected[i] = best_idx

        return selected

    return selector
