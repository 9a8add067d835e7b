"""Base genetic operators.

This module provides the lift decorator used to evaluate whole populations.
"""

from collections.abc import Callable

import numpy as np


def lift(fn: Callable[[np.ndarray], float]) -> Callable[[np.ndarray], np.ndarray]:
    """Lift a per-individual fitness function to work on a population.

    This utility allows fitness functions to be written for one genome while
    the algorithms evaluate a whole genes matrix at once.

    Args:
        fn: Function that evaluates a single genome.
            Signature: (n_genes,) -> float

    Returns:
        A function that evaluates a population.
        Signature: (n, n_genes) -> (n,)

    Example:
        >>> from evo_viz.primitives import sphere
        >>> evaluate = lift(sphere)
        >>> evaluate(np.array([[1.0, 2.0], [3.0, 4.0]]))
        array([ 5., 25.])
    """

    def lifted(genes: np.ndarray) -> np.ndarray:
        return np.array([fn(genes[i]) for i in range(genes.shape[0])], dtype=np.float64)

    return lifted
