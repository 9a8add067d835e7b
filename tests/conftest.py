"""Shared test fixtures for evo-viz tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- scripted_rng: Factory for a generator double that replays fixed draws
- Default configurations per algorithm
"""

import numpy as np
import pytest

from evo_viz import EAConfig


class ScriptedRng:
    """Replays fixed draws in place of a numpy Generator.

    Only the methods the engine calls are provided: ``integers``, ``random``
    and ``normal``. Each method consumes its own queue; running out of values
    fails the test with IndexError.
    """

    def __init__(self, integers=(), random=(), normal=()):
        self._integers = list(integers)
        self._random = list(random)
        self._normal = list(normal)

    @staticmethod
    def _take(queue: list, size):
        if size is None:
            return queue.pop(0)
        n = int(np.prod(size))
        values = [queue.pop(0) for _ in range(n)]
        return np.array(values).reshape(size)

    def integers(self, low, high=None, size=None):
        return self._take(self._integers, size)

    def random(self, size=None):
        return self._take(self._random, size)

    def normal(self, loc=0.0, scale=1.0, size=None):
        return loc + scale * np.asarray(self._take(self._normal, size), dtype=np.float64)

    @property
    def exhausted(self) -> bool:
        return not (self._integers or self._random or self._normal)


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def scripted_rng():
    """Provide the ScriptedRng class so tests can script exact draws."""
    return ScriptedRng


@pytest.fixture
def ga_config() -> EAConfig:
    """Default visualizer configuration for GA (5 knapsack items, capacity 7)."""
    return EAConfig().for_algorithm("GA")


@pytest.fixture
def continuous_config() -> EAConfig:
    """Two-gene Sphere configuration used by DE, PSO and ES."""
    return EAConfig(population_size=10, genes_count=2, problem_type="Sphere")


@pytest.fixture
def gp_linear_config() -> EAConfig:
    """GP configuration for the Linear problem (reach 0 from 50 in two ops)."""
    return EAConfig().for_algorithm("GP")


@pytest.fixture
def gp_sine_config() -> EAConfig:
    """GP configuration for the Sine problem (five ops, SIN locked)."""
    return EAConfig().with_gp_problem("Sine").for_algorithm("GP")
