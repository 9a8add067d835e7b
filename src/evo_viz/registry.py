"""Registry system for algorithms and selection strategies.

This module provides a registry pattern for the pluggable parts of the engine.
Components are registered by name and retrieved by the run driver or by the
algorithms themselves.

There are three independent registries:
1. **AlgorithmRegistry**: Maps 'GA', 'DE', 'PSO', 'ES', 'GP' to their
   ``init``/``step`` pair
2. **SelectionRegistry**: For parent selection strategies (ParentSelector protocol)
3. **SurvivalRegistry**: For survivor selection strategies (SurvivorSelector protocol)

Basic usage:
    ```python
    from evo_viz.registry import AlgorithmRegistry, SelectionRegistry

    spec = AlgorithmRegistry.get("de")
    pop = spec.init(config, rng)
    next_pop, log = spec.step(pop, config, rng)

    selector = SelectionRegistry.get("tournament", tournament_size=3)
    ```
"""

from collections.abc import Callable
from dataclasses import dataclass

from evo_viz.protocols import Initializer, ParentSelector, Stepper, SurvivorSelector


@dataclass(frozen=True)
class AlgorithmSpec:
    """A registered algorithm.

    Attributes:
        name: Canonical upper-case name, e.g. 'PSO'.
        init: Creates generation 0.
        step: Produces the next generation and its log.
        maximize: True if higher fitness is better (GA only).
        renumbers_ids: True if ids are reassigned 0..n-1 every generation
            (GA, ES, GP); False if they stay with the slot (DE, PSO).
    """

    name: str
    init: Initializer
    step: Stepper
    maximize: bool = False
    renumbers_ids: bool = True


class AlgorithmRegistry:
    """Registry of algorithms by name.

    Names are case-insensitive: ``get("pso")`` and ``get("PSO")`` return the
    same spec.

    Class Attributes:
        _registry: Dictionary mapping upper-case names to AlgorithmSpec.
    """

    _registry: dict[str, AlgorithmSpec] = {}

    @classmethod
    def register(cls, spec: AlgorithmSpec) -> None:
        """Register an algorithm. Will overwrite if the name already exists."""
        cls._registry[spec.name.upper()] = spec

    @classmethod
    def get(cls, name: str) -> AlgorithmSpec:
        """Get a registered algorithm by name.

        Raises:
            KeyError: If the algorithm is not registered. Error message
                includes list of available algorithms.
        """
        key = name.upper()
        if key not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Algorithm '{name}' not found. Available algorithms: {available}")
        return cls._registry[key]

    @classmethod
    def list(cls) -> list[str]:
        """Return sorted list of registered algorithm names."""
        return sorted(cls._registry.keys())


class SelectionRegistry:
    """Registry for parent selection strategy factories.

    The registry stores factory functions that accept keyword arguments and
    return ParentSelector callables, so strategies are configured at
    retrieval time.

    Class Attributes:
        _registry: Dictionary mapping strategy names to factory functions.
    """

    _registry: dict[str, Callable[..., ParentSelector]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., ParentSelector]) -> None:
        """Register a parent selection strategy factory.

        Args:
            name: Unique name for the strategy. Will overwrite if already exists.
            factory: Callable that returns a ParentSelector.
        """
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> ParentSelector:
        """Get a configured parent selector by name.

        Args:
            name: Name of the registered strategy.
            **kwargs: Configuration parameters passed to the factory function.

        Raises:
            KeyError: If the strategy name is not registered. Error message
                includes list of available strategies.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Selection strategy '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return list of registered strategy names."""
        return sorted(cls._registry.keys())


class SurvivalRegistry:
    """Registry for survivor selection strategy factories.

    Class Attributes:
        _registry: Dictionary mapping strategy names to factory functions.
    """

    _registry: dict[str, Callable[..., SurvivorSelector]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., SurvivorSelector]) -> None:
        """Register a survivor selection strategy factory."""
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> SurvivorSelector:
        """Get a configured survivor selector by name.

        Raises:
            KeyError: If the strategy name is not registered. Error message
                includes list of available strategies.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Survival strategy '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return list of registered strategy names."""
        return sorted(cls._registry.keys())


def list_algorithms() -> list[str]:
    """List all registered algorithms."""
    return AlgorithmRegistry.list()


def list_selections() -> list[str]:
    """List all registered parent selection strategies."""
    return SelectionRegistry.list()


def list_survivals() -> list[str]:
    """List all registered survivor selection strategies."""
    return SurvivalRegistry.list()
