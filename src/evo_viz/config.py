"""Run configuration for the evolutionary algorithm engine.

This module provides the immutable configuration consumed by every algorithm
together with the problem instances it refers to:

- EAConfig: Per-run parameters (population size, rates, coefficients, problem)
- KnapsackItem: One item of the GA knapsack instance
- GPOperation: One instruction of the GP instruction set

The defaults reproduce the values the visualizer starts with. All classes are
frozen dataclasses; use ``dataclasses.replace`` or the ``with_*`` helpers to
derive a modified configuration.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Literal

ProblemType = Literal["Sphere", "Ackley"]
GPProblem = Literal["Linear", "Sine"]
GPOpType = Literal["ADD_X", "ADD_1", "SUB_1", "SUB_10", "MUL_2", "DIV_2", "SIN", "COS", "ADD_CONST"]

PROBLEM_TYPES: tuple[str, ...] = ("Sphere", "Ackley")
GP_PROBLEMS: tuple[str, ...] = ("Linear", "Sine")
GP_OP_TYPES: tuple[str, ...] = ("ADD_X", "ADD_1", "SUB_1", "SUB_10", "MUL_2", "DIV_2", "SIN", "COS", "ADD_CONST")
MAX_GP_OPERATIONS = 5


@dataclass(frozen=True)
class KnapsackItem:
    """A knapsack item with a weight and a value."""

    id: int
    weight: float
    value: float
    name: str = ""


@dataclass(frozen=True)
class GPOperation:
    """A GP instruction.

    Attributes:
        id: Identifier of the operation inside its instruction set.
        type: One of ``GP_OP_TYPES``.
        label: Short human readable form, e.g. ``"+ 1"``.
        is_locked: Mandatory instruction. Every program keeps at least one
            occurrence of it and mutation never overwrites it.
    """

    id: int
    type: GPOpType
    label: str
    is_locked: bool = False

    def __post_init__(self) -> None:
        if self.type not in GP_OP_TYPES:
            raise ValueError(f"unknown GP operation type {self.type!r}, expected one of {', '.join(GP_OP_TYPES)}")


DEFAULT_KNAPSACK_ITEMS: tuple[KnapsackItem, ...] = (
    KnapsackItem(id=0, weight=2, value=10, name="A"),
    KnapsackItem(id=1, weight=3, value=15, name="B"),
    KnapsackItem(id=2, weight=1, value=8, name="C"),
    KnapsackItem(id=3, weight=4, value=25, name="D"),
    KnapsackItem(id=4, weight=2, value=12, name="E"),
)

DEFAULT_CAPACITY = 7

DEFAULT_GP_LINEAR_OPS: tuple[GPOperation, ...] = (
    GPOperation(id=0, type="ADD_1", label="+ 1"),
    GPOperation(id=1, type="SUB_1", label="- 1"),
    GPOperation(id=2, type="SUB_10", label="- 10"),
    GPOperation(id=3, type="DIV_2", label="/ 2"),
)

DEFAULT_GP_SINE_OPS: tuple[GPOperation, ...] = (
    GPOperation(id=0, type="ADD_X", label="+ x"),
    GPOperation(id=1, type="ADD_1", label="+ 1"),
    GPOperation(id=2, type="SIN", label="sin(val)", is_locked=True),
    GPOperation(id=3, type="MUL_2", label="* 2"),
)

# Genome length the visualizer enforces per algorithm (GA follows the item count)
_GENES_FOR_3D_VIEW = 2
_GENES_FOR_GP_SINE = 5

_CAMEL_TO_FIELD = {
    "populationSize": "population_size",
    "genesCount": "genes_count",
    "maxGenerations": "max_generations",
    "mutationRate": "mutation_rate",
    "crossoverRate": "crossover_rate",
    "tournamentSize": "tournament_size",
    "offspringSize": "offspring_size",
    "problemType": "problem_type",
    "gpProblem": "gp_problem",
    "gpOperations": "gp_operations",
    "knapsackItems": "knapsack_items",
    "knapsackCapacity": "knapsack_capacity",
}


@dataclass(frozen=True)
class EAConfig:
    """Immutable per-run configuration shared by all algorithms.

    Attributes:
        population_size: Pool size for GA/DE/PSO/GP, mu for ES.
        genes_count: Genome length for DE/PSO/ES/GP. GA uses the item count.
        max_generations: Generation ceiling for the run driver.
        mutation_rate: GA/GP probability that a child gets one point mutation.
        crossover_rate: DE per-gene probability of taking the mutant gene.
        tournament_size: Number of competitors in GA/GP tournaments.
        F: DE differential weight.
        w: PSO inertia weight.
        c1: PSO cognitive coefficient.
        c2: PSO social coefficient.
        sigma: ES standard deviation of the Gaussian mutation.
        offspring_size: ES lambda. ``None`` means lambda = mu.
        problem_type: Continuous landscape for DE/PSO/ES.
        gp_problem: GP target, ``"Linear"`` (reach 0 from 50) or ``"Sine"``.
        gp_operations: GP instruction set, at most five operations.
        knapsack_items: GA problem instance.
        knapsack_capacity: Maximum total weight of a feasible GA solution.

    Raises:
        ValueError: If a field is out of its valid range.
        TypeError: If the GP operations or knapsack items have the wrong type.

    Example:
        >>> config = EAConfig(population_size=20, problem_type="Ackley")
        >>> config.with_gp_problem("Sine").gp_operations[2].type
        'SIN'
    """

    population_size: int = 10
    genes_count: int = 2
    max_generations: int = 10
    mutation_rate: float = 0.1
    crossover_rate: float = 0.8
    tournament_size: int = 3
    F: float = 0.5
    w: float = 0.7
    c1: float = 1.4
    c2: float = 1.4
    sigma: float = 1.0
    offspring_size: int | None = 20
    problem_type: ProblemType = "Sphere"
    gp_problem: GPProblem = "Linear"
    gp_operations: tuple[GPOperation, ...] = field(default=DEFAULT_GP_LINEAR_OPS)
    knapsack_items: tuple[KnapsackItem, ...] = field(default=DEFAULT_KNAPSACK_ITEMS)
    knapsack_capacity: float = DEFAULT_CAPACITY

    def __post_init__(self) -> None:
        """Validate ranges and normalise sequences to tuples."""
        object.__setattr__(self, "gp_operations", tuple(self.gp_operations))
        object.__setattr__(self, "knapsack_items", tuple(self.knapsack_items))

        if self.population_size <= 0:
            raise ValueError(f"population_size must be positive, got {self.population_size}")
        if self.genes_count <= 0:
            raise ValueError(f"genes_count must be positive, got {self.genes_count}")
        if self.max_generations < 0:
            raise ValueError(f"max_generations must be non-negative, got {self.max_generations}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")
        if not 0.0 <= self.crossover_rate <= 1.0:
            raise ValueError(f"crossover_rate must be in [0, 1], got {self.crossover_rate}")
        if self.tournament_size <= 0:
            raise ValueError(f"tournament_size must be positive, got {self.tournament_size}")
        if self.sigma < 0:
            raise ValueError(f"sigma must be non-negative, got {self.sigma}")
        if self.offspring_size is not None and self.offspring_size <= 0:
            raise ValueError(f"offspring_size must be positive, got {self.offspring_size}")
        if self.problem_type not in PROBLEM_TYPES:
            raise ValueError(f"problem_type must be one of {', '.join(PROBLEM_TYPES)}, got {self.problem_type!r}")
        if self.gp_problem not in GP_PROBLEMS:
            raise ValueError(f"gp_problem must be one of {', '.join(GP_PROBLEMS)}, got {self.gp_problem!r}")
        if len(self.gp_operations) > MAX_GP_OPERATIONS:
            raise ValueError(
                f"gp_operations holds at most {MAX_GP_OPERATIONS} operations, got {len(self.gp_operations)}"
            )
        for op in self.gp_operations:
            if not isinstance(op, GPOperation):
                raise TypeError(f"gp_operations must contain GPOperation, got {type(op).__name__}")
        for item in self.knapsack_items:
            if not isinstance(item, KnapsackItem):
                raise TypeError(f"knapsack_items must contain KnapsackItem, got {type(item).__name__}")
        if self.knapsack_capacity < 0:
            raise ValueError(f"knapsack_capacity must be non-negative, got {self.knapsack_capacity}")

    @property
    def n_offspring(self) -> int:
        """ES lambda, falling back to mu when ``offspring_size`` is unset."""
        return self.offspring_size if self.offspring_size is not None else self.population_size

    def with_gp_problem(self, gp_problem: GPProblem) -> "EAConfig":
        """Switch the GP problem and reset the instruction set to its defaults."""
        ops = DEFAULT_GP_SINE_OPS if gp_problem == "Sine" else DEFAULT_GP_LINEAR_OPS
        return replace(self, gp_problem=gp_problem, gp_operations=ops)

    def for_algorithm(self, algorithm: str) -> "EAConfig":
        """Return a copy whose genome length fits the algorithm's visualization.

        DE, PSO, ES and the Linear GP problem are plotted on a 2-D landscape and
        use two genes. The Sine GP problem uses five instructions. GA derives
        its genome length from the knapsack items, so it is left unchanged.
        """
        name = algorithm.upper()
        target = self.genes_count
        if name in ("DE", "PSO", "ES") or (name == "GP" and self.gp_problem == "Linear"):
            target = _GENES_FOR_3D_VIEW
        elif name == "GP" and self.gp_problem == "Sine":
            target = _GENES_FOR_GP_SINE
        if target == self.genes_count:
            return self
        return replace(self, genes_count=target)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EAConfig":
        """Build a configuration from a mapping with snake_case or camelCase keys.

        Knapsack items and GP operations may be given as mappings; GP operations
        accept ``isLocked`` as well as ``is_locked``.

        Raises:
            KeyError: If the mapping contains an unknown key.
        """
        known = {f for f in cls.__dataclass_fields__}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_TO_FIELD.get(key, key)
            if name not in known:
                raise KeyError(f"unknown configuration key {key!r}")
            kwargs[name] = value

        if "knapsack_items" in kwargs:
            kwargs["knapsack_items"] = tuple(
                item if isinstance(item, KnapsackItem) else KnapsackItem(**item) for item in kwargs["knapsack_items"]
            )
        if "gp_operations" in kwargs:
            ops = []
            for op in kwargs["gp_operations"]:
                if not isinstance(op, GPOperation):
                    op = dict(op)
                    if "isLocked" in op:
                        op["is_locked"] = op.pop("isLocked")
                    op = GPOperation(**op)
                ops.append(op)
            kwargs["gp_operations"] = tuple(ops)
        return cls(**kwargs)


DEFAULT_CONFIG = EAConfig()
