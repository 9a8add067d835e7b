"""Population data structures for the evolutionary algorithm engine.

This module provides the core data structures shared by all algorithms:

- Population: A struct-of-arrays representation of multiple individuals
- Individual: A read-only view of a single individual

Both classes are immutable (frozen dataclasses) to enforce functional style.
Every generation is a new Population; no individual is changed in place.

The ``ids`` of a population are slot labels, not stable identities. GA, ES and
GP renumber them 0..n-1 every generation, DE and PSO keep them per slot.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class Individual:
    """Read-only view of a single individual in a population.

    This class is returned by Population.__getitem__.

    Attributes:
        id: Slot label of the individual in its generation.
        genes: Genome, shape (n_genes,).
        fitness: Fitness of the genome.
        velocity: PSO velocity, shape (n_genes,), or None outside PSO.
        best_position: PSO personal best position, or None outside PSO.
        best_fitness: PSO personal best fitness, or None outside PSO.

    Example:
        >>> pop = Population(genes=np.array([[1.0, 2.0], [3.0, 4.0]]), fitness=np.array([5.0, 25.0]))
        >>> pop[1].genes
        array([3., 4.])
    """

    id: int
    genes: np.ndarray
    fitness: float
    velocity: np.ndarray | None = None
    best_position: np.ndarray | None = None
    best_fitness: float | None = None

    @property
    def position(self) -> np.ndarray | None:
        """PSO position, a mirror of the genes. None outside PSO."""
        return self.genes if self.velocity is not None else None

    def to_dict(self) -> dict[str, Any]:
        """Return a plain record with camelCase keys for display."""
        record: dict[str, Any] = {"id": self.id, "genes": self.genes.tolist(), "fitness": self.fitness}
        if self.velocity is not None:
            record["position"] = self.genes.tolist()
            record["velocity"] = self.velocity.tolist()
        if self.best_position is not None:
            record["bestPosition"] = self.best_position.tolist()
        if self.best_fitness is not None:
            record["bestFitness"] = self.best_fitness
        return record


def _check_matrix(name: str, value: np.ndarray, shape: tuple[int, int]) -> None:
    if not isinstance(value, np.ndarray):
        raise TypeError(f"{name} must be a numpy array, got {type(value).__name__}")
    if value.shape != shape:
        raise ValueError(f"{name} must have shape {shape} to match genes, got {value.shape}")


def _check_vector(name: str, value: np.ndarray, n: int) -> None:
    if not isinstance(value, np.ndarray):
        raise TypeError(f"{name} must be a numpy array, got {type(value).__name__}")
    if value.ndim != 1:
        raise ValueError(f"{name} must be 1D, got shape {value.shape}")
    if value.shape[0] != n:
        raise ValueError(f"{name} has {value.shape[0]} elements, expected {n} to match genes")


@dataclass(frozen=True)
class Population:
    """Immutable struct-of-arrays representation of a population.

    All arrays are copied on construction to ensure immutability.

    Attributes:
        genes: Genomes of all individuals, shape (n, n_genes).
        fitness: Fitness values, shape (n,).
        ids: Slot labels, shape (n,). Defaults to 0..n-1.
        velocity: PSO velocities, shape (n, n_genes), or None.
        best_position: PSO personal best positions, shape (n, n_genes), or None.
        best_fitness: PSO personal best fitness values, shape (n,), or None.

    Example:
        >>> genes = np.array([[1.0, 2.0], [3.0, 4.0], [0.0, 1.0]])
        >>> pop = Population(genes=genes, fitness=np.array([5.0, 25.0, 1.0]))
        >>> len(pop)
        3
        >>> pop.n_genes
        2
        >>> pop.ids
        array([0, 1, 2])
    """

    genes: np.ndarray
    fitness: np.ndarray
    ids: np.ndarray | None = None
    velocity: np.ndarray | None = None
    best_position: np.ndarray | None = None
    best_fitness: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If an array field is not a numpy array.
            ValueError: If array shapes are inconsistent or invalid.
        """
        if not isinstance(self.genes, np.ndarray):
            raise TypeError(f"genes must be a numpy array, got {type(self.genes).__name__}")
        if self.genes.ndim != 2:
            raise ValueError(f"genes must be 2D, got shape {self.genes.shape}")

        n = self.genes.shape[0]
        object.__setattr__(self, "genes", self.genes.copy())

        _check_vector("fitness", self.fitness, n)
        object.__setattr__(self, "fitness", self.fitness.astype(np.float64))

        if self.ids is None:
            object.__setattr__(self, "ids", np.arange(n, dtype=np.intp))
        else:
            _check_vector("ids", self.ids, n)
            if not np.issubdtype(self.ids.dtype, np.integer):
                raise ValueError(f"ids must have integer dtype, got {self.ids.dtype}")
            object.__setattr__(self, "ids", self.ids.astype(np.intp))

        swarm_fields = (self.velocity, self.best_position, self.best_fitness)
        if any(f is not None for f in swarm_fields) and not all(f is not None for f in swarm_fields):
            raise ValueError("velocity, best_position and best_fitness must be given together")
        if self.velocity is not None:
            _check_matrix("velocity", self.velocity, self.genes.shape)
            _check_matrix("best_position", self.best_position, self.genes.shape)
            _check_vector("best_fitness", self.best_fitness, n)
            object.__setattr__(self, "velocity", self.velocity.copy())
            object.__setattr__(self, "best_position", self.best_position.copy())
            object.__setattr__(self, "best_fitness", self.best_fitness.astype(np.float64))

    def __len__(self) -> int:
        """Return the number of individuals in the population."""
        return self.genes.shape[0]

    def __getitem__(self, idx: int) -> Individual:
        """Get a read-only view of a single individual.

        Args:
            idx: Position of the individual (supports negative indexing).

        Returns:
            Individual containing the data at the given position.

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        original_idx = idx
        if idx < 0:
            idx = n + idx
        if idx < 0 or idx >= n:
            raise IndexError(f"index {original_idx} is out of bounds for population with {n} individuals")

        return Individual(
            id=int(self.ids[idx]),
            genes=self.genes[idx],
            fitness=float(self.fitness[idx]),
            velocity=self.velocity[idx] if self.velocity is not None else None,
            best_position=self.best_position[idx] if self.best_position is not None else None,
            best_fitness=float(self.best_fitness[idx]) if self.best_fitness is not None else None,
        )

    def __iter__(self):
        return (self[i] for i in range(len(self)))

    @property
    def n_genes(self) -> int:
        """Return the genome length shared by all individuals."""
        return self.genes.shape[1]

    @property
    def is_swarm(self) -> bool:
        """Return True if the population carries PSO particle state."""
        return self.velocity is not None

    def take(self, indices: Sequence[int] | np.ndarray, renumber: bool = False) -> "Population":
        """Return a new population made of the individuals at ``indices``.

        Args:
            indices: Positions to keep, in the order of the new population.
            renumber: If True, the new ids are 0..len(indices)-1; otherwise
                the original ids are kept.
        """
        idx = np.asarray(indices, dtype=np.intp)
        return Population(
            genes=self.genes[idx],
            fitness=self.fitness[idx],
            ids=np.arange(len(idx), dtype=np.intp) if renumber else self.ids[idx],
            velocity=self.velocity[idx] if self.velocity is not None else None,
            best_position=self.best_position[idx] if self.best_position is not None else None,
            best_fitness=self.best_fitness[idx] if self.best_fitness is not None else None,
        )

    def best_index(self, maximize: bool = False) -> int:
        """Return the position of the best individual (first one on ties)."""
        return int(np.argmax(self.fitness)) if maximize else int(np.argmin(self.fitness))

    def to_records(self) -> list[dict[str, Any]]:
        """Return the population as a list of plain records for display."""
        return [ind.to_dict() for ind in self]

    @classmethod
    def from_individuals(cls, individuals: Sequence[Individual]) -> "Population":
        """Build a population from individual views.

        Raises:
            ValueError: If ``individuals`` is empty or mixes swarm and plain individuals.
        """
        if not individuals:
            raise ValueError("cannot build a population from an empty sequence")
        swarm = individuals[0].velocity is not None
        if any((ind.velocity is not None) != swarm for ind in individuals):
            raise ValueError("cannot mix PSO particles with plain individuals")
        return cls(
            genes=np.stack([ind.genes for ind in individuals]),
            fitness=np.array([ind.fitness for ind in individuals], dtype=np.float64),
            ids=np.array([ind.id for ind in individuals], dtype=np.intp),
            velocity=np.stack([ind.velocity for ind in individuals]) if swarm else None,
            best_position=np.stack([ind.best_position for ind in individuals]) if swarm else None,
            best_fitness=np.array([ind.best_fitness for ind in individuals], dtype=np.float64) if swarm else None,
        )
