"""Per-individual step log records.

Each algorithm's step returns one log entry per relevant individual describing
what happened to it during the generation. Logs are purely observational: they
are displayed by the visualizer and never fed back into the computation.

Vectors are stored exactly. ``to_dict`` produces the camelCase record the step
log view consumes; it rounds the PSO velocity terms and the ES noise to two
decimals as the view does.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np


def _rounded(vec: np.ndarray, decimals: int = 2) -> list[float]:
    return [round(float(v), decimals) for v in vec]


@dataclass(frozen=True)
class GALogEntry:
    """What happened to one GA child.

    Attributes:
        id: Slot of the child in the next generation.
        parents: Ids of the (first, second) parent in the previous generation.
        crossover_point: Cut position of the single-point crossover.
        pre_mutation: Genome right after crossover.
        mutation_index: Flipped bit, or None if no mutation happened.
        final: Genome after mutation.
        is_valid: Whether the final genome respects the capacity.
        weight: Total weight of the final genome.
    """

    id: int
    parents: tuple[int, int]
    crossover_point: int
    pre_mutation: np.ndarray
    mutation_index: int | None
    final: np.ndarray
    is_valid: bool
    weight: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "parents": list(self.parents),
            "crossoverPoint": self.crossover_point,
            "preMutation": self.pre_mutation.tolist(),
            "mutationIndex": self.mutation_index,
            "final": self.final.tolist(),
            "isValid": self.is_valid,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class DELogEntry:
    """What happened to one DE target vector."""

    id: int
    target_id: int
    target_fitness: float
    r1: int
    r2: int
    r3: int
    diff_vector: np.ndarray
    weighted_diff: np.ndarray
    mutant_vector: np.ndarray
    mutant_fitness: float
    trial_vector: np.ndarray
    trial_fitness: float
    replaces_target: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "targetId": self.target_id,
            "targetFitness": self.target_fitness,
            "r1": self.r1,
            "r2": self.r2,
            "r3": self.r3,
            "diffVector": self.diff_vector.tolist(),
            "weightedDiff": self.weighted_diff.tolist(),
            "mutantVector": self.mutant_vector.tolist(),
            "mutantFitness": self.mutant_fitness,
            "trialVector": self.trial_vector.tolist(),
            "trialFitness": self.trial_fitness,
            "replacesTarget": self.replaces_target,
        }


@dataclass(frozen=True)
class PSOLogEntry:
    """Velocity update of one particle, with the full per-dimension terms."""

    id: int
    old_velocity: np.ndarray
    inertia_term: np.ndarray
    cognitive_term: np.ndarray
    social_term: np.ndarray
    new_velocity: np.ndarray
    new_position: np.ndarray

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "oldVelocity": self.old_velocity.tolist(),
            "inertiaTerm": _rounded(self.inertia_term),
            "cognitiveTerm": _rounded(self.cognitive_term),
            "socialTerm": _rounded(self.social_term),
            "newVelocity": self.new_velocity.tolist(),
            "newPosition": self.new_position.tolist(),
        }


@dataclass(frozen=True)
class ESLogEntry:
    """One ES child and whether it, and its parent, made the cut.

    ``id`` is the temporary id of the child (mu + child index) and
    ``parent_id`` the id of its parent in the previous generation.
    """

    id: int
    parent_id: int
    parent_genes: np.ndarray
    parent_fitness: float
    noise_vector: np.ndarray
    child_genes: np.ndarray
    child_fitness: float
    is_child_survivor: bool
    is_parent_survivor: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "parentId": self.parent_id,
            "parentGenes": self.parent_genes.tolist(),
            "parentFitness": self.parent_fitness,
            "noiseVector": _rounded(self.noise_vector),
            "childGenes": self.child_genes.tolist(),
            "childFitness": self.child_fitness,
            "isChildSurvivor": self.is_child_survivor,
            "isParentSurvivor": self.is_parent_survivor,
        }


@dataclass(frozen=True)
class GPLogEntry:
    """What happened to one GP child, with its program before and after mutation."""

    id: int
    parents: tuple[int, int]
    crossover_point: int
    mutation_index: int | None
    expression_before: str
    expression_after: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "parents": list(self.parents),
            "crossoverPoint": self.crossover_point,
            "mutationIndex": self.mutation_index,
            "expressionBefore": self.expression_before,
            "expressionAfter": self.expression_after,
        }


LogEntry = GALogEntry | DELogEntry | PSOLogEntry | ESLogEntry | GPLogEntry
StepLog = list[LogEntry]
