"""Variation operators for evolutionary algorithms.

This module provides:
- lift: decorator to lift per-individual fitness functions to population level
- single_point_crossover, crossover_point: GA/GP recombination
- flip_bit, replace_instruction: GA/GP point mutation
- differential_mutation, binomial_crossover: DE variation
- gaussian_perturbation: ES mutation
"""

from evo_viz.operators.base import lift
from evo_viz.operators.standard import (
    binomial_crossover,
    crossover_point,
    differential_mutation,
    flip_bit,
    gaussian_perturbation,
    replace_instruction,
    single_point_crossover,
)

__all__ = [
    "lift",
    "crossover_point",
    "single_point_crossover",
    "flip_bit",
    "replace_instruction",
    "differential_mutation",
    "binomial_crossover",
    "gaussian_perturbation",
]
