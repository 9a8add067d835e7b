"""Survival strategies for evolutionary algorithms."""

from evo_viz.registry import SurvivalRegistry
from evo_viz.survival.elitist import elitist_survival
from evo_viz.survival.truncation import truncation_survival

# Register built-in survival strategies
SurvivalRegistry.register("elitist", elitist_survival)
SurvivalRegistry.register("truncation", truncation_survival)

__all__ = ["elitist_survival", "truncation_survival"]
