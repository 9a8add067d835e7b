"""Selection strategies for genetic algorithms."""

from evo_viz.registry import SelectionRegistry
from evo_viz.selection.tournament import fitness_tournament

# Register built-in selection strategies
SelectionRegistry.register("tournament", fitness_tournament)

__all__ = ["fitness_tournament"]
