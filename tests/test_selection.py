"""Tests for fitness tournament selection."""

import numpy as np
import pytest

from evo_viz import Population, fitness_tournament
from evo_viz.registry import SelectionRegistry


@pytest.fixture
def pop() -> Population:
    return Population(genes=np.zeros((4, 1)), fitness=np.array([3.0, 1.0, 1.0, 7.0]))


class TestFitnessTournament:
    """Tests for fitness_tournament."""

    def test_minimize_picks_lowest(self, pop: Population, scripted_rng) -> None:
        rng = scripted_rng(integers=[0, 3, 1])
        selector = fitness_tournament(tournament_size=3)
        np.testing.assert_array_equal(selector(pop, 1, rng), [1])

    def test_maximize_picks_highest(self, pop: Population, scripted_rng) -> None:
        rng = scripted_rng(integers=[0, 3, 1])
        selector = fitness_tournament(tournament_size=3, maximize=True)
        np.testing.assert_array_equal(selector(pop, 1, rng), [3])

    def test_first_drawn_wins_ties(self, pop: Population, scripted_rng) -> None:
        rng = scripted_rng(integers=[2, 1, 1, 2])
        selector = fitness_tournament(tournament_size=2)
        np.testing.assert_array_equal(selector(pop, 2, rng), [2, 1])
        assert rng.exhausted

    def test_draws_with_replacement(self, pop: Population, scripted_rng) -> None:
        rng = scripted_rng(integers=[3, 3])
        np.testing.assert_array_equal(fitness_tournament(tournament_size=2)(pop, 1, rng), [3])

    def test_fitness_override(self, pop: Population, scripted_rng) -> None:
        rng = scripted_rng(integers=[0, 3])
        selector = fitness_tournament(tournament_size=2)
        np.testing.assert_array_equal(selector(pop, 1, rng, fitness=np.array([9.0, 0.0, 0.0, 2.0])), [3])

    def test_size_one_is_uniform_draw(self, pop: Population, rng: np.random.Generator) -> None:
        selected = fitness_tournament(tournament_size=1)(pop, 50, rng)
        assert selected.shape == (50,)
        assert set(selected.tolist()) <= {0, 1, 2, 3}

    def test_rejects_non_positive_size(self) -> None:
        with pytest.raises(ValueError, match="tournament_size must be positive"):
            fitness_tournament(tournament_size=0)

    def test_rejects_empty_population(self, rng: np.random.Generator) -> None:
        empty = Population(genes=np.zeros((0, 1)), fitness=np.zeros(0))
        with pytest.raises(ValueError, match="empty population"):
            fitness_tournament()(empty, 1, rng)

    def test_registered(self, pop: Population, scripted_rng) -> None:
        selector = SelectionRegistry.get("tournament", tournament_size=2, maximize=True)
        np.testing.assert_array_equal(selector(pop, 1, scripted_rng(integers=[1, 0])), [0])
