"""Tests for the run driver."""

import logging

import numpy as np
import pytest

from evo_viz import EAConfig, HistoryPoint, Runner, RunResult


class TestRunnerSetup:
    """Tests for construction and reset."""

    def test_default_config_fits_algorithm(self) -> None:
        assert Runner("de", seed=0).config.genes_count == 2
        sine = EAConfig().with_gp_problem("Sine").for_algorithm("GP")
        assert Runner("gp", config=sine, seed=0).population.n_genes == 5

    def test_unknown_algorithm(self) -> None:
        with pytest.raises(KeyError, match="Algorithm 'SA' not found"):
            Runner("SA")

    def test_generation_zero(self) -> None:
        runner = Runner("es", seed=1)
        assert runner.generation == 0
        assert len(runner.history) == 1
        assert runner.history[0].generation == 0
        assert runner.log == []
        assert len(runner.population) == runner.config.population_size

    def test_reset_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="evo_viz.runner"):
            Runner("pso", seed=1)
        assert "PSO reset: 10 individuals" in caplog.text

    def test_same_seed_same_run(self) -> None:
        first = Runner("de", seed=7).run()
        second = Runner("de", seed=7).run()
        np.testing.assert_array_equal(first.population.genes, second.population.genes)
        assert first.history == second.history


class TestRunnerStepping:
    """Tests for stepping to the generation ceiling."""

    @pytest.mark.parametrize("algorithm", ["GA", "DE", "PSO", "ES", "GP"])
    def test_run_reaches_ceiling(self, algorithm: str) -> None:
        result = Runner(algorithm, config=EAConfig(max_generations=4).for_algorithm(algorithm), seed=3).run()
        assert isinstance(result, RunResult)
        assert result.algorithm == algorithm
        assert result.generations == 4
        assert [p.generation for p in result.history] == [0, 1, 2, 3, 4]
        assert len(result.log) > 0

    def test_step_after_ceiling_is_noop(self) -> None:
        runner = Runner("ga", config=EAConfig(max_generations=1), seed=0)
        assert isinstance(runner.step(), HistoryPoint)
        population = runner.population
        assert runner.done
        assert runner.step() is None
        assert runner.population is population
        assert runner.generation == 1

    def test_zero_generations(self) -> None:
        result = Runner("pso", config=EAConfig(max_generations=0), seed=0).run()
        assert result.generations == 0
        assert result.log == []

    def test_ga_history_tracks_maximum(self) -> None:
        result = Runner("GA", seed=5).run()
        bests = [p.best_fitness for p in result.history]
        assert bests == sorted(bests)
        assert result.best[1] == result.population.fitness.max()

    def test_minimizing_history(self) -> None:
        result = Runner("DE", seed=5).run()
        bests = [p.best_fitness for p in result.history]
        assert bests == sorted(bests, reverse=True)
        assert result.best[1] == result.population.fitness.min()

    def test_update_config_applies_to_next_step(self) -> None:
        runner = Runner("de", config=EAConfig(crossover_rate=0.0), seed=2)
        runner.update_config(EAConfig(crossover_rate=1.0))
        runner.step()
        for entry in runner.log:
            np.testing.assert_array_equal(entry.trial_vector, entry.mutant_vector)

    def test_reset_restarts(self) -> None:
        runner = Runner("es", seed=2)
        runner.run()
        runner.reset()
        assert runner.generation == 0
        assert len(runner.history) == 1
        assert not runner.done
