"""Tests for the (mu + lambda) evolution strategy."""

import numpy as np
import pytest

from evo_viz import EAConfig, ESLogEntry, Population, init_es, sphere, step_es


def parents(*genes: list[float]) -> Population:
    g = np.array(genes, dtype=np.float64)
    return Population(genes=g, fitness=np.array([sphere(row) for row in g]))


class TestInitES:
    """Tests for the initial ES parents."""

    def test_integer_genes_in_bounds(self, continuous_config: EAConfig, rng: np.random.Generator) -> None:
        pop = init_es(continuous_config, rng)
        assert pop.genes.shape == (10, 2)
        assert np.all(np.abs(pop.genes) <= 5)
        np.testing.assert_array_equal(pop.genes, np.round(pop.genes))
        np.testing.assert_allclose(pop.fitness, [sphere(g) for g in pop.genes])


class TestStepESScripted:
    """mu = 2, lambda = 2, sigma = 1 with fixed parent picks and noise."""

    @pytest.fixture
    def result(self, scripted_rng):
        config = EAConfig(population_size=2, offspring_size=2, sigma=1.0)
        rng = scripted_rng(integers=[0, 1], normal=[-1.0, -1.0, 0.5, 0.5])
        result = step_es(parents([1.0, 1.0], [3.0, 3.0]), config, rng)
        assert rng.exhausted
        return result

    def test_survivors_sorted_and_renumbered(self, result) -> None:
        """The origin child and the first parent survive, best first."""
        next_pop, _ = result
        np.testing.assert_array_equal(next_pop.genes, [[0.0, 0.0], [1.0, 1.0]])
        np.testing.assert_array_equal(next_pop.fitness, [0.0, 2.0])
        np.testing.assert_array_equal(next_pop.ids, [0, 1])

    def test_surviving_child_log(self, result) -> None:
        entry = result.log[0]
        assert isinstance(entry, ESLogEntry)
        assert entry.id == 2
        assert entry.parent_id == 0
        np.testing.assert_array_equal(entry.parent_genes, [1.0, 1.0])
        assert entry.parent_fitness == 2.0
        np.testing.assert_array_equal(entry.noise_vector, [-1.0, -1.0])
        np.testing.assert_array_equal(entry.child_genes, [0.0, 0.0])
        assert entry.child_fitness == 0.0
        assert entry.is_child_survivor
        assert entry.is_parent_survivor

    def test_discarded_child_log(self, result) -> None:
        """Both the second child and its parent are cut."""
        entry = result.log[1]
        assert entry.id == 3
        assert entry.parent_id == 1
        np.testing.assert_array_equal(entry.child_genes, [3.5, 3.5])
        assert entry.child_fitness == 24.5
        assert not entry.is_child_survivor
        assert not entry.is_parent_survivor


class TestStepESParameters:
    """Tests for clamping, lambda and ids."""

    def test_children_clamped(self, scripted_rng) -> None:
        config = EAConfig(population_size=1, offspring_size=1, sigma=1.0)
        rng = scripted_rng(integers=[0], normal=[2.0, -3.0])
        _, log = step_es(parents([4.0, -4.0]), config, rng)
        np.testing.assert_array_equal(log[0].child_genes, [5.0, -5.0])
        np.testing.assert_array_equal(log[0].noise_vector, [2.0, -3.0])

    def test_sigma_scales_noise(self, scripted_rng) -> None:
        config = EAConfig(population_size=1, offspring_size=1, sigma=0.5)
        rng = scripted_rng(integers=[0], normal=[1.0, -1.0])
        _, log = step_es(parents([0.0, 0.0]), config, rng)
        np.testing.assert_array_equal(log[0].noise_vector, [0.5, -0.5])

    def test_lambda_defaults_to_mu(self, rng: np.random.Generator) -> None:
        config = EAConfig(population_size=4, offspring_size=None)
        _, log = step_es(init_es(config, rng), config, rng)
        assert len(log) == 4
        assert [e.id for e in log] == [4, 5, 6, 7]

    def test_child_ids_after_parent_ids(self, scripted_rng) -> None:
        """Temporary child ids never collide with the parents' ids."""
        pop = Population(genes=np.zeros((2, 2)), fitness=np.zeros(2), ids=np.array([0, 5]))
        config = EAConfig(population_size=2, offspring_size=1)
        rng = scripted_rng(integers=[1], normal=[0.0, 0.0])
        _, log = step_es(pop, config, rng)
        assert log[0].id == 6
        assert log[0].parent_id == 5

    def test_rejects_empty_population(self, rng: np.random.Generator) -> None:
        pop = Population(genes=np.zeros((0, 2)), fitness=np.zeros(0))
        with pytest.raises(ValueError, match="at least one parent"):
            step_es(pop, EAConfig(), rng)


class TestStepESProperties:
    """Invariants over seeded runs."""

    @pytest.mark.parametrize("problem_type", ["Sphere", "Ackley"])
    def test_survivor_set(self, problem_type: str, rng: np.random.Generator) -> None:
        """mu survivors, sorted ascending, no discarded child better than a survivor."""
        config = EAConfig(population_size=5, offspring_size=10, problem_type=problem_type)
        pop = init_es(config, rng)
        for _ in range(10):
            next_pop, log = step_es(pop, config, rng)
            assert len(next_pop) == config.population_size
            assert np.all(np.diff(next_pop.fitness) >= 0)
            worst_kept = next_pop.fitness.max()
            for entry in log:
                if not entry.is_child_survivor:
                    assert entry.child_fitness >= worst_kept
            assert next_pop.fitness.max() <= pop.fitness.max()
            pop = next_pop

    def test_log_dict_rounds_noise(self, continuous_config: EAConfig, rng: np.random.Generator) -> None:
        _, log = step_es(init_es(continuous_config, rng), continuous_config, rng)
        record = log[0].to_dict()
        assert record["noiseVector"] == [round(float(v), 2) for v in log[0].noise_vector]
        assert set(record) >= {"parentId", "childGenes", "isChildSurvivor", "isParentSurvivor"}
