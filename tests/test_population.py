"""Tests for Population and Individual data structures."""

import numpy as np
import pytest

from evo_viz import Individual, Population


def make_swarm() -> Population:
    genes = np.array([[1.0, 2.0], [3.0, 4.0]])
    return Population(
        genes=genes,
        fitness=np.array([5.0, 25.0]),
        velocity=np.array([[0.0, 1.0], [-1.0, 2.0]]),
        best_position=genes,
        best_fitness=np.array([5.0, 25.0]),
    )


class TestPopulationConstruction:
    """Tests for Population construction and validation."""

    def test_default_ids(self) -> None:
        """Ids default to 0..n-1."""
        pop = Population(genes=np.zeros((3, 2)), fitness=np.zeros(3))
        np.testing.assert_array_equal(pop.ids, [0, 1, 2])
        assert len(pop) == 3
        assert pop.n_genes == 2
        assert not pop.is_swarm

    def test_rejects_non_array_genes(self) -> None:
        """Population rejects genes that are not a numpy array."""
        with pytest.raises(TypeError, match="genes must be a numpy array"):
            Population(genes=[[1.0, 2.0]], fitness=np.zeros(1))

    def test_rejects_1d_genes(self) -> None:
        """Population rejects 1D genes."""
        with pytest.raises(ValueError, match="genes must be 2D"):
            Population(genes=np.array([1.0, 2.0]), fitness=np.zeros(2))

    def test_rejects_mismatched_fitness(self) -> None:
        """Fitness must have one value per individual."""
        with pytest.raises(ValueError, match="fitness has 1 elements, expected 2"):
            Population(genes=np.zeros((2, 2)), fitness=np.zeros(1))

    def test_rejects_float_ids(self) -> None:
        """Ids must be integers."""
        with pytest.raises(ValueError, match="ids must have integer dtype"):
            Population(genes=np.zeros((2, 2)), fitness=np.zeros(2), ids=np.array([0.0, 1.0]))

    def test_rejects_partial_swarm_state(self) -> None:
        """PSO arrays must be given together."""
        with pytest.raises(ValueError, match="must be given together"):
            Population(genes=np.zeros((2, 2)), fitness=np.zeros(2), velocity=np.zeros((2, 2)))

    def test_rejects_wrong_velocity_shape(self) -> None:
        """Velocity must match the genes shape."""
        with pytest.raises(ValueError, match="velocity must have shape"):
            Population(
                genes=np.zeros((2, 2)),
                fitness=np.zeros(2),
                velocity=np.zeros((2, 3)),
                best_position=np.zeros((2, 2)),
                best_fitness=np.zeros(2),
            )


class TestPopulationImmutability:
    """Tests for Population immutability guarantees."""

    def test_arrays_are_copied(self) -> None:
        """Changing the source array does not change the population."""
        genes = np.array([[1.0, 2.0]])
        pop = Population(genes=genes, fitness=np.array([5.0]))
        genes[0, 0] = 99.0
        assert pop.genes[0, 0] == 1.0

    def test_take_returns_new_population(self) -> None:
        """take builds a new population and leaves the original alone."""
        pop = Population(genes=np.array([[1.0], [2.0], [3.0]]), fitness=np.array([1.0, 4.0, 9.0]))
        subset = pop.take([2, 0])
        np.testing.assert_array_equal(subset.genes, [[3.0], [1.0]])
        np.testing.assert_array_equal(subset.ids, [2, 0])
        assert len(pop) == 3

    def test_take_renumber(self) -> None:
        """take with renumber=True assigns fresh slot ids."""
        pop = Population(genes=np.array([[1.0], [2.0], [3.0]]), fitness=np.array([1.0, 4.0, 9.0]))
        np.testing.assert_array_equal(pop.take([2, 0], renumber=True).ids, [0, 1])


class TestIndividual:
    """Tests for Individual views."""

    def test_getitem(self) -> None:
        """Indexing returns the individual's id, genes and fitness."""
        pop = Population(genes=np.array([[1.0, 2.0], [3.0, 4.0]]), fitness=np.array([5.0, 25.0]))
        ind = pop[-1]
        assert isinstance(ind, Individual)
        assert ind.id == 1
        np.testing.assert_array_equal(ind.genes, [3.0, 4.0])
        assert ind.fitness == 25.0
        assert ind.position is None
        assert ind.velocity is None

    def test_getitem_out_of_bounds(self) -> None:
        """Out-of-range indices raise IndexError."""
        pop = Population(genes=np.zeros((2, 1)), fitness=np.zeros(2))
        with pytest.raises(IndexError, match="out of bounds"):
            pop[2]

    def test_getitem_rejects_non_integer(self) -> None:
        """Only integer indices are accepted."""
        pop = Population(genes=np.zeros((2, 1)), fitness=np.zeros(2))
        with pytest.raises(TypeError, match="indices must be integers"):
            pop["0"]  # type: ignore[index]

    def test_swarm_individual_mirrors_position(self) -> None:
        """PSO particles expose their genes as position."""
        particle = make_swarm()[1]
        np.testing.assert_array_equal(particle.position, particle.genes)
        np.testing.assert_array_equal(particle.velocity, [-1.0, 2.0])
        assert particle.best_fitness == 25.0

    def test_records_round_trip(self) -> None:
        """from_individuals rebuilds the same population."""
        pop = make_swarm()
        rebuilt = Population.from_individuals(list(pop))
        np.testing.assert_array_equal(rebuilt.genes, pop.genes)
        np.testing.assert_array_equal(rebuilt.velocity, pop.velocity)
        np.testing.assert_array_equal(rebuilt.best_fitness, pop.best_fitness)

    def test_to_records(self) -> None:
        """to_records gives plain camelCase dicts."""
        record = make_swarm().to_records()[0]
        assert record == {
            "id": 0,
            "genes": [1.0, 2.0],
            "fitness": 5.0,
            "position": [1.0, 2.0],
            "velocity": [0.0, 1.0],
            "bestPosition": [1.0, 2.0],
            "bestFitness": 5.0,
        }

    def test_from_individuals_rejects_empty(self) -> None:
        """An empty sequence cannot form a population."""
        with pytest.raises(ValueError, match="empty sequence"):
            Population.from_individuals([])

    def test_best_index(self) -> None:
        """best_index honours the optimisation direction and keeps the first on ties."""
        pop = Population(genes=np.zeros((4, 1)), fitness=np.array([3.0, 1.0, 1.0, 7.0]))
        assert pop.best_index() == 1
        assert pop.best_index(maximize=True) == 3
