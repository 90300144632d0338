"""
Tests for StochasticCulling and the AbstractCullingStrategy contract.

Exact removal sequences are verified with a scripted start index; length
invariants are verified over every valid count with a seeded numpy Generator.
"""

import numpy
import pytest

from evosim.errors import InvalidParameterError, PopulationInvariantError
from evosim.genetics.abstract_strategies import AbstractCullingStrategy
from evosim.genetics.culling_strategies import StochasticCulling
from evosim.genetics.phenotype import Phenotype


class Tagged(Phenotype):
    """Phenotype identified by an integer tag; fitness is irrelevant to culling."""

    def __init__(self, tag: int):
        self.tag = tag

    def fitness(self) -> float:
        return float(self.tag)

    def crossover(self, other):
        return Tagged(self.tag)

    def mutate(self):
        return Tagged(self.tag)


class _FixedStart:
    """numpy Generator stand-in always starting the walk at one index."""

    def __init__(self, start: int):
        self.start = start

    def integers(self, low, high=None, size=None):
        return self.start


class KeepEveryone(AbstractCullingStrategy):
    """Broken culling hook that removes nothing."""

    def cull(self, population, count, rng):
        return population


def make_population(size):
    return [Tagged(i) for i in range(size)]


def tags(population):
    return [p.tag for p in population]


class TestStochasticCullingWalk:
    """Tests the strided walk over the shrinking population."""

    def test_removal_sequence_uses_post_removal_length(self):
        # ratio = 10 // 3 = 3: remove index 2, then (2 + 2) % 9 = 4, then (4 + 2) % 8 = 6
        population = make_population(10)
        survivors = StochasticCulling().apply_strategy(population, 3, _FixedStart(2))
        assert tags(survivors) == [0, 1, 3, 4, 6, 7, 9]

    def test_walk_wraps_around(self):
        # ratio = 2: remove index 4, then (4 + 1) % 4 = 1
        population = make_population(5)
        survivors = StochasticCulling().apply_strategy(population, 2, _FixedStart(4))
        assert tags(survivors) == [0, 2, 3]

    def test_dense_culling_removes_consecutive_run(self):
        # ratio = 1: the pointer stays put and removes neighbours
        population = make_population(6)
        survivors = StochasticCulling().apply_strategy(population, 4, _FixedStart(1))
        assert tags(survivors) == [0, 5]

    def test_input_population_untouched(self):
        population = make_population(10)
        StochasticCulling().apply_strategy(population, 3, _FixedStart(0))
        assert tags(population) == list(range(10))

    def test_survivors_are_residents_not_copies(self):
        population = make_population(4)
        survivors = StochasticCulling().apply_strategy(population, 1, _FixedStart(0))
        assert all(any(s is p for p in population) for s in survivors)


class TestStochasticCullingLength:
    """Tests that every valid count leaves exactly len - count survivors."""

    @pytest.mark.parametrize("count", range(1, 20))
    def test_length_invariant(self, count):
        population = make_population(20)
        survivors = StochasticCulling().apply_strategy(population, count, numpy.random.default_rng(count))
        assert len(survivors) == 20 - count
        assert len(set(tags(survivors))) == len(survivors)


class TestCullingValidation:
    """Tests the 0 < count < population size contract and the survivor check."""

    def test_count_of_zero_raises(self):
        with pytest.raises(InvalidParameterError) as info:
            StochasticCulling().apply_strategy(make_population(5), 0, _FixedStart(0))
        assert info.value.name == "count"
        assert info.value.value == 0

    def test_count_at_population_size_raises(self):
        with pytest.raises(InvalidParameterError, match="`count`: 5"):
            StochasticCulling().apply_strategy(make_population(5), 5, _FixedStart(0))

    def test_wrong_survivor_count_raises_invariant_error(self):
        with pytest.raises(PopulationInvariantError) as info:
            KeepEveryone().apply_strategy(make_population(5), 2, _FixedStart(0))
        assert info.value.expected == 3
        assert info.value.actual == 5

    def test_repr_names_strategy(self):
        assert repr(StochasticCulling()) == "StochasticCulling()"
