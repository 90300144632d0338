"""
Concrete selection strategies implementing parent selection algorithms.

Each strategy fulfills AbstractSelectionStrategy's select_parents contract,
producing parent pairs consumed by the simulator's crossover step. String keys in
SELECTION_TYPE_REGISTRY let configuration name a strategy without importing it.
"""

import math
from typing import Dict, List

import numpy

from .abstract_strategies import AbstractSelectionStrategy
from .phenotype import FitnessType, Parents, Phenotype
from ..errors import InvalidParameterError
from ..utilities import cyclic_step, sort_by_fitness


class MaximizeSelection(AbstractSelectionStrategy):
    """
    Truncation selection: breed the 2 * count best phenotypes.

    Deterministic. The best phenotypes are paired consecutively in fitness order,
    so the best breeds with the second best, the third with the fourth, and so on.
    """

    def __init__(self, count: int = 5):
        """
        Args:
            count: Number of parent pairs. Must satisfy 0 < 2 * count < population size.
        """
        self.count = count

    def validate(self, population_size: int) -> None:
        if self.count <= 0 or 2 * self.count >= population_size:
            raise InvalidParameterError(
                "count", self.count,
                "larger than zero and less than half the population size",
            )

    def select_parents(
        self,
        population: List[Phenotype],
        fitness_type: FitnessType,
        rng: numpy.random.Generator,
    ) -> Parents:
        ranked = sort_by_fitness(population)
        if fitness_type is FitnessType.MAXIMIZE:
            ranked.reverse()

        best = ranked[: 2 * self.count]
        return [(best[i], best[i + 1]) for i in range(0, len(best), 2)]


class TournamentSelection(AbstractSelectionStrategy):
    """
    Repeated tournament selection: each tournament yields one pair of parents.

    Selection pressure controlled by count - larger tournaments favor fitter
    phenotypes, smaller ones preserve diversity. Sampling is with replacement so
    the same phenotype can enter a tournament, and win it, more than once.
    """

    def __init__(self, num: int = 5, count: int = 3):
        """
        Args:
            num: Number of tournaments, hence parent pairs. Must satisfy
                 0 < 2 * num < population size.
            count: Phenotypes sampled per tournament. Must satisfy
                   0 < count < population size.
        """
        self.num = num
        self.count = count

    def validate(self, population_size: int) -> None:
        if self.num <= 0 or 2 * self.num >= population_size:
            raise InvalidParameterError(
                "num", self.num,
                "larger than zero and less than half the population size",
            )
        self._require_range(
            "count", self.count, population_size,
            "larger than zero and less than the population size",
        )

    def select_parents(
        self,
        population: List[Phenotype],
        fitness_type: FitnessType,
        rng: numpy.random.Generator,
    ) -> Parents:
        parents = []
        for _ in range(self.num):
            indices = rng.integers(0, len(population), size=self.count)
            tournament = sort_by_fitness([population[int(i)] for i in indices])
            if fitness_type is FitnessType.MAXIMIZE:
                tournament.reverse()

            # A single entrant breeds with itself
            winner = tournament[0]
            runner_up = tournament[1] if len(tournament) > 1 else winner
            parents.append((winner, runner_up))
        return parents


class StochasticSelection(AbstractSelectionStrategy):
    """
    Stochastic universal sampling: evenly spaced pointers over the population.

    A single random start and a fixed stride of population_size // count pick
    parents with low, medium and high fitness values, with lower variance than
    independent draws. Fitness direction does not influence the walk.

    The pointer counts two parents per pair and stops once it reaches count, so
    an odd count yields ceil(count / 2) pairs.
    """

    def __init__(self, count: int = 5):
        """
        Args:
            count: Number of parents to select. Must satisfy 0 < count < population size.
        """
        self.count = count

    def validate(self, population_size: int) -> None:
        self._require_range(
            "count", self.count, population_size,
            "larger than zero and less than the population size",
        )

    def select_parents(
        self,
        population: List[Phenotype],
        fitness_type: FitnessType,
        rng: numpy.random.Generator,
    ) -> Parents:
        size = len(population)
        ratio = size // self.count
        i = self._index(rng, size)

        parents = []
        selected = 0
        while selected < self.count:
            partner = cyclic_step(i, ratio, size)
            parents.append((population[i], population[partner]))
            i = partner
            selected += 2
        return parents


class RouletteSelection(AbstractSelectionStrategy):
    """
    Roulette wheel selection: acceptance probability proportional to fitness.

    Each draw picks a uniform index and accepts it with probability
    fitness / max_fitness. Assumes non-negative fitness, and favors numerically
    large fitness whatever the fitness direction. If the maximum fitness is not
    positive the wheel degenerates to uniform sampling.
    """

    def __init__(self, count: int = 4):
        """
        Args:
            count: Number of parents to select. Must satisfy 0 < count < population size.
        """
        self.count = count

    def validate(self, population_size: int) -> None:
        self._require_range(
            "count", self.count, population_size,
            "larger than zero and less than the population size",
        )

    def select_parents(
        self,
        population: List[Phenotype],
        fitness_type: FitnessType,
        rng: numpy.random.Generator,
    ) -> Parents:
        max_fitness = sort_by_fitness(population)[-1].fitness()
        uniform = not max_fitness > 0

        parents = []
        for _ in range(math.ceil(self.count / 2)):
            pair = []
            while len(pair) < 2:
                i = self._index(rng, len(population))
                c = self._uniform(rng)
                if uniform or c <= population[i].fitness() / max_fitness:
                    pair.append(population[i])
            parents.append((pair[0], pair[1]))
        return parents


SELECTION_TYPE_REGISTRY: Dict[str, type] = {
    "maximize": MaximizeSelection,
    "tournament": TournamentSelection,
    "stochastic": StochasticSelection,
    "roulette": RouletteSelection,
}


def create_selection_strategy(key: str, **params) -> AbstractSelectionStrategy:
    """
    Build a selection strategy from its registry key.

    Args:
        key: One of SELECTION_TYPE_REGISTRY's keys (case insensitive)
        **params: Constructor keyword arguments, e.g. count=5 or num=5, count=3

    Raises:
        ValueError: If key is unknown
    """
    try:
        strategy_type = SELECTION_TYPE_REGISTRY[key.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown selection type {key!r}. Expected one of {sorted(SELECTION_TYPE_REGISTRY)}"
        ) from None
    return strategy_type(**params)
