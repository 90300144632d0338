"""
Abstract strategy classes for population evolution.

Strategies provide the decision logic of a generation - which phenotypes become
parents and which are culled to make room for children. Abstract classes define the
hook-based pattern and validation contracts; concrete implementations (in
selection_strategies.py and culling_strategies.py) provide the algorithms.

Strategies are stateless. All randomness comes from the numpy Generator passed
into apply_strategy, so a simulator can share one seeded source across every
strategy it drives.
"""

from abc import ABC, abstractmethod
from typing import Any, List

import numpy

from .phenotype import FitnessType, Parents, Phenotype
from ..errors import InvalidParameterError, PopulationInvariantError


class AbstractStrategy(ABC):
    """
    Root strategy class providing random draw helpers.

    The helpers narrow numpy scalars to plain Python numbers so concrete
    strategies can index lists directly.
    """

    @staticmethod
    def _index(rng: numpy.random.Generator, length: int) -> int:
        """Uniform random index in [0, length)."""
        return int(rng.integers(0, length))

    @staticmethod
    def _uniform(rng: numpy.random.Generator) -> float:
        """Uniform random value in [0, 1)."""
        return float(rng.random())

    @staticmethod
    def _require_range(name: str, value: int, upper: int, bound: str) -> None:
        """Raise InvalidParameterError unless 0 < value < upper."""
        if value <= 0 or value >= upper:
            raise InvalidParameterError(name, value, bound)

    def __repr__(self) -> str:
        params = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({params})"

    @abstractmethod
    def apply_strategy(self, *args, **kwargs) -> Any:
        """
        Abstract method that subclasses must implement.

        Defines how a population is consumed. Subclasses narrow the signature
        and implement their specific strategy logic.
        """
        ...


class AbstractSelectionStrategy(AbstractStrategy):
    """
    Parent selection strategy.

    Picks pairs of parents out of the population for breeding. The population is
    read only; every returned parent is an independent clone, so callers may
    consume parents while the population changes underneath them.

    Stateless. Concrete subclasses define selection parameters.
    """

    def apply_strategy(
        self,
        population: List[Phenotype],
        fitness_type: FitnessType,
        rng: numpy.random.Generator,
    ) -> Parents:
        """
        Select parent pairs.

        Orchestrates selection by validating inputs, dispatching to the
        select_parents hook, and cloning the result.

        Args:
            population: Current population (never modified)
            fitness_type: Which fitness extremum counts as best
            rng: Random source for stochastic strategies

        Returns:
            List of (parent, parent) clones

        Raises:
            ValueError: If population is empty
            InvalidParameterError: If a strategy parameter is out of bounds for
                this population size
        """
        if not population:
            raise ValueError("Selection requires a non-empty population")

        self.validate(len(population))
        parents = self.select_parents(population, fitness_type, rng)
        return [(a.clone(), b.clone()) for a, b in parents]

    @abstractmethod
    def validate(self, population_size: int) -> None:
        """
        Check strategy parameters against the population size.

        Raises:
            InvalidParameterError: If any parameter violates its bound
        """
        ...

    @abstractmethod
    def select_parents(
        self,
        population: List[Phenotype],
        fitness_type: FitnessType,
        rng: numpy.random.Generator,
    ) -> Parents:
        """
        Abstract hook for parent selection logic.

        Called only after validate succeeded. May return phenotypes resident in
        the population; apply_strategy clones them.

        Args:
            population: Current population
            fitness_type: Which fitness extremum counts as best
            rng: Random source

        Returns:
            List of parent pairs
        """
        ...


class AbstractCullingStrategy(AbstractStrategy):
    """
    Population reduction strategy.

    Removes phenotypes to make room for children. Works on a copy and returns
    the survivors, leaving the input population intact on failure.

    Stateless.
    """

    def apply_strategy(
        self,
        population: List[Phenotype],
        count: int,
        rng: numpy.random.Generator,
    ) -> List[Phenotype]:
        """
        Remove count phenotypes.

        Args:
            population: Current population (never modified)
            count: Number of phenotypes to remove, 0 < count < len(population)
            rng: Random source

        Returns:
            Surviving phenotypes, len(population) - count of them

        Raises:
            InvalidParameterError: If count is out of bounds
            PopulationInvariantError: If the hook removed the wrong number
        """
        self._require_range(
            "count", count, len(population),
            "larger than zero and less than the population size",
        )

        survivors = self.cull(list(population), count, rng)

        expected = len(population) - count
        if len(survivors) != expected:
            raise PopulationInvariantError(expected, len(survivors))
        return survivors

    @abstractmethod
    def cull(
        self,
        population: List[Phenotype],
        count: int,
        rng: numpy.random.Generator,
    ) -> List[Phenotype]:
        """
        Abstract hook for culling logic.

        Args:
            population: Working copy, free to modify in place
            count: Number of phenotypes to remove (already validated)
            rng: Random source

        Returns:
            The surviving phenotypes
        """
        ...
