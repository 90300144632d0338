"""Phenotype contract and fitness direction for evosim genetics."""

import copy
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Tuple, Union


class FitnessType(Enum):
    """Which extremum of fitness counts as best."""

    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"

    @classmethod
    def coerce(cls, value: Union["FitnessType", str]) -> "FitnessType":
        """Accept either a member or its string value ("maximize"/"minimize")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unknown fitness type {value!r}. Expected 'maximize' or 'minimize'"
            ) from None


class Phenotype(ABC):
    """
    User-supplied candidate solution.

    The simulator never inspects a phenotype beyond this interface. Subclasses
    provide the representation along with fitness evaluation, recombination and
    perturbation. None of these may modify self; crossover and mutate return new
    phenotypes.

    Duplication defaults to a deep copy. Override clone for representations
    that hold expensive or shared resources.
    """

    @abstractmethod
    def fitness(self) -> float:
        """
        Score this phenotype.

        Returns:
            Fitness value. NaN is tolerated and compares equal to everything.
        """
        ...

    @abstractmethod
    def crossover(self, other: "Phenotype") -> "Phenotype":
        """Combine self with another parent into a new child phenotype."""
        ...

    @abstractmethod
    def mutate(self) -> "Phenotype":
        """Return a perturbed copy of self."""
        ...

    def clone(self) -> "Phenotype":
        """Independent duplicate, used for returned parents and results."""
        return copy.deepcopy(self)


Population = List[Phenotype]
Parents = List[Tuple[Phenotype, Phenotype]]
