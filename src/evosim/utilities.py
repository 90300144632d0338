"""Centralized fitness utilities: NaN tolerant ordering and extremum lookups."""
# evosim/utilities.py

import functools
from typing import List

from .genetics.phenotype import FitnessType, Phenotype


def compare_fitness(x: Phenotype, y: Phenotype) -> int:
    """
    Three-way comparison of two phenotypes by fitness.

    Non-orderable fitness values (NaN) compare equal to everything instead of
    raising, so sorts stay total and stable.

    Returns:
        -1, 0 or 1 as x's fitness is lower, equal/unordered, or higher
    """
    fx = x.fitness()
    fy = y.fitness()
    if fx < fy:
        return -1
    if fx > fy:
        return 1
    return 0


fitness_key = functools.cmp_to_key(compare_fitness)


def sort_by_fitness(population: List[Phenotype]) -> List[Phenotype]:
    """Return a new list holding the population ordered by ascending fitness (stable)."""
    return sorted(population, key=fitness_key)


def best_of(population: List[Phenotype], fitness_type: FitnessType) -> Phenotype:
    """
    Find the best phenotype for a fitness direction.

    Sorts ascending and takes the last entry when maximizing, the first when
    minimizing. Returns the resident phenotype itself, not a copy.

    Raises:
        ValueError: If the population is empty
    """
    if not population:
        raise ValueError("Cannot select the best of an empty population")
    ordered = sort_by_fitness(population)
    if fitness_type is FitnessType.MAXIMIZE:
        return ordered[-1]
    return ordered[0]


def cyclic_step(index: int, ratio: int, length: int) -> int:
    """Advance a sampling pointer by ``ratio - 1`` positions around a sequence of ``length``."""
    return (index + ratio - 1) % length
