"""
Concrete culling strategies implementing population reduction.

Each strategy fulfills AbstractCullingStrategy's cull contract, removing
phenotypes so children can join without growing the population.
"""

from typing import List

import numpy

from .abstract_strategies import AbstractCullingStrategy
from .phenotype import Phenotype
from ..utilities import cyclic_step


class StochasticCulling(AbstractCullingStrategy):
    """
    Stochastic universal culling: a strided pointer walk over a shrinking population.

    Starts at a random index and removes the phenotype there, then advances the
    pointer by the stride computed from the original size, wrapping around the
    post-removal length. Fitness plays no part; survivors are kept in order.
    """

    def cull(
        self,
        population: List[Phenotype],
        count: int,
        rng: numpy.random.Generator,
    ) -> List[Phenotype]:
        ratio = len(population) // count
        i = self._index(rng, len(population))
        for _ in range(count):
            del population[i]
            i = cyclic_step(i, ratio, len(population))
        return population
