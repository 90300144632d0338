"""
Simulator: single-threaded generational evolution.

Composes a selection strategy, the user's crossover and mutation, a culling
strategy and optional early stopping into a generation loop. Built through
SimulatorBuilder; not reconfigurable afterwards.

A generation proceeds as: select parent pairs -> breed one child per pair
(crossover, then mutate) -> cull as many phenotypes as there are children ->
append the children. Population size is therefore constant across generations.
"""

import logging
import time
from typing import List, Optional, Tuple, Union

import numpy

from ..errors import UnavailableResultError
from ..genetics.abstract_strategies import AbstractCullingStrategy, AbstractSelectionStrategy
from ..genetics.culling_strategies import StochasticCulling
from ..genetics.phenotype import FitnessType, Phenotype
from ..genetics.selection_strategies import MaximizeSelection, create_selection_strategy
from ..utilities import best_of
from .early_stopping import EarlyStopper

logger = logging.getLogger(__name__)


class Simulator:
    """
    Runs a genetic algorithm simulation in a single thread.

    Owns its population exclusively and mutates it only inside run(). Selection
    or culling failures propagate out of run() and leave the population as it
    was at the end of the last completed generation.

    Examples::

        simulator = (
            Simulator.builder(population)
            .set_max_iters(1000)
            .set_selection_type("tournament", num=5, count=3)
            .set_fitness_type("minimize")
            .set_early_stop(0.1, 5)
            .build()
        )
        best = simulator.run()
        print(simulator.iterations(), simulator.time())
    """

    def __init__(
        self,
        population: List[Phenotype],
        max_iters: int,
        selection_strategy: AbstractSelectionStrategy,
        culling_strategy: AbstractCullingStrategy,
        fitness_type: FitnessType,
        early_stopper: Optional[EarlyStopper],
        rng: numpy.random.Generator,
    ):
        """
        Prefer Simulator.builder(population) over calling this directly.

        Args:
            population: Initial population, taken over by the simulator
            max_iters: Upper bound on generations run
            selection_strategy: Parent selection
            culling_strategy: Population reduction
            fitness_type: Whether higher or lower fitness is better
            early_stopper: Convergence detector, None to disable
            rng: Random source shared by selection and culling
        """
        self.population = population
        self.max_iters = max_iters
        self.selection_strategy = selection_strategy
        self.culling_strategy = culling_strategy
        self.fitness_type = fitness_type
        self.early_stopper = early_stopper
        self.rng = rng
        self.n_iters = 0
        self.duration: Optional[float] = None

    @staticmethod
    def builder(population: List[Phenotype]) -> "SimulatorBuilder":
        """Start configuring a Simulator around an initial population."""
        return SimulatorBuilder(population)

    def run(self) -> Phenotype:
        """
        Evolve until max_iters generations ran or early stopping triggered.

        Returns:
            Clone of the best phenotype of the final population

        Raises:
            InvalidParameterError: If the selection or culling parameters do not
                fit the population size
            PopulationInvariantError: If culling removed the wrong number
        """
        logger.info(
            "Starting simulation: population=%d max_iters=%d selection=%s fitness=%s",
            len(self.population), self.max_iters,
            type(self.selection_strategy).__name__, self.fitness_type.value,
        )
        time_start = time.perf_counter()

        while self.n_iters < self.max_iters:
            parents = self.selection_strategy.apply_strategy(
                self.population, self.fitness_type, self.rng
            )
            children = [a.crossover(b).mutate() for a, b in parents]

            # Kill off parts of the population to make room for the children
            survivors = self.culling_strategy.apply_strategy(
                self.population, len(children), self.rng
            )
            survivors.extend(children)
            self.population = survivors
            self.n_iters += 1

            if self.early_stopper is not None:
                best_fitness = best_of(self.population, self.fitness_type).fitness()
                logger.debug("Generation %d best fitness %s", self.n_iters, best_fitness)
                if self.early_stopper.update(best_fitness):
                    logger.debug("Early stopping after %d generations", self.n_iters)
                    break

        self.duration = time.perf_counter() - time_start
        logger.info(
            "Simulation finished after %d generations in %.6fs",
            self.n_iters, self.duration,
        )
        return self.get()

    def get(self) -> Phenotype:
        """Clone of the best phenotype currently in the population."""
        return best_of(self.population, self.fitness_type).clone()

    def iterations(self) -> int:
        """Generations completed so far; 0 before run()."""
        return self.n_iters

    def time(self) -> float:
        """
        Wall-clock duration of the last completed run, in seconds.

        Raises:
            UnavailableResultError: If run() has not completed yet
        """
        if self.duration is None:
            raise UnavailableResultError("Simulation has not been run yet")
        return self.duration


class SimulatorBuilder:
    """
    Fluent, validated construction of a Simulator.

    Defaults: 100 iterations, MaximizeSelection(count=5), FitnessType.MAXIMIZE,
    StochasticCulling, no early stopping, an unseeded numpy Generator. Every
    setter returns the builder for chaining.
    """

    def __init__(self, population: List[Phenotype]):
        """
        Args:
            population: Initial population. Must be non-empty.

        Raises:
            ValueError: If population is empty
        """
        if not population:
            raise ValueError("Simulator requires a non-empty population")
        self._population = population
        self._max_iters = 100
        self._selection_strategy: AbstractSelectionStrategy = MaximizeSelection(count=5)
        self._culling_strategy: AbstractCullingStrategy = StochasticCulling()
        self._fitness_type = FitnessType.MAXIMIZE
        self._early_stop: Optional[Tuple[float, int]] = None
        self._rng: Optional[numpy.random.Generator] = None

    def set_max_iters(self, i: int) -> "SimulatorBuilder":
        """Set the number of generations after which the simulator stops running."""
        if i < 0:
            raise ValueError("max_iters must be non-negative")
        self._max_iters = i
        return self

    def set_selection_type(
        self,
        selection: Union[AbstractSelectionStrategy, str],
        **params,
    ) -> "SimulatorBuilder":
        """
        Set the parent selection strategy.

        Args:
            selection: Strategy instance, or a registry key such as "tournament"
            **params: Constructor parameters when selection is a key

        Raises:
            ValueError: If the key is unknown, or params accompany an instance
        """
        if isinstance(selection, AbstractSelectionStrategy):
            if params:
                raise ValueError("Parameters are only accepted with a selection type key")
            self._selection_strategy = selection
        else:
            self._selection_strategy = create_selection_strategy(selection, **params)
        return self

    def set_fitness_type(self, t: Union[FitnessType, str]) -> "SimulatorBuilder":
        """Set whether the simulator maximizes or minimizes fitness."""
        self._fitness_type = FitnessType.coerce(t)
        return self

    def set_early_stop(self, delta: float, n_iters: int) -> "SimulatorBuilder":
        """
        Enable early stopping. If for n_iters generations the change in the best
        fitness is smaller than delta, the simulator stops running.

        Raises:
            ValueError: If delta or n_iters is negative
        """
        if delta < 0:
            raise ValueError("delta must be non-negative")
        if n_iters < 0:
            raise ValueError("n_iters must be non-negative")
        self._early_stop = (delta, n_iters)
        return self

    def set_culling_strategy(self, strategy: AbstractCullingStrategy) -> "SimulatorBuilder":
        """Replace the default StochasticCulling."""
        self._culling_strategy = strategy
        return self

    def set_rng(self, rng: Union[numpy.random.Generator, int]) -> "SimulatorBuilder":
        """Use a specific random source, or seed a fresh one from an int."""
        if isinstance(rng, int):
            self._rng = numpy.random.default_rng(rng)
        else:
            self._rng = rng
        return self

    def build(self) -> Simulator:
        """Create the Simulator. The population list is copied; phenotypes are not."""
        rng = self._rng if self._rng is not None else numpy.random.default_rng()
        early_stopper = EarlyStopper(*self._early_stop) if self._early_stop is not None else None
        return Simulator(
            population=list(self._population),
            max_iters=self._max_iters,
            selection_strategy=self._selection_strategy,
            culling_strategy=self._culling_strategy,
            fitness_type=self._fitness_type,
            early_stopper=early_stopper,
            rng=rng,
        )
