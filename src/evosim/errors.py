"""
Error taxonomy for evosim.

Strategies and the simulator raise these rather than returning status values.
InvalidParameterError also subclasses ValueError so callers validating
configuration with the usual ``except ValueError`` keep working.
"""

from typing import Any


class EvolutionError(Exception):
    """Root of all evosim errors."""


class InvalidParameterError(EvolutionError, ValueError):
    """
    A strategy parameter falls outside its documented bound.

    Attributes:
        name: Parameter name as exposed by the strategy constructor
        value: Offending value
        bound: Human readable description of the violated bound
    """

    def __init__(self, name: str, value: Any, bound: str):
        self.name = name
        self.value = value
        self.bound = bound
        super().__init__(f"Invalid parameter `{name}`: {value}. Should be {bound}.")


class PopulationInvariantError(EvolutionError, RuntimeError):
    """Culling removed a different number of phenotypes than requested."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Population reduction produced {actual} survivors, expected {expected}"
        )


class UnavailableResultError(EvolutionError, RuntimeError):
    """A result was requested before the simulation produced it."""
