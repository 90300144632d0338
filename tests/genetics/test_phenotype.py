"""Tests for the Phenotype contract and FitnessType coercion."""

import pytest

from evosim.genetics.phenotype import FitnessType, Phenotype


class Listy(Phenotype):
    """Phenotype holding a mutable list, to observe clone independence."""

    def __init__(self, genes):
        self.genes = genes

    def fitness(self):
        return float(sum(self.genes))

    def crossover(self, other):
        return Listy(self.genes[: len(self.genes) // 2] + other.genes[len(other.genes) // 2:])

    def mutate(self):
        return Listy([g + 1 for g in self.genes])


class TestPhenotypeContract:
    def test_abstract_methods_required(self):
        with pytest.raises(TypeError):
            Phenotype()

    def test_default_clone_is_deep(self):
        original = Listy([1, 2, 3])
        duplicate = original.clone()
        duplicate.genes.append(4)
        assert original.genes == [1, 2, 3]
        assert duplicate is not original

    def test_clone_override_respected(self):
        class Shared(Listy):
            def clone(self):
                return self

        phenotype = Shared([1])
        assert phenotype.clone() is phenotype


class TestFitnessTypeCoercion:
    def test_member_passes_through(self):
        assert FitnessType.coerce(FitnessType.MINIMIZE) is FitnessType.MINIMIZE

    @pytest.mark.parametrize("text, expected", [
        ("maximize", FitnessType.MAXIMIZE),
        ("Minimize", FitnessType.MINIMIZE),
    ])
    def test_string_values_accepted(self, text, expected):
        assert FitnessType.coerce(text) is expected

    def test_unknown_string_raises(self):
        with pytest.raises(ValueError, match="Unknown fitness type"):
            FitnessType.coerce("optimize")
