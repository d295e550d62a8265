"""Unit tests for RuleMatrix."""

import numpy as np
from rules import REFERENCE_RULES, RuleMatrix


class TestRuleMatrix:
    """Tests for RuleMatrix lookups and construction."""

    def test_missing_entries_are_zero(self):
        """Unlisted pairs read as no interaction."""
        rules = RuleMatrix({("A", "B"): 0.5})
        assert rules["A", "B"] == 0.5
        assert rules["B", "A"] == 0.0
        assert rules["C", "C"] == 0.0

    def test_asymmetric(self):
        """A->B and B->A are independent coefficients."""
        rules = RuleMatrix({("A", "B"): 0.5, ("B", "A"): -0.1})
        assert rules["A", "B"] != rules["B", "A"]

    def test_from_nested(self):
        """Nested target/source mapping becomes pair lookups."""
        rules = RuleMatrix.from_nested({"A": {"A": 0.1, "B": -0.2}})
        assert rules["A", "A"] == 0.1
        assert rules["A", "B"] == -0.2
        assert rules.to_nested() == {"A": {"A": 0.1, "B": -0.2}}

    def test_with_coefficient_returns_copy(self):
        """Replacing a coefficient leaves the original untouched."""
        rules = RuleMatrix({("A", "B"): 0.5})
        changed = rules.with_coefficient("A", "B", -0.5)
        assert rules["A", "B"] == 0.5
        assert changed["A", "B"] == -0.5

    def test_active_pairs_skip_zero(self):
        """Zero coefficients are not active, self pairs are."""
        rules = RuleMatrix({("A", "A"): 0.2, ("A", "B"): 0.0, ("B", "A"): -0.4})
        pairs = list(rules.active_pairs(["A", "B"]))
        assert pairs == [("A", "A", 0.2), ("B", "A", -0.4)]

    def test_random_is_seeded_and_bounded(self):
        """Random matrices are reproducible and lie in [-1, 1)."""
        species = ["A", "B", "C"]
        first = RuleMatrix.random(species, np.random.default_rng(3))
        second = RuleMatrix.random(species, np.random.default_rng(3))
        assert first == second
        assert len(first) == 9
        assert all(-1.0 <= value < 1.0 for _, value in first.items())

    def test_species(self):
        """Species on either side of a pair are reported."""
        rules = RuleMatrix({("A", "B"): 0.5})
        assert rules.species() == {"A", "B"}

    def test_reference_rules(self):
        """Reference setup covers three species."""
        assert REFERENCE_RULES.species() == {"red", "green", "yellow"}
        assert REFERENCE_RULES["red", "green"] == -0.34
        assert REFERENCE_RULES["green", "red"] == -0.17
