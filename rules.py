# rules.py
"""
Species interaction rules.

A RuleMatrix maps an ordered (target, source) species pair to the
signed coefficient used in the mid-range force zone. The matrix is
asymmetric: the coefficient applied to target A from source B is
independent of the one applied to B from A. Pairs that are not listed
read as 0, meaning no mid-range interaction.
"""
import logging
import numpy as np
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

Pair = Tuple[str, str]


class RuleMatrix:
    """
    Read-only mapping from (target species, source species) to a coefficient.
    """
    def __init__(self, coefficients: Optional[Mapping[Pair, float]] = None):
        self._coefficients: Dict[Pair, float] = {}
        for (target, source), value in (coefficients or {}).items():
            self._coefficients[(target, source)] = float(value)

    @classmethod
    def from_nested(cls, rules: Mapping[str, Mapping[str, float]]) -> "RuleMatrix":
        """Builds a matrix from `{target: {source: coefficient}}`, the JSON config layout."""
        return cls({
            (target, source): value
            for target, row in rules.items()
            for source, value in row.items()
        })

    @classmethod
    def random(cls, species: Sequence[str], rng: Optional[np.random.Generator] = None) -> "RuleMatrix":
        """
        Draws every coefficient uniformly from [-1.0, 1.0).
        """
        rng = rng if rng is not None else np.random.default_rng()
        values = rng.uniform(-1.0, 1.0, size=(len(species), len(species)))
        matrix = cls({
            (target, source): values[i, j]
            for i, target in enumerate(species)
            for j, source in enumerate(species)
        })
        logging.info(f"Random rule matrix generated for {len(species)} species.")
        return matrix

    def __getitem__(self, pair: Pair) -> float:
        return self._coefficients.get(pair, 0.0)

    def __contains__(self, pair) -> bool:
        return pair in self._coefficients

    def __len__(self) -> int:
        return len(self._coefficients)

    def __iter__(self):
        return iter(self._coefficients)

    def items(self):
        return self._coefficients.items()

    def species(self) -> set:
        """Every species name that appears on either side of a pair."""
        names = set()
        for target, source in self._coefficients:
            names.add(target)
            names.add(source)
        return names

    def with_coefficient(self, target: str, source: str, value: float) -> "RuleMatrix":
        """Returns a copy with one coefficient replaced; this matrix is left untouched."""
        coefficients = dict(self._coefficients)
        coefficients[(target, source)] = float(value)
        return RuleMatrix(coefficients)

    def active_pairs(self, species: Iterable[str]):
        """Yields (target, source, coefficient) for every non-zero pair in species order."""
        species = list(species)
        for target in species:
            for source in species:
                value = self[target, source]
                if value != 0.0:
                    yield target, source, value

    def to_nested(self) -> Dict[str, Dict[str, float]]:
        nested: Dict[str, Dict[str, float]] = {}
        for (target, source), value in self._coefficients.items():
            nested.setdefault(target, {})[source] = value
        return nested

    def __eq__(self, other):
        if not isinstance(other, RuleMatrix):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __repr__(self):
        return f"RuleMatrix({self.to_nested()!r})"


# Coefficients of the three-species reference setup.
REFERENCE_RULES = RuleMatrix.from_nested({
    "red": {"red": 0.5, "green": -0.34, "yellow": 0.0},
    "green": {"red": -0.17, "green": -0.32, "yellow": 0.34},
    "yellow": {"red": 0.0, "green": -0.2, "yellow": 0.15},
})
