# vector.py
"""
A small immutable 2D vector.

The engine keeps bulk particle state in NumPy arrays; Vector2 is the
value type handed across the engine boundary (single-particle force
queries, the renderer view, initial placement).
"""
import math
import numpy as np


class Vector2:
    """
    2D float vector with value semantics. Components cannot be reassigned.
    """
    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0):
        object.__setattr__(self, "x", float(x))
        object.__setattr__(self, "y", float(y))

    def __setattr__(self, name, value):
        raise AttributeError("Vector2 is immutable")

    @classmethod
    def zero(cls) -> "Vector2":
        """The origin."""
        return cls(0.0, 0.0)

    @classmethod
    def random(cls, rng: np.random.Generator, xmin: float, xmax: float, ymin: float, ymax: float) -> "Vector2":
        """Uniformly random point in the rectangle [xmin, xmax) x [ymin, ymax)."""
        return cls(rng.uniform(xmin, xmax), rng.uniform(ymin, ymax))

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vector2":
        return self.scale(factor)

    __rmul__ = __mul__

    def dot(self, other: "Vector2") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def scale(self, factor: float) -> "Vector2":
        """Multiplies both components by `factor`."""
        return Vector2(self.x * factor, self.y * factor)

    def norm(self) -> float:
        """Euclidean length, sqrt(dot(self, self))."""
        return math.sqrt(self.dot(self))

    def as_tuple(self):
        """(x, y) pair, e.g. for drawing calls."""
        return (self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Vector2({self.x!r}, {self.y!r})"
