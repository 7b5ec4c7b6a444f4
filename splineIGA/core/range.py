"""
Small value types used as parameters by the matrix primitives.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    """Matrix size as (rows, cols)."""
    rows: int
    cols: int

    def __str__(self) -> str:
        return f"{self.rows}x{self.cols}"


@dataclass(frozen=True)
class Range:
    """
    Closed integer interval [a, b].

    Used to select inclusive index ranges of rows, columns and
    vector entries.
    """
    a: int
    b: int

    @property
    def length(self) -> int:
        """Number of indices in the interval."""
        return self.b - self.a + 1

    def contains(self, value: float) -> bool:
        return self.a <= value <= self.b
