"""
Results - Immutable values returned by the decimators and selectors.
"""

from dataclasses import dataclass
from typing import Iterator

import numpy as np

# Distance reported when the selector did not measure one
DISTANCE_UNKNOWN = -1

ABSENT = -1


@dataclass(frozen=True)
class ViewRange:
    """
    Sample indices whose pixel column falls inside a queried interval.

    first/last are the boundary samples inside the interval. When no sample
    lies inside on a side, before/after name the nearest samples just
    outside it, so a line crossing the interval can still be drawn.
    Every field is ABSENT (-1) when there is no such sample.
    """

    first: int = ABSENT
    last: int = ABSENT
    before: int = ABSENT
    after: int = ABSENT

    @property
    def start(self) -> int:
        return self.first if self.first != ABSENT else self.before

    @property
    def end(self) -> int:
        return self.last if self.last != ABSENT else self.after

    def is_resolved(self) -> bool:
        """True when both a start and an end sample exist."""
        return self.start != ABSENT and self.end != ABSENT


@dataclass(frozen=True)
class RenderPoints:
    """
    Pixel-space polyline produced by a decimator.

    x and y are int64 arrays of length capacity; only the first count
    entries are meaningful.
    """

    x: np.ndarray
    y: np.ndarray
    count: int

    @property
    def capacity(self) -> int:
        return int(self.x.size)

    @property
    def xs(self) -> np.ndarray:
        return self.x[:self.count]

    @property
    def ys(self) -> np.ndarray:
        return self.y[:self.count]

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return zip(self.xs.tolist(), self.ys.tolist())


@dataclass(frozen=True)
class SelectionResult:
    """Sample picked by a hit test; distance is only meaningful for ordering."""

    index: int
    distance: int = DISTANCE_UNKNOWN
