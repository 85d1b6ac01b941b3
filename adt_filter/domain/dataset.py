"""Data structures representing raw gaze input.

Samples are immutable; the detector only ever re-arranges references to them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union


@dataclass(frozen=True)
class GazeSample:
    """Single gaze observation.

    ``t`` is in milliseconds and nondecreasing within one recording segment.
    ``c`` is the tracker confidence; it is carried along but not used for
    classification.
    """

    t: float
    x: float
    y: float
    c: float = 0.0

    @classmethod
    def from_row(cls, row: Sequence[float]) -> "GazeSample":
        """Build a sample from a ``(t, x, y[, c])`` sequence."""
        if len(row) < 3:
            raise ValueError(f"Expected at least (t, x, y), got {len(row)} values")
        c = row[3] if len(row) > 3 else 0.0
        return cls(t=float(row[0]), x=float(row[1]), y=float(row[2]), c=float(c))

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.t, self.x, self.y, self.c)


SampleLike = Union[GazeSample, Sequence[float]]


def as_sample(value: SampleLike) -> GazeSample:
    if isinstance(value, GazeSample):
        return value
    return GazeSample.from_row(value)
