"""Candidate window: the ordered samples currently evaluated as a fixation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from ..domain.dataset import GazeSample
from .geometry import centroid, dispersion


@dataclass(frozen=True)
class CandidateWindow:
    """Immutable window of pending samples.

    Every operation returns a new window. Which operation to apply is decided
    by the detector; the window only guarantees that samples it admits were
    checked against the gap limit beforehand (see :meth:`admits`).
    """

    samples: Tuple[GazeSample, ...] = ()

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[GazeSample]:
        return iter(self.samples)

    def __bool__(self) -> bool:
        return bool(self.samples)

    @property
    def first(self) -> GazeSample:
        return self.samples[0]

    @property
    def last(self) -> GazeSample:
        return self.samples[-1]

    @property
    def start_time(self) -> Optional[float]:
        return self.samples[0].t if self.samples else None

    @property
    def end_time(self) -> Optional[float]:
        return self.samples[-1].t if self.samples else None

    # --- admission checks ------------------------------------------------

    def admits(self, sample: GazeSample, max_gap_ms: float) -> bool:
        """True when ``sample`` follows the last sample closely enough."""
        if not self.samples:
            return True
        return sample.t - self.last.t <= max_gap_ms

    def is_duplicate(self, sample: GazeSample, epsilon: float) -> bool:
        """True when ``sample`` repeats the coordinates of the last sample."""
        if not self.samples:
            return False
        last = self.last
        return abs(last.x - sample.x) < epsilon and abs(last.y - sample.y) < epsilon

    # --- operations ------------------------------------------------------

    def append(self, sample: GazeSample) -> "CandidateWindow":
        return CandidateWindow(self.samples + (sample,))

    def slide(self, sample: GazeSample) -> "CandidateWindow":
        """Drop the oldest sample and append ``sample``."""
        return CandidateWindow(self.samples[1:] + (sample,))

    def drop_oldest(self) -> "CandidateWindow":
        return CandidateWindow(self.samples[1:])

    @staticmethod
    def reset(sample: GazeSample) -> "CandidateWindow":
        """Window holding only ``sample``."""
        return CandidateWindow((sample,))

    # --- statistics ------------------------------------------------------

    def dispersion(self) -> float:
        return dispersion(self.samples)

    def centroid(self) -> Tuple[float, float]:
        return centroid(self.samples)
