"""Statuses and results produced by the fixation detector."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .dataset import GazeSample


class DetectorStatus(str, Enum):
    """Status reported after each processed sample."""

    NONE_DETECTED = "none_detected"
    ONGOING = "ongoing"
    CONCLUDED = "concluded"


class ConclusionReason(str, Enum):
    """Why a fixation ended."""

    TIME_DIFFERENCE = "time_difference"
    REL_THRESHOLD = "rel_threshold"
    ABS_THRESHOLD = "abs_threshold"


class DetectorAnomaly(str, Enum):
    """Internal invariant violations. Seeing one means the state machine is wrong."""

    ONGOING_ABOVE_THRESHOLD = "ongoing_above_threshold"
    SHORT_FIXATION = "short_fixation"


@dataclass(frozen=True)
class FixationResult:
    """A concluded fixation."""

    start_time: float
    end_time: float
    duration: float
    centroid_x: float
    centroid_y: float
    dispersion: float
    samples: Tuple[GazeSample, ...]
    reason: ConclusionReason

    @property
    def status(self) -> DetectorStatus:
        return DetectorStatus.CONCLUDED

    @property
    def centroid(self) -> Tuple[float, float]:
        return (self.centroid_x, self.centroid_y)

    @property
    def sample_count(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class StepResult:
    """Outcome of feeding one sample to the detector.

    ``fixation`` is only set when a fixation was concluded by this sample.
    ``fixation_start_time`` is set while a fixation is ongoing.
    ``anomaly`` reports an internal invariant violation.
    """

    status: DetectorStatus
    fixation_start_time: Optional[float] = None
    fixation: Optional[FixationResult] = None
    anomaly: Optional[DetectorAnomaly] = None

    @property
    def concluded(self) -> bool:
        return self.fixation is not None
