"""Domain models for gaze input and detected fixations."""

from .dataset import GazeSample, SampleLike, as_sample
from .events import (
    DetectorStatus,
    ConclusionReason,
    DetectorAnomaly,
    FixationResult,
    StepResult,
)

__all__ = [
    "GazeSample",
    "SampleLike",
    "as_sample",
    "DetectorStatus",
    "ConclusionReason",
    "DetectorAnomaly",
    "FixationResult",
    "StepResult",
]
