# adt_filter/__init__.py
"""
ADT Filter Package.

Adaptive dispersion-threshold fixation detection for gaze streams:
- Geometry (centroid, dispersion) and adaptive growth threshold
- Single-pass fixation state machine
- Stream and per-group drivers
- Tabular I/O and summaries
"""

from .config import DetectorConfig
from .domain import (
    GazeSample,
    DetectorStatus,
    ConclusionReason,
    DetectorAnomaly,
    FixationResult,
    StepResult,
)
from .core import (
    CandidateWindow,
    DetectorState,
    FixationDetector,
    centroid,
    dispersion,
    relative_growth_limit,
    step,
)
from .processing import DetectionResult, detect_fixations, run_detection, detect_fixations_by_group

__version__ = "0.1.0"

__all__ = [
    "DetectorConfig",
    "GazeSample",
    "DetectorStatus",
    "ConclusionReason",
    "DetectorAnomaly",
    "FixationResult",
    "StepResult",
    "CandidateWindow",
    "DetectorState",
    "FixationDetector",
    "centroid",
    "dispersion",
    "relative_growth_limit",
    "step",
    "DetectionResult",
    "detect_fixations",
    "run_detection",
    "detect_fixations_by_group",
]
