"""Stream-level drivers around the fixation state machine."""

from .detection import DetectionResult, detect_fixations, run_detection
from .grouped import detect_fixations_by_group

__all__ = [
    "DetectionResult",
    "detect_fixations",
    "run_detection",
    "detect_fixations_by_group",
]
