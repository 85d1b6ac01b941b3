"""Core fixation detection: geometry, adaptive threshold, window and state machine."""

from .geometry import centroid, dispersion
from .threshold import relative_growth_limit
from .window import CandidateWindow
from .detector import DetectorState, FixationDetector, conclude, step

__all__ = [
    "centroid",
    "dispersion",
    "relative_growth_limit",
    "CandidateWindow",
    "DetectorState",
    "FixationDetector",
    "conclude",
    "step",
]
