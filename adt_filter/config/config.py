# adt_filter/config/config.py
"""
Configuration for the adaptive dispersion-threshold (ADT) fixation filter.

Only the calibration error is subject specific; every other value is an
algorithm constant that may be overridden for experimentation.

Example:
    >>> from adt_filter.config import DetectorConfig
    >>>
    >>> cfg = DetectorConfig(calibration_error=2.0)
    >>> cfg.dispersion_threshold
    6.5
    >>>
    >>> # Stricter gap handling for a 250 Hz tracker
    >>> cfg = DetectorConfig(calibration_error=2.0, max_sample_gap_ms=40.0)
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import DetectorConstants, ValidationMessages


@dataclass(frozen=True)
class DetectorConfig:
    """
    Parameters of one fixation detector instance.
    """

    # Subject specific noise floor (same unit as the gaze coordinates)
    calibration_error: float

    # Absolute threshold = calibration_error * dispersion_threshold_factor
    dispersion_threshold_factor: float = DetectorConstants.DISPERSION_THRESHOLD_FACTOR

    # Adaptive relative threshold
    # - value_at_min: allowed growth (fraction) for a fixation of min_time_ms
    # - time_at_zero_ms: age at which no growth is allowed anymore
    # - value_at_max: allowed growth (fraction, negative) at max_time_ms
    value_at_min: float = DetectorConstants.VALUE_AT_MIN
    time_at_zero_ms: float = DetectorConstants.TIME_AT_ZERO_MS
    value_at_max: float = DetectorConstants.VALUE_AT_MAX
    min_time_ms: float = DetectorConstants.MIN_TIME_MS
    max_time_ms: float = DetectorConstants.MAX_TIME_MS

    # Window length up to which samples are only accumulated
    sample_threshold: int = DetectorConstants.SAMPLE_THRESHOLD

    # Input filters
    max_sample_gap_ms: float = DetectorConstants.MAX_SAMPLE_GAP_MS
    duplicate_epsilon: float = DetectorConstants.DUPLICATE_EPSILON

    def __post_init__(self) -> None:
        err = self.calibration_error
        if err is None or not math.isfinite(float(err)) or float(err) <= 0:
            raise ValueError(ValidationMessages.INVALID_CALIBRATION_ERROR)
        if self.sample_threshold < 2:
            raise ValueError(ValidationMessages.INVALID_SAMPLE_THRESHOLD)
        if self.max_sample_gap_ms <= 0:
            raise ValueError(ValidationMessages.INVALID_SAMPLE_GAP)
        if not (self.min_time_ms < self.time_at_zero_ms < self.max_time_ms):
            raise ValueError(ValidationMessages.INVALID_TIME_RANGE)

    @property
    def dispersion_threshold(self) -> float:
        """Absolute dispersion a live fixation may never exceed."""
        return self.calibration_error * self.dispersion_threshold_factor
