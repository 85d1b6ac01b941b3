# adt_filter/config/constants.py
"""Default constants for adaptive dispersion-threshold fixation detection."""

from __future__ import annotations


class DetectorConstants:
    """Algorithm defaults for the fixation state machine."""

    # Absolute dispersion threshold = calibration error * factor
    DISPERSION_THRESHOLD_FACTOR: float = 3.25

    # Allowed relative dispersion growth (as a fraction) at MIN_TIME_MS
    VALUE_AT_MIN: float = 1.6

    # Fixation age (ms) at which added dispersion must be zero or less
    TIME_AT_ZERO_MS: float = 280.0

    # Allowed relative dispersion growth (as a fraction) at MAX_TIME_MS
    VALUE_AT_MAX: float = -0.5

    # Clamp range for the fixation age fed to the growth limit (ms)
    MIN_TIME_MS: float = 100.0
    MAX_TIME_MS: float = 5000.0

    # Samples gathered before any dispersion is evaluated
    SAMPLE_THRESHOLD: int = 3

    # Minimum window length of a reportable fixation
    MIN_FIXATION_SAMPLES: int = 3

    # Maximum time between consecutive samples of one window (ms)
    MAX_SAMPLE_GAP_MS: float = 150.0

    # Coordinates closer than this to the previous sample count as a repeat frame
    DUPLICATE_EPSILON: float = 1e-4


class ColumnDefaults:
    """Column names used by recordings and fixation exports."""

    TASK_COLUMN: str = "Task_Name"
    CALIBRATION_ERROR_COLUMN: str = "calibration_error"

    FIXATION_COLUMNS = (
        "start_time",
        "end_time",
        "fixation_duration",
        "X_mean",
        "Y_mean",
        "dispersion",
        "conclusionCriteria",
    )


class ValidationMessages:
    """Standard validation and error messages."""

    INVALID_CALIBRATION_ERROR = "calibration_error must be a finite number > 0"
    INVALID_SAMPLE_THRESHOLD = "sample_threshold must be >= 2"
    INVALID_SAMPLE_GAP = "max_sample_gap_ms must be > 0"
    INVALID_TIME_RANGE = "min_time_ms < time_at_zero_ms < max_time_ms is required"
    EMPTY_WINDOW = "Cannot compute geometry of an empty window"
