# adt_filter/core/detector.py
"""
Adaptive dispersion-threshold fixation detector.

The detector is a single-pass state machine. For every incoming sample it
decides whether to extend, repair, reject or conclude the current candidate
window. The decision procedure is the pure function :func:`step`; the
:class:`FixationDetector` class only keeps the latest :class:`DetectorState`
for callers that prefer an object interface.

Evaluation order per sample:

  1. Gap filter         - too large a time gap concludes or resets
  2. Duplicate filter   - repeated coordinates are discarded
  3. Accumulation       - gather ``sample_threshold + 1`` samples
  4. Repair vs. grow    - sliding the window wins if it lowers dispersion
  5. Extend or conclude - adaptive relative and absolute growth checks

Example:
    >>> from adt_filter.config import DetectorConfig
    >>> from adt_filter.core.detector import DetectorState, step
    >>>
    >>> cfg = DetectorConfig(calibration_error=1.0)
    >>> state = DetectorState()
    >>> state, result = step(state, (0.0, 10.0, 10.0, 1.0), cfg)
    >>> result.status.value
    'none_detected'
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..config.config import DetectorConfig
from ..config.constants import DetectorConstants
from ..domain.dataset import SampleLike, as_sample
from ..domain.events import (
    ConclusionReason,
    DetectorAnomaly,
    DetectorStatus,
    FixationResult,
    StepResult,
)
from .threshold import relative_growth_limit
from .window import CandidateWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectorState:
    """Everything the detector remembers between two samples.

    ``status`` is the last emitted status (``None`` before the first sample
    was accepted) and decides how the next gap or duplicate is handled.
    ``dropped_count`` only counts discarded samples for quality control.
    """

    window: CandidateWindow = field(default_factory=CandidateWindow)
    status: Optional[DetectorStatus] = None
    dropped_count: int = 0


def _reported(status: Optional[DetectorStatus]) -> DetectorStatus:
    return status if status is not None else DetectorStatus.NONE_DETECTED


def _relative_growth(before: float, after: float) -> float:
    """Dispersion change in percent of ``before``."""
    if before == 0.0:
        if after == 0.0:
            return 0.0
        return math.inf
    return (after - before) / before * 100.0


def conclude(window: CandidateWindow, reason: ConclusionReason) -> StepResult:
    """Turn ``window`` into a concluded fixation.

    A window shorter than the minimal fixation length can only be passed in
    by a defect in the state machine; it is logged and reported as an
    anomaly without a fixation attached.
    """
    if len(window) < DetectorConstants.MIN_FIXATION_SAMPLES:
        logger.warning(
            "Refusing to conclude fixation with %d samples (reason=%s)",
            len(window),
            reason.value,
        )
        return StepResult(
            status=DetectorStatus.CONCLUDED,
            anomaly=DetectorAnomaly.SHORT_FIXATION,
        )

    cx, cy = window.centroid()
    start = window.first.t
    end = window.last.t
    fixation = FixationResult(
        start_time=start,
        end_time=end,
        duration=end - start,
        centroid_x=cx,
        centroid_y=cy,
        dispersion=window.dispersion(),
        samples=window.samples,
        reason=reason,
    )
    return StepResult(
        status=DetectorStatus.CONCLUDED,
        fixation_start_time=start,
        fixation=fixation,
    )


def step(
    state: DetectorState,
    sample: SampleLike,
    config: DetectorConfig,
) -> Tuple[DetectorState, StepResult]:
    """Feed one sample; return the successor state and the step outcome."""
    sample = as_sample(sample)
    window = state.window
    status = state.status
    dropped = state.dropped_count

    if window:
        # 1) Gap filter
        if not window.admits(sample, config.max_sample_gap_ms):
            restarted = CandidateWindow.reset(sample)
            if status is DetectorStatus.ONGOING:
                result = conclude(window, ConclusionReason.TIME_DIFFERENCE)
                return DetectorState(restarted, DetectorStatus.CONCLUDED, dropped), result

            if status is DetectorStatus.CONCLUDED:
                status = DetectorStatus.NONE_DETECTED
            new_state = DetectorState(restarted, status, dropped + len(window))
            return new_state, StepResult(status=_reported(status))

        # 2) Duplicate filter (same frame delivered twice)
        if window.is_duplicate(sample, config.duplicate_epsilon):
            if status is DetectorStatus.CONCLUDED:
                status = DetectorStatus.NONE_DETECTED
            new_state = DetectorState(window, status, dropped + 1)
            return new_state, StepResult(status=_reported(status))

    # 3) Accumulation
    if len(window) <= config.sample_threshold:
        new_state = DetectorState(window.append(sample), DetectorStatus.NONE_DETECTED, dropped)
        return new_state, StepResult(status=DetectorStatus.NONE_DETECTED)

    threshold = config.dispersion_threshold
    start_time = window.first.t
    dispersion_current = window.dispersion()

    # 4) Repair vs. grow: sliding takes precedence over growing
    slid = window.slide(sample)
    dispersion_slide = slid.dispersion()
    if dispersion_slide < dispersion_current:
        if dispersion_slide < threshold:
            new_state = DetectorState(slid, DetectorStatus.ONGOING, dropped + 1)
            return new_state, StepResult(
                status=DetectorStatus.ONGOING,
                fixation_start_time=start_time,
            )
        new_state = DetectorState(slid, DetectorStatus.NONE_DETECTED, dropped + 1)
        return new_state, StepResult(status=DetectorStatus.NONE_DETECTED)

    if dispersion_current >= threshold:
        if status is DetectorStatus.ONGOING:
            logger.warning(
                "Ongoing fixation starting at %s has dispersion %.6f >= threshold %.6f",
                start_time,
                dispersion_current,
                threshold,
            )
            return state, StepResult(
                status=DetectorStatus.ONGOING,
                anomaly=DetectorAnomaly.ONGOING_ABOVE_THRESHOLD,
            )
        # regular saccade rejection: forget the oldest sample
        new_state = DetectorState(window.drop_oldest(), DetectorStatus.NONE_DETECTED, dropped + 1)
        return new_state, StepResult(status=DetectorStatus.NONE_DETECTED)

    # 5) Extend or conclude the ongoing fixation
    pushed = window.append(sample)
    dispersion_push = pushed.dispersion()
    duration = sample.t - start_time
    growth = _relative_growth(dispersion_current, dispersion_push)
    limit = relative_growth_limit(duration, config)

    if growth > limit:
        result = conclude(window, ConclusionReason.REL_THRESHOLD)
        return DetectorState(CandidateWindow.reset(sample), DetectorStatus.CONCLUDED, dropped), result

    if dispersion_push > threshold:
        result = conclude(window, ConclusionReason.ABS_THRESHOLD)
        return DetectorState(CandidateWindow.reset(sample), DetectorStatus.CONCLUDED, dropped), result

    new_state = DetectorState(pushed, DetectorStatus.ONGOING, dropped)
    return new_state, StepResult(status=DetectorStatus.ONGOING, fixation_start_time=start_time)


class FixationDetector:
    """Stateful wrapper around :func:`step` for one gaze stream.

    Not thread safe: drive one instance from one caller at a time.
    """

    def __init__(self, config: DetectorConfig, state: Optional[DetectorState] = None) -> None:
        self.config = config
        self._state = state or DetectorState()

    @classmethod
    def from_calibration_error(cls, calibration_error: float, **overrides) -> "FixationDetector":
        return cls(DetectorConfig(calibration_error=calibration_error, **overrides))

    def step(self, sample: SampleLike) -> StepResult:
        self._state, result = step(self._state, sample, self.config)
        return result

    @property
    def state(self) -> DetectorState:
        return self._state

    @property
    def status(self) -> Optional[DetectorStatus]:
        return self._state.status

    @property
    def window(self) -> CandidateWindow:
        return self._state.window

    @property
    def dropped_count(self) -> int:
        return self._state.dropped_count
