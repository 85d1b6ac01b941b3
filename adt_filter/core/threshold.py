"""Time dependent tolerance for dispersion growth of a live fixation."""
from __future__ import annotations

from typing import Optional

from ..config.config import DetectorConfig
from ..config.constants import DetectorConstants


def relative_growth_limit(duration_ms: float, config: Optional[DetectorConfig] = None) -> float:
    """
    Allowed relative dispersion increase (percent) for a fixation of the given age.

    Piecewise linear over the clamped age ``[min_time_ms, max_time_ms]``:

      - ``value_at_min * 100`` at ``min_time_ms`` falling to 0 at ``time_at_zero_ms``
      - 0 at ``time_at_zero_ms`` falling to ``value_at_max * 100`` at ``max_time_ms``

    With the defaults this is 160 % at 100 ms, 0 % at 280 ms and -50 % at
    5000 ms. A negative limit means the window has to shrink to keep growing.
    """
    if config is None:
        value_at_min = DetectorConstants.VALUE_AT_MIN
        value_at_max = DetectorConstants.VALUE_AT_MAX
        time_at_zero = DetectorConstants.TIME_AT_ZERO_MS
        min_time = DetectorConstants.MIN_TIME_MS
        max_time = DetectorConstants.MAX_TIME_MS
    else:
        value_at_min = config.value_at_min
        value_at_max = config.value_at_max
        time_at_zero = config.time_at_zero_ms
        min_time = config.min_time_ms
        max_time = config.max_time_ms

    t = min(max(float(duration_ms), min_time), max_time)

    if t < time_at_zero:
        progress = (t - min_time) / (time_at_zero - min_time)
        return value_at_min * (1.0 - progress) * 100.0

    progress = (t - time_at_zero) / (max_time - time_at_zero)
    return value_at_max * progress * 100.0
