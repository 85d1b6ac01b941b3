# adt_filter/processing/detection.py
"""Run the fixation detector over a whole gaze stream."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Iterator, List, Optional, Tuple

from ..config.config import DetectorConfig
from ..core.detector import DetectorState, step
from ..domain.dataset import SampleLike
from ..domain.events import DetectorAnomaly, FixationResult

logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    """Fixations of one stream plus quality-control counters."""

    fixations: List[FixationResult]
    dropped_count: int
    n_samples: int
    anomalies: List[Tuple[int, DetectorAnomaly]] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def n_fixations(self) -> int:
        return len(self.fixations)


def detect_fixations(
    samples: Iterable[SampleLike],
    config: DetectorConfig,
    state: Optional[DetectorState] = None,
) -> Iterator[FixationResult]:
    """
    Lazily yield every fixation concluded while stepping through ``samples``.

    A fixation still ongoing when the input ends is not reported, because
    only a gap, a relative or an absolute threshold violation concludes one.
    """
    state = state or DetectorState()
    for sample in samples:
        state, result = step(state, sample, config)
        if result.fixation is not None:
            yield result.fixation


def run_detection(samples: Iterable[SampleLike], config: DetectorConfig) -> DetectionResult:
    """Process a complete stream and collect fixations and diagnostics."""
    state = DetectorState()
    fixations: List[FixationResult] = []
    anomalies: List[Tuple[int, DetectorAnomaly]] = []
    n = 0

    for n, sample in enumerate(samples, start=1):
        state, result = step(state, sample, config)
        if result.fixation is not None:
            fixations.append(result.fixation)
        if result.anomaly is not None:
            anomalies.append((n - 1, result.anomaly))

    logger.info(
        "Detected %d fixations in %d samples (%d dropped, threshold %.4f)",
        len(fixations),
        n,
        state.dropped_count,
        config.dispersion_threshold,
    )
    if anomalies:
        logger.warning("Detector reported %d internal anomalies", len(anomalies))

    return DetectionResult(
        fixations=fixations,
        dropped_count=state.dropped_count,
        n_samples=n,
        anomalies=anomalies,
    )
