from typing import List, Sequence, Tuple

import pytest

from adt_filter.config import DetectorConfig
from adt_filter.core.detector import DetectorState
from adt_filter.core.window import CandidateWindow
from adt_filter.domain.dataset import GazeSample
from adt_filter.domain.events import DetectorStatus


def make_samples(
    coords: Sequence[Tuple[float, float]],
    dt_ms: float = 20.0,
    t0: float = 0.0,
) -> List[GazeSample]:
    return [GazeSample(t=t0 + i * dt_ms, x=x, y=y, c=1.0) for i, (x, y) in enumerate(coords)]


def make_state(
    coords: Sequence[Tuple[float, float]],
    dt_ms: float = 20.0,
    status: DetectorStatus | None = DetectorStatus.ONGOING,
    dropped_count: int = 0,
) -> DetectorState:
    window = CandidateWindow(tuple(make_samples(coords, dt_ms=dt_ms)))
    return DetectorState(window=window, status=status, dropped_count=dropped_count)


# Small square around (0.05, 0.05) followed by a point near its centre;
# the fourth and fifth samples each slide the window.
CLUSTER = [(0.0, 0.0), (0.1, 0.0), (0.0, 0.1), (0.1, 0.1), (0.05, 0.05), (0.05, 0.0)]


@pytest.fixture
def config() -> DetectorConfig:
    return DetectorConfig(calibration_error=1.0)


@pytest.fixture
def two_cluster_samples() -> List[GazeSample]:
    """Two fixation clusters 20 units apart, 20 ms spacing, then a 280 ms gap.

    Expected fixations:
      1) samples at 40..100 ms, centroid (0.05, 0.0625), ended by the jump
         (rel_threshold)
      2) samples at 160..220 ms, centroid (20.05, 0.0625), ended by the gap
         (time_difference)
    """
    first = make_samples(CLUSTER, dt_ms=20.0, t0=0.0)
    second = make_samples([(x + 20.0, y) for x, y in CLUSTER], dt_ms=20.0, t0=120.0)
    return first + second + [GazeSample(t=500.0, x=40.0, y=40.0, c=1.0)]
