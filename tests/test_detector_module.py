import logging

import numpy as np
import pytest

from adt_filter.config import DetectorConfig
from adt_filter.core.detector import DetectorState, FixationDetector, conclude, step
from adt_filter.core.window import CandidateWindow
from adt_filter.domain.dataset import GazeSample
from adt_filter.domain.events import (
    ConclusionReason,
    DetectorAnomaly,
    DetectorStatus,
)

from conftest import CLUSTER, make_samples, make_state


def _feed(samples, config, state=None):
    state = state or DetectorState()
    results = []
    for sample in samples:
        state, result = step(state, sample, config)
        results.append(result)
    return state, results


def test_dispersion_threshold_scales_calibration_error():
    for err in (0.1, 1.0, 2.5, 37.0):
        assert DetectorConfig(calibration_error=err).dispersion_threshold == err * 3.25


# --- accumulation ---------------------------------------------------------


def test_first_samples_only_accumulate(config):
    samples = make_samples(CLUSTER[:4], dt_ms=50.0)
    state, results = _feed(samples, config)
    assert [r.status for r in results] == [DetectorStatus.NONE_DETECTED] * 4
    assert len(state.window) == 4
    assert state.dropped_count == 0


def test_clustered_samples_start_fixation_at_first_timestamp(config):
    # four samples fill the window, the fifth is the first one evaluated
    samples = make_samples(CLUSTER[:5], dt_ms=50.0)
    state, results = _feed(samples, config)
    last = results[-1]
    assert last.status is DetectorStatus.ONGOING
    assert last.fixation_start_time == 0.0
    assert last.fixation is None
    # the fifth sample slid the window: the oldest corner was dropped
    assert state.dropped_count == 1
    assert [s.t for s in state.window] == [50.0, 100.0, 150.0, 200.0]


def test_first_sample_reports_none_detected(config):
    state, result = step(DetectorState(), (0.0, 1.0, 1.0, 0.9), config)
    assert result.status is DetectorStatus.NONE_DETECTED
    assert state.window.first == GazeSample(0.0, 1.0, 1.0, 0.9)


# --- gap filter -----------------------------------------------------------


def test_gap_concludes_ongoing_fixation(config):
    state = make_state(CLUSTER[1:5], dt_ms=50.0)
    sample = GazeSample(t=state.window.last.t + 200.0, x=0.05, y=0.05)

    new_state, result = step(state, sample, config)

    assert result.status is DetectorStatus.CONCLUDED
    assert result.fixation.reason is ConclusionReason.TIME_DIFFERENCE
    assert result.fixation.start_time == 0.0
    assert result.fixation.end_time == 150.0
    assert result.fixation.duration == 150.0
    assert result.fixation.samples == state.window.samples
    assert new_state.window.samples == (sample,)
    assert new_state.status is DetectorStatus.CONCLUDED
    assert new_state.dropped_count == 0


def test_gap_without_fixation_drops_window(config):
    state = make_state(CLUSTER[:3], status=DetectorStatus.NONE_DETECTED, dropped_count=2)
    sample = GazeSample(t=1000.0, x=5.0, y=5.0)

    new_state, result = step(state, sample, config)

    assert result.status is DetectorStatus.NONE_DETECTED
    assert result.fixation is None
    assert new_state.dropped_count == 5
    assert new_state.window.samples == (sample,)


def test_gap_after_conclusion_demotes_status(config):
    state = make_state(CLUSTER[:1], status=DetectorStatus.CONCLUDED)
    new_state, result = step(state, GazeSample(t=400.0, x=1.0, y=1.0), config)
    assert result.status is DetectorStatus.NONE_DETECTED
    assert new_state.status is DetectorStatus.NONE_DETECTED
    assert new_state.dropped_count == 1


def test_gap_exactly_at_limit_is_accepted(config):
    state = make_state(CLUSTER[:2], status=DetectorStatus.NONE_DETECTED)
    new_state, _ = step(state, GazeSample(t=20.0 + 150.0, x=0.0, y=0.1), config)
    assert len(new_state.window) == 3


def test_no_time_difference_without_gaps(config):
    rng = np.random.default_rng(7)
    # random walk with occasional saccades, 10 ms spacing
    steps = rng.normal(0.0, 0.2, size=(600, 2))
    steps[rng.random(600) < 0.05] *= 40.0
    coords = np.cumsum(steps, axis=0)
    samples = make_samples([tuple(p) for p in coords], dt_ms=10.0)

    _, results = _feed(samples, config)

    fixations = [r.fixation for r in results if r.fixation is not None]
    assert fixations
    assert all(f.reason is not ConclusionReason.TIME_DIFFERENCE for f in fixations)
    assert all(r.anomaly is None for r in results)


# --- duplicate filter -----------------------------------------------------


def test_duplicate_is_discarded_and_counted(config):
    state = make_state(CLUSTER[:4], status=DetectorStatus.ONGOING)
    last = state.window.last
    duplicate = GazeSample(t=last.t + 20.0, x=last.x, y=last.y)

    new_state, result = step(state, duplicate, config)

    assert result.status is DetectorStatus.ONGOING
    assert new_state.window == state.window
    assert new_state.dropped_count == state.dropped_count + 1


def test_duplicate_demotes_concluded(config):
    state = make_state(CLUSTER[:1], status=DetectorStatus.CONCLUDED)
    new_state, result = step(state, GazeSample(t=20.0, x=0.0, y=0.0), config)
    assert result.status is DetectorStatus.NONE_DETECTED
    assert new_state.status is DetectorStatus.NONE_DETECTED


def test_duplicate_before_any_status(config):
    state, _ = step(DetectorState(), GazeSample(t=0.0, x=1.0, y=1.0), config)
    state = DetectorState(window=state.window, status=None)
    new_state, result = step(state, GazeSample(t=10.0, x=1.0, y=1.0), config)
    assert result.status is DetectorStatus.NONE_DETECTED
    assert new_state.status is None
    assert new_state.dropped_count == 1


def test_repeated_duplicates_increment_once_each(config):
    state = make_state(CLUSTER[:4], status=DetectorStatus.NONE_DETECTED)
    last = state.window.last
    s1, r1 = step(state, GazeSample(t=last.t + 10.0, x=last.x, y=last.y), config)
    s2, r2 = step(s1, GazeSample(t=last.t + 20.0, x=last.x, y=last.y), config)
    assert s1.dropped_count == 1
    assert s2.dropped_count == 2
    assert r1.status is r2.status is DetectorStatus.NONE_DETECTED
    assert s2.window == state.window


# --- repair vs. grow ------------------------------------------------------


def test_slide_above_threshold_reports_none_detected(config):
    state = make_state([(-5.0, 0.0), (5.0, 0.0), (-5.0, 0.0), (5.0, 0.0)], status=DetectorStatus.NONE_DETECTED)
    sample = GazeSample(t=80.0, x=5.5, y=0.0)

    new_state, result = step(state, sample, config)

    # slid dispersion 3.8125 < 5 but still above 3.25
    assert result.status is DetectorStatus.NONE_DETECTED
    assert new_state.window == state.window.slide(sample)
    assert new_state.dropped_count == 1


def test_wide_window_drops_oldest_sample(config):
    state = make_state([(-5.0, 0.0), (5.0, 0.0), (-5.0, 0.0), (5.0, 0.0)], status=DetectorStatus.NONE_DETECTED)
    sample = GazeSample(t=80.0, x=-20.0, y=0.0)

    new_state, result = step(state, sample, config)

    assert result.status is DetectorStatus.NONE_DETECTED
    assert new_state.window == state.window.drop_oldest()
    assert sample not in new_state.window.samples
    assert new_state.dropped_count == 1


def test_ongoing_above_threshold_is_reported_not_raised(config, caplog):
    state = make_state([(-5.0, 0.0), (5.0, 0.0), (-5.0, 0.0), (5.0, 0.0)], status=DetectorStatus.ONGOING)
    sample = GazeSample(t=80.0, x=-20.0, y=0.0)

    with caplog.at_level(logging.WARNING, logger="adt_filter.core.detector"):
        new_state, result = step(state, sample, config)

    assert result.anomaly is DetectorAnomaly.ONGOING_ABOVE_THRESHOLD
    assert result.status is DetectorStatus.ONGOING
    assert new_state is state
    assert "threshold" in caplog.text


# --- extend or conclude ---------------------------------------------------

ZIGZAG = [(-2.0, 0.0), (2.0, 0.0), (-2.0, 0.0), (2.0, 0.0)]
CROSS = [(0.0, 0.0), (-2.0, 0.0), (2.0, 0.0), (0.0, 0.0)]


def test_abs_threshold_conclusion(config):
    # dispersion 2.0 -> 3.52 (+76 %), limit at 120 ms is ~142 %
    state = make_state(ZIGZAG, dt_ms=30.0)
    sample = GazeSample(t=120.0, x=11.0, y=0.0)

    new_state, result = step(state, sample, config)

    fixation = result.fixation
    assert result.status is DetectorStatus.CONCLUDED
    assert fixation.reason is ConclusionReason.ABS_THRESHOLD
    assert fixation.start_time == 0.0
    assert fixation.end_time == 90.0
    assert fixation.centroid == pytest.approx((0.0, 0.0))
    assert fixation.dispersion == pytest.approx(2.0)
    assert len(fixation.samples) == 4
    assert new_state.window.samples == (sample,)
    assert new_state.status is DetectorStatus.CONCLUDED


def test_rel_threshold_conclusion_for_mature_fixation(config):
    # window spans 300 ms, so the limit at 400 ms is negative
    state = make_state(CROSS, dt_ms=100.0)
    sample = GazeSample(t=400.0, x=0.0, y=1.5)

    new_state, result = step(state, sample, config)

    fixation = result.fixation
    assert fixation.reason is ConclusionReason.REL_THRESHOLD
    # absolute dispersion after the push (~1.17) stays below 3.25
    assert state.window.append(sample).dispersion() < config.dispersion_threshold
    assert fixation.dispersion == pytest.approx(1.0)
    assert fixation.end_time == 300.0
    assert new_state.window.samples == (sample,)


def test_same_growth_is_accepted_for_young_fixation(config):
    state = make_state(CROSS, dt_ms=30.0)
    sample = GazeSample(t=120.0, x=0.0, y=1.5)

    new_state, result = step(state, sample, config)

    assert result.status is DetectorStatus.ONGOING
    assert result.fixation_start_time == 0.0
    assert new_state.window == state.window.append(sample)
    assert new_state.dropped_count == 0


def test_shrinking_dispersion_extends_mature_fixation(config):
    state = make_state(CROSS, dt_ms=100.0)
    sample = GazeSample(t=400.0, x=0.0, y=0.3)

    new_state, result = step(state, sample, config)

    assert result.status is DetectorStatus.ONGOING
    assert len(new_state.window) == 5


# --- conclude ---------------------------------------------------------------


def test_conclude_reports_full_fixation():
    window = CandidateWindow(tuple(make_samples(CLUSTER[:4], dt_ms=25.0)))
    result = conclude(window, ConclusionReason.ABS_THRESHOLD)
    fixation = result.fixation
    assert result.concluded
    assert fixation.status is DetectorStatus.CONCLUDED
    assert fixation.duration == 75.0
    assert fixation.centroid == pytest.approx((0.05, 0.05))
    assert fixation.sample_count == 4


def test_conclude_short_window_is_an_anomaly(caplog):
    window = CandidateWindow(tuple(make_samples(CLUSTER[:2])))
    with caplog.at_level(logging.WARNING, logger="adt_filter.core.detector"):
        result = conclude(window, ConclusionReason.TIME_DIFFERENCE)
    assert result.fixation is None
    assert not result.concluded
    assert result.anomaly is DetectorAnomaly.SHORT_FIXATION
    assert "2 samples" in caplog.text


# --- replay and facade ------------------------------------------------------


def test_step_is_deterministic(config, two_cluster_samples):
    first_state, first = _feed(two_cluster_samples, config)
    second_state, second = _feed(two_cluster_samples, config)
    assert first == second
    assert first_state == second_state


def test_two_cluster_stream(config, two_cluster_samples):
    state, results = _feed(two_cluster_samples, config)
    fixations = [r.fixation for r in results if r.concluded]

    assert [f.reason for f in fixations] == [
        ConclusionReason.REL_THRESHOLD,
        ConclusionReason.TIME_DIFFERENCE,
    ]
    assert (fixations[0].start_time, fixations[0].end_time) == (40.0, 100.0)
    assert fixations[0].centroid == pytest.approx((0.05, 0.0625))
    assert fixations[0].dispersion == pytest.approx(0.05)
    assert (fixations[1].start_time, fixations[1].end_time) == (160.0, 220.0)
    assert fixations[1].centroid == pytest.approx((20.05, 0.0625))
    assert state.dropped_count == 4


def test_fixation_detector_facade(two_cluster_samples):
    detector = FixationDetector.from_calibration_error(1.0)
    concluded = []
    for sample in two_cluster_samples:
        result = detector.step(sample.as_tuple())
        if result.concluded:
            concluded.append(result.fixation)

    assert len(concluded) == 2
    assert detector.dropped_count == 4
    assert detector.status is DetectorStatus.CONCLUDED
    assert detector.window.samples == (two_cluster_samples[-1],)
    assert detector.state.dropped_count == 4
