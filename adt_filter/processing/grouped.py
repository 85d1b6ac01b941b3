# adt_filter/processing/grouped.py
"""
Fixation detection for many independent streams at once.

A recording table usually holds several streams (subject x session x task).
Each group gets its own detector; groups share no state, so they are
processed in parallel with joblib.
"""
from __future__ import annotations

import logging
from typing import Any, Hashable, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd
from joblib import Parallel, delayed

from ..config.config import DetectorConfig
from ..config.constants import ColumnDefaults
from ..io.loader import GazeColumns, fixations_to_dataframe, samples_from_dataframe
from .detection import run_detection

logger = logging.getLogger(__name__)

CalibrationErrors = Union[float, Mapping[Hashable, float]]


def _group_key(key: Any) -> Tuple[Any, ...]:
    return key if isinstance(key, tuple) else (key,)


def _lookup_calibration_error(errors: CalibrationErrors, key: Tuple[Any, ...]) -> float:
    if not isinstance(errors, Mapping):
        return float(errors)
    if key in errors:
        return float(errors[key])
    if len(key) == 1 and key[0] in errors:
        return float(errors[key[0]])
    raise ValueError(f"No calibration error given for group {key}")


def _detect_group(
    frame: pd.DataFrame,
    columns: Optional[GazeColumns],
    config: DetectorConfig,
) -> Tuple[pd.DataFrame, int]:
    samples = samples_from_dataframe(frame, columns)
    result = run_detection(samples, config)
    return fixations_to_dataframe(result.fixations), result.dropped_count


def detect_fixations_by_group(
    df: pd.DataFrame,
    group_columns: Sequence[str],
    calibration_errors: CalibrationErrors,
    columns: Optional[GazeColumns] = None,
    n_jobs: int = 1,
    **overrides: Any,
) -> pd.DataFrame:
    """
    Run one detector per group and stack the fixation tables.

    Args:
        df: Recording table with gaze and grouping columns
        group_columns: Columns identifying one stream (e.g. subject, session, task)
        calibration_errors: One value for all groups, or a mapping from group
                            key (tuple, or scalar for a single group column)
        columns: Gaze column names (default: :class:`GazeColumns`)
        n_jobs: joblib worker count (-1 = all cores)
        **overrides: Further :class:`DetectorConfig` fields

    Returns:
        DataFrame with the group columns, the fixation export columns and
        ``dropped_count`` per group.
    """
    group_columns = list(group_columns)
    missing = [c for c in group_columns if c not in df.columns]
    if missing:
        raise ValueError(f"DataFrame is missing group columns: {missing}")

    jobs = []
    keys: List[Tuple[Any, ...]] = []
    for key, frame in df.groupby(group_columns, sort=False):
        key = _group_key(key)
        cfg = DetectorConfig(
            calibration_error=_lookup_calibration_error(calibration_errors, key),
            **overrides,
        )
        keys.append(key)
        jobs.append(delayed(_detect_group)(frame, columns, cfg))

    logger.info("Detecting fixations for %d groups (n_jobs=%s)", len(jobs), n_jobs)
    outputs = Parallel(n_jobs=n_jobs)(jobs) if jobs else []

    out_columns = group_columns + list(ColumnDefaults.FIXATION_COLUMNS) + ["dropped_count"]
    parts = []
    for key, (fixations, dropped) in zip(keys, outputs):
        if fixations.empty:
            continue
        fixations = fixations.copy()
        for name, value in zip(group_columns, key):
            fixations[name] = value
        fixations["dropped_count"] = dropped
        parts.append(fixations[out_columns])

    if not parts:
        return pd.DataFrame(columns=out_columns)
    return pd.concat(parts, ignore_index=True)
