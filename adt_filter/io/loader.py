# adt_filter/io/loader.py
"""Map recording tables to gaze samples and fixations back to tables."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from ..config.constants import ColumnDefaults, ValidationMessages
from ..domain.dataset import GazeSample
from ..domain.events import FixationResult
from .io import PathLike, read_table, write_table


@dataclass(frozen=True)
class GazeColumns:
    """Names of the time, x, y and confidence columns of a recording.

    ``c`` may be ``None`` when the recording has no confidence column.
    """

    t: str = "timestamp"
    x: str = "x"
    y: str = "y"
    c: Optional[str] = "c"

    def names(self) -> Tuple[str, ...]:
        return tuple(n for n in (self.t, self.x, self.y, self.c) if n is not None)


# Column presets of the supported recording sources
SOURCE_COLUMNS = {
    "labvanced": GazeColumns(t="timestamp", x="X_lb", y="Y_lb", c="c"),
    "eyelink": GazeColumns(t="timestamp", x="X_el", y="Y_el", c="c"),
}


def _require_columns(df: pd.DataFrame, names: Iterable[str]) -> None:
    missing = [n for n in names if n not in df.columns]
    if missing:
        raise ValueError(f"DataFrame is missing required columns: {missing}")


def samples_from_dataframe(
    df: pd.DataFrame,
    columns: Optional[GazeColumns] = None,
    task: Optional[str] = None,
    task_column: str = ColumnDefaults.TASK_COLUMN,
) -> List[GazeSample]:
    """
    Extract valid gaze samples in row order.

    - optional filter on ``task_column == task``
    - non-numeric cells are coerced to NaN
    - rows with any non-finite t/x/y/c are skipped
    """
    cols = columns or GazeColumns()
    names = cols.names()
    _require_columns(df, names + ((task_column,) if task is not None else ()))

    if task is not None:
        df = df[df[task_column] == task]

    numeric = df[list(names)].apply(pd.to_numeric, errors="coerce")
    values = numeric.to_numpy(dtype=float)
    if values.size:
        values = values[np.isfinite(values).all(axis=1)]

    samples: List[GazeSample] = []
    for row in values:
        c = float(row[3]) if cols.c is not None else 0.0
        samples.append(GazeSample(t=float(row[0]), x=float(row[1]), y=float(row[2]), c=c))
    return samples


def load_gaze_samples(
    path: PathLike,
    columns: Optional[GazeColumns] = None,
    task: Optional[str] = None,
    task_column: str = ColumnDefaults.TASK_COLUMN,
    sep: str = ",",
) -> List[GazeSample]:
    return samples_from_dataframe(read_table(path, sep=sep), columns, task, task_column)


def load_calibration_error(
    trials: Union[PathLike, pd.DataFrame],
    task: str,
    task_column: str = ColumnDefaults.TASK_COLUMN,
    column: str = ColumnDefaults.CALIBRATION_ERROR_COLUMN,
    sep: str = ",",
) -> float:
    """
    Calibration error recorded for ``task`` in the trial table.

    When a task has several trial rows the last one wins.
    """
    df = trials if isinstance(trials, pd.DataFrame) else read_table(trials, sep=sep)
    _require_columns(df, (task_column, column))

    rows = df[df[task_column] == task]
    if rows.empty:
        raise ValueError(f"No trial rows for task '{task}' in column '{task_column}'")

    value = pd.to_numeric(rows[column], errors="coerce").iloc[-1]
    if pd.isna(value) or not np.isfinite(value) or value <= 0:
        raise ValueError(f"{ValidationMessages.INVALID_CALIBRATION_ERROR} (task '{task}': {rows[column].iloc[-1]!r})")
    return float(value)


def fixations_to_dataframe(fixations: Iterable[FixationResult]) -> pd.DataFrame:
    """Fixations as a table with the fixed export column order."""
    rows = [
        (
            f.start_time,
            f.end_time,
            f.duration,
            f.centroid_x,
            f.centroid_y,
            f.dispersion,
            f.reason.value,
        )
        for f in fixations
    ]
    return pd.DataFrame(rows, columns=list(ColumnDefaults.FIXATION_COLUMNS))


def write_fixations(fixations: Iterable[FixationResult], path: PathLike, sep: str = ",") -> pd.DataFrame:
    df = fixations_to_dataframe(fixations)
    write_table(df, path, sep=sep)
    return df
