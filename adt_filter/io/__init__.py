"""Tabular input/output for recordings and fixations."""

from .io import read_table, write_table
from .loader import (
    GazeColumns,
    SOURCE_COLUMNS,
    samples_from_dataframe,
    load_gaze_samples,
    load_calibration_error,
    fixations_to_dataframe,
    write_fixations,
)

__all__ = [
    "read_table",
    "write_table",
    "GazeColumns",
    "SOURCE_COLUMNS",
    "samples_from_dataframe",
    "load_gaze_samples",
    "load_calibration_error",
    "fixations_to_dataframe",
    "write_fixations",
]
