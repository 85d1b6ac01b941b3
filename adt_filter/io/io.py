# adt_filter/io/io.py
from __future__ import annotations

from pathlib import Path
from typing import Union

import pandas as pd

PathLike = Union[str, Path]


def read_table(path: PathLike, sep: str = ",") -> pd.DataFrame:
    """
    Delimited Export einlesen (Standard: Komma als Separator, ``sep="\\t"`` fuer TSV).
    """
    return pd.read_csv(path, sep=sep, low_memory=False)


def write_table(df: pd.DataFrame, path: PathLike, sep: str = ",") -> None:
    """
    DataFrame ohne Index schreiben.
    """
    df.to_csv(path, sep=sep, index=False)
