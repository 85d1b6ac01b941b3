"""Geometry helpers for candidate windows."""
from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from ..config.constants import ValidationMessages
from ..domain.dataset import GazeSample


def _offsets(window: Iterable[GazeSample]) -> Tuple[np.ndarray, float, float]:
    """Coordinates relative to the first point, plus that reference point.

    Working on offsets keeps identical points at exactly zero spread.
    """
    xy = np.array([(s.x, s.y) for s in window], dtype=float)
    if xy.size == 0:
        raise ValueError(ValidationMessages.EMPTY_WINDOW)
    ref_x, ref_y = float(xy[0, 0]), float(xy[0, 1])
    return xy - (ref_x, ref_y), ref_x, ref_y


def centroid(window: Iterable[GazeSample]) -> Tuple[float, float]:
    """Arithmetic mean of the x and y coordinates."""
    rel, ref_x, ref_y = _offsets(window)
    mean_x, mean_y = rel.mean(axis=0)
    return ref_x + float(mean_x), ref_y + float(mean_y)


def dispersion(window: Iterable[GazeSample]) -> float:
    """Mean Euclidean distance of the points to their centroid."""
    rel, _, _ = _offsets(window)
    center = rel.mean(axis=0)
    distances = np.hypot(rel[:, 0] - center[0], rel[:, 1] - center[1])
    return float(distances.mean())
