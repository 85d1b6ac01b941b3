# adt_filter/evaluation/plotting.py
from __future__ import annotations

from typing import Iterable, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..domain.dataset import GazeSample
from ..domain.events import ConclusionReason, FixationResult

REASON_COLORS = {
    ConclusionReason.TIME_DIFFERENCE: "tab:gray",
    ConclusionReason.REL_THRESHOLD: "tab:orange",
    ConclusionReason.ABS_THRESHOLD: "tab:red",
}


def plot_fixations(
    samples: Sequence[GazeSample],
    fixations: Iterable[FixationResult],
    ax: Optional[plt.Axes] = None,
    title: Optional[str] = None,
) -> plt.Axes:
    """
    Rohe Gaze-Samples plus Fixationszentren plotten.

    Marker area scales with fixation duration, color encodes the
    conclusion reason. Returns the axes so callers can save or extend it.
    """
    fixations = list(fixations)
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 6))

    if samples:
        xy = np.array([(s.x, s.y) for s in samples], dtype=float)
        ax.plot(xy[:, 0], xy[:, 1], color="lightsteelblue", linewidth=0.6, zorder=1)
        ax.scatter(xy[:, 0], xy[:, 1], s=4, color="steelblue", label="gaze", zorder=2)

    for reason, color in REASON_COLORS.items():
        subset = [f for f in fixations if f.reason is reason]
        if not subset:
            continue
        ax.scatter(
            [f.centroid_x for f in subset],
            [f.centroid_y for f in subset],
            s=[max(f.duration, 1.0) / 5.0 for f in subset],
            color=color,
            alpha=0.6,
            edgecolors="black",
            label=f"fixation ({reason.value})",
            zorder=3,
        )

    ax.set_xlabel("Gaze X")
    ax.set_ylabel("Gaze Y")
    ax.set_title(title or "Detected fixations")
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc="best", fontsize="small")
    return ax
