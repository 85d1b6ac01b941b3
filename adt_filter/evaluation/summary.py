# adt_filter/evaluation/summary.py
"""Quality-control summary of one detection run."""
from __future__ import annotations

from typing import Any, Dict

import numpy as np

from ..domain.events import ConclusionReason
from ..processing.detection import DetectionResult


def summarize_detection(result: DetectionResult) -> Dict[str, Any]:
    """
    Kennzahlen eines Detektionslaufs.

    Returns:
        Dictionary with fixation count, duration and dispersion statistics,
        counts per conclusion reason, dropped samples and anomaly count.
    """
    durations = np.array([f.duration for f in result.fixations], dtype=float)
    dispersions = np.array([f.dispersion for f in result.fixations], dtype=float)

    summary: Dict[str, Any] = {
        "n_samples": result.n_samples,
        "n_fixations": result.n_fixations,
        "dropped_count": result.dropped_count,
        "dropped_pct": (100.0 * result.dropped_count / result.n_samples) if result.n_samples else 0.0,
        "mean_duration_ms": float(durations.mean()) if durations.size else float("nan"),
        "median_duration_ms": float(np.median(durations)) if durations.size else float("nan"),
        "mean_dispersion": float(dispersions.mean()) if dispersions.size else float("nan"),
        "n_anomalies": len(result.anomalies),
    }
    for reason in ConclusionReason:
        summary[f"n_{reason.value}"] = sum(1 for f in result.fixations if f.reason is reason)
    return summary
