"""Evaluation: run summaries and visualization (plotting needs the ``plot`` extra)."""

from .summary import summarize_detection

__all__ = [
    "summarize_detection",
]
