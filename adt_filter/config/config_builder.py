# adt_filter/config/config_builder.py
"""Build configuration objects from CLI arguments.

Separates configuration construction from argument parsing.
"""
from __future__ import annotations

import argparse
from typing import Any, Dict

from .config import DetectorConfig

# CLI dest -> DetectorConfig field for the overridable constants
_OVERRIDES: Dict[str, str] = {
    "threshold_factor": "dispersion_threshold_factor",
    "value_at_min": "value_at_min",
    "time_at_zero": "time_at_zero_ms",
    "sample_threshold": "sample_threshold",
    "max_sample_gap": "max_sample_gap_ms",
    "duplicate_epsilon": "duplicate_epsilon",
}


class ConfigBuilder:
    """Builds a :class:`DetectorConfig` from parsed CLI arguments.

    Arguments left at ``None`` keep the dataclass defaults.
    """

    @staticmethod
    def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for dest, field_name in _OVERRIDES.items():
            value = getattr(args, dest, None)
            if value is not None:
                overrides[field_name] = value
        return overrides

    @staticmethod
    def build_detector_config(args: argparse.Namespace, calibration_error: float) -> DetectorConfig:
        """Build detector configuration from CLI arguments."""
        return DetectorConfig(
            calibration_error=calibration_error,
            **ConfigBuilder.overrides_from_args(args),
        )
