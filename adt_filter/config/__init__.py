"""Configuration and constants for the ADT fixation filter."""

from .config import DetectorConfig
from .constants import DetectorConstants, ColumnDefaults, ValidationMessages
from .config_builder import ConfigBuilder

__all__ = [
    "DetectorConfig",
    "DetectorConstants",
    "ColumnDefaults",
    "ValidationMessages",
    "ConfigBuilder",
]
