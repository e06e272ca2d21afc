"""Readpull configuration models."""

from .config import GroupingConfig, OutputConfig, ReadpullConfig, TuningConfig

__all__ = [
    "GroupingConfig",
    "OutputConfig",
    "ReadpullConfig",
    "TuningConfig",
]
