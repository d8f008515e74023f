"""
Data models for the page numbering tool.
Provides the configuration layers, the resolved configuration and FileRecord.
"""

from .config import (
    ConfigLayer,
    EffectiveConfig,
    format_settings,
    new_default_config,
    present,
    resolve,
)
from .file_record import FileRecord

__all__ = [
    "ConfigLayer",
    "EffectiveConfig",
    "FileRecord",
    "format_settings",
    "new_default_config",
    "present",
    "resolve",
]
