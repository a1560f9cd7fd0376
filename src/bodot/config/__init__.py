"""
Configuration management for the bodot package.

This module provides loading, saving and mutation of the project
configuration stored in `bodot.config`.
"""

from .loader import (
    FIELD_KEYS,
    configuration_from_dict,
    load_configuration,
    load_toml_file,
)
from .settings import ConfigSetting
from .store import (
    CONFIG_FILENAME,
    PRESETS_FILENAME,
    configuration_to_dict,
    dump_configuration,
    increment_patch,
    save_configuration,
)

__all__ = [
    "CONFIG_FILENAME",
    "PRESETS_FILENAME",
    "FIELD_KEYS",
    "ConfigSetting",
    "configuration_from_dict",
    "configuration_to_dict",
    "dump_configuration",
    "increment_patch",
    "load_configuration",
    "load_toml_file",
    "save_configuration",
]
