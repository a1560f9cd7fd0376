"""
Saving and mutating the project configuration.

There is no autosave: every mutation is followed by an explicit
save_configuration() call from the command that made it.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict

import toml

from ..models.config import ProjectConfiguration
from .loader import FIELD_KEYS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "bodot.config"
PRESETS_FILENAME = "export_presets.cfg"


def configuration_to_dict(config: ProjectConfiguration) -> Dict[str, Any]:
    """
    Map a configuration to the key layout of bodot.config.

    TOML has no null, so an absent meta version is left out entirely.
    """
    data = {}
    for field in dataclasses.fields(config):
        value = getattr(config, field.name)
        if value is None:
            continue
        data[FIELD_KEYS[field.name]] = list(value) if isinstance(value, list) else value
    return data


def dump_configuration(config: ProjectConfiguration) -> str:
    return toml.dumps(configuration_to_dict(config))


def save_configuration(config: ProjectConfiguration, config_path: Path) -> None:
    """
    Write the configuration to disk, replacing any previous contents.

    Args:
        config: The record to persist
        config_path: Destination file, normally ./bodot.config
    """
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(dump_configuration(config))
    logger.debug(f"Configuration saved to {config_path}")


def increment_patch(config: ProjectConfiguration, amount: int) -> str:
    """
    Add `amount` to the patch component in place.

    An unparsable patch value counts as 0. The caller is responsible for
    saving afterwards.

    Returns:
        The new patch value
    """
    try:
        current = int(config.patch_version)
    except (TypeError, ValueError):
        logger.warning(
            f"Patch version {config.patch_version!r} is not a number, treating it as 0"
        )
        current = 0
    config.patch_version = str(current + amount)
    return config.patch_version
