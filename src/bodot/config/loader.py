"""
Configuration file loading utilities.

This module handles the low-level reading of `bodot.config`, a TOML document
whose keys mirror the ProjectConfiguration fields. Loading never fails: an
absent, unreadable or malformed file yields the default record.
"""

import dataclasses
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import ProjectConfiguration
from ..validation import ErrorSeverity, ValidationError, handle_config_error, validate_boolean

logger = logging.getLogger(__name__)

# Dataclass field name -> key used in bodot.config.
FIELD_KEYS: Dict[str, str] = {
    "project_name": "projectName",
    "major_version": "majorVersion",
    "minor_version": "minorVersion",
    "patch_version": "patchVersion",
    "meta_version": "metaVersion",
    "auto_increment_patch": "autoIncrementPatch",
    "use_log": "useLog",
    "engine_binary_path": "engineBinaryPath",
    "export_output_path": "exportOutputPath",
    "files_to_copy_post_build": "filesToCopyPostBuild",
    "directories_to_copy_post_build": "directoriesToCopyPostBuild",
}


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for log messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.debug(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        raise FileNotFoundError(f"{description} not found: {file_path}")

    with open(file_path, "rb") as f:
        return tomllib.load(f)


def _coerce_value(field: dataclasses.Field, key: str, value: Any) -> Any:
    """Convert a raw TOML value to the type of the given field."""
    default = (
        field.default_factory() if field.default_factory is not dataclasses.MISSING
        else field.default
    )

    if isinstance(default, bool):
        return validate_boolean(value, field_name=key)

    if isinstance(default, list):
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list):
            raise ValidationError(f"{key} must be a list of paths", field_name=key, value=value)
        return [str(item) for item in value]

    # Plain and optional strings. Hand-edited files often write versions as numbers.
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(f"{key} must be a string, got {value!r}", field_name=key, value=value)
    return str(value)


def configuration_from_dict(data: Dict[str, Any]) -> ProjectConfiguration:
    """
    Build a ProjectConfiguration from parsed file data.

    Unknown keys are ignored and missing keys keep their defaults. A value
    of the wrong type is logged and the field falls back to its default.
    """
    config = ProjectConfiguration()
    for field in dataclasses.fields(ProjectConfiguration):
        key = FIELD_KEYS[field.name]
        if key not in data:
            continue
        try:
            setattr(config, field.name, _coerce_value(field, key, data[key]))
        except ValidationError as e:
            logger.warning(f"Ignoring invalid value in configuration: {e}")

    unknown = sorted(set(data) - set(FIELD_KEYS.values()))
    if unknown:
        logger.debug(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
    return config


def load_configuration(config_path: Path) -> ProjectConfiguration:
    """
    Load the project configuration, falling back to defaults.

    Args:
        config_path: Path to bodot.config

    Returns:
        The loaded record, or a default record when the file is absent
        or cannot be parsed.
    """
    if not config_path.exists():
        logger.debug(f"No configuration at {config_path}, using defaults")
        return ProjectConfiguration()

    try:
        data: Optional[Dict[str, Any]] = load_toml_file(config_path, "project configuration")
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        handle_config_error(
            error=e,
            context=f"loading {config_path}, using defaults",
            severity=ErrorSeverity.WARNING,
            reraise=False,
            logger=logger
        )
        return ProjectConfiguration()

    if not data:
        return ProjectConfiguration()

    return configuration_from_dict(data)
