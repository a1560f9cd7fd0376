"""
Validation functions for values typed in by the user.

Used by the `config` command setters and the interactive `init` prompts.
"""

import os
from pathlib import Path
from typing import Any, Union

from .exceptions import ValidationError

_TRUE_VALUES = ("true", "yes", "on", "1")
_FALSE_VALUES = ("false", "no", "off", "0")


def validate_non_negative_integer(value: Any, field_name: str = "value") -> str:
    """
    Validate that a value is a non-negative integer.

    Version components are stored as strings, so the normalized string
    form is returned (e.g. " 07" becomes "7").

    Args:
        value: Value to validate
        field_name: Name of the field being validated

    Returns:
        The integer rendered back to a string

    Raises:
        ValidationError: If validation fails
    """
    try:
        int_value = int(str(value).strip())
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value!r}",
            field_name=field_name,
            value=value
        )
    if int_value < 0:
        raise ValidationError(
            f"{field_name} must be >= 0, got {int_value}",
            field_name=field_name,
            value=value
        )
    return str(int_value)


def validate_boolean(value: Any, field_name: str = "value") -> bool:
    """
    Validate a boolean given as text.

    Accepts true/false, yes/no, on/off and 1/0 in any case.

    Raises:
        ValidationError: If the value is not a recognized boolean
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValidationError(
        f"{field_name} must be true or false, got {value!r}",
        field_name=field_name,
        value=value
    )


def validate_path_exists(path: Union[str, Path], field_name: str = "path",
                         must_be_dir: bool = False) -> str:
    """
    Validate that a path exists.

    Args:
        path: Path to validate
        field_name: Name of the field being validated
        must_be_dir: Require a directory rather than any existing path

    Returns:
        Validated path string, stripped of surrounding whitespace

    Raises:
        ValidationError: If path doesn't exist
    """
    path_str = str(path).strip()
    if not path_str or not os.path.exists(path_str):
        raise ValidationError(
            f"{field_name} does not exist: {path_str}",
            field_name=field_name,
            value=path
        )
    if must_be_dir and not os.path.isdir(path_str):
        raise ValidationError(
            f"{field_name} is not a directory: {path_str}",
            field_name=field_name,
            value=path
        )
    return path_str
