"""
Validation and error handling for the bodot package.

This module provides the exception hierarchy used by every command and the
small set of validators applied to user input.
"""

from .exceptions import (
    BodotError,
    ErrorSeverity,
    ExternalToolError,
    ExternalToolLaunchError,
    NoPresetsFoundError,
    PostBuildAssetMissing,
    PreconditionFailure,
    UserInputError,
    ValidationError,
    handle_error,
    handle_config_error,
    handle_file_error,
    handle_subprocess_error,
    handle_cli_error,
)

from .validators import (
    validate_boolean,
    validate_non_negative_integer,
    validate_path_exists,
)

__all__ = [
    # Errors
    "BodotError",
    "ErrorSeverity",
    "ExternalToolError",
    "ExternalToolLaunchError",
    "NoPresetsFoundError",
    "PostBuildAssetMissing",
    "PreconditionFailure",
    "UserInputError",
    "ValidationError",
    # Handlers
    "handle_error",
    "handle_config_error",
    "handle_file_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "validate_boolean",
    "validate_non_negative_integer",
    "validate_path_exists",
]
