"""
Exception types and error handling helpers.

Every failure a command can report is a subclass of BodotError. Command
handlers catch these at their boundary and turn them into a
(message, success) result; only the CLI dispatcher exits the process.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class BodotError(Exception):
    """Base class for all errors reported by bodot commands."""

    default_severity = ErrorSeverity.ERROR

    def __init__(self, message: str, severity: Optional[ErrorSeverity] = None):
        super().__init__(message)
        self.message = message
        self.severity = severity or self.default_severity


class UserInputError(BodotError):
    """A command was given a missing, unknown or malformed argument."""


class ValidationError(UserInputError):
    """
    Exception raised when validation of a single value fails.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message, severity=severity)
        self.field_name = field_name
        self.value = value


class PreconditionFailure(BodotError):
    """The build cannot start; nothing beyond the check itself was changed."""


class NoPresetsFoundError(PreconditionFailure):
    """The preset descriptor yielded no user-facing presets."""

    def __init__(self, message: str = (
        "No export presets could be found. "
        "Please configure exports in the godot editor"
    )):
        super().__init__(message)


class PostBuildAssetMissing(BodotError):
    """A configured post-build file or directory does not exist."""

    default_severity = ErrorSeverity.WARNING

    def __init__(self, path: str):
        super().__init__(f"Cannot copy '{path}'. It does not exist.")
        self.path = path


class ExternalToolError(BodotError):
    """The export tool exited with a non-zero status for a preset."""

    def __init__(self, preset_name: str, exit_code: int):
        super().__init__(
            f"Export of preset {preset_name} failed with exit code {exit_code}"
        )
        self.preset_name = preset_name
        self.exit_code = exit_code


class ExternalToolLaunchError(BodotError):
    """The export tool could not be started at all."""


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_file_error(error: Exception, context: str, **kwargs) -> None:
    """Handle file-related errors."""
    handle_error(error, f"file {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI-level error and exit the process."""
    exit_code = kwargs.pop('exit_code', 1)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
