"""
Settings that can be changed with `bodot config <key> <value>`.

The set of configurable keys is closed: every name maps to one
ConfigSetting member, and each member knows how to parse and apply its
value. Anything else is rejected as not configurable.
"""

import logging
from enum import Enum

from ..models.config import ProjectConfiguration
from ..validation import UserInputError, validate_boolean, validate_non_negative_integer

logger = logging.getLogger(__name__)

# metaVersion value that removes the meta version again.
UNSET_VALUE = "none"


class ConfigSetting(Enum):
    """A configurable setting, valued by its key in bodot.config."""

    PROJECT_NAME = "projectName"
    MAJOR_VERSION = "majorVersion"
    MINOR_VERSION = "minorVersion"
    PATCH_VERSION = "patchVersion"
    META_VERSION = "metaVersion"
    AUTO_INCREMENT_PATCH = "autoIncrementPatch"
    USE_LOG = "useLog"
    ENGINE_BINARY_PATH = "engineBinaryPath"
    EXPORT_OUTPUT_PATH = "exportOutputPath"

    @classmethod
    def parse(cls, name: str) -> "ConfigSetting":
        """
        Look up a setting by key, ignoring case.

        Raises:
            UserInputError: If no setting has that key
        """
        wanted = name.strip().lower()
        for setting in cls:
            if setting.value.lower() == wanted:
                return setting
        raise UserInputError(f"'{name}' is not configurable or it doesn't exist")

    def apply(self, config: ProjectConfiguration, value: str) -> str:
        """
        Parse `value` and store it on `config`.

        Returns:
            The value as stored, for reporting back to the user

        Raises:
            ValidationError: If the value does not parse for this setting
        """
        if self is ConfigSetting.PROJECT_NAME:
            config.project_name = value
        elif self is ConfigSetting.MAJOR_VERSION:
            config.major_version = validate_non_negative_integer(value, self.value)
        elif self is ConfigSetting.MINOR_VERSION:
            config.minor_version = validate_non_negative_integer(value, self.value)
        elif self is ConfigSetting.PATCH_VERSION:
            config.patch_version = validate_non_negative_integer(value, self.value)
        elif self is ConfigSetting.META_VERSION:
            config.meta_version = None if value.strip().lower() == UNSET_VALUE else value
        elif self is ConfigSetting.AUTO_INCREMENT_PATCH:
            config.auto_increment_patch = validate_boolean(value, self.value)
        elif self is ConfigSetting.USE_LOG:
            config.use_log = validate_boolean(value, self.value)
        elif self is ConfigSetting.ENGINE_BINARY_PATH:
            config.engine_binary_path = value
        elif self is ConfigSetting.EXPORT_OUTPUT_PATH:
            config.export_output_path = value

        stored = getattr(config, _ATTRIBUTES[self])
        logger.debug(f"Set {self.value} to {stored!r}")
        if stored is None:
            return UNSET_VALUE
        return str(stored).lower() if isinstance(stored, bool) else str(stored)


_ATTRIBUTES = {
    ConfigSetting.PROJECT_NAME: "project_name",
    ConfigSetting.MAJOR_VERSION: "major_version",
    ConfigSetting.MINOR_VERSION: "minor_version",
    ConfigSetting.PATCH_VERSION: "patch_version",
    ConfigSetting.META_VERSION: "meta_version",
    ConfigSetting.AUTO_INCREMENT_PATCH: "auto_increment_patch",
    ConfigSetting.USE_LOG: "use_log",
    ConfigSetting.ENGINE_BINARY_PATH: "engine_binary_path",
    ConfigSetting.EXPORT_OUTPUT_PATH: "export_output_path",
}
