"""
Command handlers for the bodot CLI.

Each command decides from the parsed command line whether it should run,
and returns a CommandResult instead of raising: the dispatcher in
cli.main is the only place that turns a failure into an exit code.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import CONFIG_FILENAME, ConfigSetting, dump_configuration
from ..models.runtime import BuildOptions, CommandResult
from ..orchestration import BodotContext, run_build
from ..system import is_engine_available
from ..validation import UserInputError, ValidationError, validate_path_exists
from .prompts import ask, ask_until

logger = logging.getLogger(__name__)


@dataclass
class CommandLine:
    """
    The parsed command line, as seen by command handlers.
    """

    info: bool = False
    init: bool = False
    config: bool = False
    build: bool = False
    # Positional arguments following the command name.
    args: List[str] = field(default_factory=list)
    overwrite: bool = False
    zip: bool = False
    continue_on_error: bool = False


class Command(ABC):
    """Base class for CLI commands."""

    name: str = ""

    @abstractmethod
    def should_execute(self, command_line: CommandLine) -> bool:
        pass

    @abstractmethod
    def execute(self, context: BodotContext, command_line: CommandLine) -> CommandResult:
        pass


class InfoCommand(Command):
    name = "info"

    def should_execute(self, command_line: CommandLine) -> bool:
        return command_line.info

    def execute(self, context: BodotContext, command_line: CommandLine) -> CommandResult:
        from .. import __version__

        print(
            "|-----------|\n"
            "|---Bodot---|\n"
            f"|--v{__version__}---|\n"
            "|-----------|\n"
        )
        print(f"Project: {context.config.project_name or '<unnamed>'}")
        print(f"Version: {context.config.semantic_version}\n")
        print(dump_configuration(context.config))

        if not context.config_path.exists():
            logger.warning(f"[!] No {CONFIG_FILENAME} found in {context.working_dir}")

        if not is_engine_available(context.config.engine_binary_path, cwd=context.working_dir):
            logger.warning("[!] Godot binary path is invalid")

        return CommandResult()


class InitCommand(Command):
    """Interactive first-time setup."""

    name = "init"

    def should_execute(self, command_line: CommandLine) -> bool:
        return command_line.init

    def execute(self, context: BodotContext, command_line: CommandLine) -> CommandResult:
        config = context.config

        config.project_name = ask(context, "What is the name of your project?")
        meta_version = ask(context, "What is the meta version of your project?")
        config.meta_version = meta_version or None
        config.engine_binary_path = ask_until(
            context,
            "What is the path to your godot binary?",
            "Could not find a valid godot binary at specified path, please try again",
            lambda answer: is_engine_available(answer, cwd=context.working_dir),
        )
        config.export_output_path = ask_until(
            context,
            "What is the path to export your project to?",
            "Could not find the specified directory, please try again",
            lambda answer: _is_directory(context, answer),
        )

        context.save_config()
        return CommandResult("Successfully configured project")


class ConfigCommand(Command):
    """`config <key> <value>`: change one setting and save."""

    name = "config"

    def should_execute(self, command_line: CommandLine) -> bool:
        return command_line.config

    def execute(self, context: BodotContext, command_line: CommandLine) -> CommandResult:
        try:
            setting_name = _arg(command_line, 0)
            value = _arg(command_line, 1)
            if not setting_name:
                raise UserInputError("missing config setting")
            if not value:
                raise UserInputError("missing config value")

            setting = ConfigSetting.parse(setting_name)
            stored = setting.apply(context.config, value)
        except UserInputError as e:
            return CommandResult.failure(e.message)

        context.save_config()
        return CommandResult(f"Configured {setting.value}={stored}")


class BuildCommand(Command):
    name = "build"

    def should_execute(self, command_line: CommandLine) -> bool:
        return command_line.build

    def execute(self, context: BodotContext, command_line: CommandLine) -> CommandResult:
        options = BuildOptions(
            overwrite=command_line.overwrite,
            zip=command_line.zip,
            continue_on_error=command_line.continue_on_error,
        )
        return run_build(context, options)


def _is_directory(context: BodotContext, answer: str) -> bool:
    try:
        validate_path_exists(context.resolve(answer) if answer else "", must_be_dir=True)
    except ValidationError:
        return False
    return True


def _arg(command_line: CommandLine, index: int) -> Optional[str]:
    if index < len(command_line.args):
        return command_line.args[index].strip()
    return None


COMMANDS: List[Command] = [
    InfoCommand(),
    InitCommand(),
    ConfigCommand(),
    BuildCommand(),
]
