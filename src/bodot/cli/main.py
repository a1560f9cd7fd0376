"""
Command-line interface for the Bodot build tool.

This module parses the command line, loads the project configuration once
into a BodotContext, and dispatches to the command handlers. A failed
command prints its message and makes the process exit with status 1.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..orchestration import BodotContext
from ..system import SubprocessExportRunner
from ..validation import handle_cli_error
from .commands import COMMANDS, CommandLine

# --- Logging Setup ---
LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "bodot.log"

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt=LOG_DATE_FORMAT,
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bodot",
        description="Export Godot projects for every preset and manage the project version.",
    )
    parser.add_argument(
        "command",
        choices=[command.name for command in COMMANDS],
        help="info: show configuration, init: interactive setup, "
             "config <key> <value>: change a setting, build: export all presets",
    )
    parser.add_argument(
        "args",
        nargs="*",
        help="Arguments for the command (the key and value for 'config').",
    )
    parser.add_argument(
        "-C",
        "--directory",
        type=Path,
        default=Path.cwd(),
        help="Project directory containing bodot.config and export_presets.cfg.",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace the output folder of the current version if it already exists.",
    )
    parser.add_argument(
        "--zip",
        action="store_true",
        help="Zip each preset folder after exporting.",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Keep exporting remaining presets when one export fails.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Kill an export that runs longer than this many seconds.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def parse_command_line(argv: Optional[List[str]] = None):
    """
    Parse arguments into the CommandLine seen by handlers.

    Returns:
        Tuple of (CommandLine, argparse.Namespace)
    """
    args = build_parser().parse_args(argv)
    command_line = CommandLine(
        info=args.command == "info",
        init=args.command == "init",
        config=args.command == "config",
        build=args.command == "build",
        args=list(args.args),
        overwrite=args.overwrite,
        zip=args.zip,
        continue_on_error=args.continue_on_error,
    )
    return command_line, args


def enable_file_logging(working_dir: Path) -> logging.Handler:
    """Mirror all log output to bodot.log in the project directory."""
    handler = logging.FileHandler(working_dir / LOG_FILENAME, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def dispatch(context: BodotContext, command_line: CommandLine) -> int:
    """
    Run every command selected by the command line.

    Returns:
        0 when all ran successfully, 1 at the first failure
    """
    for command in COMMANDS:
        if not command.should_execute(command_line):
            continue

        logger.debug(f"Running command: {command.name}")
        result = command.execute(context, command_line)

        if not result.success:
            logger.error(result.message or f"{command.name} failed")
            return 1
        if result.message:
            logger.info(result.message)

    return 0


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for Bodot.

    Raises:
        SystemExit: Always, with the dispatch exit code.
    """
    command_line, args = parse_command_line(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    working_dir = args.directory.absolute()
    if not working_dir.is_dir():
        handle_cli_error(
            error=NotADirectoryError(f"Project directory not found: {working_dir}"),
            context="argument validation",
            exit_code=1,
            logger=logger,
        )

    context = BodotContext.load(
        working_dir,
        runner=SubprocessExportRunner(cwd=working_dir, timeout=args.timeout),
    )

    if context.config.use_log:
        enable_file_logging(working_dir)

    try:
        exit_code = dispatch(context, command_line)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        exit_code = 130

    sys.exit(exit_code)


if __name__ == "__main__":
    main_cli()
