"""
Running the engine's export tool.

The orchestrator only talks to the ExportRunner interface, so tests can
swap in a fake that records invocations. SubprocessExportRunner is the real
implementation: one blocking child process per preset.
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

import psutil

from ..validation import ErrorSeverity, ExternalToolLaunchError, handle_subprocess_error

logger = logging.getLogger(__name__)

EXPORT_FLAG = "--export"
NO_WINDOW_FLAG = "--no-window"

# Seconds to wait after SIGTERM before escalating to SIGKILL.
TERMINATION_GRACE_PERIOD = 5.0


def build_export_command(
    engine_path: Union[str, Path], preset_name: str, output_file: Union[str, Path]
) -> List[str]:
    """Assemble the argv for exporting one preset.

    The preset name is passed without its surrounding quotes: the quotes
    come from export_presets.cfg and no shell is involved to remove them.
    """
    return [
        str(engine_path),
        EXPORT_FLAG,
        NO_WINDOW_FLAG,
        preset_name.strip('"'),
        str(output_file),
    ]


def is_engine_available(engine_path: Union[str, Path], cwd: Optional[Path] = None) -> bool:
    """Check whether the engine binary exists, relative to `cwd` or on PATH."""
    if not str(engine_path).strip():
        return False
    candidate = Path(cwd) / engine_path if cwd is not None else Path(engine_path)
    return candidate.is_file() or shutil.which(str(engine_path)) is not None


class ExportRunner(ABC):
    """Interface for invoking the external export tool."""

    @abstractmethod
    def run_export(
        self, engine_path: Union[str, Path], preset_name: str, output_file: Union[str, Path]
    ) -> int:
        """
        Export one preset and wait for it to finish.

        Args:
            engine_path: Path to the engine binary
            preset_name: Preset name as read from export_presets.cfg
            output_file: Destination artifact path

        Returns:
            The exit code of the export tool, unmodified

        Raises:
            ExternalToolLaunchError: If the tool cannot be started
        """
        pass


class SubprocessExportRunner(ExportRunner):
    """
    Runs the export tool as a child process.

    Output of the tool goes straight to the console.
    """

    def __init__(self, cwd: Optional[Path] = None, timeout: Optional[float] = None):
        """
        Args:
            cwd: Working directory for the export tool (the project directory)
            timeout: Seconds before the export process tree is killed
        """
        self.cwd = cwd
        self.timeout = timeout

    def run_export(
        self, engine_path: Union[str, Path], preset_name: str, output_file: Union[str, Path]
    ) -> int:
        command = build_export_command(engine_path, preset_name, output_file)
        logger.debug(f"Executing command: {' '.join(command)} in '{self.cwd}'")

        try:
            process = subprocess.Popen(command, cwd=self.cwd)
        except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
            handle_subprocess_error(
                error=e,
                command=command[0],
                severity=ErrorSeverity.CRITICAL,
                reraise=False,
                logger=logger
            )
            raise ExternalToolLaunchError(
                f"Could not launch the export tool at '{engine_path}': {e}"
            ) from e

        try:
            return_code = process.wait(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            logger.error(
                f"Export of {preset_name} did not finish within {self.timeout}s, terminating"
            )
            terminate_process_tree(process.pid, f"export of {preset_name}")
            return_code = process.wait()

        logger.debug(f"Export process finished with exit code: {return_code}")
        return return_code


def terminate_process_tree(pid: int, name: str) -> None:
    """
    Terminate a process and all of its children.

    Sends SIGTERM to the whole tree, then SIGKILL to anything still alive
    after the grace period.
    """
    try:
        parent = psutil.Process(pid)
        processes = [parent] + parent.children(recursive=True)
    except psutil.NoSuchProcess:
        logger.info(f"Process {name} (PID: {pid}) already terminated")
        return

    for process in processes:
        try:
            process.terminate()
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied:
            logger.warning(f"Access denied sending SIGTERM to PID {process.pid}")

    _, still_alive = psutil.wait_procs(processes, timeout=TERMINATION_GRACE_PERIOD)
    for process in still_alive:
        try:
            process.kill()
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied:
            logger.warning(f"Access denied sending SIGKILL to PID {process.pid}")

    if still_alive:
        psutil.wait_procs(still_alive, timeout=TERMINATION_GRACE_PERIOD)
    logger.info(f"Terminated {name} (PID: {pid}) and {len(processes) - 1} children")
