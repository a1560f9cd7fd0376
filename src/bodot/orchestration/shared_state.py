"""
Shared state for command handlers and the build orchestrator.

The configuration is loaded once per process into a BodotContext, which is
then passed explicitly to every command.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ..config import CONFIG_FILENAME, PRESETS_FILENAME, load_configuration, save_configuration
from ..models.config import ProjectConfiguration
from ..system import ExportRunner, SubprocessExportRunner

logger = logging.getLogger(__name__)


@dataclass
class BodotContext:
    """
    Everything a command needs: where it runs, the configuration, and the
    capabilities it may use.
    """

    # Directory holding bodot.config and export_presets.cfg, made absolute.
    working_dir: Path
    config: ProjectConfiguration = field(default_factory=ProjectConfiguration)
    # Runs the export tool; None means a SubprocessExportRunner in working_dir.
    runner: Optional[ExportRunner] = None
    # Reads one line of user input after showing a prompt.
    prompt: Callable[[str], str] = input

    def __post_init__(self):
        self.working_dir = Path(self.working_dir).absolute()
        if self.runner is None:
            self.runner = SubprocessExportRunner(cwd=self.working_dir)

    @classmethod
    def load(cls, working_dir: Path, **kwargs) -> "BodotContext":
        """Create a context with the configuration read from `working_dir`."""
        working_dir = Path(working_dir)
        config = load_configuration(working_dir / CONFIG_FILENAME)
        return cls(working_dir=working_dir, config=config, **kwargs)

    @property
    def config_path(self) -> Path:
        return self.working_dir / CONFIG_FILENAME

    @property
    def presets_path(self) -> Path:
        return self.working_dir / PRESETS_FILENAME

    def resolve(self, path: str) -> Path:
        """Resolve a configured path against the working directory."""
        return self.working_dir / path

    def resolve_engine_path(self) -> str:
        """The engine binary, made absolute when it lives under the project."""
        engine_path = self.config.engine_binary_path
        candidate = self.resolve(engine_path)
        if engine_path and candidate.is_file():
            return str(candidate)
        return engine_path

    def save_config(self) -> None:
        save_configuration(self.config, self.config_path)
