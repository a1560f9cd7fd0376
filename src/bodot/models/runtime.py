"""
Runtime data models.

This module contains data structures used during a single command run:
presets, the build output layout, build options and results, and the
(message, success) pair every command returns.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Preset:
    """
    A user-facing export preset and its filesystem-safe slug.
    """

    # Preset name exactly as written in export_presets.cfg (quotes included).
    name: str
    slug: str


class BuildStage(Enum):
    """Stages the build orchestrator moves through."""

    VALIDATING = "validating preconditions"
    COMPUTING_LAYOUT = "computing layout"
    EXPORTING = "exporting"
    COPYING_ASSETS = "copying assets"
    ARCHIVING = "archiving"
    FINALIZING = "finalizing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class BuildOptions:
    """
    Flags controlling a single `build` invocation.
    """

    # Delete an existing output root for this version instead of aborting.
    overwrite: bool = False
    # Zip each preset folder after the post-build copy.
    zip: bool = False
    # Keep exporting remaining presets after a failed export.
    continue_on_error: bool = False


@dataclass(frozen=True)
class BuildOutputLayout:
    """
    All paths derived for one build, rooted at `{export_output_path}/{version}`.
    """

    export_root: Path
    root: Path
    semantic_version: str
    artifact_name: str

    def preset_folder(self, preset: Preset) -> Path:
        return self.root / preset.slug

    def artifact_path(self, preset: Preset) -> Path:
        """Artifact path inside the preset folder, `.exe` for windows slugs."""
        suffix = ".exe" if "windows" in preset.slug else ""
        return self.preset_folder(preset) / f"{self.artifact_name}{suffix}"

    def archive_name(self, preset: Preset) -> str:
        return f"{self.semantic_version}-{preset.slug}.zip"

    def archive_staging_path(self, preset: Preset) -> Path:
        return self.export_root / self.archive_name(preset)

    def archive_path(self, preset: Preset) -> Path:
        return self.preset_folder(preset) / self.archive_name(preset)


@dataclass
class BuildResult:
    """
    Outcome of a build run.
    """

    presets: List[Preset] = field(default_factory=list)
    # Exit code of every preset that was exported, keyed by preset name.
    exit_codes: Dict[str, int] = field(default_factory=dict)
    failed_presets: List[str] = field(default_factory=list)
    patch_incremented: bool = False
    stage: BuildStage = BuildStage.VALIDATING

    @property
    def success(self) -> bool:
        return self.stage == BuildStage.DONE and not self.failed_presets


@dataclass
class CommandResult:
    """
    The (message, success) pair a command hands back to the dispatcher.
    """

    message: Optional[str] = None
    success: bool = True

    @classmethod
    def failure(cls, message: str) -> "CommandResult":
        return cls(message=message, success=False)
