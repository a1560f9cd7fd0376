"""
Configuration data models.

This module contains the project configuration record persisted in
`bodot.config`, along with the values derived from it.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ProjectConfiguration:
    """
    The project record loaded from `bodot.config`.

    Version components are kept as strings, mirroring the file, but are
    expected to hold non-negative integers.
    """

    # Name used as the prefix of every exported artifact.
    project_name: str = ""
    major_version: str = "0"
    minor_version: str = "0"
    patch_version: str = "0"
    # Pre-release/build suffix; None means no "-suffix" at all.
    meta_version: Optional[str] = None
    # Bump the patch component after every successful non-overwrite build.
    auto_increment_patch: bool = True
    # Also write log output to bodot.log in the working directory.
    use_log: bool = False
    # Path to the Godot binary used for exporting.
    engine_binary_path: str = ""
    # Root directory for all build output.
    export_output_path: str = ""
    # Files copied into each preset folder after export.
    files_to_copy_post_build: List[str] = field(default_factory=list)
    # Directories copied recursively into each preset folder after export.
    directories_to_copy_post_build: List[str] = field(default_factory=list)

    @property
    def computed_meta_version(self) -> str:
        return f"-{self.meta_version}" if self.meta_version is not None else ""

    @property
    def semantic_version(self) -> str:
        """The `{major}.{minor}.{patch}[-{meta}]` string namespacing build output."""
        return (
            f"{self.major_version}.{self.minor_version}.{self.patch_version}"
            f"{self.computed_meta_version}"
        )

    @property
    def export_artifact_name(self) -> str:
        return f"{self.project_name}v{self.semantic_version}"
