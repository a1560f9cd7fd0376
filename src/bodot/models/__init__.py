"""
Data models for the build tool.

Configuration Models:
- The persisted project record and its derived version strings

Runtime Models:
- Presets and their slugs
- Build output layout, options and results
- Command results returned to the CLI dispatcher
"""

# Configuration models
from .config import ProjectConfiguration

# Runtime models
from .runtime import (
    BuildOptions,
    BuildOutputLayout,
    BuildResult,
    BuildStage,
    CommandResult,
    Preset,
)

__all__ = [
    # Configuration
    "ProjectConfiguration",
    # Runtime
    "BuildOptions",
    "BuildOutputLayout",
    "BuildResult",
    "BuildStage",
    "CommandResult",
    "Preset",
]
