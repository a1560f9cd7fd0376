"""
Bodot: build automation for Godot projects.

This package exports a Godot project once per export preset, post-processes
the output folders and keeps the project's semantic version in bodot.config.

The package is organized into specialized modules:
- config: Loading, saving and changing bodot.config
- models: Data structures and type definitions
- validation: Error types and input validation
- presets: Reading export_presets.cfg
- system: Export tool invocation and filesystem helpers
- orchestration: The build pipeline and the shared command context
- cli: Command-line interface and command handlers

Usage:
    From command line:
        bodot build --zip

    Programmatically:
        from bodot import BodotContext, BuildOptions, run_build
        context = BodotContext.load(Path("."))
        result = run_build(context, BuildOptions(zip=True))
"""

__version__ = "0.1.0"

# Main interfaces
from .orchestration import BodotContext, BuildOrchestrator, run_build
from .cli import main_cli

# Model classes for external use
from .models import (
    BuildOptions,
    BuildOutputLayout,
    BuildResult,
    CommandResult,
    Preset,
    ProjectConfiguration,
)

# Configuration
from .config import ConfigSetting, increment_patch, load_configuration, save_configuration

# Presets
from .presets import read_presets, slugify

# Validation
from .validation import (
    BodotError,
    NoPresetsFoundError,
    PreconditionFailure,
    UserInputError,
)

__all__ = [
    # Main interfaces
    "BodotContext",
    "BuildOrchestrator",
    "run_build",
    "main_cli",
    # Models
    "BuildOptions",
    "BuildOutputLayout",
    "BuildResult",
    "CommandResult",
    "Preset",
    "ProjectConfiguration",
    # Configuration
    "ConfigSetting",
    "increment_patch",
    "load_configuration",
    "save_configuration",
    # Presets
    "read_presets",
    "slugify",
    # Validation
    "BodotError",
    "NoPresetsFoundError",
    "PreconditionFailure",
    "UserInputError",
]
