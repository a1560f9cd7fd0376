"""
Orchestration module for project builds.

Components:
- BodotContext: Configuration and capabilities shared by every command
- BuildOrchestrator: The per-preset export pipeline
"""

from .build_orchestrator import BuildOrchestrator, run_build
from .shared_state import BodotContext

__all__ = [
    "BodotContext",
    "BuildOrchestrator",
    "run_build",
]
