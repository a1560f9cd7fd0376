"""
Command-line interface for the bodot package.

This module provides the main CLI entry point and the command handlers.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
