"""
Export preset discovery.
"""

from .reader import read_presets, read_presets_file, slugify

__all__ = [
    "read_presets",
    "read_presets_file",
    "slugify",
]
