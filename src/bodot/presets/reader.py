"""
Reading export presets from Godot's `export_presets.cfg`.

Each preset section carries a `name="..."` line. Presets whose line contains
an underscore are internal (export templates and the like) and are skipped.
The file is treated as plain lines rather than parsed as INI, so the
resulting order is exactly the order of the name lines in the file.
"""

import logging
from pathlib import Path
from typing import Iterable, List

from ..models.runtime import Preset
from ..validation import NoPresetsFoundError

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    """Derive a filesystem-safe folder name from a preset name.

    Examples:
        >>> slugify('"My Preset \\"A\\"/B"')
        'my-preset-a-b'
    """
    return name.lower().replace(" ", "-").replace('"', "").replace("/", "-")


def read_presets(lines: Iterable[str]) -> List[Preset]:
    """
    Extract user-facing presets from descriptor lines, in file order.

    Args:
        lines: Lines of export_presets.cfg

    Returns:
        The presets, each paired with its slug

    Raises:
        NoPresetsFoundError: If no line yields a preset
    """
    presets = []
    for line in lines:
        if "name=" not in line or "_" in line:
            continue
        fields = line.rstrip("\r\n").split("=")
        name = fields[1] if len(fields) > 1 else ""
        if not name:
            continue
        presets.append(Preset(name=name, slug=slugify(name)))

    if not presets:
        raise NoPresetsFoundError()

    logger.debug(f"Found {len(presets)} presets: {', '.join(p.name for p in presets)}")
    return presets


def read_presets_file(path: Path) -> List[Preset]:
    """Read presets from an export_presets.cfg file on disk."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return read_presets(f.read().splitlines())
