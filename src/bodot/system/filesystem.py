"""
Filesystem operations for post-processing build output.
"""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_directory(source: Path, target: Path) -> int:
    """Copy a directory tree into `target`, merging with what is there.

    Files at each level are copied first, overwriting existing destination
    files, then each subdirectory is copied recursively. Symlinks are
    followed like regular entries.

    Returns:
        Number of files copied
    """
    target.mkdir(parents=True, exist_ok=True)
    copied = 0

    entries = sorted(source.iterdir())
    for entry in entries:
        if entry.is_file():
            destination = target / entry.name
            logger.debug(f"Copying {destination}")
            shutil.copy2(entry, destination)
            copied += 1

    for entry in entries:
        if entry.is_dir():
            copied += copy_directory(entry, target / entry.name)

    return copied


def relative_destination(path: str) -> Path:
    """Where a configured post-build directory lands inside a preset folder.

    "./assets/music" maps to "assets/music". Absolute paths keep only their
    final component, as do paths climbing out with "..", so they can never
    escape the preset folder.
    """
    candidate = Path(path)
    if candidate.is_absolute() or ".." in candidate.parts:
        return Path(candidate.name)
    return candidate


def create_zip_archive(source_dir: Path, archive_path: Path) -> Path:
    """Zip the contents of `source_dir` into `archive_path`.

    Args:
        source_dir: Directory whose contents become the archive root
        archive_path: Destination, including the .zip suffix

    Returns:
        The path of the created archive
    """
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    base_name = archive_path.with_suffix("")
    created = shutil.make_archive(str(base_name), "zip", root_dir=source_dir)
    return Path(created)


def remove_tree(path: Path) -> None:
    shutil.rmtree(path)
