"""
System interaction utilities.

This module provides the interface to the engine's export tool and the
filesystem operations applied to build output:

- Export tool invocation with an injectable runner
- Process tree termination on export timeout
- Recursive directory copy with merge semantics
- Zip archiving of preset folders
"""

# Export tool invocation
from .commands import (
    ExportRunner,
    SubprocessExportRunner,
    build_export_command,
    is_engine_available,
    terminate_process_tree,
)

# Build output post-processing
from .filesystem import (
    copy_directory,
    create_zip_archive,
    relative_destination,
    remove_tree,
)

__all__ = [
    # Commands
    "ExportRunner",
    "SubprocessExportRunner",
    "build_export_command",
    "is_engine_available",
    "terminate_process_tree",
    # Filesystem
    "copy_directory",
    "create_zip_archive",
    "relative_destination",
    "remove_tree",
]
