"""
The build pipeline.

A build exports every user-facing preset, one after another, into
`{export_output_path}/{version}/{slug}/`, copies the configured post-build
assets next to each artifact, optionally zips each preset folder, and
finally bumps the patch version.
"""

import logging
import shutil
from typing import List, Optional

from ..models.runtime import (
    BuildOptions,
    BuildOutputLayout,
    BuildResult,
    BuildStage,
    CommandResult,
    Preset,
)
from ..presets import read_presets_file
from ..config import increment_patch
from ..system import copy_directory, create_zip_archive, relative_destination, remove_tree
from ..validation import (
    BodotError,
    ErrorSeverity,
    ExternalToolError,
    PostBuildAssetMissing,
    PreconditionFailure,
    handle_error,
    handle_file_error,
)
from .shared_state import BodotContext

logger = logging.getLogger(__name__)

BANNER_FILL = "========================"


class BuildOrchestrator:
    """
    Runs one build for the project described by a BodotContext.

    Failed exports stop the remaining presets unless
    BuildOptions.continue_on_error is set. The patch version is bumped only
    when the loop ran to completion and the run was not an overwrite.
    """

    def __init__(self, context: BodotContext, options: BuildOptions):
        self.context = context
        self.options = options
        self.config = context.config
        self.result = BuildResult()
        self.layout: Optional[BuildOutputLayout] = None

    def _enter(self, stage: BuildStage) -> None:
        self.result.stage = stage
        logger.debug(f"Build stage: {stage.value}")

    def execute(self) -> CommandResult:
        """
        Run the build and report the outcome as a command result.

        Precondition failures and a missing export tool are reported, not
        raised. Filesystem errors while post-processing are reported too.
        """
        try:
            result = self.run()
        except BodotError as e:
            self._enter(BuildStage.ABORTED)
            return CommandResult.failure(e.message)
        except OSError as e:
            self._enter(BuildStage.ABORTED)
            handle_file_error(
                error=e,
                context="processing build output",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger
            )
            return CommandResult.failure(f"Build failed: {e}")

        if result.failed_presets:
            failed = ", ".join(
                f"{name} (exit code {result.exit_codes[name]})" for name in result.failed_presets
            )
            if result.stage == BuildStage.ABORTED:
                return CommandResult.failure(
                    f"Export failed for {failed}; remaining presets were skipped"
                )
            return CommandResult.failure(f"Export failed for {failed}")

        return CommandResult(
            message=f"Built {len(result.presets)} presets for version "
                    f"{self.layout.semantic_version}",
            success=True,
        )

    def run(self) -> BuildResult:
        """
        Run the whole pipeline.

        Returns:
            The build result; `stage` is DONE, or ABORTED when a failed
            export stopped the loop

        Raises:
            PreconditionFailure: If the build cannot start
            ExternalToolLaunchError: If the export tool cannot be launched
        """
        self._enter(BuildStage.VALIDATING)
        presets = self.validate_preconditions()
        self.result.presets = presets

        self._enter(BuildStage.COMPUTING_LAYOUT)
        self.layout = self.compute_layout()
        self.prepare_output_root()

        logger.info("Exporting for presets: " + ",".join(p.name for p in presets))

        for preset in presets:
            exit_code = self.build_preset(preset)
            self.result.exit_codes[preset.name] = exit_code
            if exit_code == 0:
                continue

            self.result.failed_presets.append(preset.name)
            failure = ExternalToolError(preset.name, exit_code)
            handle_error(
                error=failure,
                context=f"exporting {preset.name}",
                severity=failure.severity,
                reraise=False,
                logger=logger
            )
            if not self.options.continue_on_error:
                logger.error("Skipping remaining presets after failed export")
                self._enter(BuildStage.ABORTED)
                return self.result

        self._enter(BuildStage.FINALIZING)
        self.finalize()
        self._enter(BuildStage.DONE)
        return self.result

    def validate_preconditions(self) -> List[Preset]:
        """Check the project files exist and read the presets."""
        if not self.context.config_path.exists():
            raise PreconditionFailure("No config found in current directory")

        if not self.context.presets_path.exists():
            raise PreconditionFailure(
                "No export_presets.cfg in current directory. "
                "Please configure exports in the godot editor"
            )

        return read_presets_file(self.context.presets_path)

    def compute_layout(self) -> BuildOutputLayout:
        export_root = self.context.resolve(self.config.export_output_path)
        return BuildOutputLayout(
            export_root=export_root,
            root=export_root / self.config.semantic_version,
            semantic_version=self.config.semantic_version,
            artifact_name=self.config.export_artifact_name,
        )

    def prepare_output_root(self) -> None:
        """
        Make sure the version folder is free, deleting it on overwrite.

        Raises:
            PreconditionFailure: If it exists and overwrite is not set
        """
        root = self.layout.root
        if not root.exists():
            return

        if not self.options.overwrite:
            raise PreconditionFailure(
                f"Build directory {root} already exists. "
                "Please use the --overwrite option to explicitly overwrite build"
            )

        logger.warning(f"Overwriting {self.layout.semantic_version}")
        remove_tree(root)

    def build_preset(self, preset: Preset) -> int:
        """
        Export one preset and post-process its folder.

        Post-processing is skipped when the export fails.

        Returns:
            The export tool's exit code
        """
        logger.info(f"\n{BANNER_FILL}BEGIN {preset.name}{BANNER_FILL}\n")

        self._enter(BuildStage.EXPORTING)
        preset_folder = self.layout.preset_folder(preset)
        preset_folder.mkdir(parents=True, exist_ok=True)
        artifact = self.layout.artifact_path(preset)

        exit_code = self.context.runner.run_export(
            self.context.resolve_engine_path(), preset.name, artifact
        )

        if exit_code == 0:
            self._enter(BuildStage.COPYING_ASSETS)
            self.copy_post_build_files(preset)
            self.copy_post_build_directories(preset)

            if self.options.zip:
                self._enter(BuildStage.ARCHIVING)
                self.archive_preset(preset)

        logger.info(f"\n{BANNER_FILL}END {preset.name}{BANNER_FILL}\n")
        return exit_code

    def _warn_missing(self, path: str) -> None:
        missing = PostBuildAssetMissing(path)
        handle_file_error(
            error=missing,
            context="post-build copy",
            severity=missing.severity,
            reraise=False,
            logger=logger
        )

    def copy_post_build_files(self, preset: Preset) -> None:
        preset_folder = self.layout.preset_folder(preset)
        for file in self.config.files_to_copy_post_build:
            source = self.context.resolve(file)
            if not source.is_file():
                self._warn_missing(file)
                continue

            shutil.copy2(source, preset_folder / source.name)
            logger.info(f"Copied '{file}'")

    def copy_post_build_directories(self, preset: Preset) -> None:
        preset_folder = self.layout.preset_folder(preset)
        for directory in self.config.directories_to_copy_post_build:
            source = self.context.resolve(directory)
            if not source.is_dir():
                self._warn_missing(directory)
                continue

            count = copy_directory(source, preset_folder / relative_destination(directory))
            logger.info(f"Copied '{directory}' ({count} files)")

    def archive_preset(self, preset: Preset) -> None:
        """
        Zip the preset folder, then move the zip into that same folder.

        The zip is built next to the version folder first so that it does
        not contain itself.
        """
        logger.info("Creating zip archive...")
        staging = self.layout.archive_staging_path(preset)
        create_zip_archive(self.layout.preset_folder(preset), staging)
        shutil.move(str(staging), str(self.layout.archive_path(preset)))
        logger.info(f"Archived {preset.name} to {self.layout.archive_path(preset)}")

    def finalize(self) -> None:
        """Bump and save the patch version when enabled for this run."""
        if not self.config.auto_increment_patch or self.options.overwrite:
            return

        new_patch = increment_patch(self.config, 1)
        self.context.save_config()
        self.result.patch_incremented = True
        logger.info(f"Patch version incremented to {new_patch}")


def run_build(context: BodotContext, options: BuildOptions) -> CommandResult:
    """Run a build with the given options and report the outcome."""
    return BuildOrchestrator(context, options).execute()
