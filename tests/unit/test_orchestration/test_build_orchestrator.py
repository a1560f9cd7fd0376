"""
Unit tests for the build pipeline.

The export tool is replaced by a recording fake; everything else runs
against a real temporary project directory.
"""

import logging
import zipfile

import pytest

from bodot.models import BuildOptions, BuildStage, Preset
from bodot.orchestration import BodotContext, BuildOrchestrator, run_build
from bodot.validation import ExternalToolLaunchError

from conftest import RecordingExportRunner, read_config_file


def _orchestrator(context, **options):
    return BuildOrchestrator(context, BuildOptions(**options))


@pytest.mark.unit
class TestPreconditions:
    """Test cases for the checks made before anything is exported."""

    def test_missing_config_file(self, make_context, project_dir):
        """Test that a build without bodot.config fails before exporting."""
        (project_dir / "bodot.config").unlink()
        runner = RecordingExportRunner()

        result = run_build(make_context(runner=runner), BuildOptions())

        assert result.success is False
        assert result.message == "No config found in current directory"
        assert runner.calls == []

    def test_missing_presets_file(self, make_context, project_dir):
        """Test that a build without export_presets.cfg fails."""
        (project_dir / "export_presets.cfg").unlink()

        result = run_build(make_context(), BuildOptions())

        assert result.success is False
        assert "No export_presets.cfg" in result.message

    def test_no_presets(self, make_context, project_dir):
        """Test that a descriptor with only hidden presets fails without output."""
        (project_dir / "export_presets.cfg").write_text('[preset.0]\nname="Windows_Debug"\n')

        result = run_build(make_context(), BuildOptions())

        assert result.success is False
        assert "No export presets could be found" in result.message
        assert not (project_dir / "builds").exists()

    def test_existing_output_root_without_overwrite(self, make_context, project_dir):
        """Test that an existing version folder aborts the build untouched."""
        existing = project_dir / "builds" / "1.2.3"
        existing.mkdir(parents=True)
        (existing / "old.txt").write_text("old")
        runner = RecordingExportRunner()
        context = make_context(runner=runner)

        orchestrator = _orchestrator(context)
        result = orchestrator.execute()

        assert result.success is False
        assert "already exists" in result.message
        assert "--overwrite" in result.message
        assert orchestrator.result.stage == BuildStage.ABORTED
        assert runner.calls == []
        assert (existing / "old.txt").exists()
        assert read_config_file(project_dir / "bodot.config")["patchVersion"] == "3"

    def test_existing_output_root_with_overwrite(self, make_context, project_dir, caplog):
        """Test that overwrite replaces the existing version folder."""
        existing = project_dir / "builds" / "1.2.3"
        existing.mkdir(parents=True)
        (existing / "old.txt").write_text("old")

        result = run_build(make_context(), BuildOptions(overwrite=True))

        assert result.success is True
        assert "Overwriting 1.2.3" in caplog.text
        assert not (existing / "old.txt").exists()
        assert (existing / "linux-x11").is_dir()


@pytest.mark.unit
class TestExportLoop:
    """Test cases for the per-preset export loop."""

    def test_exports_each_preset_in_order(self, make_context, project_dir):
        """Test one export call per preset, in descriptor order."""
        runner = RecordingExportRunner()

        result = run_build(make_context(runner=runner), BuildOptions())

        assert result.success is True
        root = project_dir / "builds" / "1.2.3"
        assert runner.calls == [
            ("/opt/godot/godot-headless", '"Linux/X11"', root / "linux-x11" / "Meadowv1.2.3"),
            ("/opt/godot/godot-headless", '"Windows Desktop"',
             root / "windows-desktop" / "Meadowv1.2.3.exe"),
        ]
        assert not (root / "windows_debug").exists()

    def test_begin_and_end_markers_are_logged(self, make_context, caplog):
        """Test the BEGIN and END banners around each preset."""
        caplog.set_level(logging.INFO)
        run_build(make_context(), BuildOptions())

        assert 'BEGIN "Linux/X11"' in caplog.text
        assert 'END "Windows Desktop"' in caplog.text

    def test_failed_export_aborts_remaining_presets(self, make_context, project_dir):
        """Test that a failed export stops the loop without bumping the patch."""
        runner = RecordingExportRunner(exit_codes={'"Linux/X11"': 1})
        context = make_context(runner=runner)
        orchestrator = _orchestrator(context)

        result = orchestrator.execute()

        assert result.success is False
        assert "exit code 1" in result.message
        assert "remaining presets were skipped" in result.message
        assert runner.exported_presets == ['"Linux/X11"']
        assert orchestrator.result.stage == BuildStage.ABORTED
        assert orchestrator.result.patch_incremented is False
        assert context.config.patch_version == "3"

    def test_continue_on_error_exports_remaining_presets(self, make_context):
        """Test that continue_on_error exports the remaining presets."""
        runner = RecordingExportRunner(exit_codes={'"Linux/X11"': 2})
        context = make_context(runner=runner)
        orchestrator = _orchestrator(context, continue_on_error=True)

        result = orchestrator.execute()

        assert result.success is False
        assert runner.exported_presets == ['"Linux/X11"', '"Windows Desktop"']
        assert orchestrator.result.failed_presets == ['"Linux/X11"']
        assert orchestrator.result.success is False
        assert orchestrator.result.exit_codes == {'"Linux/X11"': 2, '"Windows Desktop"': 0}
        assert orchestrator.result.stage == BuildStage.DONE

    def test_launch_failure_is_reported(self, make_context):
        """Test that an unlaunchable export tool is reported as a failure."""
        class BrokenRunner(RecordingExportRunner):
            def run_export(self, engine_path, preset_name, output_file):
                raise ExternalToolLaunchError("Could not launch the export tool")

        result = run_build(make_context(runner=BrokenRunner()), BuildOptions())

        assert result.success is False
        assert result.message == "Could not launch the export tool"


@pytest.mark.unit
class TestPostBuildAssets:
    """Test cases for copying post-build files and directories."""

    def _configure_assets(self, context, files, directories):
        context.config.files_to_copy_post_build = files
        context.config.directories_to_copy_post_build = directories

    def test_copies_files_and_directories(self, make_context, project_dir):
        """Test copying configured files and directories into each preset folder."""
        (project_dir / "README.md").write_text("readme")
        (project_dir / "mods" / "extra").mkdir(parents=True)
        (project_dir / "mods" / "extra" / "mod.json").write_text("{}")
        context = make_context()
        self._configure_assets(context, ["./README.md"], ["./mods"])

        result = run_build(context, BuildOptions())

        assert result.success is True
        for slug in ("linux-x11", "windows-desktop"):
            folder = project_dir / "builds" / "1.2.3" / slug
            assert (folder / "README.md").read_text() == "readme"
            assert (folder / "mods" / "extra" / "mod.json").exists()

    def test_missing_assets_only_warn(self, make_context, project_dir, caplog):
        """Test that missing post-build assets are skipped with a warning."""
        (project_dir / "LICENSE").write_text("license")
        context = make_context()
        self._configure_assets(context, ["missing.txt", "LICENSE"], ["./no-such-dir"])

        result = run_build(context, BuildOptions())

        assert result.success is True
        assert "Cannot copy 'missing.txt'. It does not exist." in caplog.text
        assert "Cannot copy './no-such-dir'. It does not exist." in caplog.text
        assert (project_dir / "builds" / "1.2.3" / "linux-x11" / "LICENSE").exists()


@pytest.mark.unit
class TestArchiving:
    """Test cases for zipping preset folders."""

    def test_zip_ends_up_inside_preset_folder(self, make_context, project_dir):
        """Test that the archive is moved into its own preset folder."""
        result = run_build(make_context(), BuildOptions(zip=True))

        assert result.success is True
        folder = project_dir / "builds" / "1.2.3" / "linux-x11"
        archive = folder / "1.2.3-linux-x11.zip"
        assert archive.exists()
        assert not (project_dir / "builds" / "1.2.3-linux-x11.zip").exists()
        with zipfile.ZipFile(archive) as zf:
            assert zf.namelist() == ["Meadowv1.2.3"]

    def test_no_zip_by_default(self, make_context, project_dir):
        """Test that no archive is created without the zip option."""
        run_build(make_context(), BuildOptions())

        folder = project_dir / "builds" / "1.2.3" / "linux-x11"
        assert list(folder.glob("*.zip")) == []


@pytest.mark.unit
class TestFinalizing:
    """Test cases for the version bump after a build."""

    def test_patch_incremented_and_saved(self, make_context, project_dir):
        """Test that a successful build bumps and saves the patch version."""
        context = make_context()
        orchestrator = _orchestrator(context)

        result = orchestrator.execute()

        assert result.success is True
        assert "1.2.3" in result.message
        assert orchestrator.result.patch_incremented is True
        assert context.config.patch_version == "4"
        assert read_config_file(project_dir / "bodot.config")["patchVersion"] == "4"

    def test_overwrite_does_not_increment(self, make_context, project_dir):
        """Test that overwrite builds keep the patch version."""
        context = make_context()

        run_build(context, BuildOptions(overwrite=True))

        assert context.config.patch_version == "3"
        assert read_config_file(project_dir / "bodot.config")["patchVersion"] == "3"

    def test_auto_increment_disabled(self, make_context, project_dir):
        """Test that the patch stays put when auto increment is off."""
        context = make_context()
        context.config.auto_increment_patch = False

        run_build(context, BuildOptions())

        assert context.config.patch_version == "3"


@pytest.mark.unit
class TestLayout:
    """Test cases for the computed output layout."""

    def test_windows_slugs_get_exe_suffix(self, make_context, project_dir):
        """Test the .exe suffix for Windows presets only."""
        layout = _orchestrator(make_context()).compute_layout()

        windows = Preset(name='"Windows Desktop"', slug="windows-desktop")
        linux = Preset(name='"Linux"', slug="linux")
        assert layout.artifact_path(windows).name == "Meadowv1.2.3.exe"
        assert layout.artifact_path(linux).name == "Meadowv1.2.3"

    def test_meta_version_in_paths(self, make_context, project_dir):
        """Test that the meta version appears in folder and archive names."""
        context = make_context()
        context.config.meta_version = "rc1"

        layout = _orchestrator(context).compute_layout()
        preset = Preset(name='"Web"', slug="web")

        assert layout.root == project_dir / "builds" / "1.2.3-rc1"
        assert layout.archive_path(preset) == project_dir / "builds" / "1.2.3-rc1" / "web" / "1.2.3-rc1-web.zip"
        assert layout.archive_staging_path(preset) == project_dir / "builds" / "1.2.3-rc1-web.zip"

    def test_relative_working_dir_gives_absolute_paths(self, project_dir, monkeypatch):
        """Test that a relative project directory yields absolute output paths."""
        monkeypatch.chdir(project_dir.parent)
        context = BodotContext.load(project_dir.name, runner=RecordingExportRunner())

        layout = _orchestrator(context).compute_layout()
        artifact = layout.artifact_path(Preset(name='"Linux"', slug="linux"))

        assert context.working_dir.is_absolute()
        assert artifact.is_absolute()
        assert artifact.parent.parent == layout.root
        assert context.config.project_name == "Meadow"


@pytest.mark.unit
class TestFailureLogging:
    """Test cases for the log level of reported failures."""

    def test_failed_export_logged_as_error(self, make_context, caplog):
        """Test that a failed export is logged at ERROR level."""
        runner = RecordingExportRunner(exit_codes={'"Linux/X11"': 3})

        run_build(make_context(runner=runner), BuildOptions())

        records = [r for r in caplog.records if "failed with exit code 3" in r.getMessage()]
        assert [r.levelno for r in records] == [logging.ERROR]

    def test_missing_asset_logged_as_warning(self, make_context, caplog):
        """Test that a missing post-build asset is logged at WARNING level."""
        context = make_context()
        context.config.files_to_copy_post_build = ["missing.txt"]

        run_build(context, BuildOptions())

        records = [r for r in caplog.records if "Cannot copy 'missing.txt'" in r.getMessage()]
        assert records
        assert all(r.levelno == logging.WARNING for r in records)
