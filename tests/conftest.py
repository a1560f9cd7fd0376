"""
Pytest configuration and shared fixtures for the Bodot test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the Bodot project.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import List, Tuple

import pytest
import toml

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bodot.orchestration import BodotContext  # noqa: E402
from bodot.system import ExportRunner  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


SAMPLE_PRESETS_CFG = """\
[preset.0]

name="Linux/X11"
platform="Linux/X11"
runnable=true
export_filter="all_resources"
export_path=""

[preset.0.options]

custom_template/debug=""
binary_format/embed_pck=false

[preset.1]

name="Windows Desktop"
platform="Windows Desktop"
runnable=true
export_path=""

[preset.2]

name="Windows_Debug"
platform="Windows Desktop"
"""


@pytest.fixture
def sample_config_data():
    """Sample bodot.config contents, keyed as in the file."""
    return {
        "projectName": "Meadow",
        "majorVersion": "1",
        "minorVersion": "2",
        "patchVersion": "3",
        "autoIncrementPatch": True,
        "useLog": False,
        "engineBinaryPath": "/opt/godot/godot-headless",
        "exportOutputPath": "builds",
        "filesToCopyPostBuild": [],
        "directoriesToCopyPostBuild": [],
    }


@pytest.fixture
def project_dir(temp_dir, sample_config_data):
    """A Godot project directory with bodot.config and export_presets.cfg."""
    with open(temp_dir / "bodot.config", "w") as f:
        toml.dump(sample_config_data, f)
    (temp_dir / "export_presets.cfg").write_text(SAMPLE_PRESETS_CFG)
    return temp_dir


# ============================================================================
# Export Runner Fakes
# ============================================================================


class RecordingExportRunner(ExportRunner):
    """
    Export runner that records invocations and writes a placeholder artifact.

    Exit codes can be scripted per preset name via `exit_codes`.
    """

    def __init__(self, exit_codes=None):
        self.calls: List[Tuple[str, str, Path]] = []
        self.exit_codes = exit_codes or {}

    def run_export(self, engine_path, preset_name, output_file):
        self.calls.append((str(engine_path), preset_name, Path(output_file)))
        exit_code = self.exit_codes.get(preset_name, 0)
        if exit_code == 0:
            Path(output_file).write_text(f"artifact for {preset_name}")
        return exit_code

    @property
    def exported_presets(self) -> List[str]:
        return [call[1] for call in self.calls]


@pytest.fixture
def recording_runner():
    return RecordingExportRunner()


@pytest.fixture
def make_context(project_dir):
    """Factory for a BodotContext loaded from the project directory."""

    def _make(runner=None, prompt=None, working_dir=None) -> BodotContext:
        kwargs = {"runner": runner or RecordingExportRunner()}
        if prompt is not None:
            kwargs["prompt"] = prompt
        return BodotContext.load(working_dir or project_dir, **kwargs)

    return _make


def read_config_file(path: Path) -> dict:
    """Parse a bodot.config file written by the code under test."""
    return toml.load(path)
