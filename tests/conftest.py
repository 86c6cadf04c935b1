"""
Shared fixtures: import path, headless Qt and small layer stacks.
"""

import os
import sys
from pathlib import Path

import pytest

# Ensure project root is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from models.color_map_model import ColorMapModel  # noqa: E402
from models.layer import Layer  # noqa: E402
from models.view_settings_model import ViewSettingsModel  # noqa: E402


@pytest.fixture()
def settings():
    return ViewSettingsModel()


@pytest.fixture()
def color_map():
    return ColorMapModel()


@pytest.fixture()
def three_layers():
    return [
        Layer("Input (x)", H=180, W=320, C=2),
        Layer("self.conv1", H=42, W=77, C=8),
        Layer("Flatten", H=1, W=1, C=2448),
    ]


@pytest.fixture(scope="session")
def qapp():
    """Single QApplication for widget tests."""
    qt_widgets = pytest.importorskip("PyQt6.QtWidgets")
    app = qt_widgets.QApplication.instance() or qt_widgets.QApplication([])
    yield app
