"""
Pytest configuration and fixtures for IconScope tests.
"""

import os
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator
from unittest.mock import Mock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


HICOLOR_INDEX = """[Icon Theme]
Name=Hicolor
Comment=Fallback icon theme
Hidden=true
Directories=16x16/apps,48x48/apps,scalable/apps,48x48@2/apps

[16x16/apps]
Size=16
Context=Applications
Type=Threshold

[48x48/apps]
Size=48
Context=Applications
Type=Threshold

[scalable/apps]
MinSize=1
Size=128
MaxSize=256
Context=Applications
Type=Scalable

[48x48@2/apps]
Size=48
Scale=2
Context=Applications
Type=Threshold
"""


@pytest.fixture
def hicolor_index() -> str:
    """Index file of a small hicolor-like theme."""
    return HICOLOR_INDEX


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Write a file, creating parent directories as needed."""

    def _write(path: Path, content: str = "data") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_theme(write_file: Callable[..., Path]) -> Callable[..., Path]:
    """Create a theme directory with an index file and icon files."""

    def _make(
        search_path: Path,
        identifier: str,
        index: str | None = None,
        icons: list[str] | None = None,
    ) -> Path:
        theme_dir = search_path / identifier
        theme_dir.mkdir(parents=True, exist_ok=True)
        if index is not None:
            write_file(theme_dir / "index.theme", index)
        for icon in icons or []:
            write_file(theme_dir / icon, "<svg/>" if icon.endswith(".svg") else "data")
        return theme_dir

    return _make


@pytest.fixture
def hicolor_tree(temp_dir: Path, make_theme: Callable[..., Path]) -> Path:
    """A search path holding a small hicolor theme."""
    search_path = temp_dir / "icons"
    make_theme(
        search_path,
        "hicolor",
        HICOLOR_INDEX,
        [
            "16x16/apps/firefox.png",
            "48x48/apps/firefox.png",
            "scalable/apps/firefox.svg",
            "48x48@2/apps/firefox.png",
            "48x48/apps/gimp.png",
            "48x48/apps/gimp.xpm",
            "scalable/apps/Terminal.svg",
        ],
    )
    return search_path


@pytest.fixture
def mock_probe() -> Mock:
    """Create a mock image probe reporting 48x48 for every file."""
    probe = Mock()
    probe.measure.return_value = (48, 48)
    return probe


@pytest.fixture
def sample_config(temp_dir: Path) -> "IconScopeConfig":
    """Create a sample configuration for testing."""
    from iconscope.core.config import IconScopeConfig, LoggingConfig

    config = IconScopeConfig(
        logging=LoggingConfig(
            file_enabled=False,
            console_enabled=False,
            log_directory=temp_dir / "logs",
        ),
    )
    config.ui.measure_images = False
    return config


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "gui: GUI tests requiring Qt")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Modify test collection based on available resources."""
    try:
        import PySide6.QtGui  # noqa: F401
    except ImportError:
        skip_gui = pytest.mark.skip(reason="PySide6 not available")
        for item in items:
            if "gui" in item.keywords:
                item.add_marker(skip_gui)
        return

    if os.environ.get("DISPLAY") is None and os.environ.get("QT_QPA_PLATFORM") is None:
        os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture
def qapp() -> Generator["QGuiApplication", None, None]:
    """Create a QGuiApplication for tests that load images."""
    try:
        from PySide6.QtGui import QGuiApplication

        app = QGuiApplication.instance()
        if app is None:
            app = QGuiApplication([])

        yield app
    except ImportError:
        pytest.skip("PySide6 not available")
