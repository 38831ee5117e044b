"""
Tests for iconscope.core.config module.
"""

import json
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from iconscope.core.config import (
    IconScopeConfig,
    LoggingConfig,
    SearchConfig,
    UIConfig,
    default_search_paths,
)


class TestDefaultSearchPaths:
    """Tests for default_search_paths()."""

    def test_xdg_order(self) -> None:
        environ = {
            "HOME": "/home/user",
            "XDG_DATA_HOME": "/home/user/.data",
            "XDG_DATA_DIRS": "/opt/share:/usr/share",
        }
        assert default_search_paths(environ) == [
            Path("/home/user/.data/icons"),
            Path("/home/user/.icons"),
            Path("/opt/share/icons"),
            Path("/usr/share/icons"),
            Path("/usr/share/pixmaps"),
        ]

    def test_fallbacks(self) -> None:
        paths = default_search_paths({"HOME": "/home/user"})
        assert paths[0] == Path("/home/user/.local/share/icons")
        assert Path("/usr/local/share/icons") in paths
        assert Path("/usr/share/icons") in paths

    def test_without_pixmaps(self) -> None:
        paths = default_search_paths({"HOME": "/home/user"}, include_pixmaps=False)
        assert Path("/usr/share/pixmaps") not in paths

    def test_duplicates_removed(self) -> None:
        environ = {"HOME": "/h", "XDG_DATA_DIRS": "/usr/share:/usr/share::"}
        paths = default_search_paths(environ)
        assert paths.count(Path("/usr/share/icons")) == 1


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_default_values(self) -> None:
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert config.file_enabled is True
        assert config.console_enabled is True
        assert config.json_format is False

    def test_custom_values(self) -> None:
        config = LoggingConfig(level="DEBUG", json_format=True)
        assert config.level == "DEBUG"
        assert config.json_format is True

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_path_expansion(self) -> None:
        config = LoggingConfig(log_directory="~/logs")
        assert "~" not in str(config.log_directory)


class TestSearchConfig:
    """Tests for SearchConfig."""

    def test_explicit_paths_replace_defaults(self) -> None:
        config = SearchConfig(search_paths=["/a", "/b"])
        assert config.resolved_search_paths() == [Path("/a"), Path("/b")]

    def test_extra_paths_appended(self) -> None:
        config = SearchConfig(search_paths=["/a"], extra_search_paths=["/b", "/a"])
        assert config.resolved_search_paths() == [Path("/a"), Path("/b")]

    def test_defaults_used_when_empty(self) -> None:
        config = SearchConfig(extra_search_paths=["/extra"])
        paths = config.resolved_search_paths({"HOME": "/home/user"})
        assert paths[0] == Path("/home/user/.local/share/icons")
        assert paths[-1] == Path("/extra")

    def test_path_expansion(self) -> None:
        config = SearchConfig(search_paths=["~/icons"])
        assert "~" not in str(config.search_paths[0])


class TestUIConfig:
    """Tests for UIConfig."""

    def test_default_values(self) -> None:
        config = UIConfig()
        assert config.default_theme == "Hicolor"
        assert config.unthemed_name == "None"
        assert config.all_themes_name == "All"
        assert config.unthemed_position == "first"
        assert config.measure_images is True

    def test_invalid_position(self) -> None:
        with pytest.raises(ValidationError):
            UIConfig(unthemed_position="middle")


class TestIconScopeConfig:
    """Tests for IconScopeConfig."""

    def test_default_config(self) -> None:
        config = IconScopeConfig()
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.search, SearchConfig)
        assert isinstance(config.ui, UIConfig)

    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"

            original = IconScopeConfig(
                search=SearchConfig(search_paths=[Path(tmpdir) / "icons"]),
                ui=UIConfig(default_theme="Adwaita", unthemed_position="last"),
            )
            original.save(config_path)

            loaded = IconScopeConfig.load(config_path)

            assert loaded.search.search_paths == [Path(tmpdir) / "icons"]
            assert loaded.ui.default_theme == "Adwaita"
            assert loaded.ui.unthemed_position == "last"

    def test_load_partial_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            config_path.write_text(json.dumps({"ui": {"measure_images": False}}))

            config = IconScopeConfig.load(config_path)
            assert config.ui.measure_images is False
            assert config.ui.default_theme == "Hicolor"

    def test_load_nonexistent(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "nonexistent.json"
            config = IconScopeConfig.load(config_path)
            assert config.ui.all_themes_name == "All"

    def test_ensure_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = IconScopeConfig(
                logging=LoggingConfig(log_directory=Path(tmpdir) / "logs"),
            )
            config.ensure_directories()
            assert config.logging.log_directory.exists()

    def test_ensure_directories_without_file_logging(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = IconScopeConfig(
                logging=LoggingConfig(file_enabled=False, log_directory=Path(tmpdir) / "logs"),
            )
            config.ensure_directories()
            assert not config.logging.log_directory.exists()
