"""
IconScope configuration management.

Provides centralized configuration with validation using Pydantic.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = Path.home() / ".iconscope" / "config.json"


def default_search_paths(
    environ: Mapping[str, str] | None = None,
    include_pixmaps: bool = True,
) -> list[Path]:
    """
    Icon search paths in the order GTK uses them.

    $XDG_DATA_HOME/icons, ~/.icons, then <dir>/icons for every entry of
    $XDG_DATA_DIRS, and finally the legacy pixmaps directory.
    """
    env = os.environ if environ is None else environ
    home = Path(env.get("HOME") or Path.home())

    data_home = env.get("XDG_DATA_HOME") or str(home / ".local" / "share")
    data_dirs = env.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"

    paths = [Path(data_home) / "icons", home / ".icons"]
    paths.extend(Path(d) / "icons" for d in data_dirs.split(":") if d)
    if include_pixmaps:
        paths.append(Path("/usr/share/pixmaps"))
    return _unique(paths)


def _unique(paths: list[Path]) -> list[Path]:
    seen: set[Path] = set()
    result: list[Path] = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            result.append(path)
    return result


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file_enabled: bool = True
    console_enabled: bool = True
    json_format: bool = False
    log_directory: Path = Field(default_factory=lambda: Path.home() / ".iconscope" / "logs")

    @field_validator("log_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class SearchConfig(BaseModel):
    """Configuration for icon theme search paths."""

    search_paths: list[Path] = Field(default_factory=list)
    extra_search_paths: list[Path] = Field(default_factory=list)
    include_pixmaps: bool = True

    @field_validator("search_paths", "extra_search_paths", mode="before")
    @classmethod
    def expand_paths(cls, v: list[str | Path]) -> list[Path]:
        return [Path(p).expanduser() for p in v]

    def resolved_search_paths(self, environ: Mapping[str, str] | None = None) -> list[Path]:
        """Configured paths (or the defaults) followed by the extra paths."""
        base = list(self.search_paths) or default_search_paths(
            environ, include_pixmaps=self.include_pixmaps
        )
        return _unique(base + list(self.extra_search_paths))


class UIConfig(BaseModel):
    """Configuration for how themes and icons are presented."""

    default_theme: str = "Hicolor"
    unthemed_name: str = "None"
    all_themes_name: str = "All"
    unthemed_position: Literal["first", "last"] = "first"
    measure_images: bool = True


class IconScopeConfig(BaseModel):
    """Main IconScope configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> IconScopeConfig:
        """Load configuration from file or create default."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if config_path.exists():
            with open(config_path) as f:
                data = json.load(f)
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

    def ensure_directories(self) -> None:
        """Create all required directories."""
        if self.logging.file_enabled:
            self.logging.log_directory.mkdir(parents=True, exist_ok=True)

    def resolved_search_paths(self) -> list[Path]:
        return self.search.resolved_search_paths()


def get_default_config() -> IconScopeConfig:
    """Get the default configuration."""
    return IconScopeConfig()


def load_config(config_path: Path | None = None) -> IconScopeConfig:
    """Load or create configuration."""
    config = IconScopeConfig.load(config_path)
    config.ensure_directories()
    return config
