"""
IconScope data models.

Defines the core data structures for icon themes, their index sections,
and the images resolved for an icon name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

# Scale buckets are 1x, 2x and 3x; anything larger is discarded.
MAX_SCALE = 3


class IconExtension(Enum):
    """Recognized icon file extensions, declared from highest to lowest priority."""

    SVG = ".svg"
    SYMBOLIC_PNG = ".symbolic.png"
    PNG = ".png"
    XPM = ".xpm"

    @property
    def priority(self) -> int:
        """Position in the priority order, 0 being the highest."""
        return list(IconExtension).index(self)

    @classmethod
    def match(cls, filename: str) -> IconExtension | None:
        """Return the first extension, in priority order, that ends filename."""
        for extension in cls:
            if filename.endswith(extension.value):
                return extension
        return None

    @classmethod
    def split(cls, filename: str) -> str | None:
        """Strip a recognized extension and return the icon base name."""
        extension = cls.match(filename)
        if extension is None:
            return None
        return filename[: -len(extension.value)]


@dataclass(frozen=True)
class ScanDiagnostic:
    """A syntax problem found while scanning an INI/desktop file."""

    line: int
    column: int
    message: str
    source: str | None = None

    def __str__(self) -> str:
        location = f"{self.source}:" if self.source else ""
        return f"{location}{self.line}:{self.column}: {self.message}"


@dataclass
class ThemeDirectorySection:
    """One subdirectory declared by a theme's index file, e.g. [48x48/apps]."""

    path: str
    size: int = -1
    min_size: int = -1
    max_size: int = -1
    threshold: int = 2
    scale: int = 1
    type: str | None = None
    context: str | None = None

    @property
    def is_scalable(self) -> bool:
        # Theme authors mark vector directories by name; the Type key is
        # often wrong, so it is not consulted.
        return "scalable" in self.path

    @property
    def has_supported_scale(self) -> bool:
        return 1 <= self.scale <= MAX_SCALE

    def directory_in(self, root: Path) -> Path:
        """Absolute location of this section below a theme root."""
        return root / self.path.lstrip("/")


@dataclass
class ThemeIndex:
    """Parsed contents of an index.theme file."""

    header: str | None = None
    name: str | None = None
    comment: str | None = None
    inherits: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)
    scaled_directories: list[str] = field(default_factory=list)
    sections: list[ThemeDirectorySection] = field(default_factory=list)
    diagnostics: list[ScanDiagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    def section_paths(self) -> list[str]:
        return [section.path for section in self.sections]


@dataclass
class Theme:
    """
    An icon theme, or the synthetic unthemed unit.

    A theme may be spread across several search roots; all of them are
    listed in ``directories`` in search-path order.
    """

    name: str
    identifier: str | None = None
    directories: list[Path] = field(default_factory=list)
    index_text: str | None = None
    index: ThemeIndex | None = None
    icon_names: set[str] = field(default_factory=set)

    @property
    def is_unthemed(self) -> bool:
        return self.identifier is None

    @property
    def has_index(self) -> bool:
        return self.index is not None

    def provides(self, icon_name: str) -> bool:
        return icon_name in self.icon_names

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "identifier": self.identifier,
            "directories": [str(d) for d in self.directories],
            "comment": self.index.comment if self.index else None,
            "inherits": list(self.index.inherits) if self.index else [],
            "sections": len(self.index.sections) if self.index else 0,
            "icon_count": len(self.icon_names),
        }


@dataclass
class IconImage:
    """A single file found for a requested icon name."""

    full_path: Path
    path: str  # Relative to theme_dir
    theme_dir: Path
    size: int = -1
    min_size: int = -1
    max_size: int = -1
    scale: int = 1
    is_scalable: bool = False
    context: str | None = None
    type: str | None = None
    label: str | None = None
    file_size: int = 0
    width: int = 0
    height: int = 0

    @property
    def sort_key(self) -> tuple[bool, int]:
        """Scalable images sort after every fixed size image."""
        return (self.is_scalable, self.size)

    @property
    def extension(self) -> IconExtension | None:
        return IconExtension.match(self.full_path.name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "full_path": str(self.full_path),
            "path": self.path,
            "theme_dir": str(self.theme_dir),
            "size": self.size,
            "min_size": self.min_size,
            "max_size": self.max_size,
            "scale": self.scale,
            "is_scalable": self.is_scalable,
            "context": self.context,
            "type": self.type,
            "label": self.label,
            "file_size": self.file_size,
            "width": self.width,
            "height": self.height,
        }


def _empty_buckets() -> tuple[list[IconImage], ...]:
    return tuple([] for _ in range(MAX_SCALE))


@dataclass
class IconView:
    """All images a theme provides for one icon name, bucketed by scale."""

    icon_name: str
    theme_name: str
    images: tuple[list[IconImage], ...] = field(default_factory=_empty_buckets)

    def bucket(self, scale: int) -> list[IconImage]:
        if not 1 <= scale <= MAX_SCALE:
            raise ValueError(f"Unsupported scale: {scale}")
        return self.images[scale - 1]

    @property
    def all_images(self) -> list[IconImage]:
        return [image for bucket in self.images for image in bucket]

    @property
    def scales(self) -> list[int]:
        """Scales that have at least one image."""
        return [i + 1 for i, bucket in enumerate(self.images) if bucket]

    @property
    def is_empty(self) -> bool:
        return not any(self.images)

    def to_dict(self) -> dict[str, Any]:
        return {
            "icon_name": self.icon_name,
            "theme_name": self.theme_name,
            "scales": {
                str(i + 1): [image.to_dict() for image in bucket]
                for i, bucket in enumerate(self.images)
            },
        }


@dataclass(frozen=True)
class DiscoveryDiagnostic:
    """An I/O problem hit while scanning search paths."""

    path: str
    error: str


@dataclass
class DiscoveryResult:
    """Everything found by one discovery pass."""

    search_paths: list[Path]
    themes: list[Theme] = field(default_factory=list)
    unthemed: Theme | None = None
    diagnostics: list[DiscoveryDiagnostic] = field(default_factory=list)

    @property
    def all_themes(self) -> list[Theme]:
        """Real themes followed by the unthemed unit."""
        return self.ordered_themes(unthemed_first=False)

    def ordered_themes(self, unthemed_first: bool) -> list[Theme]:
        """Real themes with the unthemed unit placed first or last."""
        themes = list(self.themes)
        if self.unthemed is not None:
            themes.insert(0 if unthemed_first else len(themes), self.unthemed)
        return themes

    @property
    def index_diagnostics(self) -> list[ScanDiagnostic]:
        return [
            diagnostic
            for theme in self.themes
            if theme.index is not None
            for diagnostic in theme.index.diagnostics
        ]

    def to_dict(self, unthemed_first: bool = False) -> dict[str, Any]:
        return {
            "search_paths": [str(p) for p in self.search_paths],
            "themes": [theme.to_dict() for theme in self.ordered_themes(unthemed_first)],
            "errors": [
                {"path": d.path, "error": d.error} for d in self.diagnostics
            ],
            "syntax_errors": [str(d) for d in self.index_diagnostics],
        }
