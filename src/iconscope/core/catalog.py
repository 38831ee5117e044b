"""
IconScope icon name catalogs.

Per theme, the set of icon names found on disk; across themes, one
sorted catalog used for the "All" view and to find which theme owns a
given name.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from iconscope.core.logging import get_logger
from iconscope.core.models import DiscoveryDiagnostic, Theme
from iconscope.platform.filesystem import iter_icon_files

logger = get_logger(__name__)


def catalog_sort_key(name: str) -> tuple[str, str]:
    """Alphabetical, case-insensitive first: AaBb rather than ABab."""
    return (name.lower(), name)


def sorted_icon_names(names: Iterable[str]) -> list[str]:
    return sorted(set(names), key=catalog_sort_key)


def filter_icon_names(names: Iterable[str], text: str) -> list[str]:
    """Keep names containing text (case-sensitive). Empty text keeps all."""
    if not text:
        return list(names)
    return [name for name in names if text in name]


def icon_directories(theme: Theme) -> Iterator[Path]:
    """Directories that may hold the theme's icon files."""
    if theme.index is None:
        yield from theme.directories
        return

    for root in theme.directories:
        for section in theme.index.sections:
            # Images at unsupported scales are never resolved, so never listed.
            if section.has_supported_scale:
                yield section.directory_in(root)


def collect_icon_names(
    theme: Theme,
    diagnostics: list[DiscoveryDiagnostic] | None = None,
) -> set[str]:
    """Scan a theme's directories and store the icon names it provides."""
    names: set[str] = set()
    for directory in icon_directories(theme):
        for _entry, icon_name in iter_icon_files(directory, diagnostics):
            names.add(icon_name)

    theme.icon_names = names
    logger.debug("Collected icon names", theme=theme.name, icons=len(names))
    return names


class IconCatalog:
    """
    Deduplicated, sorted union of every theme's icon names.

    The catalog keeps its own list of names, independent of the themes it
    was built from; the themes are only consulted by owner().
    """

    def __init__(self, themes: Sequence[Theme]) -> None:
        self._themes = list(themes)
        self._names = sorted_icon_names(
            name for theme in self._themes for name in theme.icon_names
        )
        self._name_set = frozenset(self._names)

    @classmethod
    def build(cls, themes: Sequence[Theme]) -> IconCatalog:
        return cls(themes)

    @property
    def names(self) -> list[str]:
        return list(self._names)

    @property
    def first(self) -> str | None:
        return self._names[0] if self._names else None

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._name_set

    def owner(self, icon_name: str) -> Theme:
        """First theme, in listing order, that provides icon_name."""
        for theme in self._themes:
            if theme.provides(icon_name):
                return theme
        raise KeyError(f"Icon not in catalog: {icon_name}")

    def search(self, text: str) -> list[str]:
        return filter_icon_names(self._names, text)
