"""
IconScope theme discovery.

Finds the icon themes installed under a list of search paths. A theme is
a directory holding an index.theme file; the same theme directory name
may appear under several search paths, and all of them become roots of
a single Theme. Icon files lying directly inside a search path are
gathered into a synthetic unthemed Theme.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from iconscope.core.logging import get_logger
from iconscope.core.models import DiscoveryDiagnostic, DiscoveryResult, Theme
from iconscope.index.parser import parse_theme_index
from iconscope.platform.filesystem import (
    DirEntry,
    has_icon_files,
    is_directory,
    is_regular_file,
    list_directory,
    read_text_file,
)

logger = get_logger(__name__)

INDEX_FILE_NAME = "index.theme"
UNTHEMED_NAME = "None"

# "default" is conventionally a symlink to another installed theme.
EXCLUDED_THEME_DIRS = frozenset({"default"})


def is_theme_candidate(entry: DirEntry) -> bool:
    return entry.is_dir and not entry.is_hidden and entry.name not in EXCLUDED_THEME_DIRS


def load_theme(
    identifier: str,
    index_path: Path,
    diagnostics: list[DiscoveryDiagnostic],
) -> Theme | None:
    """Read and parse a theme's index file; None if it cannot be read."""
    try:
        text = read_text_file(index_path)
    except OSError as exc:
        get_logger(__name__, theme=identifier).warning(
            "Could not read theme index", path=index_path, error=str(exc)
        )
        diagnostics.append(DiscoveryDiagnostic(path=str(index_path), error=str(exc)))
        return None

    index = parse_theme_index(text, source=str(index_path))
    return Theme(
        name=index.name or identifier,
        identifier=identifier,
        index_text=text,
        index=index,
    )


def find_themes(
    search_paths: Sequence[Path],
    diagnostics: list[DiscoveryDiagnostic],
) -> list[Theme]:
    """First pass: one Theme per directory name that holds an index file."""
    themes: list[Theme] = []
    seen: set[str] = set()

    for search_path in search_paths:
        for entry in list_directory(search_path, diagnostics):
            if not is_theme_candidate(entry) or entry.name in seen:
                continue
            index_path = entry.path / INDEX_FILE_NAME
            if not is_regular_file(index_path):
                continue

            theme = load_theme(entry.name, index_path, diagnostics)
            if theme is not None:
                seen.add(entry.name)
                themes.append(theme)

    return themes


def merge_theme_directories(themes: Sequence[Theme], search_paths: Sequence[Path]) -> None:
    """
    Second pass: attach every search path's copy of each theme.

    Copies without an index file still count, so icons installed by
    other packages under the same theme name are picked up.
    """
    for theme in themes:
        if theme.identifier is None:
            continue
        theme.directories = [
            search_path / theme.identifier
            for search_path in search_paths
            if is_directory(search_path / theme.identifier)
        ]


def theme_sort_key(theme: Theme) -> str:
    return theme.name.lower()


def build_unthemed(
    search_paths: Sequence[Path],
    diagnostics: list[DiscoveryDiagnostic],
    name: str = UNTHEMED_NAME,
) -> Theme:
    """
    Gather search paths that directly hold icon files.

    Search paths are not explored recursively, and each contributes at
    most once.
    """
    unthemed = Theme(name=name)
    for search_path in search_paths:
        if has_icon_files(search_path, diagnostics):
            unthemed.directories.append(search_path)
    return unthemed


def discover_themes(
    search_paths: Sequence[Path],
    unthemed_name: str = UNTHEMED_NAME,
) -> DiscoveryResult:
    """
    Discover every theme under search_paths.

    Themes come back sorted by display name, case-insensitively. Problems
    reading directories or index files are collected in the result's
    diagnostics and never stop the scan.
    """
    paths = [Path(p) for p in search_paths]
    result = DiscoveryResult(search_paths=paths)

    themes = find_themes(paths, result.diagnostics)
    merge_theme_directories(themes, paths)
    themes.sort(key=theme_sort_key)

    result.themes = themes
    result.unthemed = build_unthemed(paths, result.diagnostics, unthemed_name)

    logger.debug(
        "Discovered icon themes",
        themes=len(themes),
        unthemed_directories=len(result.unthemed.directories),
        errors=len(result.diagnostics),
    )
    return result
