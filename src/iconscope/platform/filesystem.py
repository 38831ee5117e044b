"""
Filesystem helpers for theme discovery and icon lookup.

Directory listings tolerate missing directories (search path lists
routinely name optional locations). Other I/O failures are logged and
recorded, and the directory contributes nothing.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from iconscope.core.logging import get_logger
from iconscope.core.models import DiscoveryDiagnostic, IconExtension

logger = get_logger(__name__)


@dataclass(frozen=True)
class DirEntry:
    name: str
    path: Path
    is_file: bool
    is_dir: bool

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")


def _entry_kind(entry: os.DirEntry[str]) -> tuple[bool, bool]:
    # Follows symlinks, a dangling link is neither.
    try:
        return entry.is_file(), entry.is_dir()
    except OSError:
        return False, False


def list_directory(
    directory: Path,
    errors: list[DiscoveryDiagnostic] | None = None,
) -> list[DirEntry]:
    """
    List a directory's entries sorted by name.

    A nonexistent directory yields an empty list. Any other OSError is
    logged, appended to errors (when given) and also yields an empty list.
    """
    try:
        with os.scandir(directory) as it:
            entries = []
            for entry in it:
                is_file, is_dir = _entry_kind(entry)
                entries.append(
                    DirEntry(name=entry.name, path=Path(entry.path), is_file=is_file, is_dir=is_dir)
                )
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as exc:
        logger.warning("Error while reading directory", path=directory, error=str(exc))
        if errors is not None:
            errors.append(DiscoveryDiagnostic(path=str(directory), error=str(exc)))
        return []

    entries.sort(key=lambda e: e.name)
    return entries


def read_text_file(path: Path) -> str:
    """Read a whole file as text, replacing undecodable bytes."""
    return path.read_bytes().decode("utf-8", errors="replace")


def is_directory(path: Path) -> bool:
    return os.path.isdir(path)


def is_regular_file(path: Path) -> bool:
    return os.path.isfile(path)


def file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError as exc:
        logger.debug("Could not stat file", path=path, error=str(exc))
        return 0


def iter_icon_files(
    directory: Path,
    errors: list[DiscoveryDiagnostic] | None = None,
) -> Iterator[tuple[DirEntry, str]]:
    """
    Yield (entry, icon_name) for every icon file directly inside directory.

    Only visible regular files with a recognized extension count; the
    icon name is the file name with that extension stripped.
    """
    for entry in list_directory(directory, errors):
        if entry.is_hidden or not entry.is_file:
            continue
        icon_name = IconExtension.split(entry.name)
        if icon_name is not None:
            yield entry, icon_name


def has_icon_files(directory: Path, errors: list[DiscoveryDiagnostic] | None = None) -> bool:
    """True as soon as one icon file is seen directly inside directory."""
    return next(iter_icon_files(directory, errors), None) is not None


def find_icon_file(directory: Path, icon_name: str) -> Path | None:
    """
    Find the file providing icon_name inside directory.

    Only files literally named <icon_name><extension> match. When several
    extensions are present the highest priority one wins, whatever the
    listing order.
    """
    files = {entry.name for entry in list_directory(directory) if entry.is_file}
    if not files:
        return None
    for extension in IconExtension:
        candidate = f"{icon_name}{extension.value}"
        if candidate in files:
            return directory / candidate
    return None
