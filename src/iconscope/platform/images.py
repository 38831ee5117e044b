"""
Image measuring for resolved icons.

The resolver never renders anything; it only asks a probe for the pixel
size of each file it found so the caller can lay images out.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from iconscope.core.logging import get_logger

logger = get_logger(__name__)


class ImageProbe(Protocol):
    """Reports the pixel size of an image file."""

    def measure(self, path: Path) -> tuple[int, int] | None:
        """Return (width, height), or None if the file cannot be loaded."""
        ...


class NullImageProbe:
    """Probe for headless use; never measures anything."""

    def measure(self, path: Path) -> tuple[int, int] | None:
        return None


class QtImageProbe:
    """Probe backed by Qt's image reader plugins (SVG, PNG, XPM)."""

    def measure(self, path: Path) -> tuple[int, int] | None:
        from PySide6.QtGui import QImageReader

        reader = QImageReader(str(path))
        size = reader.size()
        if size.isValid() and not size.isEmpty():
            return size.width(), size.height()

        image = reader.read()
        if image.isNull():
            logger.debug("Could not load image", path=path, error=reader.errorString())
            return None
        return image.width(), image.height()
