"""
IconScope Platform Layer.

Filesystem primitives and the image measuring collaborator.
"""

from __future__ import annotations

from iconscope.platform.images import ImageProbe, NullImageProbe, QtImageProbe


def get_image_probe(measure: bool = True) -> ImageProbe:
    """Get the image probe to use for resolved icons."""
    if measure:
        return QtImageProbe()
    return NullImageProbe()


__all__ = [
    "ImageProbe",
    "NullImageProbe",
    "QtImageProbe",
    "get_image_probe",
]
