"""
IconScope icon resolution.

Resolves an icon name against one theme into an IconView: every file
the theme provides for that name, bucketed by scale and ordered by
size with scalable images last.
"""

from __future__ import annotations

from pathlib import Path

from iconscope.core.logging import get_logger
from iconscope.core.models import (
    MAX_SCALE,
    IconImage,
    IconView,
    Theme,
    ThemeDirectorySection,
    ThemeIndex,
)
from iconscope.platform.filesystem import file_size, find_icon_file
from iconscope.platform.images import ImageProbe, NullImageProbe

logger = get_logger(__name__)

SCALABLE_LABEL = "Scalable"


class IconNotFoundError(LookupError):
    """Raised when a theme has no file for an icon it was asked to resolve."""

    def __init__(self, theme_name: str, icon_name: str) -> None:
        super().__init__(f"Icon {icon_name!r} not found in theme {theme_name!r}")
        self.theme_name = theme_name
        self.icon_name = icon_name


def image_from_section(
    found: Path,
    root: Path,
    section: ThemeDirectorySection,
) -> IconImage:
    return IconImage(
        full_path=found,
        path=found.relative_to(root).as_posix(),
        theme_dir=root,
        size=section.size,
        min_size=section.min_size,
        max_size=section.max_size,
        scale=section.scale,
        is_scalable=section.is_scalable,
        context=section.context,
        type=section.type,
    )


def sort_bucket(images: list[IconImage]) -> None:
    """Stable sort: ascending size, scalable images after all fixed sizes."""
    if len(images) > 1:
        images.sort(key=lambda image: image.sort_key)


def _resolve_themed(
    theme: Theme, index: ThemeIndex, icon_name: str
) -> tuple[list[IconImage], ...]:
    for root in theme.directories:
        buckets: tuple[list[IconImage], ...] = tuple([] for _ in range(MAX_SCALE))

        for section in index.sections:
            found = find_icon_file(section.directory_in(root), icon_name)
            if found is None:
                continue
            if not section.has_supported_scale:
                logger.debug(
                    "Discarding image with unsupported scale",
                    path=found,
                    scale=section.scale,
                )
                continue
            buckets[section.scale - 1].append(image_from_section(found, root, section))

        # Roots are alternatives: the first one with any match wins.
        if any(buckets):
            for bucket in buckets:
                sort_bucket(bucket)
            return buckets

    raise IconNotFoundError(theme.name, icon_name)


def _resolve_unthemed(theme: Theme, icon_name: str) -> tuple[list[IconImage], ...]:
    images: list[IconImage] = []
    for root in theme.directories:
        found = find_icon_file(root, icon_name)
        if found is not None:
            images.append(IconImage(full_path=found, path=found.name, theme_dir=root))

    if not images:
        raise IconNotFoundError(theme.name, icon_name)
    return (images,) + tuple([] for _ in range(MAX_SCALE - 1))


def image_label(image: IconImage) -> str:
    if image.is_scalable:
        return SCALABLE_LABEL
    return str(image.size)


def finish_image(image: IconImage, probe: ImageProbe, labelled: bool) -> None:
    """Fill in the fields derived from the file itself."""
    image.label = image_label(image) if labelled else None
    image.file_size = file_size(image.full_path)

    dimensions = probe.measure(image.full_path)
    if dimensions is not None:
        image.width, image.height = dimensions


def resolve_icon(
    theme: Theme,
    icon_name: str,
    probe: ImageProbe | None = None,
) -> IconView:
    """
    Resolve icon_name against theme.

    Callers must only ask for names in the theme's catalog; anything else
    raises IconNotFoundError.
    """
    probe = probe or NullImageProbe()

    if theme.index is not None:
        buckets = _resolve_themed(theme, theme.index, icon_name)
    else:
        buckets = _resolve_unthemed(theme, icon_name)

    view = IconView(icon_name=icon_name, theme_name=theme.name, images=buckets)
    for image in view.all_images:
        # Loose icons have no size information worth labelling.
        finish_image(image, probe, labelled=not theme.is_unthemed)

    logger.debug(
        "Resolved icon",
        theme=theme.name,
        icon=icon_name,
        images=[len(bucket) for bucket in view.images],
    )
    return view
