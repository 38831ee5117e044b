"""
IconScope Session Management.

A session owns everything produced by one discovery pass (themes,
catalogs) plus the current selection and its resolved IconView.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from iconscope.core.catalog import (
    IconCatalog,
    collect_icon_names,
    filter_icon_names,
    sorted_icon_names,
)
from iconscope.core.config import IconScopeConfig, load_config
from iconscope.core.discovery import discover_themes
from iconscope.core.logging import OperationLogger, get_logger, setup_logging
from iconscope.core.models import DiscoveryResult, IconView, Theme
from iconscope.core.resolver import resolve_icon
from iconscope.platform import get_image_probe
from iconscope.platform.images import ImageProbe

logger = get_logger(__name__)


class IconSession:
    """
    Manages discovered themes, catalogs and the current icon selection.

    This is the main entry point for all IconScope operations. Selection
    commands resolve synchronously and replace the previous IconView.
    """

    def __init__(
        self,
        config: IconScopeConfig | None = None,
        search_paths: Sequence[Path] | None = None,
        probe: ImageProbe | None = None,
    ) -> None:
        self.config = config or load_config()

        setup_logging(self.config.logging)

        if search_paths is None:
            search_paths = self.config.resolved_search_paths()
        self.search_paths = [Path(p) for p in search_paths]
        self.probe = probe or get_image_probe(self.config.ui.measure_images)

        self.discovery: DiscoveryResult | None = None
        self.catalog: IconCatalog | None = None

        self.selected_theme: Theme | None = None
        self.all_themes_selected = False
        self.selected_icon: str | None = None
        self.icon_view: IconView | None = None

    @property
    def all_themes_name(self) -> str:
        return self.config.ui.all_themes_name

    @property
    def is_loaded(self) -> bool:
        return self.discovery is not None

    def load(self) -> DiscoveryResult:
        """Discover themes and build every catalog."""
        discovery, _ = self._load()
        return discovery

    def _load(self) -> tuple[DiscoveryResult, IconCatalog]:
        with OperationLogger("theme discovery", logger, search_paths=len(self.search_paths)) as op:
            discovery = discover_themes(self.search_paths, self.config.ui.unthemed_name)
            op.update(themes=len(discovery.themes), errors=len(discovery.diagnostics))

        with OperationLogger("icon catalog build", logger) as op:
            for theme in discovery.all_themes:
                collect_icon_names(theme, discovery.diagnostics)
            catalog = IconCatalog.build(self._ordered(discovery))
            op.update(icons=len(catalog))

        self.discovery = discovery
        self.catalog = catalog
        self.selected_theme = None
        self.all_themes_selected = False
        self.selected_icon = None
        self.icon_view = None
        return discovery, catalog

    def _ensure_loaded(self) -> tuple[DiscoveryResult, IconCatalog]:
        if self.discovery is not None and self.catalog is not None:
            return self.discovery, self.catalog
        return self._load()

    @property
    def unthemed_first(self) -> bool:
        return self.config.ui.unthemed_position == "first"

    def _ordered(self, discovery: DiscoveryResult) -> list[Theme]:
        return discovery.ordered_themes(self.unthemed_first)

    def discovery_summary(self) -> dict[str, Any]:
        """Discovery result as plain data, themes in listing order."""
        discovery, _ = self._ensure_loaded()
        return discovery.to_dict(unthemed_first=self.unthemed_first)

    @property
    def themes(self) -> list[Theme]:
        """All themes, including the unthemed unit, in listing order."""
        discovery, _ = self._ensure_loaded()
        return self._ordered(discovery)

    def theme_names(self) -> list[str]:
        return [theme.name for theme in self.themes]

    def get_theme(self, theme_name: str) -> Theme:
        """
        Get a theme by display name, else by directory name.

        Display names are not unique; the directory name reaches a theme
        whose display name is shadowed by an earlier one. Raises KeyError.
        """
        themes = self.themes
        for theme in themes:
            if theme.name == theme_name:
                return theme
        for theme in themes:
            if theme.identifier == theme_name:
                return theme
        raise KeyError(f"Theme not found: {theme_name}")

    def icon_names(self, theme_name: str) -> list[str]:
        """Sorted icon names of a theme; the All name lists every theme."""
        if theme_name == self.all_themes_name:
            return self.all_icon_names()
        return sorted_icon_names(self.get_theme(theme_name).icon_names)

    def all_icon_names(self) -> list[str]:
        _, catalog = self._ensure_loaded()
        return catalog.names

    def owner_of(self, icon_name: str) -> Theme:
        """Theme that provides icon_name when browsing all themes."""
        _, catalog = self._ensure_loaded()
        return catalog.owner(icon_name)

    def search(self, text: str, theme_name: str | None = None) -> list[str]:
        """Icon names of a theme (default: the current listing) containing text."""
        if theme_name is None:
            theme_name = self.current_listing_name
        if theme_name is None:
            return []
        return filter_icon_names(self.icon_names(theme_name), text)

    @property
    def current_listing_name(self) -> str | None:
        if self.all_themes_selected:
            return self.all_themes_name
        return self.selected_theme.name if self.selected_theme else None

    def resolve(self, theme_name: str, icon_name: str) -> IconView:
        """Resolve an icon without touching the current selection."""
        if theme_name == self.all_themes_name:
            raise ValueError("Cannot resolve against the aggregate theme; use owner_of()")
        return resolve_icon(self.get_theme(theme_name), icon_name, self.probe)

    def select_theme(self, theme_name: str, icon_name: str | None = None) -> IconView | None:
        """
        Switch the listing to theme_name and resolve an icon in it.

        The icon is icon_name if given, else the current icon when the new
        listing has it, else the listing's first icon. Returns None when
        the listing is empty.
        """
        _, catalog = self._ensure_loaded()

        if theme_name == self.all_themes_name:
            self.all_themes_selected = True
            available = catalog.names
        else:
            theme = self.get_theme(theme_name)
            self.all_themes_selected = False
            self.selected_theme = theme
            available = sorted_icon_names(theme.icon_names)

        chosen = icon_name
        if chosen is None and self.selected_icon in available:
            chosen = self.selected_icon
        if chosen is None and available:
            chosen = available[0]

        if chosen is None:
            self.selected_icon = None
            self.icon_view = None
            return None

        return self.select_icon(chosen)

    def select_icon(self, icon_name: str) -> IconView:
        """
        Resolve icon_name in the current listing and make it current.

        With all themes selected, the owning theme becomes the selected
        theme first.
        """
        _, catalog = self._ensure_loaded()

        if self.all_themes_selected or self.selected_theme is None:
            self.selected_theme = catalog.owner(icon_name)

        self.icon_view = None
        self.selected_icon = icon_name
        self.icon_view = resolve_icon(self.selected_theme, icon_name, self.probe)

        logger.info(
            "Icon selected",
            theme=self.selected_theme.name,
            icon=icon_name,
            scales=self.icon_view.scales,
        )
        return self.icon_view

    def select_default(self) -> IconView | None:
        """Initial selection: the configured default theme, else the first one."""
        names = self.theme_names()
        if not names:
            return None
        default = self.config.ui.default_theme
        return self.select_theme(default if default in names else names[0])

    def close(self) -> None:
        """Release everything produced by the last discovery pass."""
        self.icon_view = None
        self.selected_icon = None
        self.selected_theme = None
        self.catalog = None
        self.discovery = None
        logger.debug("Session closed")

    def __enter__(self) -> IconSession:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
