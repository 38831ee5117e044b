"""
IconScope Core - Theme discovery and icon resolution.

Contains theme discovery, icon catalogs, the resolution engine,
configuration, and session management.
"""

from iconscope.core.catalog import IconCatalog, collect_icon_names
from iconscope.core.config import IconScopeConfig
from iconscope.core.discovery import discover_themes
from iconscope.core.logging import get_logger, setup_logging
from iconscope.core.models import IconExtension, IconImage, IconView, Theme
from iconscope.core.resolver import IconNotFoundError, resolve_icon
from iconscope.core.session import IconSession

__all__ = [
    "IconCatalog",
    "IconExtension",
    "IconImage",
    "IconNotFoundError",
    "IconScopeConfig",
    "IconSession",
    "IconView",
    "Theme",
    "collect_icon_names",
    "discover_themes",
    "get_logger",
    "resolve_icon",
    "setup_logging",
]
