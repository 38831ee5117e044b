"""
IconScope - Freedesktop icon theme browser and resolver.

Discovers installed icon themes, catalogs the icon names each one
provides, and resolves an icon name to the image files a theme ships
for it at every size and scale.
"""

__version__ = "1.0.0"
__author__ = "IconScope Team"

from iconscope.core.config import IconScopeConfig
from iconscope.core.session import IconSession

__all__ = ["IconScopeConfig", "IconSession", "__version__"]
