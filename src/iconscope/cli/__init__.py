"""
IconScope CLI Module.

Provides command-line interface for IconScope operations.
"""

from iconscope.cli.main import main, cli

__all__ = ["main", "cli"]
