"""Extension layer: notification channels and upload backends via pluggy.

Discovery: entry_points (pip-installed) plus single-file local plugins.
INVARIANT: Lifecycle hook failures are warnings, never errors.
"""

from vidctl.plugins.hookspecs import hookimpl
from vidctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
