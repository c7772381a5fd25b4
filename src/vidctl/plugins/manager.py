"""Loading plugins and calling their hooks.

Plugins come from two places: distributions advertising the
``vidctl.plugins`` entry point group, and ``*.py`` files dropped into the
workspace's local plugin directory (``.vidctl/plugins/`` by default).
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

import pluggy

from vidctl.plugins.hookspecs import PROJECT_NAME, VidctlHookSpec

ENTRY_POINT_GROUP = "vidctl.plugins"
LOCAL_MODULE_PREFIX = "vidctl_local_plugin_"

logger = logging.getLogger(__name__)


class PluginManager:
    """A pluggy manager preloaded with the vidctl hook specifications."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(VidctlHookSpec)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        entry_points: bool = True,
    ) -> list[str]:
        """Load installed and local plugins; return every registered name."""
        if entry_points:
            count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            logger.debug("Loaded %d entry point plugins", count)
        if local_dir is not None and local_dir.is_dir():
            for py_file in sorted(local_dir.glob("*.py")):
                if not py_file.name.startswith("_"):
                    self._load_local(py_file)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        name = name or type(plugin).__name__
        self._pm.register(plugin, name=name)
        logger.debug("Registered plugin %s", name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    def has_implementation(self, hook_name: str) -> bool:
        """Whether any registered plugin implements *hook_name*."""
        return bool(getattr(self._pm.hook, hook_name).get_hookimpls())

    def announce(self, hook_name: str, **payload: Any) -> list[str]:
        """Call each implementation of a lifecycle hook in turn.

        A plugin that raises does not stop the others; each failure is
        logged and turned into a warning naming the plugin.
        """
        warnings: list[str] = []
        for impl in getattr(self._pm.hook, hook_name).get_hookimpls():
            try:
                impl.function(*(payload[arg] for arg in impl.argnames))
            except Exception:
                logger.debug("%s failed in %s", impl.plugin_name, hook_name, exc_info=True)
                warnings.append(f"Plugin {impl.plugin_name} failed in {hook_name}")
        return warnings

    # -- local plugins --------------------------------------------------

    def _load_local(self, py_file: Path) -> None:
        """Import *py_file* and register each hook-bearing class it defines.

        Files that fail to import and classes that fail to instantiate are
        logged and skipped.
        """
        module = self._import_file(py_file)
        if module is None:
            return
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module.__name__ or not _has_hookimpls(cls):
                continue
            try:
                self.register_plugin(cls(), name=f"{module.__name__}.{cls.__name__}")
            except Exception:
                logger.warning(
                    "Cannot instantiate %s from %s", cls.__name__, py_file, exc_info=True
                )

    @staticmethod
    def _import_file(py_file: Path) -> ModuleType | None:
        module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
        spec = importlib.util.spec_from_file_location(module_name, py_file)
        if spec is None or spec.loader is None:
            logger.warning("Cannot import local plugin %s", py_file)
            return None
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
            del sys.modules[module_name]
            return None
        return module


def _has_hookimpls(cls: type) -> bool:
    """True if a public method of *cls* carries a ``@hookimpl`` marker."""
    marker = f"{PROJECT_NAME}_impl"
    return any(
        callable(member) and hasattr(member, marker)
        for name, member in inspect.getmembers(cls)
        if not name.startswith("_")
    )
