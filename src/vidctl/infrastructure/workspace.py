"""Workspace: the single dependency injected into every service.

Owns the resolved root directory and builds the document store, the
catalog index, and the plugin manager from settings. It holds no index
state: every service call loads the index fresh.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from vidctl.infrastructure.documents import DocumentStore
from vidctl.infrastructure.index import CatalogIndex

if TYPE_CHECKING:
    from vidctl.config.models import CatalogConfig
    from vidctl.config.settings import VidSettings
    from vidctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Workspace:
    """Filesystem-backed catalog rooted at ``settings.workspace_root``."""

    def __init__(self, settings: VidSettings) -> None:
        self._settings = settings
        self._root = Path(settings.workspace_root)
        catalog = settings.catalog
        self._documents = DocumentStore(self._root / catalog.content_dir)
        self._index = CatalogIndex(self._root / catalog.index_file)
        self._plugins: PluginManager | None = None

    @property
    def root(self) -> Path:
        return self._root

    @property
    def settings(self) -> VidSettings:
        return self._settings

    @property
    def catalog_config(self) -> CatalogConfig:
        return self._settings.catalog

    @property
    def documents(self) -> DocumentStore:
        return self._documents

    @property
    def index(self) -> CatalogIndex:
        return self._index

    @property
    def plugins(self) -> PluginManager:
        """Plugin manager, loaded on first access."""
        if self._plugins is None:
            from vidctl.plugins.manager import PluginManager

            pm = PluginManager()
            cfg = self._settings.plugins
            names = pm.discover_and_load(
                local_dir=self._root / cfg.local_dir,
                entry_points=cfg.entry_points,
            )
            logger.debug("Loaded plugins: %s", names)
            self._plugins = pm
        return self._plugins

    def use_plugins(self, plugins: PluginManager) -> None:
        """Install an already-configured plugin manager (skips discovery)."""
        self._plugins = plugins

    def script_path(self, name: str, category: str) -> Path:
        """Path of the auxiliary script next to the item document."""
        return self._documents.resolve_path(name, category, ext=self.catalog_config.script_extension)
