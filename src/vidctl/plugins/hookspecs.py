"""Pluggy hook specifications for vidctl boundary collaborators.

Two dispatch hooks reach external services (notification channels and
video hosting). Three lifecycle hooks announce catalog changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from vidctl.domain.item import Item

PROJECT_NAME = "vidctl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class VidctlHookSpec:
    """Hook specifications for the vidctl plugin system."""

    @hookspec(firstresult=True)
    def notify(self, item: Item, channel: str) -> bool | None:
        """Post *item* to *channel* (``slack``, ``email``, ``calendar``, ...).

        Return True on success, False on failure, or None if the plugin
        does not handle *channel*.
        """

    @hookspec(firstresult=True)
    def upload(self, item: Item) -> str | None:
        """Upload the item's video file; return the external video id."""

    @hookspec
    def post_create(self, name: str, category: str, path: str) -> None:
        """Called after an item is created."""

    @hookspec
    def post_delete(self, name: str, category: str) -> None:
        """Called after an item is deleted."""

    @hookspec
    def post_move(self, name: str, category: str, target_category: str, path: str) -> None:
        """Called after an item is moved to another category."""
