"""BaseService: common plumbing for the service classes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vidctl.infrastructure.workspace import Workspace


class BaseService:
    """A service bound to one :class:`Workspace`.

    Services are cheap; commands build a fresh one per invocation.
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _announce(self, hook_name: str, warnings: list[str], **payload: Any) -> None:
        """Run a lifecycle hook, adding any plugin failures to *warnings*."""
        warnings.extend(self._workspace.plugins.announce(hook_name, **payload))
