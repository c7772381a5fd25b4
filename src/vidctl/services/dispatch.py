"""DispatchService: hands resolved items to notification and upload plugins.

The service never looks inside a plugin. It only records the outcome on
the item through :meth:`CatalogService.update`: a ``{channel}_posted``
flag for notifications and the opaque ``video_id`` for uploads.
"""

from __future__ import annotations

import logging

from vidctl.domain.item import Item
from vidctl.services._helpers import failure
from vidctl.services.base import BaseService
from vidctl.services.catalog import CatalogService
from vidctl.services.result import ServiceResult
from vidctl.services.telemetry import traced

logger = logging.getLogger(__name__)


def posted_field(channel: str) -> str:
    """Name of the item flag recording a post to *channel*."""
    return f"{channel.strip().lower()}_posted"


class DispatchService(BaseService):
    """Notify channels and upload videos through registered plugins."""

    @traced
    def notify(self, name: str, category: str, channel: str) -> ServiceResult:
        """Post the item to *channel* and mark it as posted on success."""
        op = "notify"
        field = posted_field(channel)
        if field not in Item.model_fields:
            return failure(op, "INVALID_ARGUMENT", f"Unknown notification channel {channel!r}")

        catalog = CatalogService(self._workspace)
        got = catalog.get(name, category)
        if not got.ok:
            return got.as_op(op)
        item: Item = got.data["item"]

        plugins = self._workspace.plugins
        if not plugins.has_implementation("notify"):
            return failure(op, "NO_HANDLER", "No notification plugin is installed")
        try:
            posted = plugins.hook.notify(item=item, channel=channel)
        except Exception as exc:
            logger.warning("Notification to %s failed", channel, exc_info=True)
            return failure(
                op,
                "DISPATCH_FAILED",
                f"Notification to {channel} failed: {exc}",
                path=item.path,
            )
        if posted is None:
            return failure(op, "NO_HANDLER", f"No plugin handles channel {channel!r}")
        if not posted:
            return failure(
                op,
                "DISPATCH_FAILED",
                f"Notification to {channel} was rejected",
                path=item.path,
            )

        saved = catalog.update(item.model_copy(update={field: True}))
        if not saved.ok:
            return saved.as_op(op)
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "category": category, "channel": channel, field: True},
        )

    @traced
    def upload(self, name: str, category: str) -> ServiceResult:
        """Upload the item's video and store the returned identifier."""
        op = "upload"
        catalog = CatalogService(self._workspace)
        got = catalog.get(name, category)
        if not got.ok:
            return got.as_op(op)
        item: Item = got.data["item"]

        plugins = self._workspace.plugins
        if not plugins.has_implementation("upload"):
            return failure(op, "NO_HANDLER", "No upload plugin is installed")
        try:
            video_id = plugins.hook.upload(item=item)
        except Exception as exc:
            logger.warning("Upload of %s failed", item.upload_video, exc_info=True)
            return failure(op, "DISPATCH_FAILED", f"Upload failed: {exc}", path=item.path)
        if not video_id or not str(video_id).strip():
            return failure(
                op,
                "DISPATCH_FAILED",
                "Upload backend returned no video identifier",
                path=item.path,
            )

        saved = catalog.update(item.model_copy(update={"video_id": str(video_id).strip()}))
        if not saved.ok:
            return saved.as_op(op)
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "category": category, "video_id": str(video_id).strip()},
        )
