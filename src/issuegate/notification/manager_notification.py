"""Notification upsert for items that fail validation.

One tracked comment per item: the first failing run creates it, every
later failing run replaces its body. Repeated events therefore converge
on a single, up-to-date notification instead of a growing thread.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from issuegate.github.handle_item import ProtocolItemHandle
from issuegate.github.locator_comment import BOT_MARKER, find_tracked_comment
from issuegate.notification.renderer_template import render_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationResult:
    """Outcome of a notification upsert.

    Attributes:
        comment_id: Id of the tracked comment (or review) written.
        created: True if a new comment was posted, False if one was updated.
    """

    comment_id: int
    created: bool


class NotificationManager:
    """Renders the notification message and upserts the tracked comment.

    Usage::

        manager = NotificationManager(handle, template=settings.issue_message)
        result = await manager.notify(payload, passed=is_passing(validations))
    """

    def __init__(
        self,
        handle: ProtocolItemHandle,
        template: str,
        marker: str = BOT_MARKER,
    ) -> None:
        self._handle = handle
        self._template = template
        self._marker = marker

    def compose(self, payload: Mapping[str, Any]) -> str:
        """Render the template and append the hidden marker.

        Raises:
            TemplateRenderError: If the template references an unknown field.
        """
        return render_template(self._template, payload) + "\n" + self._marker

    async def notify(
        self, payload: Mapping[str, Any], passed: bool
    ) -> NotificationResult | None:
        """Post or update the tracked comment for a failing item.

        Args:
            payload: Webhook event payload used to render the message.
            passed: Validation verdict computed by the caller.

        Returns:
            The upsert result, or None when the item passed.
        """
        if passed:
            return None

        message = self.compose(payload)

        # The full scan has to finish before choosing between create and
        # update, or a tracked comment on a later page yields a duplicate.
        existing = await find_tracked_comment(self._handle, self._marker)

        if existing is not None:
            comment_id = int(existing["id"])
            logger.info("Updating comment %d on %s", comment_id, self._handle.item)
            await self._handle.update_comment(comment_id, message)
            return NotificationResult(comment_id=comment_id, created=False)

        logger.info("Adding comment to %s", self._handle.item)
        comment_id = await self._handle.post_comment(message)
        return NotificationResult(comment_id=comment_id, created=True)


__all__ = ["NotificationManager", "NotificationResult"]
