"""Tracked comment lookup for the issue gate.

The gate keeps at most one notification per item. That comment is found
again on later runs by the hidden marker embedded in its body.
"""

from __future__ import annotations

import logging
from typing import Any

from issuegate.github.handle_item import ProtocolItemHandle

logger = logging.getLogger(__name__)

BOT_MARKER = "<!-- github-issue-bot-meta-tag-id -->"


async def find_tracked_comment(
    handle: ProtocolItemHandle,
    marker: str = BOT_MARKER,
) -> dict[str, Any] | None:
    """Return the first comment on the item whose body contains ``marker``.

    Pages are consumed in GitHub's chronological order until a match is
    found or the listing is exhausted, so a tracked comment on a late
    page is never missed. Duplicate tracked comments are left alone;
    only the first one is returned.

    Args:
        handle: The item to search.
        marker: Hidden marker identifying the tracked comment.

    Returns:
        The comment (or review) object, or None if there is none.
    """
    pages = 0
    async for page in handle.iter_comment_pages():
        pages += 1
        matches = [c for c in page if marker in (c.get("body") or "")]
        if matches:
            if len(matches) > 1:
                logger.warning(
                    "Found %d tracked comments on %s, using the first (id=%s)",
                    len(matches),
                    handle.item,
                    matches[0].get("id"),
                )
            logger.debug(
                "Tracked comment %s found on page %d", matches[0].get("id"), pages
            )
            return matches[0]

    logger.debug("No tracked comment on %s after %d pages", handle.item, pages)
    return None


__all__ = ["BOT_MARKER", "find_tracked_comment"]
