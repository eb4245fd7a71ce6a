# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Polymorphic issue / pull request handles.

Issues and pull requests expose the same gate capabilities through
different GitHub endpoints:

=================  ===========================  ==============================
Capability         Issue                        Pull request
=================  ===========================  ==============================
post_comment       create issue comment         create review (event=COMMENT)
update_comment     edit issue comment           edit review
set_state          update issue                 update pull request
iter_comment_pages list issue comments          list reviews
=================  ===========================  ==============================

The orchestrator only depends on :class:`ProtocolItemHandle`; the
concrete handle is chosen once by :func:`create_item_handle`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from typing import Any, Protocol, runtime_checkable

from issuegate.errors import EventPayloadError
from issuegate.github.client_github import GitHubClient
from issuegate.models.model_item import ModelItem
from issuegate.models.model_item_type import EnumItemState, EnumItemType

logger = logging.getLogger(__name__)


@runtime_checkable
class ProtocolItemHandle(Protocol):
    """Capability set shared by issues and pull requests."""

    @property
    def item(self) -> ModelItem: ...

    def get_body(self) -> str: ...

    def get_state(self) -> EnumItemState: ...

    async def post_comment(self, message: str) -> int: ...

    async def update_comment(self, comment_id: int, message: str) -> None: ...

    async def set_state(self, state: EnumItemState) -> bool: ...

    def iter_comment_pages(self) -> AsyncIterator[list[dict[str, Any]]]: ...


class ItemHandleBase(ABC):
    """Shared behaviour of the concrete handles.

    Holds the request-scoped item snapshot and the client, and
    implements the state transition guard on top of the type-specific
    ``_write_state``.
    """

    def __init__(self, client: GitHubClient, item: ModelItem) -> None:
        self._client = client
        self._item = item
        self._known_state = item.state

    @property
    def item(self) -> ModelItem:
        return self._item

    def get_body(self) -> str:
        return self._item.body or ""

    def get_state(self) -> EnumItemState:
        return self._known_state

    async def set_state(self, state: EnumItemState) -> bool:
        """Move the item to ``state`` unless it is already there.

        Returns:
            True if a remote write was made, False for the no-op case.
        """
        if self._known_state == state:
            logger.info("%s is already %s, not updating state", self._item, state.value)
            return False
        logger.info("Setting %s state to %s", self._item, state.value)
        await self._write_state(state)
        self._known_state = state
        return True

    @abstractmethod
    async def post_comment(self, message: str) -> int: ...

    @abstractmethod
    async def update_comment(self, comment_id: int, message: str) -> None: ...

    @abstractmethod
    def iter_comment_pages(self) -> AsyncIterator[list[dict[str, Any]]]: ...

    @abstractmethod
    async def _write_state(self, state: EnumItemState) -> None: ...


class IssueHandle(ItemHandleBase):
    """Gate capabilities backed by the issues API."""

    async def post_comment(self, message: str) -> int:
        created = await self._client.create_issue_comment(
            self._item.full_name, self._item.number, message
        )
        return int(created["id"])

    async def update_comment(self, comment_id: int, message: str) -> None:
        await self._client.update_issue_comment(self._item.full_name, comment_id, message)

    def iter_comment_pages(self) -> AsyncIterator[list[dict[str, Any]]]:
        return self._client.list_issue_comments(self._item.full_name, self._item.number)

    async def _write_state(self, state: EnumItemState) -> None:
        await self._client.update_issue(
            self._item.full_name, self._item.number, state=state.value
        )


class PullRequestHandle(ItemHandleBase):
    """Gate capabilities backed by the pulls and reviews API.

    Notifications are posted as reviews of kind COMMENT, so the tracked
    comment of a pull request is a review and is looked up among reviews.
    """

    async def post_comment(self, message: str) -> int:
        created = await self._client.create_pull_review(
            self._item.full_name, self._item.number, message, event="COMMENT"
        )
        return int(created["id"])

    async def update_comment(self, comment_id: int, message: str) -> None:
        await self._client.update_pull_review(
            self._item.full_name, self._item.number, comment_id, message
        )

    def iter_comment_pages(self) -> AsyncIterator[list[dict[str, Any]]]:
        return self._client.list_pull_reviews(self._item.full_name, self._item.number)

    async def _write_state(self, state: EnumItemState) -> None:
        await self._client.update_pull_request(
            self._item.full_name, self._item.number, state=state.value
        )


_HANDLES: dict[EnumItemType, type[ItemHandleBase]] = {
    EnumItemType.ISSUE: IssueHandle,
    EnumItemType.PULL_REQUEST: PullRequestHandle,
}


def create_item_handle(client: GitHubClient, item: ModelItem) -> ProtocolItemHandle:
    """Return the handle implementation for the item's type."""
    return _HANDLES[item.item_type](client, item)


def resolve_item_type(payload: Mapping[str, Any]) -> EnumItemType | None:
    """Determine whether the payload carries an issue or a pull request.

    Issue-shaped payloads win over pull-request-shaped ones. ``None``
    means the event is not about an item and the gate does not apply.
    """
    if payload.get("issue") is not None:
        return EnumItemType.ISSUE
    if payload.get("pull_request") is not None:
        return EnumItemType.PULL_REQUEST
    return None


def resolve_item(
    payload: Mapping[str, Any],
    repository: str | None = None,
) -> ModelItem | None:
    """Build the item snapshot from a webhook payload.

    Args:
        payload: Webhook event payload.
        repository: "owner/repo" fallback (``GITHUB_REPOSITORY``) used when
            the payload has no ``repository`` object.

    Returns:
        The item, or None if the payload has no issue or pull request.

    Raises:
        EventPayloadError: If the item's location cannot be determined.
    """
    item_type = resolve_item_type(payload)
    if item_type is None:
        return None

    data: Mapping[str, Any] = payload[item_type.value]
    owner, repo = _resolve_repository(payload, repository)

    number = data.get("number", payload.get("number"))
    if number is None:
        raise EventPayloadError(f"No {item_type.value} number provided by GitHub.")

    state = data.get("state") or EnumItemState.OPEN.value
    try:
        item_state = EnumItemState(str(state).lower())
    except ValueError as exc:
        raise EventPayloadError(
            f"Unknown {item_type.value} state {state!r} in event payload."
        ) from exc

    return ModelItem(
        item_type=item_type,
        owner=owner,
        repo=repo,
        number=int(number),
        body=data.get("body") or "",
        state=item_state,
    )


def _resolve_repository(
    payload: Mapping[str, Any], repository: str | None
) -> tuple[str, str]:
    repo_data = payload.get("repository") or {}
    owner = (repo_data.get("owner") or {}).get("login")
    name = repo_data.get("name")
    if owner and name:
        return str(owner), str(name)

    if repository and "/" in repository:
        owner, _, name = repository.partition("/")
        if owner and name:
            return owner, name

    raise EventPayloadError(
        "Cannot determine repository: payload has no repository and "
        "GITHUB_REPOSITORY is not set."
    )


__all__ = [
    "IssueHandle",
    "ItemHandleBase",
    "ProtocolItemHandle",
    "PullRequestHandle",
    "create_item_handle",
    "resolve_item",
    "resolve_item_type",
]
