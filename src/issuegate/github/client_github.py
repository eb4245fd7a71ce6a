# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Thin async GitHub REST API wrapper for the issue gate.

Provides the handful of issue, pull request and review endpoints the
gate needs, plus Link-header pagination for listing endpoints.

Unlike a fail-open bot client, every method raises on failure:
``httpx.HTTPStatusError`` for non-2xx responses and ``httpx.TransportError``
for network problems. Nothing is retried here; a failed run is retried by
re-delivering the event.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

DEFAULT_GITHUB_API_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_SECONDS = 30.0
_PAGE_SIZE = 100


class GitHubClient:
    """Async GitHub REST API client for comments, reviews and item state.

    Supports both context manager and manual lifecycle management.

    Args:
        token: GitHub personal access token or GITHUB_TOKEN.
        base_url: GitHub API base URL (override for GitHub Enterprise).
        transport: Optional httpx transport (used by tests to fake GitHub).
        timeout_seconds: Per-request timeout.

    Example::

        async with GitHubClient(token) as client:
            await client.create_issue_comment("octo/repo", 7, "hello")
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_GITHUB_API_URL,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._timeout_seconds = timeout_seconds
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        """Return the API base URL."""
        return self._base_url

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def connect(self) -> None:
        """Open the connection pool. Safe to call multiple times (idempotent)."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=httpx.Timeout(self._timeout_seconds),
            transport=self._transport,
        )
        logger.debug("GitHubClient connected to %s", self._base_url)

    async def close(self) -> None:
        """Close the connection pool. Safe to call multiple times (idempotent)."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("GitHubClient connection closed")

    async def __aenter__(self) -> GitHubClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request and raise on a non-2xx status.

        Raises:
            httpx.HTTPStatusError: If GitHub returns an error status.
            httpx.TransportError: If the request could not be sent.
        """
        if self._client is None:
            await self.connect()
        assert self._client is not None

        logger.debug("GitHub API %s %s", method, url)
        response = await self._client.request(method, url, json=json, params=params)
        response.raise_for_status()
        return response

    async def _paginate(
        self, path: str, params: dict[str, Any] | None = None
    ) -> AsyncIterator[list[dict[str, Any]]]:
        """Yield each page of a list endpoint, following ``rel="next"`` links.

        Pages are yielded in the order GitHub returns them, which for
        comments and reviews is chronological.
        """
        page_params: dict[str, Any] | None = {"per_page": _PAGE_SIZE, **(params or {})}

        url: str | None = path
        while url:
            response = await self._request("GET", url, params=page_params)
            data = response.json()
            if isinstance(data, list):
                yield data
            elif isinstance(data, dict):
                yield [data]

            # The next link already carries the query string.
            url = response.links.get("next", {}).get("url")
            page_params = None

    # -- issues ---------------------------------------------------------------

    def list_issue_comments(
        self, repo: str, issue_number: int
    ) -> AsyncIterator[list[dict[str, Any]]]:
        """Iterate over pages of top-level comments on an issue."""
        return self._paginate(f"/repos/{repo}/issues/{issue_number}/comments")

    async def create_issue_comment(
        self, repo: str, issue_number: int, body: str
    ) -> dict[str, Any]:
        """Create a comment on an issue. Returns the created comment."""
        response = await self._request(
            "POST",
            f"/repos/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        return response.json()  # type: ignore[no-any-return]

    async def update_issue_comment(
        self, repo: str, comment_id: int, body: str
    ) -> dict[str, Any]:
        """Replace the body of an existing issue comment."""
        response = await self._request(
            "PATCH",
            f"/repos/{repo}/issues/comments/{comment_id}",
            json={"body": body},
        )
        return response.json()  # type: ignore[no-any-return]

    async def update_issue(
        self, repo: str, issue_number: int, *, state: str
    ) -> dict[str, Any]:
        """Set the state ("open" or "closed") of an issue."""
        response = await self._request(
            "PATCH",
            f"/repos/{repo}/issues/{issue_number}",
            json={"state": state},
        )
        return response.json()  # type: ignore[no-any-return]

    # -- pull requests --------------------------------------------------------

    def list_pull_reviews(
        self, repo: str, pull_number: int
    ) -> AsyncIterator[list[dict[str, Any]]]:
        """Iterate over pages of reviews on a pull request."""
        return self._paginate(f"/repos/{repo}/pulls/{pull_number}/reviews")

    async def create_pull_review(
        self, repo: str, pull_number: int, body: str, *, event: str = "COMMENT"
    ) -> dict[str, Any]:
        """Create a review on a pull request. Returns the created review."""
        response = await self._request(
            "POST",
            f"/repos/{repo}/pulls/{pull_number}/reviews",
            json={"body": body, "event": event},
        )
        return response.json()  # type: ignore[no-any-return]

    async def update_pull_review(
        self, repo: str, pull_number: int, review_id: int, body: str
    ) -> dict[str, Any]:
        """Replace the body of an existing pull request review."""
        response = await self._request(
            "PUT",
            f"/repos/{repo}/pulls/{pull_number}/reviews/{review_id}",
            json={"body": body},
        )
        return response.json()  # type: ignore[no-any-return]

    async def update_pull_request(
        self, repo: str, pull_number: int, *, state: str
    ) -> dict[str, Any]:
        """Set the state ("open" or "closed") of a pull request."""
        response = await self._request(
            "PATCH",
            f"/repos/{repo}/pulls/{pull_number}",
            json={"state": state},
        )
        return response.json()  # type: ignore[no-any-return]


__all__ = ["DEFAULT_GITHUB_API_URL", "GitHubClient"]
