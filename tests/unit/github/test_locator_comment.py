"""Unit tests for find_tracked_comment."""

from __future__ import annotations

from typing import Any

import pytest

from issuegate.github.client_github import GitHubClient
from issuegate.github.handle_item import create_item_handle
from issuegate.github.locator_comment import BOT_MARKER, find_tracked_comment
from issuegate.models.model_item import ModelItem
from issuegate.models.model_item_type import EnumItemType

ISSUE = ModelItem(item_type=EnumItemType.ISSUE, owner="octo", repo="widgets", number=7)
PULL = ModelItem(item_type=EnumItemType.PULL_REQUEST, owner="octo", repo="widgets", number=7)


@pytest.mark.unit
class TestFindTrackedComment:
    @pytest.mark.asyncio
    async def test_returns_none_without_comments(self, fake_github: Any) -> None:
        async with GitHubClient("t", transport=fake_github.transport) as client:
            found = await find_tracked_comment(create_item_handle(client, ISSUE))
        assert found is None

    @pytest.mark.asyncio
    async def test_ignores_comments_without_marker(self, fake_github: Any) -> None:
        fake_github.add_issue_comment(7, "thanks!")
        fake_github.add_issue_comment(7, "<!-- some other bot -->")
        async with GitHubClient("t", transport=fake_github.transport) as client:
            found = await find_tracked_comment(create_item_handle(client, ISSUE))
        assert found is None

    @pytest.mark.asyncio
    async def test_finds_marker_on_later_page(self, fake_github: Any) -> None:
        fake_github.page_size = 2
        for i in range(5):
            fake_github.add_issue_comment(7, f"human comment {i}")
        tracked = fake_github.add_issue_comment(7, f"please fix\n{BOT_MARKER}")

        async with GitHubClient("t", transport=fake_github.transport) as client:
            found = await find_tracked_comment(create_item_handle(client, ISSUE))

        assert found == tracked
        assert len(fake_github.calls("GET")) == 3

    @pytest.mark.asyncio
    async def test_first_occurrence_wins(self, fake_github: Any) -> None:
        fake_github.page_size = 1
        first = fake_github.add_issue_comment(7, f"one {BOT_MARKER}")
        fake_github.add_issue_comment(7, f"two {BOT_MARKER}")

        async with GitHubClient("t", transport=fake_github.transport) as client:
            found = await find_tracked_comment(create_item_handle(client, ISSUE))

        assert found == first
        assert len(fake_github.calls("GET")) == 1

    @pytest.mark.asyncio
    async def test_duplicates_on_one_page_are_not_cleaned(self, fake_github: Any) -> None:
        first = fake_github.add_issue_comment(7, f"one {BOT_MARKER}")
        fake_github.add_issue_comment(7, f"two {BOT_MARKER}")

        async with GitHubClient("t", transport=fake_github.transport) as client:
            found = await find_tracked_comment(create_item_handle(client, ISSUE))

        assert found == first
        assert fake_github.writes == []
        assert len(fake_github.issue_comments[7]) == 2

    @pytest.mark.asyncio
    async def test_searches_reviews_for_pull_requests(self, fake_github: Any) -> None:
        review = fake_github.add_review(7, f"fix the PR {BOT_MARKER}")
        async with GitHubClient("t", transport=fake_github.transport) as client:
            found = await find_tracked_comment(create_item_handle(client, PULL))

        assert found == review
        assert fake_github.requests[0].url.path == "/repos/octo/widgets/pulls/7/reviews"

    @pytest.mark.asyncio
    async def test_null_body_is_tolerated(self, fake_github: Any) -> None:
        fake_github.issue_comments[7] = [{"id": 1, "body": None}]
        async with GitHubClient("t", transport=fake_github.transport) as client:
            found = await find_tracked_comment(create_item_handle(client, ISSUE))
        assert found is None
