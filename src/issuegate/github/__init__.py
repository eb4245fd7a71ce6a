"""GitHub API integration for the issue gate."""

from issuegate.github.client_github import GitHubClient
from issuegate.github.handle_item import (
    IssueHandle,
    ProtocolItemHandle,
    PullRequestHandle,
    create_item_handle,
    resolve_item,
    resolve_item_type,
)
from issuegate.github.locator_comment import BOT_MARKER, find_tracked_comment

__all__ = [
    "BOT_MARKER",
    "GitHubClient",
    "IssueHandle",
    "ProtocolItemHandle",
    "PullRequestHandle",
    "create_item_handle",
    "find_tracked_comment",
    "resolve_item",
    "resolve_item_type",
]
