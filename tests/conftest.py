"""
Pytest configuration and fixtures for issuegate tests.

Provides an in-memory fake of the GitHub REST endpoints the gate uses,
served through ``httpx.MockTransport`` so the real client code runs
end to end without network access.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from issuegate.schemas.model_gate_settings import GateSettings

# =========================================================================
# Environment isolation
# =========================================================================

_GATE_ENV_NAMES = (
    "INPUT_GITHUB-TOKEN",
    "INPUT_GITHUB_TOKEN",
    "GITHUB_TOKEN",
    "INPUT_ISSUE-MESSAGE",
    "INPUT_ISSUE_MESSAGE",
    "INPUT_PR-MESSAGE",
    "INPUT_PR_MESSAGE",
    "INPUT_POLICY-FILE",
    "INPUT_POLICY_FILE",
    "INPUT_FAIL-STATE",
    "INPUT_FAIL_STATE",
    "INPUT_PASS-STATE",
    "INPUT_PASS_STATE",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_gate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep runner environment variables from leaking into settings."""
    for name in _GATE_ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


# =========================================================================
# Fake GitHub API
# =========================================================================


class FakeGitHub:
    """Minimal stateful fake of the issues, pulls and reviews endpoints.

    Every request is recorded in ``requests``. List endpoints honour
    ``page``/``per_page`` and emit a ``Link: rel="next"`` header, capped
    at ``page_size`` items per page.
    """

    def __init__(self, page_size: int = 100) -> None:
        self.page_size = page_size
        self.requests: list[httpx.Request] = []
        self.issue_comments: dict[int, list[dict[str, Any]]] = {}
        self.reviews: dict[int, list[dict[str, Any]]] = {}
        self.states: dict[tuple[str, int], str] = {}
        self.fail_status: int | None = None
        self._next_id = 1000

    # -- seeding ----------------------------------------------------------

    def add_issue_comment(self, number: int, body: str) -> dict[str, Any]:
        comment = {"id": self._new_id(), "body": body}
        self.issue_comments.setdefault(number, []).append(comment)
        return comment

    def add_review(self, number: int, body: str) -> dict[str, Any]:
        review = {"id": self._new_id(), "body": body, "state": "COMMENTED"}
        self.reviews.setdefault(number, []).append(review)
        return review

    # -- inspection -------------------------------------------------------

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def writes(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method != "GET"]

    def calls(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    # -- routing ----------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, json={"message": "Simulated failure"})

        parts = request.url.path.strip("/").split("/")
        if len(parts) < 5 or parts[0] != "repos":
            return httpx.Response(404, json={"message": "Not Found"})
        kind, rest = parts[3], parts[4:]
        payload = json.loads(request.content) if request.content else {}

        if kind == "issues":
            if rest[0] == "comments" and len(rest) == 2 and request.method == "PATCH":
                return self._update(self.issue_comments, int(rest[1]), payload)
            number = int(rest[0])
            if rest[1:] == ["comments"]:
                if request.method == "GET":
                    return self._page(request, self.issue_comments.get(number, []))
                if request.method == "POST":
                    return httpx.Response(201, json=self.add_issue_comment(number, payload["body"]))
            if rest[1:] == [] and request.method == "PATCH":
                return self._set_state("issues", number, payload)

        if kind == "pulls":
            number = int(rest[0])
            if rest[1:] == ["reviews"]:
                if request.method == "GET":
                    return self._page(request, self.reviews.get(number, []))
                if request.method == "POST":
                    return httpx.Response(200, json=self.add_review(number, payload["body"]))
            if len(rest) == 3 and rest[1] == "reviews" and request.method == "PUT":
                return self._update(self.reviews, int(rest[2]), payload)
            if rest[1:] == [] and request.method == "PATCH":
                return self._set_state("pulls", number, payload)

        return httpx.Response(404, json={"message": "Not Found"})

    def _page(self, request: httpx.Request, items: list[dict[str, Any]]) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        per_page = min(int(request.url.params.get("per_page", "30")), self.page_size)
        start = (page - 1) * per_page
        headers = {}
        if start + per_page < len(items):
            next_url = request.url.copy_set_param("page", str(page + 1))
            headers["Link"] = f'<{next_url}>; rel="next"'
        return httpx.Response(200, json=items[start : start + per_page], headers=headers)

    def _update(
        self, store: dict[int, list[dict[str, Any]]], item_id: int, payload: dict[str, Any]
    ) -> httpx.Response:
        for comments in store.values():
            for comment in comments:
                if comment["id"] == item_id:
                    comment["body"] = payload["body"]
                    return httpx.Response(200, json=comment)
        return httpx.Response(404, json={"message": "Not Found"})

    def _set_state(self, kind: str, number: int, payload: dict[str, Any]) -> httpx.Response:
        self.states[(kind, number)] = payload["state"]
        return httpx.Response(200, json={"number": number, "state": payload["state"]})

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Provide an empty fake GitHub API."""
    return FakeGitHub()


# =========================================================================
# Payload and settings fixtures
# =========================================================================

CHECKED_BODY = "### Checklist\n- [x] I am not disclosing a vulnerability\n"
UNCHECKED_BODY = "### Checklist\n- [ ] I am not disclosing a vulnerability\n"


@pytest.fixture
def checked_body() -> str:
    return CHECKED_BODY


@pytest.fixture
def unchecked_body() -> str:
    return UNCHECKED_BODY


@pytest.fixture
def make_payload() -> Callable[..., dict[str, Any]]:
    """Provide a factory for GitHub webhook payloads."""

    def _make(
        kind: str = "issue",
        action: str = "opened",
        body: str | None = UNCHECKED_BODY,
        state: str = "open",
        number: int = 7,
        sender: bool = True,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "action": action,
            "repository": {"name": "widgets", "owner": {"login": "octo"}},
        }
        if kind in ("issue", "pull_request"):
            payload[kind] = {
                "number": number,
                "body": body,
                "state": state,
                "html_url": f"https://github.com/octo/widgets/issues/{number}",
                "user": {"login": "reporter"},
            }
        if sender:
            payload["sender"] = {"login": "reporter"}
        return payload

    return _make


@pytest.fixture
def gate_settings() -> GateSettings:
    """Provide settings with both templates configured."""
    return GateSettings(
        github_token="test-token",
        issue_message="Hi @${sender.login}, please confirm the checklist.",
        pr_message="Hi @${sender.login}, please fill in the PR checklist.",
    )
