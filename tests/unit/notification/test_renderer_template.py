"""Unit tests for render_template."""

from __future__ import annotations

import pytest

from issuegate.errors import TemplateRenderError
from issuegate.notification.renderer_template import render_template

PAYLOAD = {
    "action": "opened",
    "issue": {
        "number": 7,
        "title": "Crash on start",
        "user": {"login": "reporter"},
        "labels": ["bug"],
        "draft": False,
        "milestone": None,
    },
    "sender": {"login": "reporter"},
    "secret_stuff": {"token": "nope"},
}


@pytest.mark.unit
class TestRenderTemplate:
    def test_plain_text_unchanged(self) -> None:
        assert render_template("Please fix the checklist.", PAYLOAD) == (
            "Please fix the checklist."
        )

    def test_dotted_paths(self) -> None:
        rendered = render_template(
            "Hi @${sender.login}, issue #${issue.number} (${issue.title})", PAYLOAD
        )
        assert rendered == "Hi @reporter, issue #7 (Crash on start)"

    def test_whitespace_inside_placeholder(self) -> None:
        assert render_template("${ action }", PAYLOAD) == "opened"

    def test_value_formatting(self) -> None:
        assert render_template("${issue.milestone}", PAYLOAD) == ""
        assert render_template("${issue.draft}", PAYLOAD) == "False"
        assert render_template("${issue.labels}", PAYLOAD) == '["bug"]'
        assert render_template("${issue.user}", PAYLOAD) == '{"login":"reporter"}'

    def test_same_field_twice(self) -> None:
        assert render_template("${action}/${action}", PAYLOAD) == "opened/opened"

    def test_undefined_top_level_field(self) -> None:
        with pytest.raises(TemplateRenderError, match="pull_request is not defined"):
            render_template("${pull_request.number}", PAYLOAD)

    def test_undefined_nested_field(self) -> None:
        with pytest.raises(TemplateRenderError, match="issue.user.email is not defined"):
            render_template("${issue.user.email}", PAYLOAD)

    def test_field_outside_allow_list(self) -> None:
        with pytest.raises(TemplateRenderError, match="not allowed"):
            render_template("${secret_stuff.token}", PAYLOAD)

    @pytest.mark.parametrize(
        "expression",
        [
            "${process.exit()}",
            "${issue['number']}",
            "${1 + 1}",
            "${sender.login.toUpperCase()}",
            "${}",
        ],
    )
    def test_expressions_are_rejected(self, expression: str) -> None:
        with pytest.raises(TemplateRenderError, match="Unsupported template expression"):
            render_template(expression, PAYLOAD)

    def test_custom_allow_list(self) -> None:
        rendered = render_template(
            "${secret_stuff.token}", PAYLOAD, allowed_fields=frozenset({"secret_stuff"})
        )
        assert rendered == "nope"

    def test_dollar_without_brace_left_alone(self) -> None:
        assert render_template("costs $5 {ok}", PAYLOAD) == "costs $5 {ok}"
