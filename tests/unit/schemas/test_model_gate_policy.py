"""Unit tests for ModelGatePolicy."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from issuegate.models.model_item_type import EnumItemType
from issuegate.models.model_pattern import ModelPattern
from issuegate.schemas.model_gate_policy import (
    DEFAULT_ISSUE_PATTERNS,
    ModelGatePolicy,
)


@pytest.mark.unit
class TestModelGatePolicy:
    def test_defaults_require_vulnerability_checkbox_on_issues(self) -> None:
        policy = ModelGatePolicy()
        assert policy.issue_patterns == list(DEFAULT_ISSUE_PATTERNS)
        assert policy.issue_patterns[0].label == "vulnerability-disclosure"

    def test_defaults_require_nothing_on_pull_requests(self) -> None:
        assert ModelGatePolicy().pr_patterns == []

    def test_patterns_for_dispatches_on_item_type(self) -> None:
        issue = ModelPattern(regex="issue-box")
        pr = ModelPattern(regex="pr-box")
        policy = ModelGatePolicy(issue_patterns=[issue], pr_patterns=[pr])

        assert policy.patterns_for(EnumItemType.ISSUE) == [issue]
        assert policy.patterns_for(EnumItemType.PULL_REQUEST) == [pr]

    def test_patterns_for_returns_copy(self) -> None:
        policy = ModelGatePolicy()
        patterns = policy.patterns_for(EnumItemType.ISSUE)
        patterns.clear()
        assert len(policy.issue_patterns) == 1

    def test_invalid_version_rejected(self) -> None:
        with pytest.raises(ValidationError, match="semver"):
            ModelGatePolicy(version="latest")

    def test_malformed_pattern_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelGatePolicy.model_validate({"issue_patterns": [{"regex": "(unclosed"}]})
