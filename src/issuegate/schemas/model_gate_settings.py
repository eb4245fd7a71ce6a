# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Runtime settings for the issue gate, loaded from the environment.

GitHub Actions exposes action inputs as ``INPUT_<NAME>`` environment
variables with the input name upper-cased and hyphens preserved, e.g.
``INPUT_ISSUE-MESSAGE``. Each setting also accepts the underscore
spelling so the gate can be driven from a plain shell.

Environment variables:
    INPUT_GITHUB-TOKEN / GITHUB_TOKEN: API credential.
    INPUT_ISSUE-MESSAGE: Template posted on failing issues.
    INPUT_PR-MESSAGE: Template posted on failing pull requests.
    INPUT_POLICY-FILE: Optional YAML pattern policy.
    INPUT_FAIL-STATE: State to set on failing items ("open"/"closed").
    INPUT_PASS-STATE: State to set on passing items ("open"/"closed").
    GITHUB_EVENT_PATH: Path of the webhook event JSON file.
    GITHUB_REPOSITORY: "owner/repo" fallback for the item location.
    GITHUB_API_URL: REST API base URL (GitHub Enterprise override).
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from issuegate.errors import ConfigurationError
from issuegate.github.client_github import DEFAULT_GITHUB_API_URL
from issuegate.models.model_item_type import EnumItemState, EnumItemType


class GateSettings(BaseSettings):
    """Pydantic Settings for the issue gate, loaded from environment.

    Empty strings are treated as unset, because GitHub Actions passes
    unset optional inputs as empty variables.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    github_token: str = Field(
        default="",
        validation_alias=AliasChoices(
            "INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"
        ),
        description="GitHub API credential",
    )
    issue_message: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_ISSUE-MESSAGE", "INPUT_ISSUE_MESSAGE"),
        description="Message template for failing issues",
    )
    pr_message: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_PR-MESSAGE", "INPUT_PR_MESSAGE"),
        description="Message template for failing pull requests",
    )
    policy_file: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_POLICY-FILE", "INPUT_POLICY_FILE"),
        description="Optional YAML pattern policy path",
    )
    fail_state: EnumItemState | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_FAIL-STATE", "INPUT_FAIL_STATE"),
        description="State to set on items that fail validation",
    )
    pass_state: EnumItemState | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_PASS-STATE", "INPUT_PASS_STATE"),
        description="State to set on items that pass validation",
    )
    event_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_EVENT_PATH"),
        description="Path of the webhook event payload file",
    )
    repository: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_REPOSITORY"),
        description="Repository in 'owner/repo' form",
    )
    api_url: str = Field(
        default=DEFAULT_GITHUB_API_URL,
        validation_alias=AliasChoices("GITHUB_API_URL"),
        description="GitHub REST API base URL",
    )

    @field_validator(
        "issue_message",
        "pr_message",
        "policy_file",
        "event_path",
        "repository",
        mode="before",
    )
    @classmethod
    def empty_string_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("fail_state", "pass_state", mode="before")
    @classmethod
    def normalize_state(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("api_url", mode="before")
    @classmethod
    def default_api_url(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return DEFAULT_GITHUB_API_URL
        return v

    def message_for(self, item_type: EnumItemType) -> str:
        """Return the message template for the given item type.

        Raises:
            ConfigurationError: If the template for this type is not set.
        """
        if item_type == EnumItemType.PULL_REQUEST:
            if not self.pr_message:
                raise ConfigurationError("Parameter `pr-message` not set.")
            return self.pr_message
        if not self.issue_message:
            raise ConfigurationError("Parameter `issue-message` not set.")
        return self.issue_message

    def require_token(self) -> str:
        """Return the API token, raising if it is not configured."""
        if not self.github_token:
            raise ConfigurationError("Parameter `github-token` not set.")
        return self.github_token


__all__ = ["DEFAULT_GITHUB_API_URL", "GateSettings"]
