"""Pydantic models for the issue gate pattern policy.

The policy lists the required-acknowledgement patterns for each item
type. It is optional: without a policy file the built-in defaults apply,
which require the vulnerability-disclosure checkbox on issues and
nothing on pull requests.

Policy YAML structure::

    version: "1.0"
    issue_patterns:
      - regex: '- \\[x\\] I am not disclosing a vulnerability'
        label: vulnerability-disclosure
    pr_patterns: []

Patterns are evaluated independently, in order. They are never combined
into boolean expressions.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from issuegate.models.model_item_type import EnumItemType
from issuegate.models.model_pattern import ModelPattern

DEFAULT_ISSUE_PATTERNS: tuple[ModelPattern, ...] = (
    ModelPattern(
        regex=r"- \[x\] I am not disclosing a vulnerability",
        label="vulnerability-disclosure",
    ),
)
DEFAULT_PR_PATTERNS: tuple[ModelPattern, ...] = ()


class ModelGatePolicy(BaseModel):
    """Per-item-type pattern lists for the issue gate.

    Attributes:
        version: Policy schema version (e.g., "1.0").
        issue_patterns: Ordered patterns every issue body must match.
        pr_patterns: Ordered patterns every pull request body must match.
    """

    version: str = Field(
        default="1.0",
        description="Policy schema version (e.g., '1.0')",
        min_length=1,
    )
    issue_patterns: list[ModelPattern] = Field(
        default_factory=lambda: list(DEFAULT_ISSUE_PATTERNS),
        description="Patterns required in issue bodies",
    )
    pr_patterns: list[ModelPattern] = Field(
        default_factory=lambda: list(DEFAULT_PR_PATTERNS),
        description="Patterns required in pull request bodies",
    )

    @field_validator("version")
    @classmethod
    def validate_version_format(cls, v: str) -> str:
        """Validate that version follows semver-ish format."""
        if not re.match(r"^\d+\.\d+(\.\d+)?$", v):
            raise ValueError(
                f"version must follow semver format (e.g., '1.0' or '1.0.0'), got: {v!r}"
            )
        return v

    def patterns_for(self, item_type: EnumItemType) -> list[ModelPattern]:
        """Return the pattern list that applies to the given item type."""
        if item_type == EnumItemType.PULL_REQUEST:
            return list(self.pr_patterns)
        return list(self.issue_patterns)

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


__all__ = [
    "DEFAULT_ISSUE_PATTERNS",
    "DEFAULT_PR_PATTERNS",
    "ModelGatePolicy",
]
