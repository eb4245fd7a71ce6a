# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ModelPattern: a required acknowledgement expressed as a regex."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator


class ModelPattern(BaseModel):
    """A named regular expression that an item body must match.

    The regex is compiled during validation so that a malformed pattern
    is rejected when configuration is loaded, not when a body is checked.

    Attributes:
        regex: Regular expression searched for anywhere in the body.
        label: Optional human-readable name used in logs.

    Example::

        pattern = ModelPattern(
            regex=r"- \\[x\\] I am not disclosing a vulnerability",
            label="vulnerability-disclosure",
        )
    """

    regex: str = Field(..., description="Regular expression to search for", min_length=1)
    label: str | None = Field(default=None, description="Optional pattern name")

    @field_validator("regex")
    @classmethod
    def validate_regex_compiles(cls, v: str) -> str:
        """Validate that the regex is syntactically valid."""
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"regex {v!r} does not compile: {exc}") from exc
        return v

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}

    @property
    def name(self) -> str:
        """Return the label, or the regex itself when no label is set."""
        return self.label or self.regex


__all__ = ["ModelPattern"]
