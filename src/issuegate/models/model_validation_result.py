# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ModelValidationResult: per-pattern outcome of body validation."""

from __future__ import annotations

from pydantic import BaseModel, Field

from issuegate.models.model_pattern import ModelPattern


class ModelValidationResult(BaseModel):
    """Whether a single pattern matched the item body.

    A list of these, one per configured pattern and in the same order,
    is the authoritative verdict for an item.
    """

    pattern: ModelPattern = Field(..., description="The pattern that was evaluated")
    ok: bool = Field(..., description="True if the pattern matched the body")

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}


__all__ = ["ModelValidationResult"]
