# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ModelItem: the issue or pull request under validation.

An item is materialized once per invocation from the event payload and
is never persisted. It is immutable; the only mutable part of an item,
its lifecycle state, is tracked by the item handle that owns it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from issuegate.models.model_item_type import EnumItemState, EnumItemType


class ModelItem(BaseModel):
    """Request-scoped snapshot of an issue or pull request.

    Attributes:
        item_type: Whether this is an issue or a pull request.
        owner: Repository owner login.
        repo: Repository name.
        number: Issue or pull request number.
        body: Item body text (empty when unset).
        state: State as reported by the event payload.
    """

    item_type: EnumItemType = Field(..., description="Issue or pull request")
    owner: str = Field(..., description="Repository owner login", min_length=1)
    repo: str = Field(..., description="Repository name", min_length=1)
    number: int = Field(..., description="Issue or pull request number", ge=1)
    body: str = Field(default="", description="Item body text")
    state: EnumItemState = Field(
        default=EnumItemState.OPEN,
        description="State as known from the payload snapshot",
    )

    model_config = {"frozen": True, "extra": "ignore", "from_attributes": True}

    @property
    def full_name(self) -> str:
        """Return the repository in "owner/repo" form."""
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return f"{self.item_type.value} {self.full_name}#{self.number}"


__all__ = ["ModelItem"]
