# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Item type and state enums for the issue gate."""

from __future__ import annotations

from enum import Enum


class EnumItemType(str, Enum):
    """Kind of collaboration item being gated.

    Values match the top-level key carrying the item in a GitHub
    webhook payload.
    """

    ISSUE = "issue"
    PULL_REQUEST = "pull_request"


class EnumItemState(str, Enum):
    """Lifecycle state of an issue or pull request."""

    OPEN = "open"
    CLOSED = "closed"


__all__ = ["EnumItemState", "EnumItemType"]
