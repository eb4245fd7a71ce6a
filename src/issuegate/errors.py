# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exception hierarchy for the issue gate.

Remote API failures are not wrapped: ``httpx.HTTPError`` subclasses
propagate unchanged to the entry point, which is the only place that
turns any of these into the process failure signal.
"""

from __future__ import annotations


class GateError(Exception):
    """Base exception for issue gate errors."""


class ConfigurationError(GateError):
    """Raised when required configuration is missing or invalid.

    Covers missing message templates, a missing token or event path,
    an invalid policy file and malformed pattern regexes.
    """


class EventPayloadError(GateError):
    """Raised when the inbound event payload cannot be used.

    A missing sender or an item whose owner/repo/number cannot be
    resolved is a misconfiguration, not an applicability skip.
    """


class TemplateRenderError(GateError):
    """Raised when a message template references an unknown field."""


__all__ = [
    "ConfigurationError",
    "EventPayloadError",
    "GateError",
    "TemplateRenderError",
]
