# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Safe message template rendering.

Templates reference webhook payload fields with ``${...}`` placeholders,
e.g.::

    Hi @${sender.login}, please tick the required boxes in ${issue.html_url}.

A placeholder is a dotted path whose root must be an allow-listed top
level payload field; each following segment is a key into a nested
mapping. Nothing inside a placeholder is ever evaluated, so anything
other than a plain path is rejected.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from issuegate.errors import TemplateRenderError

DEFAULT_ALLOWED_FIELDS: frozenset[str] = frozenset(
    {
        "action",
        "changes",
        "enterprise",
        "installation",
        "issue",
        "number",
        "organization",
        "pull_request",
        "repository",
        "sender",
    }
)

_PLACEHOLDER = re.compile(r"\$\{([^}]*)\}")
_FIELD_PATH = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z0-9_-]+)*$")


def render_template(
    template: str,
    payload: Mapping[str, Any],
    allowed_fields: frozenset[str] = DEFAULT_ALLOWED_FIELDS,
) -> str:
    """Substitute payload fields into a message template.

    Args:
        template: Template text with ``${field.path}`` placeholders.
        payload: Webhook event payload.
        allowed_fields: Top-level payload fields a template may reference.

    Returns:
        The rendered message.

    Raises:
        TemplateRenderError: If a placeholder is not a plain field path,
            names a field outside the allow-list, or references a field
            missing from the payload.
    """

    def _substitute(match: re.Match[str]) -> str:
        expression = match.group(1).strip()
        if not _FIELD_PATH.match(expression):
            raise TemplateRenderError(
                f"Unsupported template expression ${{{match.group(1)}}}: "
                "only dotted field paths such as ${issue.number} are allowed"
            )
        root, *keys = expression.split(".")
        if root not in allowed_fields:
            raise TemplateRenderError(
                f"Template field {root!r} is not allowed. "
                f"Allowed fields are: {sorted(allowed_fields)}"
            )
        if root not in payload:
            raise TemplateRenderError(f"{root} is not defined in the event payload")

        value: Any = payload[root]
        walked = root
        for key in keys:
            if not isinstance(value, Mapping) or key not in value:
                raise TemplateRenderError(f"{walked}.{key} is not defined in the event payload")
            value = value[key]
            walked = f"{walked}.{key}"
        return _format_value(value)

    return _PLACEHOLDER.sub(_substitute, template)


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, list)):
        return json.dumps(value, separators=(",", ":"), sort_keys=True)
    return str(value)


__all__ = ["DEFAULT_ALLOWED_FIELDS", "render_template"]
