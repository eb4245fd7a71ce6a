# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Required-acknowledgement pattern validation.

Evaluates an item body against an ordered list of patterns. Each pattern
is checked independently with a search (not a full match); the verdict
is the list of per-pattern results, in pattern order.

This module performs no I/O and is deterministic: the same patterns and
body always produce the same results.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from issuegate.errors import ConfigurationError
from issuegate.models.model_pattern import ModelPattern
from issuegate.models.model_validation_result import ModelValidationResult


def validate_patterns(
    patterns: Iterable[ModelPattern],
    text: str | None,
) -> list[ModelValidationResult]:
    """Check a body of text against every required pattern.

    Args:
        patterns: Ordered patterns to evaluate.
        text: Item body. ``None`` and ``""`` are valid and match nothing.

    Returns:
        One ModelValidationResult per pattern, in the same order.

    Raises:
        ConfigurationError: If a pattern's regex does not compile.
    """
    body = text or ""
    results: list[ModelValidationResult] = []
    for pattern in patterns:
        try:
            compiled = re.compile(pattern.regex)
        except re.error as exc:
            raise ConfigurationError(
                f"Invalid pattern regex {pattern.regex!r}: {exc}"
            ) from exc
        results.append(
            ModelValidationResult(pattern=pattern, ok=compiled.search(body) is not None)
        )
    return results


def failed_validations(
    results: Sequence[ModelValidationResult],
) -> list[ModelValidationResult]:
    """Return the results whose pattern did not match."""
    return [result for result in results if not result.ok]


def is_passing(results: Sequence[ModelValidationResult]) -> bool:
    """Return True if every pattern matched."""
    return not failed_validations(results)


__all__ = ["failed_validations", "is_passing", "validate_patterns"]
