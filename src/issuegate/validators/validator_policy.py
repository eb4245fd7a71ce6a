"""Policy validation logic for the issue gate.

Validates pattern policy YAML files against the ModelGatePolicy schema.
Produces actionable error messages with field names and line hints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import yaml
from pydantic import ValidationError

from issuegate.errors import ConfigurationError
from issuegate.schemas.model_gate_policy import ModelGatePolicy

logger = logging.getLogger(__name__)

_PATTERN_LIST_FIELDS = ("issue_patterns", "pr_patterns")


@dataclass
class PolicyValidationError:
    """A validation error with actionable context.

    Attributes:
        field: The field name or path that caused the error (e.g., "issue_patterns.0.regex").
        message: Human-readable error description with remediation hint.
        line_hint: Optional line number hint if available from YAML parsing.
    """

    field: str
    message: str
    line_hint: int | None = None

    def __str__(self) -> str:
        location = f"line {self.line_hint}: " if self.line_hint else ""
        return f"{location}{self.field}: {self.message}"


@dataclass
class PolicyValidationResult:
    """Result of validating a policy file.

    Attributes:
        policy: The parsed policy model (None if validation failed).
        errors: List of validation errors (empty if valid).
    """

    policy: ModelGatePolicy | None
    errors: list[PolicyValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Return True if there are no blocking errors."""
        return len(self.errors) == 0 and self.policy is not None


class ValidatorPolicy:
    """Validates pattern policy files for the issue gate.

    Usage::

        validator = ValidatorPolicy()
        result = validator.validate_file(".github/issue-gate.yaml")
        if not result.is_valid:
            for error in result.errors:
                print(f"ERROR: {error}")

        # Or fail fast:
        policy = load_policy(".github/issue-gate.yaml")
    """

    def validate_file(self, path: str) -> PolicyValidationResult:
        """Validate a policy YAML file at the given path."""
        try:
            with open(path, encoding="utf-8") as f:
                content = f.read()
        except OSError as exc:
            return PolicyValidationResult(
                policy=None,
                errors=[
                    PolicyValidationError(
                        field="file",
                        message=f"Cannot read policy file {path!r}: {exc}",
                    )
                ],
            )
        return self.validate_yaml_string(content)

    def validate_yaml_string(self, yaml_content: str) -> PolicyValidationResult:
        """Validate a policy from a YAML string."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as exc:
            line_hint: int | None = None
            mark = getattr(exc, "problem_mark", None)
            if mark is not None:
                line_hint = mark.line + 1
            return PolicyValidationResult(
                policy=None,
                errors=[
                    PolicyValidationError(
                        field="yaml",
                        message=f"Invalid YAML syntax: {exc}",
                        line_hint=line_hint,
                    )
                ],
            )

        if data is None:
            data = {}

        if not isinstance(data, dict):
            return PolicyValidationResult(
                policy=None,
                errors=[
                    PolicyValidationError(
                        field="root",
                        message=(
                            "Policy must be a YAML mapping (key: value pairs), "
                            f"got {type(data).__name__}"
                        ),
                    )
                ],
            )

        return self.validate_dict(data)

    def validate_dict(self, data: dict[str, Any]) -> PolicyValidationResult:
        """Validate a policy from an already-parsed dictionary.

        Missing pattern lists fall back to the built-in defaults. An
        explicit ``null`` list is rejected so that a typo does not
        silently disable the gate.
        """
        errors: list[PolicyValidationError] = []

        for list_field in _PATTERN_LIST_FIELDS:
            if list_field in data and data[list_field] is None:
                errors.append(
                    PolicyValidationError(
                        field=list_field,
                        message=(
                            f"'{list_field}' is null. Use an empty list ([]) to "
                            "require no patterns, or remove the key to use the defaults."
                        ),
                    )
                )
        if errors:
            return PolicyValidationResult(policy=None, errors=errors)

        try:
            policy = ModelGatePolicy.model_validate(data)
        except ValidationError as exc:
            for error in exc.errors():
                loc = error.get("loc", ())
                field_path = ".".join(str(part) for part in loc) if loc else "unknown"
                errors.append(
                    PolicyValidationError(
                        field=field_path,
                        message=error.get("msg", "Validation error"),
                    )
                )
            return PolicyValidationResult(policy=None, errors=errors)

        return PolicyValidationResult(policy=policy)


def load_policy(path: str | None) -> ModelGatePolicy:
    """Load the gate policy, or the built-in defaults when no path is given.

    Raises:
        ConfigurationError: If the file is unreadable or invalid.
    """
    if path is None:
        logger.debug("No policy file configured, using built-in patterns")
        return ModelGatePolicy()

    result = ValidatorPolicy().validate_file(path)
    if not result.is_valid or result.policy is None:
        details = "; ".join(str(error) for error in result.errors)
        raise ConfigurationError(f"Policy file {path!r} is invalid: {details}")

    logger.info(
        "Loaded policy %s (%d issue patterns, %d pull request patterns)",
        path,
        len(result.policy.issue_patterns),
        len(result.policy.pr_patterns),
    )
    return result.policy


__all__ = [
    "PolicyValidationError",
    "PolicyValidationResult",
    "ValidatorPolicy",
    "load_policy",
]
