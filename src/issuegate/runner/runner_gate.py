# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Core gate runner for issue / pull request compliance checks.

Takes one webhook event payload, validates the item body against the
required patterns for its type and, on failure, upserts the tracked
notification and optionally moves the item to a configured state.

Run states::

    Start -> TypeResolved -> BodyExtracted -> Validated -> NoOp     -> End
                                                        -> Notified -> End

Unsupported actions and payloads without an item end the run early as
applicability skips. Everything else that goes wrong raises.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from issuegate.errors import EventPayloadError
from issuegate.github.client_github import GitHubClient
from issuegate.github.handle_item import create_item_handle, resolve_item
from issuegate.models.model_item import ModelItem
from issuegate.models.model_validation_result import ModelValidationResult
from issuegate.notification.manager_notification import NotificationManager
from issuegate.schemas.model_gate_policy import ModelGatePolicy
from issuegate.schemas.model_gate_settings import GateSettings
from issuegate.validators.validator_patterns import (
    failed_validations,
    is_passing,
    validate_patterns,
)

logger = logging.getLogger(__name__)

ACCEPTED_ACTIONS: frozenset[str] = frozenset({"opened", "reopened", "edited"})


class EnumGateOutcome(str, Enum):
    """How a gate run ended."""

    SKIPPED = "skipped"
    PASSED = "passed"
    NOTIFIED = "notified"


@dataclass
class GateRunResult:
    """Result of a gate run.

    Attributes:
        outcome: Whether the run was skipped, passed or notified.
        item: The item that was validated (None when skipped).
        validations: Per-pattern results, in pattern order.
        comment_id: Id of the tracked comment written, if any.
        comment_created: True if the tracked comment was newly posted.
        state_changed: True if the item's state was written.
        reason: Human-readable explanation for skips.
    """

    outcome: EnumGateOutcome
    item: ModelItem | None = None
    validations: list[ModelValidationResult] = field(default_factory=list)
    comment_id: int | None = None
    comment_created: bool = False
    state_changed: bool = False
    reason: str = ""

    @property
    def passed(self) -> bool:
        """Return True unless the item failed validation."""
        return self.outcome != EnumGateOutcome.NOTIFIED


class RunnerGate:
    """Core gate runner.

    Usage::

        runner = RunnerGate(settings=GateSettings(), policy=load_policy(path))
        async with GitHubClient(token) as client:
            result = await runner.run(payload, client)
    """

    def __init__(self, settings: GateSettings, policy: ModelGatePolicy) -> None:
        self._settings = settings
        self._policy = policy

    async def run(
        self, payload: Mapping[str, Any], client: GitHubClient
    ) -> GateRunResult:
        """Run the gate for a single event payload.

        Args:
            payload: Webhook event payload.
            client: GitHub client used for all remote calls.

        Returns:
            GateRunResult describing what was done.

        Raises:
            ConfigurationError: If the item fails and the message template for its
                type is missing, or if a pattern is malformed.
            EventPayloadError: If the payload has no sender or no resolvable location.
            TemplateRenderError: If the message template cannot be rendered.
            httpx.HTTPError: If a GitHub API call fails.
        """
        action = payload.get("action")
        if action not in ACCEPTED_ACTIONS:
            return self._skip("No issue or PR opened, reopened or edited, skipping.")

        item = resolve_item(payload, self._settings.repository)
        if item is None:
            return self._skip("Not a pull request or issue, skipping.")

        if not payload.get("sender"):
            raise EventPayloadError("No sender provided by GitHub.")

        handle = create_item_handle(client, item)

        body = handle.get_body()
        logger.debug("itemBody: %r", body)

        validations = validate_patterns(self._policy.patterns_for(item.item_type), body)
        invalid = failed_validations(validations)
        for result in validations:
            logger.info(
                "Pattern %s on %s: %s",
                result.pattern.name,
                item,
                "ok" if result.ok else "missing",
            )

        if is_passing(validations):
            logger.info("All required checkboxes checked on %s.", item)
            state_changed = False
            if self._settings.pass_state is not None:
                state_changed = await handle.set_state(self._settings.pass_state)
            return GateRunResult(
                outcome=EnumGateOutcome.PASSED,
                item=item,
                validations=validations,
                state_changed=state_changed,
            )

        logger.info(
            "%s is missing %d of %d required patterns",
            item,
            len(invalid),
            len(validations),
        )
        template = self._settings.message_for(item.item_type)
        manager = NotificationManager(handle, template)
        notification = await manager.notify(payload, passed=False)
        assert notification is not None

        state_changed = False
        if self._settings.fail_state is not None:
            state_changed = await handle.set_state(self._settings.fail_state)

        return GateRunResult(
            outcome=EnumGateOutcome.NOTIFIED,
            item=item,
            validations=validations,
            comment_id=notification.comment_id,
            comment_created=notification.created,
            state_changed=state_changed,
        )

    def _skip(self, reason: str) -> GateRunResult:
        logger.info(reason)
        return GateRunResult(outcome=EnumGateOutcome.SKIPPED, reason=reason)


__all__ = ["ACCEPTED_ACTIONS", "EnumGateOutcome", "GateRunResult", "RunnerGate"]
