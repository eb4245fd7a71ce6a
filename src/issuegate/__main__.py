# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Issue gate CLI, run as a GitHub Actions step.

Reads action inputs and the triggering event from the environment that
GitHub Actions provides, runs the gate once, and exits.

Usage:
    python -m issuegate
    python -m issuegate --event-path event.json --policy-file .github/issue-gate.yaml
    LOG_LEVEL=DEBUG python -m issuegate

Exit Codes:
    0 - Success: item passed, was notified, or the event was skipped
    1 - Failure: configuration, payload, template or GitHub API error
    2 - Error: CLI usage error
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
from typing import Any

import httpx
from pydantic import ValidationError

from issuegate.errors import ConfigurationError, EventPayloadError, GateError
from issuegate.github.client_github import GitHubClient
from issuegate.runner.runner_gate import GateRunResult, RunnerGate
from issuegate.schemas.model_gate_settings import GateSettings
from issuegate.validators.validator_policy import load_policy

logger = logging.getLogger(__name__)


def _get_log_level() -> int:
    """Get log level from environment with safe fallback."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        return logging.INFO
    return level


def load_event_payload(path: str | None) -> dict[str, Any]:
    """Read the webhook event payload written by GitHub Actions.

    Raises:
        ConfigurationError: If no event path is configured.
        EventPayloadError: If the file is unreadable or not a JSON object.
    """
    if not path:
        raise ConfigurationError("GITHUB_EVENT_PATH not set.")
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as exc:
        raise EventPayloadError(f"Cannot read event payload {path!r}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise EventPayloadError(f"Event payload {path!r} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise EventPayloadError(
            f"Event payload must be a JSON object, got {type(payload).__name__}"
        )
    return payload


async def run_gate(
    settings: GateSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GateRunResult:
    """Load policy and payload, then run the gate against GitHub.

    Args:
        settings: Loaded gate settings.
        transport: Optional httpx transport override.

    Returns:
        The gate run result.
    """
    token = settings.require_token()
    policy = load_policy(settings.policy_file)
    payload = load_event_payload(settings.event_path)

    runner = RunnerGate(settings=settings, policy=policy)
    async with GitHubClient(token, settings.api_url, transport=transport) as client:
        return await runner.run(payload, client)


def describe_error(exc: BaseException) -> str:
    """Turn a run failure into the single-line failure reason."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        detail = response.reason_phrase
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            detail = str(body["message"])
        return (
            f"GitHub API {exc.request.method} {exc.request.url} "
            f"returned {response.status_code}: {detail}"
        )
    if isinstance(exc, httpx.HTTPError):
        return f"GitHub API request failed: {exc}"
    return str(exc) or type(exc).__name__


def set_failed(message: str) -> None:
    """Report the run failure as a GitHub Actions error annotation."""
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    logger.error(message)
    print(f"::error::{escaped}", flush=True)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the issue gate CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 = success or skip, 1 = failure, 2 = usage error).
    """
    parser = argparse.ArgumentParser(
        prog="issuegate",
        description="Check issue and pull request bodies for required checkboxes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Inputs are read from INPUT_* variables (e.g. INPUT_ISSUE-MESSAGE)\n"
            "and the event from GITHUB_EVENT_PATH."
        ),
    )
    parser.add_argument(
        "--event-path",
        help="Webhook event JSON file (overrides GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--policy-file",
        help="YAML pattern policy (overrides INPUT_POLICY-FILE)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    try:
        parsed = parser.parse_args(args)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 2

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else _get_log_level(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        try:
            settings = GateSettings()
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid action inputs: {exc}") from exc

        overrides = {
            key: value
            for key, value in (
                ("event_path", parsed.event_path),
                ("policy_file", parsed.policy_file),
            )
            if value
        }
        if overrides:
            settings = settings.model_copy(update=overrides)

        result = asyncio.run(run_gate(settings))
    except (GateError, httpx.HTTPError) as exc:
        set_failed(describe_error(exc))
        return 1
    except Exception as exc:
        logger.exception("Unexpected error while running the gate")
        set_failed(describe_error(exc))
        return 1

    logger.info("Gate finished: %s", result.outcome.value)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
