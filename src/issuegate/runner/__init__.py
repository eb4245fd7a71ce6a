# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Gate runner for the issue gate."""

from issuegate.runner.runner_gate import (
    ACCEPTED_ACTIONS,
    EnumGateOutcome,
    GateRunResult,
    RunnerGate,
)

__all__ = [
    "ACCEPTED_ACTIONS",
    "EnumGateOutcome",
    "GateRunResult",
    "RunnerGate",
]
