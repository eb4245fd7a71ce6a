"""Configuration schemas for the issue gate."""

from issuegate.schemas.model_gate_policy import (
    DEFAULT_ISSUE_PATTERNS,
    DEFAULT_PR_PATTERNS,
    ModelGatePolicy,
)
from issuegate.schemas.model_gate_settings import GateSettings

__all__ = [
    "DEFAULT_ISSUE_PATTERNS",
    "DEFAULT_PR_PATTERNS",
    "GateSettings",
    "ModelGatePolicy",
]
