"""Body and policy validation for the issue gate."""

from issuegate.validators.validator_patterns import (
    failed_validations,
    is_passing,
    validate_patterns,
)
from issuegate.validators.validator_policy import (
    PolicyValidationError,
    PolicyValidationResult,
    ValidatorPolicy,
    load_policy,
)

__all__ = [
    "PolicyValidationError",
    "PolicyValidationResult",
    "ValidatorPolicy",
    "failed_validations",
    "is_passing",
    "load_policy",
    "validate_patterns",
]
