"""Domain models for the issue gate."""

from issuegate.models.model_item import ModelItem
from issuegate.models.model_item_type import EnumItemState, EnumItemType
from issuegate.models.model_pattern import ModelPattern
from issuegate.models.model_validation_result import ModelValidationResult

__all__ = [
    "EnumItemState",
    "EnumItemType",
    "ModelItem",
    "ModelPattern",
    "ModelValidationResult",
]
