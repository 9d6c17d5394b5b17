# ruff: noqa
from .attributes import Attribute, AttributeRecord, AttributeValue
from .mapper import AttributeRecordBuilder, convert_field, map_fields
from .vocabulary import FIELD_RULES, FieldRule, RuleKind, recognised_fields

__all__ = [
    # attributes
    "Attribute",
    "AttributeRecord",
    "AttributeValue",
    # mapper
    "AttributeRecordBuilder",
    "convert_field",
    "map_fields",
    # vocabulary
    "FIELD_RULES",
    "FieldRule",
    "RuleKind",
    "recognised_fields",
]
