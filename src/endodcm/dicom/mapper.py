"""
Conversion of a manifest field map into an ``AttributeRecord``.

The mapper walks the field map once, applies the ``FieldRule`` bound to each
recognised field name and collects the resulting attributes in an
``AttributeRecordBuilder``. The record is only materialised after every field
has been converted, so a malformed date raises before anything is returned.
"""

from __future__ import annotations

from typing import Mapping

from endodcm.dicom.attributes import Attribute, AttributeRecord
from endodcm.dicom.vocabulary import FIELD_RULES, FieldRule, RuleKind
from endodcm.loggers import logger
from endodcm.utils.date_time import parse_manifest_date, parse_manifest_datetime

__all__ = [
    "AttributeRecordBuilder",
    "convert_field",
    "map_fields",
]


class AttributeRecordBuilder:
    """
    Collects attributes and yields a single immutable ``AttributeRecord``.

    Adding an attribute whose keyword is already present replaces it.
    """

    def __init__(self) -> None:
        self._attributes: dict[str, Attribute] = {}

    def add(self, *attributes: Attribute) -> AttributeRecordBuilder:
        for attribute in attributes:
            self._attributes[attribute.keyword] = attribute
        return self

    def __len__(self) -> int:
        return len(self._attributes)

    def build(self) -> AttributeRecord:
        return AttributeRecord(self._attributes.values())


def convert_field(
    field: str, value: str, rule: FieldRule
) -> tuple[Attribute, ...]:
    """
    Apply one rule to one manifest value.

    Parameters
    ----------
    field : str
        Manifest field name, reported in errors.
    value : str
        Raw field text.
    rule : FieldRule
        Rule bound to the field.

    Returns
    -------
    tuple[Attribute, ...]
        One attribute, or two for a combined date and time field.

    Raises
    ------
    MalformedDateError
        If a date-bearing value does not match its format.
    """
    match rule.kind:
        case RuleKind.TEXT:
            ((keyword, vr),) = rule.targets
            return (Attribute(keyword, vr, value),)
        case RuleKind.DATE:
            ((keyword, vr),) = rule.targets
            return (Attribute(keyword, vr, parse_manifest_date(field, value)),)
        case RuleKind.DATETIME:
            (date_keyword, date_vr), (time_keyword, time_vr) = rule.targets
            stamp = parse_manifest_datetime(field, value)
            return (
                Attribute(date_keyword, date_vr, stamp.date()),
                Attribute(time_keyword, time_vr, stamp.time()),
            )
    msg = f"Unhandled rule kind: {rule.kind!r}"
    raise ValueError(msg)


def map_fields(fields: Mapping[str, str]) -> AttributeRecord:
    """
    Convert a manifest field map into DICOM attributes.

    Field names not present in ``FIELD_RULES`` are skipped. The input mapping
    is not modified and the returned record holds no reference to it.

    Parameters
    ----------
    fields : Mapping[str, str]
        Field name to text value, as read from the manifest.

    Returns
    -------
    AttributeRecord
        The complete record.

    Raises
    ------
    MalformedDateError
        If ``PatBirth`` or ``ORDate`` cannot be parsed. No record is produced.

    Examples
    --------
    >>> record = map_fields(
    ...     {"PatID": "P001", "PatName": "Doe^Jane", "PatBirth": "01/01/1980"}
    ... )
    >>> record.value("PatientBirthDate")
    datetime.date(1980, 1, 1)
    """
    builder = AttributeRecordBuilder()
    for field, value in fields.items():
        rule = FIELD_RULES.get(field)
        if rule is None:
            logger.debug("Ignoring unrecognised manifest field", field=field)
            continue
        builder.add(*convert_field(field, value, rule))

    record = builder.build()
    logger.info(
        "Mapped manifest fields",
        fields=len(fields),
        attributes=len(record),
    )
    return record
