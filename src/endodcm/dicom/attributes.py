"""
Typed DICOM attribute record produced from a manifest.

An ``AttributeRecord`` is a read-only mapping from DICOM keyword to
``Attribute``. Values keep their Python type (``str``, ``datetime.date`` or
``datetime.time``) until they are encoded for a dataset.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Union

from pydicom.dataset import Dataset
from pydicom.tag import BaseTag, Tag
from pydicom.valuerep import VR

from endodcm.utils.date_time import (
    datetime_to_iso_string,
    to_dicom_date,
    to_dicom_time,
)

AttributeValue = Union[str, date, time]
"""Python value held by a single attribute."""


@dataclass(frozen=True)
class Attribute:
    """One DICOM data element: keyword, value representation and typed value."""

    keyword: str
    vr: VR
    value: AttributeValue

    @property
    def tag(self) -> BaseTag:
        return Tag(self.keyword)

    def encoded(self) -> str:
        """
        Value as the string stored in a DICOM dataset.

        Dates become ``YYYYMMDD`` and times ``HHMMSS``; everything else is
        passed through unchanged.
        """
        if isinstance(self.value, date):
            return to_dicom_date(self.value)
        if isinstance(self.value, time):
            return to_dicom_time(self.value)
        return self.value


class AttributeRecord(Mapping[str, Attribute]):
    """
    Immutable mapping of DICOM keyword to ``Attribute``.

    Iteration follows ascending tag order, which is the order elements are
    written to a dataset.

    Parameters
    ----------
    attributes : Iterable[Attribute]
        Attributes to hold. Keywords must be unique.

    Raises
    ------
    ValueError
        If two attributes share a keyword.

    Examples
    --------
    >>> from pydicom.valuerep import VR
    >>> record = AttributeRecord([Attribute("PatientID", VR.LO, "P001")])
    >>> record.value("PatientID")
    'P001'
    >>> record.to_dataset().PatientID
    'P001'
    """

    __slots__ = ("_attributes",)

    def __init__(self, attributes: Iterable[Attribute] = ()) -> None:
        collected: dict[str, Attribute] = {}
        for attribute in sorted(attributes, key=lambda a: a.tag):
            if attribute.keyword in collected:
                msg = f"Duplicate attribute '{attribute.keyword}'"
                raise ValueError(msg)
            collected[attribute.keyword] = attribute
        self._attributes: Mapping[str, Attribute] = MappingProxyType(
            collected
        )

    def __getitem__(self, keyword: str) -> Attribute:
        return self._attributes[keyword]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        items = ", ".join(
            f"{a.keyword}={a.value!r}" for a in self._attributes.values()
        )
        return f"{type(self).__name__}({items})"

    def value(self, keyword: str) -> AttributeValue:
        """Typed value of the attribute with the given keyword."""
        return self._attributes[keyword].value

    def to_dataset(self) -> Dataset:
        """
        Build a new pydicom ``Dataset`` holding every attribute.

        Each element is created with the VR recorded on its ``Attribute``
        rather than the dictionary default. The dataset is a fresh object;
        modifying it does not affect the record.
        """
        ds = Dataset()
        for attribute in self._attributes.values():
            ds.add_new(attribute.tag, attribute.vr, attribute.encoded())
        return ds

    def to_dict(self) -> dict[str, str]:
        """Plain ``keyword -> str`` mapping with ISO 8601 dates and times."""
        return {
            keyword: (
                attribute.value
                if isinstance(attribute.value, str)
                else datetime_to_iso_string(attribute.value)
            )
            for keyword, attribute in self._attributes.items()
        }
