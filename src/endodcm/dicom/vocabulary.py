"""
Manifest field vocabulary.

Each recognised manifest element name is bound to a ``FieldRule`` describing
which DICOM attribute(s) it produces and how its text is interpreted. Field
names outside this table are ignored by the mapper.

Notes
-----
``ProcedureDescription`` and ``ProcedureID`` are written with the PN value
representation and ``OtherPatientID`` with UI. These choices mirror the
capture software that emits the manifests and do not match the VRs the DICOM
dictionary assigns to StudyDescription (LO), StudyID (SH) or OtherPatientIDs
(LO). They are kept so that generated headers stay byte-compatible with
existing archives.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydicom.valuerep import VR

__all__ = [
    "RuleKind",
    "FieldRule",
    "FIELD_RULES",
    "recognised_fields",
]


class RuleKind(str, Enum):
    """How the text of a manifest field is turned into attribute values."""

    TEXT = "text"
    """Copied verbatim into a single string-valued attribute."""

    DATE = "date"
    """Parsed as ``dd/MM/yyyy`` into a single DA attribute."""

    DATETIME = "datetime"
    """Parsed as ``dd/MM/yyyy HH:mm:ss`` and split into a DA and a TM attribute."""


@dataclass(frozen=True)
class FieldRule:
    """
    Conversion rule for one manifest field.

    Attributes
    ----------
    kind : RuleKind
        Interpretation applied to the field text.
    targets : tuple[tuple[str, VR], ...]
        DICOM keyword and VR of every attribute written. ``DATETIME`` rules
        carry exactly two targets: the date attribute then the time attribute.
    """

    kind: RuleKind
    targets: tuple[tuple[str, VR], ...]

    def __post_init__(self) -> None:
        expected = 2 if self.kind is RuleKind.DATETIME else 1
        if len(self.targets) != expected:
            msg = (
                f"{self.kind.value} rules write {expected} attribute(s), "
                f"got {len(self.targets)}"
            )
            raise ValueError(msg)

    @property
    def keywords(self) -> tuple[str, ...]:
        return tuple(keyword for keyword, _ in self.targets)


def _text(keyword: str, vr: VR) -> FieldRule:
    return FieldRule(RuleKind.TEXT, ((keyword, vr),))


FIELD_RULES: Mapping[str, FieldRule] = MappingProxyType(
    {
        "PatID": _text("PatientID", VR.LO),
        "PatName": _text("PatientName", VR.PN),
        "ProcedureDescription": _text("StudyDescription", VR.PN),
        "ProcedureID": _text("StudyID", VR.PN),
        "ReferringPhysician": _text("ReferringPhysicianName", VR.PN),
        "StudyInstanceUID": _text("StudyInstanceUID", VR.UI),
        "SeriesInstanceUID": _text("SeriesInstanceUID", VR.UI),
        "OtherPatientID": _text("OtherPatientIDs", VR.UI),
        "PATAccession": _text("AccessionNumber", VR.SH),
        "PATSex": _text("PatientSex", VR.CS),
        "PatBirth": FieldRule(RuleKind.DATE, (("PatientBirthDate", VR.DA),)),
        "ORDate": FieldRule(
            RuleKind.DATETIME,
            (("StudyDate", VR.DA), ("StudyTime", VR.TM)),
        ),
    }
)


def recognised_fields() -> list[str]:
    """Sorted list of manifest field names that produce attributes."""
    return sorted(FIELD_RULES)
