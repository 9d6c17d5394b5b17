import logging
from datetime import date, time

import pytest
from pydicom.valuerep import VR

from endodcm.dicom import FIELD_RULES, map_fields
from endodcm.dicom.mapper import AttributeRecordBuilder, convert_field
from endodcm.dicom.attributes import Attribute
from endodcm.exceptions import MalformedDateError
from endodcm.loggers import temporary_log_level


def test_patient_scenario() -> None:
    record = map_fields(
        {"PatID": "P001", "PatName": "Doe^Jane", "PatBirth": "01/01/1980"}
    )
    assert set(record) == {"PatientID", "PatientName", "PatientBirthDate"}
    assert record.value("PatientID") == "P001"
    assert record.value("PatientName") == "Doe^Jane"
    assert record.value("PatientBirthDate") == date(1980, 1, 1)
    assert record["PatientID"].vr == VR.LO
    assert record["PatientName"].vr == VR.PN
    assert record["PatientBirthDate"].vr == VR.DA


def test_procedure_datetime_writes_date_and_time() -> None:
    record = map_fields({"ORDate": "03/11/2021 14:05:30"})
    assert set(record) == {"StudyDate", "StudyTime"}
    assert record.value("StudyDate") == date(2021, 11, 3)
    assert record.value("StudyTime") == time(14, 5, 30)
    assert record["StudyTime"].vr == VR.TM


def test_full_field_map(valid_fields: list[tuple[str, str]]) -> None:
    record = map_fields(dict(valid_fields))
    expected = {k for rule in FIELD_RULES.values() for k in rule.keywords}
    assert set(record) == expected
    assert record.value("AccessionNumber") == "ACC123"
    assert record.value("PatientSex") == "F"
    assert record.value("StudyDescription") == "Gastroscopy"
    assert record.value("StudyID") == "PROC9"
    assert record.value("ReferringPhysicianName") == "Smith^John"
    assert record.value("OtherPatientIDs") == "1.2.3"
    assert record["OtherPatientIDs"].vr == VR.UI


def test_unknown_fields_are_ignored() -> None:
    fields = {"PatID": "P001", "Endoscope": "GIF-H190", "Operator": "nurse"}
    record = map_fields(fields)
    assert list(record) == ["PatientID"]
    assert fields == {"PatID": "P001", "Endoscope": "GIF-H190", "Operator": "nurse"}


def test_only_unknown_fields_gives_empty_record() -> None:
    assert len(map_fields({"Endoscope": "GIF-H190"})) == 0
    assert len(map_fields({})) == 0


def test_input_order_does_not_matter(valid_fields: list[tuple[str, str]]) -> None:
    forward = map_fields(dict(valid_fields))
    backward = map_fields(dict(reversed(valid_fields)))
    assert forward.to_dict() == backward.to_dict()
    assert list(forward) == list(backward)


@pytest.mark.parametrize(
    ("field", "bad_value"),
    [
        ("PatBirth", "31/02/2020"),
        ("PatBirth", "1980-01-01"),
        ("ORDate", "03/11/2021"),
        ("ORDate", "03/11/2021 25:00:00"),
    ],
)
def test_malformed_date_fails_whole_mapping(
    valid_fields: list[tuple[str, str]], field: str, bad_value: str
) -> None:
    fields = dict(valid_fields)
    fields[field] = bad_value
    with pytest.raises(MalformedDateError) as excinfo:
        map_fields(fields)
    assert excinfo.value.field == field
    assert excinfo.value.value == bad_value


def test_invalid_calendar_birth_date() -> None:
    with pytest.raises(MalformedDateError):
        map_fields({"PatBirth": "31/02/2020"})


def test_text_values_are_not_trimmed_or_validated() -> None:
    record = map_fields({"PatName": "", "PATSex": "unknown"})
    assert record.value("PatientName") == ""
    assert record.value("PatientSex") == "unknown"


def test_convert_field_returns_attributes() -> None:
    assert convert_field("PatID", "P001", FIELD_RULES["PatID"]) == (
        Attribute("PatientID", VR.LO, "P001"),
    )
    study_date, study_time = convert_field(
        "ORDate", "03/11/2021 14:05:30", FIELD_RULES["ORDate"]
    )
    assert study_date == Attribute("StudyDate", VR.DA, date(2021, 11, 3))
    assert study_time == Attribute("StudyTime", VR.TM, time(14, 5, 30))


def test_builder_last_attribute_wins() -> None:
    builder = AttributeRecordBuilder()
    builder.add(Attribute("PatientID", VR.LO, "first"))
    builder.add(Attribute("PatientID", VR.LO, "second"))
    assert len(builder) == 1
    assert builder.build().value("PatientID") == "second"


def test_builder_records_are_independent() -> None:
    builder = AttributeRecordBuilder().add(Attribute("PatientID", VR.LO, "P001"))
    first = builder.build()
    builder.add(Attribute("PatientSex", VR.CS, "F"))
    assert list(first) == ["PatientID"]
    assert len(builder.build()) == 2


class _RecordCollector(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def test_completed_record_is_logged_at_info(
    valid_fields: list[tuple[str, str]],
) -> None:
    collector = _RecordCollector()
    stdlib_logger = logging.getLogger("endodcm")
    stdlib_logger.addHandler(collector)
    try:
        with temporary_log_level("INFO"):
            record = map_fields(dict(valid_fields))
    finally:
        stdlib_logger.removeHandler(collector)

    mapped = [
        r
        for r in collector.records
        if isinstance(r.msg, dict) and r.msg.get("event") == "Mapped manifest fields"
    ]
    assert len(mapped) == 1
    assert mapped[0].levelno == logging.INFO
    assert mapped[0].msg["attributes"] == len(record)
