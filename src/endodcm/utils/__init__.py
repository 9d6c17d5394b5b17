from .date_time import (
    MANIFEST_DATE_FORMAT,
    MANIFEST_DATETIME_FORMAT,
    datetime_to_iso_string,
    parse_manifest_date,
    parse_manifest_datetime,
    to_dicom_date,
    to_dicom_time,
)

__all__ = [
    # date_time
    "MANIFEST_DATE_FORMAT",
    "MANIFEST_DATETIME_FORMAT",
    "datetime_to_iso_string",
    "parse_manifest_date",
    "parse_manifest_datetime",
    "to_dicom_date",
    "to_dicom_time",
]
