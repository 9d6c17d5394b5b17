import re
from datetime import date, datetime, time

from endodcm.exceptions import MalformedDateError

MANIFEST_DATE_FORMAT = "dd/MM/yyyy"
MANIFEST_DATETIME_FORMAT = "dd/MM/yyyy HH:mm:ss"

# Fixed-width numeric patterns; month and day names never appear so the
# result does not depend on the runtime locale or calendar.
_DATE_PATTERN = re.compile(
    r"(?P<day>[0-9]{2})/(?P<month>[0-9]{2})/(?P<year>[0-9]{4})"
)
_DATETIME_PATTERN = re.compile(
    r"(?P<day>[0-9]{2})/(?P<month>[0-9]{2})/(?P<year>[0-9]{4})"
    r" (?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
)


def parse_manifest_date(field: str, value: str) -> date:
    """
    Parse a strict ``dd/MM/yyyy`` manifest date.

    Parameters
    ----------
    field : str
        Name of the manifest field, used in the error message.
    value : str
        Text to parse.

    Returns
    -------
    datetime.date
        The calendar date.

    Raises
    ------
    MalformedDateError
        If the text does not match the format or names an impossible date.

    Examples
    --------
    >>> parse_manifest_date("PatBirth", "01/01/1980")
    datetime.date(1980, 1, 1)
    """
    match = _DATE_PATTERN.fullmatch(value)
    if match is None:
        raise MalformedDateError(field, value, MANIFEST_DATE_FORMAT)
    try:
        return date(
            int(match["year"]), int(match["month"]), int(match["day"])
        )
    except ValueError as e:
        raise MalformedDateError(field, value, MANIFEST_DATE_FORMAT) from e


def parse_manifest_datetime(field: str, value: str) -> datetime:
    """
    Parse a strict ``dd/MM/yyyy HH:mm:ss`` manifest timestamp (24-hour clock).

    Examples
    --------
    >>> parse_manifest_datetime("ORDate", "03/11/2021 14:05:30")
    datetime.datetime(2021, 11, 3, 14, 5, 30)
    """
    match = _DATETIME_PATTERN.fullmatch(value)
    if match is None:
        raise MalformedDateError(field, value, MANIFEST_DATETIME_FORMAT)
    try:
        return datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
        )
    except ValueError as e:
        raise MalformedDateError(
            field, value, MANIFEST_DATETIME_FORMAT
        ) from e


def to_dicom_date(value: date) -> str:
    """Format a date as a DICOM DA string (``YYYYMMDD``)."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def to_dicom_time(value: time) -> str:
    """Format a time of day as a DICOM TM string (``HHMMSS``)."""
    return f"{value.hour:02d}{value.minute:02d}{value.second:02d}"


def datetime_to_iso_string(
    datetime_obj: datetime | date | time,
) -> str:
    """Convert datetime/date/time to an ISO 8601 string with second precision.

    Raises
    ------
    TypeError
        If 'datetime_obj' is not a datetime, date, or time object.

    Examples
    --------
    >>> datetime_to_iso_string(datetime(2024, 1, 1, 12, 0, 0))
    '2024-01-01T12:00:00'
    >>> datetime_to_iso_string(date(2024, 1, 1))
    '2024-01-01'
    >>> datetime_to_iso_string(time(12, 0, 0))
    '12:00:00'
    """
    if isinstance(datetime_obj, datetime):
        return datetime_obj.isoformat(timespec="seconds")
    if isinstance(datetime_obj, date):
        return datetime_obj.isoformat()
    if isinstance(datetime_obj, time):
        return datetime_obj.isoformat(timespec="seconds")
    raise TypeError("Expected a datetime, date, or time object.")
