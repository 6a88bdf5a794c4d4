"""
Purchase date and time normalization.

Dates are accepted in a handful of human formats and normalized to ISO
``YYYY-MM-DD``. Times are accepted in 12 or 24-hour form, with or without
seconds, and normalized to ``HH:MM``.
"""
import calendar
import re
from datetime import datetime, time

from receipt_processor.errors import ParseError

MIN_YEAR = 1900
MAX_YEAR = 2100
CANONICAL_TIME_FORMAT = "%H:%M"
MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
_MONTH_NAME = "|".join(MONTH_ABBREVIATIONS)
_MM = r"(?P<month>0[1-9]|1[0-2])"
_DD = r"(?P<day>0[1-9]|[12]\d|3[01])"

# the first pattern that matches decides how the string is read
DATE_PATTERNS = [
    (re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})$", re.ASCII), "YYYY-MM-DD"),
    (re.compile(rf"^{_MM}/{_DD}/(?P<year>\d{{4}})$", re.ASCII), "MM/DD/YYYY"),
    (re.compile(rf"^{_DD}/{_MM}/(?P<year>\d{{4}})$", re.ASCII), "DD/MM/YYYY"),
    (re.compile(rf"^(?P<year>\d{{4}})/{_MM}/{_DD}$", re.ASCII), "YYYY/MM/DD"),
    (re.compile(rf"^(?P<month>{_MONTH_NAME})\s+(?P<day>\d{{1,2}}),\s+(?P<year>\d{{4}})$", re.ASCII), "Mon D, YYYY"),
    (re.compile(rf"^(?P<day>\d{{1,2}})\s+(?P<month>{_MONTH_NAME})\s+(?P<year>\d{{4}})$", re.ASCII), "D Mon YYYY"),
]

TIME_PATTERN = re.compile(
    r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})(:(?P<second>\d{2}))?\s*(?P<meridiem>AM|PM)?$",
    re.IGNORECASE | re.ASCII,
)


def days_in_month(year: int, month: int) -> int:
    """ Number of days in the given month, honouring Gregorian leap years """
    return calendar.monthrange(year, month)[1]


def _month_number(month: str) -> int:
    if month.isdigit():
        return int(month)
    return MONTH_ABBREVIATIONS.index(month) + 1


def normalize_date(value: str) -> str:
    """
    Normalizes a purchase date to ``YYYY-MM-DD``.

    Accepted formats, tried in order: ``YYYY-MM-DD``, ``MM/DD/YYYY``,
    ``DD/MM/YYYY``, ``YYYY/MM/DD``, ``Mon D, YYYY`` and ``D Mon YYYY``.
    Once a format matches, the date must be valid under that format; no
    other format is tried, so ``02/30/2024`` is rejected instead of being
    read the other way round.

    Raises:
        ParseError: if the input is empty, matches no format, or names a
            day that does not exist.
    """
    if value is None or not value.strip():
        raise ParseError(value, "date cannot be empty")
    text = value.strip()

    for pattern, description in DATE_PATTERNS:
        match = pattern.match(text)
        if match is None:
            continue
        year = int(match.group("year"))
        month = _month_number(match.group("month"))
        day = int(match.group("day"))
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise ParseError(value, f"year {year} outside {MIN_YEAR}-{MAX_YEAR} ({description})")
        if not 1 <= month <= 12:
            raise ParseError(value, f"invalid month {month} ({description})")
        if not 1 <= day <= days_in_month(year, month):
            raise ParseError(value, f"invalid day {day} for {year:04d}-{month:02d} ({description})")
        return f"{year:04d}-{month:02d}-{day:02d}"

    raise ParseError(value, "unrecognized date format")


def normalize_time(value: str) -> str:
    """
    Normalizes a purchase time to 24-hour ``HH:MM``.

    Hours may have one or two digits, seconds are optional and an
    ``AM``/``PM`` suffix switches to 12-hour reading. Seconds are checked
    and then dropped.
    """
    if value is None or not value.strip():
        raise ParseError(value, "time cannot be empty")
    match = TIME_PATTERN.match(value.strip())
    if match is None:
        raise ParseError(value, "unrecognized time format")

    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    second = match.group("second")
    meridiem = match.group("meridiem")

    if second is not None and not 0 <= int(second) <= 59:
        raise ParseError(value, f"invalid seconds {second}")
    if not 0 <= minute <= 59:
        raise ParseError(value, f"invalid minutes {minute}")
    if meridiem is None:
        if not 0 <= hour <= 23:
            raise ParseError(value, f"invalid hours {hour}")
    else:
        if not 1 <= hour <= 12:
            raise ParseError(value, f"invalid 12-hour hours {hour}")
        hour = hour % 12
        if meridiem.upper() == "PM":
            hour += 12

    return f"{hour:02d}:{minute:02d}"


def _parse_canonical_time(value: str) -> time:
    try:
        return datetime.strptime(value, CANONICAL_TIME_FORMAT).time()
    except (TypeError, ValueError):
        raise ParseError(value, "time must be HH:MM")


def is_time_in_range(value: str, start: str, end: str) -> bool:
    """
    Checks whether an ``HH:MM`` time falls within ``start``..``end``.

    A range whose end is before its start wraps past midnight and includes
    both boundaries; any other range excludes them.
    """
    current = _parse_canonical_time(value)
    start_time = _parse_canonical_time(start)
    end_time = _parse_canonical_time(end)

    if end_time < start_time:
        return current >= start_time or current <= end_time
    return start_time < current < end_time
