"""Day and time helpers shared by the filters, the clash detector and the scorer."""

import re

DAY_ORDER = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")

DAY_FIELDS = {
    "MON": "monday",
    "TUE": "tuesday",
    "WED": "wednesday",
    "THU": "thursday",
    "FRI": "friday",
    "SAT": "saturday",
    "SUN": "sunday",
}

_TIME_VALUE_RE = re.compile(r"^(\d{1,2}):?(\d{2})$")


def normalize_day(day: str) -> str:
    """Reduce a weekday token such as "Monday" or "mon" to "MON"."""
    if not day:
        return ""
    return day.upper()[:3]


def day_index(day: str) -> int:
    """Weekday index (Mon=0 ... Sun=6), or -1 for an unrecognized token."""
    code = normalize_day(day)
    return DAY_ORDER.index(code) if code in DAY_ORDER else -1


def normalize_time(value: str) -> str:
    """
    Turn a time token into a zero-padded 4-digit string for lexical comparison.

    "9:30" -> "0930", "0930" -> "0930", "" -> "0000".
    """
    if not value:
        return "0000"
    return value.replace(":", "").zfill(4)


def normalize_time_value(value: str) -> str:
    """
    Normalize a user-supplied HH:MM / H:MM / HHMM value to HHMM.

    Values that do not look like a time are returned trimmed but otherwise
    untouched.
    """
    trimmed = value.strip()
    if not trimmed:
        return trimmed
    match = _TIME_VALUE_RE.match(trimmed)
    if not match:
        return trimmed
    return f"{match.group(1).zfill(2)}{match.group(2)}"


def parse_time_to_minutes(value: str) -> int:
    """Minutes since midnight for "9:30" or "0930"; 0 when unparseable."""
    if not value:
        return 0
    trimmed = value.strip()
    if not trimmed:
        return 0

    if ":" in trimmed:
        normalized = trimmed
    else:
        padded = trimmed.zfill(4)
        normalized = f"{padded[:2]}:{padded[2:]}"

    parts = normalized.split(":")
    if len(parts) < 2:
        return 0
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return 0
    return hours * 60 + minutes


def duration_in_hours(start_time: str, end_time: str) -> float:
    """Elapsed hours between two time tokens."""
    return (parse_time_to_minutes(end_time) - parse_time_to_minutes(start_time)) / 60
