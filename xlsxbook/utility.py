"""Helpers shared by the workbook parts: paths, dates, sheet names."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

_MS_PER_DAY = 1000 * 60 * 60 * 24.0

_EPOCH_1900 = datetime(1899, 12, 31)
_EPOCH_1904 = datetime(1904, 1, 1)

_INVALID_SHEET_CHARS = re.compile(r"[/\\?*\][:]")
_ESCAPE_NEEDED_CHARS = re.compile(r"[ +\-,%^=<>'&]")

MAX_SHEET_NAME_LENGTH = 31


def parse_xsd_boolean(value: str, default: bool = False) -> bool:
    """Interpret an xsd:boolean attribute value, falling back to *default*."""
    if value in ("1", "true"):
        return True
    if value in ("0", "false"):
        return False
    return default


def split_path(path: str) -> tuple[str, str]:
    """Split *path* at its last '/' into (directory, file name)."""
    directory, sep, name = path.rpartition("/")
    if not sep:
        return ".", path
    return directory, name


def get_rel_file_path(file_path: str) -> str:
    """Return the path of the .rels part that belongs to *file_path*."""
    directory, sep, name = file_path.rpartition("/")
    if not sep:
        return ""
    return f"{directory}/_rels/{name}.rels"


def _epoch(is1904: bool) -> datetime:
    return _EPOCH_1904 if is1904 else _EPOCH_1900


def datetime_to_number(dt: datetime | date, is1904: bool = False) -> float:
    """Convert a date or datetime to an Excel serial number."""
    if not isinstance(dt, datetime):
        dt = datetime(dt.year, dt.month, dt.day)
    in_daylight_time = bool(dt.tzinfo is not None and dt.dst())
    naive = dt.replace(tzinfo=None)

    # Serial 0 is shown by Excel as 1900-01-00, which is 1899-12-31.
    delta = naive - _epoch(is1904)
    excel_time = delta / timedelta(milliseconds=1) / _MS_PER_DAY

    if in_daylight_time:
        excel_time += 1.0 / 24.0

    if not is1904 and excel_time > 59:
        # Excel wrongly treats 1900 as a leap year.
        excel_time += 1
    return excel_time


def time_to_number(t: time) -> float:
    """Convert a time of day to the fraction of a day Excel stores."""
    elapsed = timedelta(
        hours=t.hour, minutes=t.minute, seconds=t.second, microseconds=t.microsecond
    )
    return elapsed / timedelta(milliseconds=1) / _MS_PER_DAY


def datetime_from_number(num: float, is1904: bool = False) -> datetime:
    """Convert an Excel serial number to a naive datetime (millisecond precision)."""
    if not is1904 and num > 60:
        num -= 1
    msecs = int(num * _MS_PER_DAY + 0.5)
    return _epoch(is1904) + timedelta(milliseconds=msecs)


def create_safe_sheet_name(name_proposal: str) -> str:
    """Turn *name_proposal* into a name Excel accepts for a sheet.

    Forbidden characters and leading/trailing apostrophes become spaces and
    the result is cut to 31 characters. An empty proposal gives "".
    """
    if not name_proposal:
        return ""

    name = name_proposal
    if len(name) > 2 and name.startswith("'") and name.endswith("'"):
        name = unescape_sheet_name(name)

    name = _INVALID_SHEET_CHARS.sub(" ", name)
    if name.startswith("'"):
        name = " " + name[1:]
    if name.endswith("'"):
        name = name[:-1] + " "

    return name[:MAX_SHEET_NAME_LENGTH]


def escape_sheet_name(sheet_name: str) -> str:
    """Quote a sheet name for use in formulas when it needs quoting."""
    if sheet_name.startswith("'") or sheet_name.endswith("'"):
        raise ValueError(f"sheet name is already escaped: {sheet_name!r}")

    if not _ESCAPE_NEEDED_CHARS.search(sheet_name):
        return sheet_name

    return "'" + sheet_name.replace("'", "''") + "'"


def unescape_sheet_name(sheet_name: str) -> str:
    """Reverse :func:`escape_sheet_name` for a quoted name."""
    if not (len(sheet_name) > 2 and sheet_name.startswith("'") and sheet_name.endswith("'")):
        raise ValueError(f"sheet name is not escaped: {sheet_name!r}")
    return sheet_name[1:-1].replace("''", "'")


def is_space_reserve_needed(s: str) -> bool:
    """Whether *s* starts or ends with whitespace that XML must preserve."""
    spaces = " \t\n\r"
    return bool(s) and (s[0] in spaces or s[-1] in spaces)