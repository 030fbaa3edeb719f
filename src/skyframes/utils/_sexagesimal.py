"""Sexagesimal angle parsing and formatting.

Hour-angle strings (``"23h09m16.641s"``, ``"17h 48m 59.74s"``,
``"23:09:16.641"``) and degree strings (``"-6°43′11.61″"``,
``"38d55m17s"``, ``"77°03'56\\"W"``) are converted to decimal degrees.
All functions are stateless.
"""

from __future__ import annotations

import re

_NUMBER = r"\d+(?:\.\d*)?"

_HMS_PATTERN = re.compile(
    rf"""^(?P<sign>[+-])?\s*
        (?P<hour>{_NUMBER})\s*(?:h|:)\s*
        (?:(?P<minute>{_NUMBER})\s*(?:m|:)?\s*)?
        (?:(?P<second>{_NUMBER})\s*s?\s*)?$""",
    re.VERBOSE | re.IGNORECASE,
)

_DMS_PATTERN = re.compile(
    rf"""^(?P<sign>[+-])?\s*
        (?P<degree>{_NUMBER})\s*(?:°|d|:)\s*
        (?:(?P<minute>{_NUMBER})\s*(?:′|'|m|:)?\s*)?
        (?:(?P<second>{_NUMBER})\s*(?:″|"|''|s)?\s*)?
        (?P<hemisphere>[NSEW])?$""",
    re.VERBOSE | re.IGNORECASE,
)


def _combine(sign: str | None, whole: str, minute: str | None,
             second: str | None, text: str) -> float:
    minutes = float(minute) if minute else 0.0
    seconds = float(second) if second else 0.0
    if minutes >= 60.0 or seconds >= 60.0:
        raise ValueError(f"Minutes and seconds must be below 60 in {text!r}")
    value = float(whole) + minutes / 60.0 + seconds / 3600.0
    return -value if sign == "-" else value


def parse_hms(text: str) -> float:
    """Parse an hours-minutes-seconds string into degrees.

    Args:
        text (str): e.g. ``"23h09m16.641s"`` or ``"23:09:16.641"``.

    Returns:
        float: Angle in degrees (15 degrees per hour).

    Raises:
        ValueError: If *text* is not a recognizable hour-angle string.
    """
    match = _HMS_PATTERN.match(text.strip())
    if match is None:
        raise ValueError(f"Invalid hour-angle string: {text!r}")
    hours = _combine(match["sign"], match["hour"], match["minute"],
                     match["second"], text)
    return hours * 15.0


def parse_dms(text: str) -> float:
    """Parse a degrees-minutes-seconds string into degrees.

    A trailing ``S`` or ``W`` hemisphere letter negates the value. A plain
    decimal number is accepted as degrees.

    Args:
        text (str): e.g. ``"-6°43′11.61″"``, ``"38d55m17s"`` or ``"77°03′56″W"``.

    Returns:
        float: Angle in degrees.

    Raises:
        ValueError: If *text* is not a recognizable angle string.
    """
    stripped = text.strip()
    try:
        return float(stripped)
    except ValueError:
        pass

    match = _DMS_PATTERN.match(stripped)
    if match is None:
        raise ValueError(f"Invalid degree string: {text!r}")
    value = _combine(match["sign"], match["degree"], match["minute"],
                     match["second"], text)
    hemisphere = match["hemisphere"]
    if hemisphere is not None and hemisphere.upper() in ("S", "W"):
        value = -value
    return value


def _split(value: float, precision: int) -> tuple[str, int, int, float]:
    sign = "-" if value < 0 else ""
    total = round(abs(value) * 3600.0, precision)
    whole = int(total // 3600)
    minute = int((total - whole * 3600) // 60)
    second = round(total - whole * 3600 - minute * 60, precision)
    if second >= 60.0:
        second -= 60.0
        minute += 1
    if minute >= 60:
        minute -= 60
        whole += 1
    return sign, whole, minute, second


def format_hms(degrees: float, precision: int = 3) -> str:
    """Format an angle in degrees as hours, e.g. ``"23h09m16.641s"``."""
    sign, hour, minute, second = _split(degrees / 15.0, precision)
    width = 3 + precision if precision > 0 else 2
    return f"{sign}{hour:02d}h{minute:02d}m{second:0{width}.{precision}f}s"


def format_dms(degrees: float, precision: int = 2) -> str:
    """Format an angle in degrees as ``"±DD°MM′SS.ss″"``."""
    sign, degree, minute, second = _split(degrees, precision)
    width = 3 + precision if precision > 0 else 2
    return f"{sign}{degree}°{minute:02d}′{second:0{width}.{precision}f}″"

