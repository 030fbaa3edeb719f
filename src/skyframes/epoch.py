"""The epoch module provides the ``Epoch`` class for representing instants in time.

An Epoch identifies both the instant of an observation and the equinox and
equator a frame is referred to.  Internally it stores an integer Julian Day
number and the seconds elapsed since that day began (Julian days begin at
noon), both as Python numbers in double precision.  The split keeps
sub-millisecond resolution even for Julian Dates in the millions.

No distinction is made between the TT, UT1 and UTC time scales: the same
instant feeds precession/nutation (nominally TT) and sidereal time
(nominally UT1).  The difference is far below the accuracy of the
low-order correction models used here.
"""

from __future__ import annotations

import math
import re

from .config import get_epoch_eq_tolerance
from .constants import JD2000, JD_MJD_OFFSET, DAYS_PER_JULIAN_CENTURY, SECONDS_PER_DAY
from .time import (
    besselian_epoch_to_jd,
    caldate_to_jd,
    jd_to_besselian_epoch,
    jd_to_caldate,
    jd_to_julian_epoch,
    julian_epoch_to_jd,
)

# J2000.0 epoch Julian Day number (the day starting 2000-01-01 12:00)
_JD_J2000 = int(JD2000)

# Valid ISO 8601 epoch string patterns
_EPOCH_PATTERNS = [
    # YYYY-MM-DD
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})$'),
    # YYYY-MM-DDTHH:MM:SSZ
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})Z$'),
    # YYYY-MM-DDTHH:MM:SS.fffZ
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d+)Z$'),
]


class Epoch:
    """Represents a single instant in time.

    The internal representation uses two private components:
        ``_jd`` (int) and ``_seconds`` (float, within [0, 86400)).
    Use ``jd()`` and ``mjd()`` to access the absolute time as Julian Date
    or Modified Julian Date.

    Constructors:
        Epoch(2018, 1, 1)
        Epoch(2018, 1, 1, 12, 0, 0.0)
        Epoch("2018-01-01T12:00:00Z")
        Epoch(other_epoch)
        Epoch.from_jd(2451545.0)
        Epoch.j2000()
        Epoch.besselian(1950.0)
    """

    __slots__ = ('_jd', '_seconds')

    def __init__(self, *args: int | float | str | Epoch) -> None:
        """Initialize Epoch. Supports multiple constructor forms.

        Args:
            *args: Either (year, month, day[, hour, minute, second]),
                a string in ISO 8601 format, or another Epoch instance.
        """
        self._jd = 0
        self._seconds = 0.0

        if len(args) == 1:
            if isinstance(args[0], str):
                self._init_string(args[0])
            elif isinstance(args[0], Epoch):
                self._jd = args[0]._jd
                self._seconds = args[0]._seconds
            else:
                raise ValueError(f"Cannot construct Epoch from {type(args[0])}")
        elif 3 <= len(args) <= 6:
            self._init_date(*args)
        else:
            raise ValueError(
                "Epoch requires date components (3-6 args), a string, or an Epoch"
            )

    @classmethod
    def _from_parts(cls, jd: int, seconds: float) -> Epoch:
        obj = object.__new__(cls)
        obj._jd = jd
        obj._seconds = seconds
        obj._normalize()
        return obj

    @classmethod
    def from_jd(cls, jd: float) -> Epoch:
        """Create an Epoch from a Julian Date.

        Unlike the calendar constructor this accepts any non-negative Julian
        Date, including instants before the Gregorian reform.

        Args:
            jd (float): Julian Date.

        Returns:
            Epoch: New Epoch instance.
        """
        jd = float(jd)
        jd_int = math.floor(jd)
        return cls._from_parts(jd_int, (jd - jd_int) * SECONDS_PER_DAY)

    @classmethod
    def from_mjd(cls, mjd: float) -> Epoch:
        """Create an Epoch from a Modified Julian Date."""
        mjd = float(mjd)
        mjd_int = math.floor(mjd)
        # MJD days start at midnight, JD days at noon
        return cls._from_parts(mjd_int + 2400000, (mjd - mjd_int + 0.5) * SECONDS_PER_DAY)

    @classmethod
    def j2000(cls) -> Epoch:
        """Return the J2000.0 epoch (JD 2451545.0)."""
        return cls._from_parts(_JD_J2000, 0.0)

    @classmethod
    def julian(cls, year: float) -> Epoch:
        """Create an Epoch from a Julian epoch year, e.g. ``2000.0``."""
        return cls.from_jd(float(julian_epoch_to_jd(year)))

    @classmethod
    def besselian(cls, year: float) -> Epoch:
        """Create an Epoch from a Besselian epoch year, e.g. ``1950.0``."""
        return cls.from_jd(float(besselian_epoch_to_jd(year)))

    def _init_date(self, year, month, day, hour=0, minute=0, second=0.0):
        """Initialize from calendar date components.

        Args:
            year (int): Year.
            month (int): Month.
            day (int): Day.
            hour (int): Hour. Default: 0
            minute (int): Minute. Default: 0
            second (float): Second, may include fractional part. Default: 0.0
        """
        # Compute JD for the date only (no time component)
        jd_full = float(caldate_to_jd(year, month, day))

        jd_int = math.floor(jd_full)
        frac_day = jd_full - jd_int

        self._jd = jd_int
        self._seconds = (frac_day * SECONDS_PER_DAY
                         + hour * 3600.0 + minute * 60.0 + second)
        self._normalize()

    def _init_string(self, string):
        """Initialize from an ISO 8601 string.

        Supported formats:
            - ``YYYY-MM-DD``
            - ``YYYY-MM-DDTHH:MM:SSZ``
            - ``YYYY-MM-DDTHH:MM:SS.fffZ``

        Args:
            string (str): ISO 8601 date/time string.
        """
        for pattern in _EPOCH_PATTERNS:
            m = pattern.match(string)
            if m:
                groups = m.groups()
                year = int(groups[0])
                month = int(groups[1])
                day = int(groups[2])

                hour = 0
                minute = 0
                second = 0.0

                if len(groups) >= 6:
                    hour = int(groups[3])
                    minute = int(groups[4])
                    second = float(groups[5])

                if len(groups) == 7:
                    second += float(f"0.{groups[6]}")

                self._init_date(year, month, day, hour, minute, second)
                return

        raise ValueError(
            f'Invalid Epoch string: "{string}" is not ISO 8601 compliant'
        )

    def _normalize(self):
        """Normalize seconds to [0, 86400) by adjusting the Julian day number."""
        day_offset = math.floor(self._seconds / SECONDS_PER_DAY)
        self._seconds -= day_offset * SECONDS_PER_DAY
        self._jd += day_offset

    # Arithmetic operators

    def __add__(self, delta: float) -> Epoch:
        """Return a new Epoch advanced by ``delta`` seconds."""
        return Epoch._from_parts(self._jd, self._seconds + float(delta))

    def __radd__(self, delta: float) -> Epoch:
        return self.__add__(delta)

    def __sub__(self, other: Epoch | float) -> Epoch | float:
        """Subtract seconds or compute difference between Epochs.

        Args:
            other: If Epoch, returns the time difference in seconds.
                If numeric, returns a new Epoch with seconds subtracted.

        Returns:
            float or Epoch: Time difference in seconds, or new Epoch.
        """
        if isinstance(other, Epoch):
            return ((self._jd - other._jd) * SECONDS_PER_DAY
                    + (self._seconds - other._seconds))
        return Epoch._from_parts(self._jd, self._seconds - float(other))

    # Comparison operators

    def __eq__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return abs(self - other) < get_epoch_eq_tolerance()

    def __ne__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return not self.__eq__(other)

    def __lt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return not self.__eq__(other) and (self - other) < 0.0

    def __le__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.__eq__(other) or (self - other) < 0.0

    def __gt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return not self.__eq__(other) and (self - other) > 0.0

    def __ge__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.__eq__(other) or (self - other) > 0.0

    # Time properties

    def caldate(self) -> tuple[int, int, int, int, int, float]:
        """Return the calendar date components.

        Returns:
            tuple: (year, month, day, hour, minute, second) where second
                includes fractional part.
        """
        # JD day starts at noon: the second half of it is the next civil day.
        noon = self._jd + (1.0 if self._seconds >= 43200.0 else 0.0)
        year, month, day, _, _, _ = jd_to_caldate(noon)

        civil_time = (self._seconds + 43200.0) % SECONDS_PER_DAY

        hour = int(civil_time // 3600)
        civil_time -= hour * 3600
        minute = int(civil_time // 60)
        second = civil_time - minute * 60

        return int(year), int(month), int(day), hour, minute, second

    def jd(self) -> float:
        """Return the Julian Date."""
        return self._jd + self._seconds / SECONDS_PER_DAY

    def jd_parts(self) -> tuple[float, float]:
        """Return the instant as a 2-part Julian Date (day number, day fraction)."""
        return float(self._jd), self._seconds / SECONDS_PER_DAY

    def mjd(self) -> float:
        """Return the Modified Julian Date."""
        return (self._jd - JD_MJD_OFFSET) + self._seconds / SECONDS_PER_DAY

    def julian_centuries(self) -> float:
        """Return Julian centuries elapsed since J2000.0.

        Computed from the split representation so the day difference is
        exact before the division.
        """
        days = (self._jd - _JD_J2000) + self._seconds / SECONDS_PER_DAY
        return days / DAYS_PER_JULIAN_CENTURY

    def julian_year(self) -> float:
        """Return the Julian epoch year, e.g. ``2000.0`` at J2000.0."""
        return float(jd_to_julian_epoch(self.jd()))

    def besselian_year(self) -> float:
        """Return the Besselian epoch year, e.g. ``1950.0`` at B1950.0."""
        return float(jd_to_besselian_epoch(self.jd()))

    def is_j2000(self) -> bool:
        """Return True if this epoch is J2000.0 (within equality tolerance)."""
        return self == Epoch.j2000()

    # String representations

    def __str__(self):
        year, month, day, hour, minute, second = self.caldate()
        return (f'{year:04d}-{month:02d}-{day:02d}T'
                f'{hour:02d}:{minute:02d}:{second:06.3f}Z')

    def __repr__(self):
        return f'Epoch(_jd={self._jd}, _seconds={self._seconds})'

    def __hash__(self):
        return hash((self._jd, round(self._seconds, 3)))
