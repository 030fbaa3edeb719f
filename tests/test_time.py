"""Tests for calendar and Julian Date conversions."""

import pytest

from skyframes.constants import JD_B1950
from skyframes.time import (
    besselian_epoch_to_jd,
    caldate_to_jd,
    caldate_to_mjd,
    jd_to_besselian_epoch,
    jd_to_caldate,
    jd_to_julian_epoch,
    jd_to_mjd,
    julian_epoch_to_jd,
    mjd_to_jd,
)


class TestCaldateToJd:
    def test_j2000(self):
        assert float(caldate_to_mjd(2000, 1, 1, 12)) == pytest.approx(51544.5, abs=1e-9)
        assert float(caldate_to_jd(2000, 1, 1, 12)) == pytest.approx(2451545.0, abs=1e-9)

    def test_meeus_7a(self):
        # 1957 October 4.81 (Sputnik 1)
        jd = caldate_to_jd(1957, 10, 4, 19, 26, 24.0)
        assert float(jd) == pytest.approx(2436116.31, abs=1e-8)

    def test_january_uses_previous_year(self):
        assert float(caldate_to_jd(1988, 1, 27)) == pytest.approx(2447187.5, abs=1e-9)

    def test_mjd_jd_offsets(self):
        assert float(jd_to_mjd(2451545.0)) == pytest.approx(51544.5)
        assert float(mjd_to_jd(51544.5)) == pytest.approx(2451545.0)


class TestJdToCaldate:
    def test_j2000(self):
        year, month, day, hour, minute, second = jd_to_caldate(2451545.0)
        assert (int(year), int(month), int(day), int(hour), int(minute)) == (2000, 1, 1, 12, 0)
        assert float(second) == pytest.approx(0.0)

    def test_meeus_7c(self):
        year, month, day, hour, minute, second = jd_to_caldate(2436116.31)
        assert (int(year), int(month), int(day)) == (1957, 10, 4)
        assert (int(hour), int(minute)) == (19, 26)
        assert float(second) == pytest.approx(24.0, abs=1e-3)

    def test_julian_calendar_before_reform(self):
        # Meeus example 7.c, second part: JD 1842713.0 is 333 January 27.5
        year, month, day, hour, _, _ = jd_to_caldate(1842713.0)
        assert (int(year), int(month), int(day), int(hour)) == (333, 1, 27, 12)


class TestEpochYears:
    def test_julian_epoch(self):
        assert float(julian_epoch_to_jd(2000.0)) == pytest.approx(2451545.0)
        assert float(jd_to_julian_epoch(2451545.0 + 365.25)) == pytest.approx(2001.0)

    def test_besselian_epoch(self):
        assert float(besselian_epoch_to_jd(1950.0)) == pytest.approx(JD_B1950, abs=1e-4)
        assert float(jd_to_besselian_epoch(JD_B1950)) == pytest.approx(1950.0, abs=1e-6)
