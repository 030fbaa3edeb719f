"""Tests for angle helpers and sexagesimal parsing/formatting."""

import math

import pytest

from skyframes.utils import (
    format_dms,
    format_hms,
    from_radians,
    normalize_angle,
    normalize_degrees,
    parse_dms,
    parse_hms,
    to_radians,
)


class TestUnitHelpers:
    def test_to_radians(self):
        assert float(to_radians(180.0, True)) == pytest.approx(math.pi)
        assert float(to_radians(1.0, False)) == 1.0

    def test_from_radians(self):
        assert float(from_radians(math.pi, True)) == pytest.approx(180.0)

    def test_normalize_angle(self):
        assert normalize_angle(-0.5) == pytest.approx(2 * math.pi - 0.5)
        assert normalize_angle(7.0) == pytest.approx(7.0 - 2 * math.pi)
        assert 0.0 <= normalize_angle(-1e-18) < 2 * math.pi

    def test_normalize_degrees(self):
        assert normalize_degrees(-90.0) == 270.0
        assert normalize_degrees(720.0) == 0.0
        assert normalize_degrees(359.5) == 359.5


class TestParseHms:
    def test_letters(self):
        assert parse_hms("23h09m16.641s") == pytest.approx(347.3193375, abs=1e-9)

    def test_spaced(self):
        assert parse_hms("17h 48m 59.74s") == pytest.approx(267.2489167, abs=1e-6)

    def test_colons(self):
        assert parse_hms("23:09:16.641") == pytest.approx(347.3193375, abs=1e-9)

    def test_hours_only(self):
        assert parse_hms("6h") == 90.0

    def test_minutes_out_of_range(self):
        with pytest.raises(ValueError, match="below 60"):
            parse_hms("10h60m00s")

    def test_garbage(self):
        with pytest.raises(ValueError, match="Invalid hour-angle"):
            parse_hms("ten hours")


class TestParseDms:
    def test_unicode_marks(self):
        assert parse_dms("-6°43′11.61″") == pytest.approx(-6.7198917, abs=1e-7)

    def test_letters(self):
        assert parse_dms("38d55m17s") == pytest.approx(38.9213889, abs=1e-7)

    def test_west_hemisphere(self):
        assert parse_dms("77°03′56″W") == pytest.approx(-77.0655556, abs=1e-7)

    def test_north_hemisphere(self):
        assert parse_dms("38°55′17″N") == pytest.approx(38.9213889, abs=1e-7)

    def test_plain_number(self):
        assert parse_dms("-14.5") == -14.5

    def test_seconds_out_of_range(self):
        with pytest.raises(ValueError):
            parse_dms("10°10′75″")

    def test_garbage(self):
        with pytest.raises(ValueError, match="Invalid degree"):
            parse_dms("north")


class TestFormat:
    def test_format_hms(self):
        assert format_hms(347.3193375) == "23h09m16.641s"

    def test_format_dms(self):
        assert format_dms(-6.71989167) == "-6°43′11.61″"

    def test_format_carries_rounding(self):
        assert format_dms(10.999999999) == "11°00′00.00″"

    def test_parse_format_agree(self):
        text = "17h48m59.740s"
        assert format_hms(parse_hms(text)) == text
