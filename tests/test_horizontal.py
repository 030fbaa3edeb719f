"""Tests for HorizontalFrame and ObservingCondition."""

import dataclasses

import pytest

from skyframes import (
    CenterMode,
    Epoch,
    EquinoctialFrame,
    HorizontalFrame,
    MissingRequiredFieldError,
    ObservingCondition,
    RangeValidationError,
    TypeValidationError,
    UnknownEnumError,
    parse_dms,
    parse_hms,
)

# Meeus 13.b: Venus seen from the US Naval Observatory
_WASHINGTON = ObservingCondition(Epoch(1987, 4, 10, 19, 21, 0.0),
                                 parse_dms("77°03′56″W"), parse_dms("38°55′17″N"))


def _venus():
    return EquinoctialFrame(ra=parse_hms("23h09m16.641s"), dec=parse_dms("-6°43′11.61″"),
                            epoch=_WASHINGTON.time, with_nutation=True, on_fk5=True,
                            with_annual_aberration=True, with_gravitational_deflection=True)


def _view(**kwargs):
    options = dict(azimuth=120.0, altitude=30.0, radius=0.00257, condition=_WASHINGTON)
    options.update(kwargs)
    return HorizontalFrame(**options)


class TestObservingCondition:
    def test_fields(self):
        assert _WASHINGTON.longitude == pytest.approx(-77.0655556, abs=1e-7)
        assert _WASHINGTON.latitude == pytest.approx(38.9213889, abs=1e-7)
        assert _WASHINGTON.elevation == 0.0

    @pytest.mark.parametrize("kwargs", [
        dict(longitude=180.5),
        dict(longitude=0.0, latitude=-90.1),
        dict(longitude=0.0, elevation=-13000.0),
        dict(longitude=0.0, elevation=4e7),
    ])
    def test_ranges(self, kwargs):
        with pytest.raises(RangeValidationError):
            ObservingCondition(Epoch.j2000(), **kwargs)

    def test_time_type(self):
        with pytest.raises(TypeValidationError):
            ObservingCondition(2451545.0, 0.0)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            _WASHINGTON.latitude = 0.0


class TestMeeus13b:
    def test_venus(self):
        view = _venus().to_horizontal(condition=_WASHINGTON)
        assert isinstance(view, HorizontalFrame)
        assert view.azimuth == pytest.approx(68.0337, abs=1e-4)
        assert view.altitude == pytest.approx(15.1249, abs=1e-4)
        assert view.zenith == pytest.approx(90.0 - view.altitude)

    def test_venus_backwards(self):
        venus = HorizontalFrame(azimuth=68.0337, altitude=15.1249,
                                condition=_WASHINGTON).to_equinoctial()
        assert venus.ra == pytest.approx(347.3193, abs=3e-4)
        assert venus.dec == pytest.approx(-6.7199, abs=3e-4)
        assert venus.epoch == _WASHINGTON.time
        assert venus.with_nutation and venus.with_annual_aberration


class TestConstruction:
    def test_zenith_argument(self):
        assert _view(altitude=None, zenith=30.0).altitude == pytest.approx(60.0)

    def test_zenith_range(self):
        with pytest.raises(RangeValidationError):
            _view(altitude=None, zenith=181.0)

    def test_zenith_with_altitude(self):
        with pytest.raises(TypeValidationError):
            _view(altitude=30.0, zenith=60.0)

    def test_altitude_range(self):
        with pytest.raises(RangeValidationError):
            _view(altitude=90.5)

    def test_condition_required(self):
        with pytest.raises(MissingRequiredFieldError):
            HorizontalFrame(azimuth=10.0)

    def test_condition_type(self):
        with pytest.raises(TypeValidationError):
            HorizontalFrame(azimuth=10.0, condition=Epoch.j2000())

    def test_center_mode(self):
        assert _view().center_mode is CenterMode.GEOCENTRIC
        with pytest.raises(UnknownEnumError):
            _view(center_mode="heliocentric")

    def test_sidereal_time_kept(self):
        view = _view()
        assert 0.0 <= view.sidereal_time.true < 86400.0
        assert view.time == _WASHINGTON.time


class TestParallax:
    def test_involution(self):
        view = _view()
        start = view.position()
        view.to_topocentric()
        assert view.center_mode is CenterMode.TOPOCENTRIC
        view.to_geocentric()
        assert view.position().separation(start) < 1e-12
        assert view.radius == pytest.approx(0.00257, rel=1e-12)

    def test_moon_sits_lower(self):
        view = _view()
        view.to_topocentric()
        assert view.altitude < 30.0 - 0.5
        assert view.radius < 0.00257

    def test_repeat_is_noop(self):
        view = _view().to_topocentric()
        before = view.state
        view.to_topocentric()
        assert view.state is before


class TestRefraction:
    def test_involution(self):
        view = _view()
        start = view.position()
        view.apply_refraction()
        assert view.with_refraction
        view.remove_refraction()
        assert view.position().separation(start) < 1e-12
        assert not view.with_refraction

    def test_lifts_body(self):
        view = _view(altitude=10.0).apply_refraction()
        assert (view.altitude - 10.0) * 60.0 == pytest.approx(5.41, abs=0.02)
        assert view.azimuth == pytest.approx(120.0)

    def test_below_horizon(self):
        view = _view(altitude=-5.0)
        view.apply_refraction()
        assert view.with_refraction
        assert view.altitude == pytest.approx(-5.0)
        view.remove_refraction()
        assert view.altitude == pytest.approx(-5.0)

    def test_seen_just_above_horizon(self):
        view = _view(altitude=0.3, with_refraction=True)
        start = view.position()
        view.remove_refraction()
        assert view.altitude < 0.0
        view.apply_refraction()
        assert view.position().separation(start) < 1e-12

    def test_lifted_above_horizon(self):
        """Refraction raises a body 0.3 deg below the horizon into view."""
        view = _view(altitude=-0.3).apply_refraction()
        assert view.altitude > 0.0
        view.remove_refraction()
        assert view.altitude == pytest.approx(-0.3, abs=1e-10)

    def test_parallax_under_refraction(self):
        view = _view().apply_refraction()
        start = view.position()
        view.to_topocentric().to_geocentric()
        assert view.with_refraction
        assert view.position().separation(start) < 1e-12

    def test_observed_view(self):
        view = _view().to_observed_view()
        assert view.center_mode is CenterMode.TOPOCENTRIC
        assert view.with_refraction

    def test_retarget_layers(self):
        view = _view().retarget(center_mode="topocentric", with_refraction=True)
        assert view.center_mode is CenterMode.TOPOCENTRIC and view.with_refraction
        view.retarget(center_mode="geocentric", with_refraction=False)
        assert view.center_mode is CenterMode.GEOCENTRIC and not view.with_refraction


class TestRetarget:
    def test_new_site(self):
        view = _view()
        start = view.position()
        elsewhere = ObservingCondition(_WASHINGTON.time, 2.35, 48.85, 35.0)
        view.retarget(elsewhere)
        assert view.condition == elsewhere
        assert view.position().separation(start) > 0.1
        view.retarget(_WASHINGTON)
        assert view.position().separation(start) < 1e-12

    def test_new_time(self):
        view = _view()
        start = view.position()
        view.retarget_time(Epoch(1987, 4, 10, 21, 21, 0.0))
        assert view.time == Epoch(1987, 4, 10, 21, 21, 0.0)
        # Two hours of diurnal motion
        assert view.position().separation(start) > 0.1
        view.retarget_time(_WASHINGTON.time)
        assert view.position().separation(start) < 1e-7

    def test_layers_restored(self):
        view = _view().to_observed_view()
        view.retarget_time(Epoch(1987, 4, 11))
        assert view.center_mode is CenterMode.TOPOCENTRIC
        assert view.with_refraction

    def test_same_condition_is_noop(self):
        view = _view()
        before = view.state
        view.retarget(ObservingCondition(_WASHINGTON.time, _WASHINGTON.longitude, _WASHINGTON.latitude))
        assert view.state is before

    def test_matches_fresh_conversion(self):
        """Moving in time agrees with converting the star afresh."""
        later = ObservingCondition(Epoch(1987, 4, 10, 23, 0, 0.0), _WASHINGTON.longitude,
                                   _WASHINGTON.latitude)
        moved = _venus().to_horizontal(condition=_WASHINGTON).retarget(later)
        fresh = _venus().to_horizontal(condition=later)
        assert moved.position().separation(fresh.position()) < 1e-7
