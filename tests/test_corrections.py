"""Tests for the numeric correction providers.

Most reference values come from the worked examples in J. Meeus,
*Astronomical Algorithms (2nd Ed.)*; the example number is given in each
test's docstring.
"""

import math

import jax.numpy as jnp
import pytest

from skyframes.constants import AS2RAD, AU, DEG2RAD, R_EARTH_EQUATOR, RAD2DEG, SCHWARZSCHILD_RADIUS_SUN
from skyframes.coordinates import Rx, SphericalPosition
from skyframes.corrections import (
    HORIZON_TRUE_ALTITUDE,
    annual_aberration,
    apparent_altitude,
    diurnal_parallax,
    earth_heliocentric_position,
    fk5_correction,
    gravitational_deflection,
    nutation,
    nutation_matrix,
    observer_geocentric_terms,
    observer_position,
    precession,
    sidereal_time,
    solar_elements,
    true_altitude,
)
from skyframes.epoch import Epoch
from skyframes.errors import UnknownEnumError

_THETA_PERSEI_DATE = Epoch.from_jd(2462088.69)


class TestPrecession:
    def test_j2000_iau2006(self):
        angles = precession(Epoch.j2000(), "iau2006")
        assert angles.zeta == pytest.approx(2.650545)
        assert angles.z == pytest.approx(-2.650545)
        assert angles.theta == 0.0
        assert angles.epsilon == pytest.approx(84381.406)
        assert angles.epsilon == angles.epsilon0

    def test_j2000_iau1976_is_identity(self):
        angles = precession(Epoch.j2000(), "iau1976")
        assert (angles.zeta, angles.theta, angles.z) == (0.0, 0.0, 0.0)
        assert jnp.allclose(angles.matrix(), jnp.eye(3), atol=1e-15)

    def test_mean_obliquity_iau1976(self):
        """Meeus 22.a: epsilon_0 = 23 26' 27.407" on 1987 April 10."""
        angles = precession(Epoch(1987, 4, 10), "iau1976")
        assert angles.epsilon == pytest.approx(84387.407, abs=1e-3)

    def test_iau2000_rate_correction(self):
        """The IAU 2000 rate correction moves theta by dpsi_pr * sin(eps0)."""
        epoch = Epoch(2100, 1, 1, 12, 0, 0.0)
        t = epoch.julian_centuries()
        corrected = precession(epoch, "iau2000")
        lieske = precession(epoch, "iau1976")
        expected = -0.29965 * t * math.sin(lieske.epsilon0 * AS2RAD)
        assert corrected.theta - lieske.theta == pytest.approx(expected, abs=1e-9)
        assert corrected.epsilon - lieske.epsilon == pytest.approx(-0.02524 * t, abs=1e-9)

    def test_matrix_orthonormal(self):
        m = precession(Epoch(1950, 1, 1)).matrix()
        assert jnp.allclose(m @ m.T, jnp.eye(3), atol=1e-14)

    def test_unknown_model(self):
        with pytest.raises(UnknownEnumError):
            precession(Epoch.j2000(), "iau1900")


class TestNutation:
    def test_iau2000b(self):
        """Meeus 22.a: dpsi = -3.788", deps = +9.443" on 1987 April 10, 0h TD."""
        angles = nutation(Epoch(1987, 4, 10), "iau2000b")
        assert angles.longitude == pytest.approx(-3788.0, abs=10.0)
        assert angles.obliquity == pytest.approx(9443.0, abs=10.0)

    def test_low_precision(self):
        angles = nutation(Epoch(1987, 4, 10), "lp")
        assert angles.longitude == pytest.approx(-3788.0, abs=500.0)
        assert angles.obliquity == pytest.approx(9443.0, abs=500.0)

    def test_unknown_model(self):
        with pytest.raises(UnknownEnumError):
            nutation(Epoch.j2000(), "iau2000a")

    def test_matrix_without_nutation(self):
        assert jnp.allclose(nutation_matrix(0.409, 0.0, 0.0), jnp.eye(3), atol=1e-15)

    def test_matrix_small_rotation(self):
        n = nutation_matrix(0.409, 1e-5, 4e-5)
        assert jnp.allclose(n @ n.T, jnp.eye(3), atol=1e-15)
        assert jnp.allclose(n, jnp.eye(3), atol=1e-4)


class TestSiderealTime:
    def test_mean_midnight(self):
        """Meeus 12.a: GMST 13h10m46.3668s on 1987 April 10, 0h UT."""
        st = sidereal_time(Epoch(1987, 4, 10), 0.0, "iau1976")
        assert st.mean == pytest.approx(47446.3668, abs=1e-3)

    def test_apparent_midnight(self):
        """Meeus 12.a: apparent sidereal time 13h10m46.1351s."""
        st = sidereal_time(Epoch(1987, 4, 10), 0.0, "iau1976")
        assert st.true == pytest.approx(47446.1351, abs=2e-3)

    def test_mean_evening(self):
        """Meeus 12.b: GMST 8h34m57.0896s at 19h21m00s UT."""
        st = sidereal_time(Epoch(1987, 4, 10, 19, 21, 0.0), 0.0, "iau1976")
        assert st.mean == pytest.approx(30897.0896, abs=1e-3)

    def test_models_agree(self):
        epoch = Epoch(2024, 3, 1, 6, 0, 0.0)
        a = sidereal_time(epoch, 0.0, "iau2006").true
        b = sidereal_time(epoch, 0.0, "iau1976").true
        assert a == pytest.approx(b, abs=0.01)

    def test_east_longitude_adds(self):
        epoch = Epoch(1987, 4, 10)
        greenwich = sidereal_time(epoch, 0.0)
        local = sidereal_time(epoch, 15.0)
        assert local.mean - greenwich.mean == pytest.approx(3600.0, abs=1e-6)

    def test_range(self):
        st = sidereal_time(Epoch(2001, 7, 4, 23, 59, 59.0), -179.9)
        assert 0.0 <= st.mean < 86400.0
        assert 0.0 <= st.true < 86400.0

    def test_true_radians(self):
        st = sidereal_time(Epoch(1987, 4, 10))
        assert st.true_radians == pytest.approx(st.true / 86400.0 * 2 * math.pi)


class TestSolarTheory:
    def test_earth_position(self):
        """Meeus 25.a: the Sun at 199.90988 deg, 0.99766 AU on 1992 October 13.0 TD."""
        earth = earth_heliocentric_position(Epoch.from_jd(2448908.5))
        assert earth.phi * RAD2DEG == pytest.approx(19.90988, abs=1e-4)
        assert earth.r == pytest.approx(0.99766, abs=2e-5)
        assert earth.theta == pytest.approx(math.pi / 2)

    def test_elements(self):
        """Meeus 23.a: e = 0.01669649, perihelion at 103.434 deg."""
        sun = solar_elements(_THETA_PERSEI_DATE.julian_centuries())
        assert sun.eccentricity == pytest.approx(0.01669649, abs=1e-8)
        assert sun.perihelion == pytest.approx(103.434, abs=1e-3)
        assert sun.longitude == pytest.approx(231.328, abs=1e-3)


class TestAberration:
    def test_equinoctial(self):
        """Meeus 23.a: theta Persei gets +30.045" in RA and +6.697" in declination."""
        position = SphericalPosition(1.0, (90.0 - 49.3485) * DEG2RAD, 41.5472 * DEG2RAD)
        dphi, dtheta = annual_aberration(position, _THETA_PERSEI_DATE, "equinoctial",
                                         23.436 * DEG2RAD)
        assert dphi / AS2RAD == pytest.approx(30.045, abs=0.02)
        assert -dtheta / AS2RAD == pytest.approx(6.697, abs=0.02)

    def test_ecliptic_towards_sun(self):
        """A body in conjunction with the Sun is displaced by -kappa in longitude."""
        epoch = Epoch(2010, 6, 1)
        sun = solar_elements(epoch.julian_centuries())
        position = SphericalPosition(1.0, math.pi / 2, sun.longitude * DEG2RAD)
        dphi, dtheta = annual_aberration(position, epoch, "ecliptic")
        assert dphi / AS2RAD == pytest.approx(-20.49552, abs=0.4)
        assert dtheta == pytest.approx(0.0, abs=1e-15)

    def test_pole_guard(self):
        dphi, _ = annual_aberration(SphericalPosition(1.0, 0.0, 1.0), Epoch.j2000(), "ecliptic")
        assert dphi == 0.0

    def test_unknown_system(self):
        with pytest.raises(ValueError):
            annual_aberration(SphericalPosition(), Epoch.j2000(), "galactic")


class TestDeflection:
    def test_quadrature(self):
        """At 90 deg from the Sun the deflection equals the Schwarzschild radius over 1 AU."""
        position = SphericalPosition(1.0, math.pi / 2, math.pi / 2)
        dphi, dtheta = gravitational_deflection(position, jnp.array([1.0, 0.0, 0.0]))
        assert dphi == pytest.approx(-SCHWARZSCHILD_RADIUS_SUN, rel=1e-6)
        assert dtheta == pytest.approx(0.0, abs=1e-15)

    def test_away_from_sun(self):
        """Light is bent so the body appears further from the Sun."""
        earth = jnp.array([0.0, -1.0, 0.0])
        # Sun seen from the Earth is at +y, the body 10 deg away from it
        position = SphericalPosition(1.0, math.pi / 2, math.pi / 2 - 10.0 * DEG2RAD)
        dphi, _ = gravitational_deflection(position, earth)
        assert dphi < 0.0

    def test_behind_sun_is_finite(self):
        earth = jnp.array([1.0, 0.0, 0.0])
        dphi, dtheta = gravitational_deflection(SphericalPosition(1.0, math.pi / 2, math.pi), earth)
        assert math.isfinite(dphi) and math.isfinite(dtheta)


class TestFK5:
    def test_ecliptic_at_equinox(self):
        dphi, dtheta = fk5_correction(SphericalPosition(1.0, math.pi / 2, 0.0), Epoch.j2000(), "ecliptic")
        assert dphi / AS2RAD == pytest.approx(-0.09033)
        assert dtheta / AS2RAD == pytest.approx(-0.03916)

    def test_equinoctial_matches_ecliptic_size(self):
        position = SphericalPosition(1.0, math.pi / 2, 0.0)
        dphi, dtheta = fk5_correction(position, Epoch.j2000(), "equinoctial", 84381.406 * AS2RAD)
        moved = position.shift(dphi, dtheta)
        assert position.separation(moved) / AS2RAD == pytest.approx(math.hypot(0.09033, 0.03916), abs=1e-5)

    def test_equinoctial_consistent_with_ecliptic(self):
        eps = 0.409
        equatorial = SphericalPosition(1.0, 1.2, 2.0)
        ecliptic = equatorial.rotate(Rx(eps))
        epoch = Epoch(2030, 1, 1)
        dphi, dtheta = fk5_correction(equatorial, epoch, "equinoctial", eps)
        dlon, dlat = fk5_correction(ecliptic, epoch, "ecliptic")
        a = equatorial.shift(dphi, dtheta).rotate(Rx(eps))
        b = ecliptic.shift(dlon, dlat)
        assert a.separation(b) < 1e-13

    def test_unknown_system(self):
        with pytest.raises(ValueError):
            fk5_correction(SphericalPosition(), Epoch.j2000(), "horizontal")


class TestParallax:
    def test_geocentric_terms(self):
        """Meeus 11.a: Palomar Observatory."""
        latitude = 33.0 + 21.0 / 60.0 + 22.0 / 3600.0
        rho_sin, rho_cos = observer_geocentric_terms(latitude, 1706.0)
        assert rho_sin == pytest.approx(0.546861, abs=1e-6)
        assert rho_cos == pytest.approx(0.836339, abs=1e-6)

    def test_zenith_distance_shrinks(self):
        position = SphericalPosition(0.0025, 0.0, 0.0)
        topocentric = diurnal_parallax(position, 0.0, 0.0, 0.0, "horizontal", True)
        assert topocentric.r == pytest.approx(0.0025 - R_EARTH_EQUATOR / AU, rel=1e-9)
        assert topocentric.theta == pytest.approx(0.0, abs=1e-12)

    def test_involution(self):
        position = SphericalPosition(0.0026, 1.1, 0.4)
        for system in ("horizontal", "hour_angle", "equinoctial"):
            there = diurnal_parallax(position, 30000.0, 45.0, 800.0, system, True)
            back = diurnal_parallax(there, 30000.0, 45.0, 800.0, system, False)
            assert jnp.allclose(back.to_cartesian(), position.to_cartesian(), atol=1e-16)

    def test_horizon_body_drops(self):
        """Seen from the surface, a body near the horizon sits lower."""
        position = SphericalPosition(0.0025, math.pi / 2 - 0.1, 1.0)
        topocentric = diurnal_parallax(position, 0.0, 40.0, 0.0, "horizontal", True)
        assert topocentric.theta > position.theta

    def test_observer_radius(self):
        vector = observer_position(12345.0, 0.0, 0.0, "equinoctial")
        assert float(jnp.linalg.norm(vector)) == pytest.approx(R_EARTH_EQUATOR / AU)

    def test_unknown_system(self):
        with pytest.raises(ValueError):
            observer_position(0.0, 0.0, 0.0, "galactic")


class TestRefraction:
    def test_round_trip(self):
        for h in (0.5, 2.0, 15.0, 45.0, 89.0):
            assert true_altitude(apparent_altitude(h)) == pytest.approx(h, abs=1e-10)

    def test_horizon(self):
        """Meeus 16.a: about 28.75' of refraction at an apparent altitude of 0.5 deg."""
        refraction = (0.5 - true_altitude(0.5)) * 60.0
        assert refraction == pytest.approx(28.754, abs=0.2)

    def test_ten_degrees(self):
        assert (apparent_altitude(10.0) - 10.0) * 60.0 == pytest.approx(5.41, abs=0.02)

    def test_vanishes_at_zenith(self):
        assert apparent_altitude(90.0) == pytest.approx(90.0, abs=1e-6)

    def test_below_horizon_unchanged(self):
        assert apparent_altitude(-1.0) == -1.0
        assert true_altitude(0.0) == 0.0

    def test_horizon_true_altitude(self):
        assert HORIZON_TRUE_ALTITUDE == pytest.approx(-0.574, abs=0.003)
        assert apparent_altitude(HORIZON_TRUE_ALTITUDE + 1e-6) == pytest.approx(0.0, abs=1e-5)

    def test_just_above_horizon(self):
        """A body seen within half a degree of the horizon is truly below it."""
        assert true_altitude(0.3) < 0.0
        for a in (0.05, 0.3, 0.5):
            assert apparent_altitude(true_altitude(a)) == pytest.approx(a, abs=1e-10)
        for h in (-0.5, -0.2, 0.0):
            assert true_altitude(apparent_altitude(h)) == pytest.approx(h, abs=1e-10)
