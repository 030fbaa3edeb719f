"""Tests for SphericalPosition and the elementary rotations."""

import math

import jax.numpy as jnp
import pytest

from skyframes.coordinates import Rx, Ry, Rz, SphericalPosition, flip


class TestRotations:
    def test_rz_decreases_azimuth(self):
        p = SphericalPosition(1.0, math.pi / 2, math.pi / 2)
        rotated = p.rotate(Rz(math.pi / 4))
        assert rotated.phi == pytest.approx(math.pi / 4, abs=1e-12)
        assert rotated.theta == pytest.approx(math.pi / 2, abs=1e-12)

    def test_degrees(self):
        assert jnp.allclose(Rx(90.0, use_degrees=True), Rx(math.pi / 2))

    def test_orthonormal(self):
        m = Rz(0.3) @ Ry(-1.1) @ Rx(2.0)
        assert jnp.allclose(m @ m.T, jnp.eye(3), atol=1e-14)

    def test_flip(self):
        assert jnp.array_equal(flip("y"), jnp.diag(jnp.array([1.0, -1.0, 1.0])))

    def test_flip_unknown_axis(self):
        with pytest.raises(ValueError):
            flip("w")


class TestCartesian:
    def test_from_cartesian_x(self):
        p = SphericalPosition.from_cartesian(jnp.array([1.0, 0.0, 0.0]))
        assert p == pytest.approx((1.0, math.pi / 2, 0.0))

    def test_from_cartesian_south_pole(self):
        p = SphericalPosition.from_cartesian(jnp.array([0.0, 0.0, -2.0]))
        assert p == pytest.approx((2.0, math.pi, 0.0))

    def test_negative_azimuth_wrapped(self):
        p = SphericalPosition.from_cartesian(jnp.array([0.0, -1.0, 0.0]))
        assert p.phi == pytest.approx(1.5 * math.pi)

    def test_round_trip(self):
        p = SphericalPosition(3.0, 0.7, 4.0)
        assert SphericalPosition.from_cartesian(p.to_cartesian()) == pytest.approx(tuple(p), abs=1e-12)

    def test_rotate_keeps_radius(self):
        p = SphericalPosition(5.0, 1.0, 1.0)
        assert p.rotate(Rx(0.4)).r == 5.0


class TestAngles:
    def test_invert_is_involution(self):
        p = SphericalPosition(1.0, 0.4, 1.3)
        for axis in "xyz":
            assert p.invert(axis).invert(axis) == pytest.approx(tuple(p))

    @pytest.mark.parametrize("axis", ["x", "y", "z"])
    def test_invert_matches_flip(self, axis):
        p = SphericalPosition(1.0, 0.4, 1.3)
        expected = p.rotate(flip(axis)).canonical()
        assert p.invert(axis).canonical() == pytest.approx(tuple(expected), abs=1e-12)

    def test_invert_unknown_axis(self):
        with pytest.raises(ValueError):
            SphericalPosition(1.0, 0.4, 1.3).invert("w")

    def test_canonical_negative_theta(self):
        assert SphericalPosition(1.0, -0.1, 0.0).canonical() == pytest.approx((1.0, 0.1, math.pi))

    def test_canonical_wraps(self):
        p = SphericalPosition(1.0, 2 * math.pi + 0.3, 7.0).canonical()
        assert p == pytest.approx((1.0, 0.3, 7.0 - 2 * math.pi))

    def test_antipode(self):
        p = SphericalPosition(2.0, 0.3, 1.0)
        total = p.to_cartesian() + p.antipode().to_cartesian()
        assert jnp.allclose(total, 0.0, atol=1e-14)

    def test_separation(self):
        a = SphericalPosition(1.0, math.pi / 2, 0.0)
        b = SphericalPosition(7.0, math.pi / 2, math.pi / 2)
        assert a.separation(b) == pytest.approx(math.pi / 2)


class TestContinuity:
    def test_unwraps_azimuth(self):
        previous = SphericalPosition(1.0, 0.5, 6.2)
        p = SphericalPosition(1.0, 0.5, 0.1).closest_to(previous)
        assert p.phi == pytest.approx(0.1 + 2 * math.pi)

    def test_follows_over_pole(self):
        previous = SphericalPosition(1.0, 0.01, 1.0)
        # Just past the pole the canonical azimuth jumps by pi
        crossed = SphericalPosition(1.0, 0.01, 1.0 + math.pi)
        p = crossed.closest_to(previous)
        assert p.theta == pytest.approx(-0.01)
        assert p.phi == pytest.approx(1.0)
        assert p.is_mirrored()
        assert p.canonical() == pytest.approx(tuple(crossed))

    def test_same_direction_after_unwrap(self):
        previous = SphericalPosition(1.0, 3.0, -4.0)
        p = SphericalPosition(1.0, 0.2, 2.5)
        unwrapped = p.closest_to(previous)
        assert jnp.allclose(unwrapped.to_cartesian(), p.to_cartesian(), atol=1e-12)
