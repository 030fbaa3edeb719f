"""JAX translations of IAU SOFA routines for precession, nutation and Earth rotation.

Covers the pieces the frame conversions need: mean obliquity (IAU 1980 and
IAU 2006), the IAU 2006 and IAU 1976 equatorial precession angles with the
IAU 2000 rate corrections, the IAU 2000B truncated nutation series, the
Earth Rotation Angle and the three Greenwich mean sidereal time models.
Uses routines and computations derived from software provided by SOFA
under license to the user. Does not itself constitute software provided
by and/or endorsed by SOFA.

All functions respect :func:`~skyframes.config.get_dtype` for float precision.
Dates are passed as 2-part Julian Dates so that callers holding a split
representation (see :meth:`skyframes.epoch.Epoch.jd_parts`) keep full
precision.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array

from skyframes._sofa_nutation_data import NUT00B_COEFFS
from skyframes.config import get_dtype

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DJ00: float = 2451545.0
"""Julian Date of J2000.0."""

DJC: float = 36525.0
"""Days per Julian century."""

DAYSEC: float = 86400.0
"""Seconds per day."""

DAS2R: float = 4.848136811095359935899141e-6
"""Arcseconds to radians."""

DMAS2R: float = DAS2R / 1e3
"""Milliarcseconds to radians."""

DS2R: float = 7.272205216643039903848712e-5
"""Seconds of time to radians."""

D2PI: float = 6.283185307179586476925287
"""2*pi."""

TURNAS: float = 1296000.0
"""Arcseconds in a full circle."""

# Units of 0.1 microarcsecond to radians
_U2R: float = DAS2R / 1e7

# Fixed offsets in lieu of planetary terms (IAU 2000B)
_DPPLAN: float = -0.135 * DMAS2R
_DEPLAN: float = 0.388 * DMAS2R


def _centuries(date1, date2) -> Array:
    return jnp.asarray(((date1 - DJ00) + date2) / DJC, dtype=get_dtype())


def anp(a: Array) -> Array:
    """Normalize angle into the range 0 <= a < 2pi."""
    w = jnp.fmod(a, D2PI)
    return jnp.where(w < 0, w + D2PI, w)


# ---------------------------------------------------------------------------
# Mean obliquity
# ---------------------------------------------------------------------------


def obl80(date1: Array, date2: Array) -> Array:
    """Mean obliquity of the ecliptic, IAU 1980 model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Obliquity of the ecliptic in radians.
    """
    t = _centuries(date1, date2)
    return DAS2R * (84381.448 + (-46.8150 + (-0.00059 + 0.001813 * t) * t) * t)


def obl06(date1: Array, date2: Array) -> Array:
    """Mean obliquity of the ecliptic, IAU 2006 precession.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Obliquity of the ecliptic in radians.
    """
    t = _centuries(date1, date2)
    eps0 = 84381.406 + t * (
        -46.836769 + t * (-0.0001831 + t * (0.00200340 + t * (-0.000000576 + t * (-0.0000000434))))
    )
    return eps0 * DAS2R


# ---------------------------------------------------------------------------
# Equatorial precession angles
# ---------------------------------------------------------------------------


def prec76(date1: Array, date2: Array) -> tuple[Array, Array, Array]:
    """Equatorial precession angles from J2000.0, IAU 1976 (Lieske) model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (zeta, z, theta) in radians.
    """
    t = _centuries(date1, date2)
    w = 2306.2181
    zeta = (w + (0.30188 + 0.017998 * t) * t) * t * DAS2R
    z = (w + (1.09468 + 0.018203 * t) * t) * t * DAS2R
    theta = (2004.3109 + (-0.42665 - 0.041833 * t) * t) * t * DAS2R
    return zeta, z, theta


def pr00(date1: Array, date2: Array) -> tuple[Array, Array]:
    """Precession-rate part of the IAU 2000 precession-nutation models.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (dpsipr, depspr) corrections to the IAU 1976 precession
        in longitude and obliquity [radians].
    """
    t = _centuries(date1, date2)
    return -0.29965 * DAS2R * t, -0.02524 * DAS2R * t


def p06e(date1: Array, date2: Array) -> tuple[Array, Array, Array]:
    """Equatorial precession angles from J2000.0, IAU 2006 (Capitaine P03) model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (zeta, z, theta) in radians.
    """
    t = _centuries(date1, date2)

    zeta = (
        2.650545
        + t * (2306.083227 + t * (0.2988499 + t * (0.01801828 + t * (-0.000005971 + t * (-0.0000003173)))))
    ) * DAS2R

    z = (
        -2.650545
        + t * (2306.077181 + t * (1.0927348 + t * (0.01826837 + t * (-0.000028596 + t * (-0.0000002904)))))
    ) * DAS2R

    theta = (
        t * (2004.191903 + t * (-0.4294934 + t * (-0.04182264 + t * (-0.000007089 + t * (-0.0000001274)))))
    ) * DAS2R

    return zeta, z, theta


# ---------------------------------------------------------------------------
# Nutation IAU 2000B
# ---------------------------------------------------------------------------


def nut00b(date1: Array, date2: Array) -> tuple[Array, Array]:
    """Nutation, IAU 2000B model (77 luni-solar terms, fixed planetary offsets).

    Vectorized implementation: all 77 arguments are formed with a single
    matmul over the Delaunay arguments.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (dpsi, deps) nutation in longitude and obliquity [radians].
    """
    dtype = get_dtype()
    t = _centuries(date1, date2)

    # Simplified Delaunay arguments (Simon et al. 1994)
    el = jnp.fmod(485868.249036 + 1717915923.2178 * t, TURNAS) * DAS2R
    elp = jnp.fmod(1287104.79305 + 129596581.0481 * t, TURNAS) * DAS2R
    f = jnp.fmod(335779.526232 + 1739527262.8478 * t, TURNAS) * DAS2R
    d = jnp.fmod(1072260.70369 + 1602961601.2090 * t, TURNAS) * DAS2R
    om = jnp.fmod(450160.398036 - 6962890.5431 * t, TURNAS) * DAS2R
    delaunay = jnp.array([el, elp, f, d, om], dtype=dtype)

    ls = jnp.array(NUT00B_COEFFS, dtype=dtype)
    ls_nfa = ls[:, :5]  # (77, 5) integer multipliers
    ls_ps = ls[:, 5]  # sine coefficient for longitude
    ls_pst = ls[:, 6]  # time-dependent sine coefficient
    ls_pc = ls[:, 7]  # cosine coefficient for longitude
    ls_ec = ls[:, 8]  # cosine coefficient for obliquity
    ls_ect = ls[:, 9]  # time-dependent cosine coefficient
    ls_es = ls[:, 10]  # sine coefficient for obliquity

    args = jnp.fmod(ls_nfa @ delaunay, D2PI)
    sarg = jnp.sin(args)
    carg = jnp.cos(args)

    dp = jnp.sum((ls_ps + ls_pst * t) * sarg + ls_pc * carg)
    de = jnp.sum((ls_ec + ls_ect * t) * carg + ls_es * sarg)

    return dp * _U2R + _DPPLAN, de * _U2R + _DEPLAN


# ---------------------------------------------------------------------------
# Earth Rotation Angle
# ---------------------------------------------------------------------------


def era00(dj1: Array, dj2: Array) -> Array:
    """Earth Rotation Angle (IAU 2000 model).

    Args:
        dj1: UT1 as 2-part Julian Date (part 1).
        dj2: UT1 as 2-part Julian Date (part 2).

    Returns:
        Earth Rotation Angle in radians (0 to 2*pi).
    """
    # Days since J2000.0
    t = dj1 + dj2 - DJ00

    # Fractional part of dj1 + dj2
    f = jnp.fmod(dj1, 1.0) + jnp.fmod(dj2, 1.0)

    return anp(D2PI * (f + 0.7790572732640 + 0.00273781191135448 * t))


# ---------------------------------------------------------------------------
# Greenwich mean sidereal time
# ---------------------------------------------------------------------------


def gmst82(dj1: Array, dj2: Array) -> Array:
    """Greenwich mean sidereal time, IAU 1982 model.

    Args:
        dj1: UT1 as 2-part Julian Date (part 1).
        dj2: UT1 as 2-part Julian Date (part 2).

    Returns:
        Greenwich mean sidereal time in radians (0 to 2*pi).
    """
    # Coefficients of IAU 1982 GMST-UT1 model, seconds of time
    a = 24110.54841 - DAYSEC / 2.0
    b = 8640184.812866
    c = 0.093104
    d = -6.2e-6

    t = _centuries(dj1, dj2)
    f = DAYSEC * (jnp.fmod(dj1, 1.0) + jnp.fmod(dj2, 1.0))

    return anp(DS2R * ((a + (b + (c + d * t) * t) * t) + f))


def gmst00(uta: Array, utb: Array, tta: Array, ttb: Array) -> Array:
    """Greenwich mean sidereal time, consistent with IAU 2000 resolutions.

    Args:
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).

    Returns:
        Greenwich mean sidereal time in radians (0 to 2*pi).
    """
    t = _centuries(tta, ttb)
    return anp(
        era00(uta, utb)
        + (0.014506 + (4612.15739966 + (1.39667721 + (-0.00009344 + 0.00001882 * t) * t) * t) * t) * DAS2R
    )


def gmst06(uta: Array, utb: Array, tta: Array, ttb: Array) -> Array:
    """Greenwich mean sidereal time, consistent with IAU 2006 precession.

    Args:
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).

    Returns:
        Greenwich mean sidereal time in radians (0 to 2*pi).
    """
    t = _centuries(tta, ttb)
    return anp(
        era00(uta, utb)
        + (
            0.014506
            + (4612.156534 + (1.3915817 + (-0.00000044 + (-0.000029956 + (-0.0000000368) * t) * t) * t) * t) * t
        )
        * DAS2R
    )
