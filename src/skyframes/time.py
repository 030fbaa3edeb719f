"""Calendar and Julian Date conversions.

Conversions between calendar dates, Julian Dates (JD), Modified Julian
Dates (MJD) and Julian/Besselian epochs.  All functions accept scalars or
arrays and return ``jax.Array`` values in the configured float dtype.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import (
    BESSELIAN_YEAR,
    JD2000,
    JD_B1900,
    JD_MJD_OFFSET,
    JULIAN_YEAR,
)


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date to Modified Julian Date.

    Algorithm is only valid from year 1583 onward. Older instants should be
    constructed from a Julian Date directly.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Modified Julian Date.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """
    dtype = get_dtype()
    year = jnp.asarray(year, dtype=dtype)
    month = jnp.asarray(month, dtype=dtype)

    is_jan_or_feb = month <= 2
    year = jnp.where(is_jan_or_feb, year - 1, year)
    month = jnp.where(is_jan_or_feb, month + 12, month)

    B = jnp.floor(year / 400) - jnp.floor(year / 100) + jnp.floor(year / 4)

    mjd = 365 * year - 679004 + B + jnp.floor(30.6001 * (month + 1)) + day

    frac_day = (hour + (minute + second / 60.0) / 60.0) / 24.0

    return jnp.floor(mjd) + frac_day


def caldate_to_jd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date to Julian Date.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Julian Date.
    """
    return caldate_to_mjd(year, month, day, hour, minute, second) + JD_MJD_OFFSET


def jd_to_mjd(jd: ArrayLike) -> jax.Array:
    """Convert Julian Date to Modified Julian Date."""
    return jnp.asarray(jd, dtype=get_dtype()) - JD_MJD_OFFSET


def mjd_to_jd(mjd: ArrayLike) -> jax.Array:
    """Convert Modified Julian Date to Julian Date."""
    return jnp.asarray(mjd, dtype=get_dtype()) + JD_MJD_OFFSET


def jd_to_caldate(
    jd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Convert Julian Date to calendar date.

    Dates before JD 2299161 (1582-10-15) are returned in the Julian
    calendar, later ones in the Gregorian calendar. Negative years use
    astronomical numbering (year 0 = 1 BC).

    Args:
        jd (ArrayLike): Julian Date (non-negative).

    Returns:
        tuple[jax.Array, ...]: (year, month, day, hour, minute, second).

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 7.
    """
    jd_shifted = jnp.asarray(jd, dtype=get_dtype()) + 0.5
    z = jnp.floor(jd_shifted)
    f = jd_shifted - z

    alpha = jnp.floor((z - 1867216.25) / 36524.25)
    a = jnp.where(z < 2299161, z, z + 1 + alpha - jnp.floor(alpha / 4))

    b = a + 1524
    c = jnp.floor((b - 122.1) / 365.25)
    d = jnp.floor(365.25 * c)
    e = jnp.floor((b - d) / 30.6001)

    day_with_frac = b - d - jnp.floor(30.6001 * e) + f
    day = jnp.floor(day_with_frac)

    month = jnp.where(e < 14, e - 1, e - 13)
    year = jnp.where(month > 2, c - 4716, c - 4715)

    # Decompose fractional day via integer milliseconds to avoid
    # truncation artifacts from floating-point precision limits
    total_ms = jnp.round((day_with_frac - day) * 86400000.0)
    hour = jnp.floor(total_ms / 3600000)
    total_ms = total_ms - hour * 3600000
    minute = jnp.floor(total_ms / 60000)
    total_ms = total_ms - minute * 60000
    second = total_ms / 1000.0

    return (year.astype(int), month.astype(int), day.astype(int),
            hour.astype(int), minute.astype(int), second)


def julian_epoch_to_jd(year: ArrayLike) -> jax.Array:
    """Convert a Julian epoch (e.g. ``2000.0`` for J2000.0) to Julian Date."""
    return JD2000 + (jnp.asarray(year, dtype=get_dtype()) - 2000.0) * JULIAN_YEAR


def jd_to_julian_epoch(jd: ArrayLike) -> jax.Array:
    """Convert a Julian Date to a Julian epoch year."""
    return 2000.0 + (jnp.asarray(jd, dtype=get_dtype()) - JD2000) / JULIAN_YEAR


def besselian_epoch_to_jd(year: ArrayLike) -> jax.Array:
    """Convert a Besselian epoch (e.g. ``1950.0`` for B1950.0) to Julian Date.

    References:

        1. J. H. Lieske, "Precession matrix based on IAU (1976) system of
           astronomical constants", *Astron. Astrophys.* 73, 1979.
    """
    return JD_B1900 + (jnp.asarray(year, dtype=get_dtype()) - 1900.0) * BESSELIAN_YEAR


def jd_to_besselian_epoch(jd: ArrayLike) -> jax.Array:
    """Convert a Julian Date to a Besselian epoch year."""
    return 1900.0 + (jnp.asarray(jd, dtype=get_dtype()) - JD_B1900) / BESSELIAN_YEAR
