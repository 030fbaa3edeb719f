# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "skyframes"]
#
# [tool.uv.sources]
# skyframes = { path = ".." }
# ///
"""Show where a star or planet stands in the sky of an observer.

Takes a geocentric right ascension / declination, applies the chosen
corrections, and prints the position in every supported frame, ending
with the refracted topocentric azimuth and altitude an observer sees.

Requires skyframes to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/observe.py RA DEC [OPTIONS]

Examples:
    # Venus from Washington, Meeus example 13.b
    uv run examples/observe.py "23h09m16.641s" "-6°43′11.61″" \\
        --time 1987-04-10T19:21:00Z --longitude "77°03′56″W" --latitude "38°55′17″N"

    # Mars from Memphis, mean place only
    uv run examples/observe.py 63.70635 22.22585 --time 2019-04-09T00:00:00Z \\
        --longitude -89.5 --latitude 34.367 --no-corrections
"""

import logging
from typing import Annotated

import jax.numpy as jnp
import typer

from skyframes import (
    Epoch,
    EquinoctialFrame,
    FrameSwitcher,
    ObservingCondition,
    format_dms,
    format_hms,
    parse_dms,
    parse_hms,
    set_dtype,
)

set_dtype(jnp.float64)


def _angle(text: str, parser) -> float:
    try:
        return float(text)
    except ValueError:
        return parser(text)


def main(
    ra: Annotated[str, typer.Argument(help="Right ascension, degrees or '23h09m16.6s'")],
    dec: Annotated[str, typer.Argument(help="Declination, degrees or '-6°43′11.6″'")],
    time: Annotated[str, typer.Option(help="Observing time (UT), e.g. 2000-01-01T12:00:00Z")] = "2000-01-01T12:00:00Z",
    longitude: Annotated[str, typer.Option(help="East longitude, degrees or '77°03′56″W'")] = "0",
    latitude: Annotated[str, typer.Option(help="Latitude, degrees or '38°55′17″N'")] = "0",
    elevation: Annotated[float, typer.Option(help="Site elevation in meters")] = 0.0,
    distance: Annotated[float, typer.Option(help="Geocentric distance in AU")] = 1.0,
    corrections: Annotated[
        bool, typer.Option(help="Apply nutation, aberration and light deflection")
    ] = True,
    verbose: Annotated[bool, typer.Option(help="Log each conversion step")] = False,
) -> None:
    """Print a position in all five frames for one observer."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    epoch = Epoch(time)
    site = ObservingCondition(epoch, _angle(longitude, parse_dms), _angle(latitude, parse_dms), elevation)
    star = EquinoctialFrame(
        ra=_angle(ra, parse_hms),
        dec=_angle(dec, parse_dms),
        radius=distance,
        epoch=epoch,
        with_nutation=corrections,
        with_annual_aberration=corrections,
        with_gravitational_deflection=corrections,
    )

    switcher = FrameSwitcher(star)
    ecliptic = switcher.convert_to("ecc")
    galactic = switcher.convert_to("gc", epoch=Epoch.j2000())
    hour_angle = switcher.convert_to("hac", condition=site)
    horizontal = switcher.convert_to("hc", condition=site)
    observed = horizontal.snapshot(center_mode="topocentric", with_refraction=True)

    print(f"Time:         {epoch}")
    print(f"Sidereal:     {format_hms(horizontal.sidereal_time.true / 240.0)} (apparent)")
    print(f"Equinoctial:  ra {format_hms(star.ra)}  dec {format_dms(star.dec)}")
    print(f"Ecliptic:     lon {ecliptic.longitude:10.6f}  lat {ecliptic.latitude:10.6f}")
    print(f"Galactic:     l   {galactic.l:10.6f}  b   {galactic.b:10.6f}  (J2000.0)")
    print(f"Hour angle:   H   {format_hms(hour_angle.hour_angle)}  dec {format_dms(hour_angle.dec)}")
    print(f"Horizontal:   az  {horizontal.azimuth:10.6f}  alt {horizontal.altitude:10.6f}  (from south)")
    print(f"Observed:     az  {observed.azimuth:10.6f}  alt {observed.altitude:10.6f}")


if __name__ == "__main__":
    typer.run(main)
