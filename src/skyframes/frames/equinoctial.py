"""Equinoctial (equatorial) frame: right ascension and declination.

The hub of the conversion graph. A position is referred to the mean
equator and equinox of its epoch and may carry any combination of the
FK5, deflection, aberration and nutation corrections.

Example:
    >>> from skyframes import Epoch, EquinoctialFrame
    >>> star = EquinoctialFrame(ra=41.054063, dec=49.227750, epoch=Epoch.j2000())
    >>> star.retarget_epoch(Epoch.from_jd(2462088.69)).ra  # doctest: +SKIP
    41.547214
"""

from __future__ import annotations

from skyframes.coordinates import Rx, SphericalPosition
from skyframes.corrections import (
    annual_aberration,
    earth_heliocentric_position,
    fk5_correction,
    nutation,
    nutation_matrix,
    precession,
)
from skyframes.epoch import Epoch
from skyframes.frames._inertial import InertialFrame, resolve_models
from skyframes.frames._types import EquinoctialState, FrameCode, check_epoch


class EquinoctialFrame(InertialFrame):
    """Position in right ascension / declination.

    Args:
        position: Position in radians; alternative to ``ra``/``dec``.
        ra: Right ascension [deg, 0..360).
        dec: Declination [deg, -90..90]. Default: ``0``
        radius: Distance [AU]. Default: ``1``
        epoch: Equinox of date. Default: J2000.0
        with_nutation: Position is referred to the true equinox.
        on_fk5: Position includes the FK5 correction.
        with_annual_aberration: Position includes annual aberration.
        with_gravitational_deflection: Position includes light deflection.
        precession_model: Default from :func:`~skyframes.config.get_default_models`.
        nutation_model: Default from :func:`~skyframes.config.get_default_models`.
        continuous: Unwrap angles to follow the previous position.

    The correction flags describe the supplied position; nothing is applied
    at construction.
    """

    code = FrameCode.EQUINOCTIAL
    _longitude_name = "ra"
    _latitude_name = "dec"

    def __init__(self, position: SphericalPosition | None = None, *,
                 ra: float | None = None, dec: float | None = None,
                 radius: float | None = None, epoch: Epoch | None = None,
                 with_nutation: bool = False, on_fk5: bool = False,
                 with_annual_aberration: bool = False,
                 with_gravitational_deflection: bool = False,
                 precession_model: str | None = None,
                 nutation_model: str | None = None,
                 continuous: bool = False):
        epoch = Epoch.j2000() if epoch is None else check_epoch("epoch", epoch)
        precession_model, nutation_model = resolve_models(precession_model, nutation_model)
        position = self._build_position(position, ra, dec, radius)

        self._state = EquinoctialState(
            position=position,
            epoch=epoch,
            precession_model=precession_model,
            nutation_model=nutation_model,
            precession=precession(epoch, precession_model),
            nutation=nutation(epoch, nutation_model),
            with_nutation=bool(with_nutation),
            on_fk5=bool(on_fk5),
            with_annual_aberration=bool(with_annual_aberration),
            with_gravitational_deflection=bool(with_gravitational_deflection),
            continuous=bool(continuous),
        )

    @property
    def ra(self) -> float:
        """Right ascension [deg]."""
        return self._longitude()

    @property
    def dec(self) -> float:
        """Declination [deg]."""
        return self._latitude()

    def _precession_matrix(self, angles):
        return angles.matrix()

    def _nutation_matrix(self):
        dpsi, deps = self._nutation_radians()
        return nutation_matrix(self._obliquity(), dpsi, deps)

    def _earth_vector(self):
        earth = earth_heliocentric_position(self._state.epoch)
        return earth.rotate(Rx(-self._obliquity())).to_cartesian()

    def _fk5_offsets(self, position):
        return fk5_correction(position, self._state.epoch, "equinoctial", self._obliquity())

    def _aberration_offsets(self, position):
        return annual_aberration(position, self._state.epoch, "equinoctial", self._obliquity())

    def retarget(self, epoch: Epoch | None = None, *, with_nutation: bool | None = None,
                 on_fk5: bool | None = None, with_annual_aberration: bool | None = None,
                 with_gravitational_deflection: bool | None = None,
                 precession_model: str | None = None, nutation_model: str | None = None):
        """Change epoch, models or corrections in place. ``None`` keeps a setting."""
        self._retarget_corrections(epoch, with_nutation, on_fk5, with_annual_aberration,
                                   with_gravitational_deflection, precession_model, nutation_model)
        return self
