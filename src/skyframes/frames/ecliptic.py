"""Ecliptic frame: ecliptic longitude and latitude.

Carries the same correction stack as the equinoctial frame and, in
addition, an origin that can be moved between the Earth and the Sun.
Corrections are only ever toggled on the geocentric position; a
heliocentric frame hops to geocentric and back around each change.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from skyframes.constants import AS2RAD
from skyframes.coordinates import Rx, Rz, SphericalPosition
from skyframes.corrections import (
    annual_aberration,
    earth_heliocentric_position,
    fk5_correction,
    nutation,
    precession,
)
from skyframes.epoch import Epoch
from skyframes.frames._inertial import InertialFrame, resolve_models
from skyframes.frames._types import CenterMode, EclipticState, FrameCode, check_epoch

logger = logging.getLogger(__name__)

_CENTER_MODES = (CenterMode.GEOCENTRIC, CenterMode.HELIOCENTRIC)


class EclipticFrame(InertialFrame):
    """Position in ecliptic longitude / latitude.

    Accepts the same arguments as
    :class:`~skyframes.frames.equinoctial.EquinoctialFrame` with
    ``longitude``/``latitude`` in place of ``ra``/``dec``, plus
    ``center_mode`` (``"geocentric"`` or ``"heliocentric"``) describing the
    supplied position.
    """

    code = FrameCode.ECLIPTIC

    def __init__(self, position: SphericalPosition | None = None, *,
                 longitude: float | None = None, latitude: float | None = None,
                 radius: float | None = None, epoch: Epoch | None = None,
                 with_nutation: bool = False, on_fk5: bool = False,
                 with_annual_aberration: bool = False,
                 with_gravitational_deflection: bool = False,
                 center_mode: CenterMode | str = CenterMode.GEOCENTRIC,
                 precession_model: str | None = None,
                 nutation_model: str | None = None,
                 continuous: bool = False):
        epoch = Epoch.j2000() if epoch is None else check_epoch("epoch", epoch)
        precession_model, nutation_model = resolve_models(precession_model, nutation_model)
        center_mode = CenterMode.parse(center_mode, _CENTER_MODES)
        position = self._build_position(position, longitude, latitude, radius)

        self._state = EclipticState(
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
            center_mode=center_mode,
            continuous=bool(continuous),
        )

    @property
    def longitude(self) -> float:
        """Ecliptic longitude [deg]."""
        return self._longitude()

    @property
    def latitude(self) -> float:
        """Ecliptic latitude [deg]."""
        return self._latitude()

    @property
    def center_mode(self) -> CenterMode:
        return self._state.center_mode

    # -----------------------------------------------------------------------
    # Hooks
    # -----------------------------------------------------------------------

    def _precession_matrix(self, angles):
        # Equinoctial precession sandwiched between the two obliquities
        return (Rx(angles.epsilon * AS2RAD) @ angles.matrix()
                @ Rx(-angles.epsilon0 * AS2RAD))

    def _nutation_matrix(self):
        return Rz(-self._nutation_radians()[0])

    def _earth_vector(self):
        return earth_heliocentric_position(self._state.epoch).to_cartesian()

    def _fk5_offsets(self, position):
        return fk5_correction(position, self._state.epoch, "ecliptic")

    def _aberration_offsets(self, position):
        return annual_aberration(position, self._state.epoch, "ecliptic")

    @contextmanager
    def _corrections_context(self):
        heliocentric = self._state.center_mode is CenterMode.HELIOCENTRIC
        if heliocentric:
            self.to_geocentric()
        try:
            yield
        finally:
            if heliocentric:
                self.to_heliocentric()

    # -----------------------------------------------------------------------
    # Center mode
    # -----------------------------------------------------------------------

    def _earth(self) -> SphericalPosition:
        """Heliocentric Earth position in the frame's current axes."""
        earth = earth_heliocentric_position(self._state.epoch)
        if self._state.with_nutation:
            earth = earth.rotate(self._nutation_matrix())
        return earth

    def to_heliocentric(self):
        """Move the origin from the Earth to the Sun."""
        if self._state.center_mode is CenterMode.HELIOCENTRIC:
            return self
        logger.debug("Moving ecliptic origin to the Sun at %s", self._state.epoch)
        moved = self._state.position.translate(self._earth())
        self._store(moved, center_mode=CenterMode.HELIOCENTRIC)
        return self

    def to_geocentric(self):
        """Move the origin from the Sun back to the Earth."""
        if self._state.center_mode is CenterMode.GEOCENTRIC:
            return self
        logger.debug("Moving ecliptic origin to the Earth at %s", self._state.epoch)
        moved = self._state.position.translate(self._earth().antipode())
        self._store(moved, center_mode=CenterMode.GEOCENTRIC)
        return self

    def retarget(self, epoch: Epoch | None = None, *, with_nutation: bool | None = None,
                 on_fk5: bool | None = None, with_annual_aberration: bool | None = None,
                 with_gravitational_deflection: bool | None = None,
                 center_mode: CenterMode | str | None = None,
                 precession_model: str | None = None, nutation_model: str | None = None):
        """Change epoch, models, corrections or origin in place. ``None`` keeps a setting."""
        if center_mode is not None:
            center_mode = CenterMode.parse(center_mode, _CENTER_MODES)
        self._retarget_corrections(epoch, with_nutation, on_fk5, with_annual_aberration,
                                   with_gravitational_deflection, precession_model, nutation_model)
        if center_mode is CenterMode.HELIOCENTRIC:
            self.to_heliocentric()
        elif center_mode is CenterMode.GEOCENTRIC:
            self.to_geocentric()
        return self
