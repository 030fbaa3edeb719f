"""Galactic frame: galactic longitude and latitude.

The galactic plane is defined by the north galactic pole and the galactic
center, both given as mean equinoctial directions of J2000.0. There is no
closed-form galactic precession, so both reference directions are
precessed with :class:`~skyframes.frames.equinoctial.EquinoctialFrame` to
the frame's epoch and the galactic rotation is rebuilt from them. Moving
to another epoch goes through the equinoctial frame as well.
"""

from __future__ import annotations

import logging
import math

from jax import Array

from skyframes.config import check_precession_model, get_default_models, get_galactic_strict_bounds
from skyframes.constants import (
    GALACTIC_CENTER_DEC_J2000,
    GALACTIC_CENTER_RA_J2000,
    GALACTIC_POLE_DEC_J2000,
    GALACTIC_POLE_RA_J2000,
)
from skyframes.coordinates import Rx, Rz, SphericalPosition
from skyframes.epoch import Epoch
from skyframes.frames._common import CommonFrame
from skyframes.frames._types import FrameCode, GalacticState, check_epoch, check_number
from skyframes.frames.equinoctial import EquinoctialFrame

logger = logging.getLogger(__name__)


def reference_directions(epoch: Epoch, precession_model: str) -> tuple[SphericalPosition, SphericalPosition]:
    """Return the north galactic pole and galactic center as mean positions of ``epoch``."""
    pole = EquinoctialFrame(ra=GALACTIC_POLE_RA_J2000, dec=GALACTIC_POLE_DEC_J2000,
                            precession_model=precession_model)
    center = EquinoctialFrame(ra=GALACTIC_CENTER_RA_J2000, dec=GALACTIC_CENTER_DEC_J2000,
                              precession_model=precession_model)
    return (pole.retarget_epoch(epoch).position(),
            center.retarget_epoch(epoch).position())


def node_angle(pole: SphericalPosition, center: SphericalPosition) -> float:
    """Galactic longitude of the ascending node of the galactic plane [rad].

    ``arccos(cos(a) cos(dec_gc))`` with ``a = 90 deg - (ra_gc - ra_ngp)``.
    """
    a = math.pi / 2 - (center.phi - pole.phi)
    dec_center = math.pi / 2 - center.theta
    return math.acos(math.cos(a) * math.cos(dec_center))


def galactic_matrix(pole: SphericalPosition, center: SphericalPosition) -> Array:
    """Rotation from equinoctial axes to galactic axes.

    ``Rz(-theta) @ Rx(90 deg - dec_ngp) @ Rz(ra_ngp + 90 deg)``; the inverse
    is the transpose.
    """
    dec_pole = math.pi / 2 - pole.theta
    return (Rz(-node_angle(pole, center))
            @ Rx(math.pi / 2 - dec_pole)
            @ Rz(pole.phi + math.pi / 2))


class GalacticFrame(CommonFrame):
    """Position in galactic longitude ``l`` / latitude ``b``.

    Args:
        position: Position in radians; alternative to ``l``/``b``.
        l: Galactic longitude [deg].
        b: Galactic latitude [deg]. Default: ``0``
        radius: Distance [AU]. Default: ``1``
        epoch: Equinox the reference directions are precessed to. Default: J2000.0
        precession_model: Default from :func:`~skyframes.config.get_default_models`.
        continuous: Unwrap angles to follow the previous position.
        strict_bounds: Reject ``l`` outside [0, 360) and ``b`` outside
            [-90, 90]. Default from
            :func:`~skyframes.config.get_galactic_strict_bounds`.
    """

    code = FrameCode.GALACTIC
    _longitude_name = "l"
    _latitude_name = "b"

    def __init__(self, position: SphericalPosition | None = None, *,
                 l: float | None = None, b: float | None = None,  # noqa: E741
                 radius: float | None = None, epoch: Epoch | None = None,
                 precession_model: str | None = None, continuous: bool = False,
                 strict_bounds: bool | None = None):
        epoch = Epoch.j2000() if epoch is None else check_epoch("epoch", epoch)
        precession_model = check_precession_model(precession_model or get_default_models()[0])
        self._strict = get_galactic_strict_bounds() if strict_bounds is None else bool(strict_bounds)
        position = self._build_position(position, l, b, radius)
        pole, center = reference_directions(epoch, precession_model)

        self._state = GalacticState(
            position=position,
            epoch=epoch,
            precession_model=precession_model,
            pole=pole,
            center=center,
            continuous=bool(continuous),
        )

    def _check_angles(self, longitude, latitude):
        if self._strict:
            return super()._check_angles(longitude, latitude)
        return check_number(self._longitude_name, longitude), check_number(self._latitude_name, latitude)

    @property
    def l(self) -> float:  # noqa: E743
        """Galactic longitude [deg]."""
        return self._longitude()

    @property
    def b(self) -> float:
        """Galactic latitude [deg]."""
        return self._latitude()

    @property
    def strict_bounds(self) -> bool:
        """Whether angle input is range-checked."""
        return self._strict

    @property
    def epoch(self) -> Epoch:
        return self._state.epoch

    @property
    def precession_model(self) -> str:
        return self._state.precession_model

    def equinoctial_matrix(self) -> Array:
        """Rotation from the mean equinoctial axes of the epoch to galactic axes."""
        return galactic_matrix(self._state.pole, self._state.center)

    def retarget_epoch(self, epoch: Epoch, precession_model: str | None = None):
        """Re-express the position against the reference directions of ``epoch``."""
        epoch = check_epoch("epoch", epoch)
        precession_model = check_precession_model(precession_model or self._state.precession_model)
        state = self._state
        if epoch == state.epoch and precession_model == state.precession_model:
            return self

        hub = EquinoctialFrame(state.position.rotate(self.equinoctial_matrix().T),
                               epoch=state.epoch, precession_model=state.precession_model,
                               continuous=True)
        hub.retarget_epoch(epoch, precession_model=precession_model)

        pole, center = reference_directions(epoch, precession_model)
        logger.debug("Rebuilt galactic reference directions for %s", epoch)
        self._store(hub.position().rotate(galactic_matrix(pole, center)),
                    epoch=epoch, precession_model=precession_model, pole=pole, center=center)
        return self

    def retarget(self, epoch: Epoch | None = None, *, precession_model: str | None = None):
        """Change epoch or precession model in place. ``None`` keeps a setting."""
        if epoch is not None or precession_model is not None:
            self.retarget_epoch(epoch if epoch is not None else self._state.epoch, precession_model)
        return self
