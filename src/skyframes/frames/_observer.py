"""Shared machinery for the observer-bound frames (horizontal and hour angle).

Both frames are rotations of the true equinoctial frame of the observing
time through the local apparent sidereal time. The sidereal time used for
the current position is kept in the state so that undoing the rotation
uses exactly the same angle.
"""

from __future__ import annotations

import logging

from jax import Array

from skyframes.coordinates import SphericalPosition
from skyframes.corrections import SiderealTime, sidereal_time
from skyframes.epoch import Epoch
from skyframes.errors import MissingRequiredFieldError, TypeValidationError
from skyframes.frames._common import CommonFrame
from skyframes.frames._inertial import resolve_models
from skyframes.frames._types import ObservingCondition
from skyframes.frames.equinoctial import EquinoctialFrame

logger = logging.getLogger(__name__)


def check_condition(condition) -> ObservingCondition:
    if condition is None:
        raise MissingRequiredFieldError("The param condition is required")
    if not isinstance(condition, ObservingCondition):
        raise TypeValidationError(
            f"The param condition should be an ObservingCondition, got {type(condition).__name__}"
        )
    return condition


class ObserverFrame(CommonFrame):
    """Frame tied to an :class:`ObservingCondition`."""

    @staticmethod
    def local_matrix(sidereal: SiderealTime, condition: ObservingCondition) -> Array:
        """Rotation from true equinoctial axes of date to the frame's axes."""
        raise NotImplementedError

    def _strip_layers(self) -> tuple:
        """Undo observer-dependent corrections, returning what to restore."""
        return ()

    def _restore_layers(self, saved: tuple) -> None:
        pass

    @property
    def condition(self) -> ObservingCondition:
        return self._state.condition

    @property
    def time(self) -> Epoch:
        return self._state.condition.time

    @property
    def sidereal_time(self) -> SiderealTime:
        """Local sidereal time the current position was rotated with."""
        return self._state.sidereal

    @property
    def precession_model(self) -> str:
        return self._state.precession_model

    @property
    def nutation_model(self) -> str:
        return self._state.nutation_model

    def equinoctial_position(self) -> SphericalPosition:
        """Geocentric true equinoctial position of the observing time."""
        frame = self.copy()
        frame._strip_layers()
        state = frame._state
        return state.position.rotate(self.local_matrix(state.sidereal, state.condition).T)

    def retarget_condition(self, condition: ObservingCondition):
        """Move the observer and/or the observing time.

        A change of time passes the position through an equinoctial frame
        carrying every correction, so the body keeps its place on the sky
        of the new instant. A change of site only re-rotates.
        """
        condition = check_condition(condition)
        old = self._state.condition
        if condition == old:
            return self

        saved = self._strip_layers()
        state = self._state
        models = dict(precession_model=state.precession_model, nutation_model=state.nutation_model)
        equatorial = state.position.rotate(self.local_matrix(state.sidereal, old).T)

        if condition.time != old.time:
            logger.debug("Carrying %s from %s to %s", type(self).__name__, old.time, condition.time)
            hub = EquinoctialFrame(equatorial, epoch=old.time, with_nutation=True, on_fk5=True,
                                   with_annual_aberration=True, with_gravitational_deflection=True,
                                   continuous=True, **models)
            equatorial = hub.retarget_epoch(condition.time).position()

        sidereal = sidereal_time(condition.time, condition.longitude, **models)
        self._store(equatorial.rotate(self.local_matrix(sidereal, condition)),
                    condition=condition, sidereal=sidereal)
        self._restore_layers(saved)
        return self

    def retarget_time(self, time: Epoch):
        """Shortcut for :meth:`retarget_condition` with only the time changed."""
        old = self._state.condition
        return self.retarget_condition(
            ObservingCondition(time, old.longitude, old.latitude, old.elevation)
        )

    def _init_state(self, state_type, position, condition, precession_model,
                    nutation_model, continuous, **extra):
        condition = check_condition(condition)
        precession_model, nutation_model = resolve_models(precession_model, nutation_model)
        self._state = state_type(
            position=position,
            condition=condition,
            precession_model=precession_model,
            nutation_model=nutation_model,
            sidereal=sidereal_time(condition.time, condition.longitude,
                                   precession_model, nutation_model),
            continuous=bool(continuous),
            **extra,
        )
