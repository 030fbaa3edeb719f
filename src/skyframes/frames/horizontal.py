"""Horizontal frame: azimuth and altitude.

Azimuth is measured from the south towards the west, as in the hour-angle
frame. On top of the geocentric rotation sit two optional layers, diurnal
parallax (topocentric center) and atmospheric refraction, refraction
always outermost.

Example:
    >>> view = HorizontalFrame(azimuth=68.0, altitude=15.0, condition=site)  # doctest: +SKIP
    >>> view.to_observed_view().altitude  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace

from skyframes.constants import DEG2RAD, RAD2DEG
from skyframes.coordinates import Ry, Rz, SphericalPosition, flip
from skyframes.corrections import apparent_altitude, diurnal_parallax, true_altitude
from skyframes.errors import TypeValidationError
from skyframes.frames._observer import ObserverFrame, check_condition
from skyframes.frames._types import (
    CenterMode,
    FrameCode,
    HorizontalState,
    ObservingCondition,
    check_range,
)

logger = logging.getLogger(__name__)

_CENTER_MODES = (CenterMode.GEOCENTRIC, CenterMode.TOPOCENTRIC)


class HorizontalFrame(ObserverFrame):
    """Position in azimuth / altitude for an observer.

    Args:
        position: Position in radians; alternative to ``azimuth``/``altitude``.
        azimuth: From south towards west [deg, 0..360).
        altitude: Above the horizon [deg, -90..90]. Default: ``0``
        zenith: Zenith distance [deg, 0..180]; alternative to ``altitude``.
        radius: Distance [AU]. Default: ``1``
        condition: Observing time and place. Required.
        center_mode: ``"geocentric"`` or ``"topocentric"``, describing the
            supplied position.
        with_refraction: Supplied position is the refracted (apparent) one.
        precession_model: Sidereal time and carried-position model.
        nutation_model: Nutation model for the equation of the equinoxes.
        continuous: Unwrap angles to follow the previous position.
    """

    code = FrameCode.HORIZONTAL
    _longitude_name = "azimuth"
    _latitude_name = "altitude"

    def __init__(self, position: SphericalPosition | None = None, *,
                 azimuth: float | None = None, altitude: float | None = None,
                 zenith: float | None = None, radius: float | None = None,
                 condition: ObservingCondition | None = None,
                 center_mode: CenterMode | str = CenterMode.GEOCENTRIC,
                 with_refraction: bool = False,
                 precession_model: str | None = None,
                 nutation_model: str | None = None,
                 continuous: bool = False):
        check_condition(condition)
        center_mode = CenterMode.parse(center_mode, _CENTER_MODES)
        if zenith is not None:
            if altitude is not None:
                raise TypeValidationError("Pass either altitude or zenith, not both")
            altitude = 90.0 - check_range("zenith", zenith, 0.0, 180.0)
        position = self._build_position(position, azimuth, altitude, radius)
        self._init_state(HorizontalState, position, condition, precession_model,
                         nutation_model, continuous, center_mode=center_mode,
                         with_refraction=bool(with_refraction))

    @staticmethod
    def local_matrix(sidereal, condition):
        return (flip("y")
                @ Ry(math.pi / 2 - condition.latitude * DEG2RAD)
                @ Rz(sidereal.true_radians))

    @property
    def azimuth(self) -> float:
        """Azimuth from south towards west [deg]."""
        return self._longitude()

    @property
    def altitude(self) -> float:
        """Altitude above the horizon [deg]."""
        return self._latitude()

    @property
    def zenith(self) -> float:
        """Zenith distance [deg]."""
        return self.position().theta * RAD2DEG

    @property
    def center_mode(self) -> CenterMode:
        return self._state.center_mode

    @property
    def with_refraction(self) -> bool:
        return self._state.with_refraction

    # -----------------------------------------------------------------------
    # Layers
    # -----------------------------------------------------------------------

    def _strip_layers(self) -> tuple:
        saved = (self._state.center_mode, self._state.with_refraction)
        self.remove_refraction()
        self.to_geocentric()
        return saved

    def _restore_layers(self, saved: tuple) -> None:
        center_mode, with_refraction = saved
        if center_mode is CenterMode.TOPOCENTRIC:
            self.to_topocentric()
        if with_refraction:
            self.apply_refraction()

    def _parallax(self, to_topocentric: bool) -> None:
        refracted = self._state.with_refraction
        self.remove_refraction()
        condition = self._state.condition
        moved = diurnal_parallax(self._state.position, self._state.sidereal.true,
                                 condition.latitude, condition.elevation,
                                 "horizontal", to_topocentric)
        center_mode = CenterMode.TOPOCENTRIC if to_topocentric else CenterMode.GEOCENTRIC
        logger.debug("Moving horizontal origin to %s at %s", center_mode, condition.time)
        self._store(moved, center_mode=center_mode)
        if refracted:
            self.apply_refraction()

    def to_topocentric(self):
        """Move the origin from the Earth's center to the observer."""
        if self._state.center_mode is not CenterMode.TOPOCENTRIC:
            self._parallax(True)
        return self

    def to_geocentric(self):
        """Move the origin from the observer back to the Earth's center."""
        if self._state.center_mode is not CenterMode.GEOCENTRIC:
            self._parallax(False)
        return self

    def _refract(self, altitude_map) -> None:
        altitude = 90.0 - self._state.position.canonical().theta * RAD2DEG
        # Polar angle is the zenith distance, so it moves opposite to altitude
        self._shift(0.0, (altitude - altitude_map(altitude)) * DEG2RAD)

    def apply_refraction(self):
        """Lift the true position to the apparent one.

        No-op for a body that stays below the horizon even when refracted,
        see :data:`~skyframes.corrections.refraction.HORIZON_TRUE_ALTITUDE`.
        """
        if not self._state.with_refraction:
            self._refract(apparent_altitude)
            self._state = replace(self._state, with_refraction=True)
        return self

    def remove_refraction(self):
        """Lower the apparent position to the true one. No-op at or below the horizon."""
        if self._state.with_refraction:
            self._refract(true_altitude)
            self._state = replace(self._state, with_refraction=False)
        return self

    def to_observed_view(self):
        """Topocentric and refracted: what an observer at the site actually sees."""
        return self.to_topocentric().apply_refraction()

    def retarget(self, condition: ObservingCondition | None = None, *,
                 center_mode: CenterMode | str | None = None,
                 with_refraction: bool | None = None):
        """Move the observer, observing time or layers in place. ``None`` keeps a setting."""
        if condition is not None:
            check_condition(condition)
        if center_mode is not None:
            center_mode = CenterMode.parse(center_mode, _CENTER_MODES)

        if condition is not None:
            self.retarget_condition(condition)
        if center_mode is CenterMode.TOPOCENTRIC:
            self.to_topocentric()
        elif center_mode is CenterMode.GEOCENTRIC:
            self.to_geocentric()
        if with_refraction is not None:
            if with_refraction:
                self.apply_refraction()
            else:
                self.remove_refraction()
        return self
