"""Hour-angle frame: local hour angle and declination.

The true equinoctial frame turned about the pole by the local apparent
sidereal time and mirrored so that hour angle grows westward. It depends
on the observer's longitude but not on latitude.
"""

from __future__ import annotations

from skyframes.coordinates import Rz, SphericalPosition, flip
from skyframes.frames._observer import ObserverFrame, check_condition
from skyframes.frames._types import FrameCode, HourAngleState, ObservingCondition


class HourAngleFrame(ObserverFrame):
    """Position in hour angle / declination for an observer.

    Args:
        position: Position in radians; alternative to ``hour_angle``/``dec``.
        hour_angle: Local hour angle, westward [deg, 0..360).
        dec: Declination of date [deg, -90..90]. Default: ``0``
        radius: Distance [AU]. Default: ``1``
        condition: Observing time and place. Required.
        precession_model: Sidereal time and carried-position model.
        nutation_model: Nutation model for the equation of the equinoxes.
        continuous: Unwrap angles to follow the previous position.
    """

    code = FrameCode.HOUR_ANGLE
    _longitude_name = "hour_angle"
    _latitude_name = "dec"

    def __init__(self, position: SphericalPosition | None = None, *,
                 hour_angle: float | None = None, dec: float | None = None,
                 radius: float | None = None,
                 condition: ObservingCondition | None = None,
                 precession_model: str | None = None,
                 nutation_model: str | None = None,
                 continuous: bool = False):
        check_condition(condition)
        position = self._build_position(position, hour_angle, dec, radius)
        self._init_state(HourAngleState, position, condition, precession_model,
                         nutation_model, continuous)

    @staticmethod
    def local_matrix(sidereal, condition):
        return flip("y") @ Rz(sidereal.true_radians)

    @property
    def hour_angle(self) -> float:
        """Hour angle [deg]."""
        return self._longitude()

    @property
    def dec(self) -> float:
        """Declination [deg]."""
        return self._latitude()

    def retarget(self, condition: ObservingCondition | None = None):
        """Move the observer or observing time in place. ``None`` keeps it."""
        if condition is not None:
            self.retarget_condition(condition)
        return self
