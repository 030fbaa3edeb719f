"""Behaviour shared by every frame kind.

A frame wraps one frozen state record (see :mod:`skyframes.frames._types`)
and replaces it on each mutation. Mutating verbs return ``self`` so they
chain; :meth:`CommonFrame.snapshot` is the non-mutating counterpart that
works on a copy.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import replace
from typing import ClassVar

from skyframes.constants import DEG2RAD, RAD2DEG, RADIUS_FLOOR
from skyframes.coordinates import SphericalPosition
from skyframes.errors import (
    MissingRequiredFieldError,
    RangeValidationError,
    TypeValidationError,
)
from skyframes.frames._types import FrameCode, check_number, check_range

logger = logging.getLogger(__name__)


class CommonFrame:
    """Base class for the five frame kinds.

    Subclasses set :attr:`code`, the names of their two angular
    coordinates and implement :meth:`retarget`.
    """

    code: ClassVar[FrameCode]
    _longitude_name: ClassVar[str] = "longitude"
    _latitude_name: ClassVar[str] = "latitude"
    _offset_fields: ClassVar[tuple[str, ...]] = ()

    # -----------------------------------------------------------------------
    # Position
    # -----------------------------------------------------------------------

    def _check_angles(self, longitude: float, latitude: float) -> tuple[float, float]:
        longitude = check_range(self._longitude_name, longitude, 0.0, 360.0, include_high=False)
        latitude = check_range(self._latitude_name, latitude, -90.0, 90.0)
        return longitude, latitude

    def _build_position(self, position, longitude, latitude, radius,
                        current: SphericalPosition | None = None) -> SphericalPosition:
        """Validate caller input and turn it into a :class:`SphericalPosition`.

        Omitted scalars fall back to ``current`` when one is given, else to
        latitude 0 and radius 1.
        """
        if position is not None:
            if not isinstance(position, SphericalPosition):
                raise TypeValidationError(
                    f"The param position should be a SphericalPosition, got {type(position).__name__}"
                )
            for name in ("r", "theta", "phi"):
                check_number(f"position.{name}", getattr(position, name))
            if position.r < RADIUS_FLOOR:
                raise RangeValidationError(f"The param radius should be >= {RADIUS_FLOOR}, got {position.r}")
            return SphericalPosition(float(position.r), float(position.theta), float(position.phi))

        if current is None and longitude is None:
            raise MissingRequiredFieldError(f"The param {self._longitude_name} or position is required")
        if current is not None and longitude is None and latitude is None and radius is None:
            raise MissingRequiredFieldError(
                f"Supply a position or at least one of {self._longitude_name}, {self._latitude_name}, radius"
            )

        if current is not None:
            canonical = current.canonical()
            if longitude is None:
                longitude = canonical.phi * RAD2DEG
            if latitude is None:
                latitude = 90.0 - canonical.theta * RAD2DEG
            if radius is None:
                radius = canonical.r

        latitude = 0.0 if latitude is None else latitude
        radius = 1.0 if radius is None else check_number("radius", radius)
        if radius < RADIUS_FLOOR:
            raise RangeValidationError(f"The param radius should be >= {RADIUS_FLOOR}, got {radius}")

        longitude, latitude = self._check_angles(longitude, latitude)
        return SphericalPosition(radius, (90.0 - latitude) * DEG2RAD, longitude * DEG2RAD)

    def _store(self, position: SphericalPosition, **changes) -> None:
        """Replace the stored position, keeping it continuous if requested."""
        if self._state.continuous:
            position = position.closest_to(self._state.position)
        self._state = replace(self._state, position=position, **changes)

    def _shift(self, dphi: float, dtheta: float) -> None:
        """Add offsets computed on the canonical angles to the stored position."""
        position = self._state.position
        if position.is_mirrored():
            dtheta = -dtheta
        self._state = replace(self._state, position=position.shift(dphi, dtheta))

    def position(self) -> SphericalPosition:
        """Return the current position.

        Angles are canonical unless the frame is continuous, in which case
        the unwrapped representation is returned as stored.
        """
        position = self._state.position
        return position if self._state.continuous else position.canonical()

    def set_position(self, position: SphericalPosition | None = None, *,
                     longitude: float | None = None, latitude: float | None = None,
                     radius: float | None = None):
        """Replace the position, keeping every other setting.

        Omitted scalar components keep their current value. Offsets
        recorded for applied corrections are dropped; a later removal
        re-derives them from the new position.
        """
        new = self._build_position(position, longitude, latitude, radius, current=self._state.position)
        cleared = {name: None for name in self._offset_fields}
        self._state = replace(self._state, position=new, **cleared)
        return self

    def _longitude(self) -> float:
        return self.position().phi * RAD2DEG

    def _latitude(self) -> float:
        return 90.0 - self.position().theta * RAD2DEG

    @property
    def radius(self) -> float:
        """Distance [AU]."""
        return self._state.position.r

    @property
    def continuous(self) -> bool:
        """Whether angles are unwrapped to follow the previous position."""
        return self._state.continuous

    @continuous.setter
    def continuous(self, flag: bool) -> None:
        position = self._state.position
        if not flag:
            position = position.canonical()
        self._state = replace(self._state, continuous=bool(flag), position=position)

    @property
    def state(self):
        """The frozen state record backing this frame."""
        return self._state

    # -----------------------------------------------------------------------
    # Copies and conversions
    # -----------------------------------------------------------------------

    def copy(self):
        """Return an independent frame with identical state."""
        return copy.copy(self)

    def retarget(self, **options):
        raise NotImplementedError

    def snapshot(self, **options):
        """Return a retargeted copy, leaving this frame untouched."""
        return self.copy().retarget(**options)

    def to(self, code: FrameCode | str, **options):
        """Convert to another frame kind, see :class:`~skyframes.frames.FrameSwitcher`."""
        from skyframes.frames.switcher import FrameSwitcher

        return FrameSwitcher(self).convert_to(code, **options)

    def to_equinoctial(self, **options):
        return self.to(FrameCode.EQUINOCTIAL, **options)

    def to_ecliptic(self, **options):
        return self.to(FrameCode.ECLIPTIC, **options)

    def to_galactic(self, **options):
        return self.to(FrameCode.GALACTIC, **options)

    def to_horizontal(self, **options):
        return self.to(FrameCode.HORIZONTAL, **options)

    def to_hour_angle(self, **options):
        return self.to(FrameCode.HOUR_ANGLE, **options)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self._longitude_name}={self._longitude():.6f}, "
                f"{self._latitude_name}={self._latitude():.6f}, radius={self.radius:g})")
