"""Types shared by the frame classes.

Frame codes and center modes are closed enumerations; strings are mapped
onto them only at the public API boundary. Each frame kind keeps its
mutable state in one frozen dataclass that is replaced wholesale on every
mutation, so copies are cheap and never alias.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from skyframes.constants import ELEVATION_MAX, ELEVATION_MIN
from skyframes.coordinates import SphericalPosition
from skyframes.corrections import NutationAngles, PrecessionAngles, SiderealTime
from skyframes.epoch import Epoch
from skyframes.errors import (
    RangeValidationError,
    TypeValidationError,
    UnknownEnumError,
)


class FrameCode(enum.Enum):
    """The five supported frame kinds."""

    EQUINOCTIAL = "eqc"
    ECLIPTIC = "ecc"
    GALACTIC = "gc"
    HORIZONTAL = "hc"
    HOUR_ANGLE = "hac"

    @classmethod
    def parse(cls, value: FrameCode | str) -> FrameCode:
        """Map a frame code or name (``"hc"``, ``"horizontal"``, ...) to a member.

        Raises:
            UnknownEnumError: If ``value`` names no frame.
        """
        if isinstance(value, FrameCode):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        raise UnknownEnumError(
            f"Unknown frame code {value!r}. Must be one of: "
            f"{', '.join(m.value for m in cls)}"
        )

    def __str__(self) -> str:
        return self.value


class CenterMode(enum.Enum):
    """Origin a position is referred to."""

    GEOCENTRIC = "geocentric"
    HELIOCENTRIC = "heliocentric"
    TOPOCENTRIC = "topocentric"

    @classmethod
    def parse(cls, value: CenterMode | str,
              allowed: tuple[CenterMode, ...]) -> CenterMode:
        """Map a center-mode name onto one of the ``allowed`` members.

        Raises:
            UnknownEnumError: If ``value`` is not one of ``allowed``.
        """
        mode = value
        if isinstance(value, str):
            mode = next((m for m in cls if m.value == value.strip().lower()), None)
        if mode not in allowed:
            raise UnknownEnumError(
                f"Unknown center mode {value!r}. Must be one of: "
                f"{', '.join(m.value for m in allowed)}"
            )
        return mode

    def __str__(self) -> str:
        return self.value


def check_number(name: str, value) -> float:
    """Return ``value`` as a float, rejecting non-numeric or non-finite input."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeValidationError(f"The param {name} should be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise RangeValidationError(f"The param {name} should be finite, got {value}")
    return float(value)


def check_range(name: str, value: float, low: float, high: float,
                include_high: bool = True) -> float:
    """Validate that ``value`` lies in ``[low, high]`` (or ``[low, high)``)."""
    value = check_number(name, value)
    above = value > high if include_high else value >= high
    if value < low or above:
        bracket = "]" if include_high else ")"
        raise RangeValidationError(f"The param {name} should be in [{low}, {high}{bracket}, got {value}")
    return value


def check_epoch(name: str, value) -> Epoch:
    """Validate that ``value`` is an :class:`Epoch`."""
    if not isinstance(value, Epoch):
        raise TypeValidationError(f"The param {name} should be an Epoch, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class ObservingCondition:
    """Where and when an observer stands.

    Attributes:
        time: Instant of the observation.
        longitude: Geographic longitude, east positive [deg, -180..180].
        latitude: Geodetic latitude [deg, -90..90].
        elevation: Height above the ellipsoid [m, -12000..3e7].
    """

    time: Epoch
    longitude: float
    latitude: float = 0.0
    elevation: float = 0.0

    def __post_init__(self):
        check_epoch("time", self.time)
        object.__setattr__(self, "longitude", check_range("longitude", self.longitude, -180.0, 180.0))
        object.__setattr__(self, "latitude", check_range("latitude", self.latitude, -90.0, 90.0))
        object.__setattr__(
            self, "elevation", check_range("elevation", self.elevation, ELEVATION_MIN, ELEVATION_MAX)
        )


@dataclass(frozen=True)
class EquinoctialState:
    """Everything an equinoctial frame knows about its position.

    The ``*_offset`` fields hold the ``(dphi, dtheta)`` actually added when
    a correction was applied, so removal restores the exact prior angles.
    ``None`` means the correction came baked into a caller-supplied
    position and must be re-derived on removal.
    """

    position: SphericalPosition
    epoch: Epoch
    precession_model: str
    nutation_model: str
    precession: PrecessionAngles
    nutation: NutationAngles
    with_nutation: bool = False
    on_fk5: bool = False
    with_annual_aberration: bool = False
    with_gravitational_deflection: bool = False
    fk5_offset: tuple[float, float] | None = None
    aberration_offset: tuple[float, float] | None = None
    deflection_offset: tuple[float, float] | None = None
    continuous: bool = False


@dataclass(frozen=True)
class EclipticState(EquinoctialState):
    """Equinoctial state plus the geocentric/heliocentric origin."""

    center_mode: CenterMode = CenterMode.GEOCENTRIC


@dataclass(frozen=True)
class GalacticState:
    """Galactic position together with its re-precessed reference directions.

    ``pole`` and ``center`` are the north galactic pole and the galactic
    center as mean equinoctial positions of ``epoch``.
    """

    position: SphericalPosition
    epoch: Epoch
    precession_model: str
    pole: SphericalPosition
    center: SphericalPosition
    continuous: bool = False


@dataclass(frozen=True)
class HourAngleState:
    """Hour-angle position and the sidereal time it was rotated with."""

    position: SphericalPosition
    condition: ObservingCondition
    precession_model: str
    nutation_model: str
    sidereal: SiderealTime
    continuous: bool = False


@dataclass(frozen=True)
class HorizontalState(HourAngleState):
    """Hour-angle state plus the parallax and refraction layers."""

    center_mode: CenterMode = CenterMode.GEOCENTRIC
    with_refraction: bool = False
