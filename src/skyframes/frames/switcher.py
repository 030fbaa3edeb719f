"""Conversions between frame kinds through the equinoctial hub.

Every frame is first brought into an :class:`EquinoctialFrame` (the hub)
by the inverse of its own forward transform, using the sidereal time,
obliquity and galactic rotation stored in the source frame. The target is
then built from the hub. Converting back to the source kind with no
options reuses the source's own settings, so the round trip is exact up
to rounding.

Example:
    >>> switcher = FrameSwitcher(EquinoctialFrame(ra=347.3193, dec=-6.7199))
    >>> switcher.convert_to("ecc").longitude  # doctest: +SKIP
"""

from __future__ import annotations

import logging

from skyframes.coordinates import Rx
from skyframes.corrections import sidereal_time
from skyframes.epoch import Epoch
from skyframes.errors import MissingRequiredFieldError, TypeValidationError
from skyframes.frames._common import CommonFrame
from skyframes.frames._observer import check_condition
from skyframes.frames._types import CenterMode, FrameCode, ObservingCondition
from skyframes.frames.ecliptic import EclipticFrame
from skyframes.frames.equinoctial import EquinoctialFrame
from skyframes.frames.galactic import GalacticFrame, galactic_matrix, reference_directions
from skyframes.frames.horizontal import HorizontalFrame
from skyframes.frames.hour_angle import HourAngleFrame

logger = logging.getLogger(__name__)

_ALL_CORRECTIONS = dict(with_nutation=True, on_fk5=True, with_annual_aberration=True,
                        with_gravitational_deflection=True)
_NO_CORRECTIONS = dict(with_nutation=False, on_fk5=False, with_annual_aberration=False,
                       with_gravitational_deflection=False)


def _correction_flags(frame) -> dict:
    return dict(with_nutation=frame.with_nutation, on_fk5=frame.on_fk5,
                with_annual_aberration=frame.with_annual_aberration,
                with_gravitational_deflection=frame.with_gravitational_deflection)


# ---------------------------------------------------------------------------
# Source frame -> hub
# ---------------------------------------------------------------------------


def _hub_from_ecliptic(frame: EclipticFrame) -> EquinoctialFrame:
    geocentric = frame.snapshot(center_mode=CenterMode.GEOCENTRIC)
    position = geocentric.state.position.rotate(Rx(-geocentric.true_obliquity()))
    return EquinoctialFrame(position, epoch=frame.epoch,
                            precession_model=frame.precession_model,
                            nutation_model=frame.nutation_model,
                            continuous=frame.continuous, **_correction_flags(frame))


def _hub_from_galactic(frame: GalacticFrame) -> EquinoctialFrame:
    # The mean position carries no correction of its own, FK5 included
    position = frame.state.position.rotate(frame.equinoctial_matrix().T)
    return EquinoctialFrame(position, epoch=frame.epoch,
                            precession_model=frame.precession_model,
                            continuous=frame.continuous, **_NO_CORRECTIONS)


def _hub_from_observer(frame) -> EquinoctialFrame:
    return EquinoctialFrame(frame.equinoctial_position(), epoch=frame.time,
                            precession_model=frame.precession_model,
                            nutation_model=frame.nutation_model,
                            continuous=frame.continuous, **_ALL_CORRECTIONS)


# ---------------------------------------------------------------------------
# Hub -> target frame
# ---------------------------------------------------------------------------


def _to_equinoctial(hub: EquinoctialFrame, **options) -> EquinoctialFrame:
    return hub.snapshot(**options)


def _to_ecliptic(hub: EquinoctialFrame, *, epoch: Epoch | None = None,
                 center_mode: CenterMode | str = CenterMode.GEOCENTRIC,
                 with_nutation: bool | None = None, on_fk5: bool | None = None,
                 with_annual_aberration: bool | None = None,
                 with_gravitational_deflection: bool | None = None,
                 precession_model: str | None = None,
                 nutation_model: str | None = None) -> EclipticFrame:
    source = hub.snapshot(epoch=epoch, with_nutation=with_nutation, on_fk5=on_fk5,
                          with_annual_aberration=with_annual_aberration,
                          with_gravitational_deflection=with_gravitational_deflection,
                          precession_model=precession_model, nutation_model=nutation_model)
    position = source.state.position.rotate(Rx(source.true_obliquity()))
    frame = EclipticFrame(position, epoch=source.epoch,
                          precession_model=source.precession_model,
                          nutation_model=source.nutation_model,
                          continuous=source.continuous, **_correction_flags(source))
    return frame.retarget(center_mode=center_mode)


def _to_galactic(hub: EquinoctialFrame, *, epoch: Epoch | None = None,
                 precession_model: str | None = None) -> GalacticFrame:
    # Galactic axes are fixed to the mean J2000.0 equator, so go there first
    j2000 = Epoch.j2000()
    mean = hub.snapshot(epoch=j2000, precession_model=precession_model, **_NO_CORRECTIONS)
    pole, center = reference_directions(j2000, mean.precession_model)
    frame = GalacticFrame(mean.state.position.rotate(galactic_matrix(pole, center)),
                          epoch=j2000, precession_model=mean.precession_model,
                          continuous=mean.continuous)
    return frame.retarget_epoch(j2000 if epoch is None else epoch)


def _observed(hub: EquinoctialFrame, frame_type, condition, precession_model, nutation_model):
    """Apparent place of the observing time rotated into ``frame_type`` axes."""
    condition = check_condition(condition)
    source = hub.snapshot(epoch=condition.time, precession_model=precession_model,
                          nutation_model=nutation_model, **_ALL_CORRECTIONS)
    sidereal = sidereal_time(condition.time, condition.longitude,
                             source.precession_model, source.nutation_model)
    position = source.state.position.rotate(frame_type.local_matrix(sidereal, condition))
    return position, source


def _to_hour_angle(hub: EquinoctialFrame, *, condition: ObservingCondition | None = None,
                   precession_model: str | None = None,
                   nutation_model: str | None = None) -> HourAngleFrame:
    position, source = _observed(hub, HourAngleFrame, condition, precession_model, nutation_model)
    return HourAngleFrame(position, condition=condition,
                          precession_model=source.precession_model,
                          nutation_model=source.nutation_model,
                          continuous=source.continuous)


def _to_horizontal(hub: EquinoctialFrame, *, condition: ObservingCondition | None = None,
                   center_mode: CenterMode | str = CenterMode.GEOCENTRIC,
                   with_refraction: bool = False,
                   precession_model: str | None = None,
                   nutation_model: str | None = None) -> HorizontalFrame:
    position, source = _observed(hub, HorizontalFrame, condition, precession_model, nutation_model)
    frame = HorizontalFrame(position, condition=condition,
                            precession_model=source.precession_model,
                            nutation_model=source.nutation_model,
                            continuous=source.continuous)
    return frame.retarget(center_mode=center_mode, with_refraction=with_refraction)


_TO_HUB = {
    FrameCode.EQUINOCTIAL: lambda frame: frame.copy(),
    FrameCode.ECLIPTIC: _hub_from_ecliptic,
    FrameCode.GALACTIC: _hub_from_galactic,
    FrameCode.HORIZONTAL: _hub_from_observer,
    FrameCode.HOUR_ANGLE: _hub_from_observer,
}

_FROM_HUB = {
    FrameCode.EQUINOCTIAL: _to_equinoctial,
    FrameCode.ECLIPTIC: _to_ecliptic,
    FrameCode.GALACTIC: _to_galactic,
    FrameCode.HORIZONTAL: _to_horizontal,
    FrameCode.HOUR_ANGLE: _to_hour_angle,
}


def _native_options(frame: CommonFrame) -> dict:
    """Settings that rebuild ``frame`` from the hub unchanged."""
    code = frame.code
    if code is FrameCode.EQUINOCTIAL:
        return {}
    if code is FrameCode.GALACTIC:
        return dict(epoch=frame.epoch, precession_model=frame.precession_model)
    options = dict(precession_model=frame.precession_model, nutation_model=frame.nutation_model)
    if code is FrameCode.ECLIPTIC:
        options.update(epoch=frame.epoch, center_mode=frame.center_mode, **_correction_flags(frame))
    else:
        options.update(condition=frame.condition)
        if code is FrameCode.HORIZONTAL:
            options.update(center_mode=frame.center_mode, with_refraction=frame.with_refraction)
    return options


class FrameSwitcher:
    """Converts a frame of any kind into any other kind.

    Args:
        frame: Optional source frame, same as calling :meth:`adopt`.

    Example:
        >>> site = ObservingCondition(Epoch(1987, 4, 10, 19, 21, 0), -77.0656, 38.9214)
        >>> FrameSwitcher(star).convert_to("hc", condition=site).azimuth  # doctest: +SKIP
    """

    def __init__(self, frame: CommonFrame | None = None):
        self._hub: EquinoctialFrame | None = None
        self._source_code: FrameCode | None = None
        self._native: dict = {}
        if frame is not None:
            self.adopt(frame)

    @property
    def hub(self) -> EquinoctialFrame:
        """Copy of the equinoctial frame derived from the adopted source."""
        if self._hub is None:
            raise MissingRequiredFieldError("No frame adopted, call adopt() first")
        return self._hub.copy()

    def adopt(self, frame: CommonFrame):
        """Derive the equinoctial hub from ``frame``. The frame is not modified."""
        if not isinstance(frame, CommonFrame):
            raise TypeValidationError(f"Cannot adopt {type(frame).__name__}, expected a frame")
        self._hub = _TO_HUB[frame.code](frame)
        self._source_code = frame.code
        self._native = _native_options(frame)
        logger.debug("Adopted %s frame", frame.code.name.lower())
        return self

    def convert_to(self, code: FrameCode | str, **options) -> CommonFrame:
        """Build a new frame of kind ``code`` from the adopted source.

        Options are those of the target frame's ``retarget`` plus, for the
        horizontal and hour-angle frames, the required ``condition``.
        Unspecified options default to the adopted frame's settings when
        ``code`` is the adopted frame's own kind.

        Raises:
            UnknownEnumError: If ``code`` names no frame.
            MissingRequiredFieldError: If no frame was adopted, or an
                observer frame is requested without a condition.
        """
        code = FrameCode.parse(code)
        hub = self.hub
        if code is self._source_code:
            options = {**self._native, **options}
        logger.debug("Converting %s frame to %s", self._source_code.name.lower(), code.name.lower())
        return _FROM_HUB[code](hub, **options)
