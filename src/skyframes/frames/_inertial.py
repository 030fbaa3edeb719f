"""Correction stack shared by the equinoctial and ecliptic frames.

Both frames carry the same four optional corrections on top of a mean
position of date. They are layered in a fixed order, innermost first:
FK5 frame bias, gravitational deflection, annual aberration, nutation.
Nutation is a rotation; the other three are small additive offsets whose
exact values are recorded in the state when applied. Toggling an inner
correction temporarily peels off nutation so the layers never mix.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace

from skyframes.config import (
    check_nutation_model,
    check_precession_model,
    get_default_models,
)
from skyframes.constants import AS2RAD, MAS2RAD
from skyframes.corrections import gravitational_deflection, nutation, precession
from skyframes.epoch import Epoch
from skyframes.frames._common import CommonFrame
from skyframes.frames._types import check_epoch

logger = logging.getLogger(__name__)

# (flag field, offset field) in application order
_ADDITIVE_LAYERS = (
    ("on_fk5", "fk5_offset"),
    ("with_gravitational_deflection", "deflection_offset"),
    ("with_annual_aberration", "aberration_offset"),
)


def resolve_models(precession_model, nutation_model) -> tuple[str, str]:
    """Fill unspecified models from the configured defaults and validate them."""
    default_precession, default_nutation = get_default_models()
    return (check_precession_model(precession_model or default_precession),
            check_nutation_model(nutation_model or default_nutation))


class InertialFrame(CommonFrame):
    """Equinox-referred frame with precession and the correction stack."""

    _offset_fields = ("fk5_offset", "aberration_offset", "deflection_offset")

    # Hooks the concrete frames provide

    def _precession_matrix(self, angles):
        """Rotation from the J2000.0 frame to the mean frame of ``angles``."""
        raise NotImplementedError

    def _nutation_matrix(self):
        raise NotImplementedError

    def _earth_vector(self):
        """Heliocentric Earth position in this frame's axes, cartesian [AU]."""
        raise NotImplementedError

    def _fk5_offsets(self, position):
        raise NotImplementedError

    def _aberration_offsets(self, position):
        raise NotImplementedError

    @contextmanager
    def _corrections_context(self):
        """Context in which corrections may be toggled. Geocentric by default."""
        yield

    # -----------------------------------------------------------------------
    # Shared accessors
    # -----------------------------------------------------------------------

    @property
    def epoch(self) -> Epoch:
        """Equinox and instant of date."""
        return self._state.epoch

    @property
    def precession_model(self) -> str:
        return self._state.precession_model

    @property
    def nutation_model(self) -> str:
        return self._state.nutation_model

    @property
    def with_nutation(self) -> bool:
        return self._state.with_nutation

    @property
    def on_fk5(self) -> bool:
        return self._state.on_fk5

    @property
    def with_annual_aberration(self) -> bool:
        return self._state.with_annual_aberration

    @property
    def with_gravitational_deflection(self) -> bool:
        return self._state.with_gravitational_deflection

    def _obliquity(self) -> float:
        """Mean obliquity of date [rad]."""
        return self._state.precession.epsilon * AS2RAD

    def _nutation_radians(self) -> tuple[float, float]:
        angles = self._state.nutation
        return angles.longitude * MAS2RAD, angles.obliquity * MAS2RAD

    def true_obliquity(self) -> float:
        """Obliquity of the ecliptic of date [rad], including nutation if applied."""
        obliquity = self._obliquity()
        if self._state.with_nutation:
            obliquity += self._nutation_radians()[1]
        return obliquity

    def _deflection_offsets(self, position):
        return gravitational_deflection(position, self._earth_vector())

    # -----------------------------------------------------------------------
    # Nutation
    # -----------------------------------------------------------------------

    def apply_nutation(self):
        """Rotate from the mean to the true equinox of date."""
        with self._corrections_context():
            if not self._state.with_nutation:
                rotated = self._state.position.rotate(self._nutation_matrix())
                self._store(rotated, with_nutation=True)
        return self

    def remove_nutation(self):
        """Rotate from the true back to the mean equinox of date."""
        with self._corrections_context():
            if self._state.with_nutation:
                rotated = self._state.position.rotate(self._nutation_matrix().T)
                self._store(rotated, with_nutation=False)
        return self

    # -----------------------------------------------------------------------
    # Additive corrections
    # -----------------------------------------------------------------------

    def _compute_offsets(self, flag: str, position):
        if flag == "on_fk5":
            return self._fk5_offsets(position)
        if flag == "with_gravitational_deflection":
            return self._deflection_offsets(position)
        return self._aberration_offsets(position)

    def _apply_layer(self, flag: str, offset_field: str) -> None:
        with self._corrections_context():
            if getattr(self._state, flag):
                return
            nutated = self._state.with_nutation
            self.remove_nutation()
            dphi, dtheta = self._compute_offsets(flag, self._state.position.canonical())
            self._shift(dphi, dtheta)
            self._state = replace(self._state, **{flag: True, offset_field: (dphi, dtheta)})
            if nutated:
                self.apply_nutation()

    def _remove_layer(self, flag: str, offset_field: str) -> None:
        with self._corrections_context():
            if not getattr(self._state, flag):
                return
            nutated = self._state.with_nutation
            self.remove_nutation()
            offsets = getattr(self._state, offset_field)
            if offsets is None:
                logger.debug("No recorded %s offsets, recomputing for removal", flag)
                offsets = self._compute_offsets(flag, self._state.position.canonical())
            self._shift(-offsets[0], -offsets[1])
            self._state = replace(self._state, **{flag: False, offset_field: None})
            if nutated:
                self.apply_nutation()

    def apply_fk5(self):
        """Add the FK5 frame-bias correction."""
        self._apply_layer("on_fk5", "fk5_offset")
        return self

    def remove_fk5(self):
        self._remove_layer("on_fk5", "fk5_offset")
        return self

    def apply_gravitational_deflection(self):
        """Add the Sun's gravitational light deflection."""
        self._apply_layer("with_gravitational_deflection", "deflection_offset")
        return self

    def remove_gravitational_deflection(self):
        self._remove_layer("with_gravitational_deflection", "deflection_offset")
        return self

    def apply_annual_aberration(self):
        """Add the annual aberration of light."""
        self._apply_layer("with_annual_aberration", "aberration_offset")
        return self

    def remove_annual_aberration(self):
        self._remove_layer("with_annual_aberration", "aberration_offset")
        return self

    def _set_layers(self, on_fk5, with_gravitational_deflection,
                    with_annual_aberration, with_nutation) -> None:
        """Bring each correction to the requested state; ``None`` leaves it."""
        requested = {
            "on_fk5": on_fk5,
            "with_gravitational_deflection": with_gravitational_deflection,
            "with_annual_aberration": with_annual_aberration,
        }
        # Removals run outermost first, applications innermost first
        for flag, offset_field in reversed(_ADDITIVE_LAYERS):
            if requested[flag] is not None and not requested[flag]:
                self._remove_layer(flag, offset_field)
        for flag, offset_field in _ADDITIVE_LAYERS:
            if requested[flag]:
                self._apply_layer(flag, offset_field)
        if with_nutation is not None:
            if with_nutation:
                self.apply_nutation()
            else:
                self.remove_nutation()

    # -----------------------------------------------------------------------
    # Epoch
    # -----------------------------------------------------------------------

    def retarget_epoch(self, epoch: Epoch, precession_model: str | None = None,
                       nutation_model: str | None = None):
        """Move the position to another equinox, keeping its corrections.

        All corrections are removed, the mean position is precessed back
        to J2000.0 with the current angles and forward with the new ones,
        then the corrections are re-applied at the new epoch. Passing a
        different model re-derives the position under that model.
        """
        epoch = check_epoch("epoch", epoch)
        precession_model = check_precession_model(precession_model or self._state.precession_model)
        nutation_model = check_nutation_model(nutation_model or self._state.nutation_model)

        state = self._state
        if (epoch == state.epoch and precession_model == state.precession_model
                and nutation_model == state.nutation_model):
            return self

        with self._corrections_context():
            flags = (state.on_fk5, state.with_gravitational_deflection,
                     state.with_annual_aberration, state.with_nutation)
            self._set_layers(False, False, False, False)

            position = self._state.position
            if not state.epoch.is_j2000():
                position = position.rotate(self._precession_matrix(state.precession).T)
            angles = precession(epoch, precession_model)
            if not epoch.is_j2000():
                position = position.rotate(self._precession_matrix(angles))

            logger.debug("Precessing %s from %s to %s", type(self).__name__, state.epoch, epoch)
            self._store(position, epoch=epoch, precession=angles,
                        nutation=nutation(epoch, nutation_model),
                        precession_model=precession_model, nutation_model=nutation_model)
            self._set_layers(*flags)
        return self

    def _retarget_corrections(self, epoch, with_nutation, on_fk5, with_annual_aberration,
                              with_gravitational_deflection, precession_model, nutation_model):
        """Validate every option first, then apply them."""
        if epoch is not None:
            check_epoch("epoch", epoch)
        if precession_model is not None:
            check_precession_model(precession_model)
        if nutation_model is not None:
            check_nutation_model(nutation_model)
        if epoch is not None or precession_model is not None or nutation_model is not None:
            self.retarget_epoch(epoch if epoch is not None else self._state.epoch,
                                precession_model, nutation_model)
        self._set_layers(
            None if on_fk5 is None else bool(on_fk5),
            None if with_gravitational_deflection is None else bool(with_gravitational_deflection),
            None if with_annual_aberration is None else bool(with_annual_aberration),
            None if with_nutation is None else bool(with_nutation),
        )
