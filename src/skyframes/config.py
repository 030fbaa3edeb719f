"""Module-wide configuration for skyframes.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used by
the numeric layer, and setter/getter pairs for the defaults frames fall
back on when a caller leaves a choice unspecified.

The default dtype is ``jnp.float64``.  Round trips across the conversion
graph are only exact to ~1e-9 rad in 64-bit precision, so importing this
module enables JAX's 64-bit mode (``jax_enable_x64``).  Switching to
``jnp.float32`` is allowed for quick vectorized experiments but voids the
round-trip guarantee.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from skyframes.errors import UnknownEnumError

_VALID_DTYPES = (jnp.float32, jnp.float64)

_PRECESSION_MODELS = ("iau2006", "iau2000", "iau1976")
_NUTATION_MODELS = ("iau2000b", "lp")

jax.config.update("jax_enable_x64", True)

_dtype = jnp.float64
_precession_model = "iau2006"
_nutation_model = "iau2000b"
_galactic_strict_bounds = False


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for skyframes.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float32`` or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def get_epoch_eq_tolerance() -> float:
    """Return the dtype-adaptive tolerance for Epoch equality comparisons.

    - ``float32``: 1e-3 s
    - ``float64``: 1e-6 s

    Returns:
        float: Tolerance in seconds.
    """
    if _dtype == jnp.float64:
        return 1e-6
    return 1e-3


def set_default_models(precession_model: str | None = None,
                       nutation_model: str | None = None) -> None:
    """Set the precession/nutation models used when a frame names none.

    Args:
        precession_model: ``"iau2006"``, ``"iau2000"`` or ``"iau1976"``.
            ``None`` leaves the current default in place.
        nutation_model: ``"iau2000b"`` or ``"lp"``. ``None`` leaves the
            current default in place.

    Raises:
        UnknownEnumError: If a model name is not recognized.
    """
    global _precession_model, _nutation_model
    if precession_model is not None:
        _precession_model = check_precession_model(precession_model)
    if nutation_model is not None:
        _nutation_model = check_nutation_model(nutation_model)


def get_default_models() -> tuple[str, str]:
    """Return the default ``(precession_model, nutation_model)`` pair."""
    return _precession_model, _nutation_model


def set_galactic_strict_bounds(flag: bool) -> None:
    """Choose whether galactic frames enforce [0, 360) x [-90, 90] on input.

    Galactic longitudes are sometimes quoted outside [0, 360) (e.g. as
    -180..180), so galactic frames accept any finite angle by default.

    Args:
        flag: ``True`` to reject out-of-range galactic angles.
    """
    global _galactic_strict_bounds
    _galactic_strict_bounds = bool(flag)


def get_galactic_strict_bounds() -> bool:
    """Return whether galactic frames enforce strict angle bounds."""
    return _galactic_strict_bounds


def check_precession_model(name) -> str:
    """Validate and normalize a precession model name.

    Raises:
        UnknownEnumError: If *name* is not a recognized model.
    """
    if not isinstance(name, str) or name.lower() not in _PRECESSION_MODELS:
        raise UnknownEnumError(
            f"Unknown precession model {name!r}. Must be one of: "
            f"{', '.join(_PRECESSION_MODELS)}"
        )
    return name.lower()


def check_nutation_model(name) -> str:
    """Validate and normalize a nutation model name.

    Raises:
        UnknownEnumError: If *name* is not a recognized model.
    """
    if not isinstance(name, str) or name.lower() not in _NUTATION_MODELS:
        raise UnknownEnumError(
            f"Unknown nutation model {name!r}. Must be one of: "
            f"{', '.join(_NUTATION_MODELS)}"
        )
    return name.lower()
