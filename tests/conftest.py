import jax.numpy as jnp
import pytest

from skyframes.config import set_default_models, set_dtype, set_galactic_strict_bounds


@pytest.fixture(autouse=True)
def _ensure_defaults():
    """Run every test in float64 with the stock model and bounds settings.

    Some tests flip module-wide configuration; resetting it here keeps
    them independent of execution order.
    """
    set_dtype(jnp.float64)
    set_default_models("iau2006", "iau2000b")
    set_galactic_strict_bounds(False)
    yield
    set_dtype(jnp.float64)
    set_default_models("iau2006", "iau2000b")
    set_galactic_strict_bounds(False)
