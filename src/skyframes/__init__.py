"""
skyframes converts celestial positions between equinoctial, ecliptic, galactic, horizontal and hour-angle frames.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    RAD2AS,
    MAS2RAD,
    JD2000,
    JD_MJD_OFFSET,
    MJD2000,
    AU,
)

from .config import (
    set_dtype,
    get_dtype,
    set_default_models,
    get_default_models,
    set_galactic_strict_bounds,
    get_galactic_strict_bounds,
)

from .errors import (
    FrameError,
    TypeValidationError,
    RangeValidationError,
    UnknownEnumError,
    MissingRequiredFieldError,
)

from .epoch import Epoch

from .coordinates import (
    Rx,
    Ry,
    Rz,
    SphericalPosition,
)

from .frames import (
    CenterMode,
    CommonFrame,
    EclipticFrame,
    EquinoctialFrame,
    FrameCode,
    FrameSwitcher,
    GalacticFrame,
    HorizontalFrame,
    HourAngleFrame,
    ObservingCondition,
)

from .utils import (
    format_dms,
    format_hms,
    parse_dms,
    parse_hms,
)
