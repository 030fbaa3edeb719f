"""Shared utility functions for skyframes.

Provides angle conversion helpers and sexagesimal parsing/formatting.
"""

from skyframes.utils._angle import (
    from_radians,
    normalize_angle,
    normalize_degrees,
    to_radians,
)
from skyframes.utils._sexagesimal import (
    format_dms,
    format_hms,
    parse_dms,
    parse_hms,
)

__all__ = [
    "format_dms",
    "format_hms",
    "from_radians",
    "normalize_angle",
    "normalize_degrees",
    "parse_dms",
    "parse_hms",
    "to_radians",
]
