"""Celestial reference frames and the conversions between them.

Five frame kinds share one interface (:class:`CommonFrame`): position
accessors, in-place retargeting verbs and the non-mutating
:meth:`~CommonFrame.snapshot` and ``to_*`` conversions. Conversions run
through :class:`FrameSwitcher`, which routes every kind via the
equinoctial frame.
"""

from skyframes.frames._common import CommonFrame
from skyframes.frames._types import CenterMode, FrameCode, ObservingCondition
from skyframes.frames.ecliptic import EclipticFrame
from skyframes.frames.equinoctial import EquinoctialFrame
from skyframes.frames.galactic import GalacticFrame
from skyframes.frames.horizontal import HorizontalFrame
from skyframes.frames.hour_angle import HourAngleFrame
from skyframes.frames.switcher import FrameSwitcher

__all__ = [
    "CenterMode",
    "CommonFrame",
    "EclipticFrame",
    "EquinoctialFrame",
    "FrameCode",
    "FrameSwitcher",
    "GalacticFrame",
    "HorizontalFrame",
    "HourAngleFrame",
    "ObservingCondition",
]
