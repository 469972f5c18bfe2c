# backend/models/__init__.py
"""
Camera Parameter Data Models

This package contains the resolved parameter set and the shutter mode
enum with its string mapping.
"""

from .shutter_mode import (
    ShutterMode,
    ShutterModeMapper,
)
from .parameters import (
    ParameterSet,

    # Defaults
    DEFAULT_CAMERA_FRAME,
    DEFAULT_DEVICE_USER_ID,
    DEFAULT_BINNING,
    DEFAULT_EXPOSURE,
    DEFAULT_GAIN,
    DEFAULT_GAMMA,
    DEFAULT_BRIGHTNESS,
    DEFAULT_FRAME_RATE,
    DEFAULT_MTU_SIZE,
    FREE_RUN_FRAME_RATE,
)

__all__ = [
    # Shutter mode
    "ShutterMode",
    "ShutterModeMapper",

    # Parameters
    "ParameterSet",

    # Defaults
    "DEFAULT_CAMERA_FRAME",
    "DEFAULT_DEVICE_USER_ID",
    "DEFAULT_BINNING",
    "DEFAULT_EXPOSURE",
    "DEFAULT_GAIN",
    "DEFAULT_GAMMA",
    "DEFAULT_BRIGHTNESS",
    "DEFAULT_FRAME_RATE",
    "DEFAULT_MTU_SIZE",
    "FREE_RUN_FRAME_RATE",
]
