# backend/models/shutter_mode.py
"""
Shutter mode enum and its parameter-string mapping.
"""

from enum import Enum
from typing import Any, Dict


class ShutterMode(str, Enum):
    """Sensor shutter mode"""
    DEFAULT = "default"                          # Leave the camera's own setting
    ROLLING = "rolling"
    GLOBAL = "global"
    GLOBAL_RESET_RELEASE = "global_reset_release"


class ShutterModeMapper:
    """
    Lookup between ``shutter_mode`` parameter strings and ShutterMode.

    Unknown, empty or non-string input maps to ShutterMode.DEFAULT, so
    to_enum never fails.
    """

    _FROM_STRING: Dict[str, ShutterMode] = {
        "rolling": ShutterMode.ROLLING,
        "global": ShutterMode.GLOBAL,
        "global_reset": ShutterMode.GLOBAL_RESET_RELEASE,
    }

    _TO_STRING: Dict[ShutterMode, str] = {
        ShutterMode.ROLLING: "rolling",
        ShutterMode.GLOBAL: "global",
        ShutterMode.GLOBAL_RESET_RELEASE: "global_reset",
        ShutterMode.DEFAULT: "default_shutter_mode",
    }

    @classmethod
    def to_enum(cls, raw: Any) -> ShutterMode:
        if not isinstance(raw, str):
            return ShutterMode.DEFAULT
        return cls._FROM_STRING.get(raw, ShutterMode.DEFAULT)

    @classmethod
    def to_string(cls, mode: ShutterMode) -> str:
        return cls._TO_STRING[mode]
