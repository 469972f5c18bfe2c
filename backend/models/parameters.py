# backend/models/parameters.py
"""
Camera Parameter Data Models

Defines the resolved image-acquisition parameter set handed to the
camera driver.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from integrations.param_store import ParameterStore
from .shutter_mode import ShutterMode, ShutterModeMapper


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_CAMERA_FRAME = "pylon_camera"
DEFAULT_DEVICE_USER_ID = ""  # Empty: open the first device found
DEFAULT_BINNING = 1
DEFAULT_EXPOSURE = 10000.0  # microseconds
DEFAULT_GAIN = 0.5
DEFAULT_GAMMA = 1.0
DEFAULT_BRIGHTNESS = 100.0
DEFAULT_FRAME_RATE = 5.0  # Hz
DEFAULT_MTU_SIZE = 3000

# Frame rate meaning "acquire as fast as the hardware allows"
FREE_RUN_FRAME_RATE = -1.0

FRAME_RATE_KEY = "frame_rate"


# =============================================================================
# PARAMETER SET
# =============================================================================

@dataclass
class ParameterSet:
    """
    Image-acquisition parameters after resolution and validation.

    Exposure, gain, gamma and brightness each carry a ``*_given`` flag.
    A cleared flag means "not requested"; the raw value is then whatever
    was last read and must not be applied. Use the ``*_setting`` views
    to get ``None`` for unset tunables.
    """
    camera_frame: str = DEFAULT_CAMERA_FRAME
    device_user_id: str = DEFAULT_DEVICE_USER_ID
    binning: int = DEFAULT_BINNING

    # Image intensity
    exposure: float = DEFAULT_EXPOSURE
    exposure_given: bool = False
    gain: float = DEFAULT_GAIN
    gain_given: bool = False
    gamma: float = DEFAULT_GAMMA
    gamma_given: bool = False
    brightness: float = DEFAULT_BRIGHTNESS
    brightness_given: bool = False
    brightness_continuous: bool = False  # Only meaningful when brightness is given
    exposure_auto: bool = True
    gain_auto: bool = True

    frame_rate: float = DEFAULT_FRAME_RATE
    mtu_size: int = DEFAULT_MTU_SIZE
    shutter_mode: ShutterMode = ShutterMode.DEFAULT

    @property
    def exposure_setting(self) -> Optional[float]:
        """Exposure in microseconds if requested, else None"""
        return self.exposure if self.exposure_given else None

    @property
    def gain_setting(self) -> Optional[float]:
        """Gain ratio if requested, else None"""
        return self.gain if self.gain_given else None

    @property
    def gamma_setting(self) -> Optional[float]:
        """Gamma if requested, else None"""
        return self.gamma if self.gamma_given else None

    @property
    def brightness_setting(self) -> Optional[float]:
        """Target brightness if requested, else None"""
        return self.brightness if self.brightness_given else None

    @property
    def is_free_run(self) -> bool:
        return self.frame_rate == FREE_RUN_FRAME_RATE

    def shutter_mode_string(self) -> str:
        """Shutter mode as its parameter-file literal"""
        return ShutterModeMapper.to_string(self.shutter_mode)

    def set_frame_rate(self, store: ParameterStore, frame_rate: float) -> None:
        """Change the frame rate and write it back to the store"""
        self.frame_rate = frame_rate
        store.write(FRAME_RATE_KEY, self.frame_rate)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cameraFrame": self.camera_frame,
            "deviceUserId": self.device_user_id,
            "binning": self.binning,
            "exposure": self.exposure,
            "exposureGiven": self.exposure_given,
            "gain": self.gain,
            "gainGiven": self.gain_given,
            "gamma": self.gamma,
            "gammaGiven": self.gamma_given,
            "brightness": self.brightness,
            "brightnessGiven": self.brightness_given,
            "brightnessContinuous": self.brightness_continuous,
            "exposureAuto": self.exposure_auto,
            "gainAuto": self.gain_auto,
            "frameRate": self.frame_rate,
            "mtuSize": self.mtu_size,
            "shutterMode": self.shutter_mode_string(),
        }

    def summary(self) -> str:
        """Generate human-readable summary"""
        def tunable(value: Optional[float]) -> str:
            return "unset" if value is None else f"{value:g}"

        lines = [
            f"Camera frame: {self.camera_frame}",
            f"  Device: {self.device_user_id or '(first found)'}",
            f"  Binning: {self.binning}",
            f"  Exposure: {tunable(self.exposure_setting)}",
            f"  Gain: {tunable(self.gain_setting)}",
            f"  Gamma: {tunable(self.gamma_setting)}",
            f"  Brightness: {tunable(self.brightness_setting)}",
        ]
        if self.brightness_given:
            lines.append(
                f"    continuous={self.brightness_continuous} "
                f"exposure_auto={self.exposure_auto} gain_auto={self.gain_auto}"
            )
        lines.extend([
            "  Frame rate: free run" if self.is_free_run else f"  Frame rate: {self.frame_rate:g} Hz",
            f"  MTU size: {self.mtu_size}",
            f"  Shutter mode: {self.shutter_mode_string()}",
        ])
        return "\n".join(lines)
