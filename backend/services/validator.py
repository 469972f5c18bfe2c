# backend/services/validator.py
"""
Parameter validator.

Range-checks a resolved ParameterSet in place. Two failure policies:

    - reset value (binning, frame_rate): the value is replaced by a fixed
      default; frame_rate is also written back to the store
    - clear flag (exposure, gain, brightness): the ``*_given`` flag is
      cleared and the value is left as read

No check raises; every branch ends in a valid ParameterSet.
"""

from typing import FrozenSet

from integrations.param_store import ParameterStore
from models import ParameterSet
from models.parameters import (
    DEFAULT_BINNING,
    DEFAULT_FRAME_RATE,
    FRAME_RATE_KEY,
    FREE_RUN_FRAME_RATE,
)
from .diagnostics import DiagnosticCode, DiagnosticSink


VALID_BINNINGS: FrozenSet[int] = frozenset({1, 2, 3, 4})
MAX_EXPOSURE_US = 1e7
MIN_GAIN, MAX_GAIN = 0.0, 1.0
MIN_BRIGHTNESS, MAX_BRIGHTNESS = 0.0, 255.0


class ParameterValidator:
    """Applies range checks and per-field correction policies"""

    def __init__(self, sink: DiagnosticSink):
        self.sink = sink

    def validate(self, params: ParameterSet, store: ParameterStore) -> None:
        self._validate_binning(params)
        self._validate_exposure(params)
        self._validate_gain(params)
        self._validate_brightness(params)
        self._validate_frame_rate(params, store)

    # -------------------------------------------------------------------------
    # Reset-value policy
    # -------------------------------------------------------------------------

    def _validate_binning(self, params: ParameterSet) -> None:
        if params.binning in VALID_BINNINGS:
            return
        self.sink.warning(
            DiagnosticCode.OUT_OF_RANGE,
            f"Unsupported binning settings! Binning is {params.binning}, but valid "
            f"are only values in this range: [1, 2, 3, 4]! Will reset it to "
            f"default value ({DEFAULT_BINNING})",
            key="binning",
            value=params.binning,
            default=DEFAULT_BINNING,
        )
        params.binning = DEFAULT_BINNING

    def _validate_frame_rate(self, params: ParameterSet, store: ParameterStore) -> None:
        if params.frame_rate >= 0 or params.frame_rate == FREE_RUN_FRAME_RATE:
            return
        self.sink.warning(
            DiagnosticCode.OUT_OF_RANGE,
            f"Unexpected frame rate ({params.frame_rate:g}). Will reset it to "
            f"default value which is {DEFAULT_FRAME_RATE:g} Hz",
            key=FRAME_RATE_KEY,
            value=params.frame_rate,
            default=DEFAULT_FRAME_RATE,
        )
        params.frame_rate = DEFAULT_FRAME_RATE
        store.write(FRAME_RATE_KEY, params.frame_rate)

    # -------------------------------------------------------------------------
    # Clear-flag policy
    # -------------------------------------------------------------------------

    def _validate_exposure(self, params: ParameterSet) -> None:
        if not params.exposure_given:
            return
        if 0.0 < params.exposure <= MAX_EXPOSURE_US:
            return
        self.sink.warning(
            DiagnosticCode.OUT_OF_RANGE,
            f"Desired exposure measured in microseconds not in valid range! "
            f"Exposure time = {params.exposure:g}. Will ignore it and use the "
            f"camera default",
            key="exposure",
            value=params.exposure,
        )
        params.exposure_given = False

    def _validate_gain(self, params: ParameterSet) -> None:
        if not params.gain_given:
            return
        if MIN_GAIN <= params.gain <= MAX_GAIN:
            return
        self.sink.warning(
            DiagnosticCode.OUT_OF_RANGE,
            f"Desired gain (in percent) not in allowed range! Gain = "
            f"{params.gain:g}. Will ignore it and use the camera default",
            key="gain",
            value=params.gain,
        )
        params.gain_given = False

    def _validate_brightness(self, params: ParameterSet) -> None:
        if not params.brightness_given:
            return
        if MIN_BRIGHTNESS <= params.brightness <= MAX_BRIGHTNESS:
            return
        self.sink.warning(
            DiagnosticCode.OUT_OF_RANGE,
            f"Desired brightness not in allowed range [0 - 255]! Brightness = "
            f"{params.brightness:g}. Will ignore it and use the camera default",
            key="brightness",
            value=params.brightness,
        )
        params.brightness_given = False
