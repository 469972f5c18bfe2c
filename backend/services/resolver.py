# backend/services/resolver.py
"""
Parameter resolver.

Reads raw keys from a parameter store, including deprecated aliases,
and builds the pre-validation ParameterSet. Applies the rule that a
target brightness cannot be combined with fixed exposure and gain.
"""

import logging
from dataclasses import dataclass
from typing import Any, Tuple

from errors import ParameterTypeError
from integrations.param_store import ParameterStore
from models import ParameterSet, ShutterModeMapper
from .diagnostics import DiagnosticCode, DiagnosticSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeprecatedAlias:
    """Renamed parameter: old key still honoured, new key preferred"""
    deprecated_key: str
    canonical_key: str
    field: str
    hint: str = ""

    def message(self) -> str:
        text = (
            f"Using parameter '{self.deprecated_key}' is deprecated! "
            f"Please rename it to '{self.canonical_key}'"
        )
        if self.hint:
            text = f"{text}. {self.hint}"
        return text


_DEFAULT_YAML_HINT = "See params/default.yaml for how the parameter is used now"

DEPRECATED_ALIASES: Tuple[DeprecatedAlias, ...] = (
    DeprecatedAlias("desired_framerate", "frame_rate", "frame_rate"),
    DeprecatedAlias("start_exposure", "exposure", "exposure", _DEFAULT_YAML_HINT),
    DeprecatedAlias("target_gain", "gain", "gain", _DEFAULT_YAML_HINT),
)

# Brightness modifiers, read only when brightness is given and feasible
BRIGHTNESS_MODIFIERS: Tuple[str, ...] = (
    "brightness_continuous",
    "exposure_auto",
    "gain_auto",
)

MTU_SIZE_KEY = "gige/mtu_size"


class ParameterResolver:
    """
    Builds a ParameterSet from a parameter store.

    Canonical keys are read after the deprecated aliases, so when both
    an old and a new key are set the new key wins.
    """

    def __init__(self, sink: DiagnosticSink):
        self.sink = sink

    def resolve(self, store: ParameterStore) -> ParameterSet:
        params = ParameterSet()

        self._apply_deprecated_aliases(store, params)

        params.camera_frame = self._read(store, "camera_frame", params.camera_frame)
        params.device_user_id = self._read(store, "device_user_id", params.device_user_id)
        params.binning = self._read(store, "binning", params.binning)

        self._resolve_intensity(store, params)

        if store.has("frame_rate"):
            params.frame_rate = self._read(store, "frame_rate", params.frame_rate)
        if store.has(MTU_SIZE_KEY):
            params.mtu_size = self._read(store, MTU_SIZE_KEY, params.mtu_size)

        self._report_device_selection(params)

        params.shutter_mode = ShutterModeMapper.to_enum(self._read(store, "shutter_mode", ""))

        return params

    def _read(self, store: ParameterStore, key: str, default: Any) -> Any:
        try:
            return store.read(key, default)
        except ParameterTypeError as e:
            self.sink.warning(
                DiagnosticCode.TYPE_MISMATCH,
                f"{e.message}; keeping {default!r}",
                key=key,
                expected=e.expected,
                actual=e.actual,
            )
            return default

    def _apply_deprecated_aliases(self, store: ParameterStore, params: ParameterSet) -> None:
        for alias in DEPRECATED_ALIASES:
            if not store.has(alias.deprecated_key):
                continue
            self.sink.error(
                DiagnosticCode.DEPRECATED_PARAMETER,
                alias.message(),
                key=alias.deprecated_key,
                replacement=alias.canonical_key,
            )
            current = getattr(params, alias.field)
            setattr(params, alias.field, self._read(store, alias.deprecated_key, current))

    def _resolve_intensity(self, store: ParameterStore, params: ParameterSet) -> None:
        # Deprecated keys count as "given"; reading the canonical key is a
        # no-op when only the old one is set.
        params.exposure_given = store.has("exposure") or store.has("start_exposure")
        if params.exposure_given:
            params.exposure = self._read(store, "exposure", params.exposure)
            logger.debug(f"exposure is given and has value {params.exposure}")

        params.gain_given = store.has("gain") or store.has("target_gain")
        if params.gain_given:
            params.gain = self._read(store, "gain", params.gain)
            logger.debug(f"gain is given and has value {params.gain}")

        params.gamma_given = store.has("gamma")
        if params.gamma_given:
            params.gamma = self._read(store, "gamma", params.gamma)
            logger.debug(f"gamma is given and has value {params.gamma}")

        params.brightness_given = store.has("brightness")
        if not params.brightness_given:
            return

        params.brightness = self._read(store, "brightness", params.brightness)
        logger.debug(f"brightness is given and has value {params.brightness}")

        if params.exposure_given and params.gain_given:
            self.sink.error(
                DiagnosticCode.BRIGHTNESS_CONFLICT,
                f"Gain ('gain') and exposure time ('exposure') are both given and "
                f"therefore fixed! The desired brightness ({params.brightness:g}) "
                f"can't be reached. Ignoring brightness and only setting gain "
                f"and exposure",
                brightness=params.brightness,
                exposure=params.exposure,
                gain=params.gain,
            )
            params.brightness_given = False
            return

        for key in BRIGHTNESS_MODIFIERS:
            if store.has(key):
                setattr(params, key, self._read(store, key, getattr(params, key)))
                logger.debug(f"{key} is set to {getattr(params, key)}")

    def _report_device_selection(self, params: ParameterSet) -> None:
        if params.device_user_id:
            self.sink.info(
                DiagnosticCode.DEVICE_SELECTION,
                f"Trying to open the following camera: {params.device_user_id}",
                device_user_id=params.device_user_id,
            )
        else:
            self.sink.info(
                DiagnosticCode.DEVICE_SELECTION,
                "No device user ID set -> will open the camera device found first",
                device_user_id="",
            )
