# backend/errors.py
"""
Pylon Camera Parameter Exception Hierarchy

Exceptions raised by the parameter store and configuration layers.
The resolution/validation pass itself never raises; it reports through
the diagnostic sink instead.
"""

from typing import Any, Dict, Optional


class PylonParamError(Exception):
    """Base exception for all parameter errors"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
        recovery_hint: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "error": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
        }
        if self.details:
            result["details"] = self.details
        if self.recovery_hint:
            result["recoveryHint"] = self.recovery_hint
        return result


# =============================================================================
# PARAMETER STORE ERRORS
# =============================================================================

class ParameterStoreError(PylonParamError):
    """Base exception for parameter store errors"""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
        recovery_hint: Optional[str] = None
    ):
        super().__init__(
            message=message,
            details={"key": key, **(details or {})} if key else details,
            recoverable=recoverable,
            recovery_hint=recovery_hint
        )
        self.key = key


class ParameterFileNotFoundError(ParameterStoreError):
    """Parameter file does not exist"""

    def __init__(self, path: str):
        super().__init__(
            message=f"Parameter file not found: {path}",
            details={"path": path},
            recoverable=False,
            recovery_hint="Check the path or start from params/default.yaml"
        )
        self.path = path


class UnsupportedParameterFormatError(ParameterStoreError):
    """Parameter file extension is not YAML or JSON"""

    def __init__(self, path: str, suffix: str):
        super().__init__(
            message=f"Unsupported parameter file format: {suffix or '(none)'}",
            details={"path": path, "suffix": suffix},
            recoverable=False,
            recovery_hint="Use a .yaml, .yml or .json parameter file"
        )


class InvalidParameterRootError(ParameterStoreError):
    """Parameter file content is not a mapping"""

    def __init__(self, path: str, root_type: str):
        super().__init__(
            message=f"Parameter file root must be a mapping, got {root_type}",
            details={"path": path, "rootType": root_type},
            recoverable=False,
            recovery_hint="Write parameters as 'key: value' pairs at the top level"
        )


class InvalidParameterFileError(ParameterStoreError):
    """Parameter file cannot be decoded or parsed"""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Invalid parameter file {path}: {reason}",
            details={"path": path, "reason": reason},
            recoverable=False,
            recovery_hint="Fix the YAML/JSON syntax and save the file as UTF-8"
        )
        self.path = path


class InvalidParameterKeyError(ParameterStoreError):
    """Top-level parameter name is not a string"""

    def __init__(self, key: Any, path: Optional[str] = None):
        super().__init__(
            message=f"Parameter name must be a string, got {type(key).__name__} {key!r}",
            details={"key": repr(key), "path": path} if path else {"key": repr(key)},
            recoverable=False,
            recovery_hint="Quote the parameter name in the file"
        )
        self.path = path


class ParameterTypeError(ParameterStoreError):
    """Stored value cannot be read as the requested type"""

    def __init__(self, key: str, expected: str, actual: str):
        super().__init__(
            message=f"Parameter '{key}' has type {actual}, expected {expected}",
            key=key,
            details={"expected": expected, "actual": actual},
            recoverable=True,
            recovery_hint="Using the default value for this parameter"
        )
        self.expected = expected
        self.actual = actual


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(PylonParamError):
    """Application configuration error"""

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
        recovery_hint: Optional[str] = None
    ):
        super().__init__(
            message=message,
            details={"setting": setting} if setting else None,
            recoverable=False,
            recovery_hint=recovery_hint or "Check your .env file or environment variables"
        )
        self.setting = setting


class InvalidLogLevelError(ConfigurationError):
    """Configured log level is not a known logging level"""

    def __init__(self, level: str):
        super().__init__(
            message=f"Unknown log level: {level}",
            setting="LOG_LEVEL",
            recovery_hint="Use one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
