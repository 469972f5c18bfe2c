# backend/services/__init__.py
"""
Camera Parameter Services

This package contains the resolution pass: resolver, validator, the
diagnostic sink they report through, and the service tying them together.
"""

from .diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticSink,
    LoggingDiagnosticSink,
    Severity,
    StageMetrics,
    configure_parameter_logging,
)
from .resolver import ParameterResolver, DeprecatedAlias, DEPRECATED_ALIASES
from .validator import ParameterValidator
from .parameter_service import CameraParameterService

__all__ = [
    # Diagnostics
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "Severity",
    "StageMetrics",
    "configure_parameter_logging",
    # Resolution pass
    "ParameterResolver",
    "DeprecatedAlias",
    "DEPRECATED_ALIASES",
    "ParameterValidator",
    # Service
    "CameraParameterService",
]
