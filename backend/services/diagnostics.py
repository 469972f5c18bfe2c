# backend/services/diagnostics.py
"""
Parameter diagnostics.

Provides the diagnostic sink the resolver and validator report through,
plus stage timing for the resolution pass.
"""

import logging
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generator, List, Optional

logger = logging.getLogger("pylon_camera.parameters")


class Severity(str, Enum):
    """Diagnostic severity. None of them is fatal."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticCode(str, Enum):
    """What a diagnostic is about"""
    DEPRECATED_PARAMETER = "deprecated_parameter"   # Old key in use, value still applied
    OUT_OF_RANGE = "out_of_range"                   # Value corrected by its field policy
    TYPE_MISMATCH = "type_mismatch"                 # Stored value has the wrong type, default kept
    BRIGHTNESS_CONFLICT = "brightness_conflict"     # Brightness dropped, exposure+gain pinned
    DEVICE_SELECTION = "device_selection"           # Which camera will be opened


_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass
class Diagnostic:
    """A single reported condition"""
    severity: Severity
    code: DiagnosticCode
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
            "createdAt": self.created_at.isoformat() + "Z",
        }


@dataclass
class StageMetrics:
    """Timing for a single stage of the pass"""
    stage: str
    started_at: datetime
    duration_ms: Optional[float] = None
    success: bool = True
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage,
            "startedAt": self.started_at.isoformat() + "Z",
            "durationMs": self.duration_ms,
            "success": self.success,
            "error": self.error,
        }


class DiagnosticSink(ABC):
    """
    Receiver for resolution and validation diagnostics.

    Implementations decide where diagnostics go; emitting never raises
    into the caller's control flow.
    """

    @abstractmethod
    def emit(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic"""
        pass

    def info(self, code: DiagnosticCode, message: str, **details: Any) -> None:
        self.emit(Diagnostic(Severity.INFO, code, message, details))

    def warning(self, code: DiagnosticCode, message: str, **details: Any) -> None:
        self.emit(Diagnostic(Severity.WARNING, code, message, details))

    def error(self, code: DiagnosticCode, message: str, **details: Any) -> None:
        self.emit(Diagnostic(Severity.ERROR, code, message, details))


class LoggingDiagnosticSink(DiagnosticSink):
    """
    Sink that logs each diagnostic and keeps a record of it.

    Also times stages of the pass via the ``stage`` context manager.
    """

    def __init__(self, context: str = "pylon_camera"):
        self.context = context
        self.diagnostics: List[Diagnostic] = []
        self.stages: List[StageMetrics] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        logger.log(
            _LOG_LEVELS[diagnostic.severity],
            f"[{self.context}] {diagnostic.message}",
            extra={"code": diagnostic.code.value, "details": diagnostic.details},
        )

    def by_code(self, code: DiagnosticCode) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]

    def by_severity(self, severity: Severity) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]

    def clear(self) -> None:
        self.diagnostics.clear()
        self.stages.clear()

    @contextmanager
    def stage(self, name: str) -> Generator[StageMetrics, None, None]:
        """
        Context manager for timing a stage of the pass.

        Usage:
            with sink.stage("resolve"):
                params = resolver.resolve(store)
        """
        metrics = StageMetrics(stage=name, started_at=datetime.utcnow())
        start = time.perf_counter()
        try:
            yield metrics
        except Exception as e:
            metrics.success = False
            metrics.error = str(e)
            logger.error(f"[{self.context}] Stage '{name}' failed: {e}")
            raise
        finally:
            metrics.duration_ms = (time.perf_counter() - start) * 1000
            self.stages.append(metrics)
            logger.debug(
                f"[{self.context}] Stage '{name}' finished in {metrics.duration_ms:.1f}ms"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "context": self.context,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "stages": [s.to_dict() for s in self.stages],
        }


def configure_parameter_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
) -> None:
    """
    Configure parameter diagnostics logging.

    Args:
        level: Logging level
        format_string: Optional custom format string
    """
    if format_string is None:
        format_string = (
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        )

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string))

    param_logger = logging.getLogger("pylon_camera.parameters")
    param_logger.setLevel(level)
    param_logger.handlers = [handler]
    param_logger.propagate = False
