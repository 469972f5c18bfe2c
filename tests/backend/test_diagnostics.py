# tests/backend/test_diagnostics.py
"""
Tests for the diagnostic sink and parameter logging
"""

import logging

import pytest

from services.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    LoggingDiagnosticSink,
    Severity,
    configure_parameter_logging,
)


class TestLoggingDiagnosticSink:
    """Tests for LoggingDiagnosticSink"""

    def test_records_each_severity(self, sink):
        sink.info(DiagnosticCode.DEVICE_SELECTION, "first device")
        sink.warning(DiagnosticCode.OUT_OF_RANGE, "binning", key="binning")
        sink.error(DiagnosticCode.DEPRECATED_PARAMETER, "old key", key="start_exposure")

        assert [d.severity for d in sink.diagnostics] == [
            Severity.INFO, Severity.WARNING, Severity.ERROR,
        ]
        assert sink.diagnostics[2].details == {"key": "start_exposure"}

    def test_filters(self, sink):
        sink.warning(DiagnosticCode.OUT_OF_RANGE, "a")
        sink.warning(DiagnosticCode.OUT_OF_RANGE, "b")
        sink.error(DiagnosticCode.BRIGHTNESS_CONFLICT, "c")

        assert len(sink.by_code(DiagnosticCode.OUT_OF_RANGE)) == 2
        assert len(sink.by_severity(Severity.ERROR)) == 1

    def test_logs_at_matching_level(self, caplog):
        sink = LoggingDiagnosticSink(context="cam")

        with caplog.at_level(logging.INFO, logger="pylon_camera.parameters"):
            sink.warning(DiagnosticCode.OUT_OF_RANGE, "Unsupported binning", key="binning")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "[cam] Unsupported binning"
        assert record.code == "out_of_range"

    def test_stage_failure_recorded(self, sink):
        """Should record and re-raise stage failures"""
        with pytest.raises(RuntimeError):
            with sink.stage("resolve"):
                raise RuntimeError("boom")

        assert sink.stages[0].success is False
        assert sink.stages[0].error == "boom"

    def test_clear(self, sink):
        sink.info(DiagnosticCode.DEVICE_SELECTION, "x")
        with sink.stage("resolve"):
            pass

        sink.clear()

        assert sink.diagnostics == []
        assert sink.stages == []

    def test_to_dict(self, sink):
        sink.error(DiagnosticCode.BRIGHTNESS_CONFLICT, "dropped", brightness=120.0)

        data = sink.to_dict()

        assert data["context"] == "test"
        assert data["diagnostics"][0]["code"] == "brightness_conflict"
        assert data["diagnostics"][0]["severity"] == "error"
        assert data["diagnostics"][0]["details"] == {"brightness": 120.0}
        assert data["diagnostics"][0]["createdAt"].endswith("Z")


class TestDiagnostic:
    def test_defaults(self):
        diagnostic = Diagnostic(Severity.INFO, DiagnosticCode.DEVICE_SELECTION, "msg")
        assert diagnostic.details == {}


class TestConfigureParameterLogging:
    """Tests for configure_parameter_logging"""

    def test_installs_single_handler(self):
        configure_parameter_logging(level=logging.DEBUG)
        configure_parameter_logging(level=logging.WARNING)

        param_logger = logging.getLogger("pylon_camera.parameters")
        assert len(param_logger.handlers) == 1
        assert param_logger.level == logging.WARNING
        assert param_logger.propagate is False
