"""
Pytest configuration and fixtures for camera parameter tests.
"""

import pytest
import sys
from pathlib import Path

# Add backend to path for imports
backend_path = Path(__file__).parent.parent / "backend"
sys.path.insert(0, str(backend_path))

REPO_ROOT = Path(__file__).parent.parent


@pytest.fixture
def default_parameter_file():
    """Path to the shipped default parameter file."""
    return REPO_ROOT / "params" / "default.yaml"


@pytest.fixture
def make_store():
    """Factory for in-memory parameter stores."""
    from integrations.param_store import InMemoryParameterStore

    def _make(params=None, **kwargs):
        return InMemoryParameterStore({**(params or {}), **kwargs})

    return _make


@pytest.fixture
def sink():
    """Recording diagnostic sink."""
    from services.diagnostics import LoggingDiagnosticSink
    return LoggingDiagnosticSink(context="test")


@pytest.fixture
def service(sink):
    """Parameter service bound to the recording sink."""
    from services.parameter_service import CameraParameterService
    return CameraParameterService(sink)


@pytest.fixture
def valid_parameters():
    """Parameters that already satisfy every range check."""
    return {
        "camera_frame": "left_camera",
        "device_user_id": "cam-left",
        "binning": 2,
        "exposure": 2000.0,
        "gamma": 0.8,
        "brightness": 120,
        "brightness_continuous": True,
        "exposure_auto": False,
        "gain_auto": True,
        "frame_rate": 10.0,
        "gige/mtu_size": 1500,
        "shutter_mode": "global",
    }


@pytest.fixture(autouse=True)
def reset_parameter_logger():
    """Undo configure_parameter_logging between tests."""
    import logging

    yield
    param_logger = logging.getLogger("pylon_camera.parameters")
    param_logger.handlers = []
    param_logger.propagate = True
    param_logger.setLevel(logging.NOTSET)
