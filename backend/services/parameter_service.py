# backend/services/parameter_service.py
"""
Camera parameter service

Runs the resolution pass (resolver, then validator) against a
parameter store and hands out the finished ParameterSet.
"""

import logging
from typing import Optional

from integrations.param_store import ParameterStore
from models import ParameterSet
from .diagnostics import LoggingDiagnosticSink
from .resolver import ParameterResolver
from .validator import ParameterValidator

logger = logging.getLogger(__name__)


class CameraParameterService:
    """
    Service producing validated camera parameters.

    The store is passed per call and never kept, so the same service
    can serve any number of stores.
    """

    def __init__(self, sink: Optional[LoggingDiagnosticSink] = None):
        """Initialize parameter service"""
        self.sink = sink or LoggingDiagnosticSink()
        self.resolver = ParameterResolver(self.sink)
        self.validator = ParameterValidator(self.sink)

    def load(self, store: ParameterStore) -> ParameterSet:
        """
        Resolve and validate parameters from a store.

        Args:
            store: Parameter store to read from (and write corrections to)

        Returns:
            ParameterSet satisfying all range and consistency invariants
        """
        with self.sink.stage("resolve"):
            params = self.resolver.resolve(store)

        with self.sink.stage("validate"):
            self.validator.validate(params, store)

        logger.info(f"Camera parameters ready for frame '{params.camera_frame}'")
        logger.debug(params.summary())
        return params

    def set_frame_rate(
        self,
        params: ParameterSet,
        store: ParameterStore,
        frame_rate: float,
    ) -> None:
        """Change the frame rate and write it back to the store"""
        logger.info(f"Frame rate changed from {params.frame_rate:g} to {frame_rate:g} Hz")
        params.set_frame_rate(store, frame_rate)

