# backend/integrations/__init__.py
"""
Parameter store integrations.
"""

from .param_store import (
    ParameterStore,
    InMemoryParameterStore,
    coerce_value,
)

__all__ = [
    "ParameterStore",
    "InMemoryParameterStore",
    "coerce_value",
]
