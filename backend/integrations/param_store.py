# backend/integrations/param_store.py
"""
Parameter store interface and in-memory implementation.

The store is the key/value lookup the resolver reads from and the
validator writes corrections back to. Keys containing "/" address
nested namespaces, so "gige/mtu_size" maps to {"gige": {"mtu_size": ...}}.
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from errors import (
    InvalidParameterFileError,
    InvalidParameterKeyError,
    InvalidParameterRootError,
    ParameterFileNotFoundError,
    ParameterTypeError,
    UnsupportedParameterFormatError,
)

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = "/"

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


class ParameterStore(ABC):
    """
    Abstract key/value parameter store.

    Every call is a discrete request; implementations own any locking.
    """

    @abstractmethod
    def has(self, key: str) -> bool:
        """Return True if the key is set"""
        pass

    @abstractmethod
    def read(self, key: str, default: Any) -> Any:
        """
        Return the stored value, or default unchanged if the key is absent.

        Raises:
            ParameterTypeError: If the stored value does not match the
                type of default
        """
        pass

    @abstractmethod
    def write(self, key: str, value: Any) -> None:
        """Set the key to value"""
        pass


def coerce_value(key: str, value: Any, default: Any) -> Any:
    """
    Coerce a stored value to the type of default.

    Ints are accepted where floats are expected. Bools are never taken
    from numbers, and numbers never from bools. A None default accepts
    anything.

    Raises:
        ParameterTypeError: If the value cannot be read as that type
    """
    if default is None:
        return value

    expected = type(default)

    if expected is bool:
        if isinstance(value, bool):
            return value
    elif expected is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif expected is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif isinstance(value, expected):
        return value

    raise ParameterTypeError(key, expected.__name__, type(value).__name__)


class InMemoryParameterStore(ParameterStore):
    """
    Dict-backed parameter store.

    Values are kept as a nested mapping. Every write is also appended to
    ``writes`` so callers can see what was synced back.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = {}
        self.writes: List[Tuple[str, Any]] = []
        for key, value in (data or {}).items():
            if not isinstance(key, str):
                raise InvalidParameterKeyError(key)
            self._set(key, copy.deepcopy(value))

    # -------------------------------------------------------------------------
    # Key addressing
    # -------------------------------------------------------------------------

    @staticmethod
    def _split(key: str) -> List[str]:
        return [part for part in key.split(NAMESPACE_SEPARATOR) if part]

    def _lookup(self, key: str) -> Tuple[bool, Any]:
        node: Any = self._data
        for part in self._split(key):
            if not isinstance(node, dict) or part not in node:
                return False, None
            node = node[part]
        return True, node

    def _set(self, key: str, value: Any) -> None:
        parts = self._split(key)
        if not parts:
            raise ValueError("Parameter key must not be empty")

        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    # -------------------------------------------------------------------------
    # ParameterStore interface
    # -------------------------------------------------------------------------

    def has(self, key: str) -> bool:
        found, _ = self._lookup(key)
        return found

    def read(self, key: str, default: Any) -> Any:
        found, value = self._lookup(key)
        if not found:
            return default

        return coerce_value(key, value, default)

    def write(self, key: str, value: Any) -> None:
        self._set(key, copy.deepcopy(value))
        self.writes.append((key, value))
        logger.debug(f"Parameter '{key}' set to {value!r}")

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "InMemoryParameterStore":
        """
        Load a parameter file.

        Supported formats:
            - YAML (.yaml, .yml)
            - JSON (.json)

        An empty file yields an empty store.

        Raises:
            ParameterFileNotFoundError: If the file does not exist
            UnsupportedParameterFormatError: If the suffix is not supported
            InvalidParameterFileError: If the file is not valid UTF-8 YAML/JSON
            InvalidParameterRootError: If the root is not a mapping
            InvalidParameterKeyError: If a top-level key is not a string
        """
        path = Path(path)
        if not path.exists():
            raise ParameterFileNotFoundError(str(path))

        suffix = path.suffix.lower()

        if suffix not in YAML_SUFFIXES | JSON_SUFFIXES:
            raise UnsupportedParameterFormatError(str(path), path.suffix)

        try:
            with path.open("r", encoding="utf-8") as f:
                text = f.read()
            if suffix in YAML_SUFFIXES:
                data = yaml.safe_load(text)
            else:
                data = json.loads(text) if text.strip() else None
        except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidParameterFileError(str(path), str(e)) from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise InvalidParameterRootError(str(path), type(data).__name__)

        for key in data:
            if not isinstance(key, str):
                raise InvalidParameterKeyError(key, str(path))

        logger.info(f"Loaded {len(data)} top-level parameters from {path}")
        return cls(data)

    def save(self, path: Union[str, Path]) -> None:
        """Write the current parameters to a YAML or JSON file"""
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in YAML_SUFFIXES:
            with path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(self._data, f, default_flow_style=False, sort_keys=True)
        elif suffix in JSON_SUFFIXES:
            with path.open("w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, sort_keys=True)
        else:
            raise UnsupportedParameterFormatError(str(path), path.suffix)

        logger.info(f"Saved parameters to {path}")
