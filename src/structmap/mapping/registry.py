"""
Field Configuration Registry
Explicit per-type configuration tables for types that cannot carry markers
"""
from __future__ import annotations

import threading
import weakref
from typing import Callable, Dict, List, Mapping

from structmap.domain.field import FieldConfig
from structmap.exceptions import InvalidArgumentError
from structmap.mapping.shapes import declared_names, has_closed_shape

ConfigTable = Dict[str, FieldConfig]


class FieldConfigRegistry:
    """
    Map from type to its field-configuration table.

    Tables are keyed by declared field name. A registered entry replaces
    whatever markers the field carries. Registration is expected at import
    time; tables are read-only afterwards.

    Names are checked against the declared fields of dataclasses, pydantic
    models and SQLAlchemy models. Plain classes and ``SimpleNamespace``
    accept any name, since their attributes may only exist per instance.
    """

    def __init__(self) -> None:
        self._tables: Dict[type, ConfigTable] = {}
        self._lock = threading.Lock()
        self._listeners: List[weakref.WeakMethod] = []

    def register(self, cls: type, table: Mapping[str, FieldConfig]) -> None:
        """
        Register the configuration table for ``cls``.

        Args:
            cls: The participating type
            table: Declared field name -> FieldConfig

        Raises:
            InvalidArgumentError: If ``cls`` is not a type, an entry is not a
                FieldConfig, or a key is not a declared field of ``cls``
        """
        if not isinstance(cls, type):
            raise InvalidArgumentError(
                "Configuration tables can only be registered for types",
                details={"argument": "cls", "value": repr(cls)},
            )
        for name, config in table.items():
            if not isinstance(config, FieldConfig):
                raise InvalidArgumentError(
                    f"Entry for {name!r} must be a FieldConfig",
                    details={"argument": "table", "field": name},
                )
        if has_closed_shape(cls):
            unknown = sorted(set(table) - set(declared_names(cls)))
            if unknown:
                raise InvalidArgumentError(
                    f"{cls.__name__} has no field(s) {', '.join(unknown)}",
                    details={"argument": "table", "type": cls.__name__, "unknown": unknown},
                )
        with self._lock:
            self._tables[cls] = dict(table)
        self._notify()

    def unregister(self, cls: type) -> None:
        with self._lock:
            removed = self._tables.pop(cls, None)
        if removed is not None:
            self._notify()

    def get(self, cls: type) -> ConfigTable:
        """Table for ``cls``; empty when none is registered."""
        return self._tables.get(cls, {})

    def subscribe(self, listener: Callable[[], None]) -> None:
        """
        Call bound method ``listener`` after every change.

        Only a weak reference is kept, so subscribers can be collected.
        """
        with self._lock:
            self._listeners = [ref for ref in self._listeners if ref() is not None]
            self._listeners.append(weakref.WeakMethod(listener))

    def _notify(self) -> None:
        with self._lock:
            self._listeners = [ref for ref in self._listeners if ref() is not None]
            listeners = [ref() for ref in self._listeners]
        for listener in listeners:
            if listener is not None:
                listener()
