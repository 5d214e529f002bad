"""
Field Introspector
Enumerates the mappable fields of a type or object in declaration order
"""
from __future__ import annotations

import threading
import weakref
from typing import Any, Dict, Optional, Tuple

from structmap.domain.field import FieldConfig, MappableField
from structmap.mapping.registry import FieldConfigRegistry
from structmap.mapping.shapes import declared_fields


def _is_data_descriptor(attr: Any) -> bool:
    return hasattr(attr, "__set__") or hasattr(attr, "__delete__")


class FieldIntrospector:
    """
    Resolves the ordered Mappable Fields of a type or object.

    Supported shapes, in lookup order: SQLAlchemy mapped classes, pydantic
    models, dataclasses, plain annotated classes (annotations then
    properties). For instances, public instance attributes not covered by
    the declared fields follow them, typed by runtime value.

    Per-type results are cached when ``cache`` is true. The cache holds
    classes weakly and is dropped whenever the registry changes.
    """

    def __init__(self, registry: Optional[FieldConfigRegistry] = None, *, cache: bool = True) -> None:
        self.registry = registry if registry is not None else FieldConfigRegistry()
        self._cache: Optional[weakref.WeakKeyDictionary] = weakref.WeakKeyDictionary() if cache else None
        self._cache_lock = threading.Lock()
        self.registry.subscribe(self.cache_clear)

    def fields(self, obj_or_type: Any) -> Tuple[MappableField, ...]:
        """
        Enumerate mappable fields.

        Args:
            obj_or_type: A class or an instance; ``None`` yields no fields

        Returns:
            Declared fields in declaration order, then (for instances) the
            remaining instance attributes in insertion order
        """
        if obj_or_type is None:
            return ()
        if isinstance(obj_or_type, type):
            return self._describe_type(obj_or_type)
        declared = self._describe_type(type(obj_or_type))
        return declared + self._describe_instance(obj_or_type, {f.name for f in declared})

    def cache_clear(self) -> None:
        if self._cache is not None:
            with self._cache_lock:
                self._cache.clear()

    def _describe_type(self, cls: type) -> Tuple[MappableField, ...]:
        if self._cache is None:
            return self._describe_type_uncached(cls)
        with self._cache_lock:
            described = self._cache.get(cls)
        if described is None:
            described = self._describe_type_uncached(cls)
            with self._cache_lock:
                self._cache[cls] = described
        return described

    def _table_for(self, cls: type) -> Dict[str, FieldConfig]:
        # Subclass tables override base tables.
        table: Dict[str, FieldConfig] = {}
        for klass in reversed(cls.__mro__):
            table.update(self.registry.get(klass))
        return table

    def _describe_type_uncached(self, cls: type) -> Tuple[MappableField, ...]:
        table = self._table_for(cls)
        result = []
        for name, type_, marker_config, writable in declared_fields(cls):
            config = table.get(name, marker_config)
            result.append(
                MappableField(
                    name=name,
                    effective_name=config.alias or name,
                    type=type_,
                    excluded=config.excluded,
                    writable=writable,
                )
            )
        return tuple(result)

    def _describe_instance(self, obj: Any, declared: set) -> Tuple[MappableField, ...]:
        attrs = getattr(obj, "__dict__", None) or {}
        cls = type(obj)
        table = self._table_for(cls)
        result = []
        for name, value in attrs.items():
            # ORM-managed attributes (e.g. loaded relationships) live behind class descriptors.
            if name.startswith("_") or name in declared or _is_data_descriptor(getattr(cls, name, None)):
                continue
            config = table.get(name, FieldConfig())
            result.append(
                MappableField(
                    name=name,
                    effective_name=config.alias or name,
                    type=type(value),
                    excluded=config.excluded,
                )
            )
        return tuple(result)
