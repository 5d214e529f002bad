"""
Value Accessor
Generic case-insensitive get/set of a named field on an arbitrary object
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from structmap.domain.field import MappableField
from structmap.mapping.introspector import FieldIntrospector


class ValueAccessor:
    def __init__(self, introspector: FieldIntrospector) -> None:
        self.introspector = introspector

    def find(self, obj: Any, field_name: str) -> Optional[MappableField]:
        """
        Field of ``obj`` named ``field_name``.

        An exact match wins; otherwise the first case-insensitive match.
        """
        fallback = None
        for field in self.introspector.fields(obj):
            if field.name == field_name:
                return field
            if fallback is None and field.matches(field_name):
                fallback = field
        return fallback

    def read(self, obj: Any, field: MappableField) -> Any:
        """Value of an already-resolved field."""
        return getattr(obj, field.name)

    def write(self, obj: Any, field: MappableField, value: Any) -> None:
        """Assign an already-resolved field."""
        setattr(obj, field.name, value)

    def get(self, obj: Any, field_name: str, default: Any = None) -> Any:
        """
        Read a field by declared name.

        Returns:
            The field value, or ``default`` when ``obj`` is None or has no such field
        """
        if obj is None:
            return default
        field = self.find(obj, field_name)
        if field is None:
            return default
        return getattr(obj, field.name, default)

    def set(self, obj: Any, field_name: str, value: Any) -> bool:
        """
        Assign a field by declared name.

        Returns:
            False (and no mutation) when the field does not exist
        """
        if obj is None:
            return False
        field = self.find(obj, field_name)
        if field is None:
            return False
        self.write(obj, field, value)
        return True

    def values(self, obj: Any) -> Dict[str, Any]:
        """Declared name -> current value, in declaration order."""
        return {field.name: self.read(obj, field) for field in self.introspector.fields(obj)}
