"""
Mapping Layer
Field introspection, value access and the mapping engine
"""
from structmap.mapping.accessor import ValueAccessor
from structmap.mapping.engine import (
    ObjectMapper,
    default_registry,
    field_values,
    fields,
    get_default_mapper,
    get_field_value,
    map_into,
    map_new,
    map_objects,
    register,
    set_field_value,
)
from structmap.mapping.introspector import FieldIntrospector
from structmap.mapping.registry import FieldConfigRegistry

__all__ = [
    "ObjectMapper",
    "FieldIntrospector",
    "FieldConfigRegistry",
    "ValueAccessor",
    "default_registry",
    "get_default_mapper",
    "map_objects",
    "map_into",
    "map_new",
    "register",
    "fields",
    "get_field_value",
    "set_field_value",
    "field_values",
]
