"""
structmap - Structural Object Mapper
Copies same-named, same-typed fields between objects of unrelated types
"""

# Domain layer
from structmap.domain import (
    Alias,
    FieldConfig,
    Ignore,
    MappableField,
    column_info,
    ignored,
    mapped,
)

# Errors & configuration
from structmap.config import MapperSettings, get_settings
from structmap.exceptions import InvalidArgumentError, MappingError, UnsupportedTypeError

# Infrastructure layer
from structmap.infrastructure import bind_context, clear_context, configure_logging, get_logger

# Mapping layer
from structmap.mapping import (
    FieldConfigRegistry,
    FieldIntrospector,
    ObjectMapper,
    ValueAccessor,
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

__version__ = "0.1.0"

__all__ = [
    # Domain
    "Alias",
    "Ignore",
    "FieldConfig",
    "MappableField",
    "mapped",
    "ignored",
    "column_info",
    # Errors & configuration
    "MappingError",
    "InvalidArgumentError",
    "UnsupportedTypeError",
    "MapperSettings",
    "get_settings",
    # Infrastructure - Observability
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Mapping
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
