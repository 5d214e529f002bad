"""
Mapping Domain Layer
Pure field contracts with no framework dependencies
"""
from structmap.domain.field import FieldConfig, MappableField
from structmap.domain.markers import Alias, Ignore, column_info, ignored, mapped

__all__ = [
    "FieldConfig",
    "MappableField",
    "Alias",
    "Ignore",
    "mapped",
    "ignored",
    "column_info",
]
