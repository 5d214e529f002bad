"""
Mappable Field Contracts
Descriptors produced by field introspection
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class FieldConfig:
    """
    Per-field mapping configuration.
    
    One entry of a type's field-configuration table.
    
    Attributes:
        alias: Name used for matching instead of the declared name
        excluded: Never read or write this field during mapping
    """
    
    alias: Optional[str] = None
    excluded: bool = False


@dataclass(frozen=True)
class MappableField:
    """
    A named, typed slot on an object.
    
    Attributes:
        name: Declared identifier
        effective_name: Alias if configured, else the declared name
        type: Static type tag compared by identity/equality during mapping
        excluded: Whether the field is excluded from mapping
        writable: False for read-only properties
    """
    
    name: str
    effective_name: str
    type: Any
    excluded: bool = False
    writable: bool = True
    
    def matches(self, name: str) -> bool:
        """Case-insensitive comparison against the declared name."""
        return self.name.lower() == name.lower()
