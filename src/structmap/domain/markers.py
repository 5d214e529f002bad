"""
Declarative Field Markers
Metadata attached to fields at type-definition time
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from structmap.domain.field import FieldConfig
from structmap.exceptions import InvalidArgumentError

# Keys used in dataclass field metadata and SQLAlchemy Column.info
ALIAS_KEY = "structmap_alias"
IGNORE_KEY = "structmap_ignore"


@dataclass(frozen=True)
class Alias:
    """
    Use ``name`` instead of the declared field name when matching.
    
    Usage:
        first_name: Annotated[str, Alias("name")] = ""
    """
    
    name: str
    
    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgumentError(
                "Alias name must be a non-empty string",
                details={"argument": "name", "value": repr(self.name)},
            )


@dataclass(frozen=True)
class Ignore:
    """Never read or write this field during mapping."""


def mapped(alias: Optional[str] = None, **field_kwargs: Any) -> Any:
    """
    ``dataclasses.field`` carrying an alias.
    
    Args:
        alias: Name to match instead of the declared name
        **field_kwargs: Passed through to ``dataclasses.field``
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    if alias is not None:
        metadata[ALIAS_KEY] = Alias(alias).name
    return dataclasses.field(metadata=metadata, **field_kwargs)


def ignored(**field_kwargs: Any) -> Any:
    """``dataclasses.field`` excluded from mapping."""
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[IGNORE_KEY] = True
    return dataclasses.field(metadata=metadata, **field_kwargs)


def column_info(alias: Optional[str] = None, ignore: bool = False) -> Dict[str, Any]:
    """
    ``info`` dict for ``mapped_column``/``Column``.
    
    Usage:
        name: Mapped[str] = mapped_column(String(80), info=column_info(alias="first_name"))
    """
    info: Dict[str, Any] = {}
    if alias is not None:
        info[ALIAS_KEY] = Alias(alias).name
    if ignore:
        info[IGNORE_KEY] = True
    return info


def config_from_markers(markers: Iterable[Any]) -> FieldConfig:
    """Fold ``Alias``/``Ignore`` objects into a FieldConfig; other objects are ignored."""
    alias: Optional[str] = None
    excluded = False
    for marker in markers:
        if isinstance(marker, Alias):
            alias = marker.name
        elif isinstance(marker, Ignore) or marker is Ignore:
            excluded = True
    return FieldConfig(alias=alias, excluded=excluded)


def config_from_metadata(metadata: Any) -> FieldConfig:
    """FieldConfig from a dataclass metadata mapping or a Column.info dict."""
    if not metadata:
        return FieldConfig()
    return FieldConfig(
        alias=metadata.get(ALIAS_KEY),
        excluded=bool(metadata.get(IGNORE_KEY, False)),
    )


def merge_configs(*configs: FieldConfig) -> FieldConfig:
    """Later configs override earlier ones; exclusion is sticky."""
    alias: Optional[str] = None
    excluded = False
    for config in configs:
        if config.alias is not None:
            alias = config.alias
        excluded = excluded or config.excluded
    return FieldConfig(alias=alias, excluded=excluded)
