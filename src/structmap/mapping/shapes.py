"""
Field Shapes
Per-shape readers for the declared fields of a class
"""
from __future__ import annotations

import dataclasses
import inspect
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple, get_args, get_origin

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapped, Mapper

from structmap.domain.field import FieldConfig
from structmap.domain.markers import config_from_markers, config_from_metadata, merge_configs

# (name, type tag, marker config, writable)
RawField = Tuple[str, Any, FieldConfig, bool]

_FRAMEWORK_MODULES = ("sqlalchemy", "pydantic", "typing", "builtins")


# ------------------------------------------------------------------------------
# Annotation helpers
# ------------------------------------------------------------------------------
def _own_annotations(obj: Any) -> Dict[str, Any]:
    # Unresolvable forward references stay as strings.
    try:
        return inspect.get_annotations(obj, eval_str=True)
    except NameError:
        return inspect.get_annotations(obj)


def _class_hints(cls: type) -> Dict[str, Any]:
    """Annotations across the MRO, base classes first, framework bases skipped."""
    hints: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object or klass.__module__.split(".")[0] in _FRAMEWORK_MODULES:
            continue
        hints.update(_own_annotations(klass))
    return hints


def _is_classvar(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is ClassVar or get_origin(hint) is ClassVar


def _unwrap(hint: Any) -> Tuple[Any, Tuple[Any, ...]]:
    """Split ``Annotated[T, *extras]`` into ``(T, extras)``."""
    if get_origin(hint) is Annotated:
        return hint.__origin__, tuple(hint.__metadata__)
    return hint, ()


def _sqlalchemy_mapper(cls: type) -> Optional[Mapper]:
    mapper = sa_inspect(cls, raiseerr=False)
    return mapper if isinstance(mapper, Mapper) else None


# ------------------------------------------------------------------------------
# Per-shape field readers
# ------------------------------------------------------------------------------
def _sqlalchemy_fields(cls: type, mapper: Mapper) -> List[RawField]:
    hints = _class_hints(cls)
    raw: List[RawField] = []
    for prop in mapper.column_attrs:
        column = prop.columns[0]
        hint = hints.get(prop.key)
        extras: Tuple[Any, ...] = ()
        if hint is not None and get_origin(hint) is Mapped:
            type_, extras = _unwrap(get_args(hint)[0])
        else:
            try:
                type_ = column.type.python_type
            except NotImplementedError:
                type_ = object
        info = {**getattr(column, "info", {}), **prop.info}
        config = merge_configs(config_from_markers(extras), config_from_metadata(info))
        raw.append((prop.key, type_, config, True))
    return raw


def _pydantic_fields(cls: type) -> List[RawField]:
    frozen = bool(cls.model_config.get("frozen", False))
    raw: List[RawField] = []
    for name, info in cls.model_fields.items():
        config = config_from_markers(info.metadata)
        raw.append((name, info.annotation, config, not (frozen or info.frozen)))
    return raw


def _dataclass_fields(cls: type) -> List[RawField]:
    hints = _class_hints(cls)
    frozen = cls.__dataclass_params__.frozen
    raw: List[RawField] = []
    for f in dataclasses.fields(cls):
        type_, extras = _unwrap(hints.get(f.name, f.type))
        config = merge_configs(config_from_markers(extras), config_from_metadata(f.metadata))
        raw.append((f.name, type_, config, not frozen))
    return raw


def _annotated_fields(cls: type) -> List[RawField]:
    raw: List[RawField] = []
    seen = set()
    for name, hint in _class_hints(cls).items():
        if name.startswith("_") or _is_classvar(hint):
            continue
        type_, extras = _unwrap(hint)
        raw.append((name, type_, config_from_markers(extras), True))
        seen.add(name)

    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_") or name in seen or not isinstance(attr, property):
                continue
            hint = _own_annotations(attr.fget).get("return", object) if attr.fget else object
            type_, extras = _unwrap(hint)
            raw.append((name, type_, config_from_markers(extras), attr.fset is not None))
            seen.add(name)
    return raw


def declared_fields(cls: type) -> List[RawField]:
    """Fields of ``cls`` with their marker configuration, before registry overrides."""
    mapper = _sqlalchemy_mapper(cls)
    if mapper is not None:
        return _sqlalchemy_fields(cls, mapper)
    if issubclass(cls, BaseModel):
        return _pydantic_fields(cls)
    if dataclasses.is_dataclass(cls):
        return _dataclass_fields(cls)
    return _annotated_fields(cls)


def declared_names(cls: type) -> List[str]:
    return [name for name, _, _, _ in declared_fields(cls)]


def has_closed_shape(cls: type) -> bool:
    """True when every field of ``cls`` is declared on the class itself."""
    return (
        _sqlalchemy_mapper(cls) is not None
        or issubclass(cls, BaseModel)
        or dataclasses.is_dataclass(cls)
    )
