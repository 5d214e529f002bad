"""
Mapping Engine
Copies same-named, same-typed fields from ordered sources into a destination
"""
from __future__ import annotations

import functools
import inspect
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar

from structmap.config import MapperSettings, get_settings
from structmap.domain.field import FieldConfig, MappableField
from structmap.exceptions import InvalidArgumentError, UnsupportedTypeError
from structmap.infrastructure.observability import get_logger, mapping_context
from structmap.mapping.accessor import ValueAccessor
from structmap.mapping.introspector import FieldIntrospector
from structmap.mapping.registry import FieldConfigRegistry

T = TypeVar("T")

logger = get_logger(__name__)

default_registry = FieldConfigRegistry()

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _ensure_default_constructible(cls: Any) -> None:
    if not isinstance(cls, type):
        raise UnsupportedTypeError(
            f"{cls!r} is not a class",
            details={"type": repr(cls)},
        )
    if inspect.isabstract(cls):
        raise UnsupportedTypeError(
            f"{cls.__name__} is abstract",
            details={"type": cls.__name__},
        )
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); construction decides.
        return
    required = [
        p.name
        for p in signature.parameters.values()
        if p.default is inspect.Parameter.empty and p.kind not in _VARIADIC
    ]
    if required:
        raise UnsupportedTypeError(
            f"{cls.__name__} cannot be constructed without arguments",
            details={"type": cls.__name__, "required": required},
        )


class ObjectMapper:
    """
    Structural mapper.

    For every destination field, in declaration order, the first source field
    whose declared name equals the destination's effective name
    (case-insensitive) and whose type tag is identical is copied. Sources are
    merged one at a time, so the last matching source wins. Fields with no
    qualifying match are left untouched; mismatches are skipped, never raised.

    Usage:
        mapper = ObjectMapper()
        mapper.map(person, person_row, birthday_value)
        person = mapper.map_new(Person, [person_row])
    """

    def __init__(
        self,
        introspector: Optional[FieldIntrospector] = None,
        settings: Optional[MapperSettings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.introspector = introspector or FieldIntrospector(
            default_registry, cache=self.settings.cache_fields
        )
        self.accessor = ValueAccessor(self.introspector)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def map(self, destination: Any, *sources: Any) -> None:
        """Variadic form of :meth:`map_into`."""
        self.map_into(destination, sources)

    def map_into(self, destination: Any, sources: Iterable[Any]) -> None:
        """
        Merge each source into ``destination``, in order.

        Args:
            destination: Object mutated in place
            sources: Ordered source objects; never retained

        Raises:
            InvalidArgumentError: If ``destination`` or a source is None. Sources
                before the offending one have already been merged.
        """
        if destination is None:
            raise InvalidArgumentError(
                "destination must not be None",
                details={"argument": "destination"},
            )
        if sources is None:
            raise InvalidArgumentError(
                "sources must not be None",
                details={"argument": "sources"},
            )
        for position, source in enumerate(sources):
            if source is None:
                raise InvalidArgumentError(
                    f"source at position {position} must not be None",
                    details={"argument": "sources", "position": position},
                )
            self._merge(destination, source)

    def map_new(self, cls: Type[T], sources: Iterable[Any]) -> T:
        """
        Build a default-constructed ``cls`` and merge ``sources`` into it.

        Raises:
            UnsupportedTypeError: If ``cls`` needs constructor arguments
            InvalidArgumentError: If a source is None
        """
        _ensure_default_constructible(cls)
        instance = cls()
        self.map_into(instance, sources)
        return instance

    def register(self, cls: type, table: Mapping[str, FieldConfig]) -> None:
        """Register an explicit field-configuration table for ``cls``."""
        self.introspector.registry.register(cls, table)

    def get_field_value(self, obj: Any, field_name: str, default: Any = None) -> Any:
        return self.accessor.get(obj, field_name, default)

    def set_field_value(self, obj: Any, field_name: str, value: Any) -> bool:
        return self.accessor.set(obj, field_name, value)

    def field_values(self, obj: Any) -> dict:
        return self.accessor.values(obj)

    # ------------------------------------------------------------------
    # Single-source merge pass
    # ------------------------------------------------------------------
    def _merge(self, destination: Any, source: Any) -> None:
        if not self.settings.trace:
            self._merge_fields(destination, source)
            return
        with mapping_context(destination, source):
            self._merge_fields(destination, source)

    def _merge_fields(self, destination: Any, source: Any) -> None:
        source_fields = self.introspector.fields(source)
        claimed = set()

        for field in self.introspector.fields(destination):
            if field.excluded:
                self._trace(field, "excluded")
                continue

            key = field.effective_name.lower()
            if key in claimed:
                self._trace(field, "duplicate_effective_name")
                continue
            claimed.add(key)

            # Source-side aliases are not consulted.
            match = next((s for s in source_fields if s.matches(field.effective_name)), None)
            if match is None:
                self._trace(field, "no_match")
                continue
            if match.type != field.type:
                self._trace(field, "type_mismatch", source_type=repr(match.type))
                continue
            if match.excluded:
                self._trace(field, "source_excluded")
                continue
            if not field.writable:
                self._trace(field, "read_only")
                continue

            self.accessor.write(destination, field, self.accessor.read(source, match))
            if self.settings.trace:
                logger.debug("field_mapped", field=field.name, source_field=match.name)

    def _trace(self, field: MappableField, reason: str, **extra: Any) -> None:
        if self.settings.trace:
            logger.debug("field_skipped", field=field.name, reason=reason, **extra)


# ------------------------------------------------------------------------------
# Module-level conveniences (default mapper, created on first use)
# ------------------------------------------------------------------------------
@functools.lru_cache(maxsize=1)
def get_default_mapper() -> ObjectMapper:
    return ObjectMapper()


def map_objects(destination: Any, *sources: Any) -> None:
    get_default_mapper().map(destination, *sources)


def map_into(destination: Any, sources: Iterable[Any]) -> None:
    get_default_mapper().map_into(destination, sources)


def map_new(cls: Type[T], sources: Iterable[Any]) -> T:
    return get_default_mapper().map_new(cls, sources)


def register(cls: type, table: Mapping[str, FieldConfig]) -> None:
    get_default_mapper().register(cls, table)


def fields(obj_or_type: Any) -> tuple:
    return get_default_mapper().introspector.fields(obj_or_type)


def get_field_value(obj: Any, field_name: str, default: Any = None) -> Any:
    return get_default_mapper().get_field_value(obj, field_name, default)


def set_field_value(obj: Any, field_name: str, value: Any) -> bool:
    return get_default_mapper().set_field_value(obj, field_name, value)


def field_values(obj: Any) -> dict:
    return get_default_mapper().field_values(obj)
