import pytest

from structmap import FieldConfigRegistry, FieldIntrospector, MapperSettings, ObjectMapper


@pytest.fixture
def registry():
    return FieldConfigRegistry()


@pytest.fixture
def mapper(registry):
    return ObjectMapper(FieldIntrospector(registry), settings=MapperSettings())


@pytest.fixture
def tracing_mapper(registry):
    return ObjectMapper(FieldIntrospector(registry), settings=MapperSettings(trace=True))
