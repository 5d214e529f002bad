from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from types import SimpleNamespace
from typing import Annotated, Optional

import pytest
from structlog.testing import capture_logs

from structmap import Alias, Ignore, InvalidArgumentError, UnsupportedTypeError

EPOCH = datetime(1970, 1, 1)


@dataclass
class Person:
    id: int = 0
    first_name: Annotated[str, Alias("Name")] = ""
    birthday: datetime = EPOCH


@dataclass
class PersonRow:
    id: int = 0
    name: str = ""
    birthday: Annotated[datetime, Ignore()] = EPOCH


@dataclass
class BirthdayValue:
    id: str = ""
    person_id: int = 0
    birthday: datetime = EPOCH


@dataclass
class Counter:
    x: int = 0
    label: str = ""


@dataclass
class Account:
    owner: str = ""
    secret: Annotated[str, Ignore()] = "keep"


@dataclass
class Labelled:
    name: str = ""
    display: Annotated[str, Alias("name")] = ""


@dataclass
class NeedsArgs:
    x: int


@dataclass
class CaseTwins:
    ID: Annotated[int, Ignore()] = 7
    id: int = 0


class Sensor:
    def __init__(self, x: int = 3) -> None:
        self.x = x

    @property
    def label(self) -> str:
        return f"sensor-{self.x}"


class AbstractThing(ABC):
    @abstractmethod
    def run(self) -> None: ...


class Gauge:
    raw: int

    def __init__(self, raw: int = 0) -> None:
        self.raw = raw

    @property
    def doubled(self) -> int:
        return self.raw * 2


def test_person_from_row_and_birthday(mapper):
    person = Person()
    row = PersonRow(id=1, name="Bender", birthday=datetime(1985, 7, 12))
    value = BirthdayValue(id="100", person_id=1, birthday=datetime(2000, 1, 1))

    mapper.map(person, row, value)

    assert person.id == 1  # BirthdayValue.id is a str
    assert person.first_name == "Bender"
    assert person.birthday == datetime(2000, 1, 1)


def test_source_excluded_field_is_not_read(mapper):
    person = Person()
    mapper.map(person, PersonRow(id=1, name="Bender", birthday=datetime(1985, 7, 12)))
    assert person.birthday == EPOCH


def test_untyped_source(mapper):
    person = Person(id=3)
    mapper.map(person, SimpleNamespace(birthday=datetime(2020, 2, 2)))
    assert person.birthday == datetime(2020, 2, 2)
    assert person.id == 3


def test_excluded_destination_field_never_modified(mapper):
    account = Account()
    mapper.map(account, SimpleNamespace(owner="amy", secret="leak"))
    assert account.owner == "amy"
    assert account.secret == "keep"


def test_type_mismatch_leaves_destination_unchanged(mapper):
    counter = Counter(x=5)
    mapper.map(counter, SimpleNamespace(x="7"))
    assert counter.x == 5


def test_subclass_is_not_an_exact_type_match(mapper):
    counter = Counter(x=5)
    mapper.map(counter, SimpleNamespace(x=True))
    assert counter.x == 5


@pytest.mark.parametrize("declared", ["name", "NAME", "nAmE", "Name"])
def test_alias_matches_case_insensitively(mapper, declared):
    person = Person()
    mapper.map(person, SimpleNamespace(**{declared: "Fry"}))
    assert person.first_name == "Fry"


def test_source_alias_is_not_consulted(mapper):
    # Person.first_name is aliased to "Name"; the alias only applies when
    # Person is the destination.
    target = SimpleNamespace(first_name="unchanged", name="unchanged")
    mapper.map(target, Person(first_name="Leela"))
    assert target.first_name == "Leela"
    assert target.name == "unchanged"


def test_last_source_wins(mapper):
    counter = Counter(x=0)
    mapper.map_into(counter, [SimpleNamespace(x=1), SimpleNamespace(x=2)])
    assert counter.x == 2


def test_no_match_preserves_value(mapper):
    counter = Counter(x=9, label="kept")
    mapper.map(counter, SimpleNamespace(other=1), PersonRow(name="x"))
    assert counter == Counter(x=9, label="kept")


def test_map_new_equals_map_into_fresh_instance(mapper):
    a = PersonRow(id=4, name="Hermes")
    b = BirthdayValue(birthday=datetime(1999, 9, 9))

    created = mapper.map_new(Person, [a, b])
    expected = Person()
    mapper.map_into(expected, [a, b])

    assert isinstance(created, Person)
    assert created == expected


def test_map_new_without_sources_returns_default_instance(mapper):
    assert mapper.map_new(Person, []) == Person()


@pytest.mark.parametrize("cls", [NeedsArgs, AbstractThing, "Person", None])
def test_map_new_unsupported_type(mapper, cls):
    with pytest.raises(UnsupportedTypeError) as exc:
        mapper.map_new(cls, [])
    assert exc.value.code == "unsupported_type"
    assert isinstance(exc.value, TypeError)


def test_destination_none(mapper):
    with pytest.raises(InvalidArgumentError) as exc:
        mapper.map_into(None, [Counter()])
    assert exc.value.details == {"argument": "destination"}


@pytest.mark.parametrize("position", [0, 1, 2])
def test_source_none_at_any_position(mapper, position):
    sources = [SimpleNamespace(x=1), SimpleNamespace(x=2), SimpleNamespace(x=3)]
    sources[position] = None
    counter = Counter()

    with pytest.raises(InvalidArgumentError) as exc:
        mapper.map_into(counter, sources)

    assert exc.value.details == {"argument": "sources", "position": position}
    # earlier sources were merged and are not rolled back
    assert counter.x == (0 if position == 0 else position)


def test_variadic_map_rejects_none_source(mapper):
    with pytest.raises(InvalidArgumentError):
        mapper.map(Counter(), SimpleNamespace(x=1), None)


def test_idempotent(mapper):
    source = PersonRow(id=7, name="Zoidberg")
    once = Person()
    mapper.map_into(once, [source])
    twice = Person()
    mapper.map_into(twice, [source])
    mapper.map_into(twice, [source])
    assert once == twice


def test_duplicate_effective_name_first_declared_wins(mapper):
    target = Labelled()
    mapper.map(target, SimpleNamespace(name="Kif"))
    assert target.name == "Kif"
    assert target.display == ""


def test_read_only_destination_field_is_skipped(mapper):
    gauge = Gauge(raw=1)
    mapper.map(gauge, SimpleNamespace(raw=5, doubled=100))
    assert gauge.raw == 5
    assert gauge.doubled == 10


def test_property_can_be_a_source(mapper):
    target = SimpleNamespace(doubled=0)
    mapper.map(target, Gauge(raw=21))
    assert target.doubled == 42


def test_sources_may_be_a_generator(mapper):
    counter = Counter()
    mapper.map_into(counter, (SimpleNamespace(x=i) for i in range(3)))
    assert counter.x == 2


def test_optional_and_plain_types_do_not_match(mapper):
    @dataclass
    class MaybeCounter:
        x: Optional[int] = None

    counter = Counter(x=1)
    mapper.map(counter, MaybeCounter(x=5))
    assert counter.x == 1


def test_trace_logs_skip_reasons(tracing_mapper):
    with capture_logs() as logs:
        tracing_mapper.map(Counter(), SimpleNamespace(x="no", label="ok"))

    skipped = [e for e in logs if e["event"] == "field_skipped"]
    mapped = [e for e in logs if e["event"] == "field_mapped"]
    assert [e["reason"] for e in skipped] == ["type_mismatch"]
    assert [e["field"] for e in mapped] == ["label"]
    assert all(e["log_level"] == "debug" for e in logs)


def test_no_logs_without_trace(mapper):
    with capture_logs() as logs:
        mapper.map(Counter(), SimpleNamespace(x="no"))
    assert logs == []


def test_case_twin_excluded_field_is_not_overwritten(mapper):
    target = CaseTwins()
    mapper.map(target, SimpleNamespace(id=5))
    assert target == CaseTwins(ID=7, id=5)


def test_case_twin_source_reads_the_matched_field(mapper):
    target = Counter()
    mapper.map(target, SimpleNamespace(X="wrong type", x=4))
    # first case-insensitive match is X (a str), so x is never considered
    assert target.x == 0


def test_init_attributes_of_class_with_property_are_mapped(mapper):
    counter = Counter()
    mapper.map(counter, Sensor(x=3))
    assert counter.x == 3

    sensor = Sensor(x=1)
    mapper.map(sensor, SimpleNamespace(x=8, label="ignored"))
    assert sensor.x == 8
    assert sensor.label == "sensor-8"
