from __future__ import annotations

import pytest

from pysettle import Leaf, LeafMetadata, Namespace, NamespaceMetadata, Record, create
from pysettle.errors import (
    InitializerError,
    InvalidInitializerKind,
    NotARecord,
    ShorthandNotSupported,
    TypeMapperError,
    UnknownSetting,
)
from pysettle.initializer import initialize
from tests.utils import c


def test_initializers_run_at_create_time() -> None:
    settings = create({"a": Leaf(initial=lambda: "foobar")})
    assert settings.data["a"] == "foobar"


def test_optional_setting_without_initializer_is_none() -> None:
    settings = create({"a": Leaf()})
    assert settings.data == {"a": None}
    assert settings.metadata == {"a": LeafMetadata(value=None, initial=None)}


def test_initializer_may_return_none() -> None:
    assert create({"a": Leaf(initial=c(None))}).data == {"a": None}


def test_setting_datum_can_be_a_function() -> None:
    settings = create({"a": Leaf(initial=c(lambda x: x["a"]))})
    assert settings.data["a"]({"a": 1}) == 1


def test_static_initializer_is_rejected() -> None:
    with pytest.raises(InvalidInitializerKind) as exc:
        create({"a": Leaf(initial="foobar")})  # type: ignore[arg-type]
    assert str(exc.value) == (
        'Initializer for setting "a" was configured with a static value. '
        "It must be a function. Got: 'foobar'"
    )


def test_initializer_errors_are_wrapped() -> None:
    def boom():
        raise RuntimeError("Unexpected error while trying to initialize setting")

    with pytest.raises(InitializerError) as exc:
        create({"a": Leaf(initial=boom)})
    assert str(exc.value) == (
        'There was an unexpected error while running the initializer for setting "a"\n'
        "Unexpected error while trying to initialize setting"
    )
    assert isinstance(exc.value.__cause__, RuntimeError)
    assert exc.value.name == "a"


def test_initial_values_pass_through_type_mapper() -> None:
    settings = create({"port": Leaf(initial=c("8080"), map_type=int)})
    assert settings.data["port"] == 8080
    assert settings.metadata["port"] == LeafMetadata(value=8080, initial=8080)


def test_type_mapper_failure_during_initialization() -> None:
    with pytest.raises(TypeMapperError):
        create({"port": Leaf(initial=c("http"), map_type=int)})


def test_initial_values_skip_fixup_and_validate() -> None:
    calls = []

    def validate(value):
        calls.append(value)

    settings = create(
        {
            "a": Leaf(
                initial=c("bad"),
                fixup=lambda v: pytest.fail("fixup should not run"),
                validate=validate,
            )
        }
    )
    assert settings.data == {"a": "bad"}
    assert calls == []


def test_namespace_initial_seeds_fields() -> None:
    spec = {
        "server": Namespace(
            fields={"host": Leaf(initial=c("localhost")), "port": Leaf(initial=c(80))},
            initial=c({"port": 8080}),
        )
    }
    settings = create(spec)
    assert settings.data == {"server": {"host": "localhost", "port": 8080}}
    assert settings.metadata["server"] == NamespaceMetadata(
        fields={
            "host": LeafMetadata(value="localhost", initial="localhost"),
            "port": LeafMetadata(value=8080, initial=8080),
        }
    )


def test_namespace_seed_reaches_nested_namespaces() -> None:
    spec = {
        "db": Namespace(
            fields={
                "pool": Namespace(fields={"size": Leaf(initial=c(5)), "timeout": Leaf(initial=c(30))}),
            },
            initial=c({"pool": {"size": 10}}),
        )
    }
    assert create(spec).data == {"db": {"pool": {"size": 10, "timeout": 30}}}


def test_namespace_seed_with_unknown_field() -> None:
    spec = {"a": Namespace(fields={"b": Leaf()}, initial=c({"z": 1}))}
    with pytest.raises(UnknownSetting) as exc:
        create(spec)
    assert exc.value.path == ("a", "z")


def test_namespace_seed_must_be_a_mapping() -> None:
    with pytest.raises(ShorthandNotSupported):
        create({"a": Namespace(fields={"b": Leaf()}, initial=c("b"))})


def test_initialize_returns_fresh_trees() -> None:
    spec = {"a": Namespace(fields={"b": Leaf(initial=c([1]))})}
    first, _ = initialize(spec)
    second, _ = initialize(spec)
    assert first == second == {"a": {"b": [1]}}
    assert first is not second


def test_static_initializer_is_rejected_when_seed_covers_it() -> None:
    spec = {"a": Namespace(fields={"b": Leaf(initial="static")}, initial=c({"b": 1}))}  # type: ignore[arg-type]
    with pytest.raises(InvalidInitializerKind) as exc:
        create(spec)
    assert exc.value.path == ("a", "b")


def test_static_record_initializer_is_rejected_when_seed_covers_it() -> None:
    spec = {
        "a": Namespace(
            fields={"r": Record(entry_fields={"x": Leaf()}, initial={"k": {}})},  # type: ignore[arg-type]
            initial=c({"r": {}}),
        )
    }
    with pytest.raises(InvalidInitializerKind):
        create(spec)


@pytest.mark.parametrize("seed", [0, "", [], False])
def test_falsy_namespace_seed_must_still_be_a_mapping(seed) -> None:
    with pytest.raises(ShorthandNotSupported):
        create({"a": Namespace(fields={"b": Leaf(initial=c(1))}, initial=c(seed))})


@pytest.mark.parametrize("seed", [0, "", [], False])
def test_falsy_record_seed_must_still_be_a_mapping(seed) -> None:
    with pytest.raises(NotARecord):
        create({"r": Record(entry_fields={"x": Leaf()}, initial=c(seed))})


def test_namespace_seed_of_none_is_empty() -> None:
    settings = create({"a": Namespace(fields={"b": Leaf(initial=c(1))}, initial=c(None))})
    assert settings.data == {"a": {"b": 1}}
