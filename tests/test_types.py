"""Tests for C# type mapping."""
from __future__ import annotations

import pytest

from structgen.codegen.core.renderer import serialize
from structgen.codegen.core.schema import FieldType, PropertyDeclaration, TypeRef
from structgen.codegen.languages.csharp.types import (
    COLLECTIONS_USING,
    ArrayStyle,
    CSharpTypeConfig,
    CSharpTypeMapper,
)


def _map(ref: TypeRef, optional: bool = False, **config) -> tuple[str, object]:
    mapper = CSharpTypeMapper(CSharpTypeConfig(**config))
    cs_type = mapper.map_property(PropertyDeclaration("p", ref, optional=optional))
    return serialize(cs_type.fragment), cs_type


@pytest.mark.parametrize(
    "kind, expected",
    [
        (FieldType.STRING, "string"),
        (FieldType.INTEGER, "int"),
        (FieldType.FLOAT, "double"),
        (FieldType.BOOLEAN, "bool"),
        (FieldType.TIMESTAMP, "DateTimeOffset"),
        (FieldType.ANY, "object"),
    ],
)
def test_primitive_types(kind, expected) -> None:
    assert _map(TypeRef(kind))[0] == expected


def test_optional_value_type_becomes_nullable() -> None:
    text, cs_type = _map(TypeRef(FieldType.INTEGER), optional=True)
    assert text == "int?"
    assert cs_type.is_nullable


def test_optional_reference_type_is_unchanged() -> None:
    assert _map(TypeRef(FieldType.STRING), optional=True)[0] == "string"


def test_nullable_optionals_can_be_disabled() -> None:
    assert _map(TypeRef(FieldType.INTEGER), optional=True, nullable_optionals=False)[0] == "int"


def test_nullable_ref_is_not_double_wrapped() -> None:
    ref = TypeRef(FieldType.FLOAT, nullable=True)
    assert _map(ref, optional=True)[0] == "double?"


def test_configured_integer_type() -> None:
    assert _map(TypeRef(FieldType.INTEGER), int_type="long")[0] == "long"


def test_arrays_default_to_native_arrays() -> None:
    text, cs_type = _map(TypeRef(FieldType.ARRAY, items=TypeRef(FieldType.STRING)))
    assert text == "string[]"
    assert COLLECTIONS_USING not in cs_type.usings


def test_arrays_as_lists() -> None:
    ref = TypeRef(FieldType.ARRAY, items=TypeRef(FieldType.INTEGER, nullable=True))
    text, cs_type = _map(ref, array_style=ArrayStyle.LIST)
    assert text == "List<int?>"
    assert COLLECTIONS_USING in cs_type.usings


def test_maps_become_dictionaries() -> None:
    ref = TypeRef(FieldType.MAP, items=TypeRef(FieldType.TIMESTAMP))
    text, cs_type = _map(ref)
    assert text == "Dictionary<string, DateTimeOffset>"
    assert cs_type.usings == {COLLECTIONS_USING, "System"}


def test_records_are_value_types_named_by_callback() -> None:
    mapper = CSharpTypeMapper(record_name=lambda key: f"{key}Struct")
    prop = PropertyDeclaration("p", TypeRef(FieldType.OBJECT, record="Player"), optional=True)
    cs_type = mapper.map_property(prop)
    assert serialize(cs_type.fragment) == "PlayerStruct?"
    assert cs_type.is_value_type


def test_untyped_values_carry_a_validation_hint() -> None:
    mapper = CSharpTypeMapper()
    any_type = mapper.map_type(TypeRef(FieldType.ANY))
    array = mapper.map_type(TypeRef(FieldType.ARRAY, items=TypeRef(FieldType.ANY)))

    assert any_type.validation_hints == ("Untyped value mapped to object",)
    assert array.validation_hints == ("Untyped value mapped to object",)
    assert mapper.map_type(TypeRef(FieldType.STRING)).validation_hints == ()
