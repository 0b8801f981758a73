"""Tests for JSON Schema to type graph conversion."""
from __future__ import annotations

import pytest

from structgen.codegen.core.schema import (
    FieldType,
    SchemaError,
    TypeGraph,
    Visibility,
    convert_json_schema,
)


def test_player_record(player_schema) -> None:
    graph = convert_json_schema(player_schema, "Player")

    assert graph.top_level == "Player"
    assert len(graph) == 1
    record = graph.get("Player")
    assert [p.name for p in record.properties] == ["name", "age"]
    assert [p.type.kind for p in record.properties] == [FieldType.STRING, FieldType.INTEGER]
    assert not any(p.optional for p in record.properties)
    assert record.visibility == Visibility.PUBLIC


def test_records_in_discovery_order_top_level_first(team_schema) -> None:
    graph = convert_json_schema(team_schema, "Team")

    assert [record.key for record in graph] == ["Team", "Player"]
    team = graph.get("Team")
    assert team.description == "A team of players."
    assert team.get_property("captain").type.record == "Player"

    players = team.get_property("players").type
    assert players.kind == FieldType.ARRAY
    assert players.items.kind == FieldType.OBJECT
    assert players.items.record == "Player"


def test_optional_and_nullable_flags(team_schema) -> None:
    team = convert_json_schema(team_schema, "Team").get("Team")

    founded = team.get_property("founded")
    assert founded.optional
    assert founded.type.kind == FieldType.TIMESTAMP
    assert not founded.type.nullable

    rating = team.get_property("rating")
    assert rating.type.kind == FieldType.FLOAT
    assert rating.type.nullable


def test_property_descriptions_are_kept(team_schema) -> None:
    player = convert_json_schema(team_schema, "Team").get("Player")
    assert player.get_property("name").description == "Display name."
    assert player.get_property("age").description is None


def test_top_level_name_overrides_title(player_schema) -> None:
    graph = convert_json_schema(player_schema, "Athlete")
    assert [record.key for record in graph] == ["Athlete"]


def test_recursive_reference_to_root() -> None:
    schema = {
        "type": "object",
        "properties": {
            "value": {"type": "integer"},
            "children": {"type": "array", "items": {"$ref": "#"}},
        },
    }
    graph = convert_json_schema(schema, "Node")

    assert len(graph) == 1
    children = graph.get("Node").get_property("children").type
    assert children.items.record == "Node"


def test_recursive_definition() -> None:
    schema = {
        "type": "object",
        "properties": {"head": {"$ref": "#/definitions/link"}},
        "definitions": {
            "link": {
                "type": "object",
                "properties": {"next": {"$ref": "#/definitions/link"}},
            }
        },
    }
    graph = convert_json_schema(schema, "Chain")

    assert [record.key for record in graph] == ["Chain", "Link"]
    assert graph.get("Link").get_property("next").type.record == "Link"


def test_inline_objects_are_named_after_their_path() -> None:
    schema = {
        "type": "object",
        "properties": {
            "address": {"type": "object", "properties": {"city": {"type": "string"}}},
        },
    }
    graph = convert_json_schema(schema, "Customer")
    assert [record.key for record in graph] == ["Customer", "CustomerAddress"]


def test_duplicate_titles_get_unique_keys() -> None:
    item = {"title": "Item", "type": "object", "properties": {"id": {"type": "string"}}}
    schema = {
        "title": "Item",
        "type": "object",
        "properties": {"child": item},
    }
    graph = convert_json_schema(schema, "Item")
    assert [record.key for record in graph] == ["Item", "Item2"]


def test_all_of_merges_properties_and_required() -> None:
    schema = {
        "$defs": {
            "named": {
                "type": "object",
                "properties": {"name": {"type": "string"}},
                "required": ["name"],
            }
        },
        "allOf": [
            {"$ref": "#/$defs/named"},
            {"properties": {"score": {"type": "number"}}},
        ],
    }
    record = convert_json_schema(schema, "Entry").get("Entry")

    assert [p.name for p in record.properties] == ["name", "score"]
    assert not record.get_property("name").optional
    assert record.get_property("score").optional


def test_single_alternative_with_null_is_nullable() -> None:
    schema = {
        "type": "object",
        "properties": {"count": {"anyOf": [{"type": "integer"}, {"type": "null"}]}},
    }
    count = convert_json_schema(schema, "Stats").get("Stats").get_property("count")
    assert count.type.kind == FieldType.INTEGER
    assert count.type.nullable


def test_wide_unions_map_to_any() -> None:
    schema = {
        "type": "object",
        "properties": {"value": {"oneOf": [{"type": "integer"}, {"type": "string"}]}},
    }
    value = convert_json_schema(schema, "Cell").get("Cell").get_property("value")
    assert value.type.kind == FieldType.ANY


def test_string_enum_maps_to_string() -> None:
    schema = {
        "type": "object",
        "properties": {"side": {"enum": ["left", "right"]}},
    }
    side = convert_json_schema(schema, "Move").get("Move").get_property("side")
    assert side.type.kind == FieldType.STRING


def test_additional_properties_map_to_dictionary() -> None:
    schema = {
        "type": "object",
        "properties": {
            "scores": {"type": "object", "additionalProperties": {"type": "integer"}},
        },
    }
    scores = convert_json_schema(schema, "Board").get("Board").get_property("scores")
    assert scores.type.kind == FieldType.MAP
    assert scores.type.items.kind == FieldType.INTEGER


def test_visibility_and_base_type_apply_to_every_record(team_schema) -> None:
    graph = convert_json_schema(team_schema, "Team", Visibility.INTERNAL, "IModel")
    assert all(record.visibility == Visibility.INTERNAL for record in graph)
    assert all(record.base_type == "IModel" for record in graph)


def test_array_of_itself_maps_inner_reference_to_any() -> None:
    schema = {
        "type": "object",
        "properties": {"woods": {"$ref": "#/definitions/forest"}},
        "definitions": {
            "forest": {"type": "array", "items": {"$ref": "#/definitions/forest"}},
        },
    }
    woods = convert_json_schema(schema, "Map").get("Map").get_property("woods")

    assert woods.type.kind == FieldType.ARRAY
    assert woods.type.items.kind == FieldType.ANY


def test_reference_cycle_without_records_terminates() -> None:
    schema = {
        "type": "object",
        "properties": {"a": {"$ref": "#/definitions/a"}},
        "definitions": {
            "a": {"type": "object", "additionalProperties": {"$ref": "#/definitions/b"}},
            "b": {"$ref": "#/definitions/a"},
        },
    }
    graph = convert_json_schema(schema, "Root")

    a = graph.get("Root").get_property("a")
    assert a.type.kind == FieldType.MAP
    assert a.type.items.kind == FieldType.ANY
    assert len(graph) == 1


def test_same_reference_in_sibling_properties_is_expanded_each_time() -> None:
    schema = {
        "type": "object",
        "properties": {
            "tags": {"$ref": "#/definitions/tags"},
            "labels": {"$ref": "#/definitions/tags"},
        },
        "definitions": {"tags": {"type": "array", "items": {"type": "string"}}},
    }
    record = convert_json_schema(schema, "Post").get("Post")
    for prop in record.properties:
        assert prop.type.kind == FieldType.ARRAY
        assert prop.type.items.kind == FieldType.STRING


@pytest.mark.parametrize(
    "document",
    [
        {"type": "string"},
        {"type": "array", "items": {"type": "string"}},
        {},
        ["not", "a", "schema"],
    ],
)
def test_non_object_top_level_is_rejected(document) -> None:
    with pytest.raises(SchemaError):
        convert_json_schema(document, "Root")


def test_unresolvable_reference() -> None:
    schema = {"type": "object", "properties": {"x": {"$ref": "#/definitions/missing"}}}
    with pytest.raises(SchemaError, match="Cannot resolve reference"):
        convert_json_schema(schema, "Root")


def test_remote_reference_is_rejected() -> None:
    schema = {"type": "object", "properties": {"x": {"$ref": "other.json#/a"}}}
    with pytest.raises(SchemaError, match="Only local references"):
        convert_json_schema(schema, "Root")


def test_schema_error_is_value_error() -> None:
    assert issubclass(SchemaError, ValueError)


def test_graph_get_unknown_key() -> None:
    with pytest.raises(SchemaError):
        TypeGraph().get("Missing")
