"""Shared pytest fixtures for structgen tests."""
from __future__ import annotations

import json
from typing import Any, Callable

import pytest

from structgen.codegen.core.naming import NameTable
from structgen.codegen.core.renderer import RenderContext
from structgen.codegen.core.schema import TypeGraph, Visibility, convert_json_schema
from structgen.codegen.languages.csharp.config import CSharpConfig
from structgen.codegen.languages.csharp.naming import assign_names
from structgen.codegen.languages.csharp.readonly import ReadOnlyStructRenderer


@pytest.fixture
def player_schema() -> dict[str, Any]:
    """Single record with two required properties."""
    return {
        "title": "Player",
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "age": {"type": "integer"},
        },
        "required": ["name", "age"],
    }


@pytest.fixture
def team_schema() -> dict[str, Any]:
    """Nested records referenced through $defs, arrays and optionals."""
    return {
        "title": "Team",
        "description": "A team of players.",
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "captain": {"$ref": "#/$defs/player"},
            "players": {"type": "array", "items": {"$ref": "#/$defs/player"}},
            "founded": {"type": "string", "format": "date-time"},
            "rating": {"type": ["number", "null"]},
        },
        "required": ["name", "captain", "players"],
        "$defs": {
            "player": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Display name."},
                    "age": {"type": "integer"},
                },
                "required": ["name", "age"],
            }
        },
    }


@pytest.fixture
def schema_file(tmp_path, player_schema) -> Callable[..., str]:
    """Write a schema document to a temporary file and return its path."""

    def write(document: dict[str, Any] | None = None, name: str = "player.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(document if document is not None else player_schema))
        return str(path)

    return write


def build_context(graph: TypeGraph) -> RenderContext:
    return RenderContext(graph=graph, names=assign_names(NameTable(graph)))


@pytest.fixture
def render() -> Callable[..., list[str]]:
    """Convert a schema and render it with the read-only struct renderer."""

    def run(
        document: dict[str, Any],
        top_level: str = "Root",
        visibility: Visibility = Visibility.PUBLIC,
        base_type: str | None = None,
        renderer_class: type = ReadOnlyStructRenderer,
        **options: Any,
    ) -> list[str]:
        graph = convert_json_schema(document, top_level, visibility, base_type)
        renderer = renderer_class(build_context(graph), CSharpConfig(**options))
        return renderer.render()

    return run


@pytest.fixture
def context_for() -> Callable[[TypeGraph], RenderContext]:
    """Run the naming pass over a graph and bundle the render context."""
    return build_context
