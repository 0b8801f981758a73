"""
Default C# renderer.

Emits every record as a mutable ``partial class`` with auto-properties.
Subclasses customize output through two hooks: ``emit_type`` renders a
record declaration and ``property_definition`` renders one property.
"""

import json
from dataclasses import dataclass
from typing import Callable, List, Optional, Set
from xml.sax.saxutils import escape

from ...core.naming import Name
from ...core.renderer import RenderContext, Renderer, Sourcelike, description_lines
from ...core.schema import PropertyDeclaration, RecordType, Visibility
from .config import CSharpConfig, Density
from .types import CSharpTypeMapper

ACCESS_KEYWORDS = {
    Visibility.PUBLIC: "public ",
    Visibility.INTERNAL: "internal ",
    Visibility.PRIVATE: "private ",
    Visibility.NONE: "",
}

JSON_ATTRIBUTES_USING = "System.Text.Json.Serialization"


@dataclass(frozen=True)
class PropertyDefinition:
    """Rendered pieces of a property declaration."""

    modifier: str
    type: Sourcelike
    name: Name
    accessors: str

    def to_sourcelike(self) -> Sourcelike:
        return [self.modifier, " ", self.type, " ", self.name, " ", self.accessors]


class CSharpRenderer(Renderer):
    """Renders records as C# partial classes."""

    def __init__(self, context: RenderContext, csharp_config: Optional[CSharpConfig] = None,
                 add_comments: bool = True, indent_unit: str = "    "):
        super().__init__(context, indent_unit)
        self.csharp_config = csharp_config or CSharpConfig()
        self.add_comments = add_comments
        self.type_mapper = CSharpTypeMapper(
            self.csharp_config.type_config(), self._record_type_name
        )
        self.usings: Set[str] = set()

    def _record_type_name(self, key: str) -> Name:
        return self.context.names.record_name(self.record_for_key(key))

    # Pieces the hooks are built from

    def declaration_for(self, visibility: Visibility) -> Sourcelike:
        """Default declaration keywords for a record of the given visibility."""
        return [ACCESS_KEYWORDS.get(visibility, ""), "partial class"]

    def property_type(self, prop: PropertyDeclaration) -> Sourcelike:
        cs_type = self.type_mapper.map_property(prop)
        self.usings.update(cs_type.usings)
        return cs_type.fragment

    def emit_description(self, description: Optional[List[str]]) -> None:
        if not description:
            return
        self.emit_comment_lines(
            [escape(line) for line in description],
            line_start="/// ",
            before_comment="/// <summary>",
            after_comment="/// </summary>",
        )

    def emit_json_attribute(self, json_name: str) -> None:
        self.usings.add(JSON_ATTRIBUTES_USING)
        self.emit_line("[JsonPropertyName(", json.dumps(json_name), ")]")

    # Hooks

    def emit_type(
        self,
        description: Optional[List[str]],
        visibility: Visibility,
        declaration: Sourcelike,
        name: Sourcelike,
        base_class: Optional[Sourcelike],
        emitter: Callable[[], None],
    ) -> None:
        """Emit a record declaration; emitter emits the members."""
        self.emit_description(description)
        if base_class is None:
            self.emit_line(declaration, " ", name)
        else:
            self.emit_line(declaration, " ", name, " : ", base_class)
        self.emit_block(emitter)

    def property_definition(self, prop: PropertyDeclaration, name: Name,
                            record: RecordType, json_name: str) -> PropertyDefinition:
        """Render a property as a read-write auto-property."""
        return PropertyDefinition(
            modifier="public",
            type=self.property_type(prop),
            name=name,
            accessors="{ get; set; }",
        )

    # Traversal

    def emit_class_properties(self, record: RecordType) -> None:
        first = True

        def emit_property(prop_name: Name, json_name: str, prop: PropertyDeclaration) -> None:
            nonlocal first
            if not first and self.csharp_config.density == Density.NORMAL:
                self.emit_line()
            first = False

            if self.add_comments:
                self.emit_description(description_lines(prop.description))
            if self.csharp_config.json_attributes:
                self.emit_json_attribute(json_name)
            definition = self.property_definition(prop, prop_name, record, json_name)
            self.emit_line(definition.to_sourcelike())

        self.for_each_property(record, emit_property)

    def emit_class_definition(self, record: RecordType, name: Name) -> None:
        description = description_lines(record.description) if self.add_comments else None
        self.emit_type(
            description,
            record.visibility,
            self.declaration_for(record.visibility),
            name,
            record.base_type,
            lambda: self.emit_class_properties(record),
        )

    def emit_source_structure(self) -> None:
        self.usings = set()
        self.for_each_record(self.emit_class_definition)
