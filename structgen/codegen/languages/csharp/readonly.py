"""
Read-only struct rendering for C#.

Overrides the default C# renderer so that every record becomes an
immutable value type: the declaration turns into a ``readonly struct``,
properties lose their setters, and a constructor taking one parameter per
property (in declaration order) initializes them.
"""

from dataclasses import replace
from typing import Callable, Dict, List, Optional

from ....logging_config import get_logger
from ...core.generator import FragmentShapeError, NameResolutionError
from ...core.naming import Name
from ...core.renderer import RenderContext, Sourcelike, intersperse
from ...core.schema import PropertyDeclaration, RecordType, Visibility
from .naming import parameter_identifier
from .renderer import CSharpRenderer, PropertyDefinition

logger = get_logger(__name__)

VALUE_TYPE_KIND = "readonly struct"
GET_ONLY_ACCESSORS = "{ get; }"


class RecordIndex:
    """
    Maps display-name handles back to the records they name.

    Built once per render pass; lookups compare handles by identity, so
    records whose names render to the same string are never conflated.
    """

    def __init__(self, context: RenderContext):
        self._records: Dict[Name, RecordType] = {
            name: record for record, name in context.records()
        }

    def __len__(self) -> int:
        return len(self._records)

    def lookup(self, name: Sourcelike) -> RecordType:
        record = self._records.get(name) if isinstance(name, Name) else None
        if record is None:
            raise NameResolutionError(f"Could not look up record type by name: {name!r}")
        return record


class ReadOnlyStructRenderer(CSharpRenderer):
    """Renders records as C# readonly structs with a synthesized constructor."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.records = RecordIndex(self.context)

    def emit_type(
        self,
        description: Optional[List[str]],
        visibility: Visibility,
        declaration: Sourcelike,
        name: Sourcelike,
        base_class: Optional[Sourcelike],
        emitter: Callable[[], None],
    ) -> None:
        if visibility == Visibility.PUBLIC:
            declaration = ["public ", VALUE_TYPE_KIND]
        elif visibility == Visibility.INTERNAL:
            declaration = ["internal ", VALUE_TYPE_KIND]

        self.emit_description(description)
        if base_class is None:
            self.emit_line(declaration, " ", name)
        else:
            self.emit_line(declaration, " ", name, " : ", base_class)
        self._emit_struct_block(name, emitter)

    def property_definition(self, prop: PropertyDeclaration, name: Name,
                            record: RecordType, json_name: str) -> PropertyDefinition:
        original = super().property_definition(prop, name, record, json_name)
        if not isinstance(original, PropertyDefinition) or not original.accessors:
            raise FragmentShapeError(
                f"Unexpected default definition for property {record.key}.{json_name}: "
                f"{original!r}"
            )
        return replace(original, accessors=GET_ONLY_ACCESSORS)

    def _emit_struct_block(self, name: Sourcelike, emitter: Callable[[], None]) -> None:
        self.emit_line("{")
        self.indent(lambda: self.emit_constructor(name))
        self.indent(emitter)
        self.emit_line("}")

    def emit_constructor(self, record_name: Sourcelike) -> None:
        """Emit a constructor assigning every property from its own parameter."""
        record = self.records.lookup(record_name)

        parameters: List[Sourcelike] = []
        assignments: List[Sourcelike] = []
        used_identifiers = set()

        def add_parameter(prop_name: Name, json_name: str, prop: PropertyDeclaration) -> None:
            definition = self.property_definition(prop, prop_name, record, json_name)
            identifier = parameter_identifier(json_name, used_identifiers)
            parameters.append([definition.type, " ", identifier])
            assignments.append(["this.", prop_name, " = ", identifier, ";"])

        self.for_each_property(record, add_parameter)
        logger.debug("Constructor for %s takes %d parameters", record.key, len(parameters))

        self.emit_line("public ", record_name, "(", intersperse(parameters, ", "), ")")

        def emit_assignments() -> None:
            for assignment in assignments:
                self.emit_line(assignment)

        self.emit_block(emit_assignments)
        self.emit_line()
