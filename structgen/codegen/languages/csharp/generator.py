"""
C# code generator implementation.

Generates C# readonly structs from a type graph using the read-only
struct renderer and the file template.
"""

from typing import Any, Dict, List, Optional
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig, get_config_manager, load_config
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import NameTable, NamingCase
from ...core.renderer import RenderContext
from ...core.schema import FieldType, TypeGraph
from .config import CSharpConfig
from .naming import assign_names
from .readonly import ReadOnlyStructRenderer
from .types import CSharpTypeMapper

logger = get_logger(__name__)

FILE_TEMPLATE = "file.cs.j2"


class CSharpGenerator(CodeGenerator):
    """Code generator for immutable C# value types."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize C# generator with configuration."""
        super().__init__(config)
        self.csharp_config = CSharpConfig(**self.config.language_config)

    @property
    def language_name(self) -> str:
        return "csharp"

    @property
    def file_extension(self) -> str:
        return ".cs"

    def get_template_directory(self) -> Path:
        """Return the C# templates directory."""
        return Path(__file__).parent / "templates"

    def build_context(self, graph: TypeGraph) -> RenderContext:
        """Run the naming pass and bundle the read-only render state."""
        names = assign_names(
            NameTable(graph),
            type_case=NamingCase(self.config.type_case),
            field_case=NamingCase(self.config.field_case),
        )
        return RenderContext(graph=graph, names=names)

    def create_renderer(self, context: RenderContext) -> ReadOnlyStructRenderer:
        return ReadOnlyStructRenderer(
            context,
            self.csharp_config,
            add_comments=self.config.add_comments,
            indent_unit=self.config.indent_unit,
        )

    def generate(self, graph: TypeGraph) -> str:
        """Generate a complete C# source file for all records."""
        context = self.build_context(graph)
        renderer = self.create_renderer(context)
        lines = renderer.render()
        logger.debug(
            "Rendered %d records into %d lines", len(graph), len(lines)
        )

        if not self.template_exists(FILE_TEMPLATE):
            raise GeneratorError(f"{FILE_TEMPLATE} template not found")

        template_context = {
            "namespace": self.config.namespace,
            "usings": sorted(renderer.usings),
            "body": "\n".join(lines),
            "indent_unit": self.config.indent_unit,
        }
        return self.render_template(FILE_TEMPLATE, template_context)

    def graph_options(self) -> Dict[str, Any]:
        return {
            "visibility": self.csharp_config.visibility,
            "base_type": self.csharp_config.base_class,
        }

    def validate_graph(self, graph: TypeGraph) -> List[str]:
        """Validate the graph for C# readonly struct generation."""
        warnings = super().validate_graph(graph)

        for record in graph:
            if not record.properties:
                warnings.append(
                    f"Record {record.key} has no properties - its parameterless "
                    f"constructor requires C# 10 or later"
                )

        for key in self._struct_cycles(graph):
            warnings.append(
                f"Record {key} contains itself by value - C# rejects struct layout cycles"
            )

        mapper = CSharpTypeMapper(self.csharp_config.type_config())
        for record in graph:
            for prop in record.properties:
                for hint in mapper.map_property(prop).validation_hints:
                    warnings.append(f"{record.key}.{prop.name}: {hint}")

        for warning in self._config_warnings():
            warnings.append(warning)

        return warnings

    def _config_warnings(self) -> List[str]:
        return get_config_manager().validate_config(self.config, self.language_name)

    @staticmethod
    def _struct_cycles(graph: TypeGraph) -> List[str]:
        """
        Keys of records that reach themselves through by-value fields.

        Arrays, lists and dictionaries are reference types and break cycles.
        """
        edges: Dict[str, List[str]] = {}
        for record in graph:
            edges[record.key] = [
                prop.type.record
                for prop in record.properties
                if prop.type.kind == FieldType.OBJECT and prop.type.record in graph
            ]

        cyclic = []
        for start in edges:
            stack = list(edges[start])
            seen = set()
            while stack:
                key = stack.pop()
                if key == start:
                    cyclic.append(start)
                    break
                if key in seen:
                    continue
                seen.add(key)
                stack.extend(edges.get(key, []))

        return cyclic


def create_csharp_generator(config: Optional[Dict] = None) -> CSharpGenerator:
    """Create a C# generator, applying overrides on top of the defaults."""
    return CSharpGenerator(load_config("csharp", custom_config=config))
