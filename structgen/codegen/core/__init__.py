"""
Core code generation components.

Provides the type model, naming pass, rendering primitives and base
classes used by all language generators.
"""

from .generator import (
    CodeGenerator,
    FragmentShapeError,
    GeneratorError,
    GenerationResult,
    NameResolutionError,
    generate_code,
)
from .schema import (
    FieldType,
    PropertyDeclaration,
    RecordType,
    SchemaError,
    TypeGraph,
    TypeRef,
    Visibility,
    convert_json_schema,
)
from .naming import Name, NameSanitizer, NameTable, NamingCase, NamingError
from .renderer import RenderContext, Renderer, Sourcelike, intersperse, serialize
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "NameResolutionError",
    "FragmentShapeError",
    "GenerationResult",
    "generate_code",
    # Type model
    "FieldType",
    "Visibility",
    "TypeRef",
    "PropertyDeclaration",
    "RecordType",
    "TypeGraph",
    "SchemaError",
    "convert_json_schema",
    # Naming
    "Name",
    "NameTable",
    "NameSanitizer",
    "NamingCase",
    "NamingError",
    # Rendering
    "RenderContext",
    "Renderer",
    "Sourcelike",
    "intersperse",
    "serialize",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
