"""
structgen code generation module.

Generates immutable C# value types from JSON Schema documents.
"""

from typing import Any, Dict, Optional, Union
from pathlib import Path

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import (
    CodeGenerator,
    FragmentShapeError,
    GenerationResult,
    GeneratorError,
    NameResolutionError,
    generate_code,
)
from .core.schema import FieldType, SchemaError, TypeGraph, Visibility, convert_json_schema
from .core.config import ConfigError, ConfigManager, GeneratorConfig, load_config

__version__ = "0.1.0"


def build_graph(schema_doc: Dict[str, Any], generator: CodeGenerator,
                top_level: Optional[str] = None) -> TypeGraph:
    """
    Convert a schema to a type graph using the generator's visibility and base class.

    The top-level record is named after top_level, else the schema title,
    else "Root".

    Raises:
        SchemaError: If the schema cannot be converted
    """
    if not top_level:
        title = schema_doc.get("title") if isinstance(schema_doc, dict) else None
        top_level = title if isinstance(title, str) and title.strip() else "Root"

    return convert_json_schema(
        schema_doc,
        top_level=top_level,
        **generator.graph_options(),
    )


def generate_from_schema(
    schema_doc: Dict[str, Any],
    language: str = "csharp",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    top_level: Optional[str] = None,
) -> GenerationResult:
    """
    Generate code from a parsed JSON Schema document.

    Args:
        schema_doc: Parsed JSON Schema
        language: Target language name or alias
        config: Generator configuration object, override dict or file path
        top_level: Name for the top-level record (defaults to the schema title)

    Returns:
        GenerationResult with generated code

    Raises:
        RegistryError: If the language is unknown or the configuration invalid
        SchemaError: If the schema cannot be converted
    """
    generator = get_generator(language, config)
    graph = build_graph(schema_doc, generator, top_level)
    return generate_code(generator, graph)


def quick_generate(schema: Union[str, Dict[str, Any]], language: str = "csharp",
                   top_level: Optional[str] = None, **options) -> str:
    """
    Quick code generation from a JSON Schema.

    Args:
        schema: JSON Schema as a dict or JSON text
        language: Target language
        top_level: Name for the top-level record
        **options: Generator options

    Returns:
        Generated code string
    """
    if isinstance(schema, str):
        import json

        schema = json.loads(schema)

    result = generate_from_schema(schema, language, options, top_level)
    if result.success:
        return result.code
    raise GeneratorError(result.error_message) from result.exception


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "NameResolutionError",
    "FragmentShapeError",
    "SchemaError",
    "ConfigError",
    "FieldType",
    "TypeGraph",
    "Visibility",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "build_graph",
    "convert_json_schema",
    "generate_code",
    "generate_from_schema",
    "quick_generate",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
]
