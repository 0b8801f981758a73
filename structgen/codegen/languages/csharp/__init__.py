"""
C# code generator module.

Generates immutable C# readonly structs from a type graph. The default
renderer emits mutable partial classes; ReadOnlyStructRenderer overrides
its hooks to produce value types with get-only properties and a
synthesized constructor.
"""

from .config import CSharpConfig, Density, get_default_config, get_internal_config
from .generator import CSharpGenerator, create_csharp_generator
from .naming import CSHARP_RESERVED_WORDS, assign_names, create_csharp_sanitizer, parameter_identifier
from .readonly import GET_ONLY_ACCESSORS, VALUE_TYPE_KIND, ReadOnlyStructRenderer, RecordIndex
from .renderer import CSharpRenderer, PropertyDefinition
from .types import ArrayStyle, CSharpType, CSharpTypeConfig, CSharpTypeMapper

__all__ = [
    "CSharpGenerator",
    "CSharpConfig",
    "Density",
    "CSharpRenderer",
    "ReadOnlyStructRenderer",
    "RecordIndex",
    "PropertyDefinition",
    "CSharpType",
    "CSharpTypeConfig",
    "CSharpTypeMapper",
    "ArrayStyle",
    "CSHARP_RESERVED_WORDS",
    "VALUE_TYPE_KIND",
    "GET_ONLY_ACCESSORS",
    "assign_names",
    "create_csharp_sanitizer",
    "parameter_identifier",
    # Factory functions
    "create_csharp_generator",
    "create_internal_generator",
    "get_default_config",
    "get_internal_config",
]


def create_internal_generator(**kwargs) -> CSharpGenerator:
    """
    Create a generator for assembly-internal models.

    Emits ``internal readonly struct`` declarations with List<T>
    collections; kwargs override any other setting.
    """
    options = {"access_modifier": "internal", "array_type": "list"}
    options.update(kwargs)
    return create_csharp_generator(options)
