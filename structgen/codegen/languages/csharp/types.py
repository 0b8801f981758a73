"""
C#-specific type system for code generation.

Provides type mapping from the semantic type model to C# type fragments
with configuration-driven behavior.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, FrozenSet, Optional, Tuple
from enum import Enum

from ...core.renderer import Sourcelike
from ...core.schema import FieldType, PropertyDeclaration, TypeRef


class ArrayStyle(Enum):
    """How array properties are declared."""

    ARRAY = "array"  # T[]
    LIST = "list"  # List<T>


# Built-in C# value types; everything else is treated as a reference type
CSHARP_VALUE_TYPES = {
    "bool", "byte", "sbyte", "char", "short", "ushort", "int", "uint",
    "long", "ulong", "float", "double", "decimal",
    "DateTime", "DateTimeOffset", "DateOnly", "TimeOnly", "TimeSpan", "Guid",
}

# Types that live in the System namespace and need a using directive
SYSTEM_TYPES = {"DateTime", "DateTimeOffset", "DateOnly", "TimeOnly", "TimeSpan", "Guid", "Uri"}

COLLECTIONS_USING = "System.Collections.Generic"


@dataclass(frozen=True)
class CSharpType:
    """
    Immutable representation of a C# type with all metadata.

    The fragment is a sourcelike so record types can refer to display
    names that are resolved only when the output is serialized.
    """

    fragment: Sourcelike
    is_value_type: bool = False
    is_nullable: bool = False
    usings: FrozenSet[str] = field(default_factory=frozenset)
    validation_hints: Tuple[str, ...] = ()

    def as_nullable(self) -> "CSharpType":
        """Return a nullable version of this type.

        Reference types are already nullable and stay unchanged.
        """
        if self.is_nullable or not self.is_value_type:
            return self
        return replace(self, fragment=(self.fragment, "?"), is_nullable=True)

    def with_validation_hint(self, hint: str) -> "CSharpType":
        """Add a validation hint to this type."""
        return replace(self, validation_hints=self.validation_hints + (hint,))


@dataclass
class CSharpTypeConfig:
    """Configuration for C# type mapping behavior."""

    int_type: str = "int"
    float_type: str = "double"
    string_type: str = "string"
    bool_type: str = "bool"
    time_type: str = "DateTimeOffset"
    any_type: str = "object"

    array_style: ArrayStyle = ArrayStyle.ARRAY

    # Optional value-type properties become T?
    nullable_optionals: bool = True


class CSharpTypeMapper:
    """
    Maps semantic property types to C# types.

    Records are emitted as readonly structs, so references to them are
    value types.
    """

    def __init__(self, config: Optional[CSharpTypeConfig] = None,
                 record_name: Optional[Callable[[str], Sourcelike]] = None):
        """
        Initialize with type configuration.

        Args:
            config: Type mapping configuration
            record_name: Returns the type fragment for a record key
        """
        self.config = config or CSharpTypeConfig()
        self._record_name = record_name or (lambda key: key)
        self._primitive_types = self._build_primitive_type_map()

    def _build_primitive_type_map(self) -> Dict[FieldType, CSharpType]:
        """Build mapping of primitive field types to C# types."""
        return {
            FieldType.STRING: self._named(self.config.string_type),
            FieldType.INTEGER: self._named(self.config.int_type),
            FieldType.FLOAT: self._named(self.config.float_type),
            FieldType.BOOLEAN: self._named(self.config.bool_type),
            FieldType.TIMESTAMP: self._named(self.config.time_type),
        }

    @staticmethod
    def _named(type_name: str) -> CSharpType:
        usings = frozenset({"System"}) if type_name in SYSTEM_TYPES else frozenset()
        return CSharpType(
            fragment=type_name,
            is_value_type=type_name in CSHARP_VALUE_TYPES,
            usings=usings,
        )

    def map_property(self, prop: PropertyDeclaration) -> CSharpType:
        """Map a property, applying nullability for optional properties."""
        cs_type = self.map_type(prop.type)
        if prop.optional and self.config.nullable_optionals:
            cs_type = cs_type.as_nullable()
        return cs_type

    def map_type(self, ref: TypeRef) -> CSharpType:
        """Map a semantic type to a C# type."""
        if ref.kind in self._primitive_types:
            cs_type = self._primitive_types[ref.kind]
        elif ref.kind == FieldType.ARRAY:
            cs_type = self._map_array_type(ref)
        elif ref.kind == FieldType.MAP:
            cs_type = self._map_map_type(ref)
        elif ref.kind == FieldType.OBJECT:
            cs_type = CSharpType(fragment=self._record_name(ref.record), is_value_type=True)
        else:
            cs_type = self._named(self.config.any_type).with_validation_hint(
                f"Untyped value mapped to {self.config.any_type}"
            )

        return cs_type.as_nullable() if ref.nullable else cs_type

    def _map_array_type(self, ref: TypeRef) -> CSharpType:
        element = self.map_type(ref.items or TypeRef(FieldType.ANY))

        if self.config.array_style == ArrayStyle.LIST:
            return CSharpType(
                fragment=("List<", element.fragment, ">"),
                usings=element.usings | {COLLECTIONS_USING},
                validation_hints=element.validation_hints,
            )

        return CSharpType(
            fragment=(element.fragment, "[]"),
            usings=element.usings,
            validation_hints=element.validation_hints,
        )

    def _map_map_type(self, ref: TypeRef) -> CSharpType:
        values = self.map_type(ref.items or TypeRef(FieldType.ANY))
        return CSharpType(
            fragment=("Dictionary<string, ", values.fragment, ">"),
            usings=values.usings | {COLLECTIONS_USING},
            validation_hints=values.validation_hints,
        )
