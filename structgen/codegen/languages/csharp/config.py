"""
C#-specific configuration.

Parses the language_config section of a GeneratorConfig into typed
settings for the C# renderer and type mapper.
"""

from typing import Optional
from enum import Enum

from ...core.config import ConfigError
from ...core.schema import Visibility
from .types import ArrayStyle, CSharpTypeConfig


class Density(Enum):
    """Spacing between generated members."""

    NORMAL = "normal"  # Blank line between properties
    DENSE = "dense"  # Properties on consecutive lines


VALID_INT_TYPES = {"int", "long", "short", "byte", "sbyte", "uint", "ulong", "ushort"}
VALID_FLOAT_TYPES = {"double", "float", "decimal"}
VALID_ANY_TYPES = {"object", "dynamic"}
VALID_TIME_TYPES = {"DateTimeOffset", "DateTime", "string"}


def _enum_value(enum_cls, value, setting: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Invalid {setting}: {value} (expected one of: {valid})") from None


class CSharpConfig:
    """C#-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize C# configuration from language_config settings."""
        self.visibility: Visibility = _enum_value(
            Visibility, kwargs.get("access_modifier", "public"), "access_modifier"
        )

        # Type preferences
        self.int_type = self._check(kwargs.get("int_type", "int"), VALID_INT_TYPES, "int_type")
        self.float_type = self._check(kwargs.get("float_type", "double"), VALID_FLOAT_TYPES, "float_type")
        self.any_type = self._check(kwargs.get("any_type", "object"), VALID_ANY_TYPES, "any_type")
        self.time_type = self._check(kwargs.get("time_type", "DateTimeOffset"), VALID_TIME_TYPES, "time_type")
        self.array_style: ArrayStyle = _enum_value(
            ArrayStyle, kwargs.get("array_type", "array"), "array_type"
        )
        self.nullable_optionals = bool(kwargs.get("nullable_optionals", True))

        # Output shape
        self.json_attributes = bool(kwargs.get("json_attributes", True))
        self.base_class: Optional[str] = kwargs.get("base_class") or None
        self.density: Density = _enum_value(Density, kwargs.get("density", "normal"), "density")

    @staticmethod
    def _check(value: str, valid: set, setting: str) -> str:
        if value not in valid:
            raise ConfigError(f"Invalid {setting}: {value} (expected one of: {', '.join(sorted(valid))})")
        return value

    def type_config(self) -> CSharpTypeConfig:
        """Build the type mapper configuration."""
        return CSharpTypeConfig(
            int_type=self.int_type,
            float_type=self.float_type,
            time_type=self.time_type,
            any_type=self.any_type,
            array_style=self.array_style,
            nullable_optionals=self.nullable_optionals,
        )


def get_default_config() -> CSharpConfig:
    """Configuration matching the built-in defaults."""
    return CSharpConfig()


def get_internal_config() -> CSharpConfig:
    """Configuration for assembly-internal models using List<T> collections."""
    return CSharpConfig(access_modifier="internal", array_type="list")
