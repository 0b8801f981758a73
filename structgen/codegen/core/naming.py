"""
Naming utilities for safe code generation.

Provides opaque display-name handles, the table that binds them to the
type model, and name sanitization with case conversion and keyword
conflict resolution.
"""

import re
from typing import Dict, Optional, Set
from enum import Enum

from .schema import PropertyDeclaration, RecordType, TypeGraph


class NamingError(Exception):
    """Exception raised when a display name is used before it is assigned."""

    pass


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    KEBAB_CASE = "kebab"      # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


class Name:
    """
    Opaque handle for an identifier in generated code.

    Handles are created before the naming pass runs and receive their string
    value afterwards. Two handles denote the same entity only if they are the
    same object; the rendered string plays no part in equality.
    """

    __slots__ = ("proposed", "_value")

    def __init__(self, proposed: str):
        self.proposed = proposed
        self._value: Optional[str] = None

    @property
    def is_assigned(self) -> bool:
        return self._value is not None

    @property
    def value(self) -> str:
        if self._value is None:
            raise NamingError(f"Name for '{self.proposed}' has not been assigned")
        return self._value

    def assign(self, value: str) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"Name({self.proposed!r} -> {self._value!r})"


class NameTable:
    """Display-name handles for every record and property of a graph."""

    def __init__(self, graph: TypeGraph):
        self.graph = graph
        self._record_names: Dict[RecordType, Name] = {}
        self._property_names: Dict[PropertyDeclaration, Name] = {}

        for record in graph:
            self._record_names[record] = Name(record.key)
            for prop in record.properties:
                self._property_names[prop] = Name(prop.name)

    def record_name(self, record: RecordType) -> Name:
        return self._record_names[record]

    def property_name(self, prop: PropertyDeclaration) -> Name:
        return self._property_names[prop]


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Set[str] = None, case_sensitive: bool = False):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            case_sensitive: Whether reserved words only match with exact case
        """
        self.reserved_words = reserved_words or set()
        self.case_sensitive = case_sensitive
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE,
                      suffix_on_conflict: str = "_", unique: bool = True) -> str:
        """
        Sanitize a name for safe use in target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for conflicts
            unique: Whether the result must differ from every name handed out

        Returns:
            Sanitized name safe for use
        """
        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)
        if converted and converted[0].isdigit():
            converted = f"_{converted}"

        final_name = self._resolve_conflicts(converted, suffix_on_conflict, unique)

        if unique:
            self._used_names.add(final_name)

        return final_name

    def is_reserved(self, name: str) -> bool:
        """Check a name against the reserved words."""
        candidate = name if self.case_sensitive else name.lower()
        return candidate in self.reserved_words

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        # Remove non-alphanumeric chars except underscore and hyphen
        cleaned = re.sub(r'[^a-zA-Z0-9_-]', '_', name)
        cleaned = cleaned.strip('_-')

        if not cleaned:
            cleaned = "field"

        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            return self._to_snake_case(name)
        elif target_case == NamingCase.CAMEL_CASE:
            return self._to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return self._to_pascal_case(name)
        elif target_case == NamingCase.KEBAB_CASE:
            return self._to_kebab_case(name)
        elif target_case == NamingCase.SCREAMING_SNAKE:
            return self._to_snake_case(name).upper()
        else:
            return name

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        name = name.replace('-', '_')

        # Insert underscore before uppercase letters
        name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)

        name = name.lower()
        name = re.sub(r'_+', '_', name)

        return name.strip('_')

    def _to_camel_case(self, name: str) -> str:
        """Convert to camelCase."""
        snake = self._to_snake_case(name)
        parts = snake.split('_')

        if not parts:
            return name

        return parts[0].lower() + ''.join(part.capitalize() for part in parts[1:])

    def _to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase."""
        snake = self._to_snake_case(name)
        parts = snake.split('_')

        return ''.join(part.capitalize() for part in parts if part)

    def _to_kebab_case(self, name: str) -> str:
        """Convert to kebab-case."""
        snake = self._to_snake_case(name)
        return snake.replace('_', '-')

    def _resolve_conflicts(self, name: str, suffix: str, unique: bool) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if self.is_reserved(name):
            name = f"{name}{suffix}"

        if not unique:
            return name

        original_name = name
        counter = 1
        while name in self._used_names:
            if suffix == "_":
                name = f"{original_name}{suffix}{counter}"
            else:
                name = f"{original_name}{counter}"
            counter += 1

        return name

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name)
