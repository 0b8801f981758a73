"""
C#-specific naming utilities and sanitization.

Handles C# keywords, the naming pass that assigns display names, and
constructor parameter identifiers.
"""

import re
from typing import Set

from ...core.naming import NameSanitizer, NameTable, NamingCase


# C# reserved keywords (contextual keywords are valid identifiers)
CSHARP_RESERVED_WORDS = {
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
    "char", "checked", "class", "const", "continue", "decimal", "default",
    "delegate", "do", "double", "else", "enum", "event", "explicit",
    "extern", "false", "finally", "fixed", "float", "for", "foreach",
    "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
    "lock", "long", "namespace", "new", "null", "object", "operator", "out",
    "override", "params", "private", "protected", "public", "readonly",
    "ref", "return", "sbyte", "sealed", "short", "sizeof", "stackalloc",
    "static", "string", "struct", "switch", "this", "throw", "true", "try",
    "typeof", "uint", "ulong", "unchecked", "unsafe", "ushort", "using",
    "virtual", "void", "volatile", "while",
}

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def create_csharp_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for C# (case-sensitive keywords)."""
    return NameSanitizer(CSHARP_RESERVED_WORDS, case_sensitive=True)


def assign_names(names: NameTable, type_case: NamingCase = NamingCase.PASCAL_CASE,
                 field_case: NamingCase = NamingCase.PASCAL_CASE) -> NameTable:
    """
    Run the naming pass over a name table.

    Type names are unique across the graph. Property names are unique
    within their record and never equal the enclosing type's name, which
    C# forbids for members.
    """
    type_sanitizer = create_csharp_sanitizer()
    for record in names.graph:
        names.record_name(record).assign(
            type_sanitizer.sanitize_name(record.key, type_case)
        )

    for record in names.graph:
        member_sanitizer = create_csharp_sanitizer()
        member_sanitizer.add_used_name(names.record_name(record).value)
        for prop in record.properties:
            names.property_name(prop).assign(
                member_sanitizer.sanitize_name(prop.name, field_case)
            )

    return names


def parameter_identifier(json_name: str, used: Set[str]) -> str:
    """
    Identifier for the constructor parameter of a property.

    The schema name is kept verbatim when it is a valid C# identifier;
    keywords get the verbatim prefix '@'. Other names are converted to
    camelCase. The result is added to used.
    """
    if _IDENTIFIER.match(json_name):
        candidate = json_name
    else:
        sanitizer = create_csharp_sanitizer()
        candidate = sanitizer.sanitize_name(json_name, NamingCase.CAMEL_CASE, unique=False)

    if candidate in CSHARP_RESERVED_WORDS:
        candidate = f"@{candidate}"

    base = candidate
    counter = 2
    while candidate in used:
        candidate = f"{base}{counter}"
        counter += 1

    used.add(candidate)
    return candidate
