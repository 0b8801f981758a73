"""structgen: immutable C# value types from JSON Schema."""

from .codegen import generate_from_schema, quick_generate

__version__ = "0.1.0"

__all__ = ["generate_from_schema", "quick_generate", "__version__"]
