"""
Language-specific code generators.

This module contains generators for the supported target languages.
"""

from .csharp import CSharpGenerator, create_csharp_generator, create_internal_generator

__all__ = [
    "CSharpGenerator",
    "create_csharp_generator",
    "create_internal_generator",
]
