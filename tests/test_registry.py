"""Tests for the generator registry."""
from __future__ import annotations

import pytest

from structgen.codegen.core.config import GeneratorConfig
from structgen.codegen.languages.csharp import CSharpGenerator
from structgen.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)


class _OtherGenerator(CSharpGenerator):
    pass


def test_csharp_is_registered_with_aliases() -> None:
    assert list_supported_languages() == ["csharp"]
    for name in ("csharp", "CSharp", "cs", "c#"):
        assert is_language_supported(name)
        assert isinstance(get_generator(name), CSharpGenerator)


def test_language_info() -> None:
    info = get_language_info("cs")
    assert info["name"] == "csharp"
    assert info["file_extension"] == ".cs"
    assert info["class"] == "CSharpGenerator"
    assert info["aliases"] == ["c#", "cs"]


def test_unknown_language() -> None:
    assert not is_language_supported("cobol")
    with pytest.raises(RegistryError, match="Available: csharp"):
        get_generator("cobol")


def test_generator_config_from_dict() -> None:
    generator = get_generator("csharp", {"namespace": "Game", "array_type": "list"})
    assert generator.config.namespace == "Game"
    assert generator.csharp_config.array_style.value == "list"


def test_generator_config_object_is_used_as_is() -> None:
    config = GeneratorConfig(namespace="Direct")
    assert get_generator("csharp", config).config is config


def test_invalid_config_is_reported() -> None:
    with pytest.raises(RegistryError, match="Invalid int_type"):
        get_generator("csharp", {"int_type": "bigint"})
    with pytest.raises(RegistryError, match="Invalid config type"):
        get_generator("csharp", 42)


def test_register_rejects_non_generators() -> None:
    registry = GeneratorRegistry()
    with pytest.raises(RegistryError):
        registry.register("text", str)


def test_alias_conflicts() -> None:
    registry = GeneratorRegistry()
    registry.register("csharp", CSharpGenerator, aliases=["cs"])

    with pytest.raises(RegistryError, match="already points to"):
        registry.register("other", _OtherGenerator, aliases=["cs"])
    with pytest.raises(RegistryError, match="conflicts with existing primary"):
        registry.register("other", _OtherGenerator, aliases=["csharp"])


def test_existing_registration_is_kept_unless_replaced() -> None:
    registry = GeneratorRegistry()
    registry.register("csharp", CSharpGenerator)
    registry.register("csharp", _OtherGenerator)
    assert registry.get_generator_class("csharp") is CSharpGenerator

    registry.register("csharp", _OtherGenerator, replace=True)
    assert registry.get_generator_class("csharp") is _OtherGenerator


def test_unregister_removes_aliases() -> None:
    registry = GeneratorRegistry()
    registry.register("csharp", CSharpGenerator, aliases=["cs"])
    registry.unregister("csharp")

    assert not registry.is_supported("csharp")
    assert not registry.is_supported("cs")
    assert registry.list_all_names() == {}
