"""Tests for generator and C# configuration."""
from __future__ import annotations

import json

import pytest

from structgen.codegen.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)
from structgen.codegen.core.schema import Visibility
from structgen.codegen.languages.csharp.config import CSharpConfig, Density, get_internal_config
from structgen.codegen.languages.csharp.types import ArrayStyle


def test_csharp_defaults() -> None:
    config = load_config("csharp")
    assert config.namespace == "Generated"
    assert config.indent_unit == "    "
    assert config.language_config["access_modifier"] == "public"
    assert config.language_config["int_type"] == "int"


def test_defaults_are_not_shared_between_loads() -> None:
    first = load_config("csharp", custom_config={"int_type": "long"})
    second = load_config("csharp")
    assert first.language_config["int_type"] == "long"
    assert second.language_config["int_type"] == "int"


def test_unknown_keys_go_to_language_config() -> None:
    config = load_config(
        "csharp",
        custom_config={"namespace": "Game.Models", "array_type": "list", "use_tabs": True},
    )
    assert config.namespace == "Game.Models"
    assert config.use_tabs
    assert config.indent_unit == "\t"
    assert config.language_config["array_type"] == "list"
    assert "array_type" not in vars(config)


def test_config_file_then_overrides(tmp_path) -> None:
    path = tmp_path / "structgen.json"
    path.write_text(json.dumps({"namespace": "FromFile", "density": "dense"}))

    config = load_config("csharp", custom_config={"namespace": "FromArgs"}, config_file=path)
    assert config.namespace == "FromArgs"
    assert config.language_config["density"] == "dense"


def test_missing_config_file(tmp_path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config("csharp", config_file=tmp_path / "missing.json")


def test_config_file_must_be_json(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("namespace: X")
    with pytest.raises(ConfigError, match="must be JSON"):
        load_config("csharp", config_file=path)


def test_invalid_json_config_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config("csharp", config_file=path)


def test_validate_config_reports_problems() -> None:
    config = GeneratorConfig(
        namespace="1Bad.Namespace",
        indent_size=0,
        type_case="weird",
    )
    warnings = ConfigManager().validate_config(config, "csharp")
    assert "Invalid C# namespace: 1Bad.Namespace" in warnings
    assert "Invalid indent_size: 0" in warnings
    assert "Invalid type_case: weird" in warnings


def test_enum_settings_pass_validation() -> None:
    config = load_config("csharp", custom_config={"access_modifier": Visibility.INTERNAL})
    assert ConfigManager().validate_config(config, "csharp") == []
    assert CSharpConfig(**config.language_config).visibility == Visibility.INTERNAL


def test_csharp_config_parses_settings() -> None:
    config = CSharpConfig(
        access_modifier="Internal",
        int_type="long",
        array_type="list",
        density="dense",
        base_class="IModel",
    )
    assert config.visibility == Visibility.INTERNAL
    assert config.int_type == "long"
    assert config.array_style == ArrayStyle.LIST
    assert config.density == Density.DENSE
    assert config.base_class == "IModel"
    assert config.type_config().int_type == "long"


def test_internal_preset() -> None:
    config = get_internal_config()
    assert config.visibility == Visibility.INTERNAL
    assert config.array_style == ArrayStyle.LIST


@pytest.mark.parametrize(
    "setting, value",
    [
        ("access_modifier", "protected"),
        ("int_type", "bigint"),
        ("float_type", "real"),
        ("array_type", "set"),
        ("density", "compact"),
    ],
)
def test_csharp_config_rejects_invalid_values(setting, value) -> None:
    with pytest.raises(ConfigError, match=f"Invalid {setting}"):
        CSharpConfig(**{setting: value})
