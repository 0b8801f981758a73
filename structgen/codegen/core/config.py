"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, fields

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_file: Optional[str] = None
    namespace: str = "Generated"

    # Code style settings
    indent_size: int = 4
    use_tabs: bool = False

    # Naming settings
    type_case: str = "pascal"   # pascal, camel, snake
    field_case: str = "pascal"

    # Additional metadata
    add_comments: bool = True

    # Language-specific settings
    language_config: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent_unit(self) -> str:
        return "\t" if self.use_tabs else " " * self.indent_size


_KNOWN_FIELDS = {f.name for f in fields(GeneratorConfig)}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["csharp"] = {
            "namespace": "Generated",
            "type_case": "pascal",
            "field_case": "pascal",
            "add_comments": True,
            "language_config": {
                "access_modifier": "public",
                "int_type": "int",
                "float_type": "double",
                "any_type": "object",
                "time_type": "DateTimeOffset",
                "array_type": "array",
                "json_attributes": True,
                "nullable_optionals": True,
                "density": "normal",
            },
        }

    def get_config(self, language: str, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = self._copy(self._configs.get(language.lower(), {}))

        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _copy(config: Dict[str, Any]) -> Dict[str, Any]:
        copied = dict(config)
        copied["language_config"] = dict(config.get("language_config", {}))
        return copied

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """Merge overrides into base; unknown keys go to language_config."""
        for key, value in overrides.items():
            if key == "language_config":
                base.setdefault("language_config", {}).update(value)
            elif key in _KNOWN_FIELDS:
                base[key] = value
            else:
                base.setdefault("language_config", {})[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.info("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        config_args = {k: v for k, v in config_dict.items() if k in _KNOWN_FIELDS}
        return GeneratorConfig(**config_args)

    def list_languages(self) -> List[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        valid_cases = {"pascal", "camel", "snake"}

        if config.type_case not in valid_cases:
            warnings.append(f"Invalid type_case: {config.type_case}")

        if config.field_case not in valid_cases:
            warnings.append(f"Invalid field_case: {config.field_case}")

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if language.lower() == "csharp":
            parts = config.namespace.split(".") if config.namespace else [""]
            if not all(part.isidentifier() for part in parts):
                warnings.append(f"Invalid C# namespace: {config.namespace}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: str = "csharp", custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
