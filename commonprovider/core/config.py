"""
Configuration system for commonprovider.

This module provides:
- Configuration sources: environment variables, files (JSON, YAML, TOML) and
  dictionaries
- A configuration manager that merges sources by priority
- The typed provider configuration section, validated with Pydantic
"""

from typing import Dict, Any, Optional, List, Tuple, Union
import json
import os
from pathlib import Path

import tomli
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from commonprovider.core.errors import ConfigurationSourceError
from commonprovider.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SECTION_NAME = "commonProvider"


# Provider configuration section

class _SectionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


class TypeElement(_SectionModel):
    """An entry of the type alias table."""

    name: str
    type: str


class SettingElement(_SectionModel):
    """A single key/value setting."""

    key: str
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def stringify_value(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value


class SettingsElement(_SectionModel):
    """The settings of one scope, with an optional complex data parser type."""

    data_parser_type: Optional[str] = Field(default=None, alias="dataParserType")
    values: List[SettingElement] = Field(default_factory=list)

    @field_validator("values", mode="before")
    @classmethod
    def coerce_values(cls, value: Any) -> Any:
        # Accept {"key": "value"} as well as [{"key": ..., "value": ...}]
        if isinstance(value, dict):
            return [{"key": str(k), "value": v} for k, v in value.items()]
        if value is None:
            return []
        return value


class ProviderElement(_SectionModel):
    """A configured provider."""

    name: str
    group: str = ""
    type: str
    enabled: bool = Field(default=True, alias="isEnabled")
    settings: SettingsElement = Field(default_factory=SettingsElement)

    @field_validator("settings", mode="before")
    @classmethod
    def default_settings(cls, value: Any) -> Any:
        return {} if value is None else value


class ProviderConfigSection(_SectionModel):
    """The provider configuration section.

    Attributes:
        types: The type alias table, or None when no aliases are configured
        settings: The global settings
        providers: The configured providers, in declaration order
    """

    types: Optional[List[TypeElement]] = None
    settings: SettingsElement = Field(default_factory=SettingsElement)
    providers: List[ProviderElement] = Field(default_factory=list)

    @field_validator("settings", mode="before")
    @classmethod
    def default_settings(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("providers", mode="before")
    @classmethod
    def default_providers(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProviderConfigSection":
        """Validate a raw configuration section.

        Args:
            data: The raw section

        Returns:
            The validated section

        Raises:
            ConfigurationSourceError: If the section does not match the schema
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationSourceError(f"Invalid provider configuration section: {e}") from e


# Configuration sources

class ConfigSource:
    """Base class for configuration sources."""

    def get_config(self) -> Dict[str, Any]:
        """Get the configuration from this source.

        Returns:
            The configuration as a dictionary
        """
        return {}


class EnvConfigSource(ConfigSource):
    """Configuration source that loads from environment variables.

    COMMONPROVIDER_commonProvider__settings__dataParserType=json becomes
    {"commonProvider": {"settings": {"dataParserType": "json"}}}.
    """

    def __init__(self, prefix: str = "COMMONPROVIDER_", separator: str = "__",
                 environ: Optional[Dict[str, str]] = None):
        """Initialize the environment configuration source.

        Args:
            prefix: The prefix for environment variables
            separator: The separator for nested keys
            environ: The environment to read, os.environ by default
        """
        self.prefix = prefix
        self.separator = separator
        self.environ = environ

    def get_config(self) -> Dict[str, Any]:
        config: Dict[str, Any] = {}
        environ = os.environ if self.environ is None else self.environ

        for key, value in environ.items():
            if not key.startswith(self.prefix):
                continue

            parts = key[len(self.prefix):].split(self.separator)

            current = config
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = self._parse_value(value)

        return config

    def _parse_value(self, value: str) -> Any:
        """Parse a string value into a Python object.

        Args:
            value: The string value

        Returns:
            The parsed value
        """
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        return value


class FileConfigSource(ConfigSource):
    """Configuration source that loads from a JSON, YAML or TOML file."""

    def __init__(self, file_path: Union[str, Path], required: bool = False):
        """Initialize the file configuration source.

        Args:
            file_path: The path to the configuration file
            required: Whether a missing file is an error
        """
        self.file_path = str(file_path)
        self.required = required

    def get_config(self) -> Dict[str, Any]:
        """Get the configuration from the file.

        Returns:
            The configuration as a dictionary

        Raises:
            ConfigurationSourceError: If the file cannot be parsed, or is
                required and missing
        """
        path = Path(self.file_path)

        if not path.exists():
            if self.required:
                raise ConfigurationSourceError(f"Configuration file '{self.file_path}' does not exist")
            logger.warning(f"Configuration file '{self.file_path}' does not exist")
            return {}

        suffix = path.suffix.lower()
        try:
            if suffix == ".json":
                data = self._load_json(path)
            elif suffix in (".yaml", ".yml"):
                data = self._load_yaml(path)
            elif suffix == ".toml":
                data = self._load_toml(path)
            else:
                raise ConfigurationSourceError(f"Unsupported configuration file format: {path.suffix}")
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationSourceError(
                f"Error loading configuration file '{self.file_path}': {e}"
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationSourceError(
                f"Configuration file '{self.file_path}' must contain a mapping at the top level"
            )
        return data

    def _load_json(self, path: Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _load_yaml(self, path: Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    def _load_toml(self, path: Path) -> Any:
        with open(path, "rb") as f:
            return tomli.load(f)


class DictConfigSource(ConfigSource):
    """Configuration source that loads from a dictionary."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    def get_config(self) -> Dict[str, Any]:
        return self.config


class ConfigManager:
    """Merges configuration sources and exposes the provider section."""

    def __init__(self):
        self.sources: List[Tuple[int, ConfigSource]] = []
        self.config_cache: Dict[str, Any] = {}

    def add_source(self, source: ConfigSource, priority: int = 0) -> None:
        """Add a configuration source.

        Args:
            source: The configuration source
            priority: The priority of the source (higher priority sources
                override lower priority sources)
        """
        self.sources.append((priority, source))
        # Stable sort keeps insertion order among equal priorities
        self.sources.sort(key=lambda x: x[0], reverse=True)
        self.config_cache = {}

    def clear_sources(self) -> None:
        self.sources = []
        self.config_cache = {}

    def reload(self) -> None:
        """Drop the merged configuration so sources are read again."""
        self.config_cache = {}

    def get_config(self) -> Dict[str, Any]:
        """Get the merged configuration from all sources.

        Returns:
            The merged configuration as a dictionary
        """
        if not self.config_cache:
            config: Dict[str, Any] = {}
            # Apply lowest priority first so higher priorities override
            for _, source in reversed(self.sources):
                self._merge_config(config, source.get_config())

            self.config_cache = config

        return self.config_cache

    def get_config_section(self, section: str) -> Optional[Dict[str, Any]]:
        """Get a section of the configuration.

        Args:
            section: The section name, dotted for nested sections

        Returns:
            The section as a dictionary, or None if it is not defined
        """
        current: Any = self.get_config()
        for part in section.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]

        return current if isinstance(current, dict) else None

    def get_provider_section(self, section: str = DEFAULT_SECTION_NAME) -> Optional[ProviderConfigSection]:
        """Get the typed provider configuration section.

        Args:
            section: The section name

        Returns:
            The validated section, or None if it is not defined

        Raises:
            ConfigurationSourceError: If the section does not match the schema
        """
        raw = self.get_config_section(section)
        if raw is None:
            logger.debug(f"Configuration section '{section}' not found")
            return None
        return ProviderConfigSection.from_dict(raw)

    def _merge_config(self, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        """Merge a source configuration into a target configuration.

        Args:
            target: The target configuration
            source: The source configuration
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_config(target[key], value)
            elif isinstance(value, dict):
                target[key] = {}
                self._merge_config(target[key], value)
            else:
                target[key] = value


# Global configuration manager
config_manager = ConfigManager()


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager.

    Returns:
        The global configuration manager
    """
    return config_manager


def get_config() -> Dict[str, Any]:
    return config_manager.get_config()


def get_config_section(section: str) -> Optional[Dict[str, Any]]:
    return config_manager.get_config_section(section)


def load_provider_section(path: Union[str, Path],
                          section: str = DEFAULT_SECTION_NAME) -> Optional[ProviderConfigSection]:
    """Read the provider section from a single configuration file.

    Args:
        path: The configuration file
        section: The section name

    Returns:
        The validated section, or None if the file does not define it
    """
    manager = ConfigManager()
    manager.add_source(FileConfigSource(path, required=True))
    return manager.get_provider_section(section)
