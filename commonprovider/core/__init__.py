"""
Core module for commonprovider.

This module provides the core infrastructure, including:
- Provider data objects and the provider capability
- Configuration management
- Type loading
- Structured logging
- The configuration error taxonomy
"""

from commonprovider.core.config import (
    ConfigSource, EnvConfigSource, FileConfigSource, DictConfigSource, ConfigManager,
    ProviderConfigSection, ProviderElement, SettingsElement, SettingElement, TypeElement,
    get_config_manager, get_config, get_config_section, load_provider_section,
)
from commonprovider.core.data import ProviderSettings, ProviderDescriptor, ProviderData
from commonprovider.core.errors import (
    ProviderError, ProviderConfigurationError, MissingConfigurationSectionError,
    ConfigurationSourceError, TypeResolutionError, UnresolvedTypeError,
    InvalidAliasedTypeError, TypeDoesNotImplementCapabilityError, SettingValueError,
)
from commonprovider.core.interfaces import IProvider, IComplexDataParser
from commonprovider.core.logging import configure_logging, get_logger, load_context
from commonprovider.core.types import TypeLoader, TypeRegistry, import_type

__all__ = [
    # Configuration
    'ConfigSource',
    'EnvConfigSource',
    'FileConfigSource',
    'DictConfigSource',
    'ConfigManager',
    'ProviderConfigSection',
    'ProviderElement',
    'SettingsElement',
    'SettingElement',
    'TypeElement',
    'get_config_manager',
    'get_config',
    'get_config_section',
    'load_provider_section',

    # Provider data
    'ProviderSettings',
    'ProviderDescriptor',
    'ProviderData',

    # Errors
    'ProviderError',
    'ProviderConfigurationError',
    'MissingConfigurationSectionError',
    'ConfigurationSourceError',
    'TypeResolutionError',
    'UnresolvedTypeError',
    'InvalidAliasedTypeError',
    'TypeDoesNotImplementCapabilityError',
    'SettingValueError',

    # Interfaces
    'IProvider',
    'IComplexDataParser',

    # Type loading
    'TypeLoader',
    'TypeRegistry',
    'import_type',

    # Logging
    'configure_logging',
    'get_logger',
    'load_context',
]
