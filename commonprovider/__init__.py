"""
commonprovider: configuration-driven provider loading.
"""

from commonprovider.core import (
    IProvider, IComplexDataParser, ProviderData, ProviderDescriptor, ProviderSettings,
    ProviderConfigSection, ProviderConfigurationError, TypeRegistry, import_type,
)
from commonprovider.loaders import ConfigProviderLoader, ProviderDataAssembler, ProviderLoaderBase

__version__ = "0.1.0"

__all__ = [
    'IProvider',
    'IComplexDataParser',
    'ProviderData',
    'ProviderDescriptor',
    'ProviderSettings',
    'ProviderConfigSection',
    'ProviderConfigurationError',
    'TypeRegistry',
    'import_type',
    'ConfigProviderLoader',
    'ProviderDataAssembler',
    'ProviderLoaderBase',
]
