"""
Provider loaders.
"""

from commonprovider.loaders.base import ProviderLoaderBase
from commonprovider.loaders.config_loader import (
    ConfigProviderLoader, ProviderDataAssembler, ProviderDescriptorBuilder,
)
from commonprovider.loaders.resolution import AliasTable, ResolvedType, TypeIdentifierResolver
from commonprovider.loaders.settings import SettingsCollector

__all__ = [
    'ProviderLoaderBase',
    'ConfigProviderLoader',
    'ProviderDataAssembler',
    'ProviderDescriptorBuilder',
    'AliasTable',
    'ResolvedType',
    'TypeIdentifierResolver',
    'SettingsCollector',
]
