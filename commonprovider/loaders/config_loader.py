"""
Configuration-driven provider loading.

ProviderDataAssembler turns a provider configuration section into
ProviderData in a single pass. ConfigProviderLoader plugs it into the caching
loader base and finds the section through the configuration manager.
"""

from typing import Any, Dict, List, Optional

from commonprovider.core.config import (
    DEFAULT_SECTION_NAME,
    ConfigManager,
    ProviderConfigSection,
    ProviderElement,
    get_config_manager,
)
from commonprovider.core.data import ProviderData, ProviderDescriptor
from commonprovider.core.errors import (
    MissingConfigurationSectionError,
    TypeDoesNotImplementCapabilityError,
)
from commonprovider.core.interfaces.provider import IProvider
from commonprovider.core.logging import get_logger, load_context
from commonprovider.core.types import TypeLoader, import_type
from commonprovider.loaders.base import ProviderLoaderBase
from commonprovider.loaders.resolution import AliasTable, TypeIdentifierResolver
from commonprovider.loaders.settings import SettingsCollector

logger = get_logger(__name__)


class ProviderDescriptorBuilder:
    """Builds the descriptor of one enabled provider entry."""

    def __init__(self, resolver: TypeIdentifierResolver, settings_collector: SettingsCollector,
                 capability: type = IProvider):
        self.resolver = resolver
        self.settings_collector = settings_collector
        self.capability = capability

    def build(self, entry: ProviderElement) -> ProviderDescriptor:
        """Build a provider descriptor.

        Args:
            entry: The provider entry

        Returns:
            The provider descriptor

        Raises:
            TypeResolutionError: If the provider or parser type does not resolve
            TypeDoesNotImplementCapabilityError: If the provider type is not a provider
        """
        with load_context(provider=entry.name):
            return self._build(entry)

    def _build(self, entry: ProviderElement) -> ProviderDescriptor:
        resolved = self.resolver.resolve(entry.type, entry.name)
        if not (isinstance(resolved.type, type) and issubclass(resolved.type, self.capability)):
            raise TypeDoesNotImplementCapabilityError(
                entry.name, resolved.type, self.capability, raw_type=entry.type
            )

        settings = self.settings_collector.collect(
            entry.settings.values, entry.settings.data_parser_type
        )

        logger.debug(
            f"Resolved provider '{entry.name}' to {resolved.identifier}"
            f"{' (alias)' if resolved.aliased else ''}"
        )
        return ProviderDescriptor(
            name=entry.name,
            group=entry.group,
            provider_type=resolved.type,
            settings=settings,
            enabled=True,
        )


class ProviderDataAssembler:
    """Assembles ProviderData from a provider configuration section.

    Args:
        type_loader: Loader used for provider and parser types, import_type by default
        capability: The class every provider type must derive from
        section_name: The section name reported when the section is missing
    """

    def __init__(self, type_loader: Optional[TypeLoader] = None, capability: type = IProvider,
                 section_name: str = DEFAULT_SECTION_NAME):
        self.type_loader = type_loader or import_type
        self.capability = capability
        self.section_name = section_name

    def assemble(self, section: Optional[ProviderConfigSection]) -> ProviderData:
        """Assemble the provider data.

        Disabled providers are skipped before their types are resolved. Any
        error aborts the whole assembly.

        Args:
            section: The provider configuration section

        Returns:
            The provider data

        Raises:
            MissingConfigurationSectionError: If section is None
            TypeResolutionError: If a provider or parser type does not resolve
            TypeDoesNotImplementCapabilityError: If a provider type is not a provider
        """
        if section is None:
            raise MissingConfigurationSectionError(self.section_name)

        resolver = TypeIdentifierResolver(AliasTable.from_section(section), self.type_loader)
        settings_collector = SettingsCollector(resolver)
        builder = ProviderDescriptorBuilder(resolver, settings_collector, self.capability)

        general_settings = settings_collector.collect(
            section.settings.values, section.settings.data_parser_type
        )

        descriptors: List[ProviderDescriptor] = []
        for entry in section.providers:
            if not entry.enabled:
                logger.debug(f"Skipping disabled provider '{entry.name}'")
                continue
            descriptors.append(builder.build(entry))

        return ProviderData(descriptors, general_settings)


class ConfigProviderLoader(ProviderLoaderBase):
    """Provider loader that reads provider information from configuration.

    The providers must be configured before loading. An explicit section takes
    precedence; otherwise the section is read from the configuration manager
    (the global one by default) on every load.
    """

    def __init__(
        self,
        section: Optional[ProviderConfigSection] = None,
        *,
        config_manager: Optional[ConfigManager] = None,
        section_name: str = DEFAULT_SECTION_NAME,
        type_loader: Optional[TypeLoader] = None,
        capability: type = IProvider
    ):
        super().__init__()
        self._section = section
        self._config_manager = config_manager
        self.section_name = section_name
        self.assembler = ProviderDataAssembler(
            type_loader=type_loader, capability=capability, section_name=section_name
        )

    def _get_section(self) -> Optional[ProviderConfigSection]:
        if self._section is not None:
            return self._section
        manager = self._config_manager or get_config_manager()
        return manager.get_provider_section(self.section_name)

    def perform_load(self) -> ProviderData:
        """Load provider information from the configuration section.

        Returns:
            The loaded provider data
        """
        return self.assembler.assemble(self._get_section())

    def log_context(self) -> Dict[str, Any]:
        return {"section": self.section_name}
