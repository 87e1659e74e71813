"""
Provider interfaces for commonprovider.

This module defines the capability every configured provider type must
implement, and the optional base class for complex data parsers.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from commonprovider.core.data import ProviderDescriptor, ProviderSettings


class IProvider(ABC):
    """Base class for all providers.

    A provider type named in the configuration is only accepted by the loader
    if it is a subclass of IProvider. Instances are created by the caller; the
    loader only resolves and validates the type.
    """

    _descriptor: Optional["ProviderDescriptor"] = None

    def initialize(self, descriptor: "ProviderDescriptor") -> None:
        """Attach the descriptor this provider was loaded from.

        Args:
            descriptor: The provider descriptor
        """
        self._descriptor = descriptor

    @property
    def descriptor(self) -> Optional["ProviderDescriptor"]:
        return self._descriptor

    @property
    def name(self) -> Optional[str]:
        """Get the configured name of the provider."""
        return self._descriptor.name if self._descriptor else None

    @property
    def group(self) -> Optional[str]:
        """Get the configured group of the provider."""
        return self._descriptor.group if self._descriptor else None

    @property
    def settings(self) -> Optional["ProviderSettings"]:
        """Get the provider's own settings, if any were declared."""
        return self._descriptor.settings if self._descriptor else None


class IComplexDataParser(ABC):
    """Interface for parsers of complex setting values.

    Parser types are resolved and checked for loadability only; deriving from
    this class is a convention, not a requirement.
    """

    @abstractmethod
    def parse(self, value: str) -> Any:
        """Parse a raw setting value.

        Args:
            value: The raw string value

        Returns:
            The parsed value
        """
        pass
