"""
Provider data objects.

ProviderSettings, ProviderDescriptor and ProviderData are the result of a
provider load. They are immutable: a load builds them once and callers only
read them.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple

from commonprovider.core.errors import SettingValueError

_TRUE_VALUES = ("true", "yes", "on", "1")
_FALSE_VALUES = ("false", "no", "off", "0")


class ProviderSettings(Mapping):
    """Read-only key/value settings for one scope, global or a single provider.

    Args:
        values: The setting values
        parser_type: The resolved complex data parser type identifier, if any
    """

    def __init__(self, values: Mapping, parser_type: Optional[str] = None):
        self._values = MappingProxyType(dict(values))
        self._parser_type = parser_type or None

    def to_dict(self) -> Dict[str, str]:
        return dict(self._values)

    @property
    def parser_type(self) -> Optional[str]:
        return self._parser_type

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProviderSettings):
            return NotImplemented
        return dict(self._values) == dict(other._values) and self._parser_type == other._parser_type

    def __hash__(self) -> int:
        return hash((frozenset(self._values.items()), self._parser_type))

    def __repr__(self) -> str:
        return f"ProviderSettings(values={dict(self._values)!r}, parser_type={self._parser_type!r})"

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """Get a setting as an integer.

        Raises:
            SettingValueError: If the value is present but is not an integer
        """
        if key not in self._values:
            return default
        value = self._values[key]
        try:
            return int(value.strip())
        except ValueError:
            raise SettingValueError(key, value, "integer") from None

    def get_float(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """Get a setting as a float.

        Raises:
            SettingValueError: If the value is present but is not a number
        """
        if key not in self._values:
            return default
        value = self._values[key]
        try:
            return float(value.strip())
        except ValueError:
            raise SettingValueError(key, value, "number") from None

    def get_bool(self, key: str, default: Optional[bool] = None) -> Optional[bool]:
        """Get a setting as a boolean.

        Accepts true/false, yes/no, on/off and 1/0, case-insensitively.

        Raises:
            SettingValueError: If the value is present but is not a boolean
        """
        if key not in self._values:
            return default
        value = self._values[key]
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise SettingValueError(key, value, "boolean")


@dataclass(frozen=True)
class ProviderDescriptor:
    """Describes one loaded provider.

    Attributes:
        name: The configured provider name
        group: The configured provider group
        provider_type: The resolved provider class
        settings: The provider's own settings, or None if none were declared
        enabled: Whether the provider is enabled
    """

    name: str
    group: str
    provider_type: type
    settings: Optional[ProviderSettings] = None
    enabled: bool = True


@dataclass(frozen=True)
class ProviderData:
    """The result of a provider load.

    Attributes:
        descriptors: The provider descriptors, in configuration order
        general_settings: The global settings, or None if none were declared
    """

    descriptors: Tuple[ProviderDescriptor, ...] = field(default_factory=tuple)
    general_settings: Optional[ProviderSettings] = None

    def __post_init__(self):
        object.__setattr__(self, "descriptors", tuple(self.descriptors))

    def __iter__(self) -> Iterator[ProviderDescriptor]:
        return iter(self.descriptors)

    def __len__(self) -> int:
        return len(self.descriptors)

    def __contains__(self, name: object) -> bool:
        return any(descriptor.name == name for descriptor in self.descriptors)

    def get_descriptor(self, name: str) -> Optional[ProviderDescriptor]:
        """Get the first descriptor with the given name.

        Args:
            name: The provider name

        Returns:
            The descriptor, or None if not found
        """
        for descriptor in self.descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    def get_descriptors_by_group(self, group: str) -> List[ProviderDescriptor]:
        """Get all descriptors in a group, in configuration order."""
        return [descriptor for descriptor in self.descriptors if descriptor.group == group]

    def groups(self) -> List[str]:
        """Get the distinct provider groups, in order of first appearance."""
        return list(dict.fromkeys(descriptor.group for descriptor in self.descriptors))

    def names(self) -> List[str]:
        return [descriptor.name for descriptor in self.descriptors]

    def to_dict(self) -> Dict[str, object]:
        """Get a plain representation of the data, for diagnostics."""
        return {
            "general_settings": _settings_dict(self.general_settings),
            "providers": [
                {
                    "name": descriptor.name,
                    "group": descriptor.group,
                    "type": f"{descriptor.provider_type.__module__}.{descriptor.provider_type.__qualname__}",
                    "enabled": descriptor.enabled,
                    "settings": _settings_dict(descriptor.settings),
                }
                for descriptor in self.descriptors
            ],
        }


def _settings_dict(settings: Optional[ProviderSettings]) -> Optional[Dict[str, object]]:
    if settings is None:
        return None
    return {"values": settings.to_dict(), "parser_type": settings.parser_type}
