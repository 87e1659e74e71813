"""
Exceptions raised while loading provider configuration.

All configuration errors derive from ProviderConfigurationError. They are
static configuration-correctness errors: a load that raises one of them
produces no result, and retrying without fixing the configuration cannot
succeed.
"""

from typing import Optional


class ProviderError(Exception):
    """Base exception for commonprovider errors."""
    pass


class ProviderConfigurationError(ProviderError):
    """Base exception for load-time configuration errors."""
    pass


class MissingConfigurationSectionError(ProviderConfigurationError):
    """Exception raised when the provider configuration section is not defined."""

    def __init__(self, section_name: str):
        self.section_name = section_name
        super().__init__(f"Config section '{section_name}' not defined")


class ConfigurationSourceError(ProviderConfigurationError):
    """Exception raised when a configuration source cannot be read or validated."""
    pass


class TypeResolutionError(ProviderConfigurationError):
    """Base exception for type strings that could not be resolved to a loadable type.

    Attributes:
        raw_type: The type string as written in the configuration
        referrer: The provider name, or "parser" for data parser types
        path: Which resolution path failed, "alias" or "literal"
    """

    path = ""

    def __init__(self, message: str, raw_type: str, referrer: str):
        self.raw_type = raw_type
        self.referrer = referrer
        super().__init__(message)


class UnresolvedTypeError(TypeResolutionError):
    """Exception raised when a type string matches no alias and does not load."""

    path = "literal"

    def __init__(self, raw_type: str, referrer: str):
        super().__init__(
            f"No type found for {_describe(referrer)}: '{raw_type}' is not an "
            f"alias and does not name a loadable type.",
            raw_type,
            referrer,
        )


class InvalidAliasedTypeError(TypeResolutionError):
    """Exception raised when an alias points at a type that does not load.

    Attributes:
        identifier: The type identifier the alias table mapped raw_type to
    """

    path = "alias"

    def __init__(self, raw_type: str, identifier: str, referrer: str):
        self.alias = raw_type
        self.identifier = identifier
        super().__init__(
            f"The type defined for {_describe(referrer)} is not valid: alias "
            f"'{raw_type}' in the type alias table maps to '{identifier}', "
            f"which does not name a loadable type.",
            raw_type,
            referrer,
        )


class TypeDoesNotImplementCapabilityError(ProviderConfigurationError):
    """Exception raised when a provider type does not implement the provider capability."""

    def __init__(self, provider_name: str, provider_type: type, capability: type,
                 raw_type: Optional[str] = None):
        self.provider_name = provider_name
        self.provider_type = provider_type
        self.capability = capability
        self.raw_type = raw_type
        type_name = _qualname(provider_type)
        written_as = f" as '{raw_type}'" if raw_type and raw_type != type_name else ""
        super().__init__(
            f"Type '{type_name}' configured for provider "
            f"'{provider_name}'{written_as} doesn't implement '{capability.__name__}'."
        )


class SettingValueError(ProviderError, ValueError):
    """Exception raised when a setting value cannot be converted to the requested type."""

    def __init__(self, key: str, value: str, expected: str):
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"Setting '{key}' has value '{value}', which is not a valid {expected}")


def _describe(referrer: str) -> str:
    if referrer == "parser":
        return "the complex data parser"
    return f"provider '{referrer}'"


def _qualname(cls) -> str:
    if isinstance(cls, type):
        return f"{cls.__module__}.{cls.__qualname__}"
    return repr(cls)
