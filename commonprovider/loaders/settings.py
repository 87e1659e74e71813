"""
Settings collection for the global and per-provider scopes.
"""

from typing import Iterable, Optional

from commonprovider.core.config import SettingElement
from commonprovider.core.data import ProviderSettings
from commonprovider.loaders.resolution import PARSER_REFERRER, TypeIdentifierResolver


class SettingsCollector:
    """Builds the ProviderSettings of one scope.

    Duplicate keys within a scope are applied in declaration order, so the
    last value wins.
    """

    def __init__(self, resolver: TypeIdentifierResolver):
        self.resolver = resolver

    def collect(self, entries: Iterable[SettingElement],
                parser_type: Optional[str] = None) -> Optional[ProviderSettings]:
        """Collect the settings of one scope.

        Args:
            entries: The scope's setting entries
            parser_type: The scope's complex data parser type string, if any

        Returns:
            The settings, or None if the scope declares no settings. The
            parser type is only resolved when there are settings to parse.

        Raises:
            InvalidAliasedTypeError: If the parser type is an alias whose target does not load
            UnresolvedTypeError: If the parser type is not an alias and does not load
        """
        values = {}
        for entry in entries:
            values[entry.key] = entry.value

        if not values:
            return None

        resolved_parser_type = None
        if parser_type:
            resolved_parser_type = self.resolver.resolve_identifier(parser_type, PARSER_REFERRER)

        return ProviderSettings(values, resolved_parser_type)
