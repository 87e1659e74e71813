"""
Type resolution for configured provider and parser types.

A type string from the configuration is either a short alias declared in the
section's type table or a fully-qualified type identifier. The alias table is
always consulted first; the string is only treated as an identifier when no
alias matches. Provider types and parser types go through the same resolver.
"""

from typing import Iterable, List, NamedTuple, Optional, Tuple

from commonprovider.core.config import ProviderConfigSection, TypeElement
from commonprovider.core.errors import InvalidAliasedTypeError, UnresolvedTypeError
from commonprovider.core.types import TypeLoader

PARSER_REFERRER = "parser"


class AliasTable:
    """Case-insensitive mapping of alias names to type identifiers."""

    def __init__(self, entries: Optional[Iterable[TypeElement]] = None):
        self._entries: List[Tuple[str, str]] = [
            (entry.name.casefold(), entry.type) for entry in (entries or ())
        ]

    @classmethod
    def from_section(cls, section: ProviderConfigSection) -> "AliasTable":
        return cls(section.types)

    def lookup(self, name: str) -> Optional[str]:
        """Look up an alias.

        Args:
            name: The alias name, compared case-insensitively

        Returns:
            The type identifier of the first matching alias, or None
        """
        key = name.casefold()
        for alias, identifier in self._entries:
            if alias == key:
                return identifier
        return None

    def __len__(self) -> int:
        return len(self._entries)


class ResolvedType(NamedTuple):
    """A successfully resolved type string.

    Attributes:
        identifier: The canonical type identifier that was loaded
        type: The loaded class
        aliased: Whether the identifier came from the alias table
    """

    identifier: str
    type: type
    aliased: bool


class TypeIdentifierResolver:
    """Resolves configured type strings to loadable types."""

    def __init__(self, alias_table: AliasTable, type_loader: TypeLoader):
        self.alias_table = alias_table
        self.type_loader = type_loader

    def resolve(self, raw_type: str, referrer: str) -> ResolvedType:
        """Resolve a type string.

        Args:
            raw_type: The type string, an alias or a type identifier
            referrer: The provider name, or "parser" for parser types

        Returns:
            The resolved type

        Raises:
            InvalidAliasedTypeError: If raw_type is an alias whose target does not load
            UnresolvedTypeError: If raw_type is not an alias and does not load
        """
        identifier = self.alias_table.lookup(raw_type)
        if identifier is not None:
            loaded = self.type_loader(identifier)
            if loaded is None:
                raise InvalidAliasedTypeError(raw_type, identifier, referrer)
            return ResolvedType(identifier, loaded, True)

        loaded = self.type_loader(raw_type)
        if loaded is None:
            raise UnresolvedTypeError(raw_type, referrer)
        return ResolvedType(raw_type, loaded, False)

    def resolve_identifier(self, raw_type: str, referrer: str = PARSER_REFERRER) -> str:
        """Resolve a type string to its canonical, loadable identifier."""
        return self.resolve(raw_type, referrer).identifier
