"""
Type loading for commonprovider.

A type loader is any callable that takes a type identifier and returns the
class it names, or None if it names nothing loadable. This module provides:
- import_type, the default loader, which imports classes by dotted path
- TypeRegistry, an explicit registry of identifiers with an optional fallback
"""

from typing import Callable, Dict, Optional
import importlib
import inspect
from commonprovider.core.logging import get_logger

logger = get_logger(__name__)

TypeLoader = Callable[[str], Optional[type]]


def import_type(identifier: str) -> Optional[type]:
    """Load a class from its fully-qualified name.

    Both "package.module.ClassName" and "package.module:ClassName" are
    accepted; nested classes may follow the module part ("module:Outer.Inner").

    Args:
        identifier: The type identifier

    Returns:
        The class, or None if the identifier does not name an importable class
    """
    identifier = (identifier or "").strip()
    if not identifier:
        return None

    if ":" in identifier:
        module_name, _, attr_path = identifier.partition(":")
        candidates = [(module_name, attr_path)]
    else:
        # Try the longest module prefix first
        parts = identifier.split(".")
        candidates = [
            (".".join(parts[:i]), ".".join(parts[i:]))
            for i in range(len(parts) - 1, 0, -1)
        ]

    for module_name, attr_path in candidates:
        if not module_name or not attr_path:
            continue
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.debug(f"Cannot import module '{module_name}' for type '{identifier}': {e}")
            continue

        obj = module
        for attr in attr_path.split("."):
            obj = getattr(obj, attr, None)
            if obj is None:
                break

        if inspect.isclass(obj):
            return obj

    return None


class TypeRegistry:
    """Registry mapping type identifiers to classes.

    Identifiers are matched exactly. Unknown identifiers are passed to the
    fallback loader if one is given, so a registry can shadow or extend
    import_type.
    """

    def __init__(self, fallback: Optional[TypeLoader] = None):
        """Initialize the type registry.

        Args:
            fallback: Loader consulted for identifiers that are not registered
        """
        self._types: Dict[str, type] = {}
        self._fallback = fallback

    def register(self, identifier: str, cls: type) -> None:
        """Register a class under an identifier.

        Args:
            identifier: The type identifier
            cls: The class

        Raises:
            ValueError: If the identifier is already registered or cls is not a class
        """
        if not inspect.isclass(cls):
            raise ValueError(f"Cannot register '{identifier}': {cls!r} is not a class")
        if identifier in self._types:
            raise ValueError(f"Type '{identifier}' is already registered")

        self._types[identifier] = cls
        logger.debug(f"Registered type: {identifier}")

    def unregister(self, identifier: str) -> None:
        """Unregister an identifier.

        Raises:
            ValueError: If the identifier is not registered
        """
        if identifier not in self._types:
            raise ValueError(f"Type '{identifier}' is not registered")

        del self._types[identifier]
        logger.debug(f"Unregistered type: {identifier}")

    def get_types(self) -> Dict[str, type]:
        return self._types.copy()

    def load(self, identifier: str) -> Optional[type]:
        """Load the class registered under an identifier.

        Args:
            identifier: The type identifier

        Returns:
            The class, or None if neither the registry nor the fallback knows it
        """
        cls = self._types.get(identifier)
        if cls is None and self._fallback is not None:
            cls = self._fallback(identifier)
        return cls

    __call__ = load

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._types
