"""
Pytest configuration and fixtures for the commonprovider test suite.

This module provides provider classes, a type registry and configuration
section factories that can be used across different test modules.
"""

import logging
from types import SimpleNamespace

import pytest

from commonprovider.core.config import ProviderConfigSection
from commonprovider.core.interfaces import IComplexDataParser, IProvider
from commonprovider.core.types import TypeRegistry


# ===== Provider and parser types =====

class FastProvider(IProvider):
    """Provider used as an alias target."""


class SlowProvider(IProvider):
    """Second provider type."""


class NotAProvider:
    """Loadable type that does not implement IProvider."""


class JsonParser(IComplexDataParser):
    """Complex data parser for tests."""

    def parse(self, value: str):
        import json
        return json.loads(value)


class PlainParser:
    """Parser that does not derive from IComplexDataParser."""


@pytest.fixture
def provider_types():
    """Expose the provider and parser types to test modules."""
    return SimpleNamespace(
        FastProvider=FastProvider,
        SlowProvider=SlowProvider,
        NotAProvider=NotAProvider,
        JsonParser=JsonParser,
        PlainParser=PlainParser,
    )


@pytest.fixture
def type_registry():
    """Create a type registry with the test types registered."""
    registry = TypeRegistry()
    registry.register("Acme.FastProvider", FastProvider)
    registry.register("Acme.SlowProvider", SlowProvider)
    registry.register("Acme.NotAProvider", NotAProvider)
    registry.register("Acme.JsonParser", JsonParser)
    registry.register("Acme.PlainParser", PlainParser)
    return registry


# ===== Configuration sections =====

@pytest.fixture
def make_section():
    """Create a factory for validated provider configuration sections."""

    def _make_section(**data) -> ProviderConfigSection:
        return ProviderConfigSection.from_dict(data)

    return _make_section


@pytest.fixture
def full_section(make_section):
    """Create a section that uses aliases, both settings scopes and parsers."""
    return make_section(
        types=[
            {"name": "fast", "type": "Acme.FastProvider"},
            {"name": "json", "type": "Acme.JsonParser"},
        ],
        settings={"dataParserType": "json", "values": {"timeout": "30", "region": "eu"}},
        providers=[
            {
                "name": "p1",
                "group": "search",
                "type": "FAST",
                "settings": {"values": [{"key": "depth", "value": "2"}]},
            },
            {"name": "p2", "group": "search", "type": "Acme.SlowProvider", "enabled": False},
            {
                "name": "p3",
                "group": "storage",
                "type": "Acme.SlowProvider",
                "settings": {"dataParserType": "Acme.PlainParser", "values": {"path": "/tmp"}},
            },
        ],
    )


# ===== Logging =====

@pytest.fixture
def restore_logging():
    """Restore the commonprovider logger after a test reconfigures it."""
    package_logger = logging.getLogger("commonprovider")
    level = package_logger.level
    handlers = list(package_logger.handlers)

    yield package_logger

    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)
