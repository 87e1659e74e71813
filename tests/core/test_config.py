"""
Unit tests for the configuration system.
"""

import json

import pytest

from commonprovider.core.config import (
    ConfigManager,
    DictConfigSource,
    EnvConfigSource,
    FileConfigSource,
    ProviderConfigSection,
    load_provider_section,
)
from commonprovider.core.errors import ConfigurationSourceError


SECTION = {
    "types": [{"name": "fast", "type": "Acme.FastProvider"}],
    "settings": {"dataParserType": "json", "values": {"retries": 3, "verbose": True}},
    "providers": [
        {"name": "p1", "group": "search", "type": "fast"},
        {"name": "p2", "type": "Acme.SlowProvider", "isEnabled": False, "settings": None},
    ],
}


def test_section_schema():
    """Test validating a provider section."""
    section = ProviderConfigSection.from_dict(SECTION)

    assert [t.name for t in section.types] == ["fast"]
    assert section.settings.data_parser_type == "json"
    assert [(s.key, s.value) for s in section.settings.values] == [("retries", "3"), ("verbose", "true")]
    assert section.providers[0].enabled is True
    assert section.providers[0].settings.values == []
    assert section.providers[1].enabled is False
    assert section.providers[1].group == ""


def test_section_defaults():
    """Test that every part of the section is optional."""
    section = ProviderConfigSection.from_dict({})

    assert section.types is None
    assert section.settings.values == []
    assert section.settings.data_parser_type is None
    assert section.providers == []


def test_section_accepts_snake_case_names():
    """Test that field names are accepted as well as aliases."""
    section = ProviderConfigSection.from_dict({
        "settings": {"data_parser_type": "json", "values": [{"key": "a", "value": "1"}]},
        "providers": [{"name": "p1", "type": "t", "enabled": False}],
    })

    assert section.settings.data_parser_type == "json"
    assert section.providers[0].enabled is False


def test_section_rejects_invalid_data():
    """Test that schema violations raise a configuration error."""
    with pytest.raises(ConfigurationSourceError, match="Invalid provider configuration section"):
        ProviderConfigSection.from_dict({"providers": [{"name": "p1"}]})

    with pytest.raises(ConfigurationSourceError):
        ProviderConfigSection.from_dict({"providers": [], "unknown": 1})


def test_dict_config_source():
    """Test the dictionary configuration source."""
    source = DictConfigSource({"a": 1})

    assert source.get_config() == {"a": 1}


def test_env_config_source():
    """Test the environment configuration source."""
    source = EnvConfigSource(environ={
        "COMMONPROVIDER_commonProvider__settings__dataParserType": "json",
        "COMMONPROVIDER_commonProvider__providers": '[{"name": "p1", "type": "t"}]',
        "COMMONPROVIDER_debug": "yes",
        "OTHER_VALUE": "ignored",
    })

    config = source.get_config()

    assert config["commonProvider"]["settings"]["dataParserType"] == "json"
    assert config["commonProvider"]["providers"] == [{"name": "p1", "type": "t"}]
    assert config["debug"] is True
    assert "OTHER_VALUE" not in config


def test_file_config_source_json(tmp_path):
    """Test loading a JSON configuration file."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"commonProvider": SECTION}))

    assert FileConfigSource(path).get_config()["commonProvider"]["providers"][0]["name"] == "p1"


def test_file_config_source_yaml(tmp_path):
    """Test loading a YAML configuration file."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "commonProvider:\n"
        "  types:\n"
        "    - name: fast\n"
        "      type: Acme.FastProvider\n"
        "  providers:\n"
        "    - name: p1\n"
        "      type: fast\n"
        "      settings:\n"
        "        values:\n"
        "          depth: 2\n"
    )

    section = load_provider_section(path)

    assert section.types[0].type == "Acme.FastProvider"
    assert section.providers[0].settings.values[0].value == "2"


def test_file_config_source_toml(tmp_path):
    """Test loading a TOML configuration file."""
    path = tmp_path / "config.toml"
    path.write_text(
        "[commonProvider.settings.values]\n"
        "region = \"eu\"\n"
        "\n"
        "[[commonProvider.providers]]\n"
        "name = \"p1\"\n"
        "type = \"Acme.FastProvider\"\n"
    )

    section = load_provider_section(path)

    assert section.settings.values[0].key == "region"
    assert section.providers[0].name == "p1"


def test_file_config_source_missing(tmp_path):
    """Test that a missing optional file is empty and a required one is an error."""
    path = tmp_path / "missing.json"

    assert FileConfigSource(path).get_config() == {}

    with pytest.raises(ConfigurationSourceError, match="does not exist"):
        FileConfigSource(path, required=True).get_config()


def test_file_config_source_invalid(tmp_path):
    """Test that unparseable and unsupported files are errors."""
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigurationSourceError, match="Error loading configuration file"):
        FileConfigSource(broken).get_config()

    unsupported = tmp_path / "config.ini"
    unsupported.write_text("[section]")
    with pytest.raises(ConfigurationSourceError, match="Unsupported configuration file format"):
        FileConfigSource(unsupported).get_config()

    scalar = tmp_path / "scalar.yaml"
    scalar.write_text("- just\n- a list\n")
    with pytest.raises(ConfigurationSourceError, match="mapping"):
        FileConfigSource(scalar).get_config()


def test_config_manager_priority():
    """Test that higher priority sources override lower priority sources."""
    manager = ConfigManager()
    manager.add_source(DictConfigSource({"a": {"x": 1, "y": 1}, "b": 1}), priority=10)
    manager.add_source(DictConfigSource({"a": {"x": 2}}), priority=100)
    manager.add_source(DictConfigSource({"a": {"y": 3}, "b": 3}), priority=0)

    config = manager.get_config()

    assert config == {"a": {"x": 2, "y": 1}, "b": 1}


def test_config_manager_does_not_mutate_sources():
    """Test that merging leaves the source dictionaries untouched."""
    low = {"a": {"x": 1}}
    manager = ConfigManager()
    manager.add_source(DictConfigSource(low), priority=0)
    manager.add_source(DictConfigSource({"a": {"y": 2}}), priority=1)

    manager.get_config()

    assert low == {"a": {"x": 1}}


def test_config_manager_sections():
    """Test reading dotted and typed sections."""
    manager = ConfigManager()
    manager.add_source(DictConfigSource({"app": {"commonProvider": SECTION}, "flag": 1}))

    assert manager.get_config_section("app.commonProvider")["types"] == SECTION["types"]
    assert manager.get_config_section("missing") is None
    assert manager.get_config_section("flag") is None
    assert manager.get_provider_section("commonProvider") is None
    assert manager.get_provider_section("app.commonProvider").providers[0].name == "p1"


def test_config_manager_reload():
    """Test that reload reads the sources again."""
    data = {"a": 1}
    manager = ConfigManager()
    manager.add_source(DictConfigSource(data))
    assert manager.get_config() == {"a": 1}

    data["a"] = 2
    assert manager.get_config() == {"a": 1}

    manager.reload()
    assert manager.get_config() == {"a": 2}

    manager.clear_sources()
    assert manager.get_config() == {}
