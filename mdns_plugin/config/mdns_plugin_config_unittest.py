import dataclasses

import pytest

from mdns_plugin.config.mdns_plugin_config import MdnsPluginConfig


def test_from_mapping_reads_camel_case_keys():
    config = MdnsPluginConfig.from_mapping(
        {
            "enabled": True,
            "serviceType": "iobroker-ai",
            "port": 8089,
            "portKey": "audioPort",
            "defaultPort": 7000,
            "serviceName": "Speaker",
            "txt": {"path": "/audio", "version": 1},
        }
    )

    assert config == MdnsPluginConfig(
        enabled=True,
        service_type="iobroker-ai",
        port=8089,
        port_key="audioPort",
        default_port=7000,
        service_name="Speaker",
        txt={"path": "/audio", "version": "1"},
    )


@pytest.mark.parametrize("raw", [None, {}])
def test_from_mapping_empty(raw):
    assert MdnsPluginConfig.from_mapping(raw) == MdnsPluginConfig()


def test_non_numeric_ports_are_dropped():
    config = MdnsPluginConfig.from_mapping(
        {"enabled": True, "port": "8089", "defaultPort": True}
    )

    assert config.port is None
    assert config.default_port is None


def test_non_mapping_txt_is_ignored():
    config = MdnsPluginConfig.from_mapping({"txt": ["path=/audio"]})

    assert config.txt == {}


def test_from_mapping_rejects_non_mapping():
    with pytest.raises(TypeError):
        MdnsPluginConfig.from_mapping("enabled")  # type: ignore[arg-type]


def test_config_is_frozen():
    config = MdnsPluginConfig(enabled=True)

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.enabled = False  # type: ignore[misc]
