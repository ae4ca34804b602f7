import pytest

from mdns_plugin.config.advertisement_resolver import (
    ResolvedAdvertisement,
    build_txt_records,
    extract_adapter_name,
    lookup_number,
    resolve_advertisement,
    resolve_port,
)
from mdns_plugin.config.mdns_plugin_config import MdnsPluginConfig


@pytest.mark.parametrize(
    "namespace, expected",
    [
        ("system.adapter.foo.0.plugins.mdns", "foo"),
        ("system.adapter.ai-assistant.12.plugins.mdns", "ai-assistant"),
        ("system.adapter.foo.", "foo"),
        ("garbage", "unknown"),
        ("system.adapter.foo", "unknown"),
        ("", "unknown"),
        (None, "unknown"),
    ],
)
def test_extract_adapter_name(namespace, expected):
    assert extract_adapter_name(namespace) == expected


class TestLookupNumber:
    def test_int_and_float_are_returned(self):
        assert lookup_number({"a": 9999}, "a") == 9999
        assert lookup_number({"a": 80.0}, "a") == 80.0

    @pytest.mark.parametrize("value", ["9999", True, None, [80], {"p": 1}])
    def test_non_numbers_are_none(self, value):
        assert lookup_number({"a": value}, "a") is None

    def test_missing_key_is_none(self):
        assert lookup_number({"a": 1}, "b") is None
        assert lookup_number({"a": 1}, None) is None

    @pytest.mark.parametrize("source", [None, [], "native", 42])
    def test_non_mapping_source_is_none(self, source):
        assert lookup_number(source, "a") is None


class TestResolvePort:
    def test_explicit_port_wins(self):
        config = MdnsPluginConfig(port=8089, port_key="x", default_port=7000)
        assert resolve_port(config, {"x": 9999}) == 8089

    def test_port_key_before_default(self):
        config = MdnsPluginConfig(port_key="x", default_port=7000)
        assert resolve_port(config, {"x": 9999}) == 9999

    def test_port_key_with_non_numeric_value_falls_back(self):
        config = MdnsPluginConfig(port_key="x", default_port=7000)
        assert resolve_port(config, {"x": "9999"}) == 7000

    def test_default_port(self):
        assert resolve_port(MdnsPluginConfig(default_port=7000), None) == 7000

    def test_zero_port_is_not_a_port(self):
        config = MdnsPluginConfig(port=0, port_key="x")
        assert resolve_port(config, {"x": 0}) is None

    def test_nothing_configured(self):
        assert resolve_port(MdnsPluginConfig(port_key="x"), {}) is None


def test_txt_records_overrides_base_keys():
    txt = build_txt_records("web", "host1", {"hostname": "other", "path": "/"})

    assert txt == {"adapter": "web", "hostname": "other", "path": "/"}


def test_txt_records_without_extra():
    assert build_txt_records("web", "host1", None) == {
        "adapter": "web",
        "hostname": "host1",
    }


def test_resolve_advertisement_defaults():
    resolved = resolve_advertisement(
        MdnsPluginConfig(enabled=True, default_port=7000),
        "system.adapter.web.0.plugins.mdns",
        "host1",
    )

    assert resolved == ResolvedAdvertisement(
        adapter_name="web",
        hostname="host1",
        service_type="iobroker-web",
        port=7000,
        service_name="ioBroker web (host1)",
        txt={"adapter": "web", "hostname": "host1"},
    )
    assert resolved.qualified_type == "_iobroker-web._tcp"


def test_resolve_advertisement_explicit_values():
    config = MdnsPluginConfig(
        enabled=True,
        service_type="iobroker-ai",
        port=8089,
        service_name="Kitchen speaker",
        txt={"path": "/audio"},
    )

    resolved = resolve_advertisement(
        config, "system.adapter.ai-assistant.0.plugins.mdns", "host1"
    )

    assert resolved is not None
    assert resolved.service_type == "iobroker-ai"
    assert resolved.port == 8089
    assert resolved.service_name == "Kitchen speaker"
    assert resolved.txt == {
        "adapter": "ai-assistant",
        "hostname": "host1",
        "path": "/audio",
    }


def test_resolve_advertisement_without_port_aborts():
    config = MdnsPluginConfig(enabled=True, service_type="iobroker-ai")

    assert resolve_advertisement(config, "system.adapter.a.0.plugins.mdns", "h") is None
