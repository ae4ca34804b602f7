"""Tests for PluginBase."""

import logging
from typing import Any, Mapping, Optional

import pytest

from mdns_plugin.plugin.plugin_base import PluginBase


class RecordingPlugin(PluginBase[dict]):
    """A concrete PluginBase that records what it was initialized with."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.init_configs: list = []

    def parse_config(self, config: Optional[Mapping[str, Any]]) -> dict:
        if config is not None and not isinstance(config, Mapping):
            raise TypeError("config must be a mapping")
        return dict(config or {})

    async def init(self, config: dict) -> None:
        self.init_configs.append(config)

    async def destroy(self) -> bool:
        return True


class IncompletePlugin(PluginBase[dict]):
    """Does not implement the abstract methods."""

    pass


def test_incomplete_plugin_instantiation():
    with pytest.raises(TypeError):
        IncompletePlugin("system.adapter.web.0.plugins.mdns")  # type: ignore[abstract]


def test_namespace_must_be_str():
    with pytest.raises(TypeError):
        RecordingPlugin(None)  # type: ignore[arg-type]


def test_native_config_is_read_from_parent_io_package():
    plugin = RecordingPlugin(
        "system.adapter.web.0.plugins.mdns",
        {"common": {}, "native": {"port": 8082}},
    )

    assert plugin.plugin_namespace == "system.adapter.web.0.plugins.mdns"
    assert plugin.native_config == {"port": 8082}


@pytest.mark.parametrize(
    "parent_io_package", [None, {}, {"native": None}, {"native": [1, 2]}]
)
def test_native_config_missing_is_empty(parent_io_package):
    plugin = RecordingPlugin("ns", parent_io_package)

    assert plugin.native_config == {}


def test_default_logger_is_named_after_namespace():
    plugin = RecordingPlugin("system.adapter.web.0.plugins.mdns")

    assert plugin.log.name == "mdns_plugin.system.adapter.web.0.plugins.mdns"


def test_given_logger_is_used():
    logger = logging.getLogger("host")
    plugin = RecordingPlugin("ns", logger=logger)

    assert plugin.log is logger


@pytest.mark.asyncio
async def test_init_plugin_parses_and_initializes():
    plugin = RecordingPlugin("ns")

    await plugin.init_plugin({"enabled": True})

    assert plugin.init_configs == [{"enabled": True}]


@pytest.mark.asyncio
async def test_init_plugin_with_bad_config_does_not_raise(caplog):
    plugin = RecordingPlugin("ns", logger=logging.getLogger("host"))

    with caplog.at_level(logging.ERROR, logger="host"):
        await plugin.init_plugin("nope")  # type: ignore[arg-type]

    assert plugin.init_configs == []
    assert len(caplog.records) == 1
