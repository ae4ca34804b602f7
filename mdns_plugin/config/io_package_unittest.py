import json

import pytest

from mdns_plugin.config.io_package import (
    load_io_package,
    native_config_from_io_package,
    plugin_config_from_io_package,
)

IO_PACKAGE = {
    "common": {
        "name": "ai-assistant",
        "plugins": {
            "mdns": {"enabled": True, "portKey": "audioPort", "defaultPort": 8089},
            "sentry": {"dsn": "x"},
        },
    },
    "native": {"audioPort": 9000},
}


def test_load_io_package(tmp_path):
    path = tmp_path / "io-package.json"
    path.write_text(json.dumps(IO_PACKAGE), encoding="utf-8")

    assert load_io_package(path) == IO_PACKAGE


def test_load_io_package_rejects_non_object(tmp_path):
    path = tmp_path / "io-package.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_io_package(path)


def test_load_io_package_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_io_package(tmp_path / "missing.json")


def test_plugin_config_from_io_package():
    assert plugin_config_from_io_package(IO_PACKAGE) == {
        "enabled": True,
        "portKey": "audioPort",
        "defaultPort": 8089,
    }
    assert plugin_config_from_io_package(IO_PACKAGE, "sentry") == {"dsn": "x"}


@pytest.mark.parametrize(
    "io_package",
    [None, {}, {"common": None}, {"common": {"plugins": []}}, {"common": {"plugins": {}}}],
)
def test_plugin_config_missing_is_empty(io_package):
    assert plugin_config_from_io_package(io_package) == {}


def test_native_config_from_io_package():
    assert native_config_from_io_package(IO_PACKAGE) == {"audioPort": 9000}
    assert native_config_from_io_package({"native": "x"}) == {}
    assert native_config_from_io_package(None) == {}
