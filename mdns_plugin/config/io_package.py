"""Reads adapter metadata (io-package.json) as supplied by the host."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

DEFAULT_PLUGIN_NAME = "mdns"


def load_io_package(path: str | Path) -> dict[str, Any]:
    """Loads an io-package.json file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a JSON object.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object.")
    return data


def plugin_config_from_io_package(
    io_package: Mapping[str, Any] | None, name: str = DEFAULT_PLUGIN_NAME
) -> Mapping[str, Any]:
    """Returns `common.plugins.<name>`, or an empty mapping when absent."""
    common = (io_package or {}).get("common")
    plugins = common.get("plugins") if isinstance(common, Mapping) else None
    config = plugins.get(name) if isinstance(plugins, Mapping) else None
    return config if isinstance(config, Mapping) else {}


def native_config_from_io_package(
    io_package: Mapping[str, Any] | None,
) -> Mapping[str, Any]:
    """Returns the adapter's `native` section, or an empty mapping."""
    if not isinstance(io_package, Mapping):
        return {}
    native = io_package.get("native")
    return native if isinstance(native, Mapping) else {}
