"""Configuration parsing and advertisement resolution."""

from mdns_plugin.config.advertisement_resolver import (
    ResolvedAdvertisement,
    extract_adapter_name,
    lookup_number,
    resolve_advertisement,
    resolve_port,
)
from mdns_plugin.config.io_package import (
    load_io_package,
    native_config_from_io_package,
    plugin_config_from_io_package,
)
from mdns_plugin.config.mdns_plugin_config import MdnsPluginConfig

__all__ = [
    "MdnsPluginConfig",
    "ResolvedAdvertisement",
    "extract_adapter_name",
    "load_io_package",
    "lookup_number",
    "native_config_from_io_package",
    "plugin_config_from_io_package",
    "resolve_advertisement",
    "resolve_port",
]
