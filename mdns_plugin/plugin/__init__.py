"""Host-facing plugin classes."""

from mdns_plugin.plugin.mdns_plugin import MdnsPlugin
from mdns_plugin.plugin.plugin_base import PluginBase

__all__ = ["MdnsPlugin", "PluginBase"]
