"""mdns_plugin package: advertises an adapter's service via mDNS/DNS-SD.

The host plugin framework creates an `MdnsPlugin` per adapter instance,
activates it with the `common.plugins.mdns` section of the adapter's
io-package.json and destroys it on shutdown. The mDNS protocol itself is
handled by python-zeroconf.
"""

from mdns_plugin.config.mdns_plugin_config import MdnsPluginConfig
from mdns_plugin.plugin.mdns_plugin import MdnsPlugin

__all__ = ["MdnsPlugin", "MdnsPluginConfig"]
