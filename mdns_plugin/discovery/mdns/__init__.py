"""Initializes the mdns_plugin.discovery.mdns package.

This package defines the responder interface used to advertise services
via mDNS (Multicast DNS) and its zeroconf-backed implementation.
"""

from mdns_plugin.discovery.mdns.mdns_responder import MdnsResponder, MdnsService
from mdns_plugin.discovery.mdns.zeroconf_responder import (
    ZeroconfResponder,
    ZeroconfService,
)

__all__ = ["MdnsResponder", "MdnsService", "ZeroconfResponder", "ZeroconfService"]
