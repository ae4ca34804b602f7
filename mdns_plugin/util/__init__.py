"""Utility classes and functions for mdns_plugin."""

from mdns_plugin.util.ip import (
    get_all_address_strings,
    get_all_addresses,
    get_local_hostname,
    to_mdns_server_name,
)
from mdns_plugin.util.result import (
    Failure,
    Result,
    Success,
    capture_async,
)

__all__ = [
    "Failure",
    "Result",
    "Success",
    "capture_async",
    "get_all_address_strings",
    "get_all_addresses",
    "get_local_hostname",
    "to_mdns_server_name",
]
