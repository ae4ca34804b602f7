"""Utilities for local network addresses and host naming."""

import socket

import psutil  # type: ignore[import-untyped]


def get_all_address_strings() -> list[str]:
    """Retrieves all non-loopback IPv4 address strings of this host.

    Returns:
        A list of IPv4 address strings. Empty if no IPv4 addresses found.
    """
    addresses: list[str] = []
    for _, interface_addresses in psutil.net_if_addrs().items():
        for address in interface_addresses:
            if address.family != socket.AF_INET:
                continue
            if address.address.startswith("127."):
                continue
            addresses.append(address.address)
    return addresses


def get_all_addresses() -> list[bytes]:
    """Same as `get_all_address_strings()`, packed in network byte order.

    Falls back to the loopback address when the host has no other IPv4
    address, so a service description is never created without one.
    """
    address_strings = get_all_address_strings() or ["127.0.0.1"]
    return [socket.inet_aton(a) for a in address_strings]


def get_local_hostname() -> str:
    """Returns the host name of this machine as reported by the OS."""
    return socket.gethostname()


def to_mdns_server_name(hostname: str) -> str:
    """Builds the ".local." server name for `hostname`.

    Only the first label is kept, so "box.example.com" becomes "box.local.".
    """
    label = hostname.split(".", 1)[0] or "localhost"
    return f"{label}.local."
