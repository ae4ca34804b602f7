"""Derives the effective advertisement from plugin config and host context.

Everything in this module is pure: nothing is logged and nothing raises for
incomplete input. `resolve_advertisement()` returns None when no port can be
determined, which callers treat as "do not advertise".
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mdns_plugin.config.mdns_plugin_config import MdnsPluginConfig

UNKNOWN_ADAPTER_NAME = "unknown"

# system.adapter.<name>.<instance>.plugins.<plugin>
_ADAPTER_NAME_PATTERN = re.compile(r"system\.adapter\.([^.]+)\.")


@dataclass(frozen=True)
class ResolvedAdvertisement:
    """The service parameters for one activation of the plugin."""

    adapter_name: str
    hostname: str
    service_type: str
    port: int | float
    service_name: str
    txt: dict[str, str] = field(default_factory=dict)

    @property
    def qualified_type(self) -> str:
        """The DNS-SD form of the service type, e.g. "_iobroker-web._tcp"."""
        return f"_{self.service_type}._tcp"


def extract_adapter_name(namespace: str | None) -> str:
    """Returns the adapter name embedded in a plugin namespace.

    >>> extract_adapter_name("system.adapter.web.0.plugins.mdns")
    'web'
    >>> extract_adapter_name("garbage")
    'unknown'
    """
    match = _ADAPTER_NAME_PATTERN.search(namespace or "")
    return match.group(1) if match else UNKNOWN_ADAPTER_NAME


def lookup_number(source: Any, key: str | None) -> int | float | None:
    """Reads `source[key]` only if it holds a number.

    A missing key, a non-numeric value (booleans included), a missing key
    name or a `source` that is not a mapping all give None.
    """
    if key is None or not isinstance(source, Mapping):
        return None

    value = source.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def resolve_port(
    config: MdnsPluginConfig, native: Mapping[str, Any] | None
) -> int | float | None:
    """Resolves the port: explicit, then native config at `port_key`, then default."""
    if config.port:
        return config.port

    if config.port_key:
        port = lookup_number(native, config.port_key)
        if port:
            return port

    if config.default_port:
        return config.default_port

    return None


def build_txt_records(
    adapter_name: str, hostname: str, extra: Mapping[str, str] | None
) -> dict[str, str]:
    """Base TXT entries, overridden by any colliding key in `extra`."""
    txt = {"adapter": adapter_name, "hostname": hostname}
    txt.update(extra or {})
    return txt


def resolve_advertisement(
    config: MdnsPluginConfig,
    namespace: str | None,
    hostname: str,
    native: Mapping[str, Any] | None = None,
) -> ResolvedAdvertisement | None:
    """Builds the `ResolvedAdvertisement`, or None if no port resolves.

    The enabled flag is not consulted here; callers check it first.
    """
    port = resolve_port(config, native)
    if not port:
        return None

    adapter_name = extract_adapter_name(namespace)
    return ResolvedAdvertisement(
        adapter_name=adapter_name,
        hostname=hostname,
        service_type=config.service_type or f"iobroker-{adapter_name}",
        port=port,
        service_name=(
            config.service_name or f"ioBroker {adapter_name} ({hostname})"
        ),
        txt=build_txt_records(adapter_name, hostname, config.txt),
    )
