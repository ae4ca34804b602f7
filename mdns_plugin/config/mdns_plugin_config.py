"""Configuration for the mDNS advertisement plugin.

Example `common.plugins.mdns` section of an io-package.json:

    {
        "enabled": true,
        "serviceType": "iobroker-ai",
        "port": 8089,
        "txt": {"path": "/audio", "version": "1"}
    }

Or, reading the port from the adapter's native config:

    {
        "enabled": true,
        "portKey": "audioPort",
        "defaultPort": 8089
    }
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional


def _number_or_none(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class MdnsPluginConfig:
    """Plugin configuration, as supplied by the host. Every field is optional."""

    enabled: bool = False

    # Bare token, e.g. "iobroker-ai" (no "_" prefix, no "._tcp" suffix).
    # zeroconf rejects type labels over 15 bytes, so the "iobroker-<adapter>"
    # default only works for adapter names of up to 6 characters. Longer
    # adapters must set a short serviceType.
    service_type: Optional[str] = None

    port: int | float | None = None

    # Key in the adapter's native config holding the port, e.g. "audioPort".
    port_key: Optional[str] = None

    # Used when port_key is unset or does not hold a number.
    default_port: int | float | None = None

    # Defaults to "ioBroker <adapter> (<hostname>)".
    service_name: Optional[str] = None

    txt: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls, config: Mapping[str, Any] | None
    ) -> "MdnsPluginConfig":
        """Parses the host's camelCase mapping.

        Missing keys take their defaults and non-numeric port values are
        treated as missing.

        Raises:
            TypeError: If `config` is neither None nor a mapping.
        """
        if config is None:
            return cls()
        if not isinstance(config, Mapping):
            raise TypeError(
                f"Plugin config must be a mapping, got {type(config).__name__}."
            )

        raw_txt = config.get("txt")
        txt = (
            {str(k): str(v) for k, v in raw_txt.items()}
            if isinstance(raw_txt, Mapping)
            else {}
        )

        return cls(
            enabled=bool(config.get("enabled", False)),
            service_type=_str_or_none(config.get("serviceType")),
            port=_number_or_none(config.get("port")),
            port_key=_str_or_none(config.get("portKey")),
            default_port=_number_or_none(config.get("defaultPort")),
            service_name=_str_or_none(config.get("serviceName")),
            txt=txt,
        )
