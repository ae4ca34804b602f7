"""Defines PluginBase, the seam through which the host drives a plugin."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from mdns_plugin.config.io_package import native_config_from_io_package

PluginConfigT = TypeVar("PluginConfigT")


class PluginBase(ABC, Generic[PluginConfigT]):
    """Base class for host-managed plugins.

    The host creates one instance per adapter instance, calls
    `init_plugin()` once on activation and `destroy()` once on deactivation.
    Neither call is made concurrently with the other.

    Type Args:
        PluginConfigT: The parsed configuration type of the plugin.
    """

    def __init__(
        self,
        namespace: str,
        parent_io_package: Mapping[str, Any] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initializes the PluginBase.

        Args:
            namespace: Unique namespace of this plugin instance, e.g.
                       "system.adapter.web.0.plugins.mdns".
            parent_io_package: The owning adapter's io-package.json content.
            logger: Logger to report to. Defaults to a child of this
                    package's logger named after `namespace`.

        Raises:
            TypeError: If `namespace` is not a string.
        """
        if not isinstance(namespace, str):
            raise TypeError(
                f"namespace must be str, got {type(namespace).__name__}."
            )

        self.__namespace = namespace
        self.__parent_io_package: Mapping[str, Any] = parent_io_package or {}
        self.__log = logger or logging.getLogger(f"mdns_plugin.{namespace}")

    @property
    def plugin_namespace(self) -> str:
        return self.__namespace

    @property
    def parent_io_package(self) -> Mapping[str, Any]:
        return self.__parent_io_package

    @property
    def native_config(self) -> Mapping[str, Any]:
        """The owning adapter's native config; empty if it has none."""
        return native_config_from_io_package(self.__parent_io_package)

    @property
    def log(self) -> logging.Logger:
        return self.__log

    async def init_plugin(self, config: Mapping[str, Any] | None) -> None:
        """Host entry point: parses `config` and runs `init()`.

        A config that cannot be parsed is logged and the plugin stays
        inactive.
        """
        try:
            parsed = self.parse_config(config)
        except (TypeError, ValueError) as e:
            self.log.error("Invalid plugin configuration: %s", e)
            return

        await self.init(parsed)

    @abstractmethod
    def parse_config(self, config: Mapping[str, Any] | None) -> PluginConfigT:
        """Converts the host-supplied mapping into `PluginConfigT`."""

    @abstractmethod
    async def init(self, config: PluginConfigT) -> None:
        """Activates the plugin. Must not raise."""

    @abstractmethod
    async def destroy(self) -> bool:
        """Deactivates the plugin, returning whether it shut down cleanly."""
