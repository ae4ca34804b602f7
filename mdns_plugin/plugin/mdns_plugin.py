"""MdnsPlugin: advertises the owning adapter's service via mDNS."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from mdns_plugin.config.advertisement_resolver import (
    ResolvedAdvertisement,
    resolve_advertisement,
)
from mdns_plugin.config.mdns_plugin_config import MdnsPluginConfig
from mdns_plugin.discovery.mdns.mdns_responder import MdnsResponder, MdnsService
from mdns_plugin.discovery.mdns.zeroconf_responder import ZeroconfResponder
from mdns_plugin.plugin.plugin_base import PluginBase
from mdns_plugin.util.ip import get_local_hostname
from mdns_plugin.util.result import Failure, capture_async


class MdnsPlugin(PluginBase[MdnsPluginConfig]):
    """Publishes one DNS-SD service for the lifetime of an adapter instance.

    Failures never reach the host: an unresolvable port is a warning, a
    failed publish is an error log, and teardown errors are discarded.
    """

    def __init__(
        self,
        namespace: str,
        parent_io_package: Mapping[str, Any] | None = None,
        logger: logging.Logger | None = None,
        *,
        responder_factory: Callable[[], MdnsResponder] | None = None,
        hostname: str | None = None,
    ) -> None:
        """Initializes the MdnsPlugin.

        Args:
            namespace: Plugin namespace, e.g. "system.adapter.web.0.plugins.mdns".
            parent_io_package: The owning adapter's io-package.json content.
            logger: Host logger. See `PluginBase`.
            responder_factory: Creates the responder on activation. Defaults
                               to `ZeroconfResponder`.
            hostname: Host name to advertise. Defaults to the local one.
        """
        super().__init__(namespace, parent_io_package, logger)

        self.__responder_factory: Callable[[], MdnsResponder] = (
            responder_factory or ZeroconfResponder
        )
        self.__hostname = hostname
        self.__responder: MdnsResponder | None = None
        self.__service: MdnsService | None = None
        self.__advertisement: ResolvedAdvertisement | None = None

    @property
    def advertisement(self) -> ResolvedAdvertisement | None:
        """What is currently advertised, or None if inactive."""
        return self.__advertisement

    @property
    def is_advertising(self) -> bool:
        return self.__advertisement is not None

    def parse_config(self, config: Mapping[str, Any] | None) -> MdnsPluginConfig:
        return MdnsPluginConfig.from_mapping(config)

    async def init(self, config: MdnsPluginConfig) -> None:
        """Resolves the advertisement from `config` and publishes it."""
        if not config.enabled:
            self.log.info("mDNS plugin disabled by user")
            return

        hostname = self.__hostname or get_local_hostname()
        advertisement = resolve_advertisement(
            config, self.plugin_namespace, hostname, self.native_config
        )
        if advertisement is None:
            self.log.warning(
                'mDNS plugin: no port configured. Set "port", "portKey", or '
                '"defaultPort" in plugin config.'
            )
            return

        result = await capture_async(lambda: self.__publish(advertisement))
        if isinstance(result, Failure):
            self.log.error(
                "mDNS plugin failed to publish service: %s", result.message
            )
            return

        self.__advertisement = advertisement
        self.log.info(
            'mDNS service published: %s on port %s as "%s"',
            advertisement.qualified_type,
            advertisement.port,
            advertisement.service_name,
        )

    async def __publish(self, advertisement: ResolvedAdvertisement) -> None:
        # A repeated init() replaces the previous advertisement.
        await self.__release()

        # Handles are stored as soon as they exist so destroy() can release
        # them even if a later step fails.
        self.__responder = self.__responder_factory()
        self.__service = self.__responder.create_service(
            name=advertisement.service_name,
            type_=advertisement.service_type,
            port=advertisement.port,
            txt=dict(advertisement.txt),
        )
        await self.__service.advertise()

    async def destroy(self) -> bool:
        """Unpublishes the service and shuts down the responder.

        Each step is attempted regardless of the outcome of the previous one,
        and errors are discarded. Always returns True.
        """
        await self.__release()
        self.log.debug("mDNS plugin destroyed")
        return True

    async def __release(self) -> None:
        service, self.__service = self.__service, None
        if service is not None:
            await capture_async(service.end)

        responder, self.__responder = self.__responder, None
        if responder is not None:
            await capture_async(responder.shutdown)

        self.__advertisement = None
