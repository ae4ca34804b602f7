"""Advertises mDNS services using zeroconf."""

import logging

from zeroconf import IPVersion, ServiceInfo
from zeroconf.asyncio import AsyncZeroconf

from mdns_plugin.discovery.mdns.mdns_responder import MdnsResponder, MdnsService
from mdns_plugin.util.ip import (
    get_all_addresses,
    get_local_hostname,
    to_mdns_server_name,
)

_logger = logging.getLogger(__name__)


class ZeroconfService(MdnsService):
    """A single DNS-SD service registered through an `AsyncZeroconf`.

    Builds the `zeroconf.ServiceInfo` for the service on construction, so
    invalid names are reported before anything touches the network.
    """

    def __init__(
        self,
        zc: AsyncZeroconf,
        name: str,
        type_: str,
        port: int | float,
        txt: dict[str, str] | None = None,
        *,
        hostname: str | None = None,
    ) -> None:
        """Initializes the ZeroconfService.

        Args:
            zc: The `AsyncZeroconf` instance to register with.
            name: Instance name (e.g., "ioBroker web (host1)"). Forms part of
                  the full mDNS name ("<name>._<type>._tcp.local.").
            type_: Bare service type (e.g., "iobroker-web"). Must not carry
                   the leading underscore or the "._tcp" suffix.
            port: Network port the service is on.
            txt: Optional TXT record entries. Defaults to {}.
            hostname: Host name used for the SRV target. Defaults to the
                      local host name.

        Raises:
            ValueError: If `name` or `type_` is empty, or `type_` is already
                decorated with "_" or "._tcp".
        """
        if not name:
            raise ValueError("Service name must not be empty.")
        if not type_:
            raise ValueError("Service type must not be empty.")
        if type_.startswith("_") or "._" in type_:
            raise ValueError(
                f"Service type must be a bare token (e.g., 'iobroker-web'), "
                f"got '{type_}'."
            )

        self.__zc = zc
        self.__type: str = f"_{type_}._tcp.local."
        self.__name: str = f"{name}.{self.__type}"
        self.__service_info = ServiceInfo(
            type_=self.__type,
            name=self.__name,
            addresses=get_all_addresses(),
            port=int(port),
            properties=self._encode_txt(txt or {}),
            server=to_mdns_server_name(hostname or get_local_hostname()),
        )
        self.__registered = False

    @property
    def service_info(self) -> ServiceInfo:
        """The `zeroconf.ServiceInfo` this service registers."""
        return self.__service_info

    @property
    def is_advertised(self) -> bool:
        """Whether the service is currently registered."""
        return self.__registered

    async def advertise(self) -> None:
        """Registers the service and waits for zeroconf to accept it.

        Raises:
            RuntimeError: If the service is already advertised.
        """
        if self.__registered:
            raise RuntimeError(f"Service {self.__name} is already advertised.")

        # AsyncZeroconf hands back a task that completes once probing and the
        # initial announcement are done.
        registration = await self.__zc.async_register_service(self.__service_info)
        await registration
        self.__registered = True
        _logger.debug("Service %s registered.", self.__name)

    async def end(self) -> None:
        """Unregisters the service. Does nothing if it was never registered."""
        if not self.__registered:
            _logger.debug("Service %s not registered; nothing to end.", self.__name)
            return

        # Cleared first so a failed goodbye is not retried on a second end().
        self.__registered = False
        unregistration = await self.__zc.async_unregister_service(
            self.__service_info
        )
        await unregistration
        _logger.debug("Service %s unregistered.", self.__name)

    @staticmethod
    def _encode_txt(txt: dict[str, str]) -> dict[bytes, bytes | None]:
        return {
            str(key).encode("utf-8"): str(value).encode("utf-8")
            for key, value in txt.items()
        }


class ZeroconfResponder(MdnsResponder):
    """`MdnsResponder` backed by python-zeroconf (IPv4).

    The `AsyncZeroconf` instance is created lazily by the first
    `create_service()` call unless a shared instance is passed in. Shared
    instances are never closed by this responder.
    """

    def __init__(
        self,
        zc_instance: AsyncZeroconf | None = None,
        *,
        hostname: str | None = None,
    ) -> None:
        self.__shared_zc: AsyncZeroconf | None = zc_instance
        self.__owned_zc: AsyncZeroconf | None = None
        self.__hostname = hostname
        self.__services: list[ZeroconfService] = []

    def _get_zc(self) -> AsyncZeroconf:
        if self.__shared_zc is not None:
            return self.__shared_zc

        if self.__owned_zc is None:
            _logger.debug("Creating new AsyncZeroconf instance.")
            self.__owned_zc = AsyncZeroconf(ip_version=IPVersion.V4Only)
        return self.__owned_zc

    def create_service(
        self, name: str, type_: str, port: int | float, txt: dict[str, str]
    ) -> ZeroconfService:
        service = ZeroconfService(
            self._get_zc(), name, type_, port, txt, hostname=self.__hostname
        )
        self.__services.append(service)
        return service

    async def shutdown(self) -> None:
        """Ends all advertised services, then closes the owned zeroconf.

        A service that fails to end does not prevent closing; the first
        error encountered is re-raised once everything has been attempted.
        """
        services, self.__services = self.__services, []
        owned_zc, self.__owned_zc = self.__owned_zc, None

        first_error: Exception | None = None
        for service in services:
            try:
                await service.end()
            except Exception as e:  # pylint: disable=broad-exception-caught
                first_error = first_error or e

        if owned_zc is not None:
            _logger.debug("Closing owned AsyncZeroconf instance.")
            await owned_zc.async_close()

        if first_error is not None:
            raise first_error
