"""MdnsResponder and MdnsService ABCs for advertising services via mDNS."""

from abc import ABC, abstractmethod


class MdnsService(ABC):
    """A single service advertisement owned by an `MdnsResponder`.

    Created through `MdnsResponder.create_service()`. Nothing is sent on the
    network until `advertise()` is awaited.
    """

    @abstractmethod
    async def advertise(self) -> None:
        """Announces the service on the local network.

        Completes once the responder has accepted the registration. May raise
        whatever transport or protocol error the underlying library raises.
        """

    @abstractmethod
    async def end(self) -> None:
        """Withdraws the service from the local network.

        Calling this on a service that was never advertised does nothing.
        """


class MdnsResponder(ABC):
    """Abstract base class for mDNS responders.

    A responder owns the network side of mDNS (sockets, probing, record
    announcement) and hands out `MdnsService` instances describing what to
    advertise.
    """

    @abstractmethod
    def create_service(
        self, name: str, type_: str, port: int | float, txt: dict[str, str]
    ) -> MdnsService:
        """Creates (but does not advertise) a service description.

        Args:
            name: Human-readable instance name (e.g., "ioBroker web (host1)").
            type_: Bare service type token (e.g., "iobroker-web"), without the
                   leading underscore or the "._tcp" suffix.
            port: Port the service listens on.
            txt: TXT record entries.

        Returns:
            The `MdnsService` handle for this description.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Releases all network resources held by this responder."""
