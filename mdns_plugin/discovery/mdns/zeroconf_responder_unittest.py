import asyncio
import logging

import pytest
from unittest.mock import AsyncMock, patch

from zeroconf import BadTypeInNameException, IPVersion, service_type_name
from zeroconf.asyncio import AsyncZeroconf

from mdns_plugin.discovery.mdns.zeroconf_responder import (
    ZeroconfResponder,
    ZeroconfService,
)

LOOPBACK = [b"\x7f\x00\x00\x01"]


def make_zc() -> AsyncMock:
    """AsyncZeroconf mock whose register/unregister return finished tasks."""
    zc = AsyncMock(spec=AsyncZeroconf)
    done = asyncio.get_running_loop().create_future()
    done.set_result(None)
    zc.async_register_service.return_value = done
    zc.async_unregister_service.return_value = done
    return zc


@pytest.fixture(autouse=True)
def fixed_addresses():
    with patch(
        "mdns_plugin.discovery.mdns.zeroconf_responder.get_all_addresses",
        return_value=LOOPBACK,
    ):
        yield


class TestZeroconfService:
    def test_service_info_is_fully_qualified(self):
        zc = AsyncMock(spec=AsyncZeroconf)

        service = ZeroconfService(
            zc,
            "ioBroker web (host1)",
            "iobroker-web",
            8082,
            {"adapter": "web", "hostname": "host1"},
            hostname="host1.example.com",
        )

        info = service.service_info
        assert info.type == "_iobroker-web._tcp.local."
        assert info.name == "ioBroker web (host1)._iobroker-web._tcp.local."
        assert info.port == 8082
        assert info.server == "host1.local."
        assert info.properties == {b"adapter": b"web", b"hostname": b"host1"}
        assert info.addresses == LOOPBACK

    @pytest.mark.parametrize(
        "type_", ["", "_iobroker-web", "iobroker-web._tcp", "_http._tcp.local."]
    )
    def test_decorated_or_empty_type_is_rejected(self, type_):
        with pytest.raises(ValueError):
            ZeroconfService(AsyncMock(spec=AsyncZeroconf), "name", type_, 80)

    def test_empty_name_is_rejected(self):
        with pytest.raises(ValueError):
            ZeroconfService(AsyncMock(spec=AsyncZeroconf), "", "http", 80)

    @pytest.mark.asyncio
    async def test_advertise_and_end(self):
        zc = make_zc()
        service = ZeroconfService(zc, "name", "http", 80, hostname="h")

        await service.advertise()

        zc.async_register_service.assert_awaited_once_with(service.service_info)
        assert service.is_advertised

        await service.end()

        zc.async_unregister_service.assert_awaited_once_with(service.service_info)
        assert not service.is_advertised

    @pytest.mark.asyncio
    async def test_advertise_twice_raises(self):
        service = ZeroconfService(
            make_zc(), "name", "http", 80, hostname="h"
        )
        await service.advertise()

        with pytest.raises(RuntimeError):
            await service.advertise()

    @pytest.mark.asyncio
    async def test_end_without_advertise_is_noop(self):
        zc = make_zc()
        service = ZeroconfService(zc, "name", "http", 80, hostname="h")

        await service.end()

        zc.async_unregister_service.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_advertise_leaves_service_unadvertised(self):
        zc = make_zc()
        zc.async_register_service.side_effect = OSError("no route")
        service = ZeroconfService(zc, "name", "http", 80, hostname="h")

        with pytest.raises(OSError):
            await service.advertise()

        assert not service.is_advertised
        await service.end()
        zc.async_unregister_service.assert_not_called()

    @pytest.mark.asyncio
    async def test_advertise_waits_for_registration_task(self):
        zc = make_zc()
        registration = asyncio.get_running_loop().create_future()
        registration.set_exception(OSError("name conflict"))
        zc.async_register_service.return_value = registration
        service = ZeroconfService(zc, "name", "http", 80, hostname="h")

        with pytest.raises(OSError, match="name conflict"):
            await service.advertise()

        assert not service.is_advertised

    @pytest.mark.asyncio
    async def test_float_port_is_narrowed(self):
        service = ZeroconfService(make_zc(), "name", "http", 8089.0, hostname="h")

        assert service.service_info.port == 8089
        assert isinstance(service.service_info.port, int)

    def test_long_type_label_fails_strict_check(self):
        short = ZeroconfService(
            AsyncMock(spec=AsyncZeroconf), "name", "iobroker-ai", 80, hostname="h"
        )
        long = ZeroconfService(
            AsyncMock(spec=AsyncZeroconf),
            "name",
            "iobroker-ai-assistant",
            80,
            hostname="h",
        )

        assert (
            service_type_name(short.service_info.type) == "_iobroker-ai._tcp.local."
        )
        with pytest.raises(BadTypeInNameException):
            service_type_name(long.service_info.type)


class TestZeroconfResponder:
    @pytest.mark.asyncio
    async def test_owned_zc_is_created_lazily_and_closed(self):
        mock_owned_zc = make_zc()

        with patch(
            "mdns_plugin.discovery.mdns.zeroconf_responder.AsyncZeroconf",
            return_value=mock_owned_zc,
        ) as mock_zc_constructor:
            responder = ZeroconfResponder(hostname="host1")
            mock_zc_constructor.assert_not_called()

            service = responder.create_service("name", "http", 80, {"a": "b"})
            await service.advertise()

            mock_zc_constructor.assert_called_once_with(ip_version=IPVersion.V4Only)

            await responder.shutdown()

        mock_owned_zc.async_register_service.assert_awaited_once()
        mock_owned_zc.async_unregister_service.assert_awaited_once()
        mock_owned_zc.async_close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shared_zc_is_not_closed(self):
        shared_zc = make_zc()
        responder = ZeroconfResponder(shared_zc, hostname="host1")

        service = responder.create_service("name", "http", 80, {})
        await service.advertise()
        await responder.shutdown()

        shared_zc.async_unregister_service.assert_awaited_once()
        shared_zc.async_close.assert_not_called()

    @pytest.mark.asyncio
    async def test_shutdown_without_services(self):
        with patch(
            "mdns_plugin.discovery.mdns.zeroconf_responder.AsyncZeroconf"
        ) as mock_zc_constructor:
            responder = ZeroconfResponder()
            await responder.shutdown()

        mock_zc_constructor.assert_not_called()

    @pytest.mark.asyncio
    async def test_shutdown_closes_zc_even_if_unregister_fails(self, caplog):
        mock_owned_zc = make_zc()
        mock_owned_zc.async_unregister_service.side_effect = OSError("gone")

        with patch(
            "mdns_plugin.discovery.mdns.zeroconf_responder.AsyncZeroconf",
            return_value=mock_owned_zc,
        ):
            responder = ZeroconfResponder(hostname="host1")
            service = responder.create_service("name", "http", 80, {})
            await service.advertise()

            with caplog.at_level(logging.DEBUG):
                with pytest.raises(OSError):
                    await responder.shutdown()

        mock_owned_zc.async_close.assert_awaited_once()
        assert not any("gone" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_service_already_ended_is_not_ended_again(self):
        shared_zc = make_zc()
        responder = ZeroconfResponder(shared_zc, hostname="host1")
        service = responder.create_service("name", "http", 80, {})
        await service.advertise()

        await service.end()
        await responder.shutdown()

        shared_zc.async_unregister_service.assert_awaited_once()
