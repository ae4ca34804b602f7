import logging
from typing import Any, Dict, List, Optional

import pytest

from mdns_plugin.config.mdns_plugin_config import MdnsPluginConfig
from mdns_plugin.discovery.mdns.mdns_responder import MdnsResponder, MdnsService
from mdns_plugin.plugin.mdns_plugin import MdnsPlugin

NAMESPACE = "system.adapter.ai-assistant.0.plugins.mdns"
HOSTNAME = "host1"


class FakeMdnsService(MdnsService):
    """Records advertise/end calls; optionally raises from either."""

    def __init__(
        self,
        name: str,
        type_: str,
        port: int,
        txt: Dict[str, str],
        advertise_error: Optional[Exception] = None,
        end_error: Optional[Exception] = None,
    ):
        self.name = name
        self.type_ = type_
        self.port = port
        self.txt = txt
        self.advertise_error = advertise_error
        self.end_error = end_error
        self.advertise_call_count = 0
        self.end_call_count = 0

    async def advertise(self) -> None:
        self.advertise_call_count += 1
        if self.advertise_error is not None:
            raise self.advertise_error

    async def end(self) -> None:
        self.end_call_count += 1
        if self.end_error is not None:
            raise self.end_error


class FakeMdnsResponder(MdnsResponder):
    def __init__(
        self,
        advertise_error: Optional[Exception] = None,
        end_error: Optional[Exception] = None,
        shutdown_error: Optional[Exception] = None,
        create_error: Optional[Exception] = None,
    ):
        self.advertise_error = advertise_error
        self.end_error = end_error
        self.shutdown_error = shutdown_error
        self.create_error = create_error
        self.services: List[FakeMdnsService] = []
        self.shutdown_call_count = 0

    def create_service(
        self, name: str, type_: str, port: int | float, txt: Dict[str, str]
    ) -> FakeMdnsService:
        if self.create_error is not None:
            raise self.create_error
        service = FakeMdnsService(
            name, type_, port, txt, self.advertise_error, self.end_error
        )
        self.services.append(service)
        return service

    async def shutdown(self) -> None:
        self.shutdown_call_count += 1
        if self.shutdown_error is not None:
            raise self.shutdown_error


class TestMdnsPlugin:
    """Unit tests for MdnsPlugin using an injected fake responder."""

    def setup_method(self):
        self.responders: List[FakeMdnsResponder] = []
        self.responder_kwargs: Dict[str, Any] = {}

    def _factory(self) -> FakeMdnsResponder:
        responder = FakeMdnsResponder(**self.responder_kwargs)
        self.responders.append(responder)
        return responder

    def _make_plugin(
        self,
        namespace: str = NAMESPACE,
        parent_io_package: Optional[Dict[str, Any]] = None,
    ) -> MdnsPlugin:
        return MdnsPlugin(
            namespace,
            parent_io_package,
            logging.getLogger("mdns_plugin_unittest"),
            responder_factory=self._factory,
            hostname=HOSTNAME,
        )

    def _advertised(self) -> List[FakeMdnsService]:
        return [
            service
            for responder in self.responders
            for service in responder.services
            if service.advertise_call_count > 0
        ]

    @pytest.mark.asyncio
    async def test_end_to_end_publish(self, caplog):
        plugin = self._make_plugin()

        with caplog.at_level(logging.INFO, logger="mdns_plugin_unittest"):
            await plugin.init_plugin(
                {
                    "enabled": True,
                    "serviceType": "iobroker-ai",
                    "port": 8089,
                    "txt": {"path": "/audio"},
                }
            )

        advertised = self._advertised()
        assert len(advertised) == 1
        service = advertised[0]
        assert service.name == "ioBroker ai-assistant (host1)"
        assert service.type_ == "iobroker-ai"
        assert service.port == 8089
        assert service.txt == {
            "adapter": "ai-assistant",
            "hostname": "host1",
            "path": "/audio",
        }
        assert service.advertise_call_count == 1
        assert plugin.is_advertising
        assert any(
            record.levelno == logging.INFO
            and record.getMessage()
            == 'mDNS service published: _iobroker-ai._tcp on port 8089 as "ioBroker ai-assistant (host1)"'
            for record in caplog.records
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("config", [{}, {"enabled": False}, None])
    async def test_disabled_creates_nothing(self, caplog, config):
        plugin = self._make_plugin()

        with caplog.at_level(logging.INFO, logger="mdns_plugin_unittest"):
            await plugin.init_plugin(config)

        assert self.responders == []
        assert not plugin.is_advertising
        assert [r.getMessage() for r in caplog.records] == [
            "mDNS plugin disabled by user"
        ]

    @pytest.mark.asyncio
    async def test_no_port_warns_once_and_creates_nothing(self, caplog):
        plugin = self._make_plugin(parent_io_package={"native": {"x": "9999"}})

        with caplog.at_level(logging.DEBUG, logger="mdns_plugin_unittest"):
            await plugin.init_plugin(
                {"enabled": True, "portKey": "x", "defaultPort": "7000"}
            )

        assert self.responders == []
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "no port configured" in warnings[0].getMessage()

    @pytest.mark.asyncio
    async def test_port_from_native_config(self):
        plugin = self._make_plugin(
            parent_io_package={"native": {"audioPort": 9999}}
        )

        await plugin.init(
            MdnsPluginConfig(enabled=True, port_key="audioPort", default_port=7000)
        )

        assert [s.port for s in self._advertised()] == [9999]

    @pytest.mark.asyncio
    async def test_explicit_port_beats_native_config(self):
        plugin = self._make_plugin(parent_io_package={"native": {"x": 9999}})

        await plugin.init(MdnsPluginConfig(enabled=True, port=8089, port_key="x"))

        assert [s.port for s in self._advertised()] == [8089]

    @pytest.mark.asyncio
    async def test_default_port_and_default_names(self):
        plugin = self._make_plugin(namespace="system.adapter.web.0.plugins.mdns")

        await plugin.init(MdnsPluginConfig(enabled=True, default_port=7000))

        service = self._advertised()[0]
        assert service.port == 7000
        assert service.type_ == "iobroker-web"
        assert service.name == "ioBroker web (host1)"

    @pytest.mark.asyncio
    async def test_unparseable_namespace_uses_unknown(self):
        plugin = self._make_plugin(namespace="garbage")

        await plugin.init(MdnsPluginConfig(enabled=True, port=1234))

        service = self._advertised()[0]
        assert service.type_ == "iobroker-unknown"
        assert service.txt["adapter"] == "unknown"

    @pytest.mark.asyncio
    async def test_publish_failure_is_logged_not_raised(self, caplog):
        self.responder_kwargs = {"advertise_error": OSError("socket bind failed")}
        plugin = self._make_plugin()

        with caplog.at_level(logging.INFO, logger="mdns_plugin_unittest"):
            await plugin.init(MdnsPluginConfig(enabled=True, port=8089))

        assert not plugin.is_advertising
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert (
            errors[0].getMessage()
            == "mDNS plugin failed to publish service: socket bind failed"
        )
        assert not any(r.levelno == logging.INFO for r in caplog.records)

    @pytest.mark.asyncio
    async def test_responder_construction_failure_is_logged(self, caplog):
        def failing_factory() -> MdnsResponder:
            raise RuntimeError("no multicast")

        plugin = MdnsPlugin(
            NAMESPACE,
            logger=logging.getLogger("mdns_plugin_unittest"),
            responder_factory=failing_factory,
            hostname=HOSTNAME,
        )

        with caplog.at_level(logging.ERROR, logger="mdns_plugin_unittest"):
            await plugin.init(MdnsPluginConfig(enabled=True, port=8089))

        assert "no multicast" in caplog.records[0].getMessage()
        assert await plugin.destroy() is True

    @pytest.mark.asyncio
    async def test_destroy_after_publish_failure_releases_responder(self):
        self.responder_kwargs = {"advertise_error": OSError("boom")}
        plugin = self._make_plugin()
        await plugin.init(MdnsPluginConfig(enabled=True, port=8089))

        assert await plugin.destroy() is True

        assert self.responders[0].shutdown_call_count == 1

    @pytest.mark.asyncio
    async def test_destroy_ends_service_then_shuts_down_responder(self, caplog):
        plugin = self._make_plugin()
        await plugin.init(MdnsPluginConfig(enabled=True, port=8089))

        with caplog.at_level(logging.DEBUG, logger="mdns_plugin_unittest"):
            assert await plugin.destroy() is True

        responder = self.responders[0]
        assert responder.services[0].end_call_count == 1
        assert responder.shutdown_call_count == 1
        assert not plugin.is_advertising
        assert [r.getMessage() for r in caplog.records] == ["mDNS plugin destroyed"]

    @pytest.mark.asyncio
    async def test_destroy_shuts_down_responder_when_end_fails(self, caplog):
        self.responder_kwargs = {
            "end_error": RuntimeError("end failed"),
            "shutdown_error": RuntimeError("shutdown failed"),
        }
        plugin = self._make_plugin()
        await plugin.init(MdnsPluginConfig(enabled=True, port=8089))

        with caplog.at_level(logging.DEBUG):
            assert await plugin.destroy() is True

        responder = self.responders[0]
        assert responder.services[0].end_call_count == 1
        assert responder.shutdown_call_count == 1
        # Teardown errors are not logged by any logger.
        messages = [r.getMessage() for r in caplog.records]
        assert not any("end failed" in m for m in messages)
        assert not any("shutdown failed" in m for m in messages)
        assert "mDNS plugin destroyed" in messages

    @pytest.mark.asyncio
    async def test_second_init_releases_previous_responder(self):
        plugin = self._make_plugin()
        await plugin.init(MdnsPluginConfig(enabled=True, port=8089))
        await plugin.init(MdnsPluginConfig(enabled=True, port=9000))

        first, second = self.responders
        assert first.services[0].end_call_count == 1
        assert first.shutdown_call_count == 1
        assert second.shutdown_call_count == 0
        assert plugin.advertisement is not None
        assert plugin.advertisement.port == 9000

        assert await plugin.destroy() is True
        assert second.shutdown_call_count == 1

    @pytest.mark.asyncio
    async def test_destroy_is_idempotent(self):
        plugin = self._make_plugin()
        await plugin.init(MdnsPluginConfig(enabled=True, port=8089))

        assert await plugin.destroy() is True
        assert await plugin.destroy() is True

        responder = self.responders[0]
        assert responder.services[0].end_call_count == 1
        assert responder.shutdown_call_count == 1

    @pytest.mark.asyncio
    async def test_destroy_without_init(self):
        plugin = self._make_plugin()

        assert await plugin.destroy() is True
        assert self.responders == []

    @pytest.mark.asyncio
    async def test_invalid_config_type_is_logged(self, caplog):
        plugin = self._make_plugin()

        with caplog.at_level(logging.ERROR, logger="mdns_plugin_unittest"):
            await plugin.init_plugin(["not", "a", "mapping"])  # type: ignore[arg-type]

        assert self.responders == []
        assert "Invalid plugin configuration" in caplog.records[0].getMessage()
