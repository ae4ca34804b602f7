import socket

from mdns_plugin.util import ip as ip_util


# Helper to create a mock address object
def create_mock_address(mocker, family, address):
    mock_addr = mocker.MagicMock()
    mock_addr.family = family
    mock_addr.address = address
    return mock_addr


class TestIpUtils:
    def test_get_all_address_strings_no_interfaces(self, mocker):
        mock_net_if_addrs = mocker.patch("psutil.net_if_addrs")
        mock_net_if_addrs.return_value = {}

        assert ip_util.get_all_address_strings() == []
        mock_net_if_addrs.assert_called_once()

    def test_get_all_address_strings_skips_ipv6_and_loopback(self, mocker):
        mocker.patch(
            "psutil.net_if_addrs",
            return_value={
                "lo": [create_mock_address(mocker, socket.AF_INET, "127.0.0.1")],
                "eth0": [
                    create_mock_address(mocker, socket.AF_INET, "192.168.1.100"),
                    create_mock_address(mocker, socket.AF_INET6, "fe80::1"),
                ],
                "wlan0": [create_mock_address(mocker, socket.AF_INET, "10.0.0.5")],
            },
        )

        assert sorted(ip_util.get_all_address_strings()) == [
            "10.0.0.5",
            "192.168.1.100",
        ]

    def test_get_all_addresses_packs(self, mocker):
        mocker.patch(
            "mdns_plugin.util.ip.get_all_address_strings",
            return_value=["192.168.1.100"],
        )

        assert ip_util.get_all_addresses() == [socket.inet_aton("192.168.1.100")]

    def test_get_all_addresses_falls_back_to_loopback(self, mocker):
        mocker.patch("mdns_plugin.util.ip.get_all_address_strings", return_value=[])

        assert ip_util.get_all_addresses() == [socket.inet_aton("127.0.0.1")]

    def test_get_local_hostname(self, mocker):
        mocker.patch("socket.gethostname", return_value="box.example.com")

        assert ip_util.get_local_hostname() == "box.example.com"

    def test_to_mdns_server_name(self):
        assert ip_util.to_mdns_server_name("box.example.com") == "box.local."
        assert ip_util.to_mdns_server_name("host1") == "host1.local."
        assert ip_util.to_mdns_server_name("") == "localhost.local."
