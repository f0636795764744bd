"""Tests for src.core.discovery and src.core.poller with a stubbed SNMP client."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.core.discovery import WirelessDiscovery, discover_sensors
from src.core.poller import WirelessPoller
from src.snmp.client import SNMPTimeoutError, SNMPv2cCredential
from src.snmp.oids import AltaWirelessOIDs, SystemOIDs
from src.vendors.altalabs.wifi import build_adapter, discover_wireless_clients
from src.vendors.base import Capability, Device, DeviceAdapter
from src.wireless.models import MetricValueError, SensorCategory

CREDENTIAL = SNMPv2cCredential("public")

LOBBY_WALK = {
    AltaWirelessOIDs.WLAN_VAP_STA_COUNT: {"1": "3", "2": "4"},
    AltaWirelessOIDs.WLAN_VAP_BAND: {"1": "5", "2": "5"},
    AltaWirelessOIDs.WLAN_VAP_SSID: {"1": "Guest", "2": "Guest"},
    AltaWirelessOIDs.WLAN_RADIO_BAND: {"1": "2.4", "2": "5"},
    AltaWirelessOIDs.WLAN_RADIO_CHANNEL: {"1": "6", "2": "36"},
    AltaWirelessOIDs.WLAN_RADIO_CHAN_UTILIZATION: {"1": "23", "2": "41"},
}


def _stub_client(walk: dict | None = None, system: dict | None = None):
    """Return (factory, client) where the client answers from canned tables."""
    walk = walk or {}
    client = MagicMock()
    client.host = "10.20.0.15"

    async def walk_column(column_oid, credential, max_rows=None):
        return dict(walk.get(column_oid, {}))

    client.walk_column = AsyncMock(side_effect=walk_column)
    client.get_many = AsyncMock(return_value=system or {})
    return (lambda **kwargs: client), client


class TestDiscoverSensors:
    def test_categories_in_order(self, device, lobby_snapshot):
        sensors = discover_sensors(device, build_adapter(), lobby_snapshot)

        categories = [s.category for s in sensors]
        assert categories == sorted(
            categories,
            key=[SensorCategory.CLIENTS, SensorCategory.FREQUENCY, SensorCategory.UTILIZATION].index,
        )
        assert len(sensors) == 4 + 2 + 2

    def test_only_supported_capabilities_run(self, device, lobby_snapshot):
        adapter = DeviceAdapter(
            vendor_name="clients-only",
            enterprise_id=61802,
            sys_object_id_prefix="1.3.6.1.4.1.61802",
            mib_name=AltaWirelessOIDs.MIB,
            capabilities={Capability.WIRELESS_CLIENTS_DISCOVERY: discover_wireless_clients},
        )

        sensors = discover_sensors(device, adapter, lobby_snapshot)

        assert {s.category for s in sensors} == {SensorCategory.CLIENTS}

    def test_empty_tables_yield_empty_list(self, device, make_snapshot):
        assert discover_sensors(device, build_adapter(), make_snapshot()) == []

    def test_disabled_radio_only_loses_its_frequency(self, device, make_snapshot):
        snapshot = make_snapshot(
            wlanVapStaCount={"1": "3", "2": "4"},
            wlanVapBand={"1": "5", "2": "5"},
            wlanVapSsid={"1": "Guest", "2": "Guest"},
            wlanRadioBand={"1": "2.4", "2": "5"},
            wlanRadioChannel={"1": "6", "2": "0"},
            wlanRadioChanUtilization={"1": "23", "2": "41"},
        )

        sensors = discover_sensors(device, build_adapter(), snapshot)

        assert [s.display_name for s in sensors] == [
            "Clients (5G)",
            "SSID: Guest",
            "Frequency (2.4G)",
            "Total Util (2.4G)",
            "Total Util (5G)",
        ]


class TestWirelessDiscovery:
    @pytest.mark.asyncio
    async def test_discovers_known_device(self, device):
        factory, client = _stub_client(LOBBY_WALK)

        result = await WirelessDiscovery(client_factory=factory).discover(device, CREDENTIAL)

        assert result.success
        assert result.vendor == "altalabs"
        names = [s.display_name for s in result.sensors]
        assert names == [
            "Clients (5G)",
            "SSID: Guest",
            "Frequency (2.4G)",
            "Frequency (5G)",
            "Total Util (2.4G)",
            "Total Util (5G)",
        ]
        assert result.sensors[0].value == 7
        assert result.sensors[1].value == 7
        client.get_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fingerprints_when_sys_object_id_unknown(self):
        factory, client = _stub_client(
            LOBBY_WALK,
            system={
                SystemOIDs.SYS_OBJECT_ID: "1.3.6.1.4.1.61802.1.2",
                SystemOIDs.SYS_NAME: "ap-lobby",
            },
        )
        device = Device(device_id=7, ip_address="10.20.0.15")

        result = await WirelessDiscovery(client_factory=factory).discover(device, CREDENTIAL)

        assert result.success
        assert result.vendor == "altalabs"
        assert len(result.sensors) == 6
        client.get_many.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unreachable_device_reports_error(self):
        factory, client = _stub_client()
        client.get_many = AsyncMock(side_effect=SNMPTimeoutError("SNMP timeout for 10.20.0.15"))
        device = Device(device_id=7, ip_address="10.20.0.15")

        result = await WirelessDiscovery(client_factory=factory).discover(device, CREDENTIAL)

        assert not result.success
        assert "timeout" in result.error
        assert result.sensors == []
        client.walk_column.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsupported_vendor_discovers_nothing(self):
        factory, client = _stub_client(LOBBY_WALK)
        device = Device(device_id=7, ip_address="10.20.0.15", sys_object_id="1.3.6.1.4.1.9.1.1208")

        result = await WirelessDiscovery(client_factory=factory).discover(device, CREDENTIAL)

        assert result.success
        assert result.vendor is None
        assert result.sensors == []
        client.walk_column.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_rows_is_not_an_error(self, device):
        factory, _ = _stub_client({})

        result = await WirelessDiscovery(client_factory=factory).discover(device, CREDENTIAL)

        assert result.success
        assert result.sensors == []

    @pytest.mark.asyncio
    async def test_malformed_metric_propagates(self, device):
        walk = dict(LOBBY_WALK)
        walk[AltaWirelessOIDs.WLAN_VAP_STA_COUNT] = {"1": "3", "2": "n/a"}
        factory, _ = _stub_client(walk)

        with pytest.raises(MetricValueError):
            await WirelessDiscovery(client_factory=factory).discover(device, CREDENTIAL)

    @pytest.mark.asyncio
    async def test_channel_zero_keeps_other_sensors(self, device):
        walk = dict(LOBBY_WALK)
        walk[AltaWirelessOIDs.WLAN_RADIO_CHANNEL] = {"1": "6", "2": "0"}
        factory, _ = _stub_client(walk)

        result = await WirelessDiscovery(client_factory=factory).discover(device, CREDENTIAL)

        assert result.success
        by_name = {s.display_name: s for s in result.sensors}
        assert by_name["Clients (5G)"].value == 7
        assert by_name["Frequency (2.4G)"].value == 2437
        assert "Frequency (5G)" not in by_name

    @pytest.mark.asyncio
    async def test_repeat_discovery_is_identical(self, device):
        factory, _ = _stub_client(LOBBY_WALK)
        discovery = WirelessDiscovery(client_factory=factory)

        first = await discovery.discover(device, CREDENTIAL)
        second = await discovery.discover(device, CREDENTIAL)

        assert first.sensors == second.sensors


class TestWirelessPoller:
    @pytest.mark.asyncio
    async def test_poll_frequency(self, device, lobby_snapshot):
        sensors = discover_sensors(device, build_adapter(), lobby_snapshot)
        factory, client = _stub_client(
            system={
                "1.3.6.1.4.1.61802.1.1.1.1.4.1": "1",
                "1.3.6.1.4.1.61802.1.1.1.1.4.2": "48",
            }
        )

        polled = await WirelessPoller(client_factory=factory).poll_frequency(
            device, CREDENTIAL, sensors
        )

        assert polled == {
            ("frequency", "altalabs-wifi", "2.4G"): 2412,
            ("frequency", "altalabs-wifi", "5G"): 5240,
        }
        requested = client.get_many.await_args.args[0]
        assert requested == [
            ".1.3.6.1.4.1.61802.1.1.1.1.4.1",
            ".1.3.6.1.4.1.61802.1.1.1.1.4.2",
        ]

    @pytest.mark.asyncio
    async def test_poll_skips_unknown_channel(self, device, lobby_snapshot):
        sensors = discover_sensors(device, build_adapter(), lobby_snapshot)
        factory, _ = _stub_client(
            system={
                "1.3.6.1.4.1.61802.1.1.1.1.4.1": "0",
                "1.3.6.1.4.1.61802.1.1.1.1.4.2": "48",
            }
        )

        polled = await WirelessPoller(client_factory=factory).poll_frequency(
            device, CREDENTIAL, sensors
        )

        assert polled == {("frequency", "altalabs-wifi", "5G"): 5240}

    @pytest.mark.asyncio
    async def test_no_frequency_sensors_skips_request(self, device, lobby_snapshot):
        sensors = discover_wireless_clients(device, lobby_snapshot)
        factory, client = _stub_client()

        polled = await WirelessPoller(client_factory=factory).poll_frequency(
            device, CREDENTIAL, sensors
        )

        assert polled == {}
        client.get_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_device_skips_request(self, lobby_snapshot, device):
        sensors = discover_sensors(device, build_adapter(), lobby_snapshot)
        factory, client = _stub_client()
        unknown = Device(device_id=9, ip_address="10.20.0.99")

        polled = await WirelessPoller(client_factory=factory).poll_frequency(
            unknown, CREDENTIAL, sensors
        )

        assert polled == {}
        client.get_many.assert_not_awaited()
