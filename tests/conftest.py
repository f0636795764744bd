"""Root conftest: shared fixtures for all tests."""
from __future__ import annotations

from typing import Any, Callable

import pytest

from src.snmp.fetcher import TableSnapshot
from src.snmp.oids import AltaWirelessOIDs
from src.vendors.base import Device

ALTA_SYS_OBJECT_ID = "1.3.6.1.4.1.61802.1.2"


@pytest.fixture
def device() -> Device:
    """An Alta Labs AP with a known sysObjectID."""
    return Device(
        device_id=42,
        ip_address="10.20.0.15",
        hostname="ap-lobby",
        sys_object_id=ALTA_SYS_OBJECT_ID,
    )


@pytest.fixture
def make_snapshot() -> Callable[..., TableSnapshot]:
    """Build an ALTA-WIRELESS-MIB snapshot from column=rows keyword args."""

    def _make(**columns: dict[str, Any]) -> TableSnapshot:
        return TableSnapshot.from_columns(AltaWirelessOIDs.MIB, columns)

    return _make


@pytest.fixture
def lobby_snapshot(make_snapshot) -> TableSnapshot:
    """Two radios, four VAPs; VAP 4 has no SSID."""
    return make_snapshot(
        wlanVapStaCount={"1": "3", "2": "4", "3": "6", "4": "1"},
        wlanVapBand={"1": "5", "2": "5", "3": "2.4", "4": "2.4"},
        wlanVapSsid={"1": "Guest", "2": "Staff", "3": "Guest"},
        wlanRadioBand={"1": "2.4", "2": "5"},
        wlanRadioChannel={"1": "6", "2": "36"},
        wlanRadioChanUtilization={"1": "23", "2": "41"},
    )
