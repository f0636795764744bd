"""
Wireless sensor discovery orchestrator - coordinates adapter resolution,
table walks and the per-vendor discovery capabilities.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from src.config.settings import get_settings
from src.core.fingerprinter import DeviceFingerprinter
from src.snmp.client import SNMPClient, SNMPCredential, SNMPError
from src.snmp.fetcher import TableFetcher, load_snapshot
from src.vendors.base import Capability, Device, DeviceAdapter
from src.vendors.registry import VendorRegistry
from src.wireless.models import Sensor

logger = logging.getLogger(__name__)


def discover_sensors(
    device: Device,
    adapter: DeviceAdapter,
    fetcher: TableFetcher,
) -> list[Sensor]:
    """
    Run every discovery capability the adapter provides.

    Sensors are returned clients first, then frequency, then utilization.
    A category whose tables are empty contributes nothing. Non-numeric
    metric values raise MetricValueError to the caller.
    """
    sensors: list[Sensor] = []
    for capability in Capability.DISCOVERY:
        discover = adapter.get(capability)
        if discover is None:
            continue
        found = discover(device, fetcher)
        logger.debug(f"Device {device.device_id}: {capability} found {len(found)} sensors")
        sensors.extend(found)
    return sensors


@dataclass
class DiscoveryResult:
    """Result of discovering one device."""

    success: bool
    sensors: list[Sensor] = field(default_factory=list)
    vendor: str | None = None
    error: str | None = None
    duration_ms: int = 0


class WirelessDiscovery:
    """
    Discovers wireless sensors on a device over SNMP:
    1. Resolve the device adapter (from sysObjectID, querying it if unknown)
    2. Walk the adapter's MIB columns into a snapshot
    3. Run the adapter's discovery capabilities against the snapshot
    """

    def __init__(
        self,
        timeout: int | None = None,
        retries: int | None = None,
        port: int | None = None,
        client_factory: Callable[..., SNMPClient] = SNMPClient,
    ):
        settings = get_settings()
        self.timeout = timeout or settings.snmp_timeout
        self.retries = retries or settings.snmp_retries
        self.port = port or settings.snmp_port
        self.max_rows = settings.snmp_walk_max_rows
        self._client_factory = client_factory

    def _client(self, device: Device) -> SNMPClient:
        return self._client_factory(
            host=device.ip_address,
            port=self.port,
            timeout=self.timeout,
            retries=self.retries,
        )

    async def resolve_adapter(
        self,
        client: SNMPClient,
        device: Device,
        credential: SNMPCredential,
    ) -> DeviceAdapter | None:
        """
        Return the adapter for a device.

        Raises:
            SNMPError: sysObjectID had to be queried and could not be read
        """
        if device.sys_object_id:
            return VendorRegistry.detect_vendor(device.sys_object_id)

        fp_result = await DeviceFingerprinter(client).fingerprint(credential)
        if not fp_result.success:
            raise SNMPError(fp_result.error or "Fingerprinting failed")
        return fp_result.adapter

    async def discover(self, device: Device, credential: SNMPCredential) -> DiscoveryResult:
        """
        Discover wireless sensors for one device.

        Transport failures are reported in the result. A malformed metric
        value (MetricValueError) propagates.
        """
        start_time = time.time()
        client = self._client(device)

        try:
            adapter = await self.resolve_adapter(client, device, credential)
        except SNMPError as e:
            logger.warning(f"Could not identify {device.ip_address}: {e}")
            return DiscoveryResult(
                success=False,
                error=str(e),
                duration_ms=int((time.time() - start_time) * 1000),
            )

        if adapter is None:
            logger.info(f"No wireless adapter for {device.ip_address}, nothing to discover")
            return DiscoveryResult(
                success=True,
                duration_ms=int((time.time() - start_time) * 1000),
            )

        snapshot = await load_snapshot(
            client,
            credential,
            adapter.mib_name,
            adapter.required_columns,
            max_rows=self.max_rows,
        )
        sensors = discover_sensors(device, adapter, snapshot)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Discovered {len(sensors)} wireless sensors on {device.ip_address} "
            f"({adapter.vendor_name}) in {duration_ms} ms"
        )
        return DiscoveryResult(
            success=True,
            sensors=sensors,
            vendor=adapter.vendor_name,
            duration_ms=duration_ms,
        )
