"""
Re-reads discovered frequency sensors and reports their current value.
"""
import logging
from typing import Callable, Iterable

from src.config.settings import get_settings
from src.snmp.client import SNMPClient, SNMPCredential
from src.vendors.base import Capability, Device, DeviceAdapter
from src.vendors.registry import VendorRegistry
from src.wireless.models import Sensor, SensorCategory

logger = logging.getLogger(__name__)


class WirelessPoller:
    """Polls radio channels and reports them as frequency (MHz)."""

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
        self._client_factory = client_factory

    async def poll_frequency(
        self,
        device: Device,
        credential: SNMPCredential,
        sensors: Iterable[Sensor],
        adapter: DeviceAdapter | None = None,
    ) -> dict[tuple[str, str, str], int]:
        """
        Poll the channel OIDs behind frequency sensors in one GET.

        Returns:
            Dict of sensor key -> frequency in MHz; empty when the device
            has no frequency-polling capability or no frequency sensors.

        Raises:
            SNMPError: the GET failed
        """
        if adapter is None and device.sys_object_id:
            adapter = VendorRegistry.detect_vendor(device.sys_object_id)
        if adapter is None:
            logger.debug(f"No adapter for {device.ip_address}, skipping frequency poll")
            return {}

        poll = adapter.get(Capability.WIRELESS_FREQUENCY_POLLING)
        if poll is None:
            return {}

        frequency_sensors = [s for s in sensors if s.category == SensorCategory.FREQUENCY]
        if not frequency_sensors:
            return {}

        client = self._client_factory(
            host=device.ip_address,
            port=self.port,
            timeout=self.timeout,
            retries=self.retries,
        )
        values = await client.get_many(
            [sensor.oid_list[0] for sensor in frequency_sensors], credential
        )
        return poll(frequency_sensors, values)
