"""
Alta Labs wireless access point sensor discovery.

Alta Labs APs expose radio and VAP state in ALTA-WIRELESS-MIB:
- wlanRadioTable: one row per radio (band, channel, channel utilization)
- wlanVapTable: one row per VAP (SSID, band, associated station count)

sysObjectID format: 1.3.6.1.4.1.61802.*

Client counts are summed per band ("Clients (5G)") and per SSID
("SSID: Guest"). Frequency and utilization are per-radio values.
"""
import logging
from functools import partial
from typing import Any, Iterable, Mapping

from src.snmp.fetcher import TableFetcher
from src.snmp.oids import AltaWirelessOIDs, EnterpriseNumbers
from src.vendors.base import Capability, Device, DeviceAdapter
from src.wireless.aggregator import aggregate, band_key, by_band, by_ssid
from src.wireless.frequency import (
    ChannelConverter,
    UnknownChannelError,
    channel_to_frequency,
    parse_channel,
)
from src.wireless.joiner import join
from src.wireless.models import AggregationOp, Sensor, SensorCategory, raw_rows
from src.wireless.sensors import build_group_sensor, build_row_sensor

logger = logging.getLogger(__name__)

VENDOR_NAME = "altalabs"
MIB = AltaWirelessOIDs.MIB

WIFI_GROUP_TAG = "altalabs-wifi"
UTILIZATION_GROUP_TAG = "altalabs-total-util"

# Per-band client totals
BAND_CLIENTS_HIGH_LIMIT = 100
BAND_CLIENTS_HIGH_WARN_LIMIT = 90


def discover_wireless_clients(device: Device, fetcher: TableFetcher) -> list[Sensor]:
    """
    Discover client-count sensors, one per radio band and one per SSID.

    Every VAP counts toward its band. VAPs without an SSID are left out
    of the per-SSID sensors only.
    """
    client_table = fetcher.fetch("wlanVapStaCount", MIB)
    if not client_table:
        return []

    rows = join(
        raw_rows(client_table),
        "wlanVapStaCount",
        AltaWirelessOIDs.WLAN_VAP_STA_COUNT,
        {
            "band": fetcher.lookup_by_index("wlanVapBand", MIB),
            "ssid": fetcher.lookup_by_index("wlanVapSsid", MIB),
        },
    )

    sensors = []
    for name, group in aggregate(rows, by_band).items():
        sensors.append(
            build_group_sensor(
                SensorCategory.CLIENTS,
                device.device_id,
                group,
                WIFI_GROUP_TAG,
                f"Clients ({name})",
                aggregation_op=AggregationOp.SUM,
                high_limit=BAND_CLIENTS_HIGH_LIMIT,
                high_warn_limit=BAND_CLIENTS_HIGH_WARN_LIMIT,
            )
        )

    # TODO: SSID totals carry no limits; add them once a client ceiling per SSID is agreed on.
    for ssid, group in aggregate(rows, by_ssid).items():
        sensors.append(
            build_group_sensor(
                SensorCategory.CLIENTS,
                device.device_id,
                group,
                WIFI_GROUP_TAG,
                f"SSID: {ssid}",
            )
        )

    logger.debug(f"Device {device.device_id}: {len(rows)} VAPs -> {len(sensors)} client sensors")
    return sensors


def discover_wireless_frequency(
    device: Device,
    fetcher: TableFetcher,
    converter: ChannelConverter = channel_to_frequency,
) -> list[Sensor]:
    """
    Discover one frequency sensor (MHz) per radio band.

    When several radios report the same band only the first one is kept;
    frequency is a per-radio property and is never summed. A radio whose
    channel has no known frequency (e.g. channel 0 on a disabled radio)
    is skipped with a warning and does not claim its band, so a later
    radio on that band can still provide the sensor.

    Raises:
        MetricValueError: a channel value is not a whole number
    """
    channel_table = fetcher.fetch("wlanRadioChannel", MIB)
    if not channel_table:
        return []

    rows = join(
        raw_rows(channel_table),
        "wlanRadioChannel",
        AltaWirelessOIDs.WLAN_RADIO_CHANNEL,
        {"band": fetcher.lookup_by_index("wlanRadioBand", MIB)},
    )

    sensors: dict[str, Sensor] = {}
    for row in rows:
        radio = band_key(row.band)
        if radio is None:
            logger.debug(f"Device {device.device_id}: radio {row.index} has no band, skipped")
            continue
        if radio in sensors:
            continue
        channel = parse_channel(row.metric, row.oid)
        try:
            frequency = converter(channel)
        except UnknownChannelError as e:
            logger.warning(f"Device {device.device_id}: radio {row.index} ({radio}) skipped: {e}")
            continue
        sensors[radio] = build_row_sensor(
            SensorCategory.FREQUENCY,
            device.device_id,
            row,
            WIFI_GROUP_TAG,
            radio,
            f"Frequency ({radio})",
            unit_fn=lambda _: frequency,
        )

    return list(sensors.values())


def discover_wireless_utilization(device: Device, fetcher: TableFetcher) -> list[Sensor]:
    """Discover total channel utilization (%) for each radio."""
    util_table = fetcher.fetch("wlanRadioChanUtilization", MIB)
    if not util_table:
        return []

    rows = join(
        raw_rows(util_table),
        "wlanRadioChanUtilization",
        AltaWirelessOIDs.WLAN_RADIO_CHAN_UTILIZATION,
        {"band": fetcher.lookup_by_index("wlanRadioBand", MIB)},
    )

    sensors = []
    for row in rows:
        radio = band_key(row.band)
        if radio is None:
            logger.debug(f"Device {device.device_id}: radio {row.index} has no band, skipped")
            continue
        sensors.append(
            build_row_sensor(
                SensorCategory.UTILIZATION,
                device.device_id,
                row,
                UTILIZATION_GROUP_TAG,
                row.index,
                f"Total Util ({radio})",
            )
        )
    return sensors


def poll_wireless_frequency(
    sensors: Iterable[Sensor],
    values: Mapping[str, Any],
    converter: ChannelConverter = channel_to_frequency,
) -> dict[tuple[str, str, str], int]:
    """
    Convert polled channel numbers into frequencies for frequency sensors.

    Args:
        sensors: Previously discovered sensors (non-frequency ones ignored)
        values: OID -> raw channel value as read by the poller

    Returns:
        Dict of sensor key -> frequency in MHz. Sensors whose OID was
        not returned, or whose channel has no known frequency, are left out.

    Raises:
        MetricValueError: a polled channel is not a whole number
    """
    polled = {oid.lstrip("."): value for oid, value in values.items()}

    frequencies = {}
    for sensor in sensors:
        if sensor.category != SensorCategory.FREQUENCY:
            continue
        oid = sensor.oid_list[0]
        raw = polled.get(oid.lstrip("."))
        if raw is None:
            continue
        try:
            frequencies[sensor.key] = converter(parse_channel(raw, oid))
        except UnknownChannelError as e:
            logger.warning(f"{sensor.display_name} not polled: {e}")
    return frequencies


def build_adapter(converter: ChannelConverter = channel_to_frequency) -> DeviceAdapter:
    """Build the Alta Labs capability set, binding the channel converter."""
    return DeviceAdapter(
        vendor_name=VENDOR_NAME,
        enterprise_id=EnterpriseNumbers.ALTA_LABS,
        sys_object_id_prefix=EnterpriseNumbers.get_prefix(EnterpriseNumbers.ALTA_LABS),
        mib_name=MIB,
        required_columns=AltaWirelessOIDs.columns(),
        capabilities={
            Capability.WIRELESS_CLIENTS_DISCOVERY: discover_wireless_clients,
            Capability.WIRELESS_FREQUENCY_DISCOVERY: partial(
                discover_wireless_frequency, converter=converter
            ),
            Capability.WIRELESS_FREQUENCY_POLLING: partial(
                poll_wireless_frequency, converter=converter
            ),
            Capability.WIRELESS_UTILIZATION_DISCOVERY: discover_wireless_utilization,
        },
    )
