"""
Device identity and per-vendor capability sets.

A vendor is described by a DeviceAdapter: plain data plus a mapping of
capability tag -> implementing function. Callers resolve the adapter once
per device and look capabilities up by tag.
"""
from dataclasses import dataclass, field
from typing import Any, Callable


class Capability:
    """Capability tags a device adapter may provide."""
    WIRELESS_CLIENTS_DISCOVERY = "wireless-clients-discovery"
    WIRELESS_FREQUENCY_DISCOVERY = "wireless-frequency-discovery"
    WIRELESS_FREQUENCY_POLLING = "wireless-frequency-polling"
    WIRELESS_UTILIZATION_DISCOVERY = "wireless-utilization-discovery"

    # Discovery capabilities, in the order their sensors are emitted
    DISCOVERY = (
        WIRELESS_CLIENTS_DISCOVERY,
        WIRELESS_FREQUENCY_DISCOVERY,
        WIRELESS_UTILIZATION_DISCOVERY,
    )


@dataclass
class Device:
    """The device a discovery or poll call runs against."""

    device_id: int | str
    ip_address: str
    hostname: str | None = None
    sys_object_id: str | None = None


@dataclass
class DeviceAdapter:
    """
    Capability set for one device type.

    Attributes:
        vendor_name: Registry key (e.g. 'altalabs')
        enterprise_id: IANA enterprise number
        sys_object_id_prefix: sysObjectID subtree the adapter claims
        mib_name: MIB the discovery columns belong to
        required_columns: Column name -> base OID read by discovery
        capabilities: Capability tag -> function
    """

    vendor_name: str
    enterprise_id: int
    sys_object_id_prefix: str
    mib_name: str
    required_columns: dict[str, str] = field(default_factory=dict)
    capabilities: dict[str, Callable[..., Any]] = field(default_factory=dict)

    def supports(self, capability: str) -> bool:
        return capability in self.capabilities

    def get(self, capability: str) -> Callable[..., Any] | None:
        """Return the function implementing a capability, or None."""
        return self.capabilities.get(capability)

    def matches_sys_object_id(self, sys_object_id: str) -> bool:
        """Check if the sysObjectID falls under this adapter's subtree."""
        normalized = sys_object_id.strip().lstrip(".")
        prefix = self.sys_object_id_prefix.lstrip(".")
        return normalized == prefix or normalized.startswith(prefix + ".")
