"""
Device fingerprinting - resolves the device adapter from sysObjectID.
"""
from dataclasses import dataclass

from src.snmp.client import SNMPClient, SNMPCredential, SNMPError
from src.snmp.oids import SystemOIDs
from src.vendors.base import DeviceAdapter
from src.vendors.registry import VendorRegistry


@dataclass
class FingerprintResult:
    """Result of device fingerprinting."""

    success: bool
    adapter: DeviceAdapter | None = None
    sys_object_id: str | None = None
    sys_name: str | None = None
    error: str | None = None


class DeviceFingerprinter:
    """
    Fingerprints devices using SNMP sysObjectID and sysName.
    """

    def __init__(self, snmp_client: SNMPClient):
        self.snmp_client = snmp_client

    async def fingerprint(self, credential: SNMPCredential) -> FingerprintResult:
        """
        Query sysObjectID and sysName and match against the vendor registry.

        A device with no registered adapter still fingerprints successfully,
        with ``adapter`` left as None.
        """
        try:
            response = await self.snmp_client.get_many(
                [SystemOIDs.SYS_OBJECT_ID, SystemOIDs.SYS_NAME],
                credential,
            )
        except SNMPError as e:
            return FingerprintResult(success=False, error=str(e))

        sys_object_id = None
        sys_name = None
        for key, value in response.items():
            if key.lstrip(".") == SystemOIDs.SYS_OBJECT_ID:
                sys_object_id = value
            elif key.lstrip(".") == SystemOIDs.SYS_NAME:
                sys_name = value

        if not sys_object_id:
            return FingerprintResult(success=False, error="Could not retrieve sysObjectID")

        return FingerprintResult(
            success=True,
            adapter=VendorRegistry.detect_vendor(sys_object_id),
            sys_object_id=sys_object_id,
            sys_name=sys_name,
        )
