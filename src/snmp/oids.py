"""
Standard and vendor-specific OID constants.
"""


class SystemOIDs:
    """Standard MIB-II System Group OIDs."""
    SYS_OBJECT_ID = "1.3.6.1.2.1.1.2.0"
    SYS_NAME = "1.3.6.1.2.1.1.5.0"


class EnterpriseNumbers:
    """IANA Private Enterprise Numbers for vendor identification."""
    ALTA_LABS = 61802

    @classmethod
    def get_prefix(cls, vendor_id: int) -> str:
        """Get the OID prefix for a vendor enterprise number."""
        return f"1.3.6.1.4.1.{vendor_id}"


class AltaWirelessOIDs:
    """
    ALTA-WIRELESS-MIB column OIDs.

    wlanRadioTable (1.3.6.1.4.1.61802.1.1.1.1) is indexed per radio,
    wlanVapTable (1.3.6.1.4.1.61802.1.1.2.1) per virtual AP.
    """
    MIB = "ALTA-WIRELESS-MIB"

    # Radio table
    WLAN_RADIO_BAND = ".1.3.6.1.4.1.61802.1.1.1.1.2"
    WLAN_RADIO_CHANNEL = ".1.3.6.1.4.1.61802.1.1.1.1.4"
    WLAN_RADIO_CHAN_UTILIZATION = ".1.3.6.1.4.1.61802.1.1.1.1.5"

    # VAP table
    WLAN_VAP_SSID = ".1.3.6.1.4.1.61802.1.1.2.1.2"
    WLAN_VAP_BAND = ".1.3.6.1.4.1.61802.1.1.2.1.4"
    WLAN_VAP_STA_COUNT = ".1.3.6.1.4.1.61802.1.1.2.1.9"

    @classmethod
    def columns(cls) -> dict[str, str]:
        """Return column name -> base OID for every known column."""
        return {
            "wlanRadioBand": cls.WLAN_RADIO_BAND,
            "wlanRadioChannel": cls.WLAN_RADIO_CHANNEL,
            "wlanRadioChanUtilization": cls.WLAN_RADIO_CHAN_UTILIZATION,
            "wlanVapSsid": cls.WLAN_VAP_SSID,
            "wlanVapBand": cls.WLAN_VAP_BAND,
            "wlanVapStaCount": cls.WLAN_VAP_STA_COUNT,
        }

    @classmethod
    def instance(cls, column_oid: str, index: str) -> str:
        """Build the instance OID for a column row."""
        return f"{column_oid}.{index}"
