"""
Device adapter registration and lookup.
"""
from src.vendors.base import DeviceAdapter


class VendorRegistry:
    """
    Central registry for device adapters.
    Enables vendor detection from sysObjectID and capability routing.
    """

    _adapters: dict[str, DeviceAdapter] = {}
    _detection_adapters: list[DeviceAdapter] = []  # Ordered list for detection
    _initialized: bool = False

    @classmethod
    def register(cls, adapter: DeviceAdapter, detection_priority: bool = True) -> None:
        """
        Register a device adapter.

        Args:
            adapter: The adapter to register
            detection_priority: If True, add to front of detection list (checked first)
        """
        cls._adapters[adapter.vendor_name] = adapter
        cls._detection_adapters = [
            a for a in cls._detection_adapters if a.vendor_name != adapter.vendor_name
        ]
        if detection_priority:
            cls._detection_adapters.insert(0, adapter)
        else:
            cls._detection_adapters.append(adapter)

    @classmethod
    def get_adapter(cls, vendor_name: str) -> DeviceAdapter | None:
        """Get adapter by vendor name."""
        cls._ensure_initialized()
        return cls._adapters.get(vendor_name.lower())

    @classmethod
    def detect_vendor(cls, sys_object_id: str) -> DeviceAdapter | None:
        """Detect vendor from sysObjectID and return the matching adapter."""
        cls._ensure_initialized()
        for adapter in cls._detection_adapters:
            if adapter.matches_sys_object_id(sys_object_id):
                return adapter
        return None

    @classmethod
    def get_all_vendors(cls) -> list[str]:
        """Return list of registered vendor names."""
        cls._ensure_initialized()
        return list(cls._adapters.keys())

    @classmethod
    def _ensure_initialized(cls) -> None:
        if not cls._initialized:
            cls._register_all_adapters()
            cls._initialized = True

    @classmethod
    def _register_all_adapters(cls) -> None:
        """Register all available device adapters."""
        from src.vendors.altalabs.wifi import build_adapter

        cls.register(build_adapter())
