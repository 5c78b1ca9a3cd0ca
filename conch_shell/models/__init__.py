"""Pydantic models for Conch API payloads and the MBO failure export."""

from conch_shell.models.common import NIL_UUID, ConchBase
from conch_shell.models.device import (
    Datacenter,
    Device,
    DeviceLocation,
    GlobalDatacenter,
    HardwareProduct,
    HardwareVendor,
    ValidationReport,
)
from conch_shell.models.failure import (
    ComponentFail,
    ComponentFailReport,
    RawReport,
    RawReportAdapter,
)

__all__ = [
    "ComponentFail",
    "ComponentFailReport",
    "ConchBase",
    "Datacenter",
    "Device",
    "DeviceLocation",
    "GlobalDatacenter",
    "HardwareProduct",
    "HardwareVendor",
    "NIL_UUID",
    "RawReport",
    "RawReportAdapter",
    "ValidationReport",
]
