"""Conch API models: devices, their locations, and the hardware catalog.

Only the fields this client reads are declared. Everything is optional with
zero-ish defaults, matching how the API omits data it does not have.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from conch_shell.models.common import NIL_UUID, ConchBase


class Datacenter(ConchBase):
    """A datacenter (availability zone) as embedded in a device location."""

    id: UUID = NIL_UUID
    name: str = ""
    vendor: str = ""
    vendor_name: str = ""
    region: str = ""
    location: str = ""


class DatacenterRoom(ConchBase):
    id: UUID = NIL_UUID
    az: str = ""
    alias: str = ""
    vendor_name: str = ""


class Rack(ConchBase):
    id: UUID = NIL_UUID
    name: str = ""
    role: str = ""


class DeviceLocation(ConchBase):
    """Where a device sits: datacenter, room, rack, and rack unit."""

    datacenter: Datacenter = Field(default_factory=Datacenter)
    datacenter_room: DatacenterRoom = Field(default_factory=DatacenterRoom)
    rack: Rack = Field(default_factory=Rack)
    rack_unit_start: int = 0

    @field_validator("datacenter", "datacenter_room", "rack", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class ValidationReport(ConchBase):
    """A single validation result for one device component."""

    component_id: str | None = None
    component_name: str = ""
    component_type: str = ""
    criteria_id: str | None = None
    log: str = ""
    metric: Any = None
    status: int | None = None

    @field_validator("component_name", "component_type", "log", mode="before")
    @classmethod
    def _null_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class Device(ConchBase):
    """A device as returned by ``GET /device/{serial}``."""

    id: str
    asset_tag: str | None = None
    hardware_product: UUID = NIL_UUID
    health: str = ""
    state: str = ""
    phase: str = ""
    hostname: str | None = None
    location: DeviceLocation = Field(default_factory=DeviceLocation)
    created: datetime | None = None
    updated: datetime | None = None
    last_seen: datetime | None = None

    @field_validator("hardware_product", mode="before")
    @classmethod
    def _null_product(cls, value: Any) -> Any:
        return NIL_UUID if value in (None, "") else value

    @field_validator("location", mode="before")
    @classmethod
    def _null_location(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def datacenter_name(self) -> str:
        return self.location.datacenter.name


class HardwareProduct(ConchBase):
    """A hardware product (device model) from the catalog."""

    id: UUID
    name: str = ""
    alias: str = ""
    prefix: str | None = None
    vendor: str = ""
    hardware_vendor_id: UUID | None = None
    sku: str | None = None
    generation_name: str | None = None
    legacy_product_name: str | None = None

    @field_validator("vendor", mode="before")
    @classmethod
    def _null_vendor(cls, value: Any) -> Any:
        return "" if value is None else value


class HardwareVendor(ConchBase):
    id: UUID
    name: str
    created: datetime | None = None
    updated: datetime | None = None


class GlobalDatacenter(ConchBase):
    """A datacenter as returned by the ``/dc`` endpoints."""

    id: UUID
    vendor: str = ""
    vendor_name: str | None = None
    region: str = ""
    location: str = ""
    created: datetime | None = None
    updated: datetime | None = None
