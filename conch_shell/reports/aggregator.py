"""FailureAggregator: turn the raw failure export into per-datacenter aggregates.

Single pass over the export. For each device:

1. resolve the device through the injected ``DeviceLookup``
2. resolve its datacenter (and apply the optional filter) and vendor
3. for each component failure, compute first_pass - first_fail and, if it
   clears the threshold, record one observation into all three views

The hardware product catalog is fetched once up front; a failure there
aborts the run. Per-device lookup failures are skipped and counted.
"""

import logging
import re
from dataclasses import dataclass

from conch_shell.client.base import DeviceLookup
from conch_shell.client.errors import ConchError
from conch_shell.models.common import NIL_UUID
from conch_shell.models.device import Device, HardwareProduct
from conch_shell.models.failure import ComponentFail, RawReport
from conch_shell.reports.aggregates import DatacenterReport, TypeReportDevice
from conch_shell.reports.durations import SECOND, to_nanoseconds

logger = logging.getLogger(__name__)

UNKNOWN = "UNKNOWN"
DEFAULT_REMEDIATION_MINIMUM = 90

_UNDETERMINED = frozenset({"", "Undetermined"})
_PEER_RE = re.compile(r"_peer$")


@dataclass
class AggregationStats:
    """Counters for one aggregation run."""

    devices_seen: int = 0
    devices_unresolved: int = 0
    devices_incomplete: int = 0
    devices_filtered: int = 0
    entries_missing_timestamps: int = 0
    entries_below_threshold: int = 0
    entries_recorded: int = 0

    def to_dict(self) -> dict:
        return {
            "devices_seen": self.devices_seen,
            "devices_unresolved": self.devices_unresolved,
            "devices_incomplete": self.devices_incomplete,
            "devices_filtered": self.devices_filtered,
            "entries_missing_timestamps": self.entries_missing_timestamps,
            "entries_below_threshold": self.entries_below_threshold,
            "entries_recorded": self.entries_recorded,
        }


def normalize_type(value: str) -> str:
    return UNKNOWN if value in _UNDETERMINED else value


def normalize_component_name(value: str) -> str:
    if value in _UNDETERMINED:
        return UNKNOWN
    if _PEER_RE.search(value):
        return "switch_peer"
    return value


def matches_datacenter(choice: str, name: str, datacenter_id: str) -> bool:
    """Match a datacenter by full ID, name, or the first group of its UUID."""
    if not choice:
        return True
    return (
        datacenter_id == choice
        or name == choice
        or datacenter_id.startswith(f"{choice}-")
    )


class FailureAggregator:
    """Builds ``DatacenterReport`` aggregates from a raw failure export."""

    def __init__(
        self,
        lookup: DeviceLookup,
        *,
        datacenter_filter: str = "",
        remediation_min: int = DEFAULT_REMEDIATION_MINIMUM,
    ) -> None:
        self._lookup = lookup
        self._datacenter_filter = datacenter_filter
        self._remediation_min = remediation_min

    def run(self, raw: RawReport) -> tuple[dict[str, DatacenterReport], AggregationStats]:
        """Aggregate and finalize. Raises if the product catalog cannot be fetched."""
        products = self._product_index(self._lookup.get_hardware_products())

        stats = AggregationStats()
        report: dict[str, DatacenterReport] = {}

        for serial, failures in raw.items():
            stats.devices_seen += 1
            try:
                device = self._lookup.get_device(serial)
            except ConchError as exc:
                stats.devices_unresolved += 1
                logger.debug("Skipping %s: lookup failed: %s", serial, exc)
                continue

            if device.hardware_product == NIL_UUID:
                stats.devices_incomplete += 1
                logger.debug("Skipping %s: no hardware product", serial)
                continue

            name, datacenter_id = self._datacenter_of(device)
            if not matches_datacenter(self._datacenter_filter, name, str(datacenter_id)):
                stats.devices_filtered += 1
                continue

            datacenter = report.get(name)
            if datacenter is None:
                datacenter = DatacenterReport(name=name, id=datacenter_id)
                report[name] = datacenter

            vendor = self._vendor_of(device, products)
            for failure in failures.values():
                observation = self._observe(serial, failure, stats)
                if observation is None:
                    continue
                datacenter.record_type(observation)
                datacenter.record_vendor(vendor, observation)
                datacenter.record_subtype(observation)
                stats.entries_recorded += 1

        for datacenter in report.values():
            datacenter.calc()

        logger.info(
            "Aggregated %d devices into %d datacenters: %d entries recorded, "
            "%d devices unresolved, %d incomplete, %d filtered",
            stats.devices_seen,
            len(report),
            stats.entries_recorded,
            stats.devices_unresolved,
            stats.devices_incomplete,
            stats.devices_filtered,
        )
        return report, stats

    # ------------------------------------------------------------------
    # Resolution helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _product_index(products: list[HardwareProduct]) -> dict:
        return {p.id: p for p in products}

    @staticmethod
    def _datacenter_of(device: Device):
        dc = device.location.datacenter
        if dc.name:
            return dc.name, dc.id
        return UNKNOWN, NIL_UUID

    @staticmethod
    def _vendor_of(device: Device, products: dict) -> str:
        product = products.get(device.hardware_product)
        if product is None or not product.vendor:
            return UNKNOWN
        return product.vendor

    def _observe(
        self,
        serial: str,
        failure: ComponentFail,
        stats: AggregationStats,
    ) -> TypeReportDevice | None:
        passed = failure.first_pass.result
        failed = failure.first_fail.result

        failure_type = normalize_type(passed.component_type or failed.component_type)
        component_name = normalize_component_name(
            passed.component_name or failed.component_name
        )

        if not (failure.first_fail.has_timestamp and failure.first_pass.has_timestamp):
            stats.entries_missing_timestamps += 1
            return None

        remediation = to_nanoseconds(failure.first_pass.created - failure.first_fail.created)
        if remediation / SECOND < self._remediation_min:
            stats.entries_below_threshold += 1
            return None

        return TypeReportDevice(
            device_id=serial,
            failure_type=failure_type,
            component_name=component_name,
            remediation_time=remediation,
            first_fail=failure.first_fail,
            first_pass=failure.first_pass,
        )
