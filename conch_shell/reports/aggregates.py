"""Aggregate containers for remediation times.

A ``TypeReport`` accumulates samples for one classification key and is
finalized once with ``calc()``. ``DatacenterReport`` holds three views over
the same observations: by type, by type and component, by vendor and type.
"""

from dataclasses import dataclass, field
from uuid import UUID

import numpy as np

from conch_shell.models.common import NIL_UUID
from conch_shell.models.failure import ComponentFailReport
from conch_shell.reports.durations import format_duration


@dataclass
class TypeReportDevice:
    """One qualifying failure, kept for the detail views."""

    device_id: str
    failure_type: str
    component_name: str
    remediation_time: int
    first_fail: ComponentFailReport
    first_pass: ComponentFailReport

    def to_dict(self) -> dict:
        return {
            "device_id": self.device_id,
            "failure_type": self.failure_type,
            "component_name": self.component_name,
            "remediation_time": format_duration(self.remediation_time),
            "remediation_time_ns": self.remediation_time,
            "first_fail": self.first_fail.model_dump(mode="json", by_alias=True),
            "first_pass": self.first_pass.model_dump(mode="json", by_alias=True),
        }


@dataclass
class TypeReport:
    """Remediation samples for one key, in nanoseconds.

    ``mean`` and ``median`` stay zero until ``calc()`` runs.
    """

    all: list[int] = field(default_factory=list)
    count: int = 0
    mean: int = 0
    median: int = 0
    devices: list[TypeReportDevice] = field(default_factory=list)

    def record(self, observation: TypeReportDevice) -> None:
        self.all.append(observation.remediation_time)
        self.count += 1
        self.devices.append(observation)

    def calc(self) -> None:
        if not self.all:
            self.mean = 0
            self.median = 0
            return
        samples = np.asarray(self.all, dtype=np.float64)
        self.mean = int(np.mean(samples))
        self.median = int(np.median(samples))

    def to_dict(self, include_devices: bool = False) -> dict:
        data = {
            "count": self.count,
            "mean": format_duration(self.mean),
            "median": format_duration(self.median),
            "mean_ns": self.mean,
            "median_ns": self.median,
        }
        if include_devices:
            data["devices"] = [d.to_dict() for d in self.devices]
        return data


@dataclass
class DatacenterReport:
    """All aggregates for one datacenter."""

    name: str
    id: UUID = NIL_UUID
    times_by_type: dict[str, TypeReport] = field(default_factory=dict)
    times_by_subtype: dict[str, dict[str, TypeReport]] = field(default_factory=dict)
    times_by_vendor_and_type: dict[str, dict[str, TypeReport]] = field(default_factory=dict)

    def record_type(self, observation: TypeReportDevice) -> None:
        key = observation.failure_type
        self.times_by_type.setdefault(key, TypeReport()).record(observation)

    def record_vendor(self, vendor: str, observation: TypeReportDevice) -> None:
        by_type = self.times_by_vendor_and_type.setdefault(vendor, {})
        by_type.setdefault(observation.failure_type, TypeReport()).record(observation)

    def record_subtype(self, observation: TypeReportDevice) -> None:
        by_name = self.times_by_subtype.setdefault(observation.failure_type, {})
        by_name.setdefault(observation.component_name, TypeReport()).record(observation)

    def type_reports(self):
        """Yield every TypeReport reachable from this datacenter."""
        yield from self.times_by_type.values()
        for by_name in self.times_by_subtype.values():
            yield from by_name.values()
        for by_type in self.times_by_vendor_and_type.values():
            yield from by_type.values()

    def calc(self) -> None:
        for report in self.type_reports():
            report.calc()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "id": str(self.id),
            "times_by_type": {
                k: v.to_dict() for k, v in sorted(self.times_by_type.items())
            },
            "times_by_subtype": {
                t: {k: v.to_dict() for k, v in sorted(by_name.items())}
                for t, by_name in sorted(self.times_by_subtype.items())
            },
            "times_by_vendor_and_type": {
                vendor: {k: v.to_dict() for k, v in sorted(by_type.items())}
                for vendor, by_type in sorted(self.times_by_vendor_and_type.items())
            },
        }
