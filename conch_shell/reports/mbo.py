"""MantaReport: the MBO hardware failure report.

Holds the raw export, the processed per-datacenter aggregates, and the
``been_processed`` flag that keeps presenters from rendering stale or
unprocessed data. Loading always resets the processed state.
"""

import logging
from pathlib import Path

import httpx

from conch_shell.client.base import DeviceLookup
from conch_shell.models.failure import RawReport
from conch_shell.reports import loader
from conch_shell.reports.aggregates import DatacenterReport
from conch_shell.reports.aggregator import (
    DEFAULT_REMEDIATION_MINIMUM,
    AggregationStats,
    FailureAggregator,
)
from conch_shell.reports.display import DEFAULT_DISPLAY, ComponentDisplay
from conch_shell.reports.presenters import render_csv, render_text

logger = logging.getLogger(__name__)


class MantaReport:
    """Raw and processed views of the Manta job output."""

    def __init__(self, raw: RawReport | None = None) -> None:
        self.raw: RawReport = raw if raw is not None else {}
        self.processed: dict[str, DatacenterReport] = {}
        self.been_processed = False

    @classmethod
    def from_file(cls, path: str | Path) -> "MantaReport":
        report = cls()
        report.load_file(path)
        return report

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> "MantaReport":
        report = cls()
        report.load_url(url, client=client, timeout=timeout)
        return report

    def load_file(self, path: str | Path) -> None:
        self._reset(loader.load_from_file(path))

    def load_url(
        self,
        url: str,
        *,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._reset(loader.load_from_url(url, client=client, timeout=timeout))

    def _reset(self, raw: RawReport) -> None:
        self.raw = raw
        self.processed = {}
        self.been_processed = False
        logger.debug("Report reset with %d raw devices", len(raw))

    def process(
        self,
        lookup: DeviceLookup,
        datacenter_filter: str = "",
        remediation_min: int = DEFAULT_REMEDIATION_MINIMUM,
    ) -> AggregationStats:
        """Aggregate the raw export. Leaves state untouched if the catalog fetch fails."""
        aggregator = FailureAggregator(
            lookup,
            datacenter_filter=datacenter_filter,
            remediation_min=remediation_min,
        )
        processed, stats = aggregator.run(self.raw)
        self.processed = processed
        self.been_processed = True
        return stats

    @property
    def datacenter_names(self) -> list[str]:
        return sorted(self.processed)

    def as_text(
        self,
        full_output: bool = False,
        include_vendors: bool = False,
        include_components: bool = False,
        display: ComponentDisplay = DEFAULT_DISPLAY,
    ) -> str:
        """Indented text report; empty until ``process`` has run."""
        if not self.been_processed:
            return ""
        return render_text(
            self.processed,
            full_output=full_output,
            include_vendors=include_vendors,
            include_components=include_components,
            display=display,
        )

    def as_csv(self, display: ComponentDisplay = DEFAULT_DISPLAY) -> str:
        return render_csv(self.processed, display=display)
