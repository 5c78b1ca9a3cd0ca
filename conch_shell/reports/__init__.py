"""MBO hardware failure reporting.

Loader -> aggregator -> presenters. ``MantaReport`` ties the three together.
"""

from conch_shell.reports.aggregates import DatacenterReport, TypeReport, TypeReportDevice
from conch_shell.reports.aggregator import AggregationStats, FailureAggregator
from conch_shell.reports.loader import (
    ReportDownloadError,
    ReportLoadError,
    ReportNotFoundError,
    ReportParseError,
)
from conch_shell.reports.mbo import MantaReport

__all__ = [
    "AggregationStats",
    "DatacenterReport",
    "FailureAggregator",
    "MantaReport",
    "ReportDownloadError",
    "ReportLoadError",
    "ReportNotFoundError",
    "ReportParseError",
    "TypeReport",
    "TypeReportDevice",
]
