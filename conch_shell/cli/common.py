"""Pieces shared by the ``conch`` and ``conch-mbo`` entry points."""

import argparse
import logging
import sys

from conch_shell.client.conch import ConchClient
from conch_shell.config.settings import Settings
from conch_shell.reports.mbo import MantaReport

logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> ConchClient:
    return ConchClient.from_settings(settings)


def fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def add_report_source_arguments(parser: argparse.ArgumentParser, settings: Settings) -> None:
    """Options selecting and filtering the failure export."""
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--manta-report", "--path",
        dest="manta_report",
        metavar="PATH",
        help="Path to Manta job output file",
    )
    source.add_argument(
        "--manta-report-url", "--url",
        dest="manta_report_url",
        metavar="URL",
        help="The url for manta report output",
    )
    parser.add_argument(
        "--datacenter", "--az",
        dest="datacenter",
        default="",
        help="Limit the output to a particular datacenter by UUID, partial UUID, or string name",
    )
    parser.add_argument(
        "--remediation-minimum",
        dest="remediation_minimum",
        type=int,
        default=settings.REMEDIATION_MINIMUM,
        help=(
            "For a failure to be considered, its remediation time must be "
            "greater than or equal to this number of seconds"
        ),
    )


def load_report(args: argparse.Namespace, settings: Settings) -> MantaReport:
    """Load the export named on the command line. Raises ReportLoadError."""
    if args.manta_report:
        logger.info("Opening file %s", args.manta_report)
        return MantaReport.from_file(args.manta_report)

    logger.info("Downloading URL %s", args.manta_report_url)
    return MantaReport.from_url(args.manta_report_url, timeout=settings.HTTP_TIMEOUT_SECONDS)


def process_report(report: MantaReport, args: argparse.Namespace, settings: Settings) -> None:
    """Resolve devices through the API and aggregate. Raises ConchError."""
    with build_client(settings) as client:
        stats = report.process(
            client,
            datacenter_filter=args.datacenter,
            remediation_min=args.remediation_minimum,
        )
    logger.info("Processing complete: %s", stats.to_dict())
