"""``conch-mbo``: HTTP interface for MBO hardware failure reports.

Loads and processes the export once, then serves the HTML index, text and
CSV dumps, and charts until interrupted.
"""

import argparse
import sys

from conch_shell.api.main import serve
from conch_shell.cli import common
from conch_shell.client.errors import ConchError
from conch_shell.config.log_config import configure_logging
from conch_shell.config.settings import get_settings
from conch_shell.reports.loader import ReportLoadError


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(settings)

    parser = argparse.ArgumentParser(
        prog="conch-mbo",
        description="HTTP interface for MBO hardware failure reports",
    )
    common.add_report_source_arguments(parser, settings)
    parser.add_argument("--host", default=None, help="Interface to listen on")
    parser.add_argument(
        "--port", type=int, default=None,
        help=f"Port to listen on (default {settings.LISTENER_PORT})",
    )
    args = parser.parse_args(argv)

    try:
        report = common.load_report(args, settings)
        common.process_report(report, args, settings)
    except (ReportLoadError, ConchError) as exc:
        return common.fail(str(exc))

    serve(report, settings, host=args.host, port=args.port)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
