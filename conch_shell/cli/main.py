"""``conch`` command-line interface.

Commands:

    conch reports mbo-hardware-failures (--manta-report PATH | --manta-report-url URL)
    conch reports mbo-graphs (--manta-report PATH | --manta-report-url URL) [--port N]
    conch device get SERIAL
    conch device location SERIAL
    conch hardware products | product ID | vendors
    conch datacenters
    conch datacenter ID
    conch version

API credentials come from the environment (CONCH_API_URL, CONCH_TOKEN).
Exit status is 0 on success, 1 on a load or API failure, 2 on bad usage.
"""

import argparse
import json
import sys

from pydantic import BaseModel

from conch_shell import __version__
from conch_shell.api.main import serve
from conch_shell.cli import common
from conch_shell.client.errors import ConchError
from conch_shell.config.log_config import configure_logging
from conch_shell.config.settings import Settings, get_settings
from conch_shell.reports.loader import ReportLoadError


def _print_json(data) -> None:
    if isinstance(data, BaseModel):
        payload = data.model_dump(mode="json")
    elif isinstance(data, list):
        payload = [d.model_dump(mode="json") if isinstance(d, BaseModel) else d for d in data]
    else:
        payload = data
    print(json.dumps(payload, indent=2, sort_keys=True))


# ---------------------------------------------------------------------------
# Report commands
# ---------------------------------------------------------------------------


def cmd_mbo_hardware_failures(args: argparse.Namespace, settings: Settings) -> int:
    report = common.load_report(args, settings)
    common.process_report(report, args, settings)

    if args.csv:
        sys.stdout.write(report.as_csv())
    else:
        sys.stdout.write(report.as_text(args.full, args.include_vendors, args.include_components))
    return 0


def cmd_mbo_graphs(args: argparse.Namespace, settings: Settings) -> int:
    report = common.load_report(args, settings)
    common.process_report(report, args, settings)
    serve(report, settings, host=args.host, port=args.port)
    return 0


# ---------------------------------------------------------------------------
# API commands
# ---------------------------------------------------------------------------


def cmd_device_get(args: argparse.Namespace, settings: Settings) -> int:
    with common.build_client(settings) as client:
        _print_json(client.get_device(args.serial))
    return 0


def cmd_device_location(args: argparse.Namespace, settings: Settings) -> int:
    with common.build_client(settings) as client:
        _print_json(client.get_device_location(args.serial))
    return 0


def cmd_hardware_products(args: argparse.Namespace, settings: Settings) -> int:
    with common.build_client(settings) as client:
        _print_json(client.get_hardware_products())
    return 0


def cmd_hardware_product(args: argparse.Namespace, settings: Settings) -> int:
    with common.build_client(settings) as client:
        _print_json(client.get_hardware_product(args.product_id))
    return 0


def cmd_hardware_vendors(args: argparse.Namespace, settings: Settings) -> int:
    with common.build_client(settings) as client:
        _print_json(client.get_hardware_vendors())
    return 0


def cmd_datacenters(args: argparse.Namespace, settings: Settings) -> int:
    with common.build_client(settings) as client:
        _print_json(client.get_datacenters())
    return 0


def cmd_datacenter(args: argparse.Namespace, settings: Settings) -> int:
    with common.build_client(settings) as client:
        _print_json(client.get_datacenter(args.datacenter_id))
    return 0


def cmd_version(args: argparse.Namespace, settings: Settings) -> int:
    print(f"conch-shell {__version__}")
    with common.build_client(settings) as client:
        print(f"API {client.get_version()}")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conch",
        description="Command line interface for the Conch API",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    # reports
    reports = commands.add_parser("reports", help="Generate reports")
    report_commands = reports.add_subparsers(dest="report", metavar="REPORT", required=True)

    failures = report_commands.add_parser(
        "mbo-hardware-failures",
        help="Remediation times for MBO hardware failures",
    )
    common.add_report_source_arguments(failures, settings)
    failures.add_argument("--full", action="store_true", help="Include vendor and component breakdowns")
    failures.add_argument("--csv", action="store_true", help="Output CSV instead of text")
    failures.add_argument("--include-vendors", action="store_true", help="Include the By Vendor section")
    failures.add_argument(
        "--include-components", action="store_true",
        help="Include the By Component breakdown under each type",
    )
    failures.set_defaults(func=cmd_mbo_hardware_failures)

    graphs = report_commands.add_parser(
        "mbo-graphs",
        help="Serve MBO hardware failure reports and charts over HTTP",
    )
    common.add_report_source_arguments(graphs, settings)
    graphs.add_argument("--host", default=None, help="Interface to listen on")
    graphs.add_argument("--port", type=int, default=None, help="Port to listen on")
    graphs.set_defaults(func=cmd_mbo_graphs)

    # device
    device = commands.add_parser("device", help="Device details")
    device_commands = device.add_subparsers(dest="device_command", metavar="ACTION", required=True)
    get = device_commands.add_parser("get", help="Show a device")
    get.add_argument("serial")
    get.set_defaults(func=cmd_device_get)
    location = device_commands.add_parser("location", help="Show where a device is racked")
    location.add_argument("serial")
    location.set_defaults(func=cmd_device_location)

    # hardware
    hardware = commands.add_parser("hardware", help="Hardware catalog")
    hardware_commands = hardware.add_subparsers(dest="hardware_command", metavar="ACTION", required=True)
    hardware_commands.add_parser("products", help="List hardware products").set_defaults(
        func=cmd_hardware_products,
    )
    product = hardware_commands.add_parser("product", help="Show one hardware product")
    product.add_argument("product_id")
    product.set_defaults(func=cmd_hardware_product)
    hardware_commands.add_parser("vendors", help="List hardware vendors").set_defaults(
        func=cmd_hardware_vendors,
    )

    # datacenters
    commands.add_parser("datacenters", help="List datacenters").set_defaults(func=cmd_datacenters)
    datacenter = commands.add_parser("datacenter", help="Show one datacenter")
    datacenter.add_argument("datacenter_id")
    datacenter.set_defaults(func=cmd_datacenter)

    commands.add_parser("version", help="Show client and API versions").set_defaults(func=cmd_version)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run one command, return the exit status."""
    settings = get_settings()
    configure_logging(settings)

    args = build_parser(settings).parse_args(argv)
    try:
        return args.func(args, settings)
    except ReportLoadError as exc:
        return common.fail(str(exc))
    except ConchError as exc:
        return common.fail(str(exc))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
