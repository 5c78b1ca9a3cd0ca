"""Text and CSV renderings of processed MBO aggregates.

Both renderers are read-only over the ``DatacenterReport`` mapping and sort
every level, so the same aggregates always render to the same bytes.
"""

import csv
import io

from conch_shell.reports.aggregates import DatacenterReport, TypeReport
from conch_shell.reports.display import DEFAULT_DISPLAY, ComponentDisplay
from conch_shell.reports.durations import format_duration, format_duration_csv

VENDOR_CSV_HEADER = ["Datacenter", "Vendor", "Type", "Failure Count", "Mean", "Median"]
COMPONENT_CSV_HEADER = ["Datacenter", "Type", "Component", "Failure Count", "Mean", "Median"]


def _stat_lines(label: str, data: TypeReport, indent: int) -> list[str]:
    pad = " " * indent
    inner = " " * (indent + 2)
    return [
        f"{pad}{label}: ({data.count})\n",
        f"{inner}Mean   : {format_duration(data.mean)}\n",
        f"{inner}Median : {format_duration(data.median)}\n",
    ]


def render_text(
    datacenters: dict[str, DatacenterReport],
    *,
    full_output: bool = False,
    include_vendors: bool = False,
    include_components: bool = False,
    display: ComponentDisplay = DEFAULT_DISPLAY,
) -> str:
    """Render the indented plain-text report."""
    out: list[str] = []

    for name in sorted(datacenters):
        dc = datacenters[name]
        out.append(f"{dc.name}:\n")

        if full_output or include_vendors:
            out.append("  By Vendor:\n")
            for vendor in sorted(dc.times_by_vendor_and_type):
                out.append(f"    {vendor}:\n")
                by_type = dc.times_by_vendor_and_type[vendor]
                for component_type in sorted(by_type):
                    out.extend(_stat_lines(component_type, by_type[component_type], 6))
                out.append("\n")

        out.append("  By Component Type:\n")
        for component_type in sorted(dc.times_by_type):
            out.append("\n")
            out.extend(_stat_lines(component_type, dc.times_by_type[component_type], 4))

            if not display.shows_breakdown(component_type):
                continue
            if not (full_output or include_components):
                continue

            out.append("\n")
            out.append("      By Component:\n")
            by_name = dc.times_by_subtype.get(component_type, {})
            for subtype in sorted(by_name):
                label = display.prettify(subtype, component_type)
                out.extend(_stat_lines(label, by_name[subtype], 8))

        out.append("\n")

    return "".join(out)


def render_breakdown(
    title: str,
    reports: dict[str, TypeReport],
    label=None,
) -> str:
    """Render one level of aggregates under a heading, keys sorted."""
    out = [f"{title}:\n"]
    for key in sorted(reports):
        out.extend(_stat_lines(label(key) if label else key, reports[key], 2))
    return "".join(out)


def _csv_table(rows: list[list[str]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(rows)
    return buf.getvalue()


def render_csv(
    datacenters: dict[str, DatacenterReport],
    *,
    display: ComponentDisplay = DEFAULT_DISPLAY,
) -> str:
    """Render the vendor table and the component table, separated by a blank line."""
    vendor_rows = [VENDOR_CSV_HEADER]
    component_rows = [COMPONENT_CSV_HEADER]

    for name in sorted(datacenters):
        dc = datacenters[name]

        for vendor in sorted(dc.times_by_vendor_and_type):
            by_type = dc.times_by_vendor_and_type[vendor]
            for component_type in sorted(by_type):
                data = by_type[component_type]
                vendor_rows.append([
                    name,
                    vendor,
                    component_type,
                    str(data.count),
                    format_duration_csv(data.mean),
                    format_duration_csv(data.median),
                ])

        for component_type in sorted(dc.times_by_subtype):
            if not display.shows_breakdown(component_type):
                continue
            by_name = dc.times_by_subtype[component_type]
            for subtype in sorted(by_name):
                data = by_name[subtype]
                component_rows.append([
                    name,
                    component_type,
                    display.prettify(subtype, component_type),
                    str(data.count),
                    format_duration_csv(data.mean),
                    format_duration_csv(data.median),
                ])

    return _csv_table(vendor_rows) + "\n" + _csv_table(component_rows)
