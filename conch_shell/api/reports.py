"""MBO report routes: HTML index, full text/CSV dumps, breakdowns, charts.

Everything here is a read-only view over ``MantaReport.processed``. Unknown
datacenters, types or subtypes are 404s with a plain-text reason.
"""

from enum import StrEnum

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from conch_shell.api.dependencies import get_app_settings, get_report
from conch_shell.api.templates import STYLE_CSS, render
from conch_shell.config.settings import Settings
from conch_shell.reports.aggregates import DatacenterReport, TypeReport
from conch_shell.reports.charts import render_bar_chart, type_count_values, vendor_count_values
from conch_shell.reports.display import DEFAULT_DISPLAY
from conch_shell.reports.durations import format_duration
from conch_shell.reports.mbo import MantaReport
from conch_shell.reports.presenters import render_breakdown, render_text

router = APIRouter(tags=["mbo"])


class ReportFormat(StrEnum):
    HTML = "html"
    JSON = "json"
    TEXT = "text"


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------


def _datacenter(report: MantaReport, az: str) -> DatacenterReport:
    dc = report.processed.get(az)
    if dc is None:
        raise HTTPException(status_code=404, detail=f"No data found for {az}")
    return dc


def _subtypes(report: MantaReport, az: str, component: str) -> dict[str, TypeReport]:
    dc = _datacenter(report, az)
    subtypes = dc.times_by_subtype.get(component)
    if subtypes is None:
        raise HTTPException(
            status_code=404,
            detail=f"No data found for AZ {az}, type {component}",
        )
    return subtypes


# ---------------------------------------------------------------------------
# Index and full dumps
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
def index(report: MantaReport = Depends(get_report)) -> HTMLResponse:
    return HTMLResponse(render("index.html", az_names=report.datacenter_names))


@router.get("/full", response_class=PlainTextResponse)
def full_text(report: MantaReport = Depends(get_report)) -> PlainTextResponse:
    return PlainTextResponse(report.as_text(True, True, True))


@router.get("/full.csv")
def full_csv(report: MantaReport = Depends(get_report)) -> Response:
    return Response(content=report.as_csv(), media_type="text/csv")


@router.get("/style.css")
def style() -> Response:
    return Response(content=STYLE_CSS, media_type="text/css")


@router.get("/health")
def health(report: MantaReport = Depends(get_report)) -> dict:
    return {
        "status": "ok",
        "processed": report.been_processed,
        "datacenters": len(report.processed),
    }


# ---------------------------------------------------------------------------
# Remediation time breakdowns
# ---------------------------------------------------------------------------


@router.get("/reports/times/{az}")
def times_by_type(
    az: str,
    fmt: ReportFormat = Query(default=ReportFormat.HTML, alias="format"),
    report: MantaReport = Depends(get_report),
) -> Response:
    dc = _datacenter(report, az)

    if fmt == ReportFormat.JSON:
        return JSONResponse(dc.to_dict())
    if fmt == ReportFormat.TEXT:
        return PlainTextResponse(
            render_text({az: dc}, full_output=True, display=DEFAULT_DISPLAY)
        )
    return HTMLResponse(render("az.html", name=az, dc=dc))


@router.get("/reports/times/{az}/{component}")
def times_by_subtype(
    az: str,
    component: str,
    fmt: ReportFormat = Query(default=ReportFormat.HTML, alias="format"),
    report: MantaReport = Depends(get_report),
) -> Response:
    subtypes = _subtypes(report, az, component)

    if fmt == ReportFormat.JSON:
        return JSONResponse({
            "az": az,
            "type": component,
            "subtypes": {k: v.to_dict() for k, v in sorted(subtypes.items())},
        })
    if fmt == ReportFormat.TEXT:
        return PlainTextResponse(render_breakdown(
            f"{az}, type {component}",
            subtypes,
            label=lambda key: DEFAULT_DISPLAY.prettify(key, component),
        ))
    return HTMLResponse(render("component.html", az=az, name=component, subtypes=subtypes))


@router.get("/reports/times/{az}/{component}/{subtype}")
def times_for_subtype(
    az: str,
    component: str,
    subtype: str,
    fmt: ReportFormat = Query(default=ReportFormat.HTML, alias="format"),
    report: MantaReport = Depends(get_report),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    data = _subtypes(report, az, component).get(subtype)
    if data is None:
        raise HTTPException(
            status_code=404,
            detail=f"No data found for AZ {az}, type {component}, subtype {subtype}",
        )

    if fmt == ReportFormat.JSON:
        return JSONResponse({
            "az": az,
            "type": component,
            "subtype": subtype,
            **data.to_dict(include_devices=True),
        })
    if fmt == ReportFormat.TEXT:
        lines = [render_breakdown(f"{az}, type {component}", {subtype: data})]
        lines.append("  Affected Devices:\n")
        for device in data.devices:
            lines.append(f"    {device.device_id}: {format_duration(device.remediation_time)}\n")
        return PlainTextResponse("".join(lines))
    return HTMLResponse(render(
        "subtype.html",
        az=az,
        component=component,
        subtype=subtype,
        data=data,
        device_url=settings.device_url,
    ))


# ---------------------------------------------------------------------------
# Charts
# ---------------------------------------------------------------------------


@router.get("/graphics/{az}/by_type.png")
def chart_by_type(az: str, report: MantaReport = Depends(get_report)) -> Response:
    dc = _datacenter(report, az)
    png = render_bar_chart(type_count_values(dc), title=f"{az}: failures by type")
    return Response(content=png, media_type="image/png")


@router.get("/graphics/{az}/by_vendor.png")
def chart_by_vendor(az: str, report: MantaReport = Depends(get_report)) -> Response:
    dc = _datacenter(report, az)
    png = render_bar_chart(vendor_count_values(dc), title=f"{az}: failures by vendor")
    return Response(content=png, media_type="image/png")
