"""FastAPI application for browsing a processed MBO report.

``create_app`` wraps one finalized ``MantaReport``; ``serve`` runs it under
uvicorn. Errors are answered in plain text, matching the text reports.
"""

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from conch_shell import __version__
from conch_shell.api.reports import router as reports_router
from conch_shell.config.settings import Settings, get_settings
from conch_shell.reports.charts import EmptyChartError
from conch_shell.reports.mbo import MantaReport

logger: structlog.stdlib.BoundLogger = structlog.get_logger()


async def _plain_http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    return PlainTextResponse(
        str(exc.detail) if exc.detail else "",
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _empty_chart(request: Request, exc: EmptyChartError) -> PlainTextResponse:
    logger.warning("chart_empty", path=request.url.path)
    return PlainTextResponse("No data available", status_code=500)


def create_app(report: MantaReport, settings: Settings | None = None) -> FastAPI:
    """Build the listener app over an already processed report."""
    app = FastAPI(
        title="Conch MBO Hardware Failures",
        description="Remediation time reports and charts for MBO hardware failures.",
        version=__version__,
    )
    app.state.report = report
    app.state.settings = settings or get_settings()

    app.add_exception_handler(StarletteHTTPException, _plain_http_error)
    app.add_exception_handler(EmptyChartError, _empty_chart)
    app.include_router(reports_router)
    return app


def serve(report: MantaReport, settings: Settings, host: str | None = None, port: int | None = None) -> None:
    """Run the listener until interrupted."""
    app = create_app(report, settings)
    bind_host = host or settings.LISTENER_HOST
    bind_port = port or settings.LISTENER_PORT
    logger.info(
        "listener_starting",
        host=bind_host,
        port=bind_port,
        datacenters=report.datacenter_names,
    )
    uvicorn.run(
        app,
        host=bind_host,
        port=bind_port,
        log_level=settings.LOG_LEVEL.value.lower(),
    )
