"""Load the raw MBO hardware failure export from disk or over HTTP.

Both loaders read the whole body, validate it in one pass and either return
the complete mapping or raise. Nothing is retried.
"""

import logging
from pathlib import Path

import httpx
from pydantic import ValidationError

from conch_shell.models.failure import RawReport, RawReportAdapter

logger = logging.getLogger(__name__)


class ReportLoadError(Exception):
    """The failure export could not be obtained or decoded."""


class ReportNotFoundError(ReportLoadError):
    pass


class ReportDownloadError(ReportLoadError):
    pass


class ReportParseError(ReportLoadError):
    pass


def parse_report(body: str | bytes, source: str) -> RawReport:
    """Validate a JSON document as a failure export."""
    try:
        return RawReportAdapter.validate_json(body)
    except ValidationError as exc:
        raise ReportParseError(f"{source} is not a valid failure report: {exc}") from exc


def load_from_file(path: str | Path) -> RawReport:
    """Read a failure export from a local path; ``~`` is expanded."""
    report_path = Path(path).expanduser()
    try:
        body = report_path.read_bytes()
    except OSError as exc:
        raise ReportNotFoundError(f"Cannot read {report_path}: {exc}") from exc

    raw = parse_report(body, str(report_path))
    logger.info("Loaded %d devices from %s", len(raw), report_path)
    return raw


def load_from_url(
    url: str,
    *,
    client: httpx.Client | None = None,
    timeout: float = 30.0,
) -> RawReport:
    """Download a failure export with a single GET."""
    try:
        if client is not None:
            resp = client.get(url)
        else:
            with httpx.Client(timeout=timeout, follow_redirects=True) as http:
                resp = http.get(url)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ReportDownloadError(
            f"Downloading {url} failed with HTTP {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise ReportDownloadError(f"Downloading {url} failed: {exc}") from exc

    raw = parse_report(resp.content, url)
    logger.info("Loaded %d devices from %s", len(raw), url)
    return raw
