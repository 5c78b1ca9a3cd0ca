"""Tests for the MBO graph listener routes.

Covers: index, full text / CSV dumps, stylesheet, the three breakdown
levels in HTML / JSON / text, charts, and the plain-text 404 / 500 bodies.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from conch_shell.api.main import create_app
from conch_shell.config.settings import Settings
from conch_shell.reports.mbo import MantaReport
from fakes import default_lookup, make_device, make_failure, make_raw

PNG_MAGIC = b"\x89PNG"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def base_url() -> str:
    return "http://test"


@pytest.fixture
def report() -> MantaReport:
    raw = make_raw({
        "srv001": {
            "bios": make_failure(fail_log="bad product name"),
            "cpu": make_failure(component_type="CPU", component_name="cpu_count"),
        },
        "srv002": {"bios": make_failure(passed_at="2020-01-01T00:00:30Z")},
    })
    lookup = default_lookup(
        srv001=make_device("srv001"),
        srv002=make_device("srv002", datacenter="LHR1"),
    )
    report = MantaReport(raw)
    report.process(lookup)
    return report


@pytest.fixture
def transport(report: MantaReport) -> ASGITransport:
    settings = Settings(DEVICE_URL_TEMPLATE="https://conch.test/#!/device/{device_id}")
    return ASGITransport(app=create_app(report, settings))


# ===================================================================
# Index and dumps
# ===================================================================


class TestIndex:
    """GET / and the full-report routes."""

    @pytest.mark.anyio
    async def test_index_lists_datacenters(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert 'href="/reports/times/AMS1"' in resp.text
        assert 'href="/graphics/LHR1/by_vendor.png"' in resp.text

    @pytest.mark.anyio
    async def test_full_text(self, transport: ASGITransport, base_url: str, report) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/full")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == report.as_text(True, True, True)

    @pytest.mark.anyio
    async def test_full_csv(self, transport: ASGITransport, base_url: str, report) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/full.csv")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.text == report.as_csv()

    @pytest.mark.anyio
    async def test_style(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/style.css")
        assert resp.headers["content-type"].startswith("text/css")
        assert "font-family: sans-serif" in resp.text

    @pytest.mark.anyio
    async def test_health(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/health")
        assert resp.json() == {"status": "ok", "processed": True, "datacenters": 2}


# ===================================================================
# Breakdowns
# ===================================================================


class TestTimesByType:
    """GET /reports/times/{az}"""

    @pytest.mark.anyio
    async def test_html(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1")
        assert resp.status_code == 200
        assert "Hardware Failures for AMS1" in resp.text
        assert 'href="/reports/times/AMS1/BIOS"' in resp.text
        assert "Mean: 2h0m0s" in resp.text

    @pytest.mark.anyio
    async def test_json(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1", params={"format": "json"})
        data = resp.json()
        assert data["name"] == "AMS1"
        assert data["times_by_type"]["BIOS"]["count"] == 1
        assert data["times_by_type"]["BIOS"]["mean"] == "2h0m0s"

    @pytest.mark.anyio
    async def test_text(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1", params={"format": "text"})
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text.startswith("AMS1:\n  By Vendor:\n")

    @pytest.mark.anyio
    async def test_bad_format(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1", params={"format": "xml"})
        assert resp.status_code == 422

    @pytest.mark.anyio
    async def test_unknown_az(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/NOPE1")
        assert resp.status_code == 404
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "No data found for NOPE1"


class TestTimesBySubtype:
    """GET /reports/times/{az}/{component}"""

    @pytest.mark.anyio
    async def test_html(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1/BIOS")
        assert resp.status_code == 200
        assert 'href="/reports/times/AMS1/BIOS/product_name"' in resp.text
        assert "Firmware Programming Issue" in resp.text

    @pytest.mark.anyio
    async def test_json(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1/BIOS", params={"format": "json"})
        data = resp.json()
        assert data["type"] == "BIOS"
        assert data["subtypes"]["product_name"]["count"] == 1

    @pytest.mark.anyio
    async def test_text(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1/BIOS", params={"format": "text"})
        assert resp.text == (
            "AMS1, type BIOS:\n"
            "  Firmware Programming Issue: (1)\n"
            "    Mean   : 2h0m0s\n"
            "    Median : 2h0m0s\n"
        )

    @pytest.mark.anyio
    async def test_unknown_type(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1/GPU")
        assert resp.status_code == 404
        assert resp.text == "No data found for AZ AMS1, type GPU"


class TestTimesForSubtype:
    """GET /reports/times/{az}/{component}/{subtype}"""

    @pytest.mark.anyio
    async def test_html_lists_devices(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1/BIOS/product_name")
        assert resp.status_code == 200
        assert 'href="https://conch.test/#!/device/srv001"' in resp.text
        assert "Remediation Time: 2h0m0s" in resp.text
        assert "Log: bad product name" in resp.text

    @pytest.mark.anyio
    async def test_json_includes_devices(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get(
                "/reports/times/AMS1/BIOS/product_name", params={"format": "json"},
            )
        data = resp.json()
        assert data["count"] == 1
        assert data["devices"][0]["device_id"] == "srv001"
        assert data["devices"][0]["remediation_time"] == "2h0m0s"

    @pytest.mark.anyio
    async def test_text(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get(
                "/reports/times/AMS1/BIOS/product_name", params={"format": "text"},
            )
        assert "  Affected Devices:\n    srv001: 2h0m0s\n" in resp.text

    @pytest.mark.anyio
    async def test_unknown_subtype(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/reports/times/AMS1/BIOS/ram_total")
        assert resp.status_code == 404
        assert resp.text == "No data found for AZ AMS1, type BIOS, subtype ram_total"


# ===================================================================
# Charts
# ===================================================================


class TestCharts:
    """GET /graphics/{az}/by_type.png and by_vendor.png"""

    @pytest.mark.anyio
    async def test_by_type(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/graphics/AMS1/by_type.png")
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.content.startswith(PNG_MAGIC)

    @pytest.mark.anyio
    async def test_by_vendor(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/graphics/AMS1/by_vendor.png")
        assert resp.status_code == 200
        assert resp.content.startswith(PNG_MAGIC)

    @pytest.mark.anyio
    async def test_unknown_az(self, transport: ASGITransport, base_url: str) -> None:
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/graphics/NOPE1/by_type.png")
        assert resp.status_code == 404

    @pytest.mark.anyio
    async def test_empty_datacenter_is_500(self, transport: ASGITransport, base_url: str) -> None:
        # LHR1's only failure was remediated in 30s, under the default threshold.
        async with AsyncClient(transport=transport, base_url=base_url) as client:
            resp = await client.get("/graphics/LHR1/by_type.png")
        assert resp.status_code == 500
        assert resp.text == "No data available"
