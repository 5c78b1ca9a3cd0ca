"""Tests for the ``conch`` and ``conch-mbo`` command lines.

The API client is replaced through ``conch_shell.cli.common.build_client``
and the listener through ``serve``; nothing touches the network.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from conch_shell.cli import main as cli_main
from conch_shell.cli import mbo as cli_mbo
from conch_shell.client.errors import ConchTransportError, DataNotFoundError
from conch_shell.reports.mbo import MantaReport
from fakes import FakeDeviceLookup, default_lookup, make_device, make_failure, make_raw

SUMMARY = (
    "AMS1:\n"
    "  By Component Type:\n"
    "\n"
    "    BIOS: (1)\n"
    "      Mean   : 2h0m0s\n"
    "      Median : 2h0m0s\n"
    "\n"
)


@pytest.fixture
def export_path(tmp_path):
    path = tmp_path / "mbo.json"
    path.write_text(json.dumps({"srv001": {"bios": make_failure()}}))
    return path


@pytest.fixture
def lookup(clean_env):
    fake = default_lookup(srv001=make_device("srv001"))
    clean_env.setattr("conch_shell.cli.common.build_client", lambda settings: fake)
    return fake


def _make_api_client(**returns) -> MagicMock:
    client = MagicMock()
    client.__enter__.return_value = client
    for name, value in returns.items():
        getattr(client, name).return_value = value
    return client


# ===================================================================
# reports mbo-hardware-failures
# ===================================================================


class TestMboHardwareFailures:
    """Text and CSV output on stdout."""

    def test_text_summary(self, lookup, export_path, capsys) -> None:
        code = cli_main.main([
            "reports", "mbo-hardware-failures", "--manta-report", str(export_path),
        ])
        assert code == 0
        assert capsys.readouterr().out == SUMMARY
        assert lookup.closed is True

    def test_full(self, lookup, export_path, capsys) -> None:
        cli_main.main([
            "reports", "mbo-hardware-failures", "--path", str(export_path), "--full",
        ])
        out = capsys.readouterr().out
        assert "  By Vendor:\n    Dell:\n" in out
        assert "Firmware Programming Issue: (1)" in out

    def test_csv(self, lookup, export_path, capsys) -> None:
        cli_main.main([
            "reports", "mbo-hardware-failures", "--manta-report", str(export_path), "--csv",
        ])
        out = capsys.readouterr().out
        assert out.startswith("Datacenter,Vendor,Type,Failure Count,Mean,Median\n")
        assert "AMS1,Dell,BIOS,1,2:0:0,2:0:0\n" in out

    def test_remediation_minimum(self, lookup, export_path, capsys) -> None:
        cli_main.main([
            "reports", "mbo-hardware-failures", "--manta-report", str(export_path),
            "--remediation-minimum", "10000",
        ])
        assert capsys.readouterr().out == "AMS1:\n  By Component Type:\n\n"

    def test_remediation_minimum_from_environment(self, lookup, export_path, capsys) -> None:
        with patch.dict("os.environ", {"REMEDIATION_MINIMUM": "10000"}):
            cli_main.main([
                "reports", "mbo-hardware-failures", "--manta-report", str(export_path),
            ])
        assert lookup.catalog_calls == 1
        assert capsys.readouterr().out == "AMS1:\n  By Component Type:\n\n"

    def test_datacenter_filter(self, lookup, export_path, capsys) -> None:
        cli_main.main([
            "reports", "mbo-hardware-failures", "--manta-report", str(export_path),
            "--az", "LHR1",
        ])
        assert capsys.readouterr().out == ""

    def test_url_source(self, lookup, capsys) -> None:
        loaded = MantaReport(make_raw({"srv001": {"bios": make_failure()}}))
        with patch.object(MantaReport, "from_url", return_value=loaded) as from_url:
            code = cli_main.main([
                "reports", "mbo-hardware-failures", "--manta-report-url", "https://manta.test/out.json",
            ])
        assert code == 0
        assert from_url.call_args.args == ("https://manta.test/out.json",)
        assert capsys.readouterr().out == SUMMARY

    def test_source_required(self, lookup) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main.main(["reports", "mbo-hardware-failures"])
        assert exc_info.value.code == 2

    def test_sources_mutually_exclusive(self, lookup, export_path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main.main([
                "reports", "mbo-hardware-failures",
                "--manta-report", str(export_path),
                "--manta-report-url", "https://manta.test/out.json",
            ])
        assert exc_info.value.code == 2

    def test_missing_file(self, lookup, tmp_path, capsys) -> None:
        code = cli_main.main([
            "reports", "mbo-hardware-failures", "--manta-report", str(tmp_path / "missing.json"),
        ])
        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "Error:" in captured.err

    def test_catalog_failure(self, clean_env, export_path, capsys) -> None:
        fake = FakeDeviceLookup(catalog_error=ConchTransportError("connection refused"))
        clean_env.setattr("conch_shell.cli.common.build_client", lambda settings: fake)

        code = cli_main.main([
            "reports", "mbo-hardware-failures", "--manta-report", str(export_path),
        ])
        assert code == 1
        assert "connection refused" in capsys.readouterr().err


# ===================================================================
# reports mbo-graphs / conch-mbo
# ===================================================================


class TestGraphListener:
    """The listener commands load, process, then serve."""

    def test_mbo_graphs(self, lookup, export_path) -> None:
        with patch.object(cli_main, "serve") as serve:
            code = cli_main.main([
                "reports", "mbo-graphs", "--manta-report", str(export_path), "--port", "8080",
            ])
        assert code == 0
        report, settings = serve.call_args.args
        assert report.been_processed is True
        assert list(report.processed) == ["AMS1"]
        assert serve.call_args.kwargs["port"] == 8080

    def test_conch_mbo(self, lookup, export_path) -> None:
        with patch.object(cli_mbo, "serve") as serve:
            code = cli_mbo.main(["--path", str(export_path)])
        assert code == 0
        report = serve.call_args.args[0]
        assert report.processed["AMS1"].times_by_type["BIOS"].count == 1
        assert serve.call_args.kwargs["port"] is None

    def test_conch_mbo_load_failure(self, lookup, tmp_path, capsys) -> None:
        with patch.object(cli_mbo, "serve") as serve:
            code = cli_mbo.main(["--path", str(tmp_path / "missing.json")])
        assert code == 1
        serve.assert_not_called()


# ===================================================================
# API commands
# ===================================================================


class TestApiCommands:
    """Thin wrappers over ConchClient that print JSON."""

    def test_device_get(self, clean_env, capsys) -> None:
        client = _make_api_client(get_device=make_device("srv001"))
        clean_env.setattr("conch_shell.cli.common.build_client", lambda settings: client)

        code = cli_main.main(["device", "get", "srv001"])

        assert code == 0
        client.get_device.assert_called_once_with("srv001")
        data = json.loads(capsys.readouterr().out)
        assert data["id"] == "srv001"
        assert data["location"]["datacenter"]["name"] == "AMS1"

    def test_hardware_products(self, clean_env, capsys) -> None:
        products = default_lookup().get_hardware_products()
        client = _make_api_client(get_hardware_products=products)
        clean_env.setattr("conch_shell.cli.common.build_client", lambda settings: client)

        cli_main.main(["hardware", "products"])

        data = json.loads(capsys.readouterr().out)
        assert [p["vendor"] for p in data] == ["Dell", "Supermicro"]

    def test_version(self, clean_env, capsys) -> None:
        client = _make_api_client(get_version="v2.20.0")
        clean_env.setattr("conch_shell.cli.common.build_client", lambda settings: client)

        cli_main.main(["version"])

        assert "API v2.20.0" in capsys.readouterr().out

    def test_api_error(self, clean_env, capsys) -> None:
        client = _make_api_client()
        client.get_device.side_effect = DataNotFoundError("/device/ghost")
        clean_env.setattr("conch_shell.cli.common.build_client", lambda settings: client)

        code = cli_main.main(["device", "get", "ghost"])

        assert code == 1
        assert "/device/ghost" in capsys.readouterr().err

    def test_command_required(self, clean_env) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main.main([])
        assert exc_info.value.code == 2
