"""FastAPI dependencies for the MBO graph listener.

The processed report and the settings are attached to ``app.state`` by
``create_app``; routes pull them out through these factories.
"""

from fastapi import Request

from conch_shell.config.settings import Settings
from conch_shell.reports.mbo import MantaReport


def get_report(request: Request) -> MantaReport:
    return request.app.state.report


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
