"""Conch API client and the device lookup interface it implements."""

from conch_shell.client.base import DeviceLookup
from conch_shell.client.conch import ConchClient
from conch_shell.client.errors import (
    ConchAPIError,
    ConchError,
    ConchResponseError,
    ConchTransportError,
    DataNotFoundError,
    HTTPNotOkError,
    LoginFailedError,
    NotAuthorizedError,
)

__all__ = [
    "ConchAPIError",
    "ConchClient",
    "ConchError",
    "ConchResponseError",
    "ConchTransportError",
    "DataNotFoundError",
    "DeviceLookup",
    "HTTPNotOkError",
    "LoginFailedError",
    "NotAuthorizedError",
]
