"""Exceptions raised by the Conch API client.

Status codes map onto the hierarchy as follows:

- 401 / 403 -> NotAuthorizedError
- 404 -> DataNotFoundError (the API also answers 404 for data the caller
  may not see)
- other >= 400 with an ``{"error": ...}`` body -> ConchAPIError
- other >= 400 without one -> HTTPNotOkError
"""


class ConchError(Exception):
    """Base class for every client failure."""


class ConchAPIError(ConchError):
    """The API rejected the request and said why."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotAuthorizedError(ConchAPIError):
    def __init__(self, status_code: int = 401) -> None:
        super().__init__("Not authorized for this endpoint", status_code)


class DataNotFoundError(ConchAPIError):
    def __init__(self, path: str = "") -> None:
        message = "API could not find the data requested"
        if path:
            message = f"{message}: {path}"
        super().__init__(message, 404)
        self.path = path


class HTTPNotOkError(ConchAPIError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"Non-200 HTTP status code returned: {status_code}", status_code)


class LoginFailedError(ConchError):
    """The token was rejected or missing."""


class ConchTransportError(ConchError):
    """The request never produced an HTTP response."""


class ConchResponseError(ConchError):
    """The API answered with a body that does not decode into the expected shape."""
