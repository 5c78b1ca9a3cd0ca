"""ConchClient: synchronous client for the read endpoints of the Conch API.

One ``httpx.Client`` per instance, bearer-token auth, no retries. Every
non-2xx response is turned into a ``ConchError`` subclass by ``_get``.
"""

import logging
from typing import Any
from urllib.parse import quote
from uuid import UUID

import httpx
from pydantic import TypeAdapter, ValidationError

from conch_shell.client.base import DeviceLookup
from conch_shell.client.errors import (
    ConchAPIError,
    ConchResponseError,
    ConchTransportError,
    DataNotFoundError,
    HTTPNotOkError,
    LoginFailedError,
    NotAuthorizedError,
)
from conch_shell.config.settings import Settings
from conch_shell.models.device import (
    Device,
    DeviceLocation,
    GlobalDatacenter,
    HardwareProduct,
    HardwareVendor,
)

logger = logging.getLogger(__name__)

_PRODUCTS = TypeAdapter(list[HardwareProduct])
_VENDORS = TypeAdapter(list[HardwareVendor])
_DATACENTERS = TypeAdapter(list[GlobalDatacenter])


def _segment(value: object) -> str:
    """One URL path segment, with slashes and query characters escaped."""
    return quote(str(value), safe="")


class ConchClient(DeviceLookup):
    """Conch API client.

    Usable as a context manager; ``close()`` releases the connection pool.
    A caller-supplied ``transport`` replaces the network (used by tests).
    """

    def __init__(
        self,
        base_url: str = "https://conch.joyent.us",
        token: str = "",
        *,
        user_agent: str = "conch-shell",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._token = token
        headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ) -> "ConchClient":
        return cls(
            settings.CONCH_API_URL,
            settings.CONCH_TOKEN,
            user_agent=settings.CONCH_USER_AGENT,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ConchClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def get_version(self) -> str:
        """Return the version string reported by the API server."""
        data = self._get("/version")
        if not isinstance(data, dict) or "version" not in data:
            raise ConchResponseError("GET /version: response has no version field")
        return str(data["version"])

    def verify_login(self) -> None:
        """Check that the configured token is accepted.

        Raises:
            LoginFailedError: no token is configured or the API rejected it.
        """
        if not self._token:
            raise LoginFailedError("No session data provided; set CONCH_TOKEN")
        try:
            self._get("/login", decode=False)
        except NotAuthorizedError as exc:
            raise LoginFailedError("Login failed: token was rejected") from exc

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    def get_device(self, serial: str) -> Device:
        path = f"/device/{_segment(serial)}"
        return self._parse(Device, self._get(path), path)

    def get_device_location(self, serial: str) -> DeviceLocation:
        path = f"/device/{_segment(serial)}/location"
        return self._parse(DeviceLocation, self._get(path), path)

    # ------------------------------------------------------------------
    # Hardware
    # ------------------------------------------------------------------

    def get_hardware_products(self) -> list[HardwareProduct]:
        return self._parse(_PRODUCTS, self._get("/hardware_product"), "/hardware_product")

    def get_hardware_product(self, product_id: UUID | str) -> HardwareProduct:
        path = f"/hardware_product/{_segment(product_id)}"
        return self._parse(HardwareProduct, self._get(path), path)

    def get_hardware_vendors(self) -> list[HardwareVendor]:
        return self._parse(_VENDORS, self._get("/hardware_vendor"), "/hardware_vendor")

    def get_hardware_vendor(self, name: str) -> HardwareVendor:
        path = f"/hardware_vendor/{_segment(name)}"
        return self._parse(HardwareVendor, self._get(path), path)

    # ------------------------------------------------------------------
    # Datacenters
    # ------------------------------------------------------------------

    def get_datacenters(self) -> list[GlobalDatacenter]:
        return self._parse(_DATACENTERS, self._get("/dc"), "/dc")

    def get_datacenter(self, datacenter_id: UUID | str) -> GlobalDatacenter:
        path = f"/dc/{_segment(datacenter_id)}"
        return self._parse(GlobalDatacenter, self._get(path), path)

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _get(self, path: str, *, decode: bool = True) -> Any:
        try:
            resp = self._http.get(path)
        except httpx.HTTPError as exc:
            raise ConchTransportError(f"GET {path} failed: {exc}") from exc

        logger.debug("GET %s -> %d", path, resp.status_code)
        self._check_status(resp, path)

        if not decode:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise ConchResponseError(f"GET {path}: response is not JSON") from exc

    @staticmethod
    def _check_status(resp: httpx.Response, path: str) -> None:
        status = resp.status_code
        if status in (401, 403):
            raise NotAuthorizedError(status)
        if status == 404:
            raise DataNotFoundError(path)
        if status < 400:
            return

        message = ""
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = str(body.get("error") or "")
        if message:
            raise ConchAPIError(message, status)
        raise HTTPNotOkError(status)

    @staticmethod
    def _parse(model: Any, data: Any, path: str) -> Any:
        try:
            if isinstance(model, TypeAdapter):
                return model.validate_python(data)
            return model.model_validate(data)
        except ValidationError as exc:
            raise ConchResponseError(f"GET {path}: unexpected response shape: {exc}") from exc
