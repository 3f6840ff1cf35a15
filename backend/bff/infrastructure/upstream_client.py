"""Upstream HTTP Client — wraps httpx.AsyncClient with bearer forwarding and error mapping.

Invariants:
    - 2xx: decoded JSON body returned (None for an empty body)
    - Error response with a JSON object body: upstream message/status/errors passed through
    - Error response with any other body: InternalError (malformed error body)
    - No response (timeout, connect, network, protocol): ServiceUnavailableError
    - Request construction failed (bad URL, unsupported scheme, unserialisable body): InternalError
    - No retries: every call is attempted exactly once
    - Caller bearer and the current request id forwarded as headers

Design Decisions:
    - build_request() separated from send(): construction failures are classified
      before any network IO happens
    - transport injectable: tests drive the real translation with httpx.MockTransport
"""

import logging
from typing import Any

import httpx

from bff.core.errors import (
    BffError,
    ErrorContext,
    InternalError,
    ServiceUnavailableError,
    error_from_upstream,
)
from bff.infrastructure.observability import REQUEST_ID_HEADER, current_request_id

logger = logging.getLogger(__name__)


class UpstreamClient:
    """One upstream service: base URL, fixed timeout, uniform error translation."""

    def __init__(
        self,
        service_name: str,
        base_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.service_name = service_name
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get(self, path: str, *, token: str | None = None, params: dict | None = None) -> Any:
        return await self.request("GET", path, token=token, params=params)

    async def post(self, path: str, body: Any = None, *, token: str | None = None) -> Any:
        return await self.request("POST", path, body=body, token=token)

    async def put(self, path: str, body: Any = None, *, token: str | None = None) -> Any:
        return await self.request("PUT", path, body=body, token=token)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        token: str | None = None,
        params: dict | None = None,
    ) -> Any:
        """Send one request and return the decoded body, or raise a BffError."""
        request = self._build_request(method, path, body, token, params)
        try:
            response = await self.client.send(request)
        except httpx.UnsupportedProtocol as e:
            logger.error(
                f"{self.service_name} request rejected before sending: {e}",
                extra={"service": self.service_name, "path": path},
            )
            raise self._call_failed() from e
        except (httpx.TimeoutException, httpx.TransportError) as e:
            logger.warning(
                f"{self.service_name} unreachable: {e!r}",
                extra={"service": self.service_name, "path": path},
            )
            raise ServiceUnavailableError(self.service_name) from e

        if response.is_success:
            logger.debug(
                f"{self.service_name} {method} {path} → {response.status_code}",
                extra={"service": self.service_name, "upstream_status": response.status_code},
            )
            return self._decode_success(response)
        raise self._translate_error_response(response)

    def _build_request(
        self,
        method: str,
        path: str,
        body: Any,
        token: str | None,
        params: dict | None,
    ) -> httpx.Request:
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        request_id = current_request_id()
        if request_id:
            headers[REQUEST_ID_HEADER] = request_id
        try:
            return self.client.build_request(
                method, path, json=body, headers=headers, params=params,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            logger.error(
                f"Failed to build {self.service_name} request: {e}",
                extra={"service": self.service_name, "path": path},
            )
            raise self._call_failed() from e

    def _call_failed(self) -> InternalError:
        return InternalError(
            f"Failed to call {self.service_name} service",
            ErrorContext(service=self.service_name),
        )

    def _decode_success(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(
                f"{self.service_name} returned a non-JSON success body",
                extra={"service": self.service_name, "upstream_status": response.status_code},
            )
            raise InternalError(
                f"{self.service_name} service returned an invalid response",
                ErrorContext(service=self.service_name),
            ) from e

    def _translate_error_response(self, response: httpx.Response) -> BffError:
        """Pass the upstream's own message/status/errors through when the body allows it."""
        status = response.status_code
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            logger.error(
                f"{self.service_name} returned a malformed error body",
                extra={"service": self.service_name, "upstream_status": status},
            )
            return InternalError(
                f"{self.service_name} service returned an invalid error response",
                ErrorContext(service=self.service_name),
            )
        message = payload.get("message")
        if not isinstance(message, str) or not message:
            message = f"{self.service_name} service error"
        errors = payload.get("errors")
        if errors is not None and not isinstance(errors, list):
            errors = [str(errors)]
        logger.warning(
            f"{self.service_name} rejected request: {message}",
            extra={"service": self.service_name, "upstream_status": status},
        )
        return error_from_upstream(status, message, errors, self.service_name)
