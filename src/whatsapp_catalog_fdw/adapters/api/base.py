"""
Shared HTTP utilities for API adapters.

A thin synchronous HTTPX wrapper. Requests are issued exactly once: a failure
surfaces immediately as a :class:`~whatsapp_catalog_fdw.errors.TransportError`
and retry policy is left to the caller. No timeout is applied unless one is
configured.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Optional

import httpx

from ...core.logging import StructuredLoggerAdapter, get_logger
from ...errors import DecodeError, TransportError


@dataclass(slots=True)
class BaseAPIClient:
    """
    Base synchronous HTTP client.

    Parameters
    ----------
    timeout:
        Request timeout in seconds, ``None`` to block until the server answers.
    default_headers:
        Headers automatically attached to every request.
    transport:
        Optional HTTPX transport, mainly for tests (``httpx.MockTransport``).
    """

    timeout: Optional[float] = None
    default_headers: MutableMapping[str, str] = field(default_factory=dict)
    transport: Optional[httpx.BaseTransport] = None
    logger: StructuredLoggerAdapter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.logger = get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            headers=dict(self.default_headers),
            transport=self.transport,
            follow_redirects=True,
        )

    def _request(self, method: str, url: str, *, headers: Optional[Mapping[str, str]] = None) -> httpx.Response:
        self.logger.debug("HTTP request", extra={"method": method, "url": url})
        try:
            with self._build_client() as client:
                response = client.request(method, url, headers=dict(headers or {}))
        # InvalidURL and UnicodeError come from building the request, before anything is sent.
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            self.logger.error("HTTP request failed", extra={"method": method, "url": url, "error": str(exc)})
            raise TransportError(f"HTTP request failed: {exc}") from exc

        self.logger.debug("HTTP response", extra={"status_code": response.status_code, "url": str(response.url)})
        return response

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Failed to parse JSON response (HTTP {response.status_code}): {exc}") from exc
