"""
2Chat WhatsApp catalog API client and verification adapter.

The catalog endpoint answers ``GET {base}/{phone_number}?from_number=...`` with
an envelope of the form ``{"success": true, "products": [...]}``. The whole
catalog is returned in a single page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, MutableMapping, Optional

import httpx

from ...config import CatalogSettings
from ...errors import ApiError, FdwError, SchemaError
from ..base import DataSourceAdapter, VerificationResult
from .base import BaseAPIClient


class WhatsAppCatalogClient(BaseAPIClient):
    """Client fetching the product list of one WhatsApp business number."""

    def __init__(
        self,
        settings: CatalogSettings,
        *,
        timeout: Optional[float] = None,
        default_headers: Optional[MutableMapping[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(timeout=timeout, default_headers=dict(default_headers or {}), transport=transport)
        self.settings = settings

    def list_products(self) -> List[Any]:
        """
        Return the raw ``products`` array in response order.

        Raises
        ------
        TransportError
            The request could not be completed.
        DecodeError
            The body is not JSON.
        ApiError
            ``success`` is missing or not ``true``.
        SchemaError
            ``products`` is missing or not an array.
        """

        response = self._request("GET", self.settings.request_url(), headers=self.settings.request_headers())
        payload = self._decode_json(response)

        success = payload.get("success") if isinstance(payload, dict) else None
        if success is not True:
            raise ApiError("API request was not successful", status_code=response.status_code)

        if "products" not in payload:
            raise SchemaError("Cannot get 'products' from response")
        products = payload["products"]
        if not isinstance(products, list):
            raise SchemaError("'products' is not an array")
        return products


@dataclass(slots=True)
class CatalogAdapter(DataSourceAdapter):
    """Connectivity check for the catalog endpoint."""

    client: WhatsAppCatalogClient
    source_id: str = "whatsapp_catalog"

    def verify(self) -> VerificationResult:
        try:
            products = self.client.list_products()
        except FdwError as exc:
            return VerificationResult(
                success=False,
                message=f"WhatsApp catalog verification failed: {exc}",
                details={"reason": exc.kind.value},
            )
        return VerificationResult(
            success=True,
            message="WhatsApp catalog API reachable.",
            details={"phone_number": self.client.settings.phone_number, "products": len(products)},
        )
