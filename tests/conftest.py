from __future__ import annotations

from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from whatsapp_catalog_fdw.config import CatalogSettings
from whatsapp_catalog_fdw.fdw import HostContext, WhatsAppCatalogFdw

SERVER_OPTIONS = {
    "phone_number": "+5215512345678",
    "from_number": "+5215587654321",
    "api_key": "UAK-test-key",
}


class StubCatalogClient:
    """Stands in for WhatsAppCatalogClient; records every settings object it was built with."""

    def __init__(self, products: List[Any] | None = None, error: Exception | None = None) -> None:
        self.products = list(products or [])
        self.error = error
        self.settings: List[CatalogSettings] = []
        self.calls = 0

    def __call__(self, settings: CatalogSettings) -> "StubCatalogClient":
        self.settings.append(settings)
        return self

    def list_products(self) -> List[Any]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.products)


@pytest.fixture()
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def server_options() -> Dict[str, str]:
    return dict(SERVER_OPTIONS)


@pytest.fixture()
def products() -> List[Dict[str, Any]]:
    return [
        {
            "id": "p1",
            "retailer_id": "sku-1",
            "name": "Shirt",
            "description": "Cotton shirt",
            "url": "https://shop.example/p1",
            "currency": "MXN",
            "price": "199.00",
            "is_hidden": False,
            "max_available": 5,
            "availability": "in stock",
            "checkmark": True,
            "whatsapp_product_can_appeal": False,
            "is_approved": True,
            "approval_status": "APPROVED",
            "signedShimmedUrl": "https://cdn.example/p1?sig=abc",
            "images": [{"url": "https://cdn.example/p1-a.jpg"}, {"url": "https://cdn.example/p1-b.jpg"}],
        },
        {
            "id": "p2",
            "name": "Hat",
            "is_hidden": "no",
            "max_available": 2.5,
        },
        {
            "id": "p3",
            "name": "Socks",
            "images": [],
        },
    ]


@pytest.fixture()
def stub_client(products) -> StubCatalogClient:
    return StubCatalogClient(products)


@pytest.fixture()
def fdw(stub_client) -> WhatsAppCatalogFdw:
    return WhatsAppCatalogFdw(client_factory=stub_client)


@pytest.fixture()
def host(server_options) -> HostContext:
    return HostContext.build(server_options, ["id", "name", "is_hidden", "max_available"])


@pytest.fixture()
def stub_client_cls() -> type[StubCatalogClient]:
    return StubCatalogClient
