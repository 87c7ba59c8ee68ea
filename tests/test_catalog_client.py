from __future__ import annotations

import httpx
import pytest

from whatsapp_catalog_fdw.adapters.api.catalog import CatalogAdapter, WhatsAppCatalogClient
from whatsapp_catalog_fdw.config import CatalogSettings
from whatsapp_catalog_fdw.errors import ApiError, DecodeError, SchemaError, TransportError

SETTINGS = CatalogSettings(phone_number="+5215512345678", from_number="+5215587654321", api_key="UAK-test-key")


def _client(handler) -> WhatsAppCatalogClient:
    return WhatsAppCatalogClient(SETTINGS, transport=httpx.MockTransport(handler))


def test_list_products_request_shape():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, json={"success": True, "products": [{"id": "p1"}, {"id": "p2"}]})

    products = _client(handler).list_products()

    request = captured["request"]
    assert products == [{"id": "p1"}, {"id": "p2"}]
    assert request.method == "GET"
    assert request.url.host == "api.p.2chat.io"
    assert request.url.path == "/open/whatsapp/catalog/products/+5215512345678"
    assert request.url.query == b"from_number=+5215587654321"
    assert request.headers["user-agent"] == "WhatsApp Catalog FDW"
    assert request.headers["X-User-API-Key"] == "UAK-test-key"


def test_list_products_rejects_unsuccessful_response():
    client = _client(lambda request: httpx.Response(401, json={"success": False, "message": "invalid api key"}))

    with pytest.raises(ApiError, match="API request was not successful") as excinfo:
        client.list_products()

    assert excinfo.value.status_code == 401


@pytest.mark.parametrize("payload", [{"products": []}, {"success": "true", "products": []}, {"success": 1, "products": []}, []])
def test_list_products_requires_boolean_success(payload):
    client = _client(lambda request: httpx.Response(200, json=payload))

    with pytest.raises(ApiError):
        client.list_products()


def test_list_products_missing_products():
    client = _client(lambda request: httpx.Response(200, json={"success": True}))

    with pytest.raises(SchemaError, match="Cannot get 'products' from response"):
        client.list_products()


def test_list_products_products_not_array():
    client = _client(lambda request: httpx.Response(200, json={"success": True, "products": {"id": "p1"}}))

    with pytest.raises(SchemaError, match="'products' is not an array"):
        client.list_products()


def test_list_products_invalid_json():
    client = _client(lambda request: httpx.Response(502, text="<html>Bad gateway</html>"))

    with pytest.raises(DecodeError, match="Failed to parse JSON response"):
        client.list_products()


def test_list_products_transport_failure_is_not_retried():
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError, match="HTTP request failed"):
        _client(handler).list_products()

    assert len(attempts) == 1


@pytest.mark.parametrize(
    "settings",
    [
        CatalogSettings(phone_number="123\n4", from_number="+1", api_key="k"),
        CatalogSettings(phone_number="+1", from_number="+2\x00", api_key="k"),
        CatalogSettings(phone_number="+1", from_number="+2", api_key="kéy"),
    ],
)
def test_list_products_unbuildable_request_is_transport_error(settings):
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        return httpx.Response(200, json={"success": True, "products": []})

    client = WhatsAppCatalogClient(settings, transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError, match="HTTP request failed"):
        client.list_products()

    assert attempts == []


def test_catalog_adapter_verify_reports_unbuildable_request():
    settings = CatalogSettings(phone_number="+1", from_number="+2", api_key="kéy")
    client = WhatsAppCatalogClient(settings, transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})))

    result = CatalogAdapter(client=client).verify()

    assert result.success is False
    assert result.details["reason"] == "transport"


def test_catalog_adapter_verify_success():
    client = _client(lambda request: httpx.Response(200, json={"success": True, "products": [{"id": "p1"}]}))

    result = CatalogAdapter(client=client).verify()

    assert result.success is True
    assert result.details["products"] == 1
    assert "reachable" in result.message


def test_catalog_adapter_verify_failure():
    client = _client(lambda request: httpx.Response(200, json={"success": False}))

    result = CatalogAdapter(client=client).verify()

    assert result.success is False
    assert result.details["reason"] == "api"
    assert "verification failed" in result.message
