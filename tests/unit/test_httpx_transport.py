"""Unit tests for the HttpxTransport."""

import json

import httpx
import pytest

from flowtap.application.services import (
    CustomerService,
    EntityStore,
    RequestLifecycleController,
)
from flowtap.domain.exceptions import ApiError
from flowtap.infrastructure.http import HttpxTransport


# ── Helpers ──


def _transport(handler, **kwargs) -> HttpxTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxTransport("http://api.test/api/", http_client=client, **kwargs)


@pytest.mark.asyncio
async def test_success_body_gets_message_and_status():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [{"id": 1}], "message": "OK"})

    transport = _transport(handler, token="secret")
    body = await transport.get("/customers", {"page": 1, "q": None})

    assert body["_message"] == "OK"
    assert body["_status"] == 200
    assert body["data"] == [{"id": 1}]

    request = seen[0]
    assert str(request.url) == "http://api.test/api/customers?page=1"
    assert request.headers["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_json_body_is_sent():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": 7})

    transport = _transport(handler)
    body = await transport.post("/customers", {"name": "Ann"})

    assert json.loads(seen[0].content) == {"name": "Ann"}
    assert "Authorization" not in seen[0].headers
    assert body["_message"] == "Success"
    assert body["_status"] == 201


@pytest.mark.asyncio
async def test_token_provider_is_consulted_per_request():
    tokens = iter(["t1", "t2"])
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["Authorization"])
        return httpx.Response(200, json={})

    transport = _transport(handler, token_provider=lambda: next(tokens))
    await transport.get("/a")
    await transport.get("/b")

    assert seen == ["Bearer t1", "Bearer t2"]


@pytest.mark.asyncio
async def test_list_body_is_returned_unchanged():
    transport = _transport(lambda request: httpx.Response(200, json=[{"id": 1}]))
    assert await transport.get("/inventory") == [{"id": 1}]


@pytest.mark.asyncio
async def test_empty_body_becomes_empty_mapping():
    transport = _transport(lambda request: httpx.Response(204))
    body = await transport.delete("/customers/1")
    assert body == {"_message": "Success", "_status": 204}


@pytest.mark.asyncio
async def test_error_uses_detail():
    transport = _transport(
        lambda request: httpx.Response(404, json={"detail": "Customer not found"})
    )
    with pytest.raises(ApiError) as exc_info:
        await transport.get("/customers/9")

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Customer not found"
    assert exc_info.value.data == {"detail": "Customer not found"}


@pytest.mark.asyncio
async def test_error_joins_validation_errors():
    transport = _transport(
        lambda request: httpx.Response(
            422, json={"errors": [{"message": "Name is required"}, {"error": "Bad email"}]}
        )
    )
    with pytest.raises(ApiError) as exc_info:
        await transport.post("/customers", {})

    assert exc_info.value.message == "Name is required, Bad email"


@pytest.mark.asyncio
async def test_error_without_usable_body():
    transport = _transport(lambda request: httpx.Response(500, text="<html>oops</html>"))
    with pytest.raises(ApiError) as exc_info:
        await transport.get("/reports/sales")

    assert exc_info.value.message == "Request failed"
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_network_fault_becomes_status_zero():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = _transport(handler)
    with pytest.raises(ApiError) as exc_info:
        await transport.get("/customers")

    assert exc_info.value.message == "Network error"
    assert exc_info.value.status_code == 0


# ── Message literals over HTTP ──


@pytest.mark.asyncio
async def test_mapping_body_without_message_reports_transport_success():
    transport = _transport(lambda request: httpx.Response(200, json={"data": [{"id": 1}]}))
    service = CustomerService(EntityStore("customers"), transport, RequestLifecycleController())

    result = await service.list_all()

    assert result.message == "Success"


@pytest.mark.asyncio
async def test_bare_list_body_reports_operation_literal():
    transport = _transport(lambda request: httpx.Response(200, json=[{"id": 1}]))
    service = CustomerService(EntityStore("customers"), transport, RequestLifecycleController())

    result = await service.list_all()

    assert result.message == "Customers fetched successfully"
