"""End-to-end tests of the backend-for-frontend API against a fake business API."""

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from flowtap.application.interfaces import Notifier, Transport
from flowtap.config import Settings
from flowtap.domain.entities import Notification, NotificationLevel
from flowtap.domain.exceptions import ApiError
from flowtap.infrastructure.dependencies import build_app_context
from flowtap.main import create_app


class FakeTransport(Transport):
    def __init__(self, routes: dict[tuple[str, str], Any]):
        self.routes = routes
        self.calls: list[tuple[str, str, Any, Any]] = []

    async def request(self, method, path, *, params=None, body=None):
        self.calls.append((method, path, params, body))
        answer = self.routes.get((method, path), {})
        if isinstance(answer, Exception):
            raise answer
        return answer


class FakeNotifier(Notifier):
    def __init__(self):
        self.sent: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.sent.append(notification)


ROUTES = {
    ("GET", "/customers"): {
        "data": [{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bob"}, {"id": 3, "name": "Cid"}],
        "pagination": {"page": 1, "limit": 10, "total": 3},
    },
    ("GET", "/customers/99"): ApiError("Customer not found", 404),
    ("GET", "/inventory"): {"data": [{"id": 5, "quantity": 1}]},
    ("PATCH", "/inventory/5/stock"): {"data": {"id": 5, "quantity": 3}},
    ("POST", "/chat/conversations/9/messages"): {"data": {"id": "m1", "text": "hello"}},
    ("GET", "/reports/sales"): {"data": {"revenue": 900}},
    ("PUT", "/settings/pos"): {"data": {"taxRate": 0.2}},
}


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport(dict(ROUTES))


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def client(fake_transport, notifier) -> AsyncClient:
    context = build_app_context(Settings(), transport=fake_transport, notifier=notifier)
    app = create_app(context)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_list_stores(client: AsyncClient):
    async with client:
        response = await client.get("/api/v1/stores")

    assert response.status_code == 200
    kinds = {store["kind"] for store in response.json()}
    assert kinds == {
        "customers", "inventory", "repairs", "employees",
        "sales", "conversations", "reports", "settings",
    }


@pytest.mark.asyncio
async def test_list_and_delete_customers(client: AsyncClient, notifier: FakeNotifier):
    async with client:
        listed = await client.get("/api/v1/resources/customers", params={"page": 1})
        deleted = await client.delete("/api/v1/resources/customers/2")
        state = await client.get("/api/v1/stores/customers")

    assert listed.status_code == 200
    body = listed.json()
    assert body["result"]["phase"] == "fulfilled"
    assert body["result"]["message"] == "Customers fetched successfully"
    assert body["state"]["pagination"]["total"] == 3
    # reported once, then cleared
    assert body["state"]["message"] is None

    assert [c["id"] for c in deleted.json()["state"]["collection"]] == [1, 3]
    assert state.json()["request_phase"] == "fulfilled"
    assert [n.description for n in notifier.sent] == [
        "Customers fetched successfully",
        "Customer deleted successfully",
    ]


@pytest.mark.asyncio
async def test_remote_failure_is_reported_in_payload(client: AsyncClient, notifier: FakeNotifier):
    async with client:
        response = await client.get("/api/v1/resources/customers/99")

    assert response.status_code == 200
    body = response.json()
    assert body["result"]["phase"] == "rejected"
    assert body["result"]["error"] == "Customer not found"
    assert body["state"]["request_phase"] == "rejected"
    assert body["state"]["error"] is None
    assert notifier.sent[-1].level is NotificationLevel.FAILURE


@pytest.mark.asyncio
async def test_search_segment_is_not_read_as_an_id(client: AsyncClient, fake_transport: FakeTransport):
    fake_transport.routes[("GET", "/customers/search")] = {"data": [{"id": 1, "name": "Ann"}]}
    async with client:
        response = await client.get("/api/v1/resources/customers/search", params={"q": "ann"})

    assert response.status_code == 200
    assert response.json()["result"]["operation"] == "customers/search"
    assert fake_transport.calls == [("GET", "/customers/search", {"q": "ann"}, None)]


@pytest.mark.asyncio
async def test_unsupported_operation_is_405(client: AsyncClient, fake_transport: FakeTransport):
    async with client:
        response = await client.get("/api/v1/resources/repairs/search", params={"q": "screen"})

    assert response.status_code == 405
    assert fake_transport.calls == []


@pytest.mark.asyncio
async def test_unknown_kinds_are_404(client: AsyncClient):
    async with client:
        unknown_store = await client.get("/api/v1/stores/payroll")
        not_a_resource = await client.get("/api/v1/resources/reports")
        unknown_report = await client.get("/api/v1/reports/payroll")
        unknown_section = await client.get("/api/v1/settings/billing")

    assert unknown_store.status_code == 404
    assert not_a_resource.status_code == 404
    assert unknown_report.status_code == 404
    assert unknown_section.status_code == 404


@pytest.mark.asyncio
async def test_create_returns_201(client: AsyncClient, fake_transport: FakeTransport):
    fake_transport.routes[("POST", "/customers")] = {"data": {"id": 4, "name": "Dee"}}
    async with client:
        response = await client.post("/api/v1/resources/customers", json={"name": "Dee"})

    assert response.status_code == 201
    assert response.json()["state"]["collection"] == [{"id": 4, "name": "Dee"}]
    assert fake_transport.calls[-1][3] == {"name": "Dee"}


@pytest.mark.asyncio
async def test_kind_specific_actions(client: AsyncClient, fake_transport: FakeTransport):
    async with client:
        await client.get("/api/v1/resources/inventory")
        stock = await client.patch("/api/v1/resources/inventory/5/stock", json={"quantity": 3})
        sent = await client.post(
            "/api/v1/resources/conversations/9/messages", json={"message": "hello"}
        )
        invalid = await client.patch("/api/v1/resources/inventory/5/stock", json={"quantity": -1})

    assert stock.json()["state"]["collection"] == [{"id": 5, "quantity": 3}]
    assert stock.json()["result"]["message"] == "Stock updated successfully"
    assert sent.json()["state"]["children"]["9"] == [{"id": "m1", "text": "hello"}]
    assert invalid.status_code == 422


@pytest.mark.asyncio
async def test_reports_and_settings(client: AsyncClient, fake_transport: FakeTransport):
    async with client:
        report = await client.get(
            "/api/v1/reports/sales", params={"start_date": "2024-01-01", "end_date": "2024-01-31"}
        )
        settings = await client.put("/api/v1/settings/pos", json={"taxRate": 0.2})
        cleared = await client.delete("/api/v1/reports")

    assert report.json()["state"]["documents"]["sales"] == {"revenue": 900}
    assert fake_transport.calls[0][2] == {"startDate": "2024-01-01", "endDate": "2024-01-31"}
    assert settings.json()["result"]["message"] == "POS settings updated successfully"
    assert settings.json()["state"]["documents"]["pos"] == {"taxRate": 0.2}
    assert cleared.json()["documents"] == {}


@pytest.mark.asyncio
async def test_clear_error_endpoint(client: AsyncClient):
    async with client:
        response = await client.post("/api/v1/stores/customers/clear-error")

    assert response.status_code == 200
    assert response.json()["error"] is None
