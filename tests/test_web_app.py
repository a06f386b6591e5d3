"""Mini README: HTTP-level tests for the Finance Tracker API.

These tests drive the FastAPI application through ``TestClient`` to confirm
status codes, JSON shapes, ordering, identity preservation on updates, and
the summary endpoint's rounding.
"""

from __future__ import annotations

import logging
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from finance_tracker.configuration import FinanceTrackerSettings
from finance_tracker.interface import create_application
from finance_tracker.transactions import TransactionStore


@pytest.fixture
def client() -> Iterator[TestClient]:
    app = create_application(
        store=TransactionStore(),
        settings=FinanceTrackerSettings(_env_file=None),
    )
    with TestClient(app) as test_client:
        yield test_client


def _payload(**overrides: object) -> dict:
    payload = {
        "title": "Freelance invoice",
        "amount": 100,
        "type": "income",
        "category": "Work",
        "date": "2024-05-10",
        "note": "Paid by transfer",
    }
    payload.update(overrides)
    return payload


def test_create_returns_created_record(client: TestClient) -> None:
    response = client.post("/transactions", json=_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["id"]
    assert body["createdAt"].endswith("Z")
    assert body["title"] == "Freelance invoice"
    assert body["type"] == "income"
    assert body["amount"] == 100
    assert body["note"] == "Paid by transfer"


def test_create_missing_field_returns_errors(client: TestClient) -> None:
    payload = _payload()
    del payload["category"]

    response = client.post("/transactions", json=payload)

    assert response.status_code == 400
    assert response.json() == {"errors": ["category: required, must be a non-empty string"]}


def test_create_with_malformed_json_returns_400(client: TestClient) -> None:
    response = client.post(
        "/transactions",
        content="{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"errors": ["body: must be a JSON object"]}


def test_create_with_non_object_body_returns_400(client: TestClient) -> None:
    response = client.post("/transactions", json=[_payload()])

    assert response.status_code == 400
    assert response.json() == {"errors": ["body: must be a JSON object"]}


def test_list_is_sorted_by_date_descending(client: TestClient) -> None:
    for day in ("2024-01-05", "2024-07-01", "2023-11-20", "2024-03-14"):
        client.post("/transactions", json=_payload(date=day))

    response = client.get("/transactions")

    assert response.status_code == 200
    assert [item["date"] for item in response.json()] == [
        "2024-07-01",
        "2024-03-14",
        "2024-01-05",
        "2023-11-20",
    ]


def test_get_unknown_transaction_returns_404(client: TestClient) -> None:
    response = client.get("/transactions/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Transaction 'does-not-exist' not found"}


def test_patch_preserves_id_and_created_at(client: TestClient) -> None:
    created = client.post("/transactions", json=_payload()).json()

    response = client.patch(
        f"/transactions/{created['id']}",
        json={"id": "other", "createdAt": "1970-01-01T00:00:00.000Z", "amount": 125.5},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert body["amount"] == 125.5
    assert client.get(f"/transactions/{created['id']}").json() == body


def test_patch_invalid_field_returns_400(client: TestClient) -> None:
    created = client.post("/transactions", json=_payload()).json()

    response = client.patch(f"/transactions/{created['id']}", json={"type": "gift"})

    assert response.status_code == 400
    assert response.json() == {"errors": ['type: must be "income" or "expense"']}


def test_patch_unknown_transaction_returns_404(client: TestClient) -> None:
    response = client.patch("/transactions/missing", json={"amount": 5})

    assert response.status_code == 404
    assert response.json() == {"error": "Transaction 'missing' not found"}


def test_delete_then_get_returns_404(client: TestClient) -> None:
    created = client.post("/transactions", json=_payload()).json()

    response = client.delete(f"/transactions/{created['id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/transactions/{created['id']}").status_code == 404
    assert client.delete(f"/transactions/{created['id']}").status_code == 404


def test_summary_reports_totals(client: TestClient) -> None:
    client.post("/transactions", json=_payload(amount=100, type="income"))
    client.post("/transactions", json=_payload(amount=40, type="expense"))

    response = client.get("/summary")

    assert response.status_code == 200
    assert response.json() == {"totalIncome": 100, "totalExpenses": 40, "netBalance": 60}


def test_summary_rounds_floating_point_totals(client: TestClient) -> None:
    client.post("/transactions", json=_payload(amount=0.1))
    client.post("/transactions", json=_payload(amount=0.2))

    assert client.get("/summary").json()["totalIncome"] == 0.3


def test_unmatched_route_returns_404(client: TestClient) -> None:
    response = client.get("/budgets")

    assert response.status_code == 404
    assert response.json() == {"error": "Route GET /budgets not found"}


def test_unsupported_method_is_treated_as_unmatched_route(client: TestClient) -> None:
    response = client.put("/transactions", json=_payload())

    assert response.status_code == 404
    assert response.json() == {"error": "Route PUT /transactions not found"}


def test_cors_allows_any_origin_by_default(client: TestClient) -> None:
    response = client.get("/summary", headers={"Origin": "http://example.com"})

    assert response.headers["access-control-allow-origin"] == "*"


def test_each_application_owns_its_store() -> None:
    settings = FinanceTrackerSettings(_env_file=None)
    first = TestClient(create_application(settings=settings))
    second = TestClient(create_application(settings=settings))

    first.post("/transactions", json=_payload())

    assert len(first.get("/transactions").json()) == 1
    assert second.get("/transactions").json() == []


def test_shutdown_clears_the_store() -> None:
    store = TransactionStore()
    app = create_application(store=store, settings=FinanceTrackerSettings(_env_file=None))

    with TestClient(app) as test_client:
        test_client.post("/transactions", json=_payload())
        assert len(store) == 1

    assert len(store) == 0


def test_application_applies_configured_log_level() -> None:
    """Building the app sets the root level, so reload workers honour it too."""

    root_logger = logging.getLogger()
    previous_level = root_logger.level
    try:
        create_application(settings=FinanceTrackerSettings(_env_file=None, log_level="DEBUG"))
        assert root_logger.level == logging.DEBUG
    finally:
        root_logger.setLevel(previous_level)
