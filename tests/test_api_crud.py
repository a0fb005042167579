"""Entity CRUD endpoints, validation and per-user isolation."""

from __future__ import annotations

import pytest

from conftest import register


def _category_id(client, headers, name: str) -> int:
    rows = client.get("/api/categories", headers=headers).get_json()
    return next(row["id"] for row in rows if row["name"] == name)


def _create_transaction(client, headers, **overrides):
    payload = {
        "type": "expense",
        "amount": "42.10",
        "description": "Weekly shop",
        "date": "2024-03-02",
    }
    payload.update(overrides)
    return client.post("/api/transactions", json=payload, headers=headers)


@pytest.fixture
def bob_headers(client) -> dict[str, str]:
    token = register(client, email="bob@example.com")["token"]
    return {"Authorization": f"Bearer {token}"}


def test_endpoints_require_auth(client):
    for path in (
        "/api/categories",
        "/api/transactions",
        "/api/budgets",
        "/api/savings-goals",
        "/api/budgets/progress",
        "/api/savings-goals/progress",
    ):
        response = client.get(path)
        assert response.status_code == 401, path
        assert response.get_json() == {"message": "Unauthorized"}


def test_category_create_filter_and_delete(client, auth_headers):
    created = client.post(
        "/api/categories", json={"name": "Rent", "type": "expense"}, headers=auth_headers
    )
    assert created.status_code == 201
    category = created.get_json()

    incomes = client.get("/api/categories?type=income", headers=auth_headers).get_json()
    assert {row["type"] for row in incomes} == {"income"}

    assert client.delete(f"/api/categories/{category['id']}", headers=auth_headers).status_code == 200
    missing = client.delete(f"/api/categories/{category['id']}", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.get_json() == {"message": "Category not found"}


def test_category_validation(client, auth_headers):
    response = client.post("/api/categories", json={"name": "", "type": "gift"}, headers=auth_headers)

    assert response.status_code == 400
    body = response.get_json()
    assert body["message"] == "Invalid category data"
    assert set(body["errors"]) == {"name", "type"}


def test_transaction_lifecycle(client, auth_headers):
    groceries = _category_id(client, auth_headers, "Groceries")

    created = _create_transaction(client, auth_headers, category_id=groceries)
    assert created.status_code == 201
    txn = created.get_json()
    assert txn["amount"] == "42.10"
    assert txn["category_id"] == groceries

    fetched = client.get(f"/api/transactions/{txn['id']}", headers=auth_headers)
    assert fetched.get_json() == txn

    updated = client.put(
        f"/api/transactions/{txn['id']}",
        json={"amount": "50", "id": 999, "user_id": 999},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    body = updated.get_json()
    assert body["amount"] == "50.00"
    assert body["id"] == txn["id"]
    assert body["description"] == "Weekly shop"

    assert client.delete(f"/api/transactions/{txn['id']}", headers=auth_headers).status_code == 200
    gone = client.get(f"/api/transactions/{txn['id']}", headers=auth_headers)
    assert gone.status_code == 404
    assert gone.get_json() == {"message": "Transaction not found"}


def test_transaction_validation_errors(client, auth_headers):
    response = _create_transaction(client, auth_headers, amount="-5", type="gift", date="")

    assert response.status_code == 400
    body = response.get_json()
    assert body["message"] == "Invalid transaction data"
    assert set(body["errors"]) == {"amount", "type", "date"}


@pytest.mark.parametrize("amount", ["0.001", "1e30"])
def test_transaction_amount_out_of_range_is_rejected(client, auth_headers, amount):
    response = _create_transaction(client, auth_headers, amount=amount)

    assert response.status_code == 400
    assert set(response.get_json()["errors"]) == {"amount"}
    assert client.get("/api/transactions", headers=auth_headers).get_json() == []


def test_transaction_category_must_match_type(client, auth_headers):
    salary = _category_id(client, auth_headers, "Salary")

    response = _create_transaction(client, auth_headers, category_id=salary)

    assert response.status_code == 400
    assert "category_id" in response.get_json()["errors"]


def test_transaction_type_change_rechecks_category(client, auth_headers):
    groceries = _category_id(client, auth_headers, "Groceries")
    txn = _create_transaction(client, auth_headers, category_id=groceries).get_json()

    response = client.patch(
        f"/api/transactions/{txn['id']}", json={"type": "income"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert "category_id" in response.get_json()["errors"]


def test_transaction_list_filters(client, auth_headers):
    groceries = _category_id(client, auth_headers, "Groceries")
    _create_transaction(client, auth_headers, date="2024-02-28")
    _create_transaction(client, auth_headers, date="2024-03-01", category_id=groceries)
    _create_transaction(client, auth_headers, date="2024-03-31", type="income", description="Pay")

    in_march = client.get(
        "/api/transactions?start=2024-03-01&end=2024-03-31", headers=auth_headers
    ).get_json()
    assert [row["date"] for row in in_march] == ["2024-03-31", "2024-03-01"]

    expenses = client.get("/api/transactions?type=expense", headers=auth_headers).get_json()
    assert {row["type"] for row in expenses} == {"expense"}

    by_category = client.get(
        f"/api/transactions?category_id={groceries}", headers=auth_headers
    ).get_json()
    assert len(by_category) == 1

    bad = client.get("/api/transactions?start=yesterday", headers=auth_headers)
    assert bad.status_code == 400


def test_users_cannot_see_each_others_data(client, auth_headers, bob_headers):
    txn = _create_transaction(client, auth_headers).get_json()
    bob_groceries = _category_id(client, bob_headers, "Groceries")

    assert client.get("/api/transactions", headers=bob_headers).get_json() == []
    assert client.get(f"/api/transactions/{txn['id']}", headers=bob_headers).status_code == 404
    assert (
        client.put(
            f"/api/transactions/{txn['id']}", json={"amount": "1"}, headers=bob_headers
        ).status_code
        == 404
    )
    assert client.delete(f"/api/transactions/{txn['id']}", headers=bob_headers).status_code == 404

    # alice cannot file a transaction under bob's category
    response = _create_transaction(client, auth_headers, category_id=bob_groceries)
    assert response.status_code == 400


def test_budget_lifecycle_and_progress(client, auth_headers):
    groceries = _category_id(client, auth_headers, "Groceries")
    _create_transaction(client, auth_headers, category_id=groceries, amount="300")
    _create_transaction(client, auth_headers, category_id=groceries, amount="150")

    created = client.post(
        "/api/budgets", json={"category_id": groceries, "amount": "400"}, headers=auth_headers
    )
    assert created.status_code == 201
    budget = created.get_json()
    assert budget["period"] == "monthly"

    progress = client.get("/api/budgets/progress", headers=auth_headers).get_json()
    assert progress == [
        {
            "id": budget["id"],
            "category_id": groceries,
            "category_name": "Groceries",
            "period": "monthly",
            "amount": "400.00",
            "spent": "450.00",
            "remaining": "0.00",
            "percentage": 112.5,
            "display_percentage": 100.0,
            "status": "danger",
            "window_start": None,
            "window_end": None,
        }
    ]

    updated = client.patch(
        f"/api/budgets/{budget['id']}", json={"amount": "1000"}, headers=auth_headers
    )
    assert updated.get_json()["amount"] == "1000.00"
    assert client.get("/api/budgets/progress", headers=auth_headers).get_json()[0]["status"] == "good"

    assert client.delete(f"/api/budgets/{budget['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/budgets/{budget['id']}", headers=auth_headers).status_code == 404


def test_budget_requires_expense_category(client, auth_headers):
    salary = _category_id(client, auth_headers, "Salary")

    response = client.post(
        "/api/budgets", json={"category_id": salary, "amount": "400"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid budget data"


def test_budget_update_checks_merged_dates(client, auth_headers):
    groceries = _category_id(client, auth_headers, "Groceries")
    budget = client.post(
        "/api/budgets",
        json={"category_id": groceries, "amount": "400", "start_date": "2024-03-01"},
        headers=auth_headers,
    ).get_json()

    response = client.patch(
        f"/api/budgets/{budget['id']}", json={"end_date": "2024-02-01"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert "end_date" in response.get_json()["errors"]


def test_savings_goal_lifecycle_and_progress(client, auth_headers):
    created = client.post(
        "/api/savings-goals",
        json={"title": "Laptop", "target_amount": "1000", "target_date": "2024-04-13"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    goal = created.get_json()
    assert goal["current_amount"] == "0.00"

    client.patch(
        f"/api/savings-goals/{goal['id']}", json={"current_amount": "1000"}, headers=auth_headers
    )
    progress = client.get(
        "/api/savings-goals/progress?as_of=2024-03-15", headers=auth_headers
    ).get_json()

    assert progress["overall_percentage"] == 100.0
    entry = progress["goals"][0]
    assert entry["percentage"] == 100.0
    assert entry["achieved"] is True
    assert entry["remaining"] == "0.00"
    assert entry["time_remaining"]["label"] == "29 days left"

    assert client.delete(f"/api/savings-goals/{goal['id']}", headers=auth_headers).status_code == 200
    missing = client.get(f"/api/savings-goals/{goal['id']}", headers=auth_headers)
    assert missing.get_json() == {"message": "Savings goal not found"}


def test_savings_goal_validation(client, auth_headers):
    response = client.post(
        "/api/savings-goals",
        json={"title": "", "target_amount": "0", "current_amount": "-1", "target_date": "soon"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert set(response.get_json()["errors"]) == {
        "title",
        "target_amount",
        "current_amount",
        "target_date",
    }


def test_empty_update_is_rejected(client, auth_headers):
    txn = _create_transaction(client, auth_headers).get_json()

    response = client.put(f"/api/transactions/{txn['id']}", json={}, headers=auth_headers)

    assert response.status_code == 400
