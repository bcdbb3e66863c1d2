"""Expense API and AI categorization fallbacks."""
import json
from decimal import Decimal

import pytest


@pytest.fixture
def expense_payload(user_id):
    def build(**overrides):
        payload = {
            "userId": user_id,
            "description": "Flight to Denver for client workshop",
            "amount": 412.30,
            "category": "Travel",
            "subCategory": "Airfare",
            "date": "2024-03-14",
        }
        payload.update(overrides)
        return payload

    return build


class TestExpenseCrud:

    def test_create_with_category(self, client, expense_payload):
        resp = client.post("/api/expenses", json=expense_payload())
        assert resp.status_code == 200
        body = resp.json()
        assert body["category"] == "Travel"
        assert body["subCategory"] == "Airfare"
        assert Decimal(body["amount"]) == Decimal("412.30")
        assert body["date"] == "2024-03-14"

    def test_create_rejects_non_positive_amount(self, client, expense_payload):
        resp = client.post("/api/expenses", json=expense_payload(amount=0))
        assert resp.status_code == 400
        assert "Amount must be greater than 0" in resp.json()["message"]

    def test_amount_rounded_to_cents(self, client, expense_payload):
        body = client.post("/api/expenses", json=expense_payload(amount="12.345")).json()
        assert Decimal(body["amount"]) == Decimal("12.35")

    def test_rejects_amount_that_rounds_to_zero(self, client, expense_payload):
        resp = client.post("/api/expenses", json=expense_payload(amount="0.004"))
        assert resp.status_code == 400
        assert "Amount must be greater than 0" in resp.json()["message"]

    def test_create_rejects_unknown_category(self, client, expense_payload):
        resp = client.post("/api/expenses", json=expense_payload(category="Groceries"))
        assert resp.status_code == 400

    def test_list_is_newest_first(self, client, expense_payload, user_id):
        client.post("/api/expenses", json=expense_payload(description="Old", date="2024-01-01"))
        client.post("/api/expenses", json=expense_payload(description="New", date="2024-06-01"))
        body = client.get(f"/api/expenses/{user_id}").json()
        assert [e["description"] for e in body] == ["New", "Old"]

    def test_get_single_expense(self, client, expense_payload):
        created = client.post("/api/expenses", json=expense_payload()).json()
        resp = client.get(f"/api/expenses/edit/{created['id']}")
        assert resp.status_code == 200
        assert resp.json()["description"] == "Flight to Denver for client workshop"

    def test_update_expense(self, client, expense_payload):
        created = client.post("/api/expenses", json=expense_payload()).json()
        resp = client.patch(f"/api/expenses/{created['id']}", json={"amount": 99.5, "category": "Hardware"})
        assert resp.status_code == 200
        body = resp.json()
        assert Decimal(body["amount"]) == Decimal("99.50")
        assert body["category"] == "Hardware"
        assert body["description"] == "Flight to Denver for client workshop"

    def test_update_missing_expense(self, client):
        resp = client.patch("/api/expenses/404", json={"amount": 10})
        assert resp.status_code == 400
        assert resp.json() == {"message": "Expense not found"}

    def test_delete_expense(self, client, expense_payload, user_id):
        created = client.post("/api/expenses", json=expense_payload()).json()
        resp = client.delete(f"/api/expenses/{created['id']}")
        assert resp.status_code == 200
        assert client.get(f"/api/expenses/{user_id}").json() == []
        assert client.delete(f"/api/expenses/{created['id']}").status_code == 400


class TestAutoCategorization:

    def test_missing_category_uses_ai_suggestion(self, client, expense_payload, fake_ai):
        fake = fake_ai(response=json.dumps({
            "mainCategory": "Software",
            "subCategory": "Cloud Hosting",
            "confidence": 0.92,
            "explanation": "AWS is a cloud provider.",
        }))
        payload = expense_payload(description="AWS monthly bill", category=None, subCategory=None)
        body = client.post("/api/expenses", json=payload).json()
        assert body["category"] == "Software"
        assert body["subCategory"] == "Cloud Hosting"
        assert fake.calls[0]["json_mode"] is True

    def test_blank_category_treated_as_missing(self, client, expense_payload, fake_ai):
        fake_ai(response='{"mainCategory": "Marketing", "subCategory": "Ads", "confidence": 0.8, "explanation": "x"}')
        body = client.post("/api/expenses", json=expense_payload(category="", subCategory="")).json()
        assert body["category"] == "Marketing"

    def test_missing_category_without_ai_is_other(self, client, expense_payload, fake_ai):
        fake_ai(available=False)
        body = client.post("/api/expenses", json=expense_payload(category=None, subCategory=None)).json()
        assert body["category"] == "Other"
        assert body["subCategory"] == "General"


class TestCategorizeEndpoint:

    def test_returns_ai_suggestion(self, client, fake_ai):
        fake_ai(response='```json\n{"mainCategory": "office supplies", "subCategory": "Paper", '
                         '"confidence": 0.7, "explanation": "Printer paper."}\n```')
        resp = client.post("/api/expenses/categorize", json={"description": "Printer paper"})
        assert resp.status_code == 200
        assert resp.json() == {
            "mainCategory": "Office Supplies",
            "subCategory": "Paper",
            "confidence": 0.7,
            "explanation": "Printer paper.",
        }

    def test_api_failure_yields_other_with_zero_confidence(self, client, fake_ai):
        fake_ai(response=None)
        body = client.post("/api/expenses/categorize", json={"description": "Team lunch"}).json()
        assert body["mainCategory"] == "Other"
        assert body["confidence"] == 0

    def test_malformed_output_yields_other(self, client, fake_ai):
        fake_ai(response="Travel, probably")
        body = client.post("/api/expenses/categorize", json={"description": "Uber ride"}).json()
        assert body["mainCategory"] == "Other"
        assert body["confidence"] == 0

    def test_out_of_range_confidence_yields_other(self, client, fake_ai):
        fake_ai(response='{"mainCategory": "Travel", "subCategory": "Taxi", "confidence": 7, "explanation": "x"}')
        body = client.post("/api/expenses/categorize", json={"description": "Uber ride"}).json()
        assert body["mainCategory"] == "Other"
        assert body["confidence"] == 0

    def test_unknown_category_maps_to_other(self, client, fake_ai):
        fake_ai(response='{"mainCategory": "Food", "subCategory": "Lunch", "confidence": 0.6, "explanation": "Meal."}')
        body = client.post("/api/expenses/categorize", json={"description": "Team lunch"}).json()
        assert body["mainCategory"] == "Other"
        assert body["subCategory"] == "Lunch"

    def test_blank_description_rejected(self, client):
        resp = client.post("/api/expenses/categorize", json={"description": "   "})
        assert resp.status_code == 400
