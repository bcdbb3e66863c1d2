"""Dashboard summary, template catalogue and health check."""
from decimal import Decimal


def test_dashboard_totals(client, invoice_payload, user_id):
    client.post("/api/invoices", json=invoice_payload(invoiceNumber="P1", status="paid", lineItems=[
        {"description": "Logo", "quantity": 1, "unitPrice": 100},
    ]))
    client.post("/api/invoices", json=invoice_payload(invoiceNumber="O1", lineItems=[
        {"description": "Website", "quantity": 2, "unitPrice": 25},
    ]))
    for description, amount, category in [("Flight", 30, "Travel"), ("IDE licence", 20, "Software")]:
        client.post("/api/expenses", json={
            "userId": user_id, "description": description, "amount": amount,
            "category": category, "date": "2024-02-01",
        })

    body = client.get(f"/api/dashboard/{user_id}").json()
    assert body["invoiceCount"] == 2
    assert Decimal(body["totalInvoiced"]) == Decimal("150")
    assert Decimal(body["totalPaid"]) == Decimal("100")
    assert Decimal(body["totalOutstanding"]) == Decimal("50")
    assert body["overdueCount"] == 0
    assert body["expenseCount"] == 2
    assert Decimal(body["totalExpenses"]) == Decimal("50")
    assert {k: Decimal(v) for k, v in body["expensesByCategory"].items()} == {
        "Software": Decimal("20"), "Travel": Decimal("30"),
    }
    assert Decimal(body["netIncome"]) == Decimal("50")


def test_dashboard_for_user_without_data(client):
    body = client.get("/api/dashboard/987").json()
    assert body["invoiceCount"] == 0
    assert Decimal(body["totalInvoiced"]) == 0
    assert body["expensesByCategory"] == {}


def test_templates_catalogue(client):
    body = client.get("/api/templates").json()
    assert [t["id"] for t in body] == ["modern", "professional", "creative"]
    assert body[0] == {"id": "modern", "name": "Modern", "description": "Clean and minimalist design"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_route_uses_message_shape(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "message" in resp.json()
