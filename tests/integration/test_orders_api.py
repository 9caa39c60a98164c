"""API tests for order creation and commission payouts."""

from decimal import Decimal

import pytest


def test_order_pays_three_levels(client, store, chain):
    a, b, c = chain

    response = client.post("/order", json={"amount": 100, "code": "CCC", "buyerEmail": "buyer@example.com"})

    assert response.status_code == 200
    body = response.json()
    assert body["orderId"] == 1
    assert body["amount"] == 100
    assert body["code"] == "CCC"
    assert body["buyerEmail"] == "buyer@example.com"
    assert [(p["userId"], p["level"], p["amount"]) for p in body["payouts"]] == [
        (c.id, 1, 10.0),
        (b.id, 2, 5.0),
        (a.id, 3, 2.0),
    ]
    assert [p["percent"] for p in body["payouts"]] == [0.10, 0.05, 0.02]
    assert body["totalCommission"] == 17.0


def test_order_on_root_code_pays_owner_only(client, chain):
    a, _, _ = chain

    response = client.post("/order", json={"amount": 50, "code": "AAA"})

    assert response.status_code == 200
    assert response.json()["payouts"] == [{"userId": a.id, "level": 1, "percent": 0.10, "amount": 5.0}]


def test_order_is_not_idempotent(client, store, chain):
    first = client.post("/order", json={"amount": 100, "code": "CCC"}).json()
    second = client.post("/order", json={"amount": 100, "code": "CCC"}).json()

    assert (first["orderId"], second["orderId"]) == (1, 2)
    assert len(store.list_commissions()) == 6


def test_order_accepts_decimal_amount(client, store, make_user):
    make_user("DECIMAL1")

    response = client.post("/order", json={"amount": 19.99, "code": "DECIMAL1"})

    assert response.status_code == 200
    assert response.json()["payouts"][0]["amount"] == pytest.approx(1.999)
    assert isinstance(store.list_commissions()[0].amount, Decimal)


def test_order_unknown_code_is_404(client, store):
    response = client.post("/order", json={"amount": 100, "code": "UNKNOWN1"})

    assert response.status_code == 404
    assert store.list_orders() == []


def test_order_missing_amount_is_400(client, chain):
    response = client.post("/order", json={"code": "CCC"})

    assert response.status_code == 400
    assert "amount" in response.json()["fields"]


def test_order_missing_code_is_400(client):
    response = client.post("/order", json={"amount": 100})

    assert response.status_code == 400
    assert "code" in response.json()["fields"]


def test_order_non_numeric_amount_is_400(client, chain):
    response = client.post("/order", json={"amount": "lots", "code": "CCC"})

    assert response.status_code == 400
    assert "amount" in response.json()["fields"]


def test_order_negative_amount_is_400(client, chain):
    response = client.post("/order", json={"amount": -5, "code": "CCC"})

    assert response.status_code == 400


def test_zero_amount_order_has_no_payouts(client, store, chain):
    response = client.post("/order", json={"amount": 0, "code": "CCC"})

    assert response.status_code == 200
    assert response.json()["payouts"] == []
    assert store.list_commissions() == []


def test_signed_up_chain_earns_commissions(client, signup):
    a = signup("a@example.com")
    b = signup("b@example.com", ref=a["user"]["code"])
    c = signup("c@example.com", ref=b["user"]["code"])

    response = client.post("/order", json={"amount": 100, "code": c["user"]["code"]})

    assert [p["userId"] for p in response.json()["payouts"]] == [
        c["user"]["id"],
        b["user"]["id"],
        a["user"]["id"],
    ]


def test_order_long_unknown_code_is_404(client, store):
    response = client.post("/order", json={"amount": 10, "code": "Z" * 65})

    assert response.status_code == 404
    assert store.list_orders() == []
