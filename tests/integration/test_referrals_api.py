"""API tests for click logging, stats and the current user's network."""

from urllib.parse import urlparse, parse_qs


def test_root_and_health(client, chain):
    assert client.get("/").json()["ok"] is True

    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["checks"]["store"]["users"] == 3


def test_click_is_logged(client, store, chain):
    response = client.post("/click", json={"code": "AAA"}, headers={"User-Agent": "pytest-agent"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "code": "AAA", "clicks": 1}
    assert store.count_clicks("AAA") == 1


def test_click_unknown_code_is_404(client, store):
    response = client.post("/click", json={"code": "NOPE0000"})

    assert response.status_code == 404
    assert store.count_clicks("NOPE0000") == 0


def test_click_missing_code_is_400(client):
    response = client.post("/click", json={})

    assert response.status_code == 400


def test_referral_link_redirects_and_counts(client, store, chain):
    response = client.get("/r/BBB", follow_redirects=False)

    assert response.status_code == 307
    location = urlparse(response.headers["location"])
    assert location.netloc == "shop.example.com"
    assert parse_qs(location.query) == {"ref": ["BBB"]}
    assert store.count_clicks("BBB") == 1


def test_referral_link_unknown_code_is_404(client):
    response = client.get("/r/NOPE0000", follow_redirects=False)

    assert response.status_code == 404


def test_stats_by_code(client, chain):
    client.post("/click", json={"code": "CCC"})
    client.post("/click", json={"code": "CCC"})
    client.post("/order", json={"amount": 100, "code": "CCC"})
    client.post("/order", json={"amount": 40, "code": "CCC"})

    response = client.get("/stats/CCC")

    assert response.status_code == 200
    assert response.json() == {
        "code": "CCC",
        "clicks": 2,
        "orders": 2,
        "revenue": 140.0,
        "commissions": 14.0,
    }


def test_stats_include_upline_commissions(client, chain):
    client.post("/order", json={"amount": 100, "code": "CCC"})

    body = client.get("/stats/AAA").json()

    assert body["orders"] == 0
    assert body["revenue"] == 0
    assert body["commissions"] == 2.0


def test_stats_unknown_code_is_404(client):
    assert client.get("/stats/NOPE0000").status_code == 404


def test_my_stats(client, signup, auth_headers):
    me = signup("me@example.com")
    code = me["user"]["code"]
    client.post("/click", json={"code": code})
    client.post("/order", json={"amount": 200, "code": code})

    response = client.get("/me/stats", headers=auth_headers(me["token"]))

    assert response.status_code == 200
    assert response.json() == {
        "code": code,
        "clicks": 1,
        "orders": 1,
        "revenue": 200.0,
        "commissions": 20.0,
    }


def test_my_stats_requires_token(client):
    assert client.get("/me/stats").status_code == 401


def test_my_referrals(client, signup, auth_headers):
    me = signup("me@example.com")
    signup("friend@example.com", ref=me["user"]["code"], name="Friend")
    signup("stranger@example.com")

    response = client.get("/me/referrals", headers=auth_headers(me["token"]))

    assert response.status_code == 200
    referrals = response.json()
    assert [r["name"] for r in referrals] == ["Friend"]


def test_my_commissions(client, signup, auth_headers):
    parent = signup("parent@example.com")
    child = signup("child@example.com", ref=parent["user"]["code"])
    client.post("/order", json={"amount": 100, "code": child["user"]["code"]})

    response = client.get("/me/commissions", headers=auth_headers(parent["token"]))

    assert response.status_code == 200
    commissions = response.json()
    assert len(commissions) == 1
    assert commissions[0]["level"] == 2
    assert commissions[0]["amount"] == 5.0
    assert commissions[0]["orderId"] == 1


def test_click_long_unknown_code_is_404(client):
    response = client.post("/click", json={"code": "Z" * 65})

    assert response.status_code == 404
