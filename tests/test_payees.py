PAYEE_BODY = {
    "entity_name": "Acme",
    "service_name": "Hosting",
    "payee_name": "Carl",
    "phone": "777",
    "email": "carl@example.com",
    "amount": 40,
    "category": "Expense",
}


def test_create_payee_resolves_entity_and_service(client, store, acme, auth_headers) -> None:
    res = client.post("/Payees", json=PAYEE_BODY, headers=auth_headers(7))
    assert res.status_code == 201

    data = res.json()["data"]
    assert data["entity_id"] == acme["entity"]["id"]
    assert data["service_id"] == acme["service"]["id"]
    assert data["category"] == "expense"
    assert store.tables["payees"][data["id"]]["payee_name"] == "Carl"


def test_create_payee_unknown_service_returns_404(client, store, acme, auth_headers) -> None:
    res = client.post("/Payees", json={**PAYEE_BODY, "service_name": "Nope"}, headers=auth_headers(7))
    assert res.status_code == 404
    assert "Service" in res.json()["message"]
    assert len(store.tables["payees"]) == 1


def test_create_payee_rejects_bad_category(client, store, acme, auth_headers) -> None:
    res = client.post("/Payees", json={**PAYEE_BODY, "category": "gift"}, headers=auth_headers(7))
    assert res.status_code == 400


def test_create_payee_missing_fields_returns_400(client, store, acme, auth_headers) -> None:
    res = client.post("/Payees", json={"payee_name": "Carl"}, headers=auth_headers(7))
    assert res.status_code == 400
    assert len(store.tables["payees"]) == 1


def test_update_payee_partial(client, store, acme, auth_headers) -> None:
    payee_id = acme["payee"]["id"]
    res = client.put("/Payees", json={"id": payee_id, "phone": "999"}, headers=auth_headers(7))
    assert res.status_code == 200

    row = store.tables["payees"][payee_id]
    assert row["phone"] == "999"
    assert row["payee_name"] == "Ann"
    assert row["entity_id"] == acme["entity"]["id"]
    assert row["service_id"] == acme["service"]["id"]


def test_update_payee_of_another_user_returns_404(client, store, acme, auth_headers) -> None:
    res = client.put("/Payees", json={"id": acme["payee"]["id"], "phone": "0"}, headers=auth_headers(8))
    assert res.status_code == 404
    assert store.tables["payees"][acme["payee"]["id"]]["phone"] == "555"


def test_update_payee_requires_id(client, store, acme, auth_headers) -> None:
    res = client.put("/Payees", json={"phone": "0"}, headers=auth_headers(7))
    assert res.status_code == 400


def test_delete_payee_removes_its_subscriptions(client, store, acme, auth_headers) -> None:
    res = client.request("DELETE", "/Payees", json={"id": acme["payee"]["id"]}, headers=auth_headers(7))
    assert res.status_code == 200
    assert store.tables["payees"] == {}
    assert store.tables["subscriptions"] == {}
    assert acme["service"]["id"] in store.tables["services"]
