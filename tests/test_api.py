"""HTTP API: tests through FastAPI's TestClient."""

from concurrent.futures import ThreadPoolExecutor

from tests.conftest import login


def test_list_items_returns_seeded_catalog(client):
    response = client.get("/api/v1/items/")
    assert response.status_code == 200
    body = response.json()
    assert [item["item_id"] for item in body] == ["B001", "B002", "B003", "B004", "B005"]
    assert all(item["available"] for item in body)


def test_search_items_by_title(client):
    response = client.get("/api/v1/items/", params={"q": "tiger"})
    assert response.status_code == 200
    assert [item["title"] for item in response.json()] == ["The White Tiger"]


def test_get_unknown_item_is_404(client):
    response = client.get("/api/v1/items/B999")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ITEM_NOT_FOUND"


def test_login_with_wrong_secret_is_401(client):
    response = client.post("/api/v1/principals/login", json={"principal_id": "A001", "secret": "wrong"})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"


def test_login_returns_token_and_principal(client):
    response = client.post("/api/v1/principals/login", json={"principal_id": "A001", "secret": "admin123"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["principal"] == {"principal_id": "A001", "name": "Admin User", "role": "ADMIN"}


def test_me_resolves_principal_from_token(client, admin_headers):
    response = client.get("/api/v1/principals/me", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["principal_id"] == "A001"


def test_register_then_duplicate_is_409(client):
    payload = {"principal_id": "S002", "name": "Jane Roe", "secret": "pw"}
    first = client.post("/api/v1/principals/", json=payload)
    assert first.status_code == 201
    assert first.json() == {"principal_id": "S002", "name": "Jane Roe", "role": "STUDENT"}
    assert "secret" not in first.json()

    second = client.post("/api/v1/principals/", json=payload)
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "DUPLICATE_IDENTIFIER"


def test_registered_principal_can_log_in(client):
    client.post("/api/v1/principals/", json={"principal_id": "S002", "name": "Jane Roe", "secret": "pw"})
    headers = login(client, "S002", "pw")
    assert client.get("/api/v1/principals/me", headers=headers).json()["name"] == "Jane Roe"


def test_issue_requires_token(client):
    response = client.post("/api/v1/loans/issue", json={"item_id": "B001"})
    assert response.status_code == 401


def test_issue_with_bad_token_is_401(client):
    response = client.post(
        "/api/v1/loans/issue",
        json={"item_id": "B001"},
        headers={"Authorization": "Bearer nonsense"},
    )
    assert response.status_code == 401


def test_issue_and_return_flow(client, student_headers, admin_headers):
    issued = client.post("/api/v1/loans/issue", json={"item_id": "B001"}, headers=student_headers)
    assert issued.status_code == 201
    body = issued.json()
    assert body["item_id"] == "B001"
    assert body["principal_id"] == "S001"
    assert body["transaction_id"]

    again = client.post("/api/v1/loans/issue", json={"item_id": "B001"}, headers=admin_headers)
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ITEM_UNAVAILABLE"

    assert client.get("/api/v1/items/B001").json()["available"] is False

    returned = client.post("/api/v1/loans/return", json={"item_id": "B001"}, headers=admin_headers)
    assert returned.status_code == 200
    assert returned.json()["status"] == "CLOSED"
    assert returned.json()["transaction_id"] == body["transaction_id"]

    reissued = client.post("/api/v1/loans/issue", json={"item_id": "B001"}, headers=admin_headers)
    assert reissued.status_code == 201


def test_issue_unknown_item_is_404(client, student_headers):
    response = client.post("/api/v1/loans/issue", json={"item_id": "B999"}, headers=student_headers)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ITEM_NOT_FOUND"


def test_return_without_loan_is_409(client, student_headers):
    response = client.post("/api/v1/loans/return", json={"item_id": "B003"}, headers=student_headers)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "NO_ACTIVE_TRANSACTION"


def test_list_transactions_with_filters(client, student_headers, admin_headers):
    client.post("/api/v1/loans/issue", json={"item_id": "B001"}, headers=student_headers)
    client.post("/api/v1/loans/issue", json={"item_id": "B002"}, headers=admin_headers)
    client.post("/api/v1/loans/return", json={"item_id": "B001"}, headers=admin_headers)

    everything = client.get("/api/v1/loans/", headers=admin_headers).json()
    assert [t["item_id"] for t in everything] == ["B001", "B002"]

    open_loans = client.get("/api/v1/loans/", params={"status": "OPEN"}, headers=admin_headers).json()
    assert [t["item_id"] for t in open_loans] == ["B002"]

    mine = client.get("/api/v1/loans/", params={"principal_id": "S001"}, headers=admin_headers).json()
    assert [t["status"] for t in mine] == ["CLOSED"]
    assert mine[0]["issue_date"] == "2024-03-01"


def test_add_and_remove_item(client, admin_headers):
    payload = {"item_id": "B006", "title": "The Guide", "author": "R.K. Narayan", "category": "Fiction"}
    assert client.post("/api/v1/items/", json=payload).status_code == 401

    created = client.post("/api/v1/items/", json=payload, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["available"] is True

    duplicate = client.post("/api/v1/items/", json=payload, headers=admin_headers)
    assert duplicate.status_code == 409

    removed = client.delete("/api/v1/items/B006", headers=admin_headers)
    assert removed.json() == {"item_id": "B006", "removed": True}
    again = client.delete("/api/v1/items/B006", headers=admin_headers)
    assert again.json() == {"item_id": "B006", "removed": False}


def test_token_for_unregistered_principal_is_rejected(client):
    from lending_registry_api.app.core.security import create_access_token

    headers = {"Authorization": f"Bearer {create_access_token({'sub': 'GHOST'})}"}
    assert client.get("/api/v1/principals/me", headers=headers).status_code == 401


def test_cors_preflight_is_permissive(client):
    response = client.options(
        "/api/v1/loans/issue",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_cors_header_on_simple_request(client):
    response = client.get("/api/v1/items/", headers={"Origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_concurrent_requests_issue_item_once(client, student_headers):
    def attempt(_):
        return client.post("/api/v1/loans/issue", json={"item_id": "B004"}, headers=student_headers).status_code

    with ThreadPoolExecutor(max_workers=8) as pool:
        codes = list(pool.map(attempt, range(8)))

    assert codes.count(201) == 1
    assert codes.count(409) == 7


def test_console_and_api_share_the_store(store, client, student_headers):
    session = store.open_session()
    session.login("A001", "admin123")
    store.issue(session.current.principal_id, "B005")

    response = client.post("/api/v1/loans/issue", json={"item_id": "B005"}, headers=student_headers)
    assert response.status_code == 409
    assert client.get("/api/v1/items/B005").json()["available"] is False


def test_readding_item_on_loan_does_not_allow_second_loan(client, student_headers, admin_headers):
    first = client.post("/api/v1/loans/issue", json={"item_id": "B002"}, headers=student_headers)
    assert first.status_code == 201

    removed = client.delete("/api/v1/items/B002", headers=admin_headers)
    assert removed.json()["removed"] is True

    payload = {"item_id": "B002", "title": "The White Tiger", "author": "Aravind Adiga", "category": "Fiction"}
    readded = client.post("/api/v1/items/", json=payload, headers=admin_headers)
    assert readded.status_code == 201
    assert readded.json()["available"] is False

    second = client.post("/api/v1/loans/issue", json={"item_id": "B002"}, headers=admin_headers)
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "ITEM_UNAVAILABLE"

    open_loans = client.get("/api/v1/loans/", params={"status": "OPEN"}, headers=admin_headers).json()
    assert [t["transaction_id"] for t in open_loans] == [first.json()["transaction_id"]]

    returned = client.post("/api/v1/loans/return", json={"item_id": "B002"}, headers=admin_headers)
    assert returned.json()["transaction_id"] == first.json()["transaction_id"]
    assert client.get("/api/v1/items/B002").json()["available"] is True


def test_added_item_is_available_regardless_of_payload(client, admin_headers):
    payload = {"item_id": "B009", "title": "The Guide", "author": "R.K. Narayan", "available": False}
    created = client.post("/api/v1/items/", json=payload, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["available"] is True
