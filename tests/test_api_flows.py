from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app import auth
from app.dependencies import get_db
from app.main import app


@pytest.fixture
def client(db, monkeypatch):
    monkeypatch.setattr(auth, "JWT_SECRET_KEY", "test-secret")
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    def _login(email: str, name: str = "User") -> dict:
        password = "correct-horse"
        response = client.post("/api/auth/signup", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        response = client.post("/api/auth/signin", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


def _parse(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def test_health(client):
    assert client.get("/").json() == {"message": "Service is running"}


def test_requests_without_token_are_rejected(client):
    response = client.get("/api/workspaces/")

    assert response.status_code in (401, 403)


def test_duplicate_sign_up(client, login):
    login("ana@x.com")

    response = client.post(
        "/api/auth/signup", json={"name": "Again", "email": "ana@x.com", "password": "correct-horse"}
    )

    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_EMAIL"


def test_invite_accept_and_remove_flow(client, login):
    owner = login("u@x.com", "Owner")
    alice = login("a@x.com", "Alice")
    bob = login("b@x.com", "Bob")

    response = client.post("/api/workspaces/", json={"name": "Family"}, headers=owner)
    assert response.status_code == 201
    workspace = response.json()
    assert workspace["current_user_role"] == "OWNER"
    ws = workspace["id"]

    response = client.post(f"/api/workspaces/{ws}/invites", json={"email": "a@x.com", "role": "MEMBER"}, headers=owner)
    assert response.status_code == 201
    invite = response.json()
    assert invite["status"] == "PENDING"
    expected_expiry = datetime.now(timezone.utc) + timedelta(days=7)
    assert abs(_parse(invite["expires_at"]) - expected_expiry) < timedelta(minutes=1)

    pending = client.get("/api/workspaces/invites/pending", headers=alice).json()
    assert [i["id"] for i in pending] == [invite["id"]]

    response = client.post("/api/workspaces/invites/accept", json={"token": invite["token"]}, headers=alice)
    assert response.status_code == 200
    alice_member = response.json()
    assert alice_member["role"] == "MEMBER"

    response = client.post("/api/workspaces/invites/accept", json={"token": invite["token"]}, headers=alice)
    assert response.status_code == 404
    assert response.json()["error"] == "INVITE_NOT_FOUND"

    detail = client.get(f"/api/workspaces/{ws}", headers=owner).json()
    assert detail["member_count"] == 2
    assert detail["pending_invites"] == []

    # Bob joins as a plain member too
    token = client.post(
        f"/api/workspaces/{ws}/invites", json={"email": "b@x.com"}, headers=owner
    ).json()["token"]
    assert client.post("/api/workspaces/invites/accept", json={"token": token}, headers=bob).status_code == 200

    response = client.delete(f"/api/workspaces/{ws}/members/{alice_member['id']}", headers=bob)
    assert response.status_code == 403
    assert response.json()["error"] == "INSUFFICIENT_ROLE"

    response = client.delete(f"/api/workspaces/{ws}/members/{alice_member['id']}", headers=owner)
    assert response.status_code == 204

    assert client.get(f"/api/workspaces/{ws}", headers=alice).status_code == 404


def test_last_owner_cannot_leave(client, login):
    owner = login("u@x.com")
    ws = client.post("/api/workspaces/", json={"name": "Solo"}, headers=owner).json()["id"]

    response = client.delete(f"/api/workspaces/{ws}/leave", headers=owner)

    assert response.status_code == 400
    assert response.json()["error"] == "LAST_OWNER"


def test_non_member_gets_not_found_for_existing_and_missing_workspaces(client, login):
    owner = login("u@x.com")
    stranger = login("s@x.com")
    ws = client.post("/api/workspaces/", json={"name": "Private"}, headers=owner).json()["id"]

    existing = client.get(f"/api/workspaces/{ws}/accounts/", headers=stranger)
    missing = client.get("/api/workspaces/9999/accounts/", headers=stranger)

    assert existing.status_code == missing.status_code == 404
    assert existing.json() == missing.json()


def test_accounts_and_transactions_flow(client, login):
    owner = login("u@x.com")
    ws = client.post("/api/workspaces/", json={"name": "Home"}, headers=owner).json()["id"]
    other_ws = client.post("/api/workspaces/", json={"name": "Work"}, headers=owner).json()["id"]

    response = client.post(
        f"/api/workspaces/{ws}/accounts/", json={"name": "Checking", "initial_balance": "1.000,50"}, headers=owner
    )
    assert response.status_code == 201
    account = response.json()
    assert account["initial_balance_cents"] == 100050

    foreign = client.post(f"/api/workspaces/{other_ws}/accounts/", json={"name": "Corp"}, headers=owner).json()

    payload = {
        "title": "Salary",
        "amount": "2,500.00",
        "date": "2024-09-29T10:30:00Z",
        "type": "INCOME",
        "bank_account_id": account["id"],
    }
    response = client.post(f"/api/workspaces/{ws}/transactions/", json=payload, headers=owner)
    assert response.status_code == 201
    transaction = response.json()
    assert transaction["amount_cents"] == 250000
    assert transaction["bank_account"]["name"] == "Checking"

    response = client.post(
        f"/api/workspaces/{ws}/transactions/", json={**payload, "bank_account_id": foreign["id"]}, headers=owner
    )
    assert response.status_code == 404
    assert response.json()["error"] == "ACCOUNT_NOT_FOUND"

    response = client.post(f"/api/workspaces/{ws}/transactions/", json={**payload, "amount": "abc"}, headers=owner)
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_AMOUNT"

    listed = client.get(
        f"/api/workspaces/{ws}/transactions/", params={"bank_account_id": account["id"]}, headers=owner
    ).json()
    assert [t["id"] for t in listed] == [transaction["id"]]

    response = client.patch(
        f"/api/workspaces/{ws}/accounts/{account['id']}", json={"initial_balance": ""}, headers=owner
    )
    assert response.status_code == 200
    assert response.json()["initial_balance_cents"] is None

    response = client.delete(f"/api/workspaces/{ws}/accounts/{account['id']}", headers=owner)
    assert response.status_code == 204
    assert client.get(f"/api/workspaces/{ws}/transactions/{transaction['id']}", headers=owner).status_code == 404


def test_invite_token_stays_with_sender_and_recipient(client, login):
    owner = login("u@x.com")
    viewer = login("v@x.com")
    boss = login("boss@x.com")
    other = login("other@x.com")
    ws = client.post("/api/workspaces/", json={"name": "Family"}, headers=owner).json()["id"]
    viewer_token = client.post(
        f"/api/workspaces/{ws}/invites", json={"email": "v@x.com", "role": "VIEWER"}, headers=owner
    ).json()["token"]
    client.post("/api/workspaces/invites/accept", json={"token": viewer_token}, headers=viewer)

    response = client.post(f"/api/workspaces/{ws}/invites", json={"email": "boss@x.com", "role": "ADMIN"}, headers=owner)
    assert response.status_code == 201
    token = response.json()["token"]

    pending = client.get(f"/api/workspaces/{ws}", headers=viewer).json()["pending_invites"]
    assert [invite["email"] for invite in pending] == ["boss@x.com"]
    assert "token" not in pending[0]

    response = client.post("/api/workspaces/invites/accept", json={"token": token}, headers=other)
    assert response.status_code == 404
    assert response.json()["error"] == "INVITE_NOT_FOUND"
    assert client.get(f"/api/workspaces/{ws}", headers=other).status_code == 404

    assert [invite["token"] for invite in client.get("/api/workspaces/invites/pending", headers=boss).json()] == [token]
    response = client.post("/api/workspaces/invites/accept", json={"token": token}, headers=boss)
    assert response.status_code == 200
    assert response.json()["role"] == "ADMIN"
