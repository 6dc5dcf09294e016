from __future__ import annotations

import pytest

from authservice.app import create_app
from authservice.container import container
from authservice.infrastructure.db import SessionLocal
from authservice.infrastructure.db.models import RevokedToken, User

pytestmark = pytest.mark.usefixtures("reset_database")


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_signup_login_list_logout_flow() -> None:
    app = create_app()

    with app.test_client() as client:
        signup = client.post(
            "/auth/signup", json={"email": "alice@example.com", "password": "pw123"}
        )
        assert signup.status_code == 201
        first = signup.get_json()["token"]

        login = client.post("/auth/login", json={"email": "alice@example.com", "password": "pw123"})
        assert login.status_code == 200
        second = login.get_json()["token"]

        credentials = container.credential_service
        assert credentials.validate_token(first) == credentials.validate_token(second)

        listing = client.get("/auth", headers=_bearer(second))
        assert listing.status_code == 200
        assert [u["email"] for u in listing.get_json()] == ["alice@example.com"]
        assert "password_hash" not in listing.get_json()[0]

        logout = client.post("/auth/logout", headers=_bearer(second))
        assert logout.status_code == 200
        assert logout.get_json() == {"message": "Logged out successfully"}

        assert client.get("/auth", headers=_bearer(second)).status_code == 401
        assert client.post("/auth/logout", headers=_bearer(second)).status_code == 401
        assert client.get("/auth", headers=_bearer(first)).status_code == 200

    session = SessionLocal()
    try:
        assert session.query(User).count() == 1
        assert session.query(RevokedToken).count() == 1
        stored = session.query(User).one()
        assert stored.password_hash != "pw123"
    finally:
        session.close()


def test_duplicate_signup_and_bad_login() -> None:
    app = create_app()

    with app.test_client() as client:
        body = {"email": "alice@example.com", "password": "pw123"}
        assert client.post("/auth/signup", json=body).status_code == 201

        duplicate = client.post(
            "/auth/signup", json={"email": "ALICE@example.com", "password": "other"}
        )
        assert duplicate.status_code == 409

        wrong = client.post("/auth/login", json={"email": "alice@example.com", "password": "nope"})
        unknown = client.post("/auth/login", json={"email": "bob@example.com", "password": "pw123"})
        assert wrong.status_code == unknown.status_code == 401
        assert wrong.get_json() == unknown.get_json()

    session = SessionLocal()
    try:
        assert session.query(User).count() == 1
    finally:
        session.close()


def test_get_and_delete_users() -> None:
    app = create_app()

    with app.test_client() as client:
        alice = client.post("/auth/signup", json={"email": "alice@example.com", "password": "pw"})
        bob = client.post("/auth/signup", json={"email": "bob@example.com", "password": "pw"})
        token = alice.get_json()["token"]
        bob_id = container.credential_service.validate_token(bob.get_json()["token"])

        fetched = client.get(f"/auth/{bob_id}")
        assert fetched.status_code == 200
        assert fetched.get_json()["email"] == "bob@example.com"

        assert client.get("/auth/9999").status_code == 404
        assert client.delete(f"/auth/{bob_id}").status_code == 401

        deleted = client.delete(f"/auth/{bob_id}", headers=_bearer(token))
        assert deleted.status_code == 200
        assert deleted.get_json()["id"] == bob_id

        assert client.delete(f"/auth/{bob_id}", headers=_bearer(token)).status_code == 404
        assert client.get(f"/auth/{bob_id}").status_code == 404

        listing = client.get("/auth", headers=_bearer(token))
        assert [u["email"] for u in listing.get_json()] == ["alice@example.com"]


def test_out_of_range_user_id_is_not_found() -> None:
    app = create_app()
    huge = "99999999999999999999999"

    with app.test_client() as client:
        signup = client.post(
            "/auth/signup", json={"email": "alice@example.com", "password": "pw123"}
        )
        token = signup.get_json()["token"]

        assert client.get(f"/auth/{huge}").status_code == 404
        assert client.delete(f"/auth/{huge}", headers=_bearer(token)).status_code == 404
        assert client.get(f"/auth/{2**63 - 1}").status_code == 404

        listing = client.get("/auth", headers=_bearer(token))
        assert [u["email"] for u in listing.get_json()] == ["alice@example.com"]

def test_responses_carry_security_headers() -> None:
    app = create_app()

    with app.test_client() as client:
        response = client.get("/auth/1", headers={"X-Request-ID": "req-42"})

    assert response.status_code == 404
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Request-ID"] == "req-42"
