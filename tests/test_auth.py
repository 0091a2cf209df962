"""
Tests for registration, login, logout and session handling.
"""

from datetime import timedelta

from goalpath.auth.hashing import hash_password, verify_password
from goalpath.auth.sessions import SESSION_COOKIE_NAME, hash_token
from goalpath.db.models.session_token import SessionToken
from goalpath.utils import utcnow


def credentials(email="ada@example.com", password="correct-horse"):
    return {"email": email, "password": password}


class TestHashing:
    def test_round_trip(self):
        hashed = hash_password("correct-horse")
        assert hashed != "correct-horse"
        assert verify_password("correct-horse", hashed)
        assert not verify_password("wrong-horse", hashed)

    def test_only_first_72_bytes_count(self):
        hashed = hash_password("x" * 72 + "tail")
        assert verify_password("x" * 72 + "other", hashed)


class TestRegisterAndLogin:
    def test_register_normalises_email(self, client):
        r = client.post("/auth/register", json=credentials(email="Ada@Example.com"))
        assert r.status_code == 201
        body = r.json()
        assert body["email"] == "ada@example.com"
        assert body["is_active"] is True
        assert "password_hash" not in body

    def test_duplicate_email(self, client):
        client.post("/auth/register", json=credentials())
        r = client.post("/auth/register", json=credentials(email="ADA@example.com"))
        assert r.status_code == 409
        assert r.json() == {"error": "Email already registered"}

    def test_short_password_is_rejected(self, client):
        r = client.post("/auth/register", json=credentials(password="short"))
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid request data"

    def test_login_sets_cookie_and_returns_token(self, client):
        client.post("/auth/register", json=credentials())
        r = client.post("/auth/login", json=credentials())
        assert r.status_code == 200
        body = r.json()
        assert body["token_type"] == "bearer"
        assert r.cookies.get(SESSION_COOKIE_NAME) == body["access_token"]

    def test_login_wrong_password(self, client):
        client.post("/auth/register", json=credentials())
        r = client.post("/auth/login", json=credentials(password="not-the-password"))
        assert r.status_code == 401
        assert r.json() == {"error": "Invalid email or password"}

    def test_login_unknown_user(self, client):
        r = client.post("/auth/login", json=credentials(email="nobody@example.com"))
        assert r.status_code == 401


class TestSessions:
    def login(self, client):
        client.post("/auth/register", json=credentials())
        return client.post("/auth/login", json=credentials()).json()["access_token"]

    def test_me_with_bearer_token(self, client):
        token = self.login(client)
        client.cookies.clear()
        r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 200
        assert r.json()["email"] == "ada@example.com"

    def test_me_with_cookie(self, client):
        self.login(client)
        r = client.get("/auth/me")
        assert r.status_code == 200

    def test_me_without_session(self, client):
        r = client.get("/auth/me")
        assert r.status_code == 401
        assert r.json() == {"error": "Unauthorized"}

    def test_unknown_token(self, client):
        r = client.get("/auth/me", headers={"Authorization": "Bearer not-a-real-token"})
        assert r.status_code == 401

    def test_logout_revokes_token(self, client, db):
        token = self.login(client)
        client.cookies.clear()
        headers = {"Authorization": f"Bearer {token}"}

        r = client.post("/auth/logout", headers=headers)
        assert r.status_code == 204

        assert client.get("/auth/me", headers=headers).status_code == 401
        row = db.query(SessionToken).filter(SessionToken.token_hash == hash_token(token)).one()
        assert row.revoked_at is not None

    def test_logout_without_session_is_harmless(self, client):
        assert client.post("/auth/logout").status_code == 204

    def test_idle_session_expires_and_is_revoked(self, client, db):
        token = self.login(client)
        client.cookies.clear()
        headers = {"Authorization": f"Bearer {token}"}

        row = db.query(SessionToken).filter(SessionToken.token_hash == hash_token(token)).one()
        row.last_seen_at = utcnow() - timedelta(hours=3)
        db.commit()

        r = client.get("/auth/me", headers=headers)
        assert r.status_code == 401
        assert r.json() == {"error": "Session expired"}

        db.expire_all()
        row = db.query(SessionToken).filter(SessionToken.token_hash == hash_token(token)).one()
        assert row.revoked_at is not None

    def test_absolute_expiry(self, client, db):
        token = self.login(client)
        client.cookies.clear()

        row = db.query(SessionToken).filter(SessionToken.token_hash == hash_token(token)).one()
        row.expires_at = utcnow() - timedelta(minutes=1)
        db.commit()

        r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert r.json() == {"error": "Session expired"}

    def test_activity_refreshes_last_seen(self, client, db):
        token = self.login(client)
        client.cookies.clear()

        row = db.query(SessionToken).filter(SessionToken.token_hash == hash_token(token)).one()
        stale = utcnow() - timedelta(minutes=30)
        row.last_seen_at = stale
        db.commit()

        assert client.get("/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 200
        db.expire_all()
        row = db.query(SessionToken).filter(SessionToken.token_hash == hash_token(token)).one()
        assert row.last_seen_at.replace(tzinfo=None) > stale.replace(tzinfo=None)
