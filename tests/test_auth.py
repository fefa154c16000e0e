from conftest import make_user
from quickcourt.core.security import create_refresh_token


def test_login_and_me(client, db):
    make_user(db, "owner", email="owner@quickcourt.local", password="pw-123456")

    r = client.post("/api/v1/auth/login", json={"email": "Owner@QuickCourt.local", "password": "pw-123456"})
    assert r.status_code == 200
    token = r.json()["access_token"]

    r = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json()["email"] == "owner@quickcourt.local"
    assert r.json()["role"] == "owner"


def test_bad_password(client, db):
    make_user(db, "owner", email="owner@quickcourt.local", password="pw-123456")
    r = client.post("/api/v1/auth/login", json={"email": "owner@quickcourt.local", "password": "nope"})
    assert r.status_code == 401


def test_refresh_token_is_not_an_access_token(client, db):
    user = make_user(db, "owner")
    r = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {create_refresh_token(user.id)}"})
    assert r.status_code == 401


def test_deactivated_user_rejected(client, db):
    user = make_user(db, "owner", email="gone@quickcourt.local", password="pw-123456")
    token = client.post("/api/v1/auth/login", json={"email": "gone@quickcourt.local", "password": "pw-123456"}).json()["access_token"]
    user.is_active = False
    db.commit()
    r = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
