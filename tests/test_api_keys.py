"""Tests for API key management and key authentication."""
import pytest

from codex_cms.extensions import db
from codex_cms.models import ApiKey, Tenant

from payloads import page


@pytest.fixture()
def make_key(client, login):
    def _make(role="OWNER", **payload):
        login(role)
        r = client.post("/api/v1/settings/api-keys", json={"name": "CI", **payload})
        assert r.status_code == 201, r.json
        return r.json["data"]
    return _make


def _bearer(key):
    return {"Authorization": f"Bearer {key}"}


def test_create_returns_key_once(client, make_key, app):
    created = make_key(permissions="write")
    assert created["key"].startswith("codex_")
    assert created["permissions"] == "write"

    r = client.get("/api/v1/settings/api-keys")
    listed = r.json["data"]
    assert len(listed) == 1
    assert listed[0]["key"] != created["key"]
    assert "..." in listed[0]["key"]
    assert listed[0]["key"].endswith(created["key"][-4:])

    with app.app_context():
        stored = ApiKey.query.one()
        assert stored.key_hash != created["key"]
        assert created["key"] not in (stored.prefix, stored.last_four)


def test_read_key_can_only_read(app, make_key):
    raw = make_key(permissions="read")["key"]
    anonymous = app.test_client()

    r = anonymous.get("/api/v1/pages", headers=_bearer(raw))
    assert r.status_code == 200

    r = anonymous.post("/api/v1/pages", json=page(), headers=_bearer(raw))
    assert r.status_code == 403


def test_write_key_creates_content(app, make_key):
    raw = make_key(permissions="write")["key"]
    anonymous = app.test_client()

    r = anonymous.post("/api/v1/pages", json=page(), headers={"X-API-Key": raw})
    assert r.status_code == 201

    r = anonymous.get("/api/v1/auth/me", headers={"X-API-Key": raw})
    assert r.json["data"]["auth"] == "api_key"
    assert "content.delete" not in r.json["data"]["permissions"]


def test_key_scope_cannot_exceed_role(client, login):
    login("EDITOR")
    r = client.post("/api/v1/settings/api-keys", json={"name": "Too much", "permissions": "admin"})
    assert r.status_code == 403


def test_key_never_exceeds_owner_role(app, make_key):
    raw = make_key(role="EDITOR", permissions="write")["key"]
    anonymous = app.test_client()

    # write scope includes content.edit but the EDITOR role never gets users.view
    r = anonymous.get("/api/v1/users", headers=_bearer(raw))
    assert r.status_code == 403


def test_key_usage_is_recorded(client, app, make_key):
    raw = make_key()["key"]
    app.test_client().get("/api/v1/pages", headers=_bearer(raw))

    r = client.get("/api/v1/settings/api-keys")
    assert r.json["data"][0]["last_used_at"] is not None


def test_invalid_and_expired_keys(app, make_key):
    anonymous = app.test_client()

    r = anonymous.get("/api/v1/pages", headers=_bearer("codex_not-a-real-key"))
    assert r.status_code == 401
    assert r.json["error"] == "Invalid API key"

    raw = make_key(expiresAt="2020-01-01T00:00:00Z")["key"]
    r = anonymous.get("/api/v1/pages", headers=_bearer(raw))
    assert r.status_code == 401
    assert r.json["error"] == "API key has expired"


def test_key_from_other_tenant_rejected(app, make_key):
    raw = make_key()["key"]
    r = app.test_client().get("/api/v1/pages", headers={**_bearer(raw), "X-Tenant-ID": "globex"})
    assert r.status_code == 401


def test_keys_cannot_manage_keys(app, make_key):
    raw = make_key()["key"]
    r = app.test_client().get("/api/v1/settings/api-keys", headers=_bearer(raw))
    assert r.status_code == 403


def test_api_access_feature_flag(app, make_key, tenant_id):
    raw = make_key()["key"]
    with app.app_context():
        tenant = db.session.get(Tenant, tenant_id)
        tenant.features = {"api_access": False}
        db.session.commit()

    r = app.test_client().get("/api/v1/pages", headers=_bearer(raw))
    assert r.status_code == 403


def test_delete_key(client, make_key):
    created = make_key()

    assert client.delete("/api/v1/settings/api-keys/unknown").status_code == 404
    assert client.delete(f"/api/v1/settings/api-keys/{created['id']}").status_code == 200
    assert client.get("/api/v1/settings/api-keys").json["data"] == []

    r = client.application.test_client().get("/api/v1/pages", headers=_bearer(created["key"]))
    assert r.status_code == 401
