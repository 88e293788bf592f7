from conftest import PASSWORD


def test_settings_upsert(client, login):
    login("OWNER")

    r = client.post("/api/v1/settings", json={
        "siteName": "Acme",
        "notificationEmail": "team@example.com",
        "social": {"linkedin": "https://linkedin.com/company/acme"},
    })
    assert r.status_code == 200
    assert r.json["data"]["siteName"] == {"value": "Acme"}
    assert r.json["data"]["social"] == {"linkedin": "https://linkedin.com/company/acme"}

    r = client.put("/api/v1/settings", json={"siteName": "Acme Corp"})
    assert r.status_code == 200

    r = client.get("/api/v1/settings")
    assert r.json["data"]["siteName"] == {"value": "Acme Corp"}
    assert r.json["data"]["notificationEmail"] == {"value": "team@example.com"}


def test_settings_permissions(client, login):
    login("EDITOR")
    assert client.get("/api/v1/settings").status_code == 403

    login("ADMIN")
    assert client.get("/api/v1/settings").status_code == 200
    assert client.post("/api/v1/settings", json={"siteName": "Nope"}).status_code == 403


def test_settings_reject_empty_payload(client, login):
    login("OWNER")
    assert client.post("/api/v1/settings", json={}).status_code == 400
    assert client.post("/api/v1/settings", json=["siteName"]).status_code == 400


def test_settings_are_per_tenant(client, login):
    login("OWNER")
    client.post("/api/v1/settings", json={"siteName": "Acme"})

    client.post(
        "/api/v1/auth/login",
        json={"email": "owner@example.com", "password": PASSWORD},
        headers={"X-Tenant-ID": "globex"},
    )
    r = client.get("/api/v1/settings", headers={"X-Tenant-ID": "globex"})
    assert r.status_code == 200
    assert r.json["data"] == {}
