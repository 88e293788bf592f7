from conftest import PASSWORD


def _user_id(client, email):
    users = client.get("/api/v1/users").json["data"]
    return next(u["id"] for u in users if u["email"] == email)


def test_list_users_requires_admin(client, login):
    login("EDITOR")
    assert client.get("/api/v1/users").status_code == 403

    login("ADMIN")
    r = client.get("/api/v1/users")
    assert r.status_code == 200
    assert {u["role"] for u in r.json["data"]} == {"OWNER", "ADMIN", "EDITOR", "AUTHOR"}
    assert all("password_hash" not in u for u in r.json["data"])


def test_create_user(client, login):
    login("ADMIN")
    r = client.post("/api/v1/users", json={
        "email": "New.Writer@Example.com",
        "name": "New writer",
        "password": "long-enough-password",
        "role": "AUTHOR",
    })
    assert r.status_code == 201
    assert r.json["data"]["email"] == "new.writer@example.com"

    r = client.post("/api/v1/auth/login", json={"email": "new.writer@example.com", "password": "long-enough-password"})
    assert r.status_code == 200
    assert r.json["data"]["role"] == "AUTHOR"


def test_create_user_validation(client, login):
    login("OWNER")

    r = client.post("/api/v1/users", json={"email": "editor@example.com", "name": "Dup", "password": PASSWORD})
    assert r.status_code == 409

    r = client.post("/api/v1/users", json={"email": "short@example.com", "name": "Short", "password": "short"})
    assert r.status_code == 400

    r = client.post("/api/v1/users", json={"email": "x@example.com", "name": "X", "password": PASSWORD, "role": "ROOT"})
    assert r.status_code == 400


def test_only_owners_create_owners(client, login):
    payload = {"email": "boss@example.com", "name": "Boss", "password": PASSWORD, "role": "OWNER"}

    login("ADMIN")
    assert client.post("/api/v1/users", json=payload).status_code == 403

    login("OWNER")
    assert client.post("/api/v1/users", json=payload).status_code == 201


def test_update_user(client, login):
    login("ADMIN")
    editor_id = _user_id(client, "editor@example.com")

    r = client.patch(f"/api/v1/users/{editor_id}", json={"role": "AUTHOR", "name": "Demoted"})
    assert r.status_code == 200
    assert r.json["data"]["role"] == "AUTHOR"
    assert r.json["data"]["name"] == "Demoted"

    owner_id = _user_id(client, "owner@example.com")
    assert client.patch(f"/api/v1/users/{owner_id}", json={"name": "Nope"}).status_code == 403


def test_cannot_deactivate_or_delete_self(client, login):
    me = login("OWNER")

    r = client.patch(f"/api/v1/users/{me['id']}", json={"isActive": False})
    assert r.status_code == 400

    r = client.delete(f"/api/v1/users/{me['id']}")
    assert r.status_code == 400


def test_deactivated_user_loses_session(client, app, login):
    author = login("AUTHOR")
    assert client.get("/api/v1/auth/me").status_code == 200

    admin = app.test_client()
    admin.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
    assert admin.patch(f"/api/v1/users/{author['id']}", json={"isActive": False}).status_code == 200

    assert client.get("/api/v1/auth/me").status_code == 403


def test_delete_user_owner_only(client, login):
    login("ADMIN")
    author_id = _user_id(client, "author@example.com")
    assert client.delete(f"/api/v1/users/{author_id}").status_code == 403

    login("OWNER")
    assert client.delete(f"/api/v1/users/{author_id}").status_code == 200
    assert client.get(f"/api/v1/users/{author_id}").status_code == 404


def test_deleting_author_keeps_their_posts(client, login):
    author = login("AUTHOR")
    post = client.post("/api/v1/blog-posts", json={"slug": "notes", "title": "Notes"}).json["data"]
    assert post["author_id"] == author["id"]

    login("OWNER")
    assert client.delete(f"/api/v1/users/{author['id']}").status_code == 200

    r = client.get(f"/api/v1/blog-posts/{post['id']}")
    assert r.status_code == 200
    assert r.json["data"]["author_id"] is None
    assert r.json["data"]["updated_by_id"] is None
