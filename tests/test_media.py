import io
import os

from payloads import page

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _upload(client, content=PNG, filename="logo.png", mimetype="image/png", **form):
    return client.post(
        "/api/v1/media",
        data={"file": (io.BytesIO(content), filename, mimetype), **form},
        content_type="multipart/form-data",
    )


def _stored_path(app, url):
    return os.path.join(app.config["UPLOAD_FOLDER"], url[len("/uploads/"):])


def test_upload_image(client, login, app):
    user = login("AUTHOR")

    r = _upload(client, alt="Company logo")
    assert r.status_code == 201
    data = r.json["data"]
    assert data["kind"] == "image"
    assert data["alt"] == "Company logo"
    assert data["url"].startswith("/uploads/media/")
    assert data["meta"] == {"originalName": "logo.png", "size": len(PNG), "type": "image/png"}
    assert data["uploaded_by_id"] == user["id"]
    assert os.path.exists(_stored_path(app, data["url"]))

    # Uploaded files are served without a tenant context
    r = client.get(data["url"], headers={"X-Tenant-ID": "nobody"})
    assert r.status_code == 200
    assert r.data == PNG


def test_upload_rejects_bad_files(client, login, app):
    login("OWNER")

    r = client.post("/api/v1/media", data={}, content_type="multipart/form-data")
    assert r.status_code == 400
    assert r.json["error"] == "No file provided"

    r = _upload(client, content=b"MZ", filename="setup.exe", mimetype="application/x-msdownload")
    assert r.status_code == 400

    app.config["MAX_UPLOAD_SIZE"] = 10
    r = _upload(client)
    assert r.status_code == 413


def test_list_update_and_delete(client, login, app):
    login("OWNER")
    image = _upload(client).json["data"]
    video = _upload(client, content=b"\x00" * 32, filename="intro.mp4", mimetype="video/mp4").json["data"]

    r = client.get("/api/v1/media")
    assert r.json["data"]["pagination"]["total"] == 2

    r = client.get("/api/v1/media?kind=video")
    assert [m["id"] for m in r.json["data"]["items"]] == [video["id"]]

    r = client.patch(f"/api/v1/media/{image['id']}", json={"alt": "Updated"})
    assert r.status_code == 200
    assert r.json["data"]["alt"] == "Updated"

    r = client.delete(f"/api/v1/media/{image['id']}")
    assert r.status_code == 200
    assert not os.path.exists(_stored_path(app, image["url"]))
    assert client.get(f"/api/v1/media/{image['id']}").status_code == 404


def test_author_cannot_delete_media(client, login):
    login("AUTHOR")
    image = _upload(client).json["data"]

    assert client.delete(f"/api/v1/media/{image['id']}").status_code == 403


def test_deleting_cover_unlinks_blog_post(client, login):
    login("OWNER")
    cover = _upload(client).json["data"]

    r = client.post("/api/v1/blog-posts", json=page(slug="launch", title="Launch", coverId=cover["id"]))
    assert r.status_code == 201
    post = r.json["data"]
    assert post["cover_id"] == cover["id"]

    client.delete(f"/api/v1/media/{cover['id']}")

    r = client.get(f"/api/v1/blog-posts/{post['id']}")
    assert r.json["data"]["cover_id"] is None
