"""Tests for the publishing workflow and scheduled publishing."""
from codex_cms.application.cms.publish_scheduled import publish_due

from payloads import hero, page


def _create_page(client, **extra):
    r = client.post("/api/v1/pages", json=page(blocks=[hero()], **extra))
    assert r.status_code == 201, r.json
    return r.json["data"]


def _set_status(client, entry_id, status, **extra):
    return client.post(f"/api/v1/pages/{entry_id}/status", json={"status": status, **extra})


def test_author_cannot_publish_on_create(client, login):
    login("AUTHOR")
    r = client.post("/api/v1/pages", json=page(status="published"))
    assert r.status_code == 403
    assert "content.publish" in r.json["error"]


def test_author_creates_drafts_but_cannot_edit(client, login):
    login("AUTHOR")
    entry = _create_page(client)

    r = client.patch(f"/api/v1/pages/{entry['id']}", json={"title": "Edited"})
    assert r.status_code == 403
    assert r.json["error"] == "Insufficient permissions"


def test_editor_submits_for_review_admin_publishes(client, login):
    login("EDITOR")
    entry = _create_page(client)

    r = _set_status(client, entry["id"], "inReview")
    assert r.status_code == 200
    assert r.json["data"]["status"] == "inReview"

    r = _set_status(client, entry["id"], "published")
    assert r.status_code == 403

    login("ADMIN")
    r = _set_status(client, entry["id"], "published")
    assert r.status_code == 200
    assert r.json["data"]["status"] == "published"
    assert r.json["data"]["published_at"] is not None


def test_unpublishing_clears_published_at(client, login):
    login("OWNER")
    entry = _create_page(client, status="published")

    r = _set_status(client, entry["id"], "draft")
    assert r.status_code == 200
    assert r.json["data"]["published_at"] is None


def test_illegal_transition_rejected(client, login):
    login("OWNER")
    entry = _create_page(client, status="published")

    r = _set_status(client, entry["id"], "scheduled", scheduledAt="2030-01-01T09:00:00Z")
    assert r.status_code == 400
    assert "Illegal status transition" in r.json["error"]


def test_scheduling_requires_a_time(client, login):
    login("OWNER")
    entry = _create_page(client)

    r = _set_status(client, entry["id"], "scheduled")
    assert r.status_code == 400
    assert r.json["error"] == "Scheduled content requires scheduled_at."

    r = _set_status(client, entry["id"], "scheduled", scheduledAt="2030-01-01T09:00:00+02:00")
    assert r.status_code == 200
    assert r.json["data"]["scheduled_at"].startswith("2030-01-01T07:00:00")


def test_editor_cannot_change_status_through_update(client, login):
    login("EDITOR")
    entry = _create_page(client)

    r = client.patch(f"/api/v1/pages/{entry['id']}", json={"status": "published"})
    assert r.status_code == 403


def test_publish_due_publishes_past_schedules(client, login, app, tenant_id):
    login("OWNER")
    due = _create_page(client, slug="launch", status="scheduled", scheduledAt="2020-01-01T00:00:00Z")
    later = _create_page(client, slug="later", status="scheduled", scheduledAt="2999-01-01T00:00:00Z")

    assert client.get("/api/v1/public/pages/launch").status_code == 404

    with app.app_context():
        published = publish_due(tenant_id=tenant_id)

    assert published["page"] == 1
    assert published["service"] == 0

    r = client.get(f"/api/v1/pages/{due['id']}")
    assert r.json["data"]["status"] == "published"
    assert r.json["data"]["published_at"].startswith("2020-01-01T00:00:00")

    r = client.get(f"/api/v1/pages/{later['id']}")
    assert r.json["data"]["status"] == "scheduled"

    assert client.get("/api/v1/public/pages/launch").status_code == 200
