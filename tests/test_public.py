"""Tests for the unauthenticated content API."""
import pytest

from payloads import faq, hero, page


@pytest.fixture()
def published(client, login):
    login("OWNER")
    entries = {}
    entries["about"] = client.post("/api/v1/pages", json=page(
        status="published",
        seo={"title": "About Acme", "description": "Who we are"},
        blocks=[hero(), faq(), hero("Hidden section", visible=False)],
    )).json["data"]
    entries["draft"] = client.post("/api/v1/pages", json=page(slug="draft", title="Draft")).json["data"]
    entries["about_de"] = client.post("/api/v1/pages", json=page(
        locale="de", title="Über uns", status="published", blocks=[hero("Wir bauen Websites")],
    )).json["data"]
    for slug, category, order in (("retail", "caseStudy", 2), ("python", "technology", 1), ("bank", "caseStudy", 0)):
        client.post("/api/v1/case-studies", json={
            "slug": slug, "title": slug.title(), "category": category, "order": order, "status": "published",
        })
    client.post("/api/v1/auth/logout")
    return entries


def test_lists_published_entries_only(client, published):
    r = client.get("/api/v1/public/pages")
    assert r.status_code == 200
    assert [p["slug"] for p in r.json["data"]] == ["about"]
    assert "status" not in r.json["data"][0]
    assert "blocks" not in r.json["data"][0]


def test_locale_selects_translation(client, published):
    r = client.get("/api/v1/public/pages/about?locale=de")
    assert r.status_code == 200
    assert r.json["data"]["title"] == "Über uns"

    r = client.get("/api/v1/public/pages?locale=fr")
    assert r.json["data"] == []

    r = client.get("/api/v1/public/pages?locale=es")
    assert r.status_code == 400


def test_entry_exposes_visible_blocks(client, published):
    r = client.get("/api/v1/public/pages/about")
    assert r.status_code == 200
    data = r.json["data"]
    assert data["seo"] == {"title": "About Acme", "description": "Who we are"}
    assert [b["type"] for b in data["blocks"]] == ["hero", "faq"]
    assert "updated_by_id" not in data


def test_drafts_and_unknown_slugs_hidden(client, published):
    assert client.get("/api/v1/public/pages/draft").status_code == 404
    r = client.get("/api/v1/public/pages/missing")
    assert r.status_code == 404
    assert r.json["error"] == "Page not found"


def test_case_studies_ordered_and_filtered(client, published):
    r = client.get("/api/v1/public/case-studies")
    assert [c["slug"] for c in r.json["data"]] == ["bank", "python", "retail"]

    r = client.get("/api/v1/public/case-studies?category=technology")
    assert [c["slug"] for c in r.json["data"]] == ["python"]


def test_unknown_collection_404(client):
    assert client.get("/api/v1/public/widgets").status_code == 404
