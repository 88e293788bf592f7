from datetime import datetime

from codex_cms.application.analytics.dashboard import change_percent, period_bounds, referrer_source
from codex_cms.extensions import db
from codex_cms.models import Tenant

from payloads import page


def test_period_bounds():
    now = datetime(2026, 3, 15, 12, 30)

    assert period_bounds("7d", now) == (datetime(2026, 3, 8, 12, 30), datetime(2026, 3, 1, 12, 30))
    assert period_bounds("month", now) == (datetime(2026, 3, 1), datetime(2026, 2, 1))


def test_change_percent():
    assert change_percent(0, 0) == 0.0
    assert change_percent(3, 0) == 100.0
    assert change_percent(3, 2) == 50.0
    assert change_percent(1, 4) == -75.0


def test_referrer_source():
    assert referrer_source({}) == "Direct"
    assert referrer_source({"referrer": "https://www.Google.com/search"}) == "Google"
    assert referrer_source({"referrer": "https://news.ycombinator.com"}) == "Other"


def test_dashboard(client, login):
    client.post(
        "/api/v1/public/contact",
        json={"name": "Jane Doe", "email": "jane@example.com", "message": "We need a new website soon.", "formType": "contact"},
        headers={"Referer": "https://www.linkedin.com/feed"},
    )

    login("OWNER")
    client.post("/api/v1/pages", json=page(status="published"))
    client.post("/api/v1/pages", json=page(slug="draft", title="Draft"))

    r = client.get("/api/v1/analytics/dashboard?timeframe=7d")
    assert r.status_code == 200
    data = r.json["data"]
    assert data["timeframe"] == "7d"
    assert data["submissions"] == {"current": 1, "previous": 0, "change_percent": 100.0}
    assert data["published"]["pages"] == 1
    assert data["published"]["services"] == 0
    assert data["active_users"] == 4
    assert data["submissions_by_status"] == [{"status": "unread", "count": 1}]
    assert data["top_referrers"] == [{"referrer": "LinkedIn", "count": 1}]
    assert len(data["recent_submissions"]) == 1


def test_dashboard_rejects_unknown_timeframe(client, login):
    login("OWNER")
    r = client.get("/api/v1/analytics/dashboard?timeframe=1y")
    assert r.status_code == 400


def test_dashboard_feature_flag(client, login, app, tenant_id):
    with app.app_context():
        db.session.get(Tenant, tenant_id).features = {"analytics": False}
        db.session.commit()

    login("OWNER")
    assert client.get("/api/v1/analytics/dashboard").status_code == 403
