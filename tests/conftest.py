import pytest

from codex_cms import create_app
from codex_cms.domain.constants import USER_ROLES
from codex_cms.extensions import db, limiter
from codex_cms.models import Tenant, User

PASSWORD = "correct-horse-battery"


@pytest.fixture()
def app(tmp_path):
    app = create_app("testing", {
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path/'test.db'}",
        "DEFAULT_TENANT_SLUG": "acme",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
    })

    with app.app_context():
        db.create_all()
        limiter.reset()

        acme = Tenant(name="Acme", slug="acme")
        globex = Tenant(name="Globex", slug="globex")
        db.session.add_all([acme, globex])
        db.session.flush()

        for role in USER_ROLES:
            user = User(tenant_id=acme.id, email=f"{role.lower()}@example.com", name=role.title(), role=role)
            user.set_password(PASSWORD)
            db.session.add(user)

        other = User(tenant_id=globex.id, email="owner@example.com", name="Globex owner", role="OWNER")
        other.set_password(PASSWORD)
        db.session.add(other)
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def login(client):
    """Sign ``client`` in as the acme user with the given role."""
    def _login(role="OWNER", password=PASSWORD):
        r = client.post("/api/v1/auth/login", json={
            "email": f"{role.lower()}@example.com",
            "password": password,
        })
        assert r.status_code == 200, r.json
        return r.json["data"]
    return _login


@pytest.fixture()
def tenant_id(app):
    with app.app_context():
        return Tenant.query.filter_by(slug="acme").one().id
