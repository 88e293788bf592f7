from datetime import timedelta

from codex_cms.extensions import db
from codex_cms.models import Page, Service, Tenant, User
from codex_cms.utils.time import utcnow


def test_seed_demo(app, tenant_id):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed-demo"])
    assert result.exit_code == 0, result.output
    assert "Seeded de content" in result.output

    # Re-running leaves existing content alone
    result = runner.invoke(args=["seed-demo"])
    assert result.exit_code == 0
    assert "Seeded" not in result.output

    with app.app_context():
        homes = Page.query.filter_by(tenant_id=tenant_id, slug="home").all()
        assert sorted(p.locale for p in homes) == ["de", "en", "fr"]
        assert all(p.status == "published" and len(p.blocks) == 4 for p in homes)
        assert Service.query.filter_by(tenant_id=tenant_id).count() == 3


def test_seed_demo_new_tenant(app):
    result = app.test_cli_runner().invoke(args=["seed-demo", "--tenant", "initech", "--email", "boss@initech.com"])
    assert result.exit_code == 0, result.output
    assert "Created tenant initech" in result.output
    assert "Created owner boss@initech.com" in result.output

    with app.app_context():
        tenant = Tenant.query.filter_by(slug="initech").one()
        assert User.query.filter_by(tenant_id=tenant.id).one().role == "OWNER"


def test_create_user(app, tenant_id):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-user", "New@Example.com", "--password", "secret123", "--role", "EDITOR"])
    assert result.exit_code == 0, result.output
    assert "Created EDITOR new@example.com" in result.output

    with app.app_context():
        user = User.query.filter_by(tenant_id=tenant_id, email="new@example.com").one()
        assert user.name == "New"
        assert user.check_password("secret123")

    result = runner.invoke(args=["create-user", "x@example.com", "--password", "secret123", "--role", "ROOT"])
    assert result.exit_code != 0


def test_publish_scheduled(app, tenant_id):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["publish-scheduled"])
    assert result.exit_code == 0
    assert "Published 0 entries" in result.output

    with app.app_context():
        db.session.add(Page(
            tenant_id=tenant_id, slug="launch", locale="en", title="Launch",
            status="scheduled", scheduled_at=utcnow() - timedelta(minutes=5),
        ))
        db.session.commit()

    result = runner.invoke(args=["publish-scheduled"])
    assert "Published 1 entries" in result.output
    assert "page=1" in result.output
