# codex_cms/cli.py
import click
from flask import current_app

from codex_cms.application.cms.create_entry import create_entry
from codex_cms.application.cms.publish_scheduled import publish_due
from codex_cms.application.cms.registry import PAGE, SERVICE
from codex_cms.application.users.manage_users import create_user
from codex_cms.domain.constants import USER_ROLES
from codex_cms.extensions import db
from codex_cms.models import Page, Tenant, User

DEMO_COPY = {
    "en": ("Websites that convert", "We design and build fast marketing sites."),
    "de": ("Websites, die überzeugen", "Wir gestalten und bauen schnelle Marketing-Websites."),
    "fr": ("Des sites qui convertissent", "Nous concevons et développons des sites marketing rapides."),
}


def _get_or_create_tenant(slug, name=None):
    tenant = Tenant.query.filter_by(slug=slug).first()
    if tenant is None:
        tenant = Tenant(slug=slug, name=name or slug.title())
        db.session.add(tenant)
        db.session.commit()
        click.echo(f"Created tenant {tenant.slug} ({tenant.id})")
    return tenant


def _demo_blocks(locale):
    headline, subcopy = DEMO_COPY[locale]
    return [
        {
            "type": "hero",
            "headline": headline,
            "subcopy": subcopy,
            "primaryCTA": {"label": "Contact", "href": f"/{locale}/#contact"},
        },
        {
            "type": "featureGrid",
            "columns": 3,
            "items": [
                {"title": "Strategy", "body": "Positioning and content that fits your audience."},
                {"title": "Design", "body": "Accessible, on-brand interfaces."},
                {"title": "Engineering", "body": "Fast pages built on a structured CMS."},
            ],
        },
        {
            "type": "faq",
            "items": [{"q": "How long does a project take?", "a": "Most launches take six to ten weeks."}],
        },
        {"type": "contactForm", "formKey": "contact", "heading": "Get in touch"},
    ]


def register_commands(app):
    @app.cli.command("seed-demo")
    @click.option("--tenant", "tenant_slug", default=None, help="Tenant slug (defaults to DEFAULT_TENANT_SLUG).")
    @click.option("--email", default="owner@example.com", show_default=True)
    @click.option("--password", default="change-me-now", show_default=True)
    def seed_demo(tenant_slug, email, password):
        """Create a tenant, an owner and a published home page per locale."""
        tenant = _get_or_create_tenant(tenant_slug or current_app.config["DEFAULT_TENANT_SLUG"])

        owner = User.query.filter_by(tenant_id=tenant.id, email=email.lower()).first()
        if owner is None:
            owner = create_user(
                tenant_id=tenant.id,
                actor=None,
                data={"email": email, "name": "Owner", "password": password, "role": "OWNER"},
            )
            click.echo(f"Created owner {owner.email}")

        for locale in current_app.config["SUPPORTED_LOCALES"]:
            if Page.query.filter_by(tenant_id=tenant.id, slug="home", locale=locale).first():
                continue
            create_entry(
                kind=PAGE,
                tenant_id=tenant.id,
                actor_id=owner.id,
                data={"title": "Home", "slug": "home", "locale": locale, "status": "published",
                      "blocks": _demo_blocks(locale)},
                can_publish=True,
            )
            create_entry(
                kind=SERVICE,
                tenant_id=tenant.id,
                actor_id=owner.id,
                data={"name": "Web design", "slug": "web-design", "locale": locale, "status": "published",
                      "summary": DEMO_COPY[locale][1], "blocks": _demo_blocks(locale)[:2]},
                can_publish=True,
            )
            click.echo(f"Seeded {locale} content")

    @app.cli.command("create-user")
    @click.argument("email")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--name", default="")
    @click.option("--role", type=click.Choice(USER_ROLES), default="AUTHOR", show_default=True)
    @click.option("--tenant", "tenant_slug", default=None)
    def create_user_command(email, password, name, role, tenant_slug):
        """Create a user in a tenant."""
        tenant = _get_or_create_tenant(tenant_slug or current_app.config["DEFAULT_TENANT_SLUG"])
        user = create_user(
            tenant_id=tenant.id,
            actor=None,
            data={"email": email, "name": name or email.split("@")[0], "password": password, "role": role},
        )
        click.echo(f"Created {user.role} {user.email} ({user.id})")

    @app.cli.command("publish-scheduled")
    def publish_scheduled_command():
        """Publish scheduled content whose time has come."""
        published = publish_due()
        total = sum(published.values())
        click.echo(f"Published {total} entries: " + ", ".join(f"{k}={v}" for k, v in published.items()))
