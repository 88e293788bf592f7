# codex_cms/web/site.py
"""
Public marketing website, one URL tree per locale.
"""
from flask import Blueprint, abort, current_app, g, redirect, render_template, request, url_for

from codex_cms.application.cms.queries import get_published, list_published
from codex_cms.application.cms.registry import BLOG_POST, CASE_STUDY, PAGE, SERVICE
from .i18n import LOCALE_NAMES, current_locale, translate
from codex_cms.utils.sanitize import safe_href
from .rendering import render_blocks

site_bp = Blueprint("site", __name__)
site_bp.add_app_template_filter(safe_href, "safe_href")


@site_bp.url_value_preprocessor
def pull_locale(endpoint, values):
    if values and "locale" in values:
        locale = values.pop("locale")
        if locale not in current_app.config["SUPPORTED_LOCALES"]:
            abort(404)
        g.locale = locale


def _locales():
    tenant = getattr(g, "current_tenant", None)
    if tenant is not None and not tenant.has_feature("multilingual"):
        return [current_app.config["DEFAULT_LOCALE"]]
    return current_app.config["SUPPORTED_LOCALES"]


@site_bp.before_request
def require_enabled_locale():
    locale = getattr(g, "locale", None)
    if locale and locale not in _locales():
        abort(404)


@site_bp.url_defaults
def add_locale(endpoint, values):
    if "locale" in values or not endpoint.startswith("site."):
        return
    if endpoint != "site.root" and current_app.url_map.is_endpoint_expecting(endpoint, "locale"):
        values["locale"] = current_locale()


@site_bp.app_context_processor
def inject_site_helpers():
    def alternate_links():
        """URLs of the current page in every enabled locale."""
        endpoint = request.endpoint
        if not endpoint or not endpoint.startswith("site.") or endpoint == "site.root":
            return []
        locales = _locales()
        if len(locales) < 2:
            return []
        args = dict(request.view_args or {})
        return [
            {
                "locale": locale,
                "name": LOCALE_NAMES.get(locale, locale),
                "url": url_for(endpoint, **{**args, "locale": locale}),
                "active": locale == current_locale(),
            }
            for locale in locales
        ]

    tenant = getattr(g, "current_tenant", None)
    return {
        "t": translate,
        "locale": current_locale(),
        "alternate_links": alternate_links,
        "render_blocks": render_blocks,
        "site_name": tenant.name if tenant else "Codex",
        "blog_enabled": bool(tenant and tenant.has_feature("blog")),
    }


def _tenant_id():
    return g.current_tenant.id


@site_bp.route("/")
def root():
    return redirect(url_for("site.home", locale=current_app.config["DEFAULT_LOCALE"]))


@site_bp.route("/<locale>/")
def home():
    page = get_published(PAGE, tenant_id=_tenant_id(), slug="home", locale=g.locale)
    services = list_published(SERVICE, tenant_id=_tenant_id(), locale=g.locale)
    return render_template("site/home.html", page=page, services=services, seo=page.seo if page else None)


@site_bp.route("/<locale>/services")
def services():
    items = list_published(SERVICE, tenant_id=_tenant_id(), locale=g.locale)
    return render_template("site/services.html", services=items)


@site_bp.route("/<locale>/services/<slug>")
def service_detail(slug):
    service = get_published(SERVICE, tenant_id=_tenant_id(), slug=slug, locale=g.locale)
    if service is None:
        abort(404)

    # A service without blocks of its own shows its linked page
    blocks = service.blocks
    if not blocks and service.page is not None:
        blocks = service.page.blocks

    return render_template("site/service.html", service=service, blocks=blocks, seo=service.seo)


@site_bp.route("/<locale>/case-studies")
def case_studies():
    items = list_published(CASE_STUDY, tenant_id=_tenant_id(), locale=g.locale)
    category = request.args.get("category")
    if category:
        items = [item for item in items if item.category == category]
    return render_template("site/case_studies.html", case_studies=items, category=category)


@site_bp.route("/<locale>/case-studies/<slug>")
def case_study_detail(slug):
    case_study = get_published(CASE_STUDY, tenant_id=_tenant_id(), slug=slug, locale=g.locale)
    if case_study is None:
        abort(404)

    blocks = case_study.blocks
    if not blocks and case_study.page is not None:
        blocks = case_study.page.blocks

    return render_template("site/case_study.html", case_study=case_study, blocks=blocks, seo=case_study.seo)


@site_bp.route("/<locale>/blog")
def blog():
    if not g.current_tenant.has_feature("blog"):
        abort(404)
    posts = list_published(BLOG_POST, tenant_id=_tenant_id(), locale=g.locale)
    return render_template("site/blog.html", posts=posts)


@site_bp.route("/<locale>/blog/<slug>")
def blog_post(slug):
    if not g.current_tenant.has_feature("blog"):
        abort(404)
    post = get_published(BLOG_POST, tenant_id=_tenant_id(), slug=slug, locale=g.locale)
    if post is None:
        abort(404)
    return render_template("site/blog_post.html", post=post, seo=post.seo)


@site_bp.route("/<locale>/<slug>")
def page(slug):
    entry = get_published(PAGE, tenant_id=_tenant_id(), slug=slug, locale=g.locale)
    if entry is None:
        abort(404)
    return render_template("site/page.html", page=entry, seo=entry.seo)
