# codex_cms/api/v1/public.py
"""
Unauthenticated read access to published content, plus the contact form.
"""
from flask import current_app, g, jsonify, request
from werkzeug.exceptions import BadRequest, NotFound

from codex_cms.application.cms.queries import get_published, list_published
from codex_cms.application.cms.registry import kind_for_collection
from codex_cms.application.forms.submit_form import public_reference, submit_form
from codex_cms.extensions import limiter
from codex_cms.normalizers.entry import normalize_entry
from codex_cms.utils.request import client_ip, form_or_json_body
from . import v1_bp

COLLECTION = "<any('pages', 'blog-posts', 'services', 'case-studies'):collection>"


def _public_kind(collection):
    kind = kind_for_collection(collection)
    if not g.current_tenant.has_feature(kind.feature):
        raise NotFound()
    return kind


def _locale():
    locale = request.args.get("locale", current_app.config["DEFAULT_LOCALE"])
    if locale not in current_app.config["SUPPORTED_LOCALES"]:
        raise BadRequest(f"Unsupported locale: {locale}")
    return locale


@v1_bp.route(f"/public/{COLLECTION}", methods=["GET"])
def list_public_content(collection):
    kind = _public_kind(collection)
    entries = list_published(kind, tenant_id=g.current_tenant.id, locale=_locale())

    category = request.args.get("category")
    if category and kind.name == "case_study":
        entries = [e for e in entries if e.category == category]

    return jsonify({"data": [normalize_entry(kind, e, include_blocks=False) for e in entries]}), 200


@v1_bp.route(f"/public/{COLLECTION}/<slug>", methods=["GET"])
def get_public_content(collection, slug):
    kind = _public_kind(collection)
    entry = get_published(kind, tenant_id=g.current_tenant.id, slug=slug, locale=_locale())
    if entry is None:
        raise NotFound(f"{kind.label} not found")

    return jsonify({"data": normalize_entry(kind, entry)}), 200


@v1_bp.route("/public/contact", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["CONTACT_RATE_LIMIT"],
    error_message="Too many submissions. Please try again later.",
)
def submit_contact():
    if not g.current_tenant.has_feature("forms"):
        raise NotFound()

    submission = submit_form(
        tenant_id=g.current_tenant.id,
        data=form_or_json_body(),
        files=request.files.getlist("attachments"),
        client_ip=client_ip(),
        user_agent=request.headers.get("User-Agent"),
        referrer=request.headers.get("Referer"),
    )

    return jsonify({
        "success": True,
        "message": "Form submitted successfully",
        "submissionId": public_reference(submission),
    }), 201
