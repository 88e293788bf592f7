# codex_cms/web/admin.py
"""
Server-rendered admin screens. Editing itself goes through the JSON API;
these views cover sign-in, the overview and previews.
"""
from functools import wraps

from flask import Blueprint, abort, g, redirect, render_template, request, url_for
from flask_jwt_extended import unset_jwt_cookies
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from pydantic import ValidationError
from werkzeug.exceptions import Forbidden, Unauthorized

from codex_cms.application.cms.queries import get_entry, list_entries
from codex_cms.application.cms.registry import KINDS, kind_for_collection
from codex_cms.application.users.authenticate import login_user
from codex_cms.models.form_submission import FormSubmission
from codex_cms.utils.auth import authenticate, issue_session
from codex_cms.utils.pagination import pagination_args
from .rendering import render_blocks

admin_bp = Blueprint("admin", __name__)


@admin_bp.context_processor
def inject_admin_helpers():
    return {"admin_kinds": list(KINDS.values())}


def admin_required(permission=None):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                principal = authenticate(allow_api_key=False)
            except (Unauthorized, Forbidden, JWTExtendedException, PyJWTError):
                return redirect(url_for("admin.login", next=request.path))

            if permission and not principal.can(permission):
                abort(403)
            return fn(*args, **kwargs)
        return wrapper
    return decorator


@admin_bp.route("/login", methods=["GET", "POST"])
def login():
    error = None
    if request.method == "POST":
        try:
            user = login_user(tenant_id=g.current_tenant.id, data=request.form.to_dict())
        except (Unauthorized, Forbidden) as exc:
            error = exc.description
        except ValidationError:
            error = "Enter a valid e-mail address and password."
        else:
            target = request.args.get("next") or ""
            if not target.startswith("/admin"):
                target = url_for("admin.dashboard")
            return issue_session(redirect(target), user)

    status = 401 if error else 200
    return render_template("admin/login.html", error=error), status


@admin_bp.route("/logout", methods=["GET", "POST"])
def logout():
    response = redirect(url_for("admin.login"))
    unset_jwt_cookies(response)
    return response


@admin_bp.route("/")
@admin_required("content.view")
def dashboard():
    tenant_id = g.current_tenant.id

    counts = []
    for kind in KINDS.values():
        total = kind.model.query.filter_by(tenant_id=tenant_id).count()
        published = kind.model.query.filter_by(tenant_id=tenant_id, status="published").count()
        counts.append({"kind": kind, "total": total, "published": published})

    recent = (
        FormSubmission.query
        .filter_by(tenant_id=tenant_id)
        .order_by(FormSubmission.created_at.desc())
        .limit(10)
        .all()
    )
    unread = FormSubmission.query.filter_by(tenant_id=tenant_id, status="unread").count()

    return render_template("admin/dashboard.html", counts=counts, recent=recent, unread=unread)


@admin_bp.route("/content/<collection>")
@admin_required("content.view")
def content_list(collection):
    kind = kind_for_collection(collection)
    page, limit = pagination_args()
    items, meta = list_entries(
        kind,
        tenant_id=g.current_tenant.id,
        page=page,
        limit=limit,
        locale=request.args.get("locale"),
        status=request.args.get("status"),
        search=request.args.get("search"),
    )
    return render_template("admin/content_list.html", kind=kind, items=items, meta=meta)


@admin_bp.route("/preview/<collection>/<entry_id>")
@admin_required("content.view")
def preview(collection, entry_id):
    kind = kind_for_collection(collection)
    entry = get_entry(kind, tenant_id=g.current_tenant.id, entry_id=entry_id)
    return render_template(
        "admin/preview.html",
        kind=kind,
        entry=entry,
        content=render_blocks(entry.blocks),
    )
