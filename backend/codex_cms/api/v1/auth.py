from flask import g, jsonify
from flask_jwt_extended import unset_jwt_cookies

from codex_cms.application.users.authenticate import login_user
from codex_cms.normalizers.user import normalize_user
from codex_cms.utils.auth import issue_session
from codex_cms.utils.decorators import permission_required
from codex_cms.utils.request import json_body
from . import v1_bp


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    user = login_user(tenant_id=g.current_tenant.id, data=json_body())

    response = jsonify({"data": normalize_user(user, include_permissions=True)})
    return issue_session(response, user), 200


@v1_bp.route("/auth/logout", methods=["POST"])
def logout():
    response = jsonify({"data": {"logged_out": True}})
    unset_jwt_cookies(response)
    return response, 200


@v1_bp.route("/auth/me", methods=["GET"])
@permission_required()
def me():
    principal = g.principal
    scope = principal.api_key.permissions if principal.api_key else None
    data = normalize_user(principal.user, include_permissions=True, scope=scope)
    data["auth"] = "api_key" if principal.api_key else "session"
    return jsonify({"data": data}), 200
