from flask import g, jsonify

from codex_cms.application.users.manage_users import (
    create_user,
    delete_user,
    get_user,
    list_users,
    update_user,
)
from codex_cms.normalizers.user import normalize_user
from codex_cms.utils.decorators import permission_required
from codex_cms.utils.request import json_body
from . import v1_bp


@v1_bp.route("/users", methods=["GET"])
@permission_required("users.view")
def list_users_route():
    users = list_users(tenant_id=g.current_tenant.id)
    return jsonify({"data": [normalize_user(user) for user in users]}), 200


@v1_bp.route("/users", methods=["POST"])
@permission_required("users.create")
def create_user_route():
    user = create_user(tenant_id=g.current_tenant.id, actor=g.current_user, data=json_body())
    return jsonify({"data": normalize_user(user)}), 201


@v1_bp.route("/users/<user_id>", methods=["GET"])
@permission_required("users.view")
def get_user_route(user_id):
    user = get_user(tenant_id=g.current_tenant.id, user_id=user_id)
    return jsonify({"data": normalize_user(user, include_permissions=True)}), 200


@v1_bp.route("/users/<user_id>", methods=["PUT", "PATCH"])
@permission_required("users.edit")
def update_user_route(user_id):
    user = update_user(
        tenant_id=g.current_tenant.id,
        actor=g.current_user,
        user_id=user_id,
        data=json_body(),
    )
    return jsonify({"data": normalize_user(user)}), 200


@v1_bp.route("/users/<user_id>", methods=["DELETE"])
@permission_required("users.delete")
def delete_user_route(user_id):
    delete_user(tenant_id=g.current_tenant.id, actor=g.current_user, user_id=user_id)
    return jsonify({"data": {"id": user_id, "deleted": True}}), 200
