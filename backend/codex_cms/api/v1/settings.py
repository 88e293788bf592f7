from flask import g, jsonify

from codex_cms.application.settings.api_keys import create_api_key, delete_api_key, list_api_keys
from codex_cms.application.settings.site_settings import get_settings, update_settings
from codex_cms.normalizers.user import normalize_api_key
from codex_cms.utils.decorators import permission_required
from codex_cms.utils.request import json_body
from . import v1_bp


@v1_bp.route("/settings", methods=["GET"])
@permission_required("settings.view")
def get_settings_route():
    return jsonify({"data": get_settings(g.current_tenant.id)}), 200


@v1_bp.route("/settings", methods=["POST", "PUT"])
@permission_required("settings.edit")
def update_settings_route():
    settings = update_settings(tenant_id=g.current_tenant.id, data=json_body())
    return jsonify({"data": settings}), 200


# ------------------------
# API keys (session only: a key cannot mint keys)
# ------------------------

@v1_bp.route("/settings/api-keys", methods=["GET"])
@permission_required(allow_api_key=False)
def list_api_keys_route():
    keys = list_api_keys(tenant_id=g.current_tenant.id, user_id=g.current_user.id)
    return jsonify({"data": [normalize_api_key(k) for k in keys]}), 200


@v1_bp.route("/settings/api-keys", methods=["POST"])
@permission_required(allow_api_key=False)
def create_api_key_route():
    api_key, raw_key = create_api_key(
        tenant_id=g.current_tenant.id,
        user=g.current_user,
        data=json_body(),
    )
    data = normalize_api_key(api_key)
    data["key"] = raw_key  # shown once
    return jsonify({"data": data}), 201


@v1_bp.route("/settings/api-keys/<key_id>", methods=["DELETE"])
@permission_required(allow_api_key=False)
def delete_api_key_route(key_id):
    delete_api_key(tenant_id=g.current_tenant.id, user_id=g.current_user.id, key_id=key_id)
    return jsonify({"data": {"id": key_id, "deleted": True}}), 200
