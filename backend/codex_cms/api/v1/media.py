from flask import g, jsonify, request

from codex_cms.application.media.media_library import (
    delete_media,
    get_media,
    list_media,
    update_media,
    upload_media,
)
from codex_cms.normalizers.media import normalize_media
from codex_cms.normalizers.pagination import normalize_pagination
from codex_cms.utils.decorators import permission_required
from codex_cms.utils.pagination import pagination_args
from codex_cms.utils.request import json_body
from . import v1_bp


@v1_bp.route("/media", methods=["GET"])
@permission_required("media.view")
def list_media_route():
    page, limit = pagination_args(default_limit=50)
    items, meta = list_media(
        tenant_id=g.current_tenant.id,
        page=page,
        limit=limit,
        kind=request.args.get("kind"),
    )
    return jsonify({"data": normalize_pagination(items, normalize_media, meta=meta)}), 200


@v1_bp.route("/media", methods=["POST"])
@permission_required("media.upload")
def upload_media_route():
    asset = upload_media(
        tenant_id=g.current_tenant.id,
        actor_id=g.current_user.id,
        file=request.files.get("file"),
        alt=request.form.get("alt"),
    )
    return jsonify({"data": normalize_media(asset)}), 201


@v1_bp.route("/media/<media_id>", methods=["GET"])
@permission_required("media.view")
def get_media_route(media_id):
    asset = get_media(tenant_id=g.current_tenant.id, media_id=media_id)
    return jsonify({"data": normalize_media(asset)}), 200


@v1_bp.route("/media/<media_id>", methods=["PUT", "PATCH"])
@permission_required("media.upload")
def update_media_route(media_id):
    asset = update_media(tenant_id=g.current_tenant.id, media_id=media_id, data=json_body())
    return jsonify({"data": normalize_media(asset)}), 200


@v1_bp.route("/media/<media_id>", methods=["DELETE"])
@permission_required("media.delete")
def delete_media_route(media_id):
    delete_media(tenant_id=g.current_tenant.id, media_id=media_id)
    return jsonify({"data": {"id": media_id, "deleted": True}}), 200
