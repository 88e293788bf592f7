# codex_cms/api/v1/content.py
from flask import g, jsonify, request
from werkzeug.exceptions import Forbidden

from codex_cms.application.cms.blocks import add_block, reorder_blocks
from codex_cms.application.cms.change_status import change_status
from codex_cms.application.cms.create_entry import create_entry
from codex_cms.application.cms.delete_entry import delete_entry
from codex_cms.application.cms.queries import get_entry, list_entries
from codex_cms.application.cms.registry import kind_for_collection
from codex_cms.application.cms.update_entry import update_entry
from codex_cms.domain.schemas import BlockCreate, BlockPosition, StatusChange
from codex_cms.normalizers.block import normalize_block
from codex_cms.normalizers.entry import normalize_entry
from codex_cms.normalizers.pagination import normalize_pagination
from codex_cms.utils.decorators import permission_required
from codex_cms.utils.optimistic_lock import enforce_optimistic_lock
from codex_cms.utils.pagination import pagination_args
from codex_cms.utils.request import json_body
from . import v1_bp

COLLECTION = "<any('pages', 'blog-posts', 'services', 'case-studies'):collection>"


def content_kind(collection):
    kind = kind_for_collection(collection)
    if not g.current_tenant.has_feature(kind.feature):
        raise Forbidden(f"Feature '{kind.feature}' is disabled for this tenant")
    return kind


def can_publish():
    return g.principal.can("content.publish")


# ------------------------
# Entries
# ------------------------

@v1_bp.route(f"/{COLLECTION}", methods=["GET"])
@permission_required("content.view")
def list_content(collection):
    kind = content_kind(collection)
    page, limit = pagination_args()

    items, meta = list_entries(
        kind,
        tenant_id=g.current_tenant.id,
        page=page,
        limit=limit,
        locale=request.args.get("locale"),
        status=request.args.get("status"),
        slug=request.args.get("slug"),
        search=request.args.get("search"),
    )

    return jsonify({"data": normalize_pagination(
        items,
        lambda e: normalize_entry(kind, e, admin=True, include_blocks=False),
        meta=meta,
    )}), 200


@v1_bp.route(f"/{COLLECTION}", methods=["POST"])
@permission_required("content.create")
def create_content(collection):
    kind = content_kind(collection)
    entry = create_entry(
        kind=kind,
        tenant_id=g.current_tenant.id,
        actor_id=g.current_user.id,
        data=json_body(),
        can_publish=can_publish(),
    )
    return jsonify({"data": normalize_entry(kind, entry, admin=True)}), 201


@v1_bp.route(f"/{COLLECTION}/<entry_id>", methods=["GET"])
@permission_required("content.view")
def get_content(collection, entry_id):
    kind = content_kind(collection)
    entry = get_entry(kind, tenant_id=g.current_tenant.id, entry_id=entry_id)
    return jsonify({"data": normalize_entry(kind, entry, admin=True)}), 200


@v1_bp.route(f"/{COLLECTION}/<entry_id>", methods=["PUT", "PATCH"])
@permission_required("content.edit")
def update_content(collection, entry_id):
    kind = content_kind(collection)
    entry = get_entry(kind, tenant_id=g.current_tenant.id, entry_id=entry_id)
    enforce_optimistic_lock(entry)

    entry = update_entry(
        kind=kind,
        tenant_id=g.current_tenant.id,
        entry_id=entry_id,
        actor_id=g.current_user.id,
        data=json_body(),
        can_publish=can_publish(),
    )
    return jsonify({"data": normalize_entry(kind, entry, admin=True)}), 200


@v1_bp.route(f"/{COLLECTION}/<entry_id>", methods=["DELETE"])
@permission_required("content.delete")
def delete_content(collection, entry_id):
    kind = content_kind(collection)
    delete_entry(kind=kind, tenant_id=g.current_tenant.id, entry_id=entry_id)
    return jsonify({"data": {"id": entry_id, "deleted": True}}), 200


@v1_bp.route(f"/{COLLECTION}/<entry_id>/status", methods=["POST"])
@permission_required("content.edit")
def change_content_status(collection, entry_id):
    kind = content_kind(collection)
    payload = StatusChange.model_validate(json_body())

    entry = change_status(
        kind=kind,
        tenant_id=g.current_tenant.id,
        entry_id=entry_id,
        actor_id=g.current_user.id,
        status=payload.status,
        scheduled_at=payload.scheduled_at,
        can_publish=can_publish(),
    )
    return jsonify({"data": normalize_entry(kind, entry, admin=True, include_blocks=False)}), 200


# ------------------------
# Blocks of an entry
# ------------------------

@v1_bp.route(f"/{COLLECTION}/<entry_id>/blocks", methods=["GET"])
@permission_required("content.view")
def list_entry_blocks(collection, entry_id):
    kind = content_kind(collection)
    entry = get_entry(kind, tenant_id=g.current_tenant.id, entry_id=entry_id)
    blocks = sorted(entry.blocks, key=lambda b: b.order)
    return jsonify({"data": [normalize_block(b, admin=True) for b in blocks]}), 200


@v1_bp.route(f"/{COLLECTION}/<entry_id>/blocks", methods=["POST"])
@permission_required("content.edit")
def create_entry_block(collection, entry_id):
    kind = content_kind(collection)
    entry = get_entry(kind, tenant_id=g.current_tenant.id, entry_id=entry_id)
    payload = BlockCreate.model_validate(json_body())

    block = add_block(entry=entry, actor_id=g.current_user.id, data=payload.data, order=payload.order)
    return jsonify({"data": normalize_block(block, admin=True)}), 201


@v1_bp.route(f"/{COLLECTION}/<entry_id>/blocks/reorder", methods=["PUT", "POST"])
@permission_required("content.edit")
def reorder_entry_blocks(collection, entry_id):
    kind = content_kind(collection)
    entry = get_entry(kind, tenant_id=g.current_tenant.id, entry_id=entry_id)

    body = json_body(expected=(dict, list))
    raw_positions = body.get("blocks", []) if isinstance(body, dict) else body
    positions = [BlockPosition.model_validate(p).model_dump() for p in raw_positions]

    blocks = reorder_blocks(entry=entry, actor_id=g.current_user.id, positions=positions)
    return jsonify({"data": [normalize_block(b, admin=True) for b in blocks]}), 200
