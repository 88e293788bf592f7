from flask import g, jsonify

from codex_cms.application.cms.blocks import delete_block, get_block, update_block
from codex_cms.domain.schemas import BlockUpdate
from codex_cms.normalizers.block import normalize_block
from codex_cms.utils.decorators import permission_required
from codex_cms.utils.request import json_body
from . import v1_bp


@v1_bp.route("/blocks/<block_id>", methods=["GET"])
@permission_required("content.view")
def get_block_route(block_id):
    block = get_block(tenant_id=g.current_tenant.id, block_id=block_id)
    return jsonify({"data": normalize_block(block, admin=True)}), 200


@v1_bp.route("/blocks/<block_id>", methods=["PUT", "PATCH"])
@permission_required("content.edit")
def update_block_route(block_id):
    payload = BlockUpdate.model_validate(json_body())

    block = update_block(
        tenant_id=g.current_tenant.id,
        block_id=block_id,
        actor_id=g.current_user.id,
        data=payload.data,
        order=payload.order,
    )
    return jsonify({"data": normalize_block(block, admin=True)}), 200


@v1_bp.route("/blocks/<block_id>", methods=["DELETE"])
@permission_required("content.edit")
def delete_block_route(block_id):
    delete_block(tenant_id=g.current_tenant.id, block_id=block_id, actor_id=g.current_user.id)
    return jsonify({"data": {"id": block_id, "deleted": True}}), 200
