from flask import jsonify

from codex_cms.application.cms.blocks import prepare_blocks
from codex_cms.domain.schemas import PreviewRequest
from codex_cms.utils.decorators import permission_required
from codex_cms.utils.request import json_body
from codex_cms.web.rendering import render_blocks
from . import v1_bp


@v1_bp.route("/preview", methods=["POST"])
@permission_required("content.view")
def preview_blocks():
    """
    Validate and sanitize unsaved blocks and render them, without persisting.
    """
    payload = PreviewRequest.model_validate(json_body())
    prepared = prepare_blocks(payload.blocks)

    blocks = [{"type": block_type, "data": data, "order": index}
              for index, (block_type, data) in enumerate(prepared)]

    return jsonify({"data": {
        "blocks": blocks,
        "html": str(render_blocks(blocks)),
    }}), 200
