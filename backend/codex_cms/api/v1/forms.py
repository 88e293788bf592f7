from flask import g, jsonify, request

from codex_cms.application.forms.manage_submissions import (
    bulk_delete_submissions,
    delete_submission,
    get_submission,
    list_submissions,
    update_submission,
)
from codex_cms.domain.schemas import BulkDelete
from codex_cms.normalizers.pagination import normalize_pagination
from codex_cms.normalizers.submission import normalize_submission
from codex_cms.utils.decorators import feature_enabled, permission_required
from codex_cms.utils.pagination import pagination_args
from codex_cms.utils.request import json_body
from . import v1_bp


@v1_bp.route("/forms", methods=["GET"])
@permission_required("forms.view")
@feature_enabled("forms")
def list_forms():
    page, limit = pagination_args()
    items, meta = list_submissions(
        tenant_id=g.current_tenant.id,
        page=page,
        limit=limit,
        status=request.args.get("status"),
        form_type=request.args.get("formType") or request.args.get("form_type"),
        search=request.args.get("search"),
    )
    return jsonify({"data": normalize_pagination(items, normalize_submission, meta=meta)}), 200


@v1_bp.route("/forms/<submission_id>", methods=["GET"])
@permission_required("forms.view")
@feature_enabled("forms")
def get_form(submission_id):
    submission = get_submission(tenant_id=g.current_tenant.id, submission_id=submission_id)
    return jsonify({"data": normalize_submission(submission, detail=True)}), 200


@v1_bp.route("/forms/<submission_id>", methods=["PUT", "PATCH"])
@permission_required("forms.edit")
@feature_enabled("forms")
def update_form(submission_id):
    submission = update_submission(
        tenant_id=g.current_tenant.id,
        submission_id=submission_id,
        data=json_body(),
    )
    return jsonify({"data": normalize_submission(submission, detail=True)}), 200


@v1_bp.route("/forms/<submission_id>", methods=["DELETE"])
@permission_required("forms.delete")
@feature_enabled("forms")
def delete_form(submission_id):
    delete_submission(tenant_id=g.current_tenant.id, submission_id=submission_id)
    return jsonify({"data": {"id": submission_id, "deleted": True}}), 200


@v1_bp.route("/forms/bulk-delete", methods=["POST"])
@permission_required("forms.delete")
@feature_enabled("forms")
def bulk_delete_forms():
    payload = BulkDelete.model_validate(json_body())
    deleted = bulk_delete_submissions(tenant_id=g.current_tenant.id, ids=payload.ids)
    return jsonify({"data": {"deleted": deleted}}), 200
