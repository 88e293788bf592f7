from flask import g, jsonify, request

from codex_cms.application.analytics.dashboard import build_dashboard
from codex_cms.utils.decorators import feature_enabled, permission_required
from . import v1_bp


@v1_bp.route("/analytics/dashboard", methods=["GET"])
@permission_required("content.view")
@feature_enabled("analytics")
def analytics_dashboard():
    data = build_dashboard(
        tenant_id=g.current_tenant.id,
        timeframe=request.args.get("timeframe", "30d"),
    )
    return jsonify({"data": data}), 200
