from flask import request, g, jsonify, current_app
from codex_cms.models.tenant import Tenant
from codex_cms.extensions import db

# Paths served without a tenant context.
TENANT_EXEMPT_PREFIXES = (
    "/static",
    "/swagger",
    "/openapi",
    "/uploads",
    "/api/v1/health",
)


def resolve_tenant(value):
    """Look up an active tenant by id or slug."""
    return (
        Tenant.query
        .filter(db.or_(Tenant.id == value, Tenant.slug == value))
        .filter_by(is_active=True)
        .first()
    )


def tenant_middleware(app):
    @app.before_request
    def load_tenant():
        g.current_tenant = None
        if request.path.startswith(TENANT_EXEMPT_PREFIXES):
            return None

        tenant_ref = request.headers.get("X-Tenant-ID") or current_app.config.get("DEFAULT_TENANT_SLUG")
        if not tenant_ref:
            return jsonify({"error": "X-Tenant-ID header is missing"}), 400

        tenant = resolve_tenant(tenant_ref)
        if not tenant:
            return jsonify({"error": "Invalid tenant"}), 404

        # Attach tenant to global context
        g.current_tenant = tenant
        return None
