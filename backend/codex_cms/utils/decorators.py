from functools import wraps
from flask import g, jsonify

from .auth import authenticate


def permission_required(permission=None, *, allow_api_key=True):
    """
    Authenticate the caller and check a permission from the RBAC map.
    With no permission, any authenticated caller passes.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            principal = authenticate(allow_api_key=allow_api_key)

            if permission and not principal.can(permission):
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator


def feature_enabled(feature_name):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            tenant = g.current_tenant

            if not tenant.has_feature(feature_name):
                return jsonify({
                    "error": f"Feature '{feature_name}' is disabled for this tenant"
                }), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
