# codex_cms/utils/auth.py
"""
Request authentication.

A request is authenticated either by the session cookie (a JWT issued at
login) or by an API key sent as ``Authorization: Bearer <key>`` or
``X-API-Key: <key>``. Both paths resolve to a ``Principal``: the acting
user plus, for API keys, the key whose scope narrows the user's role.
"""
import hashlib
import logging
from dataclasses import dataclass
from typing import Optional

from flask import g, request
from flask_jwt_extended import (
    create_access_token,
    get_jwt,
    get_jwt_identity,
    set_access_cookies,
    verify_jwt_in_request,
)
from werkzeug.exceptions import Forbidden, Unauthorized

from codex_cms.domain.permissions import role_has_permission, scope_has_permission
from codex_cms.extensions import db
from codex_cms.models.api_key import ApiKey
from codex_cms.models.user import User
from .time import normalize_ts, utcnow

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "codex_"


@dataclass
class Principal:
    user: User
    api_key: Optional[ApiKey] = None

    @property
    def role(self) -> str:
        return self.user.role

    def can(self, permission: str) -> bool:
        if not role_has_permission(self.user.role, permission):
            return False
        if self.api_key is not None:
            return scope_has_permission(self.api_key.permissions, permission)
        return True


def hash_api_key(raw_key: str) -> str:
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()


def extract_api_key() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        token = header[len("Bearer "):].strip()
        if token.startswith(API_KEY_PREFIX):
            return token

    return request.headers.get("X-API-Key") or None


def authenticate_api_key(raw_key: str, tenant) -> Principal:
    api_key = ApiKey.query.filter_by(key_hash=hash_api_key(raw_key)).first()
    if not api_key or api_key.tenant_id != tenant.id:
        logger.warning("Rejected unknown API key %s...", raw_key[:10])
        raise Unauthorized("Invalid API key")

    expires_at = normalize_ts(api_key.expires_at)
    if expires_at and expires_at <= utcnow():
        logger.info("Rejected expired API key %s", api_key.id)
        raise Unauthorized("API key has expired")

    user = api_key.user
    if not user or not user.is_active:
        raise Unauthorized("API key owner is inactive")

    api_key.last_used_at = utcnow()
    db.session.commit()
    logger.info("API key %s used by user %s", api_key.id, user.id)
    return Principal(user=user, api_key=api_key)


def authenticate_session(tenant) -> Principal:
    verify_jwt_in_request(optional=True)
    user_id = get_jwt_identity()
    if not user_id:
        raise Unauthorized("Authentication required")

    if get_jwt().get("tenant_id") != tenant.id:
        raise Forbidden("Tenant mismatch")

    user = db.session.get(User, user_id)
    if not user or user.tenant_id != tenant.id:
        raise Unauthorized("Authentication required")
    if not user.is_active:
        raise Forbidden("User account disabled")

    return Principal(user=user)


def authenticate(allow_api_key: bool = True) -> Principal:
    """
    Resolve the caller for the current tenant and store it on ``g``.
    """
    tenant = g.current_tenant
    if tenant is None:
        raise Unauthorized("Tenant context missing")

    raw_key = extract_api_key()
    if raw_key:
        if not allow_api_key:
            raise Forbidden("API keys are not accepted for this endpoint")
        if not tenant.has_feature("api_access"):
            raise Forbidden("Feature 'api_access' is disabled for this tenant")
        principal = authenticate_api_key(raw_key, tenant)
    else:
        principal = authenticate_session(tenant)

    g.current_user = principal.user
    g.principal = principal
    return principal


def issue_session(response, user):
    """Attach a session cookie for ``user`` to ``response``."""
    access_token = create_access_token(
        identity=user.id,
        additional_claims={"tenant_id": user.tenant_id, "role": user.role},
    )
    set_access_cookies(response, access_token)
    return response
