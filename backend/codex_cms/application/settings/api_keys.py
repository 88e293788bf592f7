import logging
import secrets
from typing import Any, Dict, Tuple

from werkzeug.exceptions import Forbidden, NotFound

from codex_cms.domain.permissions import scope_allowed_for_role
from codex_cms.domain.schemas import ApiKeyCreate
from codex_cms.extensions import db
from codex_cms.models.api_key import ApiKey
from codex_cms.utils.auth import API_KEY_PREFIX, hash_api_key
from codex_cms.utils.time import to_utc
from codex_cms.utils.transaction import transactional

logger = logging.getLogger(__name__)


def generate_api_key() -> str:
    # 32 random bytes, url-safe base64
    return API_KEY_PREFIX + secrets.token_urlsafe(32)


def list_api_keys(*, tenant_id: str, user_id: str):
    return (
        ApiKey.query
        .filter_by(tenant_id=tenant_id, user_id=user_id)
        .order_by(ApiKey.created_at.desc())
        .all()
    )


def create_api_key(*, tenant_id: str, user, data: Dict[str, Any]) -> Tuple[ApiKey, str]:
    """
    Mint a key for ``user``. The plain key is returned once and never stored.
    """
    payload = ApiKeyCreate.model_validate(data)

    if not scope_allowed_for_role(payload.permissions, user.role):
        raise Forbidden(
            f"Role {user.role} cannot create keys with '{payload.permissions}' permissions"
        )

    raw_key = generate_api_key()
    api_key = ApiKey(
        tenant_id=tenant_id,
        user_id=user.id,
        name=payload.name,
        key_hash=hash_api_key(raw_key),
        prefix=raw_key[:10],
        last_four=raw_key[-4:],
        permissions=payload.permissions,
        expires_at=to_utc(payload.expires_at),
    )

    with transactional():
        db.session.add(api_key)

    logger.info("User %s created API key %s (%s)", user.id, api_key.id, api_key.permissions)
    return api_key, raw_key


def delete_api_key(*, tenant_id: str, user_id: str, key_id: str) -> None:
    api_key = ApiKey.query.filter_by(id=key_id, tenant_id=tenant_id, user_id=user_id).first()
    if not api_key:
        raise NotFound("API key not found")

    with transactional():
        db.session.delete(api_key)

    logger.info("User %s deleted API key %s", user_id, key_id)
