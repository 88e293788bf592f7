import logging

from werkzeug.exceptions import Forbidden, Unauthorized

from codex_cms.models.user import User
from codex_cms.domain.schemas import LoginRequest
from codex_cms.extensions import db
from codex_cms.utils.time import utcnow

logger = logging.getLogger(__name__)


def login_user(*, tenant_id: str, data) -> User:
    payload = LoginRequest.model_validate(data)

    user = User.query.filter_by(
        email=str(payload.email).lower(),
        tenant_id=tenant_id,
    ).first()

    if not user or not user.check_password(payload.password):
        logger.warning("Failed login for %s", payload.email)
        raise Unauthorized("Invalid credentials")

    if not user.is_active:
        logger.warning("Login attempt on disabled account %s", user.id)
        raise Forbidden("User account disabled")

    user.last_login_at = utcnow()
    db.session.commit()

    logger.info("User %s logged in", user.id)
    return user
