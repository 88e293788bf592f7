import logging
from typing import Any, Dict

from werkzeug.exceptions import BadRequest, Conflict, Forbidden, NotFound

from codex_cms.domain.schemas import UserCreate, UserUpdate
from codex_cms.extensions import db
from codex_cms.models import BlogPost, CaseStudy, FormSubmission, MediaAsset, Page, Service, User
from codex_cms.utils.transaction import transactional

logger = logging.getLogger(__name__)


def list_users(*, tenant_id: str):
    return User.query.filter_by(tenant_id=tenant_id).order_by(User.created_at.asc()).all()


def get_user(*, tenant_id: str, user_id: str) -> User:
    user = User.query.filter_by(id=user_id, tenant_id=tenant_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def create_user(*, tenant_id: str, actor, data: Dict[str, Any]) -> User:
    """
    Create a user in the tenant. Only an OWNER may create another OWNER.
    """
    payload = UserCreate.model_validate(data)
    email = str(payload.email).lower()

    if payload.role == "OWNER" and actor is not None and actor.role != "OWNER":
        raise Forbidden("Only an owner can create owners")

    if User.query.filter_by(tenant_id=tenant_id, email=email).first():
        raise Conflict("A user with this email already exists")

    user = User(
        tenant_id=tenant_id,
        email=email,
        name=payload.name,
        role=payload.role,
        is_active=payload.is_active,
    )
    user.set_password(payload.password)

    with transactional():
        db.session.add(user)

    logger.info("Created user %s with role %s", user.id, user.role)
    return user


def update_user(*, tenant_id: str, actor, user_id: str, data: Dict[str, Any]) -> User:
    user = get_user(tenant_id=tenant_id, user_id=user_id)
    payload = UserUpdate.model_validate(data)
    changed = payload.model_fields_set

    if not changed:
        raise BadRequest("No valid fields provided for update")

    # Promoting to or demoting from OWNER is reserved to owners
    touches_owner = "role" in changed and "OWNER" in (payload.role, user.role) and payload.role != user.role
    if touches_owner and actor.role != "OWNER":
        raise Forbidden("Only an owner can change owner roles")
    if user.role == "OWNER" and actor.role != "OWNER":
        raise Forbidden("Only an owner can edit owners")

    if user.id == actor.id and "is_active" in changed and not payload.is_active:
        raise BadRequest("You cannot deactivate your own account")

    with transactional():
        if "name" in changed:
            user.name = payload.name
        if "role" in changed:
            user.role = payload.role
        if "is_active" in changed:
            user.is_active = payload.is_active
        if "password" in changed:
            user.set_password(payload.password)

    logger.info("Updated user %s fields=%s", user.id, sorted(changed - {"password"}))
    return user


def delete_user(*, tenant_id: str, actor, user_id: str) -> None:
    if actor.id == user_id:
        raise BadRequest("You cannot delete your own account")

    user = get_user(tenant_id=tenant_id, user_id=user_id)

    with transactional():
        # Keep content, drop the reference
        for model in (Page, BlogPost, Service, CaseStudy):
            model.query.filter_by(tenant_id=tenant_id, updated_by_id=user.id).update(
                {"updated_by_id": None}, synchronize_session=False
            )
        BlogPost.query.filter_by(tenant_id=tenant_id, author_id=user.id).update(
            {"author_id": None}, synchronize_session=False
        )
        MediaAsset.query.filter_by(tenant_id=tenant_id, uploaded_by_id=user.id).update(
            {"uploaded_by_id": None}, synchronize_session=False
        )
        FormSubmission.query.filter_by(tenant_id=tenant_id, assigned_to_id=user.id).update(
            {"assigned_to_id": None}, synchronize_session=False
        )
        db.session.delete(user)

    logger.info("User %s deleted user %s", actor.id, user_id)
