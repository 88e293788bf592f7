from werkzeug.exceptions import BadRequest, Conflict, Forbidden

from codex_cms.domain.lifecycle.content import requires_publish_permission
from codex_cms.models import MediaAsset, Page, User
from codex_cms.utils.time import to_utc, utcnow


def assert_unique_slug(kind, *, tenant_id, slug, locale, exclude_id=None):
    query = kind.model.query.filter_by(tenant_id=tenant_id, slug=slug, locale=locale)
    if exclude_id is not None:
        query = query.filter(kind.model.id != exclude_id)

    if query.first() is not None:
        raise Conflict(
            f"{kind.label} with slug '{slug}' already exists for locale '{locale}'"
        )


def assert_references(*, tenant_id, values):
    """Referenced rows must exist in the same tenant."""
    checks = (
        ("page_id", Page, "Referenced page not found"),
        ("cover_id", MediaAsset, "Cover media not found"),
        ("author_id", User, "Author not found"),
    )
    for field, model, message in checks:
        ref = values.get(field)
        if ref and not model.query.filter_by(id=ref, tenant_id=tenant_id).first():
            raise BadRequest(message)


def check_publish_permission(*, from_status, to_status, can_publish):
    if requires_publish_permission(from_status=from_status, to_status=to_status) and not can_publish:
        raise Forbidden("Publishing requires the content.publish permission")


def apply_status(entry, status, scheduled_at=None):
    entry.status = status
    if scheduled_at is not None:
        entry.scheduled_at = to_utc(scheduled_at)

    if status == "published" and entry.published_at is None:
        entry.published_at = utcnow()
    elif status != "published":
        entry.published_at = None
