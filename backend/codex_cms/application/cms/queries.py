from typing import Optional

from werkzeug.exceptions import NotFound

from codex_cms.extensions import db
from codex_cms.utils.pagination import paginate


def get_entry(kind, *, tenant_id: str, entry_id: str):
    entry = kind.model.query.filter_by(id=entry_id, tenant_id=tenant_id).first()
    if not entry:
        raise NotFound(f"{kind.label} not found")
    return entry


def _ordering(kind):
    model = kind.model
    if kind.ordered:
        return (model.order.asc(), model.created_at.asc())
    return (model.updated_at.desc(), model.id.desc())


def list_entries(
    kind,
    *,
    tenant_id: str,
    page: int,
    limit: int,
    locale: Optional[str] = None,
    status: Optional[str] = None,
    slug: Optional[str] = None,
    search: Optional[str] = None,
):
    model = kind.model
    query = model.query.filter_by(tenant_id=tenant_id)

    if locale:
        query = query.filter(model.locale == locale)
    if status:
        query = query.filter(model.status == status)
    if slug:
        query = query.filter(model.slug == slug)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            db.or_(getattr(model, kind.label_field).ilike(pattern), model.slug.ilike(pattern))
        )

    return paginate(query.order_by(*_ordering(kind)), page=page, limit=limit)


def list_published(kind, *, tenant_id: str, locale: str):
    return (
        kind.model.query
        .filter_by(tenant_id=tenant_id, locale=locale, status="published")
        .order_by(*_ordering(kind))
        .all()
    )


def get_published(kind, *, tenant_id: str, slug: str, locale: str):
    return kind.model.query.filter_by(
        tenant_id=tenant_id,
        slug=slug,
        locale=locale,
        status="published",
    ).first()
