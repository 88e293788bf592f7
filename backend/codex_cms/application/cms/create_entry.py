import logging
from typing import Any, Dict, Optional

from codex_cms.domain.invariants.content import assert_entry
from codex_cms.extensions import db
from codex_cms.utils.transaction import transactional
from .blocks import build_blocks, prepare_blocks
from .common import apply_status, assert_references, assert_unique_slug, check_publish_permission

logger = logging.getLogger(__name__)


def create_entry(
    *,
    kind,
    tenant_id: str,
    actor_id: Optional[str],
    data: Dict[str, Any],
    can_publish: bool = False,
):
    """
    Create a content entry together with its blocks.

    Edge cases handled:
    - Duplicate slug per tenant and locale (409)
    - References to pages, media or users outside the tenant (400)
    - Publishing without the publish permission (403)
    """
    payload = kind.create_schema.model_validate(data)

    check_publish_permission(from_status=None, to_status=payload.status, can_publish=can_publish)
    assert_unique_slug(kind, tenant_id=tenant_id, slug=payload.slug, locale=payload.locale)

    values = payload.model_dump(include=set(kind.fields))
    assert_references(tenant_id=tenant_id, values=values)
    prepared = prepare_blocks(payload.blocks)

    entry = kind.model(**values)
    entry.tenant_id = tenant_id
    entry.slug = payload.slug
    entry.locale = payload.locale
    entry.seo = payload.seo.model_dump(by_alias=True, exclude_none=True, mode="json") if payload.seo else None
    entry.updated_by_id = actor_id
    if kind.name == "blog_post" and entry.author_id is None:
        entry.author_id = actor_id
    apply_status(entry, payload.status, payload.scheduled_at)

    with transactional():
        db.session.add(entry)
        entry.blocks = build_blocks(entry, prepared)
        db.session.flush()  # ensures entry.id is available

        # Domain invariants (single source of truth)
        assert_entry(entry)

    logger.info("Created %s %s (%s/%s)", kind.name, entry.id, entry.locale, entry.slug)
    return entry
