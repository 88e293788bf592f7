import logging
from typing import Any, Dict, Optional

from werkzeug.exceptions import BadRequest

from codex_cms.domain.invariants.content import assert_entry
from codex_cms.domain.lifecycle.content import assert_status_transition
from codex_cms.utils.time import to_utc
from codex_cms.utils.transaction import transactional
from .blocks import replace_blocks
from .common import apply_status, assert_references, assert_unique_slug, check_publish_permission
from .queries import get_entry

logger = logging.getLogger(__name__)


def update_entry(
    *,
    kind,
    tenant_id: str,
    entry_id: str,
    actor_id: Optional[str],
    data: Dict[str, Any],
    can_publish: bool = False,
):
    """
    Update mutable fields on an entry.

    Design rules:
    - Only fields present in the payload change
    - No silent no-op updates
    - ``blocks`` replaces the entire block list atomically
    - Invariants always revalidated
    """
    entry = get_entry(kind, tenant_id=tenant_id, entry_id=entry_id)
    payload = kind.update_schema.model_validate(data)
    changed = payload.model_fields_set

    if not changed:
        raise BadRequest("No valid fields provided for update")

    slug = payload.slug if "slug" in changed else entry.slug
    locale = payload.locale if "locale" in changed else entry.locale
    if slug != entry.slug or locale != entry.locale:
        assert_unique_slug(kind, tenant_id=tenant_id, slug=slug, locale=locale, exclude_id=entry.id)

    values = payload.model_dump(include=set(kind.fields) & changed)
    assert_references(tenant_id=tenant_id, values=values)

    if "status" in changed:
        assert_status_transition(from_status=entry.status, to_status=payload.status)
        check_publish_permission(
            from_status=entry.status, to_status=payload.status, can_publish=can_publish
        )

    with transactional():
        for field, value in values.items():
            setattr(entry, field, value)

        entry.slug = slug
        entry.locale = locale
        if "seo" in changed:
            entry.seo = payload.seo.model_dump(by_alias=True, exclude_none=True, mode="json") if payload.seo else None
        if "scheduled_at" in changed:
            entry.scheduled_at = to_utc(payload.scheduled_at)
        if "status" in changed:
            apply_status(entry, payload.status)
        if "blocks" in changed:
            replace_blocks(entry, payload.blocks or [])

        entry.updated_by_id = actor_id

        # Domain invariant enforcement
        assert_entry(entry)

    logger.info("Updated %s %s fields=%s", kind.name, entry.id, sorted(changed))
    return entry
