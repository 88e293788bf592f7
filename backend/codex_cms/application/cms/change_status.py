import logging
from datetime import datetime
from typing import Optional

from codex_cms.domain.invariants.content import assert_entry
from codex_cms.domain.lifecycle.content import assert_status_transition
from codex_cms.utils.transaction import transactional
from .common import apply_status, check_publish_permission
from .queries import get_entry

logger = logging.getLogger(__name__)


def change_status(
    *,
    kind,
    tenant_id: str,
    entry_id: str,
    actor_id: Optional[str],
    status: str,
    scheduled_at: Optional[datetime] = None,
    can_publish: bool = False,
):
    entry = get_entry(kind, tenant_id=tenant_id, entry_id=entry_id)
    from_status = entry.status

    # Lifecycle transition enforcement
    assert_status_transition(from_status=from_status, to_status=status)
    check_publish_permission(from_status=from_status, to_status=status, can_publish=can_publish)

    with transactional():
        apply_status(entry, status, scheduled_at)
        entry.updated_by_id = actor_id
        assert_entry(entry)

    logger.info("%s %s: %s -> %s", kind.name, entry.id, from_status, status)
    return entry
