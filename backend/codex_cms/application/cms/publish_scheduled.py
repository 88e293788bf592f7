import logging
from datetime import datetime
from typing import Dict, Optional

from codex_cms.utils.time import utcnow
from codex_cms.utils.transaction import transactional
from .registry import KINDS

logger = logging.getLogger(__name__)


def publish_due(now: Optional[datetime] = None, tenant_id: Optional[str] = None) -> Dict[str, int]:
    """
    Publish every scheduled entry whose ``scheduled_at`` has passed.
    Returns the number of entries published per kind.
    """
    now = now or utcnow()
    published: Dict[str, int] = {}

    with transactional():
        for kind in KINDS.values():
            query = kind.model.query.filter(
                kind.model.status == "scheduled",
                kind.model.scheduled_at.isnot(None),
                kind.model.scheduled_at <= now,
            )
            if tenant_id is not None:
                query = query.filter(kind.model.tenant_id == tenant_id)

            entries = query.all()
            for entry in entries:
                entry.status = "published"
                entry.published_at = entry.scheduled_at or now
            published[kind.name] = len(entries)

    logger.info("Published scheduled content: %s", published)
    return published
