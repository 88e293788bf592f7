import logging

from codex_cms.extensions import db
from codex_cms.models import CaseStudy, Service
from codex_cms.utils.transaction import transactional
from .queries import get_entry

logger = logging.getLogger(__name__)


def delete_entry(*, kind, tenant_id: str, entry_id: str) -> None:
    """
    Hard-delete an entry; its blocks go with it.
    Services and case studies linked to a deleted page are unlinked.
    """
    entry = get_entry(kind, tenant_id=tenant_id, entry_id=entry_id)

    with transactional():
        if kind.name == "page":
            for model in (Service, CaseStudy):
                model.query.filter_by(tenant_id=tenant_id, page_id=entry.id).update(
                    {"page_id": None}, synchronize_session=False
                )

        db.session.delete(entry)

    logger.info("Deleted %s %s", kind.name, entry_id)
