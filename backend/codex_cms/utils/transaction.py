import logging
from contextlib import contextmanager

from codex_cms.extensions import db

logger = logging.getLogger(__name__)


@contextmanager
def transactional():
    """
    One unit of work: an entry and its blocks, a submission and its
    attachments. Commits when the block exits cleanly, rolls back otherwise.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except Exception:
        logger.debug("Rolling back unit of work", exc_info=True)
        session.rollback()
        raise
