import uuid

from codex_cms.extensions import db
from codex_cms.utils.time import utcnow


class BaseModel(db.Model):
    """UUID string key plus creation/modification timestamps (UTC)."""
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
