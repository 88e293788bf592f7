from codex_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class MediaAsset(BaseModel, TenantMixin):
    __tablename__ = "media_assets"

    kind = db.Column(db.String(10), nullable=False, default="file")  # image | video | file
    url = db.Column(db.String(512), nullable=False)
    filename = db.Column(db.String(255), nullable=False)
    alt = db.Column(db.String(255), nullable=True)
    meta = db.Column(db.JSON, default=dict)  # originalName, size, type
    uploaded_by_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
