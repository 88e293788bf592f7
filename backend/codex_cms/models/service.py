from codex_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .content_mixin import ContentMixin


class Service(BaseModel, TenantMixin, ContentMixin):
    __tablename__ = "services"

    name = db.Column(db.String(100), nullable=False)
    summary = db.Column(db.String(300), nullable=True)
    icon = db.Column(db.String(100), nullable=True)
    order = db.Column(db.Integer, nullable=False, default=0)
    page_id = db.Column(db.String(36), db.ForeignKey("pages.id", ondelete="SET NULL"), nullable=True)

    page = db.relationship("Page")

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", "locale", name="uq_service_slug_locale"),
    )

    blocks = db.relationship(
        "Block",
        order_by="Block.order",
        cascade="all, delete-orphan",
    )
