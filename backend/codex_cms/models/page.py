from codex_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .content_mixin import ContentMixin


class Page(BaseModel, TenantMixin, ContentMixin):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", "locale", name="uq_page_slug_locale"),
    )

    # Relationship to Blocks (ordered, cascade deletes)
    blocks = db.relationship(
        "Block",
        order_by="Block.order",
        cascade="all, delete-orphan",
    )
