from codex_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .content_mixin import ContentMixin


class BlogPost(BaseModel, TenantMixin, ContentMixin):
    __tablename__ = "blog_posts"

    title = db.Column(db.String(200), nullable=False)
    excerpt = db.Column(db.Text, nullable=True)
    cover_id = db.Column(db.String(36), db.ForeignKey("media_assets.id", ondelete="SET NULL"), nullable=True)
    author_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    cover = db.relationship("MediaAsset")
    author = db.relationship("User", foreign_keys=[author_id])

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", "locale", name="uq_blog_post_slug_locale"),
    )

    blocks = db.relationship(
        "Block",
        order_by="Block.order",
        cascade="all, delete-orphan",
    )
