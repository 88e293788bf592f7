from codex_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class Block(BaseModel, TenantMixin):
    __tablename__ = "blocks"

    # Exactly one owner column is set.
    page_id = db.Column(db.String(36), db.ForeignKey("pages.id", ondelete="CASCADE"), nullable=True)
    blog_post_id = db.Column(db.String(36), db.ForeignKey("blog_posts.id", ondelete="CASCADE"), nullable=True)
    service_id = db.Column(db.String(36), db.ForeignKey("services.id", ondelete="CASCADE"), nullable=True)
    case_study_id = db.Column(db.String(36), db.ForeignKey("case_studies.id", ondelete="CASCADE"), nullable=True)

    type = db.Column(db.String(50), nullable=False)  # hero, featureGrid, faq, ...
    data = db.Column(db.JSON, nullable=False, default=dict)  # validated, sanitized payload
    order = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.Index("idx_block_page_order", "page_id", "order"),
        db.Index("idx_block_blog_post_order", "blog_post_id", "order"),
        db.Index("idx_block_service_order", "service_id", "order"),
        db.Index("idx_block_case_study_order", "case_study_id", "order"),
    )
