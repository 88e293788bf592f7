from codex_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .content_mixin import ContentMixin


class CaseStudy(BaseModel, TenantMixin, ContentMixin):
    __tablename__ = "case_studies"

    title = db.Column(db.String(200), nullable=False)
    client = db.Column(db.String(200), nullable=True)
    sector = db.Column(db.String(200), nullable=True)
    category = db.Column(db.String(20), nullable=False, default="caseStudy")  # caseStudy | technology
    icon = db.Column(db.String(100), nullable=True)
    order = db.Column(db.Integer, nullable=False, default=0)
    page_id = db.Column(db.String(36), db.ForeignKey("pages.id", ondelete="SET NULL"), nullable=True)

    page = db.relationship("Page")

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", "locale", name="uq_case_study_slug_locale"),
    )

    blocks = db.relationship(
        "Block",
        order_by="Block.order",
        cascade="all, delete-orphan",
    )
