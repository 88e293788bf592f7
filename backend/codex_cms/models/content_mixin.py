from sqlalchemy.orm import declared_attr
from codex_cms.extensions import db


class ContentMixin:
    """Columns shared by every localized, publishable content entry."""

    slug = db.Column(db.String(200), nullable=False, index=True)
    locale = db.Column(db.String(5), nullable=False, default="en", index=True)
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    seo = db.Column(db.JSON(none_as_null=True), nullable=True)
    scheduled_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    @declared_attr
    def updated_by_id(cls):
        return db.Column(
            db.String(36),
            db.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        )

    @declared_attr
    def updated_by(cls):
        return db.relationship("User", foreign_keys=[cls.updated_by_id])
