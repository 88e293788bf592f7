from codex_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class FormSubmission(BaseModel, TenantMixin):
    __tablename__ = "form_submissions"

    form_type = db.Column(db.String(50), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), nullable=True)
    company = db.Column(db.String(255), nullable=True)
    service = db.Column(db.String(255), nullable=True)
    budget = db.Column(db.String(100), nullable=True)
    timeline = db.Column(db.String(100), nullable=True)
    message = db.Column(db.Text, nullable=False)
    meta = db.Column("metadata", db.JSON, nullable=True)

    status = db.Column(db.String(20), nullable=False, default="unread", index=True)
    notes = db.Column(db.Text, nullable=True)
    assigned_to_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    assigned_user = db.relationship("User")
    attachments = db.relationship(
        "FormAttachment",
        back_populates="submission",
        cascade="all, delete-orphan",
    )


class FormAttachment(BaseModel):
    __tablename__ = "form_attachments"

    submission_id = db.Column(
        db.String(36),
        db.ForeignKey("form_submissions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    filename = db.Column(db.String(255), nullable=False)
    original_name = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(100), nullable=False)
    size = db.Column(db.Integer, nullable=False)
    url = db.Column(db.String(512), nullable=False)

    submission = db.relationship("FormSubmission", back_populates="attachments")
