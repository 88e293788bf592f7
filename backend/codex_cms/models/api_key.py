from codex_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class ApiKey(BaseModel, TenantMixin):
    __tablename__ = "api_keys"

    user_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)

    # Only the SHA-256 digest is stored; the key itself is shown once.
    key_hash = db.Column(db.String(64), unique=True, nullable=False, index=True)
    prefix = db.Column(db.String(16), nullable=False)
    last_four = db.Column(db.String(4), nullable=False)

    permissions = db.Column(db.String(10), nullable=False, default="read")  # read | write | admin | owner
    last_used_at = db.Column(db.DateTime(timezone=True), nullable=True)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=True)

    user = db.relationship("User", back_populates="api_keys")

    @property
    def masked_key(self) -> str:
        return f"{self.prefix}...{self.last_four}"
