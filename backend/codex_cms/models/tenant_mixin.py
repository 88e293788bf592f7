from sqlalchemy.orm import declared_attr
from codex_cms.extensions import db


class TenantMixin:
    @declared_attr
    def tenant_id(cls):
        return db.Column(
            db.String(36),
            db.ForeignKey("tenants.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
