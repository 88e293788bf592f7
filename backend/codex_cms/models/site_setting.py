from codex_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class SiteSetting(BaseModel, TenantMixin):
    __tablename__ = "site_settings"

    key = db.Column(db.String(100), nullable=False)
    value = db.Column(db.JSON, nullable=False, default=dict)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "key", name="uq_site_setting_key"),
    )
