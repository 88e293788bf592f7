from typing import Any, Dict

from werkzeug.exceptions import BadRequest

from codex_cms.extensions import db
from codex_cms.models.site_setting import SiteSetting
from codex_cms.utils.transaction import transactional


def _unwrap(value):
    if isinstance(value, dict) and set(value) == {"value"}:
        return value["value"]
    return value


def get_settings(tenant_id: str) -> Dict[str, Any]:
    rows = SiteSetting.query.filter_by(tenant_id=tenant_id).order_by(SiteSetting.key).all()
    return {row.key: row.value for row in rows}


def get_setting_value(tenant_id: str, key: str, default: Any = None) -> Any:
    """Stored scalars are wrapped as ``{"value": v}``; this returns ``v``."""
    row = SiteSetting.query.filter_by(tenant_id=tenant_id, key=key).first()
    if row is None:
        return default
    value = _unwrap(row.value)
    return default if value is None else value


def update_settings(*, tenant_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Upsert every key in ``data``. Scalars are stored wrapped as ``{"value": v}``.
    """
    if not data:
        raise BadRequest("No settings provided")

    for key in data:
        if not isinstance(key, str) or not key or len(key) > 100:
            raise BadRequest(f"Invalid setting key: {key!r}")

    with transactional():
        existing = {
            row.key: row
            for row in SiteSetting.query.filter(
                SiteSetting.tenant_id == tenant_id,
                SiteSetting.key.in_(list(data)),
            )
        }
        for key, value in data.items():
            stored = value if isinstance(value, (dict, list)) else {"value": value}
            row = existing.get(key)
            if row is None:
                db.session.add(SiteSetting(tenant_id=tenant_id, key=key, value=stored))
            else:
                row.value = stored

    return get_settings(tenant_id)
