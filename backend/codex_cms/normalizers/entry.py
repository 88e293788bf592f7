# codex_cms/normalizers/entry.py
from __future__ import annotations

from typing import Any, Dict

from codex_cms.utils.time import isoformat
from .block import normalize_block


def normalize_entry(kind, entry, admin: bool = False, include_blocks: bool = True) -> Dict[str, Any]:
    """
    Normalizes any content entry (page, blog post, service, case study).

    Kind-specific columns come from ``kind.fields``; public output omits
    workflow metadata.
    """
    data: Dict[str, Any] = {
        "id": entry.id,
        "kind": kind.name,
        "slug": entry.slug,
        "locale": entry.locale,
        "seo": entry.seo or {},
        "published_at": isoformat(entry.published_at),
    }

    for field in kind.fields:
        data[field] = getattr(entry, field)

    if admin:
        data.update({
            "status": entry.status,
            "scheduled_at": isoformat(entry.scheduled_at),
            "updated_by_id": entry.updated_by_id,
            "created_at": isoformat(entry.created_at),
            "updated_at": isoformat(entry.updated_at),
        })

    if include_blocks:
        blocks = sorted(entry.blocks, key=lambda b: b.order)
        if not admin:
            blocks = [b for b in blocks if (b.data or {}).get("visible", True)]
        data["blocks"] = [normalize_block(b, admin=admin) for b in blocks]

    return data
