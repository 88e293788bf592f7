from codex_cms.utils.time import isoformat


def normalize_media(asset):
    return {
        "id": asset.id,
        "kind": asset.kind,
        "url": asset.url,
        "filename": asset.filename,
        "alt": asset.alt,
        "meta": asset.meta or {},
        "uploaded_by_id": asset.uploaded_by_id,
        "created_at": isoformat(asset.created_at),
    }
