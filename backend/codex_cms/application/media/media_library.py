import logging
from typing import Any, Dict, Optional

from werkzeug.exceptions import NotFound

from codex_cms.domain.schemas import MediaUpdate
from codex_cms.extensions import db
from codex_cms.models.blog_post import BlogPost
from codex_cms.models.media_asset import MediaAsset
from codex_cms.utils.media import MEDIA_MIME_TYPES, check_upload, delete_file, save_file
from codex_cms.utils.pagination import paginate
from codex_cms.utils.transaction import transactional

logger = logging.getLogger(__name__)


def upload_media(*, tenant_id: str, actor_id: Optional[str], file, alt: Optional[str] = None) -> MediaAsset:
    size = check_upload(file, MEDIA_MIME_TYPES)
    filename, url = save_file(file, subfolder="media")

    asset = MediaAsset(
        tenant_id=tenant_id,
        kind=MEDIA_MIME_TYPES[file.mimetype],
        url=url,
        filename=filename,
        alt=alt or None,
        meta={
            "originalName": file.filename,
            "size": size,
            "type": file.mimetype,
        },
        uploaded_by_id=actor_id,
    )

    try:
        with transactional():
            db.session.add(asset)
    except Exception:
        delete_file(url)
        raise

    logger.info("Uploaded media %s (%s, %d bytes)", asset.id, asset.kind, size)
    return asset


def list_media(*, tenant_id: str, page: int, limit: int, kind: Optional[str] = None):
    query = MediaAsset.query.filter_by(tenant_id=tenant_id)
    if kind:
        query = query.filter(MediaAsset.kind == kind)
    query = query.order_by(MediaAsset.created_at.desc(), MediaAsset.id.desc())
    return paginate(query, page=page, limit=limit)


def get_media(*, tenant_id: str, media_id: str) -> MediaAsset:
    asset = MediaAsset.query.filter_by(id=media_id, tenant_id=tenant_id).first()
    if not asset:
        raise NotFound("Media not found")
    return asset


def update_media(*, tenant_id: str, media_id: str, data: Dict[str, Any]) -> MediaAsset:
    asset = get_media(tenant_id=tenant_id, media_id=media_id)
    payload = MediaUpdate.model_validate(data)

    with transactional():
        asset.alt = payload.alt

    return asset


def delete_media(*, tenant_id: str, media_id: str) -> None:
    asset = get_media(tenant_id=tenant_id, media_id=media_id)
    url = asset.url

    with transactional():
        BlogPost.query.filter_by(tenant_id=tenant_id, cover_id=asset.id).update(
            {"cover_id": None}, synchronize_session=False
        )
        db.session.delete(asset)

    delete_file(url)
    logger.info("Deleted media %s", media_id)
