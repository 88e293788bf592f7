import json
import logging
from typing import Any, Dict, List, Optional

from werkzeug.exceptions import BadRequest

from codex_cms.application.notifications.email import notify_submission
from codex_cms.domain.schemas import ContactSubmission
from codex_cms.extensions import db
from codex_cms.models.form_submission import FormAttachment, FormSubmission
from codex_cms.utils.media import ATTACHMENT_MIME_TYPES, check_upload, delete_file, save_file
from codex_cms.utils.time import utcnow
from codex_cms.utils.transaction import transactional

logger = logging.getLogger(__name__)


def _parse_metadata(raw) -> Dict[str, Any]:
    if isinstance(raw, dict):
        return dict(raw)
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except ValueError:
        logger.warning("Discarding unparseable submission metadata")
        return {}
    return parsed if isinstance(parsed, dict) else {}


def submit_form(
    *,
    tenant_id: str,
    data: Dict[str, Any],
    files: Optional[List[Any]] = None,
    client_ip: str,
    user_agent: Optional[str] = None,
    referrer: Optional[str] = None,
) -> FormSubmission:
    """
    Store a public form submission and notify the team.

    Edge cases handled:
    - Honeypot filled in (bot): rejected before anything is stored
    - Attachments of a disallowed type or over the size limit (400/413)
    - Notification failures: logged, never fatal
    """
    payload = ContactSubmission.model_validate(data)

    if payload.honeypot:
        logger.info("Honeypot triggered from %s", client_ip)
        raise BadRequest("Submission rejected")

    uploads = [f for f in (files or []) if f and f.filename]
    sizes = [check_upload(f, ATTACHMENT_MIME_TYPES) for f in uploads]

    metadata = _parse_metadata(payload.metadata)
    metadata["ip"] = client_ip
    if referrer:
        metadata.setdefault("referrer", referrer)
    if user_agent:
        metadata.setdefault("userAgent", user_agent)

    submission = FormSubmission(
        tenant_id=tenant_id,
        form_type=payload.form_type,
        name=payload.name,
        email=str(payload.email),
        phone=payload.phone,
        company=payload.company,
        service=payload.service,
        budget=payload.budget,
        timeline=payload.timeline,
        message=payload.message,
        meta=metadata,
        status="unread",
    )

    saved_urls = []
    try:
        with transactional():
            db.session.add(submission)
            for upload, size in zip(uploads, sizes):
                filename, url = save_file(upload, subfolder="attachments")
                saved_urls.append(url)
                submission.attachments.append(FormAttachment(
                    filename=filename,
                    original_name=upload.filename,
                    mime_type=upload.mimetype,
                    size=size,
                    url=url,
                ))
    except Exception:
        for url in saved_urls:
            delete_file(url)
        raise

    logger.info("Stored %s submission %s from %s", submission.form_type, submission.id, client_ip)

    notify_submission(tenant_id, submission, {
        "submitted_at": utcnow(),
        "ip_address": client_ip,
        "user_agent": user_agent,
        "referrer": referrer,
        "locale": metadata.get("locale", "en"),
    })
    return submission


def public_reference(submission) -> str:
    return submission.id[:8].upper()
