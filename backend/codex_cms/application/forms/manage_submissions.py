import logging
from typing import Any, Dict, List, Optional

from werkzeug.exceptions import BadRequest, NotFound

from codex_cms.domain.schemas import SubmissionUpdate
from codex_cms.extensions import db
from codex_cms.models.form_submission import FormSubmission
from codex_cms.models.user import User
from codex_cms.utils.media import delete_file
from codex_cms.utils.pagination import paginate
from codex_cms.utils.transaction import transactional

logger = logging.getLogger(__name__)


def list_submissions(
    *,
    tenant_id: str,
    page: int,
    limit: int,
    status: Optional[str] = None,
    form_type: Optional[str] = None,
    search: Optional[str] = None,
):
    query = FormSubmission.query.filter_by(tenant_id=tenant_id)

    if status:
        query = query.filter(FormSubmission.status == status)
    if form_type:
        query = query.filter(FormSubmission.form_type == form_type)
    if search:
        pattern = f"%{search}%"
        query = query.filter(db.or_(
            FormSubmission.name.ilike(pattern),
            FormSubmission.email.ilike(pattern),
            FormSubmission.company.ilike(pattern),
            FormSubmission.message.ilike(pattern),
        ))

    query = query.order_by(FormSubmission.created_at.desc(), FormSubmission.id.desc())
    return paginate(query, page=page, limit=limit)


def get_submission(*, tenant_id: str, submission_id: str, mark_read: bool = True) -> FormSubmission:
    submission = FormSubmission.query.filter_by(id=submission_id, tenant_id=tenant_id).first()
    if not submission:
        raise NotFound("Submission not found")

    # Opening an unread submission marks it as read
    if mark_read and submission.status == "unread":
        with transactional():
            submission.status = "read"

    return submission


def update_submission(*, tenant_id: str, submission_id: str, data: Dict[str, Any]) -> FormSubmission:
    submission = get_submission(tenant_id=tenant_id, submission_id=submission_id, mark_read=False)
    payload = SubmissionUpdate.model_validate(data)
    changed = payload.model_fields_set

    if not changed:
        raise BadRequest("No valid fields provided for update")

    if "assigned_to" in changed and payload.assigned_to:
        assignee = User.query.filter_by(id=payload.assigned_to, tenant_id=tenant_id).first()
        if not assignee:
            raise BadRequest("Assigned user not found")

    with transactional():
        if "status" in changed:
            submission.status = payload.status
        if "notes" in changed:
            submission.notes = payload.notes
        if "assigned_to" in changed:
            submission.assigned_to_id = payload.assigned_to or None

    return submission


def _delete(submission):
    urls = [a.url for a in submission.attachments]
    db.session.delete(submission)
    return urls


def delete_submission(*, tenant_id: str, submission_id: str) -> None:
    submission = get_submission(tenant_id=tenant_id, submission_id=submission_id, mark_read=False)

    with transactional():
        urls = _delete(submission)

    for url in urls:
        delete_file(url)
    logger.info("Deleted submission %s", submission_id)


def bulk_delete_submissions(*, tenant_id: str, ids: List[str]) -> int:
    submissions = FormSubmission.query.filter(
        FormSubmission.tenant_id == tenant_id,
        FormSubmission.id.in_(ids),
    ).all()

    urls = []
    with transactional():
        for submission in submissions:
            urls.extend(_delete(submission))

    for url in urls:
        delete_file(url)
    logger.info("Bulk deleted %d submissions", len(submissions))
    return len(submissions)
