from codex_cms.utils.time import isoformat


def normalize_attachment(attachment):
    return {
        "id": attachment.id,
        "filename": attachment.filename,
        "original_name": attachment.original_name,
        "mime_type": attachment.mime_type,
        "size": attachment.size,
        "url": attachment.url,
    }


def normalize_submission(submission, detail=False):
    data = {
        "id": submission.id,
        "form_type": submission.form_type,
        "name": submission.name,
        "email": submission.email,
        "phone": submission.phone,
        "company": submission.company,
        "service": submission.service,
        "budget": submission.budget,
        "timeline": submission.timeline,
        "message": submission.message,
        "status": submission.status,
        "assigned_to_id": submission.assigned_to_id,
        "created_at": isoformat(submission.created_at),
        "updated_at": isoformat(submission.updated_at),
    }

    if detail:
        data["notes"] = submission.notes
        data["metadata"] = submission.meta or {}
        data["attachments"] = [normalize_attachment(a) for a in submission.attachments]

    return data
