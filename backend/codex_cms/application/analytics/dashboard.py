# codex_cms/application/analytics/dashboard.py
"""
Admin dashboard metrics derived from stored content and form submissions.
"""
from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Dict, Tuple

from dateutil.relativedelta import relativedelta
from werkzeug.exceptions import BadRequest

from codex_cms.extensions import db
from codex_cms.models import FormSubmission, User
from codex_cms.normalizers.submission import normalize_submission
from codex_cms.utils.time import normalize_ts, utcnow
from codex_cms.application.cms.registry import KINDS

TIMEFRAMES = ("7d", "30d", "90d", "month")

REFERRER_SOURCES = (
    ("google", "Google"),
    ("facebook", "Facebook"),
    ("linkedin", "LinkedIn"),
    ("twitter", "Twitter"),
)


def period_bounds(timeframe: str, now: datetime) -> Tuple[datetime, datetime]:
    """Return (start, previous_start) for a timeframe."""
    if timeframe not in TIMEFRAMES:
        raise BadRequest(f"timeframe must be one of {', '.join(TIMEFRAMES)}")

    if timeframe == "month":
        start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        return start, start - relativedelta(months=1)

    days = int(timeframe[:-1])
    start = now - timedelta(days=days)
    return start, start - timedelta(days=days)


def change_percent(current: int, previous: int) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 1)


def referrer_source(metadata) -> str:
    referrer = (metadata or {}).get("referrer")
    if not referrer:
        return "Direct"
    for needle, label in REFERRER_SOURCES:
        if needle in referrer.lower():
            return label
    return "Other"


def build_dashboard(*, tenant_id: str, timeframe: str = "30d", now: datetime = None) -> Dict[str, Any]:
    now = now or utcnow()
    start, previous_start = period_bounds(timeframe, now)

    submissions = FormSubmission.query.filter_by(tenant_id=tenant_id)
    current = submissions.filter(FormSubmission.created_at >= start).count()
    previous = submissions.filter(
        FormSubmission.created_at >= previous_start,
        FormSubmission.created_at < start,
    ).count()

    published = {
        kind.collection: kind.model.query.filter_by(tenant_id=tenant_id, status="published").count()
        for kind in KINDS.values()
    }

    by_status = (
        db.session.query(FormSubmission.status, db.func.count(FormSubmission.id))
        .filter(FormSubmission.tenant_id == tenant_id, FormSubmission.created_at >= start)
        .group_by(FormSubmission.status)
        .all()
    )

    in_period = (
        submissions.filter(FormSubmission.created_at >= start)
        .order_by(FormSubmission.created_at.asc())
        .all()
    )
    daily = Counter(normalize_ts(s.created_at).date().isoformat() for s in in_period)
    referrers = Counter(referrer_source(s.meta) for s in in_period)

    recent = submissions.order_by(FormSubmission.created_at.desc()).limit(10).all()

    return {
        "timeframe": timeframe,
        "period": {"start": start.isoformat(), "end": now.isoformat()},
        "submissions": {
            "current": current,
            "previous": previous,
            "change_percent": change_percent(current, previous),
        },
        "published": published,
        "active_users": User.query.filter_by(tenant_id=tenant_id, is_active=True).count(),
        "submissions_by_status": [
            {"status": status, "count": count} for status, count in by_status
        ],
        "trend": [
            {"date": date, "submissions": count} for date, count in sorted(daily.items())
        ][-14:],
        "top_referrers": [
            {"referrer": source, "count": count} for source, count in referrers.most_common(5)
        ],
        "recent_submissions": [normalize_submission(s) for s in recent],
    }
