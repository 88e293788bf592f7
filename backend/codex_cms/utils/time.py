from datetime import datetime, timezone


def normalize_ts(value):
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def isoformat(value):
    value = normalize_ts(value)
    return value.isoformat() if value else None


def utcnow():
    return datetime.now(timezone.utc)


def to_utc(value):
    if value is None:
        return None
    return normalize_ts(value).astimezone(timezone.utc)
