from typing import Set

from codex_cms.domain.constants import PUBLISH_STATUSES
from codex_cms.domain.invariants.exceptions import IllegalTransition

# Explicit allowed state transitions
ALLOWED_STATUS_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"inReview", "scheduled", "published"},
    "inReview": {"draft", "scheduled", "published"},
    "scheduled": {"draft", "inReview", "published"},
    "published": {"draft", "inReview"},
}

# Entering these states needs the content.publish permission.
PUBLISHING_STATUSES: Set[str] = {"scheduled", "published"}


def assert_status_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards content lifecycle transitions.
    Single source of truth for status changes.
    """
    if to_status not in PUBLISH_STATUSES:
        raise IllegalTransition(f"Unknown status: {to_status}")

    if from_status == to_status:
        return

    allowed = ALLOWED_STATUS_TRANSITIONS.get(from_status, set())
    if to_status not in allowed:
        raise IllegalTransition(
            f"Illegal status transition: {from_status} → {to_status}"
        )


def requires_publish_permission(*, from_status: str | None, to_status: str) -> bool:
    return to_status in PUBLISHING_STATUSES and from_status != to_status
