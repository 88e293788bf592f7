from codex_cms.domain.constants import PUBLISH_STATUSES, SUPPORTED_LOCALES
from .block import assert_block_order, assert_block_owner, assert_block_type
from .exceptions import InvariantViolation


def assert_entry(entry):
    if entry.locale not in SUPPORTED_LOCALES:
        raise InvariantViolation(f"Unsupported locale: {entry.locale}")

    if entry.status not in PUBLISH_STATUSES:
        raise InvariantViolation(f"Unknown status: {entry.status}")

    if entry.status == "scheduled" and entry.scheduled_at is None:
        raise InvariantViolation("Scheduled content requires scheduled_at.")

    blocks = entry.blocks
    assert_block_order(blocks)

    for block in blocks:
        assert_block_owner(block)
        assert_block_type(block)
