from codex_cms.domain.constants import BLOCK_TYPES
from .exceptions import InvariantViolation

BLOCK_OWNER_FIELDS = ("page_id", "blog_post_id", "service_id", "case_study_id")


def assert_block_order(blocks):
    orders = [block.order for block in blocks]
    if not orders:
        return

    expected = list(range(len(orders)))
    if sorted(orders) != expected:
        raise InvariantViolation(
            f"Block orders are not consecutive starting from 0: {orders}"
        )


def assert_block_owner(block):
    owners = [field for field in BLOCK_OWNER_FIELDS if getattr(block, field, None)]
    if len(owners) > 1:
        raise InvariantViolation(
            f"Block belongs to more than one entry: {owners}"
        )


def assert_block_type(block):
    if block.type not in BLOCK_TYPES:
        raise InvariantViolation(f"Unknown block type: {block.type}")

    data_type = (block.data or {}).get("type")
    if data_type != block.type:
        raise InvariantViolation(
            f"Block type '{block.type}' does not match payload type '{data_type}'"
        )
