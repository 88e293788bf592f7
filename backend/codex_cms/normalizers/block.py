from codex_cms.utils.sanitize import unwrap_block_data
from codex_cms.utils.time import isoformat


def normalize_block(block, admin=False):
    base = {
        "id": block.id,
        "type": block.type,
        "order": block.order,
        "data": unwrap_block_data(block.data or {}),
    }

    if admin:
        base["created_at"] = isoformat(block.created_at)
        base["updated_at"] = isoformat(block.updated_at)

    return base
