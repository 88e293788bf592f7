# codex_cms/application/cms/blocks.py
"""
The block pipeline.

Raw editor payloads are unwrapped and sanitized, validated against their
variant, dumped to the canonical JSON form and stored as ordered rows. The
per-block operations keep orders consecutive from 0.
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError
from werkzeug.exceptions import BadRequest, NotFound

from codex_cms.domain.blocks import dump_block, error_details, parse_block
from codex_cms.domain.invariants.content import assert_entry
from codex_cms.domain.invariants.exceptions import SchemaViolation
from codex_cms.extensions import db
from codex_cms.models.block import Block
from codex_cms.utils.order import compact_order
from codex_cms.utils.sanitize import sanitize_block_data
from codex_cms.utils.time import utcnow
from codex_cms.utils.transaction import transactional
from .registry import owner_of


def prepare_block(raw: Any, prefix: Sequence[Any] = ()) -> Tuple[str, Dict[str, Any]]:
    if not isinstance(raw, dict):
        raise SchemaViolation(
            "Invalid block data",
            details=[{"loc": list(prefix), "msg": "Block must be an object", "type": "dict_type"}],
        )

    try:
        block = parse_block(sanitize_block_data(raw))
    except ValidationError as exc:
        raise SchemaViolation("Invalid block data", details=error_details(exc, prefix)) from exc

    data = dump_block(block)
    return data["type"], data


def prepare_blocks(raw_blocks: List[Any]) -> List[Tuple[str, Dict[str, Any]]]:
    """
    Validate a list of raw blocks, collecting every error before failing.
    """
    if not isinstance(raw_blocks, list):
        raise BadRequest("blocks must be a list")

    prepared = []
    details: List[Dict[str, Any]] = []
    for index, raw in enumerate(raw_blocks):
        try:
            prepared.append(prepare_block(raw, prefix=("blocks", index)))
        except SchemaViolation as exc:
            details.extend(exc.details)

    if details:
        raise SchemaViolation("Invalid block data", details=details)
    return prepared


def build_blocks(entry, prepared) -> List[Block]:
    return [
        Block(tenant_id=entry.tenant_id, type=block_type, data=data, order=index)
        for index, (block_type, data) in enumerate(prepared)
    ]


def replace_blocks(entry, raw_blocks: List[Any]) -> List[Block]:
    """
    Swap an entry's blocks for a new ordered list. Callers own the transaction.
    """
    prepared = prepare_blocks(raw_blocks)
    # delete-orphan removes the previous rows on flush
    entry.blocks = build_blocks(entry, prepared)
    db.session.flush()
    return entry.blocks


def _touch(entry, actor_id):
    entry.updated_by_id = actor_id
    entry.updated_at = utcnow()


def add_block(
    *,
    entry,
    actor_id: Optional[str],
    data: Any,
    order: Optional[int] = None,
) -> Block:
    block_type, payload = prepare_block(data, prefix=("data",))

    with transactional():
        siblings = list(entry.blocks)
        position = len(siblings) if order is None else min(order, len(siblings))

        for sibling in siblings:
            if sibling.order >= position:
                sibling.order += 1

        block = Block(tenant_id=entry.tenant_id, type=block_type, data=payload, order=position)
        entry.blocks.append(block)
        compact_order(entry.blocks)
        _touch(entry, actor_id)

        assert_entry(entry)

    return block


def get_block(*, tenant_id: str, block_id: str) -> Block:
    block = Block.query.filter_by(id=block_id, tenant_id=tenant_id).first()
    if not block:
        raise NotFound("Block not found")
    return block


def _move(entry, block, position):
    siblings = [b for b in sorted(entry.blocks, key=lambda b: b.order) if b.id != block.id]
    siblings.insert(min(position, len(siblings)), block)
    for index, item in enumerate(siblings):
        item.order = index


def update_block(
    *,
    tenant_id: str,
    block_id: str,
    actor_id: Optional[str],
    data: Any = None,
    order: Optional[int] = None,
) -> Block:
    block = get_block(tenant_id=tenant_id, block_id=block_id)
    _, entry = owner_of(block)

    if data is None and order is None:
        raise BadRequest("No valid fields provided for update")

    prepared = prepare_block(data, prefix=("data",)) if data is not None else None

    with transactional():
        if prepared is not None:
            block.type, block.data = prepared
        if order is not None:
            _move(entry, block, order)
        _touch(entry, actor_id)

        assert_entry(entry)

    return block


def delete_block(*, tenant_id: str, block_id: str, actor_id: Optional[str]) -> None:
    block = get_block(tenant_id=tenant_id, block_id=block_id)
    _, entry = owner_of(block)

    with transactional():
        entry.blocks.remove(block)
        compact_order(entry.blocks)
        _touch(entry, actor_id)

        assert_entry(entry)


def reorder_blocks(*, entry, actor_id: Optional[str], positions: List[Dict[str, Any]]) -> List[Block]:
    """
    Apply ``[{id, order}]`` positions; unlisted blocks keep their relative order.
    """
    by_id = {block.id: block for block in entry.blocks}
    unknown = [p["id"] for p in positions if p["id"] not in by_id]
    if unknown:
        raise BadRequest(f"Blocks do not belong to this entry: {unknown}")

    with transactional():
        requested = {p["id"]: p["order"] for p in positions}
        # Listed blocks win ties against unlisted ones at the same position.
        ranked = sorted(
            entry.blocks,
            key=lambda b: (requested.get(b.id, b.order), 0 if b.id in requested else 1),
        )
        for index, block in enumerate(ranked):
            block.order = index
        db.session.flush()
        _touch(entry, actor_id)

        assert_entry(entry)

    return sorted(entry.blocks, key=lambda b: b.order)
