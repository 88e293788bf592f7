# codex_cms/utils/pagination.py
from __future__ import annotations

from typing import Any, Tuple, TypedDict

from flask import request
from sqlalchemy.orm import Query
from werkzeug.exceptions import BadRequest

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class PageMeta(TypedDict):
    """
    Offset pagination metadata returned by every list_* endpoint.
    """
    page: int
    limit: int
    total: int
    total_pages: int


def pagination_args(default_limit: int = DEFAULT_LIMIT) -> Tuple[int, int]:
    """
    Read ``page`` and ``limit`` from the query string.

    Raises:
    - BadRequest if either value is not a positive integer
    """
    try:
        page = int(request.args.get("page", 1))
        limit = int(request.args.get("limit", default_limit))
    except (TypeError, ValueError) as exc:
        raise BadRequest("page and limit must be integers") from exc

    if page < 1 or limit < 1:
        raise BadRequest("page and limit must be positive")

    return page, min(limit, MAX_LIMIT)


def paginate(query: Query, *, page: int, limit: int) -> tuple[list[Any], PageMeta]:
    """
    Execute an offset-paginated query. Ordering is the caller's job.
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()

    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": (total + limit - 1) // limit,
    }
