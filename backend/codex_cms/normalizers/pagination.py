# codex_cms/normalizers/pagination.py
from typing import Callable, Any, List, Dict

from codex_cms.utils.pagination import PageMeta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    meta: PageMeta,
) -> Dict[str, Any]:
    """
    Normalize paginated API responses.
    """
    return {
        "items": [normalize_fn(item) for item in items],
        "pagination": dict(meta),
    }
