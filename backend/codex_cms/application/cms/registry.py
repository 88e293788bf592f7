# codex_cms/application/cms/registry.py
"""
Content kinds managed by the CMS.

Pages, blog posts, services and case studies share the same lifecycle and
block ownership; a ``ContentKind`` captures what differs between them so the
use cases and routes can be written once.
"""
from dataclasses import dataclass
from typing import Dict, Tuple, Type

from werkzeug.exceptions import NotFound

from codex_cms.domain import schemas
from codex_cms.models import BlogPost, CaseStudy, Page, Service


@dataclass(frozen=True)
class ContentKind:
    name: str
    collection: str
    label: str
    model: Type
    create_schema: Type[schemas.EntryCreate]
    update_schema: Type[schemas.EntryUpdate]
    block_fk: str
    fields: Tuple[str, ...]
    label_field: str = "title"
    feature: str = "cms"
    ordered: bool = False


PAGE = ContentKind(
    name="page",
    collection="pages",
    label="Page",
    model=Page,
    create_schema=schemas.PageCreate,
    update_schema=schemas.PageUpdate,
    block_fk="page_id",
    fields=("title",),
)

BLOG_POST = ContentKind(
    name="blog_post",
    collection="blog-posts",
    label="Blog post",
    model=BlogPost,
    create_schema=schemas.BlogPostCreate,
    update_schema=schemas.BlogPostUpdate,
    block_fk="blog_post_id",
    fields=("title", "excerpt", "cover_id", "author_id"),
    feature="blog",
)

SERVICE = ContentKind(
    name="service",
    collection="services",
    label="Service",
    model=Service,
    create_schema=schemas.ServiceCreate,
    update_schema=schemas.ServiceUpdate,
    block_fk="service_id",
    fields=("name", "summary", "icon", "order", "page_id"),
    label_field="name",
    ordered=True,
)

CASE_STUDY = ContentKind(
    name="case_study",
    collection="case-studies",
    label="Case study",
    model=CaseStudy,
    create_schema=schemas.CaseStudyCreate,
    update_schema=schemas.CaseStudyUpdate,
    block_fk="case_study_id",
    fields=("title", "client", "sector", "category", "icon", "order", "page_id"),
    ordered=True,
)

KINDS: Dict[str, ContentKind] = {k.name: k for k in (PAGE, BLOG_POST, SERVICE, CASE_STUDY)}
KINDS_BY_COLLECTION: Dict[str, ContentKind] = {k.collection: k for k in KINDS.values()}


def kind_for_collection(collection: str) -> ContentKind:
    kind = KINDS_BY_COLLECTION.get(collection)
    if kind is None:
        raise NotFound(f"Unknown content collection: {collection}")
    return kind


def owner_of(block):
    """Return (kind, entry) owning a block."""
    for kind in KINDS.values():
        owner_id = getattr(block, kind.block_fk)
        if owner_id:
            entry = kind.model.query.filter_by(id=owner_id, tenant_id=block.tenant_id).first()
            if entry is not None:
                return kind, entry
    raise NotFound("Block owner not found")
