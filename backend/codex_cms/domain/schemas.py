# codex_cms/domain/schemas.py
"""
Request payload schemas.

Fields accept both their snake_case name and the camelCase alias used by
the editor. Update schemas leave every field optional; required columns
keep a non-nullable annotation so an explicit ``null`` is rejected.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints

from .blocks import Url

Slug = Annotated[str, StringConstraints(pattern=r"^[a-z0-9-]+$", min_length=1, max_length=200)]
Locale = Literal["en", "de", "fr"]
Status = Literal["draft", "inReview", "scheduled", "published"]
Role = Literal["OWNER", "ADMIN", "EDITOR", "AUTHOR"]
SubmissionStatus = Literal["unread", "read", "inProgress", "responded", "archived"]
Category = Literal["caseStudy", "technology"]
ApiKeyScope = Literal["read", "write", "admin", "owner"]


class SchemaModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SEO(SchemaModel):
    title: Optional[str] = None
    description: Optional[str] = None
    noindex: Optional[bool] = None
    canonical: Optional[Url] = None
    og_image: Optional[Url] = Field(default=None, alias="ogImage")


# -------------------------------------------------
# Content entries
# -------------------------------------------------
class EntryCreate(SchemaModel):
    slug: Slug
    locale: Locale = "en"
    status: Status = "draft"
    seo: Optional[SEO] = None
    scheduled_at: Optional[datetime] = Field(default=None, alias="scheduledAt")
    # Raw block payloads; sanitized and validated by the block pipeline.
    blocks: List[Any] = Field(default_factory=list)


class EntryUpdate(SchemaModel):
    slug: Slug = None
    locale: Locale = None
    status: Status = None
    seo: Optional[SEO] = None
    scheduled_at: Optional[datetime] = Field(default=None, alias="scheduledAt")
    blocks: List[Any] = None


class PageCreate(EntryCreate):
    title: str = Field(min_length=1, max_length=200)


class PageUpdate(EntryUpdate):
    title: str = Field(default=None, min_length=1, max_length=200)


class BlogPostCreate(EntryCreate):
    title: str = Field(min_length=1, max_length=200)
    excerpt: Optional[str] = None
    cover_id: Optional[str] = Field(default=None, alias="coverId")
    author_id: Optional[str] = Field(default=None, alias="authorId")


class BlogPostUpdate(EntryUpdate):
    title: str = Field(default=None, min_length=1, max_length=200)
    excerpt: Optional[str] = None
    cover_id: Optional[str] = Field(default=None, alias="coverId")
    author_id: Optional[str] = Field(default=None, alias="authorId")


class ServiceCreate(EntryCreate):
    name: str = Field(min_length=1, max_length=100)
    summary: Optional[str] = Field(default=None, max_length=300)
    icon: Optional[str] = None
    order: int = Field(default=0, ge=0)
    page_id: Optional[str] = Field(default=None, alias="pageId")


class ServiceUpdate(EntryUpdate):
    name: str = Field(default=None, min_length=1, max_length=100)
    summary: Optional[str] = Field(default=None, max_length=300)
    icon: Optional[str] = None
    order: int = Field(default=None, ge=0)
    page_id: Optional[str] = Field(default=None, alias="pageId")


class CaseStudyCreate(EntryCreate):
    title: str = Field(min_length=1, max_length=200)
    client: Optional[str] = None
    sector: Optional[str] = None
    category: Category = "caseStudy"
    icon: Optional[str] = None
    order: int = Field(default=0, ge=0)
    page_id: Optional[str] = Field(default=None, alias="pageId")


class CaseStudyUpdate(EntryUpdate):
    title: str = Field(default=None, min_length=1, max_length=200)
    client: Optional[str] = None
    sector: Optional[str] = None
    category: Category = None
    icon: Optional[str] = None
    order: int = Field(default=None, ge=0)
    page_id: Optional[str] = Field(default=None, alias="pageId")


class StatusChange(SchemaModel):
    status: Status
    scheduled_at: Optional[datetime] = Field(default=None, alias="scheduledAt")


# -------------------------------------------------
# Blocks
# -------------------------------------------------
class BlockCreate(SchemaModel):
    data: Dict[str, Any]
    order: Optional[int] = Field(default=None, ge=0)


class BlockUpdate(SchemaModel):
    data: Dict[str, Any] = None
    order: int = Field(default=None, ge=0)


class BlockPosition(SchemaModel):
    id: str
    order: int = Field(ge=0)


class PreviewRequest(SchemaModel):
    blocks: List[Any] = Field(default_factory=list)


# -------------------------------------------------
# Forms
# -------------------------------------------------
class ContactSubmission(SchemaModel):
    name: str = Field(min_length=2)
    email: EmailStr
    phone: Optional[str] = None
    company: Optional[str] = None
    service: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    message: str = Field(min_length=10)
    form_type: str = Field(alias="formType", min_length=1)
    metadata: Optional[Union[str, Dict[str, Any]]] = None
    # Bot trap: real browsers leave this hidden field empty.
    honeypot: Optional[str] = None


class SubmissionUpdate(SchemaModel):
    status: SubmissionStatus = None
    notes: Optional[str] = None
    assigned_to: Optional[str] = Field(default=None, alias="assignedTo")


class BulkDelete(SchemaModel):
    ids: List[str] = Field(min_length=1)


# -------------------------------------------------
# Users, auth, keys, media
# -------------------------------------------------
class LoginRequest(SchemaModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserCreate(SchemaModel):
    email: EmailStr
    name: str = Field(min_length=1)
    password: str = Field(min_length=8)
    role: Role = "AUTHOR"
    is_active: bool = Field(default=True, alias="isActive")


class UserUpdate(SchemaModel):
    name: str = Field(default=None, min_length=1)
    password: str = Field(default=None, min_length=8)
    role: Role = None
    is_active: bool = Field(default=None, alias="isActive")


class ApiKeyCreate(SchemaModel):
    name: str = Field(min_length=1, max_length=100)
    permissions: ApiKeyScope = "read"
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")


class MediaUpdate(SchemaModel):
    alt: Optional[str] = None
