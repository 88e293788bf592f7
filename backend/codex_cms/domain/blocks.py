# codex_cms/domain/blocks.py
"""
Page-builder block shapes.

Every block carries a ``type`` discriminator; the union below is the closed
set of variants the editor may persist. Payloads are stored in their
camelCase wire form (``primaryCTA``, ``analyticsId`` ...).
"""
from __future__ import annotations

import uuid
from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Union
from urllib.parse import urlparse

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
)


def _check_url(value: str) -> str:
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("Invalid url")
    return value


Url = Annotated[str, AfterValidator(_check_url)]
MediaKind = Literal["image", "video"]


class BlockModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CTA(BlockModel):
    label: str
    href: str


class BaseBlock(BlockModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    visible: bool = True
    analytics_id: Optional[str] = Field(default=None, alias="analyticsId")
    variant: Optional[str] = None
    class_name: Optional[str] = Field(default=None, alias="className")


# -------------------------------------------------
# Variants
# -------------------------------------------------
class HeroMedia(BlockModel):
    kind: MediaKind
    src: Url
    alt: str


class Badge(BlockModel):
    label: str
    icon: Optional[str] = None


class HeroBlock(BaseBlock):
    type: Literal["hero"]
    eyebrow: Optional[str] = None
    headline: str = Field(min_length=3)
    subcopy: Optional[str] = None
    media: Optional[HeroMedia] = None
    primary_cta: Optional[CTA] = Field(default=None, alias="primaryCTA")
    secondary_cta: Optional[CTA] = Field(default=None, alias="secondaryCTA")
    badges: Optional[List[Badge]] = None


class FeatureItem(BlockModel):
    icon: Optional[str] = None
    title: str
    body: str


class FeatureGridBlock(BaseBlock):
    type: Literal["featureGrid"]
    heading: Optional[str] = None
    columns: int = Field(default=3, ge=2, le=4)
    items: List[FeatureItem] = Field(min_length=1)


class TestimonialAuthor(BlockModel):
    name: str
    role: Optional[str] = None
    company: Optional[str] = None
    avatar: Optional[Url] = None
    logo: Optional[Url] = None


class Metric(BlockModel):
    label: str
    value: str


class TestimonialBlock(BaseBlock):
    type: Literal["testimonial"]
    quote: str
    author: TestimonialAuthor
    metric: Optional[Metric] = None


class Brand(BlockModel):
    name: str
    logo: Url
    url: Optional[Url] = None


class LogoCloudBlock(BaseBlock):
    type: Literal["logoCloud"]
    title: Optional[str] = None
    brands: List[Brand]


class MetricItem(BlockModel):
    label: str
    value: str
    help_text: Optional[str] = Field(default=None, alias="helpText")


class MetricsBlock(BaseBlock):
    type: Literal["metrics"]
    items: List[MetricItem]


class RichTextBlock(BaseBlock):
    # HTML string or portable-text JSON
    type: Literal["richText"]
    content: Any = None


class FAQItem(BlockModel):
    q: str
    a: str


class FAQBlock(BaseBlock):
    type: Literal["faq"]
    items: List[FAQItem] = Field(min_length=1)


class Plan(BlockModel):
    name: str
    price: str
    period: str
    features: List[str]
    cta: CTA


class PriceTableBlock(BaseBlock):
    type: Literal["priceTable"]
    plans: List[Plan]


class ComparisonBlock(BaseBlock):
    type: Literal["comparison"]
    criteria: List[str]
    left: List[str]
    right: List[str]


class ContactFormBlock(BaseBlock):
    type: Literal["contactForm"]
    form_key: str = Field(alias="formKey")
    heading: Optional[str] = None
    subcopy: Optional[str] = None
    success_copy: Optional[str] = Field(default=None, alias="successCopy")
    privacy_note: Optional[str] = Field(default=None, alias="privacyNote")


class MediaBlock(BaseBlock):
    type: Literal["media"]
    kind: MediaKind
    src: str
    alt: str
    caption: Optional[str] = None
    poster: Optional[str] = None


AnyBlock = Annotated[
    Union[
        HeroBlock,
        FeatureGridBlock,
        TestimonialBlock,
        LogoCloudBlock,
        MetricsBlock,
        RichTextBlock,
        FAQBlock,
        PriceTableBlock,
        ComparisonBlock,
        ContactFormBlock,
        MediaBlock,
    ],
    Field(discriminator="type"),
]

_block_adapter: TypeAdapter = TypeAdapter(AnyBlock)


def parse_block(raw: Any) -> BaseBlock:
    """Validate a raw payload against its variant. Raises ``ValidationError``."""
    return _block_adapter.validate_python(raw)


def dump_block(block: BaseBlock) -> Dict[str, Any]:
    return block.model_dump(mode="json", by_alias=True, exclude_none=True)


def error_details(exc: ValidationError, prefix: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """JSON-safe summary of a pydantic error, optionally prefixed with a location."""
    return [
        {
            "loc": [*prefix, *err.get("loc", ())],
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
