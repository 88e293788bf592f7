from .tenant import Tenant
from .user import User
from .page import Page
from .blog_post import BlogPost
from .service import Service
from .case_study import CaseStudy
from .block import Block
from .media_asset import MediaAsset
from .form_submission import FormSubmission, FormAttachment
from .api_key import ApiKey
from .site_setting import SiteSetting

__all__ = [
    "Tenant",
    "User",
    "Page",
    "BlogPost",
    "Service",
    "CaseStudy",
    "Block",
    "MediaAsset",
    "FormSubmission",
    "FormAttachment",
    "ApiKey",
    "SiteSetting",
]
