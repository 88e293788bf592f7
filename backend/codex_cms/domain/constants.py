SUPPORTED_LOCALES = ("en", "de", "fr")
DEFAULT_LOCALE = "en"

PUBLISH_STATUSES = ("draft", "inReview", "scheduled", "published")

BLOCK_TYPES = (
    "hero",
    "featureGrid",
    "testimonial",
    "logoCloud",
    "metrics",
    "richText",
    "faq",
    "priceTable",
    "comparison",
    "contactForm",
    "media",
)

USER_ROLES = ("OWNER", "ADMIN", "EDITOR", "AUTHOR")

SUBMISSION_STATUSES = ("unread", "read", "inProgress", "responded", "archived")

CASE_STUDY_CATEGORIES = ("caseStudy", "technology")

API_KEY_PERMISSIONS = ("read", "write", "admin", "owner")

MEDIA_KINDS = ("image", "video", "file")
