# codex_cms/utils/sanitize.py
"""
HTML sanitization for editor-supplied content.

Markup passes through a bleach allow-list before it is stored. Block
payloads are walked recursively so markup hidden in nested lists and
objects is cleaned as well; strings without markup are kept verbatim and
escaped on output. Values under rich-text keys are rendered as HTML.
"""
import copy
import re

import bleach

ALLOWED_TAGS = frozenset({
    "div", "span", "p",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "a", "img", "ul", "ol", "li",
    "strong", "em", "br", "u", "s",
    "blockquote", "code", "pre", "hr",
    "section", "article", "header", "footer", "nav", "aside", "main",
    "figure", "figcaption",
    "table", "thead", "tbody", "tr", "th", "td",
})

_ATTRS = [
    "href", "src", "alt", "title", "class", "id", "target", "rel",
    "width", "height", "loading", "decoding",
]
ALLOWED_ATTRIBUTES = {"*": _ATTRS}
ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "tel"})

# Elements whose content is dropped along with the tag.
STRIPPED_CONTENT_TAGS = ("script", "style", "iframe", "form", "object", "embed", "noscript")

RICH_TEXT_KEYS = frozenset({"content", "description", "body", "text", "html"})
MAX_UNWRAP_DEPTH = 10

_HTML_RE = re.compile(r"<[^>]*>")
_BLOCK_KEYS = ("type", "visible", "id")

_cleaner = bleach.Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=True,
    strip_comments=True,
)

_dangerous_content = re.compile(
    r"<(%s)\b[^>]*>.*?</\1\s*>" % "|".join(STRIPPED_CONTENT_TAGS),
    re.IGNORECASE | re.DOTALL,
)


def sanitize_rich_text(html):
    if not html or not isinstance(html, str):
        return ""
    # bleach strips the tags but keeps their text; drop executable content first.
    html = _dangerous_content.sub("", html)
    return _cleaner.clean(html)


def _looks_like_block(value):
    return isinstance(value, dict) and any(key in value for key in _BLOCK_KEYS)


def unwrap_block_data(data):
    """
    Peel nested ``data`` wrappers the editor sometimes introduces,
    e.g. ``{"data": {"data": {"type": "hero", ...}}}``, and the
    ``{"type": "hero", "data": {...}}`` envelope.
    """
    current = data
    depth = 0
    while (
        isinstance(current, dict)
        and isinstance(current.get("data"), dict)
        and depth < MAX_UNWRAP_DEPTH
    ):
        inner = current["data"]
        envelope = "type" in current and "type" not in inner
        if not (envelope or _looks_like_block(inner) or isinstance(inner.get("data"), dict)):
            break
        # Keep outer block keys the inner payload does not set.
        merged = {k: v for k, v in current.items() if k != "data" and k in _BLOCK_KEYS}
        merged.update(inner)
        current = merged
        depth += 1
    return current


def is_rich_text_key(key):
    """Rich-text fields hold HTML; key match ignores case."""
    return isinstance(key, str) and key.lower() in RICH_TEXT_KEYS


def _sanitize_span(span):
    # Portable-text span text is plain text; the renderer escapes it.
    return {k: v if k == "text" else _sanitize_value(v) for k, v in span.items()}


def _is_portable_block(value):
    return value.get("_type", "block") == "block" and isinstance(value.get("children"), list)


def _sanitize_value(value):
    # Plain strings are stored as typed; templates escape them on output.
    if isinstance(value, str):
        if _HTML_RE.search(value):
            return sanitize_rich_text(value)
        return value
    if isinstance(value, list):
        return [_sanitize_value(item) for item in value]
    if isinstance(value, dict):
        if value.get("_type") == "span":
            return _sanitize_span(value)
        if _is_portable_block(value):
            return {
                k: [_sanitize_span(c) if isinstance(c, dict) else _sanitize_value(c) for c in v]
                if k == "children" else _sanitize_value(v)
                for k, v in value.items()
            }
        return {k: _sanitize_value(v) for k, v in value.items()}
    return value


def sanitize_block_data(data):
    if not isinstance(data, dict):
        return data
    return _sanitize_value(copy.deepcopy(unwrap_block_data(data)))


def safe_href(value):
    """Relative links and allow-listed protocols pass; anything else becomes '#'."""
    if not isinstance(value, str):
        return "#"
    href = value.strip()
    scheme, sep, _ = href.partition(":")
    if not sep or "/" in scheme or "?" in scheme or "#" in scheme:
        return href
    return href if scheme.lower() in ALLOWED_PROTOCOLS else "#"
