# codex_cms/web/rendering.py
"""
Server-side block renderer.

Each block type has its own template under ``templates/blocks``; anything
else falls back to a placeholder. Stored payloads are unwrapped and rich
text is sanitized again on the way out.
"""
from flask import render_template
from markupsafe import Markup, escape

from codex_cms.domain.constants import BLOCK_TYPES
from codex_cms.utils.sanitize import is_rich_text_key, sanitize_rich_text, unwrap_block_data

_MARK_TAGS = {
    "strong": "strong",
    "em": "em",
    "code": "code",
    "underline": "u",
    "strike-through": "s",
}
_STYLE_TAGS = {"normal": "p", "h1": "h1", "h2": "h2", "h3": "h3", "h4": "h4", "blockquote": "blockquote"}


def _portable_span(span):
    text = escape(span.get("text", ""))
    for mark in span.get("marks") or []:
        tag = _MARK_TAGS.get(mark)
        if tag:
            text = Markup(f"<{tag}>{text}</{tag}>")
    return text


def portable_text_to_html(blocks):
    """Convert portable-text JSON into HTML."""
    if isinstance(blocks, dict):
        blocks = [blocks]

    parts = []
    open_list = None
    for block in blocks or []:
        if not isinstance(block, dict) or block.get("_type", "block") != "block":
            continue

        inner = Markup("").join(_portable_span(s) for s in block.get("children") or [] if isinstance(s, dict))
        list_item = block.get("listItem")

        if list_item:
            tag = "ol" if list_item == "number" else "ul"
            if open_list != tag:
                if open_list:
                    parts.append(f"</{open_list}>")
                parts.append(f"<{tag}>")
                open_list = tag
            parts.append(f"<li>{inner}</li>")
            continue

        if open_list:
            parts.append(f"</{open_list}>")
            open_list = None

        tag = _STYLE_TAGS.get(block.get("style", "normal"), "p")
        parts.append(f"<{tag}>{inner}</{tag}>")

    if open_list:
        parts.append(f"</{open_list}>")
    return "".join(str(p) for p in parts)


def rich_text_html(content):
    if isinstance(content, str):
        return Markup(sanitize_rich_text(content))
    if isinstance(content, (list, dict)):
        return Markup(sanitize_rich_text(portable_text_to_html(content)))
    return Markup("")


def _rich_fields(value):
    """Mark values under rich-text keys as sanitized HTML for the templates."""
    if isinstance(value, list):
        return [_rich_fields(item) for item in value]
    if isinstance(value, dict):
        return {
            k: Markup(sanitize_rich_text(v)) if isinstance(v, str) and is_rich_text_key(k) else _rich_fields(v)
            for k, v in value.items()
        }
    return value


def _fields(block):
    if isinstance(block, dict):
        return block.get("type"), block.get("data"), block.get("order", 0)
    return block.type, block.data, block.order


def render_block(block_type, data):
    data = unwrap_block_data(data or {})
    if not isinstance(data, dict):
        data = {}

    if not data.get("visible", True):
        return Markup("")

    if block_type not in BLOCK_TYPES:
        return Markup(render_template("blocks/_unknown.html", block_type=block_type, block=data))

    if block_type == "richText":
        context = {"block": data, "block_type": block_type, "html": rich_text_html(data.get("content"))}
    else:
        context = {"block": _rich_fields(data), "block_type": block_type}

    return Markup(render_template(f"blocks/{block_type}.html", **context))


def render_blocks(blocks):
    ordered = sorted((_fields(b) for b in blocks), key=lambda item: item[2] or 0)
    return Markup("\n").join(render_block(block_type, data) for block_type, data, _ in ordered)
