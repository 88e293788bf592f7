"""Tests for block validation, sanitization and rendering."""
import pytest

from codex_cms.application.cms.blocks import prepare_block, prepare_blocks
from codex_cms.domain.invariants.exceptions import SchemaViolation
from codex_cms.utils.sanitize import (
    is_rich_text_key,
    safe_href,
    sanitize_block_data,
    sanitize_rich_text,
    unwrap_block_data,
)
from codex_cms.web.rendering import portable_text_to_html, render_block, render_blocks

from payloads import faq, hero, rich_text


def test_sanitize_drops_script_content():
    assert sanitize_rich_text("<p>Hi</p><script>alert(1)</script>") == "<p>Hi</p>"


def test_sanitize_strips_event_handlers_and_js_links():
    cleaned = sanitize_rich_text('<a href="javascript:alert(1)" onclick="steal()">x</a><img src="a.png" onerror="boom()">')
    assert "javascript" not in cleaned
    assert "onclick" not in cleaned
    assert "onerror" not in cleaned
    assert 'src="a.png"' in cleaned


def test_sanitize_keeps_allowed_markup():
    html = '<h2>Title</h2><ul><li><strong>One</strong></li></ul><a href="https://example.com">link</a>'
    assert sanitize_rich_text(html) == html


def test_sanitize_non_string_is_empty():
    assert sanitize_rich_text(None) == ""
    assert sanitize_rich_text(42) == ""


def test_unwrap_nested_data_wrappers():
    wrapped = {"data": {"data": {"type": "hero", "headline": "Hello there"}}}
    assert unwrap_block_data(wrapped) == {"type": "hero", "headline": "Hello there"}


def test_unwrap_type_envelope_keeps_outer_keys():
    envelope = {"type": "hero", "visible": False, "data": {"headline": "Hello there"}}
    assert unwrap_block_data(envelope) == {"type": "hero", "visible": False, "headline": "Hello there"}


def test_sanitize_block_data_walks_nested_values():
    data = sanitize_block_data({
        "type": "faq",
        "items": [{"q": "Why?", "a": "<b>Because</b><script>x()</script>"}],
    })
    assert data["items"][0]["a"] == "Because"


def test_sanitize_block_data_keeps_plain_text():
    data = sanitize_block_data({
        "type": "featureGrid",
        "items": [{"title": "Fast & secure", "body": "Fast & secure"}],
    })
    assert data["items"][0] == {"title": "Fast & secure", "body": "Fast & secure"}


def test_sanitize_block_data_leaves_portable_text_spans():
    content = [
        {"_type": "block", "children": [{"_type": "span", "text": "Tom & <Jerry>"}]},
        {"_type": "block", "children": [{"text": "a < b"}]},
    ]
    data = sanitize_block_data({"type": "richText", "content": content})
    assert data["content"] == content


@pytest.mark.parametrize("key, expected", [
    ("body", True),
    ("Body", True),
    ("DESCRIPTION", True),
    ("headline", False),
    (None, False),
])
def test_rich_text_keys_ignore_case(key, expected):
    assert is_rich_text_key(key) is expected


def test_prepare_block_fills_defaults():
    block_type, data = prepare_block(hero())
    assert block_type == "hero"
    assert data["headline"] == "Build faster websites"
    assert data["visible"] is True
    assert data["id"]


def test_prepare_block_accepts_wrapped_payload():
    block_type, data = prepare_block({"data": faq()})
    assert block_type == "faq"
    assert data["items"] == [{"q": "How long does it take?", "a": "About six weeks."}]


def test_prepare_block_sanitizes_rich_text():
    _, data = prepare_block(rich_text("<p>Safe</p><script>alert(1)</script>"))
    assert data["content"] == "<p>Safe</p>"


def test_prepare_blocks_collects_every_error():
    with pytest.raises(SchemaViolation) as exc:
        prepare_blocks([hero("Hi"), {"type": "carousel"}, "not a block"])

    locations = {tuple(d["loc"][:2]) for d in exc.value.details}
    assert locations == {("blocks", 0), ("blocks", 1), ("blocks", 2)}


def test_prepare_blocks_rejects_bad_nested_fields():
    with pytest.raises(SchemaViolation):
        prepare_blocks([{"type": "featureGrid", "columns": 7, "items": [{"title": "A", "body": "B"}]}])


@pytest.mark.parametrize("href, expected", [
    ("/en/contact", "/en/contact"),
    ("#contact", "#contact"),
    ("https://example.com", "https://example.com"),
    ("mailto:hello@example.com", "mailto:hello@example.com"),
    ("javascript:alert(1)", "#"),
    (" JavaScript:alert(1)", "#"),
    ("data:text/html,<b>x</b>", "#"),
    (None, "#"),
])
def test_safe_href(href, expected):
    assert safe_href(href) == expected


def test_portable_text_to_html():
    html = portable_text_to_html([
        {"_type": "block", "style": "h2", "children": [{"text": "Title", "marks": ["strong"]}]},
        {"_type": "block", "listItem": "bullet", "children": [{"text": "One"}]},
        {"_type": "block", "listItem": "bullet", "children": [{"text": "<Two>"}]},
    ])
    assert html == "<h2><strong>Title</strong></h2><ul><li>One</li><li>&lt;Two&gt;</li></ul>"


def test_render_block_uses_type_template(app):
    with app.test_request_context("/"):
        html = str(render_block("hero", hero(primaryCTA={"label": "Go", "href": "javascript:alert(1)"})))

    assert "<h1>Build faster websites</h1>" in html
    assert 'href="#"' in html


def test_render_block_skips_hidden_and_flags_unknown(app):
    with app.test_request_context("/"):
        assert str(render_block("hero", hero(visible=False))) == ""
        assert "Unsupported block type: carousel" in str(render_block("carousel", {}))


def test_render_blocks_follows_order(app):
    blocks = [
        {"type": "richText", "data": rich_text("<p>second</p>"), "order": 1},
        {"type": "richText", "data": rich_text("<p>first</p>"), "order": 0},
    ]
    with app.test_request_context("/"):
        html = str(render_blocks(blocks))

    assert html.index("first") < html.index("second")
