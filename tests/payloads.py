"""Block and entry payloads shared by the API tests."""


def hero(headline="Build faster websites", **extra):
    return {"type": "hero", "headline": headline, **extra}


def faq(question="How long does it take?", answer="About six weeks."):
    return {"type": "faq", "items": [{"q": question, "a": answer}]}


def rich_text(content):
    return {"type": "richText", "content": content}


def page(slug="about", title="About us", **extra):
    return {"slug": slug, "title": title, **extra}
