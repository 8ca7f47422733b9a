"""Knowledge-base document construction.

Bodies are opaque text: whatever an extractor, the user or a stub produced.
The only checks are non-empty title and body after trimming.
"""

import uuid
from datetime import datetime, timezone

import httpx

from acgen.errors import ValidationError
from acgen.state import Document
from acgen.utils.validator import validate_document_fields

_WEB_LINK_TEMPLATE = """\
Web Link: {url}

Please manually add key content from this webpage.

Suggested content to add:
- Main topic
- Key points
- Important terminology
- Relevant sections"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_document(
    title: str,
    body: str,
    source_kind: str = "manual",
    size_bytes: int | None = None,
) -> Document:
    """Build a Document record with a fresh id and timestamp.

    The body is truncated to max_document_chars from config.
    """
    from acgen.config import get_config

    title, body = validate_document_fields(title, body)
    limit = get_config().get("max_document_chars", 10000)
    return {
        "id": uuid.uuid4().hex,
        "title": title,
        "body": body[:limit],
        "source_kind": source_kind,
        "size_bytes": size_bytes,
        "added_at": _now(),
    }


def new_web_link(url: str) -> Document:
    """Build a stub document for a web link. Nothing is fetched."""
    if not isinstance(url, str) or not url.strip():
        raise ValidationError("URL must be a non-empty string.")
    url = url.strip()
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ValidationError(f"Invalid URL format: {url}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ValidationError(f"Invalid URL format: {url}")

    doc = new_document(f"Web: {url}", _WEB_LINK_TEMPLATE.format(url=url), source_kind="web-link")
    doc["url"] = url
    return doc


def remove_document(corpus: list[Document], doc_id: str) -> list[Document]:
    """Return the corpus without the given document; unknown ids raise."""
    if not any(doc["id"] == doc_id for doc in corpus):
        raise ValidationError(f"No document with id '{doc_id}'.")
    return [doc for doc in corpus if doc["id"] != doc_id]
