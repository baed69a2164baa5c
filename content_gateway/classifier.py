"""
Response classification.

Every successful raw response is mapped onto exactly one of three variants:
`StructuredData` (parsed JSON), `Image` (opaque bytes, never parsed) or
`Unstructured` (text we could not interpret). classify() never raises.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .errors import ParseError
from .ladder import RawResponse

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPES = {"application/json", "text/json"}
AMBIGUOUS_MEDIA_TYPES = {"", "text/plain", "application/octet-stream", "binary/octet-stream", "*/*"}


@dataclass(frozen=True)
class StructuredData:
    parsed: Any


@dataclass(frozen=True)
class Image:
    media_ref: str
    media_type: str
    content: bytes = field(default=b"", repr=False)


@dataclass(frozen=True)
class Unstructured:
    text: str
    reason: str = ""


ClassifiedContent = Union[StructuredData, Image, Unstructured]


def _split_media_type(header: Optional[str]) -> tuple[str, str]:
    """Return (media type, charset) from a Content-Type header value."""
    if not header:
        return "", "utf-8"
    parts = [p.strip() for p in header.split(";")]
    media_type = parts[0].lower()
    charset = "utf-8"
    for p in parts[1:]:
        name, _, value = p.partition("=")
        if name.strip().lower() == "charset" and value.strip():
            charset = value.strip().strip('"')
    return media_type, charset


def _decode(body: bytes, charset: str) -> str:
    try:
        return body.decode(charset, errors="replace")
    except (LookupError, UnicodeError):
        # unknown charset, or a codec that rejects errors="replace"
        return body.decode("utf-8", errors="replace")


def _is_json(media_type: str) -> bool:
    return media_type in JSON_MEDIA_TYPES or media_type.endswith("+json")


def parse_json(text: str) -> Any:
    if not text.strip():
        raise ParseError("Empty response body")
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Invalid JSON: {e}") from e


def classify(raw: RawResponse) -> ClassifiedContent:
    media_type, charset = _split_media_type(raw.media_type)

    if media_type.startswith("image/"):
        return Image(media_ref=raw.url, media_type=media_type, content=raw.body)

    text = _decode(raw.body, charset)

    if _is_json(media_type) or media_type in AMBIGUOUS_MEDIA_TYPES:
        try:
            return StructuredData(parse_json(text))
        except ParseError as e:
            logger.info("Body declared as %r did not parse: %s", media_type or "<none>", e)
            return Unstructured(text=text, reason=str(e))

    return Unstructured(text=text, reason=f"Unsupported content type: {media_type}")
