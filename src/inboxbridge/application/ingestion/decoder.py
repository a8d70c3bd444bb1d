"""Decode fetched message content into an EmailRecord.

Bodies are copied exactly as the mail service returns them (base64url for
Gmail). Charset and transfer decoding belong to whoever reads the record.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from inboxbridge.domain.entities.email_message import EmailRecord, MessageContent
from inboxbridge.domain.errors import DecodeError

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"

# Header name -> EmailRecord field (exact, case-sensitive)
HEADER_FIELDS = {
    "To": "to",
    "From": "sender",
    "Subject": "subject",
}


def _bodies(content: MessageContent) -> tuple[Optional[str], Optional[str]]:
    mime_type = content.mime_type or ""

    if "plain" in mime_type:
        return content.body, ""

    if content.parts is None:
        logger.debug(f"Parts is not defined for message id: {content.id} - mimeType: {mime_type}")
        return content.body, ""

    text: Optional[str] = ""
    html: Optional[str] = ""
    for part in content.parts:
        # Last part of each type wins
        if part.mime_type == TEXT_PLAIN:
            text = part.body
        elif part.mime_type == TEXT_HTML:
            html = part.body
    return text, html


def _header_fields(content: MessageContent) -> dict[str, Optional[str]]:
    fields: dict[str, Optional[str]] = {}
    for header in content.headers or []:
        name = HEADER_FIELDS.get(header.name or "")
        if name:
            fields[name] = header.value
    return fields


def decode(content: MessageContent) -> Optional[EmailRecord]:
    """Build an EmailRecord, or return None when the message has no headers.

    Any failure while reading the content is raised as DecodeError.
    """
    if content.headers is None:
        logger.warning(f"Header is not defined - id: {content.id}")
        return None

    try:
        body_text, body_html = _bodies(content)
        return EmailRecord(
            id=content.id,
            snippet=content.snippet,
            body_text=body_text,
            body_html=body_html,
            **_header_fields(content),
        )
    except Exception as e:
        raise DecodeError(content.id, f"process email error: {e}") from e
