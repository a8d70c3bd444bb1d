from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Header:
    name: Optional[str]
    value: Optional[str]


@dataclass(frozen=True)
class MessagePart:
    mime_type: Optional[str]
    body: Optional[str]


@dataclass(frozen=True)
class MessageContent:
    """Raw message as fetched from the mail service (bodies still transport-encoded)."""

    id: Optional[str]
    thread_id: Optional[str]
    snippet: Optional[str]
    headers: Optional[list[Header]]
    mime_type: Optional[str]
    body: Optional[str] = None
    parts: Optional[list[MessagePart]] = None


@dataclass(frozen=True)
class EmailRecord:
    id: Optional[str]
    sender: Optional[str] = ""
    to: Optional[str] = ""
    subject: Optional[str] = ""
    snippet: Optional[str] = None
    body_text: Optional[str] = ""
    body_html: Optional[str] = ""

    def to_document(self) -> dict:
        """Document shape written to the emails collection."""
        return {
            "id": self.id,
            "from": self.sender,
            "to": self.to,
            "subject": self.subject,
            "snippet": self.snippet,
            "bodyText": self.body_text,
            "bodyHtml": self.body_html,
        }
