from __future__ import annotations
from typing import Any, Optional

from inboxbridge.domain.entities.email_message import Header, MessageContent, MessagePart
from inboxbridge.domain.entities.history import ChangeEvent, LabelChangeEvent, MessageAddedEvent


def _message_ref(entry: dict[str, Any]) -> tuple[Optional[str], Optional[str]]:
    message = entry.get("message") or {}
    return message.get("id"), message.get("threadId")


def history_to_events(history: list[dict[str, Any]]) -> list[ChangeEvent]:
    """Flatten users.history.list items: label events first, then added events, per item."""
    events: list[ChangeEvent] = []
    for item in history:
        for entry in item.get("labelsAdded") or []:
            message_id, thread_id = _message_ref(entry)
            events.append(
                LabelChangeEvent(
                    message_id=message_id,
                    thread_id=thread_id,
                    label_ids=frozenset(entry.get("labelIds") or []),
                )
            )
        for entry in item.get("messagesAdded") or []:
            message_id, thread_id = _message_ref(entry)
            events.append(MessageAddedEvent(message_id=message_id, thread_id=thread_id))
    return events


def _body_data(node: dict[str, Any]) -> Optional[str]:
    return (node.get("body") or {}).get("data")


def message_to_content(message: dict[str, Any]) -> MessageContent:
    """Map a users.messages.get (format=full) response onto MessageContent."""
    payload = message.get("payload") or {}

    raw_headers = payload.get("headers")
    headers = None
    if raw_headers is not None:
        headers = [Header(name=h.get("name"), value=h.get("value")) for h in raw_headers]

    raw_parts = payload.get("parts")
    parts = None
    if raw_parts is not None:
        parts = [MessagePart(mime_type=p.get("mimeType"), body=_body_data(p)) for p in raw_parts]

    return MessageContent(
        id=message.get("id"),
        thread_id=message.get("threadId"),
        snippet=message.get("snippet"),
        headers=headers,
        mime_type=payload.get("mimeType"),
        body=_body_data(payload),
        parts=parts,
    )
