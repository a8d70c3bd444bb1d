"""Gmail watch endpoints: Pub/Sub push notifications and watch registration."""

from __future__ import annotations

import base64
import binascii
import json
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from inboxbridge.application.use_cases.process_notification import ProcessNotificationUseCase
from inboxbridge.application.use_cases.setup_watch import SetupWatchUseCase
from inboxbridge.domain.errors import BatchFatalError, InvalidNotificationError
from inboxbridge.infrastructure.settings import Settings, get_settings


router = APIRouter()


# ============================================================================
# Request Models
# ============================================================================


class PubSubMessage(BaseModel):
    """The message part of a Pub/Sub push request."""

    data: str = ""
    message_id: str | None = Field(default=None, alias="messageId")
    publish_time: str | None = Field(default=None, alias="publishTime")
    attributes: dict[str, str] = Field(default_factory=dict)


class PushEnvelope(BaseModel):
    """Pub/Sub push request body."""

    message: PubSubMessage
    subscription: str | None = None


class GmailNotification(BaseModel):
    """Decoded Gmail watch notification."""

    email_address: str = Field(alias="emailAddress")
    history_id: str = Field(alias="historyId")


class WatchRequest(BaseModel):
    """Account-creation trigger: start watching a mailbox."""

    email_address: str
    account_id: str | None = None
    renew: bool = False


def decode_notification(data: str) -> GmailNotification:
    """Decode base64 JSON ``{emailAddress, historyId}`` from Pub/Sub message data."""
    try:
        raw = json.loads(base64.b64decode(data, validate=False).decode("utf-8"))
        if isinstance(raw, dict) and raw.get("historyId") is not None:
            raw["historyId"] = str(raw["historyId"])
        return GmailNotification.model_validate(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        raise InvalidNotificationError(f"Undecodable Gmail notification: {e}") from e


# ============================================================================
# Dependencies
# ============================================================================


@lru_cache
def get_process_notification() -> ProcessNotificationUseCase:
    from inboxbridge.infrastructure.wiring import build_process_notification

    return build_process_notification()


@lru_cache
def get_setup_watch() -> SetupWatchUseCase:
    from inboxbridge.infrastructure.wiring import build_setup_watch

    return build_setup_watch()


def verify_token(
    token: str = Query(default=""),
    settings: Settings = Depends(get_settings),
) -> None:
    """Pub/Sub push subscriptions carry the shared token as a query parameter."""
    if settings.push_verification_token is None:
        return
    if token != settings.push_verification_token.get_secret_value():
        logger.warning("Gmail push unauthorized attempt")
        raise HTTPException(status_code=401, detail="Unauthorized")


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/internal/gmail/push", dependencies=[Depends(verify_token)])
def receive_push(
    envelope: PushEnvelope,
    use_case: ProcessNotificationUseCase = Depends(get_process_notification),
) -> dict:
    """
    Receive a Gmail watch notification from a Pub/Sub push subscription.

    Processing is synchronous: any non-2xx response makes Pub/Sub redeliver,
    which is what a batch-level failure needs. Per-message failures are
    absorbed and reported in the summary.
    """
    try:
        notification = decode_notification(envelope.message.data)
    except InvalidNotificationError as e:
        logger.error(f"Rejected Pub/Sub message {envelope.message.message_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e

    logger.info(
        f"Gmail notification received: {notification.email_address} "
        f"historyId={notification.history_id} (pubsub id {envelope.message.message_id})"
    )

    try:
        result = use_case.run(notification.email_address, notification.history_id)
    except BatchFatalError as e:
        logger.exception(f"Notification processing failed for {notification.email_address}: {e}")
        raise HTTPException(status_code=500, detail="Notification processing failed") from e

    return {"status": "processed", **result.summary()}


@router.post("/internal/gmail/watch", dependencies=[Depends(verify_token)])
def register_watch(
    request: WatchRequest,
    use_case: SetupWatchUseCase = Depends(get_setup_watch),
) -> dict:
    """Start (or renew) the Gmail watch for a mailbox and store its cursor."""
    try:
        if request.renew:
            state = use_case.renew(request.email_address)
        else:
            state = use_case.run(request.email_address, account_id=request.account_id)
    except BatchFatalError as e:
        logger.exception(f"Watch registration failed for {request.email_address}: {e}")
        raise HTTPException(status_code=502, detail="Watch registration failed") from e

    return {
        "status": "watching",
        "email_address": state.email_address,
        "history_id": state.cursor.value,
        "expiration": state.expiration,
    }
