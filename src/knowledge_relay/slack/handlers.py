"""Slack event classification and dispatch to the work queue."""

import logging
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import ValidationError

from knowledge_relay.errors import UpstreamError, VerificationError
from knowledge_relay.models.slack import ChallengeEvent, QueuedMessage
from knowledge_relay.queue.dispatcher import enqueue_message

logger = logging.getLogger(__name__)


def classify_payload(payload: Any) -> ChallengeEvent | QueuedMessage | None:
    """Classify a decoded webhook payload.

    Tried in order, first structural match wins:
    1. ChallengeEvent (url_verification handshake)
    2. QueuedMessage wrapping an app_mention
    3. None -- anything else, including payloads that fail validation

    A payload that fits both shapes resolves as a challenge.
    """
    if not isinstance(payload, dict):
        return None

    try:
        return ChallengeEvent.model_validate(payload)
    except ValidationError:
        pass

    try:
        message = QueuedMessage.model_validate(payload)
    except ValidationError as exc:
        logger.info(
            "Payload is not an event callback (%d validation errors), ignoring",
            exc.error_count(),
        )
        return None

    if not message.is_app_mention:
        logger.info(
            "Ignoring %s/%s event %s", message.type, message.event.type, message.event_id
        )
        return None
    return message


async def handle_slack_event(payload: Any, sqs_client, queue_url: str) -> JSONResponse:
    """Respond to a verified Slack payload.

    - url_verification: echo the challenge
    - app_mention callback: enqueue, then acknowledge with {}
    - anything else: acknowledge with {}

    Enqueue failures are logged and still acknowledged: Slack would only
    retry the webhook, which cannot fix a queue outage.
    """
    classified = classify_payload(payload)

    if isinstance(classified, ChallengeEvent):
        if not classified.is_url_verification:
            raise VerificationError("Error Verifying.")
        return JSONResponse({"challenge": classified.challenge})

    if classified is None:
        return JSONResponse({})

    if not queue_url:
        logger.error("QUEUE_URL is not set, dropping event %s", classified.event_id)
        return JSONResponse({})

    try:
        await enqueue_message(sqs_client, queue_url, classified)
    except UpstreamError:
        logger.error("Error sending event %s to queue", classified.event_id, exc_info=True)

    return JSONResponse({})
