"""Slack webhook router with signature verification."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from knowledge_relay.config import get_settings
from knowledge_relay.services import Services, get_services
from knowledge_relay.slack.handlers import handle_slack_event
from knowledge_relay.slack.verification import verify_slack_request

router = APIRouter(prefix="", tags=["slack"])


@router.post("/slack/events")
async def slack_events(
    payload: Any = Depends(verify_slack_request),
    services: Services = Depends(get_services),
) -> JSONResponse:
    """Receive Slack webhook events.

    Duplicate deliveries of the same event are collapsed by the FIFO queue's
    deduplication, not here.
    """
    settings = get_settings()
    return await handle_slack_event(payload, services.sqs, settings.queue_url)
