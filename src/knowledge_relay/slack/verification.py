"""Slack request signature verification as a FastAPI dependency."""

import json
import logging
from typing import Any

from fastapi import Request
from slack_sdk.signature import Clock, SignatureVerifier

from knowledge_relay.config import get_settings
from knowledge_relay.errors import ConfigError, VerificationError

logger = logging.getLogger(__name__)

REQUEST_TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"
REQUEST_SIGNATURE_HEADER = "X-Slack-Signature"

VERIFICATION_FAILED_MESSAGE = "Error Verifying request."


def verify_signature(
    timestamp: int,
    raw_body: str,
    received_signature: str,
    *,
    signing_secret: str,
    clock: Clock | None = None,
) -> bool:
    """Check the v0 HMAC-SHA256 signature and the 5-minute freshness window.

    A stale timestamp and a wrong signature both return False. Comparison is
    constant-time (``hmac.compare_digest`` inside slack_sdk).

    Raises ConfigError if the signing secret is empty.
    """
    if not signing_secret:
        raise ConfigError("SLACK_SIGNING_SECRET is not set")
    verifier = SignatureVerifier(signing_secret=signing_secret, clock=clock or Clock())
    return verifier.is_valid(
        body=raw_body, timestamp=str(timestamp), signature=received_signature
    )


def get_timestamp_signature(headers) -> tuple[int, str]:
    """Read the timestamp and signature headers, raising VerificationError if absent."""
    timestamp_header = headers.get(REQUEST_TIMESTAMP_HEADER)
    if not timestamp_header:
        raise VerificationError("no timestamp string received.")
    try:
        timestamp = int(timestamp_header)
    except ValueError:
        raise VerificationError("invalid timestamp received.") from None

    signature = headers.get(REQUEST_SIGNATURE_HEADER)
    if not signature:
        raise VerificationError("No signature received.")
    return timestamp, signature


async def verify_slack_request(request: Request) -> Any:
    """Verify Slack request signature and return the decoded JSON payload.

    Reads the raw body FIRST (before any JSON parsing) to ensure the
    signature verification uses the exact bytes Slack signed.

    Raises VerificationError (rendered as 400) on missing headers, a body
    that is not UTF-8, or a bad or stale signature. Returns None when the
    verified body is not JSON; the handler acknowledges it as ignorable.
    """
    timestamp, signature = get_timestamp_signature(request.headers)

    body = await request.body()
    try:
        raw_body = body.decode("utf-8")
    except UnicodeDecodeError:
        raise VerificationError("error getting body as string.") from None

    settings = get_settings()
    try:
        valid = verify_signature(
            timestamp, raw_body, signature, signing_secret=settings.slack_signing_secret
        )
    except ConfigError:
        logger.error("Cannot verify Slack request: signing secret missing")
        raise VerificationError(VERIFICATION_FAILED_MESSAGE) from None

    if not valid:
        logger.warning(
            "Slack signature verification failed",
            extra={"request_timestamp": timestamp, "body_length": len(raw_body)},
        )
        raise VerificationError(VERIFICATION_FAILED_MESSAGE)

    try:
        return json.loads(raw_body)
    except json.JSONDecodeError:
        logger.info("Verified request body is not JSON; ignoring")
        return None
