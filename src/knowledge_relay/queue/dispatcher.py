"""Enqueue side: forward app mentions to the SQS FIFO queue.

``event_id`` is used as both MessageDeduplicationId and MessageGroupId, so
Slack's retries of the same event collapse inside the queue's dedup window
and deliveries for one event never interleave.
"""

import asyncio
import logging

from botocore.exceptions import BotoCoreError, ClientError

from knowledge_relay.errors import UpstreamError
from knowledge_relay.models.slack import QueuedMessage

logger = logging.getLogger(__name__)


async def enqueue_message(sqs_client, queue_url: str, message: QueuedMessage) -> str:
    """Send one queued message and return the SQS MessageId.

    Raises UpstreamError if SQS rejects the message or is unreachable.
    """
    logger.info("Sending event %s to queue %s", message.event_id, queue_url)
    try:
        response = await asyncio.to_thread(
            sqs_client.send_message,
            QueueUrl=queue_url,
            MessageBody=message.to_wire(),
            MessageDeduplicationId=message.event_id,
            MessageGroupId=message.event_id,
        )
    except (BotoCoreError, ClientError) as exc:
        raise UpstreamError(f"Failed to enqueue event {message.event_id}: {exc}") from exc

    message_id = response.get("MessageId", "")
    logger.info(
        "Queued event",
        extra={"event_id": message.event_id, "message_id": message_id},
    )
    return message_id
