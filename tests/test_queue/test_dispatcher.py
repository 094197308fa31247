"""Tests for enqueueing app mentions onto the SQS FIFO queue."""

import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from knowledge_relay.errors import UpstreamError
from knowledge_relay.models.slack import AppMentionEvent, QueuedMessage
from knowledge_relay.queue.dispatcher import enqueue_message

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/mentions.fifo"


def _make_message(event_id: str = "Ev123ABC456") -> QueuedMessage:
    return QueuedMessage(
        token="t",
        api_app_id="A123ABC456",
        type="event_callback",
        event_id=event_id,
        event_time=1515449522,
        event=AppMentionEvent(
            channel="C123ABC456",
            type="app_mention",
            event_ts="1515449522.000016",
            text="<@U0LAN0Z89> hello",
            user="U061F7AUR",
        ),
    )


async def test_enqueue_uses_event_id_for_dedup_and_group():
    sqs = MagicMock()
    sqs.send_message.return_value = {"MessageId": "msg-1"}
    message = _make_message()

    message_id = await enqueue_message(sqs, QUEUE_URL, message)

    assert message_id == "msg-1"
    sqs.send_message.assert_called_once_with(
        QueueUrl=QUEUE_URL,
        MessageBody=message.to_wire(),
        MessageDeduplicationId="Ev123ABC456",
        MessageGroupId="Ev123ABC456",
    )


async def test_enqueued_body_decodes_to_same_message():
    sqs = MagicMock()
    sqs.send_message.return_value = {"MessageId": "msg-1"}
    message = _make_message()

    await enqueue_message(sqs, QUEUE_URL, message)

    body = sqs.send_message.call_args.kwargs["MessageBody"]
    assert QueuedMessage.from_wire(body) == message
    assert json.loads(body)["api_app_id"] == "A123ABC456"


async def test_client_error_wrapped_as_upstream_error():
    sqs = MagicMock()
    sqs.send_message.side_effect = ClientError(
        {"Error": {"Code": "InvalidParameterValue", "Message": "bad"}}, "SendMessage"
    )

    with pytest.raises(UpstreamError, match="Ev123ABC456"):
        await enqueue_message(sqs, QUEUE_URL, _make_message())


async def test_connection_error_wrapped_as_upstream_error():
    sqs = MagicMock()
    sqs.send_message.side_effect = EndpointConnectionError(endpoint_url=QUEUE_URL)

    with pytest.raises(UpstreamError):
        await enqueue_message(sqs, QUEUE_URL, _make_message())
