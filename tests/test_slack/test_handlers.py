"""Tests for Slack payload classification and enqueue dispatch."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from knowledge_relay.errors import UpstreamError, VerificationError
from knowledge_relay.models.slack import ChallengeEvent, QueuedMessage
from knowledge_relay.slack.handlers import classify_payload, handle_slack_event

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/mentions.fifo"


def _make_callback(**event_overrides: object) -> dict:
    """Build a valid app_mention event_callback payload with event overrides."""
    event = {
        "type": "app_mention",
        "user": "U061F7AUR",
        "text": "<@U0LAN0Z89> what is the deploy process?",
        "ts": "1515449522.000016",
        "channel": "C123ABC456",
        "event_ts": "1515449522.000016",
    }
    event.update(event_overrides)
    return {
        "token": "ZZZZZZWSxiZZZ2yIvs3peJ",
        "team_id": "T123ABC456",
        "api_app_id": "A123ABC456",
        "event": event,
        "type": "event_callback",
        "event_id": "Ev123ABC456",
        "event_time": 1515449522,
    }


# -- classify_payload tests --


def test_classifies_challenge():
    payload = {"type": "url_verification", "challenge": "abc123", "token": "t"}

    result = classify_payload(payload)

    assert isinstance(result, ChallengeEvent)
    assert result.challenge == "abc123"


def test_classifies_app_mention():
    result = classify_payload(_make_callback())

    assert isinstance(result, QueuedMessage)
    assert result.event_id == "Ev123ABC456"
    assert result.event.channel == "C123ABC456"


def test_ignores_other_inner_event_type():
    """A callback whose inner event is not app_mention is ignored."""
    assert classify_payload(_make_callback(type="reaction_added")) is None


def test_ignores_other_outer_type():
    payload = _make_callback()
    payload["type"] = "app_rate_limited"
    assert classify_payload(payload) is None


def test_ignores_payload_missing_fields():
    payload = _make_callback()
    del payload["event_id"]
    assert classify_payload(payload) is None


@pytest.mark.parametrize("payload", [None, [], "text", 42])
def test_ignores_non_object_payloads(payload: object):
    assert classify_payload(payload) is None


def test_challenge_wins_when_both_shapes_match():
    """A payload carrying challenge fields and a full callback resolves as a challenge."""
    payload = _make_callback()
    payload["challenge"] = "abc123"

    assert isinstance(classify_payload(payload), ChallengeEvent)


# -- handle_slack_event tests --


async def test_handle_challenge_echoes_value():
    with patch("knowledge_relay.slack.handlers.enqueue_message", new_callable=AsyncMock) as enqueue:
        response = await handle_slack_event(
            {"type": "url_verification", "challenge": "abc123", "token": "t"},
            MagicMock(),
            QUEUE_URL,
        )

    assert response.body == b'{"challenge":"abc123"}'
    enqueue.assert_not_called()


async def test_handle_challenge_with_wrong_type_rejected():
    with pytest.raises(VerificationError, match="Error Verifying."):
        await handle_slack_event(
            {"type": "event_callback", "challenge": "abc123", "token": "t"},
            MagicMock(),
            QUEUE_URL,
        )


async def test_handle_mention_enqueues_once():
    sqs = MagicMock()
    with patch("knowledge_relay.slack.handlers.enqueue_message", new_callable=AsyncMock) as enqueue:
        response = await handle_slack_event(_make_callback(), sqs, QUEUE_URL)

    assert response.status_code == 200
    assert response.body == b"{}"
    enqueue.assert_called_once()
    args = enqueue.call_args.args
    assert args[0] is sqs
    assert args[1] == QUEUE_URL
    assert args[2].event_id == "Ev123ABC456"


async def test_handle_ignored_event_acknowledged():
    with patch("knowledge_relay.slack.handlers.enqueue_message", new_callable=AsyncMock) as enqueue:
        response = await handle_slack_event(
            _make_callback(type="reaction_added"), MagicMock(), QUEUE_URL
        )

    assert response.body == b"{}"
    enqueue.assert_not_called()


async def test_handle_enqueue_failure_still_acknowledged():
    """Queue outages are logged; Slack still gets a success response."""
    with patch("knowledge_relay.slack.handlers.enqueue_message", new_callable=AsyncMock) as enqueue:
        enqueue.side_effect = UpstreamError("queue down")
        response = await handle_slack_event(_make_callback(), MagicMock(), QUEUE_URL)

    assert response.status_code == 200
    assert response.body == b"{}"


async def test_handle_missing_queue_url_acknowledged_without_enqueue():
    with patch("knowledge_relay.slack.handlers.enqueue_message", new_callable=AsyncMock) as enqueue:
        response = await handle_slack_event(_make_callback(), MagicMock(), "")

    assert response.body == b"{}"
    enqueue.assert_not_called()
