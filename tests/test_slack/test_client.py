"""Tests for Slack client construction."""

from slack_sdk.web.async_client import AsyncWebClient

from knowledge_relay.slack.client import create_slack_client


def test_create_slack_client_uses_token():
    """create_slack_client returns an AsyncWebClient carrying the given token."""
    client = create_slack_client("xoxb-test")

    assert isinstance(client, AsyncWebClient)
    assert client.token == "xoxb-test"


def test_create_slack_client_returns_new_instances():
    """No hidden caching: each call builds a separate client."""
    assert create_slack_client("xoxb-a") is not create_slack_client("xoxb-a")
