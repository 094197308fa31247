"""Async Slack client construction.

The bot token is passed in explicitly; callers own the resulting client
(see ``knowledge_relay.services``) instead of sharing a module-level instance.
"""

from slack_sdk.web.async_client import AsyncWebClient


def create_slack_client(token: str) -> AsyncWebClient:
    """Return an AsyncWebClient authenticated with the given bot token."""
    return AsyncWebClient(token=token)
