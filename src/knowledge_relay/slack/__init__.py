"""Slack ingress: webhook verification, event classification, and threaded replies."""

from knowledge_relay.slack.client import create_slack_client
from knowledge_relay.slack.handlers import classify_payload, handle_slack_event
from knowledge_relay.slack.mentions import strip_mentions
from knowledge_relay.slack.notifier import SlackNotifier, build_reply_text
from knowledge_relay.slack.verification import verify_signature

__all__ = [
    "SlackNotifier",
    "build_reply_text",
    "classify_payload",
    "create_slack_client",
    "handle_slack_event",
    "strip_mentions",
    "verify_signature",
]
