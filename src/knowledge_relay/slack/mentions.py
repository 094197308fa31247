"""Mention token removal for Slack message text."""

import re

# Matches Slack user references: <@U123> and <@U123|name>
SLACK_MENTION_PATTERN = re.compile(r"<@[^>]*>")


def strip_mentions(text: str) -> str:
    """Remove every user mention from Slack mrkdwn text and trim whitespace.

    Returns an empty string when the message was nothing but mentions.
    """
    return SLACK_MENTION_PATTERN.sub("", text).strip()
