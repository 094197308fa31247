"""Service container wiring Slack and AWS clients from settings.

Everything a request or batch needs is built here from an explicit Settings
value and handed down, instead of each module reading the environment.
"""

from dataclasses import dataclass
from typing import Any

import boto3
from fastapi import Request

from knowledge_relay.config import Settings
from knowledge_relay.slack.client import create_slack_client
from knowledge_relay.slack.notifier import SlackNotifier


@dataclass
class Services:
    """Clients shared by one process (webhook app) or one invocation (queue/sync)."""

    notifier: SlackNotifier
    sqs: Any
    bedrock_runtime: Any
    bedrock_agent: Any


def build_services(settings: Settings) -> Services:
    """Create the Slack notifier and boto3 clients.

    The region comes from ``aws_region`` when set, otherwise from the
    standard AWS environment and config resolution.
    """
    region = settings.aws_region or None
    return Services(
        notifier=SlackNotifier(create_slack_client(settings.slack_bot_token)),
        sqs=boto3.client("sqs", region_name=region),
        bedrock_runtime=boto3.client("bedrock-agent-runtime", region_name=region),
        bedrock_agent=boto3.client("bedrock-agent", region_name=region),
    )


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the container built during app startup."""
    return request.app.state.services
