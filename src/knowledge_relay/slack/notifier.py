"""Threaded Slack replies carrying knowledge base answers.

Delivery is fire-and-forget: a Slack API failure is logged and reported back
as ``False``, never raised, so one undeliverable reply cannot stop the batch.
"""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from knowledge_relay.models.retrieval import RetrievalResult

logger = logging.getLogger(__name__)


def build_reply_text(user_id: str, result: RetrievalResult) -> str:
    """Format the answer as mrkdwn, tagging the asker and numbering cited URLs from 1."""
    text = f"<@{user_id}>\n{result.text}"
    if result.reference_urls:
        references = "\n".join(
            f"{index}: <{url}>" for index, url in enumerate(result.reference_urls, start=1)
        )
        text += f"\n\nRelated URLs:\n{references}"
    return text


def build_reply_blocks(text: str) -> list[dict]:
    """Wrap reply text in a single mrkdwn section block."""
    return [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": text},
        }
    ]


class SlackNotifier:
    """Posts retrieval results back into the thread that asked for them."""

    def __init__(self, client: AsyncWebClient):
        self._client = client

    async def notify(
        self, channel: str, thread_ts: str, user_id: str, result: RetrievalResult
    ) -> bool:
        """Post the formatted answer as a thread reply.

        Args:
            channel: Slack channel ID of the mention.
            thread_ts: ``event_ts`` of the mention (thread parent).
            user_id: User who mentioned the bot; tagged in the reply.
            result: Answer text and reference URLs.

        Returns:
            True if Slack accepted the message, False if the API call failed.
        """
        text = build_reply_text(user_id, result)
        try:
            await self._client.chat_postMessage(
                channel=channel,
                thread_ts=thread_ts,
                text=text,
                blocks=build_reply_blocks(text),
            )
        except SlackApiError as exc:
            error_code = exc.response.get("error", "") if exc.response else ""
            logger.warning(
                "Failed to post answer to %s (%s)",
                channel,
                error_code,
                exc_info=True,
            )
            return False
        return True
