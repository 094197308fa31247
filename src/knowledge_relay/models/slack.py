"""Slack Events API payload models.

Field names follow the Slack wire format so a verified request body validates
directly into these models, and the queued message body is the same JSON.
"""

from pydantic import BaseModel, Field

EVENT_CALLBACK_TYPE = "event_callback"
URL_VERIFICATION_TYPE = "url_verification"
APP_MENTION_EVENT_TYPE = "app_mention"


class ChallengeEvent(BaseModel):
    """URL verification handshake sent once when the request URL is configured."""

    challenge: str
    token: str
    type: str

    @property
    def is_url_verification(self) -> bool:
        return self.type == URL_VERIFICATION_TYPE


class AppMentionEvent(BaseModel):
    """Inner ``app_mention`` event.

    Example::

        {
            "type": "app_mention",
            "user": "U061F7AUR",
            "text": "<@U0LAN0Z89> is it everything a river should be?",
            "ts": "1515449522.000016",
            "channel": "C123ABC456",
            "event_ts": "1515449522.000016"
        }
    """

    channel: str
    type: str
    event_ts: str  # Parent ts for the threaded reply
    text: str
    user: str


class QueuedMessage(BaseModel):
    """``event_callback`` envelope, forwarded to the queue unchanged.

    ``event_id`` is both the SQS deduplication id and the message group id.
    """

    token: str
    api_app_id: str
    type: str
    event_id: str
    event_time: int = Field(ge=0)
    event: AppMentionEvent

    @property
    def is_app_mention(self) -> bool:
        """Only event callbacks wrapping an app mention are worth queueing."""
        return self.type == EVENT_CALLBACK_TYPE and self.event.type == APP_MENTION_EVENT_TYPE

    def to_wire(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_wire(cls, body: str) -> "QueuedMessage":
        return cls.model_validate_json(body)
