"""Data models for the ingress, worker, and sync paths."""

from knowledge_relay.models.retrieval import (
    BatchOutcome,
    MessageOutcome,
    ProcessingStatus,
    RetrievalResult,
    SyncOutcome,
)
from knowledge_relay.models.slack import (
    APP_MENTION_EVENT_TYPE,
    EVENT_CALLBACK_TYPE,
    URL_VERIFICATION_TYPE,
    AppMentionEvent,
    ChallengeEvent,
    QueuedMessage,
)

__all__ = [
    "APP_MENTION_EVENT_TYPE",
    "EVENT_CALLBACK_TYPE",
    "URL_VERIFICATION_TYPE",
    "AppMentionEvent",
    "BatchOutcome",
    "ChallengeEvent",
    "MessageOutcome",
    "ProcessingStatus",
    "QueuedMessage",
    "RetrievalResult",
    "SyncOutcome",
]
