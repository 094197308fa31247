"""SQS FIFO hand-off between the webhook and the retrieval worker."""

from knowledge_relay.queue.dispatcher import enqueue_message
from knowledge_relay.queue.worker import RetrievalWorker

__all__ = [
    "RetrievalWorker",
    "enqueue_message",
]
