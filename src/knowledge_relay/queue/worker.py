"""Dequeue side: answer queued app mentions from the knowledge base.

Records in a batch are processed one at a time. Each record ends in exactly
one ProcessingStatus; nothing that goes wrong with record n stops record n+1.
Nothing is retried here; redelivery is left to the queue's redrive policy.
"""

import logging

from knowledge_relay.config import Settings, require_setting
from knowledge_relay.errors import ParseError, RoutingError, UpstreamError
from knowledge_relay.knowledge.retrieval import retrieve_answer
from knowledge_relay.models.retrieval import BatchOutcome, MessageOutcome, ProcessingStatus
from knowledge_relay.models.slack import QueuedMessage
from knowledge_relay.slack.mentions import strip_mentions
from knowledge_relay.slack.notifier import SlackNotifier

logger = logging.getLogger(__name__)


def parse_record(record: dict, expected_source: str) -> QueuedMessage:
    """Decode an SQS record body into a QueuedMessage.

    Raises:
        RoutingError: The record names a different source queue.
        ParseError: The body is missing or is not a valid message.
    """
    source = record.get("eventSourceARN")
    if source and source != expected_source:
        raise RoutingError(f"unexpected event source {source}")

    body = record.get("body")
    if not body:
        raise ParseError("record has no body")
    try:
        return QueuedMessage.from_wire(body)
    except ValueError as exc:
        raise ParseError(f"error parsing message: {exc}") from exc


class RetrievalWorker:
    """Turns queued mentions into threaded knowledge base answers."""

    def __init__(
        self,
        *,
        notifier: SlackNotifier,
        runtime_client,
        knowledge_base_id: str,
        model_arn: str,
        expected_source: str,
    ):
        self.notifier = notifier
        self.runtime_client = runtime_client
        self.knowledge_base_id = knowledge_base_id
        self.model_arn = model_arn
        self.expected_source = expected_source

    @classmethod
    def from_settings(cls, settings: Settings, *, notifier: SlackNotifier, runtime_client):
        """Build a worker, raising ConfigError if a required setting is empty."""
        return cls(
            notifier=notifier,
            runtime_client=runtime_client,
            knowledge_base_id=require_setting(settings, "knowledge_base_id"),
            model_arn=require_setting(settings, "chat_model_id"),
            expected_source=require_setting(settings, "queue_arn"),
        )

    async def process(self, record: dict) -> MessageOutcome:
        """Run one record through parse -> strip -> retrieve -> notify."""
        message_id = record.get("messageId")

        try:
            message = parse_record(record, self.expected_source)
        except RoutingError as exc:
            logger.warning("Skipping record %s: %s", message_id, exc)
            return MessageOutcome(
                message_id=message_id, status=ProcessingStatus.SKIPPED_ROUTING, detail=str(exc)
            )
        except ParseError as exc:
            logger.warning("Skipping record %s: %s", message_id, exc)
            return MessageOutcome(
                message_id=message_id, status=ProcessingStatus.SKIPPED_PARSE, detail=str(exc)
            )

        event = message.event
        question = strip_mentions(event.text)
        if not question:
            return MessageOutcome(
                message_id=message_id,
                status=ProcessingStatus.SKIPPED_EMPTY,
                event_id=message.event_id,
            )

        try:
            result = await retrieve_answer(
                self.runtime_client,
                question,
                knowledge_base_id=self.knowledge_base_id,
                model_arn=self.model_arn,
            )
        except UpstreamError as exc:
            logger.error("Error retrieving answer for event %s: %s", message.event_id, exc)
            return MessageOutcome(
                message_id=message_id,
                status=ProcessingStatus.RETRIEVAL_FAILED,
                event_id=message.event_id,
                detail=str(exc),
            )

        delivered = await self.notifier.notify(event.channel, event.event_ts, event.user, result)
        return MessageOutcome(
            message_id=message_id,
            status=ProcessingStatus.ANSWERED if delivered else ProcessingStatus.NOTIFY_FAILED,
            event_id=message.event_id,
        )

    async def process_batch(self, records: list[dict]) -> BatchOutcome:
        """Process every record in delivery order, isolating failures per record."""
        outcomes: list[MessageOutcome] = []
        for record in records:
            try:
                outcome = await self.process(record)
            except Exception as exc:
                logger.error(
                    "Unexpected failure processing record %s",
                    record.get("messageId"),
                    exc_info=True,
                )
                outcome = MessageOutcome(
                    message_id=record.get("messageId"),
                    status=ProcessingStatus.ERROR,
                    detail=str(exc),
                )
            outcomes.append(outcome)

        batch = BatchOutcome(outcomes=outcomes)
        logger.info(
            "Finished processing queue batch",
            extra={"answered": batch.answered, "skipped": batch.skipped, "failed": batch.failed},
        )
        return batch
