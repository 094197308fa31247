"""AWS Lambda entry points for the queue consumer and the scheduled sync.

Both handlers build their clients per invocation, run the async pipeline to
completion, and always return ``{}``: failures are logged, never raised, so
the runtime does not retry a batch that already answered some mentions.
"""

import asyncio
import logging

from knowledge_relay.config import get_settings, require_setting
from knowledge_relay.errors import ConfigError, UpstreamError
from knowledge_relay.knowledge.sync import start_data_sync
from knowledge_relay.logging_config import configure_logging
from knowledge_relay.queue.worker import RetrievalWorker
from knowledge_relay.services import build_services

logger = logging.getLogger(__name__)


def queue_handler(event: dict, context) -> dict:
    """Consume one SQS batch (``event["Records"]``) of queued app mentions."""
    settings = get_settings()
    configure_logging(settings.log_level)

    records = event.get("Records") or []
    logger.info("Received queue batch of %d record(s)", len(records))

    try:
        services = build_services(settings)
        worker = RetrievalWorker.from_settings(
            settings,
            notifier=services.notifier,
            runtime_client=services.bedrock_runtime,
        )
    except ConfigError as exc:
        logger.error("Error processing queue batch: %s", exc)
        return {}

    asyncio.run(worker.process_batch(records))
    return {}


def sync_handler(event: dict, context) -> dict:
    """Start ingestion jobs for every data source on a schedule."""
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        knowledge_base_id = require_setting(settings, "knowledge_base_id")
        services = build_services(settings)
        outcome = asyncio.run(start_data_sync(services.bedrock_agent, knowledge_base_id))
    except (ConfigError, UpstreamError) as exc:
        logger.error("Error processing sync event: %s", exc)
        return {}

    logger.info(
        "Finished knowledge base sync",
        extra={"started": outcome.started, "failed": outcome.failed},
    )
    return {}
