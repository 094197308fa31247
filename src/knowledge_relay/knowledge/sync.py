"""Scheduled re-ingestion of every data source in the knowledge base."""

import asyncio
import logging

from botocore.exceptions import BotoCoreError, ClientError

from knowledge_relay.errors import UpstreamError
from knowledge_relay.models.retrieval import SyncOutcome

logger = logging.getLogger(__name__)


async def list_data_source_ids(agent_client, knowledge_base_id: str) -> list[str]:
    """Return the ids of all data sources in the knowledge base.

    Walks every page of ListDataSources.

    Raises:
        UpstreamError: Any page could not be fetched.
    """

    def _collect() -> list[str]:
        paginator = agent_client.get_paginator("list_data_sources")
        ids: list[str] = []
        for page in paginator.paginate(knowledgeBaseId=knowledge_base_id):
            ids.extend(s["dataSourceId"] for s in page.get("dataSourceSummaries", []))
        return ids

    try:
        return await asyncio.to_thread(_collect)
    except (BotoCoreError, ClientError) as exc:
        raise UpstreamError(
            f"Failed to list data sources for {knowledge_base_id}: {exc}"
        ) from exc


async def start_data_sync(agent_client, knowledge_base_id: str) -> SyncOutcome:
    """Start an ingestion job for each data source.

    A failed listing aborts the sync. A failed ingestion start is logged and
    the remaining sources are still started.
    """
    data_source_ids = await list_data_source_ids(agent_client, knowledge_base_id)
    logger.info(
        "Syncing %d data source(s)",
        len(data_source_ids),
        extra={"knowledge_base_id": knowledge_base_id, "data_source_ids": data_source_ids},
    )

    started: list[str] = []
    failed: list[str] = []
    for data_source_id in data_source_ids:
        try:
            await asyncio.to_thread(
                agent_client.start_ingestion_job,
                knowledgeBaseId=knowledge_base_id,
                dataSourceId=data_source_id,
            )
        except (BotoCoreError, ClientError):
            logger.error(
                "Error starting ingestion job for data source %s",
                data_source_id,
                exc_info=True,
            )
            failed.append(data_source_id)
            continue
        started.append(data_source_id)

    return SyncOutcome(knowledge_base_id=knowledge_base_id, started=started, failed=failed)
