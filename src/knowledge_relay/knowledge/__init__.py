"""Bedrock knowledge base access: retrieve-and-generate and data source sync."""

from knowledge_relay.knowledge.retrieval import extract_reference_urls, retrieve_answer
from knowledge_relay.knowledge.sync import list_data_source_ids, start_data_sync

__all__ = [
    "extract_reference_urls",
    "list_data_source_ids",
    "retrieve_answer",
    "start_data_sync",
]
