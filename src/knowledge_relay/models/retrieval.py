"""Retrieval results and per-item outcomes for the worker and sync job."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RetrievalResult(BaseModel):
    """Generated answer plus the document URLs the knowledge base cited."""

    model_config = ConfigDict(frozen=True)

    text: str
    reference_urls: list[str] = []


class ProcessingStatus(str, Enum):
    """Terminal state of one queue record."""

    ANSWERED = "answered"
    SKIPPED_ROUTING = "skipped_routing"
    SKIPPED_PARSE = "skipped_parse"
    SKIPPED_EMPTY = "skipped_empty"
    RETRIEVAL_FAILED = "retrieval_failed"
    NOTIFY_FAILED = "notify_failed"
    ERROR = "error"


_SKIPPED = {
    ProcessingStatus.SKIPPED_ROUTING,
    ProcessingStatus.SKIPPED_PARSE,
    ProcessingStatus.SKIPPED_EMPTY,
}
_FAILED = {
    ProcessingStatus.RETRIEVAL_FAILED,
    ProcessingStatus.NOTIFY_FAILED,
    ProcessingStatus.ERROR,
}


class MessageOutcome(BaseModel):
    """What happened to a single queue record."""

    message_id: str | None = None
    status: ProcessingStatus
    event_id: str | None = None
    detail: str | None = None


class BatchOutcome(BaseModel):
    """Outcomes of one delivered batch, in delivery order."""

    outcomes: list[MessageOutcome] = []

    @property
    def answered(self) -> int:
        return sum(1 for o in self.outcomes if o.status == ProcessingStatus.ANSWERED)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status in _SKIPPED)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status in _FAILED)


class SyncOutcome(BaseModel):
    """Data sources for which an ingestion job was or was not started."""

    knowledge_base_id: str
    started: list[str] = []
    failed: list[str] = []
