"""Answer generation against a Bedrock knowledge base.

Wraps ``bedrock-agent-runtime`` RetrieveAndGenerate and reduces its citation
tree to the ordered list of Confluence page URLs it references. The boto3 call
is synchronous, so it runs in a worker thread.
"""

import asyncio
import logging

from botocore.exceptions import BotoCoreError, ClientError

from knowledge_relay.errors import UpstreamError
from knowledge_relay.models.retrieval import RetrievalResult

logger = logging.getLogger(__name__)

# Only Confluence-backed references carry a URL we can link to
DOCUMENT_STORE_LOCATION_TYPE = "CONFLUENCE"


def _reference_url(reference: object) -> str | None:
    """Return the Confluence URL of a retrieved reference, or None if any link is missing."""
    if not isinstance(reference, dict):
        return None
    location = reference.get("location")
    if not isinstance(location, dict) or location.get("type") != DOCUMENT_STORE_LOCATION_TYPE:
        return None
    confluence = location.get("confluenceLocation")
    if not isinstance(confluence, dict):
        return None
    url = confluence.get("url")
    return url if isinstance(url, str) and url else None


def extract_reference_urls(citations: list[dict] | None) -> list[str]:
    """Flatten citations into reference URLs, preserving backend order.

    References of another location type, or without a URL, are dropped.
    """
    urls: list[str] = []
    for citation in citations or []:
        if not isinstance(citation, dict):
            continue
        for reference in citation.get("retrievedReferences") or []:
            url = _reference_url(reference)
            if url is not None:
                urls.append(url)
    return urls


async def retrieve_answer(
    runtime_client,
    query: str,
    *,
    knowledge_base_id: str,
    model_arn: str,
) -> RetrievalResult:
    """Generate an answer for ``query`` grounded in the knowledge base.

    Args:
        runtime_client: boto3 ``bedrock-agent-runtime`` client.
        query: Question text with mentions already stripped.
        knowledge_base_id: Knowledge base to retrieve from.
        model_arn: Model used to generate the answer.

    Returns:
        RetrievalResult with the answer text and cited Confluence URLs.

    Raises:
        UpstreamError: The call failed or returned no output text.
    """
    try:
        response = await asyncio.to_thread(
            runtime_client.retrieve_and_generate,
            input={"text": query},
            retrieveAndGenerateConfiguration={
                "type": "KNOWLEDGE_BASE",
                "knowledgeBaseConfiguration": {
                    "knowledgeBaseId": knowledge_base_id,
                    "modelArn": model_arn,
                },
            },
        )
    except (BotoCoreError, ClientError) as exc:
        raise UpstreamError(f"retrieve_and_generate failed: {exc}") from exc

    output = response.get("output") or {}
    text = output.get("text")
    if text is None:
        raise UpstreamError("Fail to generate an output for the input.")

    reference_urls = extract_reference_urls(response.get("citations"))
    logger.info(
        "Retrieved answer",
        extra={"answer_length": len(text), "reference_count": len(reference_urls)},
    )
    return RetrievalResult(text=text, reference_urls=reference_urls)
