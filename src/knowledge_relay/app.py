"""FastAPI application with lifespan, health, webhook, and sync endpoints."""

import hmac
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from knowledge_relay.config import get_settings, require_setting
from knowledge_relay.errors import ConfigError, UpstreamError, VerificationError
from knowledge_relay.knowledge.sync import start_data_sync
from knowledge_relay.logging_config import configure_logging
from knowledge_relay.services import Services, build_services, get_services
from knowledge_relay.slack.router import router as slack_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, load config, and build clients on startup."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    app.state.services = build_services(settings)
    yield


app = FastAPI(
    title="Knowledge Relay",
    lifespan=lifespan,
)
app.include_router(slack_router)


@app.exception_handler(VerificationError)
async def verification_error_handler(request: Request, exc: VerificationError) -> JSONResponse:
    """Render rejected webhook requests in the shape Slack's tooling displays."""
    return JSONResponse(status_code=400, content={"success": False, "message": str(exc)})


async def verify_scheduler(request: Request) -> None:
    """Verify the scheduler secret header for protected endpoints.

    Raises HTTPException 403 if the header is missing, empty, or mismatched.
    """
    settings = get_settings()
    secret = request.headers.get("X-Scheduler-Secret", "")
    if not settings.scheduler_secret or not hmac.compare_digest(
        secret.encode(), settings.scheduler_secret.encode()
    ):
        raise HTTPException(status_code=403, detail="Invalid scheduler secret")


@app.get("/health")
async def health():
    """Health check endpoint for load balancers and local development."""
    return {
        "status": "ok",
        "service": "knowledge-relay",
        "version": "0.1.0",
    }


@app.post("/sync")
async def sync_endpoint(
    _: None = Depends(verify_scheduler),
    services: Services = Depends(get_services),
):
    """Trigger a knowledge base sync: start ingestion for every data source."""
    settings = get_settings()
    try:
        knowledge_base_id = require_setting(settings, "knowledge_base_id")
        outcome = await start_data_sync(services.bedrock_agent, knowledge_base_id)
    except (ConfigError, UpstreamError) as exc:
        logger.error("Knowledge base sync failed", extra={"error": str(exc)})
        return {"status": "error", "error": str(exc)}

    return {"status": "ok", **outcome.model_dump()}
