"""FastAPI application entry point for the webhook relay.

Routes:
- POST /webhook/github: GitHub webhook receiver (signed)
- GET /health: liveness probe with uptime
- GET /metrics: Prometheus metrics
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry

from src.hookrelay.config import RelaySettings, get_settings
from src.hookrelay.discord.client import DiscordWebhookClient
from src.hookrelay.dispatcher import WebhookDispatcher
from src.hookrelay.metrics import RelayMetrics
from src.hookrelay.webhook.signature import SignatureVerifier

logger = logging.getLogger(__name__)


def _redact_secret(value: str, visible_chars: int = 4) -> str:
    """Redact a secret value, showing only the first few characters.

    Args:
        value: The secret value to redact.
        visible_chars: Number of characters to show at the start.

    Returns:
        Redacted string with asterisks replacing hidden characters.
    """
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def _redact_webhook_url(url: str) -> str:
    """Hide the token segment of a Discord webhook URL.

    Discord webhook URLs end in ``/<id>/<token>``; the token alone grants
    posting rights to the channel.
    """
    base, sep, token = url.rstrip("/").rpartition("/")
    if not sep:
        return _redact_secret(url)
    return f"{base}/{_redact_secret(token)}"


def _log_configuration(settings: RelaySettings) -> None:
    """Log configuration values with secrets redacted."""
    logger.info("Relay configuration:")
    logger.info(f"  GitHub Webhook Secret: {_redact_secret(settings.github_webhook_secret)}")
    logger.info(f"  Discord Webhook URL: {_redact_webhook_url(settings.discord_webhook_url)}")
    logger.info(f"  Delivery Timeout Seconds: {settings.delivery_timeout_seconds}")
    logger.info(f"  Max Commit Embeds: {settings.max_commit_embeds}")
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")


def create_app(
    settings: Optional[RelaySettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    registry: Optional[CollectorRegistry] = None,
) -> FastAPI:
    """Build the relay application.

    Args:
        settings: Relay settings. Loaded from the environment at startup
                  when not given.
        transport: Optional httpx transport for the Discord client.
        registry: Optional Prometheus registry; a private one is created
                  when not given so several apps can coexist in one process.

    Returns:
        The FastAPI application.
    """
    metrics = RelayMetrics(registry=registry or CollectorRegistry())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings or get_settings()
        logger.info("Webhook relay starting up...")
        _log_configuration(cfg)

        discord_client = DiscordWebhookClient(
            webhook_url=cfg.discord_webhook_url,
            timeout=cfg.delivery_timeout_seconds,
            transport=transport,
        )
        app.state.dispatcher = WebhookDispatcher(
            verifier=SignatureVerifier(secret=cfg.github_webhook_secret),
            discord_client=discord_client,
            metrics=metrics,
            max_commit_embeds=cfg.max_commit_embeds,
        )
        app.state.started_at = time.monotonic()

        logger.info(f"Relay is up and running on port {cfg.port}")

        yield

        logger.info("Webhook relay shutting down...")
        await discord_client.close()

    app = FastAPI(
        title="hookrelay",
        description="Relays GitHub push and pull request webhooks to Discord",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.post("/webhook/github", response_class=PlainTextResponse)
    async def github_webhook(request: Request):
        """GitHub webhook receiver endpoint.

        The body is read as raw bytes: the signature covers the exact bytes
        GitHub sent, so nothing may decode and re-encode it first.
        """
        body = await request.body()
        result = await request.app.state.dispatcher.dispatch(
            body=body,
            signature=request.headers.get("x-hub-signature-256"),
            event_type=request.headers.get("x-github-event"),
        )
        return PlainTextResponse(result.message, status_code=result.status_code)

    @app.get("/health")
    async def health(request: Request):
        """Liveness probe endpoint.

        Returns:
            dict: Status, current ISO-8601 timestamp, and process uptime
                  in seconds.
        """
        uptime = time.monotonic() - request.app.state.started_at
        timestamp = datetime.now(timezone.utc).isoformat()
        logger.debug(f"Health check at {timestamp} - Uptime: {int(uptime)}s")
        return {"status": "ok", "timestamp": timestamp, "uptime": uptime}

    @app.get("/metrics")
    async def metrics_endpoint():
        """Prometheus metrics endpoint."""
        return Response(metrics.generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()


def run() -> None:
    """Start the relay with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
