"""Webhook dispatch: verify, classify, format, deliver.

The WebhookDispatcher runs the full handling of one GitHub delivery and
turns the outcome into an HTTP status and a short plain-text body. It holds
no per-request state, so a single instance serves concurrent requests.

Outcomes:
- 401: missing, malformed, or mismatched signature; nothing is delivered
- 200: event type not relayed, or push without commits; nothing is delivered
- 400: authenticated body that is not a valid push/pull request payload
- 200 / 500: message delivered / Discord call failed (never retried)
"""

import logging
from typing import Optional

from pydantic import BaseModel, ValidationError

from src.hookrelay.config import DISCORD_MAX_EMBEDS
from src.hookrelay.discord.client import DeliveryError, DiscordWebhookClient
from src.hookrelay.discord.formatting import format_pull_request_message, format_push_message
from src.hookrelay.discord.models import ChatMessage
from src.hookrelay.metrics import RelayMetrics
from src.hookrelay.webhook.classifier import EventKind, classify_event
from src.hookrelay.webhook.models import PullRequestEvent, PushEvent
from src.hookrelay.webhook.signature import SignatureVerificationError, SignatureVerifier


logger = logging.getLogger(__name__)


class DispatchResult(BaseModel):
    """HTTP outcome of dispatching one webhook.

    Attributes:
        status_code: Status to return to GitHub.
        message: Plain-text response body.
        delivered: Whether a message reached Discord.
    """

    status_code: int
    message: str
    delivered: bool = False


IGNORED = DispatchResult(status_code=200, message="Event ignored")
NO_COMMITS = DispatchResult(status_code=200, message="No commits to display")
INVALID_PAYLOAD = DispatchResult(status_code=400, message="Invalid payload")


class WebhookDispatcher:
    """Routes authenticated GitHub webhooks to Discord.

    Attributes:
        verifier: Signature verifier holding the webhook secret.
        discord_client: Client for the Discord webhook.
        metrics: Optional Prometheus metrics sink.
        max_commit_embeds: Upper bound on commit embeds per push message.
    """

    def __init__(
        self,
        verifier: SignatureVerifier,
        discord_client: DiscordWebhookClient,
        metrics: Optional[RelayMetrics] = None,
        max_commit_embeds: int = DISCORD_MAX_EMBEDS,
    ) -> None:
        self.verifier = verifier
        self.discord_client = discord_client
        self.metrics = metrics
        self.max_commit_embeds = max_commit_embeds

    async def dispatch(
        self,
        body: bytes,
        signature: Optional[str],
        event_type: Optional[str],
    ) -> DispatchResult:
        """Handle one webhook delivery.

        Args:
            body: Raw request body, exactly as received.
            signature: ``X-Hub-Signature-256`` header value, if present.
            event_type: ``X-GitHub-Event`` header value, if present.

        Returns:
            The DispatchResult to send back to GitHub.
        """
        try:
            self.verifier.verify(body, signature)
        except SignatureVerificationError as e:
            logger.warning(
                "Rejected webhook: %s",
                e.reason,
                extra={"event_type": event_type},
            )
            self._record(classify_event(event_type), "unauthorized")
            return DispatchResult(status_code=401, message=e.reason)

        kind = classify_event(event_type)

        if kind is EventKind.PULL_REQUEST:
            return await self._handle_pull_request(body)
        if kind is EventKind.PUSH:
            return await self._handle_push(body)

        logger.debug("Ignoring unsupported event type: %s", event_type)
        self._record(kind, "ignored")
        return IGNORED

    async def _handle_pull_request(self, body: bytes) -> DispatchResult:
        try:
            event = PullRequestEvent.model_validate_json(body)
        except ValidationError as e:
            return self._invalid(EventKind.PULL_REQUEST, e)

        message = format_pull_request_message(event)
        delivered = await self._deliver(EventKind.PULL_REQUEST, message)
        if not delivered:
            return DispatchResult(status_code=500, message="Error processing PR webhook")

        logger.info(
            "Relayed pull request event: %s #%d %s",
            event.repository.full_name,
            event.pull_request.number,
            event.action,
        )
        return DispatchResult(
            status_code=200,
            message="PR event processed successfully",
            delivered=True,
        )

    async def _handle_push(self, body: bytes) -> DispatchResult:
        try:
            event = PushEvent.model_validate_json(body)
        except ValidationError as e:
            return self._invalid(EventKind.PUSH, e)

        message = format_push_message(event, max_embeds=self.max_commit_embeds)
        if message is None:
            logger.info(
                "Push to %s:%s has no commits, nothing to relay",
                event.repository.full_name,
                event.branch,
            )
            self._record(EventKind.PUSH, "no_commits")
            return NO_COMMITS

        delivered = await self._deliver(EventKind.PUSH, message)
        if not delivered:
            return DispatchResult(status_code=500, message="Error processing webhook")

        logger.info(
            "Relayed push event: %s:%s (%d commits)",
            event.repository.full_name,
            event.branch,
            len(event.commits),
        )
        return DispatchResult(
            status_code=200,
            message="Webhook processed successfully",
            delivered=True,
        )

    async def _deliver(self, kind: EventKind, message: ChatMessage) -> bool:
        """Send a message, reporting failure instead of raising."""
        try:
            outcome = await self.discord_client.send(message)
        except DeliveryError as e:
            logger.error(
                "Error sending to Discord: %s",
                e.message,
                extra={
                    "event_kind": kind.value,
                    "status_code": e.status_code,
                    "response_body": (e.response_body or "")[:500],
                },
            )
            self._record(kind, "failed")
            if self.metrics is not None:
                self.metrics.record_delivery(kind.value, success=False)
            return False

        self._record(kind, "relayed")
        if self.metrics is not None:
            self.metrics.record_delivery(
                kind.value,
                success=True,
                duration_seconds=outcome.duration_seconds,
            )
        return True

    def _invalid(self, kind: EventKind, error: ValidationError) -> DispatchResult:
        logger.warning(
            "Invalid %s payload: %d validation errors",
            kind.value,
            error.error_count(),
        )
        self._record(kind, "invalid")
        return INVALID_PAYLOAD

    def _record(self, kind: EventKind, result: str) -> None:
        if self.metrics is not None:
            self.metrics.record_webhook(kind.value, result)
