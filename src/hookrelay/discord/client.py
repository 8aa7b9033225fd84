"""Async Discord webhook client.

Posts formatted messages to a Discord channel webhook. Each message gets
exactly one delivery attempt: there is no queue to retry from, so a failed
call is reported to the caller and the event is dropped.
"""

import logging
import time
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from src.hookrelay.discord.models import ChatMessage


logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised when a message could not be delivered to Discord.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from Discord, None for transport errors.
        response_body: Response body from Discord, if one was received.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)


class DeliveryOutcome(BaseModel):
    """Result of a successful delivery.

    Attributes:
        status_code: HTTP status returned by Discord (204 for webhooks
                     called without ``?wait=true``).
        duration_seconds: Wall time of the call.
    """

    status_code: int
    duration_seconds: float


class DiscordWebhookClient:
    """Client for a single Discord channel webhook.

    Attributes:
        webhook_url: The Discord webhook URL.
        timeout: Request timeout in seconds.

    Example:
        >>> client = DiscordWebhookClient("https://discord.com/api/webhooks/1/abc")
        >>> async with client:
        ...     await client.send(ChatMessage(content="hello"))
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the Discord client.

        Args:
            webhook_url: The Discord webhook URL.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used to stub Discord in tests.
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": "hookrelay/1.0"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "DiscordWebhookClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def send(self, message: ChatMessage) -> DeliveryOutcome:
        """Post a message to the webhook.

        Args:
            message: The message to deliver.

        Returns:
            DeliveryOutcome describing the accepted request.

        Raises:
            DeliveryError: On timeout, connection failure, or any HTTP
                status of 400 or above.
        """
        started = time.monotonic()
        try:
            response = await self.client.post(self.webhook_url, json=message.to_payload())
        except httpx.TimeoutException as e:
            logger.error(
                "Discord webhook request timed out",
                extra={"timeout": self.timeout},
            )
            raise DeliveryError(f"Discord webhook timed out after {self.timeout}s") from e
        except httpx.RequestError as e:
            logger.error(
                "Discord webhook request failed",
                extra={"error": str(e)},
            )
            raise DeliveryError(f"Discord webhook request failed: {e}") from e

        duration = time.monotonic() - started

        if response.status_code >= 400:
            error_body = response.text
            logger.error(
                "Discord webhook error",
                extra={
                    "status_code": response.status_code,
                    "response_body": error_body[:500],
                },
            )
            raise DeliveryError(
                message=f"Discord webhook error: {response.status_code}",
                status_code=response.status_code,
                response_body=error_body,
            )

        return DeliveryOutcome(status_code=response.status_code, duration_seconds=duration)
