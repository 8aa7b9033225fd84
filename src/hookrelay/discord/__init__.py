"""Outbound Discord messaging.

- models: the Discord webhook message contract
- formatting: GitHub event to message mapping
- client: single-attempt delivery to the webhook
"""

from .client import DeliveryError, DeliveryOutcome, DiscordWebhookClient
from .formatting import format_pull_request_message, format_push_message
from .models import ChatMessage, Embed, EmbedAuthor, EmbedField, EmbedFooter

__all__ = [
    "ChatMessage",
    "DeliveryError",
    "DeliveryOutcome",
    "DiscordWebhookClient",
    "Embed",
    "EmbedAuthor",
    "EmbedField",
    "EmbedFooter",
    "format_pull_request_message",
    "format_push_message",
]
