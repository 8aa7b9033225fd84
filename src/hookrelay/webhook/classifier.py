"""Routing of GitHub webhook deliveries by their ``X-GitHub-Event`` header."""

from enum import Enum
from typing import Optional


class EventKind(str, Enum):
    """Handling paths for an inbound webhook.

    Attributes:
        PUSH: Commits pushed to a branch.
        PULL_REQUEST: Any pull request activity.
        IGNORED: Every other event type (ping, issues, stars, ...), and
                 requests without a usable event header.
    """

    PUSH = "push"
    PULL_REQUEST = "pull_request"
    IGNORED = "ignored"


_ROUTES = {
    "push": EventKind.PUSH,
    "pull_request": EventKind.PULL_REQUEST,
}


def classify_event(event_type: Optional[str]) -> EventKind:
    """Map an ``X-GitHub-Event`` header value to a handling path.

    Never raises: unknown, empty, or missing values are ignored events.

    Args:
        event_type: The raw header value, or None when the header is absent.

    Returns:
        The EventKind for the request.
    """
    if not isinstance(event_type, str):
        return EventKind.IGNORED
    return _ROUTES.get(event_type.strip().lower(), EventKind.IGNORED)
