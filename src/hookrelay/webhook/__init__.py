"""Inbound GitHub webhook handling.

- signature: HMAC-SHA256 authentication of raw request bodies
- classifier: routing by the ``X-GitHub-Event`` header
- models: typed push and pull request payloads
"""

from .classifier import EventKind, classify_event
from .models import (
    CommitRecord,
    PullRequestEvent,
    PushEvent,
    Repository,
)
from .signature import (
    SignatureVerificationError,
    SignatureVerifier,
    compute_signature,
)

__all__ = [
    "CommitRecord",
    "EventKind",
    "PullRequestEvent",
    "PushEvent",
    "Repository",
    "SignatureVerificationError",
    "SignatureVerifier",
    "classify_event",
    "compute_signature",
]
