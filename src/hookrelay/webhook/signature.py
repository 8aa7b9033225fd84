"""HMAC-SHA256 verification of GitHub webhook signatures.

GitHub signs every delivery with the shared webhook secret and sends the
result in the ``X-Hub-Signature-256`` header as ``sha256=<hex digest>``.
The digest covers the request body exactly as it was sent, so verification
must run on the raw bytes before the body is decoded or re-serialized.
"""

import hashlib
import hmac
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="

_HEX_DIGEST = re.compile(r"[0-9a-f]{64}")


class SignatureVerificationError(Exception):
    """Raised when a webhook request cannot be authenticated.

    Attributes:
        reason: Short, client-safe description used as the response body.
    """

    NO_SIGNATURE = "No signature provided"
    MALFORMED = "Malformed signature"
    INVALID = "Invalid signature"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


def compute_signature(body: bytes, secret: str) -> str:
    """Compute the ``sha256=<hex>`` signature GitHub would send for a body.

    Args:
        body: The raw request body.
        secret: The shared webhook secret.

    Returns:
        The signature header value, lowercase hex with the algorithm prefix.
    """
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


class SignatureVerifier:
    """Verifies ``X-Hub-Signature-256`` headers against a shared secret.

    Attributes:
        secret: The GitHub webhook secret.
    """

    def __init__(self, secret: str) -> None:
        self.secret = secret

    def verify(self, body: bytes, signature: Optional[str]) -> None:
        """Authenticate a webhook body.

        Args:
            body: The raw request body, exactly as received.
            signature: The ``X-Hub-Signature-256`` header value, if any.

        Raises:
            SignatureVerificationError: If the header is missing, malformed,
                or does not match the digest of the body.
        """
        if signature is None or not signature.strip():
            raise SignatureVerificationError(SignatureVerificationError.NO_SIGNATURE)

        signature = signature.strip()
        if not signature.startswith(SIGNATURE_PREFIX) or not _HEX_DIGEST.fullmatch(
            signature[len(SIGNATURE_PREFIX):]
        ):
            raise SignatureVerificationError(SignatureVerificationError.MALFORMED)

        expected = compute_signature(body, self.secret)
        if not hmac.compare_digest(expected.encode("ascii"), signature.encode("ascii")):
            raise SignatureVerificationError(SignatureVerificationError.INVALID)
