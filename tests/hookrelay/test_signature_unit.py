"""Unit tests for SignatureVerifier edge cases."""

import hashlib
import hmac
import json

import pytest

from src.hookrelay.webhook.signature import (
    SignatureVerificationError,
    SignatureVerifier,
    compute_signature,
)


@pytest.fixture
def verifier(secret):
    return SignatureVerifier(secret=secret)


class TestComputeSignature:
    def test_matches_github_reference_vector(self):
        # Example from GitHub's "Validating webhook deliveries" documentation
        signature = compute_signature(b"Hello, World!", "It's a Secret to Everybody")

        assert signature == (
            "sha256=757107ea0eb2509fc211221cce984b8a37570b6d7586c22c46f4379c8b043e17"
        )

    def test_matches_hmac_sha256(self, secret):
        body = b'{"zen": "Keep it logically awesome."}'
        expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()

        assert compute_signature(body, secret) == f"sha256={expected}"


class TestMissingOrMalformedHeader:
    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_signature(self, verifier, header):
        with pytest.raises(SignatureVerificationError) as exc_info:
            verifier.verify(b"{}", header)

        assert exc_info.value.reason == "No signature provided"

    @pytest.mark.parametrize(
        "header",
        [
            "sha1=" + "a" * 40,
            "a" * 64,
            "sha256=",
            "sha256=" + "a" * 63,
            "sha256=" + "g" * 64,
            "sha256=" + "A" * 64,
            "sha256=" + "a" * 64 + "\nextra",
        ],
    )
    def test_malformed_signature(self, verifier, header):
        with pytest.raises(SignatureVerificationError) as exc_info:
            verifier.verify(b"{}", header)

        assert exc_info.value.reason == "Malformed signature"

    def test_well_formed_but_wrong_digest(self, verifier):
        with pytest.raises(SignatureVerificationError) as exc_info:
            verifier.verify(b"{}", "sha256=" + "0" * 64)

        assert exc_info.value.reason == "Invalid signature"

    def test_surrounding_whitespace_is_tolerated(self, verifier, secret):
        body = b'{"ok": true}'

        verifier.verify(body, f"  {compute_signature(body, secret)}\t")


class TestRawBodyInvariant:
    """Signatures cover the bytes on the wire, not a re-encoding of them."""

    def test_reserialized_body_does_not_verify(self, verifier, secret):
        raw = b'{"ref":  "refs/heads/main",\n "commits": []}'
        signature = compute_signature(raw, secret)
        reserialized = json.dumps(json.loads(raw)).encode()

        verifier.verify(raw, signature)
        with pytest.raises(SignatureVerificationError):
            verifier.verify(reserialized, signature)

    def test_non_ascii_body(self, verifier, secret):
        body = '{"message": "Añadir soporte 🚀"}'.encode("utf-8")

        verifier.verify(body, compute_signature(body, secret))
