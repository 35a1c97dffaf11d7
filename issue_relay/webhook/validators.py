"""Webhook signature validation."""

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def compute_signature(payload: bytes, secret: str) -> str:
    """Compute the X-Hub-Signature-256 header value for a payload.

    Args:
        payload: The raw request body bytes.
        secret: The webhook secret shared with GitHub.

    Returns:
        ``sha256=`` followed by the hex HMAC-SHA256 digest.
    """
    return SIGNATURE_PREFIX + hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()


def verify_webhook_signature(payload: bytes, signature: str | None, secret: str | None) -> bool:
    """Verify the HMAC-SHA256 signature of a webhook payload.

    Fails closed: a missing header or a missing secret is a failed
    verification, never an exception. Both values are compared as UTF-8 bytes
    with :func:`hmac.compare_digest`, which returns False for inputs of
    different length without looking at their content, and accepts header
    values that are not ASCII.

    Args:
        payload: The raw request body bytes, before any JSON decoding.
        signature: The X-Hub-Signature-256 header value.
        secret: The webhook secret configured on the GitHub hook.

    Returns:
        True if the signature matches the payload.
    """
    if not signature or not secret:
        return False

    expected_signature = compute_signature(payload, secret)

    return hmac.compare_digest(signature.encode("utf-8"), expected_signature.encode("utf-8"))
