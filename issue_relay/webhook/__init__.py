"""GitHub webhook verification and dispatch."""

from issue_relay.webhook.handler import WebhookHandler
from issue_relay.webhook.validators import compute_signature, verify_webhook_signature

__all__ = [
    "WebhookHandler",
    "compute_signature",
    "verify_webhook_signature",
]
