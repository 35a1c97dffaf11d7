"""Data models for issue-relay."""

from issue_relay.models.config import Settings
from issue_relay.models.issue import (
    BareIssue,
    IssueEvent,
    IssuePayload,
    PayloadKind,
    UnrecognizedPayload,
    WebhookPayload,
    parse_webhook_payload,
)

__all__ = [
    "BareIssue",
    "IssueEvent",
    "IssuePayload",
    "PayloadKind",
    "Settings",
    "UnrecognizedPayload",
    "WebhookPayload",
    "parse_webhook_payload",
]
