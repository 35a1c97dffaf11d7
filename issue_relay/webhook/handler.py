"""Webhook event handler and dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from issue_relay.models.issue import (
    BareIssue,
    IssueEvent,
    PayloadKind,
    UnrecognizedPayload,
    parse_webhook_payload,
)
from issue_relay.utils.logging import get_logger
from issue_relay.workflow import handle_github_issue

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = get_logger("webhook.handler")


class WebhookHandler:
    """Classifies GitHub webhook payloads and forwards issues to a sink."""

    def __init__(self, issue_sink: Callable[[Mapping[str, Any]], Any] | None = None) -> None:
        """Initialize the handler.

        Args:
            issue_sink: Called with each received issue object. Defaults to
                :func:`issue_relay.workflow.handle_github_issue`.
        """
        self._issue_sink = issue_sink or handle_github_issue

    def dispatch(self, event_type: str, payload: Any) -> dict[str, Any]:
        """Dispatch a webhook payload.

        Args:
            event_type: The X-GitHub-Event header value, possibly empty.
            payload: The decoded JSON body.

        Returns:
            Dictionary describing how the payload was handled.
        """
        action = payload.get("action") if isinstance(payload, dict) else None
        logger.info(
            "Dispatching webhook event",
            extra={"event_type": event_type, "action": action},
        )

        if event_type == "ping":
            return self._handle_ping(payload)

        parsed = parse_webhook_payload(payload)

        if isinstance(parsed, IssueEvent):
            return self._handle_issue_event(event_type, parsed)
        elif isinstance(parsed, BareIssue):
            return self._handle_bare_issue(event_type, parsed)
        else:
            return self._handle_unrecognized(event_type, parsed)

    def _handle_issue_event(self, event_type: str, event: IssueEvent) -> dict[str, Any]:
        logger.info(
            "Issue event received",
            extra={
                "event_type": event_type,
                "action": event.action,
                "repository": event.repository,
                "sender": event.sender,
            },
        )
        self._issue_sink(event.issue)

        return {
            "event_type": event_type,
            "kind": event.kind.value,
            "handled": True,
            "action": event.action,
            "issue_number": event.issue.get("number"),
        }

    def _handle_bare_issue(self, event_type: str, bare: BareIssue) -> dict[str, Any]:
        self._issue_sink(bare.issue)

        return {
            "event_type": event_type,
            "kind": bare.kind.value,
            "handled": True,
            "issue_number": bare.issue.get("number"),
        }

    def _handle_unrecognized(
        self,
        event_type: str,
        unrecognized: UnrecognizedPayload,
    ) -> dict[str, Any]:
        logger.info(
            "No issue data found in webhook payload",
            extra={"event_type": event_type, "keys": list(unrecognized.keys)},
        )

        return {
            "event_type": event_type,
            "kind": unrecognized.kind.value,
            "handled": False,
        }

    def _handle_ping(self, payload: Any) -> dict[str, Any]:
        """Acknowledge the ping GitHub sends when a hook is created."""
        zen = payload.get("zen") if isinstance(payload, dict) else None
        logger.info("Ping event received", extra={"zen": zen})

        return {
            "event_type": "ping",
            "kind": PayloadKind.UNRECOGNIZED.value,
            "handled": False,
            "zen": zen,
        }
