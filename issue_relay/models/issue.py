"""Webhook payload shapes accepted by the relay."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, NotRequired, TypedDict


class IssueUser(TypedDict):
    """Author of an issue."""

    login: str


class IssuePayload(TypedDict):
    """An issue object as decoded from the webhook JSON body."""

    title: str
    body: str
    number: NotRequired[int]
    state: NotRequired[str]
    user: NotRequired[IssueUser]
    created_at: NotRequired[str]
    updated_at: NotRequired[str]


class PayloadKind(str, Enum):
    """Discriminator for the accepted payload shapes."""

    ISSUE_EVENT = "issue_event"  # GitHub event envelope with an `issue` member
    BARE_ISSUE = "bare_issue"  # The issue object itself
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class IssueEvent:
    """A GitHub event envelope carrying an issue."""

    issue: Mapping[str, Any]
    action: str | None = None
    repository: str | None = None
    sender: str | None = None

    kind: ClassVar[PayloadKind] = PayloadKind.ISSUE_EVENT


@dataclass(frozen=True)
class BareIssue:
    """An issue object posted directly, without an envelope."""

    issue: Mapping[str, Any]

    kind: ClassVar[PayloadKind] = PayloadKind.BARE_ISSUE


@dataclass(frozen=True)
class UnrecognizedPayload:
    """A payload with no issue data."""

    keys: tuple[str, ...] = field(default_factory=tuple)

    kind: ClassVar[PayloadKind] = PayloadKind.UNRECOGNIZED


WebhookPayload = IssueEvent | BareIssue | UnrecognizedPayload


def _nested_str(payload: Mapping[str, Any], key: str, attr: str) -> str | None:
    """Read ``payload[key][attr]`` when ``payload[key]`` is an object."""
    value = payload.get(key)
    if isinstance(value, Mapping):
        nested = value.get(attr)
        return nested if isinstance(nested, str) else None
    return None


def parse_webhook_payload(payload: Any) -> WebhookPayload:
    """Classify a decoded webhook body.

    An envelope whose ``issue`` member is an object, even an empty one, is
    an :class:`IssueEvent`. Otherwise an object with truthy ``title`` and
    ``body`` is a :class:`BareIssue`. Everything else, including JSON that is
    not an object, is an :class:`UnrecognizedPayload`.

    Args:
        payload: The decoded JSON body.

    Returns:
        One variant of :data:`WebhookPayload`.
    """
    if not isinstance(payload, Mapping):
        return UnrecognizedPayload()

    issue = payload.get("issue")
    if isinstance(issue, Mapping):
        action = payload.get("action")
        return IssueEvent(
            issue=issue,
            action=action if isinstance(action, str) else None,
            repository=_nested_str(payload, "repository", "full_name"),
            sender=_nested_str(payload, "sender", "login"),
        )

    if payload.get("title") and payload.get("body"):
        return BareIssue(issue=payload)

    return UnrecognizedPayload(keys=tuple(str(k) for k in payload))
