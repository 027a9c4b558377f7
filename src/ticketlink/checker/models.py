"""Data models for the ticket checker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Label:
    """A pull request label."""

    name: str


@dataclass(frozen=True)
class PullRequestSnapshot:
    """Read-only view of the pull request fields the check looks at."""

    number: int
    title: str | None = None
    body: str | None = None
    labels: tuple[Label, ...] = field(default_factory=tuple)

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]


class OutcomeStatus(str, Enum):
    """Result of evaluating the ticket-linkage policy."""

    BYPASSED = "bypassed"
    PASSED = "passed"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Which part of the pull request is missing a ticket reference."""

    TITLE = "title"
    BODY = "body"


@dataclass(frozen=True)
class PolicyOutcome:
    """Outcome of the policy check.

    Attributes:
        status: Bypassed, passed or failed.
        reason: The failing field, only set when status is FAILED.
        ticket: Bracketed ticket token found in the body, when passed.
    """

    status: OutcomeStatus
    reason: FailureReason | None = None
    ticket: str | None = None

    @classmethod
    def bypassed(cls) -> PolicyOutcome:
        return cls(status=OutcomeStatus.BYPASSED)

    @classmethod
    def passed(cls, ticket: str | None = None) -> PolicyOutcome:
        return cls(status=OutcomeStatus.PASSED, ticket=ticket)

    @classmethod
    def failed(cls, reason: FailureReason) -> PolicyOutcome:
        return cls(status=OutcomeStatus.FAILED, reason=reason)


class LinkStatus(str, Enum):
    """Result of trying to rewrite a ticket reference into a link."""

    ALREADY_LINKED = "already_linked"
    NOT_LINKABLE = "not_linkable"
    LINKED = "linked"


@dataclass(frozen=True)
class LinkResult:
    """Outcome of link rewriting.

    Attributes:
        status: Whether the body was rewritten.
        body: The rewritten body, only set when status is LINKED.
        ticket_id: Bare ticket identifier that was linked.
    """

    status: LinkStatus
    body: str | None = None
    ticket_id: str | None = None
