"""Ticket checker - policy evaluation and link rewriting."""

from ticketlink.checker.models import (
    FailureReason,
    Label,
    LinkResult,
    LinkStatus,
    OutcomeStatus,
    PolicyOutcome,
    PullRequestSnapshot,
)
from ticketlink.checker.patterns import (
    DEFAULT_PATTERN,
    PATTERNS,
    PROJECT_KEY,
    SHORT_ID,
    TicketPattern,
    get_pattern,
)
from ticketlink.checker.policy import evaluate, format_link, link_ticket, strip_brackets

__all__ = [
    "DEFAULT_PATTERN",
    "PATTERNS",
    "PROJECT_KEY",
    "SHORT_ID",
    "FailureReason",
    "Label",
    "LinkResult",
    "LinkStatus",
    "OutcomeStatus",
    "PolicyOutcome",
    "PullRequestSnapshot",
    "TicketPattern",
    "evaluate",
    "format_link",
    "get_pattern",
    "link_ticket",
    "strip_brackets",
]
