"""Ticket-linkage policy and description link rewriting.

Both functions are pure: they take a snapshot or a body plus the run
configuration and return a value describing what should happen. Logging and
the API call live in the runner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ticketlink.checker.models import (
    FailureReason,
    LinkResult,
    LinkStatus,
    PolicyOutcome,
    PullRequestSnapshot,
)

if TYPE_CHECKING:
    from ticketlink.config import CheckConfig


def evaluate(pull_request: PullRequestSnapshot, config: CheckConfig) -> PolicyOutcome:
    """Decide whether a pull request satisfies the ticket-linkage policy.

    The bypass label short-circuits every other check. The title must carry
    a ticket token unless ``ignore_title`` is set; the body always must.

    Args:
        pull_request: The pull request to check.
        config: Run configuration.

    Returns:
        The policy outcome.
    """
    if config.bypass_label in pull_request.label_names:
        return PolicyOutcome.bypassed()

    if not config.ignore_title and config.pattern.find_ticket(pull_request.title) is None:
        return PolicyOutcome.failed(FailureReason.TITLE)

    ticket = config.pattern.find_ticket(pull_request.body)
    if ticket is None:
        return PolicyOutcome.failed(FailureReason.BODY)

    return PolicyOutcome.passed(ticket)


def strip_brackets(token: str) -> str:
    """Turn ``[ABC-123]`` into ``ABC-123``."""
    return token.strip().replace("[", "").replace("]", "")


def format_link(ticket_id: str, base_url: str) -> str:
    """Markdown link for a ticket."""
    return f"[{ticket_id}]({base_url}{ticket_id})"


def link_ticket(body: str | None, config: CheckConfig) -> LinkResult:
    """Rewrite the first line-ending ticket token in ``body`` into a link.

    The token and its trailing line break are replaced by the Markdown link.
    A body that already contains a canonical link is left untouched, which
    makes the rewrite idempotent.

    Args:
        body: Pull request description.
        config: Run configuration.

    Returns:
        LinkResult with the rewritten body when a link was inserted.
    """
    if body and config.pattern.linked_regex(config.ticket_base_url).search(body):
        return LinkResult(status=LinkStatus.ALREADY_LINKED)

    match = config.pattern.find_unlinked(body)
    if match is None or body is None:
        return LinkResult(status=LinkStatus.NOT_LINKABLE)

    ticket_id = strip_brackets(match.group(0))
    link = format_link(ticket_id, config.ticket_base_url)
    updated = body[: match.start()] + link + body[match.end() :]
    return LinkResult(status=LinkStatus.LINKED, body=updated, ticket_id=ticket_id)
