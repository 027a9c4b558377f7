"""TicketCheckRunner - Runs the ticket check for one pull request."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import httpx

from ticketlink.checker.models import (
    FailureReason,
    LinkStatus,
    OutcomeStatus,
    PullRequestSnapshot,
)
from ticketlink.checker.policy import evaluate, link_ticket
from ticketlink.config import CheckConfig

logger = logging.getLogger("ticketlink.runner")

SUCCESS_MESSAGE = "Thank you for connecting the PR with a ticket."
BYPASS_MESSAGE = "The label to bypass this check was found, no checks will be performed."
UPDATE_FAILED_MESSAGE = "Updating the pull request has failed"


class PullRequestUpdater(Protocol):
    """The part of the GitHub client the runner needs."""

    def update_pull_request(self, number: int, title: str | None, body: str) -> httpx.Response: ...


class RunStatus(str, Enum):
    """Terminal status of a check run."""

    BYPASSED = "bypassed"
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


@dataclass(frozen=True)
class RunResult:
    """Result of a check run.

    Attributes:
        status: Terminal status.
        message: Final message reported to the CI host.
        reason: The failing field for policy failures.
        body_updated: Whether the description was rewritten and saved.
    """

    status: RunStatus
    message: str
    reason: FailureReason | None = None
    body_updated: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status in (RunStatus.BYPASSED, RunStatus.PASSED)

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


def failure_message(reason: FailureReason, bypass_label: str) -> str:
    """Message telling the author how to fix a failed check."""
    return (
        f"Please connect the PR's {reason.value} to a ticket or add the "
        f'"{bypass_label}" label to bypass this check.'
    )


class TicketCheckRunner:
    """Runs the validation-and-rewrite pass for a single pull request.

    Policy decisions come from the pure functions in
    :mod:`ticketlink.checker.policy`; this class adds logging, the single
    description update, and the fault boundary.
    """

    def __init__(self, config: CheckConfig, client: PullRequestUpdater) -> None:
        """Initialize the runner.

        Args:
            config: Run configuration.
            client: GitHub client used to save the rewritten description.
        """
        self.config = config
        self.client = client

    def check(self, pull_request: PullRequestSnapshot) -> RunResult:
        """Check a pull request and link its ticket.

        Args:
            pull_request: The pull request to check.

        Returns:
            RunResult for the policy outcome.

        Raises:
            httpx.HTTPError: If the description update cannot be sent.
        """
        logger.debug(
            "Checking PR #%d (pattern=%s, ignore_title=%s)",
            pull_request.number,
            self.config.pattern.name,
            self.config.ignore_title,
        )
        outcome = evaluate(pull_request, self.config)

        if outcome.status is OutcomeStatus.BYPASSED:
            logger.info(BYPASS_MESSAGE)
            return RunResult(status=RunStatus.BYPASSED, message=BYPASS_MESSAGE)

        if outcome.status is OutcomeStatus.FAILED:
            assert outcome.reason is not None
            message = failure_message(outcome.reason, self.config.bypass_label)
            logger.error(message)
            return RunResult(status=RunStatus.FAILED, message=message, reason=outcome.reason)

        body_updated = self._link_body(pull_request)

        logger.info(SUCCESS_MESSAGE)
        return RunResult(status=RunStatus.PASSED, message=SUCCESS_MESSAGE, body_updated=body_updated)

    def _link_body(self, pull_request: PullRequestSnapshot) -> bool:
        """Rewrite and save the description. Returns whether the update succeeded."""
        result = link_ticket(pull_request.body, self.config)

        if result.status is LinkStatus.ALREADY_LINKED:
            logger.info("Skipped linking.")
            return False
        if result.status is LinkStatus.NOT_LINKABLE:
            logger.warning("Could not link the ticket.")
            return False

        assert result.body is not None
        logger.info("Linking ticket %s in PR #%d", result.ticket_id, pull_request.number)
        response = self.client.update_pull_request(
            pull_request.number,
            title=pull_request.title,
            body=result.body,
        )
        logger.info("Response: %d", response.status_code)
        if response.status_code != 200:
            logger.error(UPDATE_FAILED_MESSAGE)
            return False
        return True

    def run(self, load_pull_request: Callable[[], PullRequestSnapshot]) -> RunResult:
        """Load the pull request and check it, reporting any fault as a failed run.

        Args:
            load_pull_request: Returns the pull request snapshot. Called once.

        Returns:
            RunResult; ERROR when anything raised.
        """
        try:
            pull_request = load_pull_request()
            return self.check(pull_request)
        except Exception as e:
            logger.exception("Ticket check failed: %s", e)
            return RunResult(status=RunStatus.ERROR, message=str(e))
