"""Custom exceptions for the GitHub collaborator."""

from ticketlink.exceptions import TicketLinkError


class GitHubError(TicketLinkError):
    """Base exception for GitHub errors."""


class EventError(GitHubError):
    """The workflow event payload is missing or malformed."""


class PullRequestError(GitHubError):
    """Error fetching a pull request."""
