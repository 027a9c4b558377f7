"""GitHub collaborator - event payloads and the pull request API."""

from ticketlink.github.client import DEFAULT_API_URL, PullRequestClient
from ticketlink.github.event import (
    LabelPayload,
    PullRequestEvent,
    PullRequestPayload,
    RepositoryPayload,
    load_event,
    parse_event,
)
from ticketlink.github.exceptions import EventError, GitHubError, PullRequestError

__all__ = [
    "DEFAULT_API_URL",
    "EventError",
    "GitHubError",
    "LabelPayload",
    "PullRequestClient",
    "PullRequestError",
    "PullRequestEvent",
    "PullRequestPayload",
    "RepositoryPayload",
    "load_event",
    "parse_event",
]
