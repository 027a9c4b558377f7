"""Pydantic models for the GitHub webhook payload."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ticketlink.checker.models import Label, PullRequestSnapshot
from ticketlink.github.exceptions import EventError

logger = logging.getLogger("ticketlink.github.event")


class LabelPayload(BaseModel):
    """A label as it appears in the webhook payload."""

    model_config = ConfigDict(extra="ignore")

    name: str


class PullRequestPayload(BaseModel):
    """The ``pull_request`` object of a webhook payload or REST response."""

    model_config = ConfigDict(extra="ignore")

    number: int
    title: str | None = None
    body: str | None = None
    labels: list[LabelPayload] = Field(default_factory=list)

    def to_snapshot(self) -> PullRequestSnapshot:
        """Convert to the read-only snapshot the checker works on."""
        return PullRequestSnapshot(
            number=self.number,
            title=self.title,
            body=self.body,
            labels=tuple(Label(name=label.name) for label in self.labels),
        )


class RepositoryPayload(BaseModel):
    """The ``repository`` object of a webhook payload."""

    model_config = ConfigDict(extra="ignore")

    full_name: str = Field(..., pattern=r"^[\w\-\.]+/[\w\-\.]+$")


class PullRequestEvent(BaseModel):
    """A workflow event payload. Only pull request events carry ``pull_request``."""

    model_config = ConfigDict(extra="ignore")

    pull_request: PullRequestPayload | None = None
    repository: RepositoryPayload | None = None

    def snapshot(self) -> PullRequestSnapshot:
        """Return the pull request snapshot.

        Raises:
            EventError: If the event is not a pull request event.
        """
        if self.pull_request is None:
            raise EventError("The event payload is not a pull request event")
        return self.pull_request.to_snapshot()

    @property
    def repo(self) -> str | None:
        """Repository in "owner/repo" format, if present."""
        return self.repository.full_name if self.repository else None


def parse_event(data: Any) -> PullRequestEvent:
    """Validate a decoded event payload.

    Raises:
        EventError: If the payload does not match the expected schema.
    """
    try:
        return PullRequestEvent.model_validate(data)
    except ValidationError as e:
        raise EventError(f"Malformed event payload: {e}") from e


def load_event(event_path: Path | str) -> PullRequestEvent:
    """Load the event payload written by the runner.

    Args:
        event_path: Path to the JSON payload (GITHUB_EVENT_PATH).

    Returns:
        The parsed event.

    Raises:
        EventError: If the file is missing or does not hold a valid payload.
    """
    event_path = Path(event_path)
    logger.debug("Loading event payload from %s", event_path)
    try:
        data = json.loads(event_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise EventError(f"Could not read event payload {event_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise EventError(f"Invalid JSON in event payload {event_path}: {e}") from e

    return parse_event(data)
