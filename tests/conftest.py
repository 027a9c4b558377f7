"""Shared pytest fixtures and configuration."""

import logging

import pytest

from ticketlink.checker import Label, PullRequestSnapshot
from ticketlink.config import CheckConfig


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: calls the real GitHub API (local only)")


# Shared fixtures


@pytest.fixture
def config() -> CheckConfig:
    """Default configuration with the project-key pattern."""
    return CheckConfig(token="test-token")


@pytest.fixture
def make_pr():
    """Factory for pull request snapshots."""

    def _make(
        title: str | None = "[ABC-123] Add feature",
        body: str | None = "Ticket: [ABC-123]\n",
        labels: tuple[str, ...] = (),
        number: int = 7,
    ) -> PullRequestSnapshot:
        return PullRequestSnapshot(
            number=number,
            title=title,
            body=body,
            labels=tuple(Label(name=name) for name in labels),
        )

    return _make


@pytest.fixture(autouse=True)
def reset_ticketlink_logger():
    """Drop handlers installed by setup_logging so tests don't leak streams."""
    yield
    logger = logging.getLogger("ticketlink")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
