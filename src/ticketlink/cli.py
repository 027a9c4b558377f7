"""CLI entry point for the ticketlink check.

Inputs come from command-line options or, inside a GitHub Actions job, from
the ``INPUT_*`` variables the runner sets for action inputs and the standard
``GITHUB_*`` variables describing the triggering event.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path

import click

from ticketlink import __version__
from ticketlink.checker.models import PullRequestSnapshot
from ticketlink.checker.patterns import PATTERNS
from ticketlink.config import CheckConfig, load_config
from ticketlink.exceptions import ConfigError
from ticketlink.github import DEFAULT_API_URL, EventError, PullRequestClient, load_event
from ticketlink.logging import setup_logging
from ticketlink.runner import TicketCheckRunner

logger = logging.getLogger("ticketlink.cli")

# Exit status for invalid configuration, matching click's usage errors
CONFIG_ERROR_EXIT = 2


def make_loader(
    client: PullRequestClient,
    event_path: Path | None,
    pr_number: int | None,
) -> Callable[[], PullRequestSnapshot]:
    """Build the function that loads the pull request for the run.

    With a PR number the pull request is fetched from the API; otherwise it
    is read from the event payload, which also supplies the repository when
    none was given.
    """

    def load() -> PullRequestSnapshot:
        if pr_number is not None:
            if not client.repo:
                raise EventError("A repository is required to fetch a pull request")
            return client.get_pull_request(pr_number)

        assert event_path is not None
        event = load_event(event_path)
        snapshot = event.snapshot()
        if not client.repo:
            if event.repo is None:
                raise EventError("The event payload does not name a repository")
            client.repo = event.repo
        return snapshot

    return load


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--token",
    envvar=["INPUT_TOKEN", "GITHUB_TOKEN"],
    help="GitHub token used to update the pull request.",
)
@click.option(
    "--ignore-title",
    type=click.BOOL,
    envvar="INPUT_IGNORE-TITLE",
    default=None,
    help="Do not require a ticket reference in the title (true/false).",
)
@click.option(
    "--ignore-body",
    type=click.BOOL,
    envvar="INPUT_IGNORE-BODY",
    default=None,
    help="Accepted for compatibility; the body is always checked (true/false).",
)
@click.option(
    "--pattern",
    type=click.Choice(sorted(PATTERNS), case_sensitive=False),
    envvar="INPUT_PATTERN",
    default=None,
    help="Ticket pattern family (default: project-key).",
)
@click.option(
    "--bypass-label",
    envvar="INPUT_BYPASS-LABEL",
    default=None,
    help='Label that skips the check (default: "no-ticket").',
)
@click.option(
    "--ticket-base-url",
    envvar="INPUT_TICKET-BASE-URL",
    default=None,
    help="Prefix for ticket links; the ticket ID is appended.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="TICKETLINK_CONFIG",
    help="YAML file with check settings.",
)
@click.option(
    "--event-path",
    type=click.Path(path_type=Path),
    envvar="GITHUB_EVENT_PATH",
    help="Path to the webhook event payload.",
)
@click.option(
    "--repo",
    envvar="GITHUB_REPOSITORY",
    help='Repository in "owner/repo" format (default: from the event).',
)
@click.option(
    "--api-url",
    envvar="GITHUB_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="GitHub API base URL.",
)
@click.option(
    "--pr-number",
    type=int,
    help="Fetch this pull request from the API instead of reading the event.",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging.",
)
def main(
    token: str | None,
    ignore_title: bool | None,
    ignore_body: bool | None,
    pattern: str | None,
    bypass_label: str | None,
    ticket_base_url: str | None,
    config_path: Path | None,
    event_path: Path | None,
    repo: str | None,
    api_url: str,
    pr_number: int | None,
    verbose: bool,
) -> None:
    """Check that a pull request references a ticket and link it in the description."""
    setup_logging(level="DEBUG" if verbose else None)

    try:
        config: CheckConfig = load_config(config_path, token=token or "").with_overrides(
            ignore_title=ignore_title,
            ignore_body=ignore_body,
            pattern=pattern,
            bypass_label=bypass_label,
            ticket_base_url=ticket_base_url,
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(CONFIG_ERROR_EXIT)

    if event_path is None and pr_number is None:
        click.echo("Configuration error: an event payload or --pr-number is required", err=True)
        sys.exit(CONFIG_ERROR_EXIT)

    logger.debug("Running with %r", config)

    with PullRequestClient(repo=repo or "", token=config.token, base_url=api_url) as client:
        runner = TicketCheckRunner(config, client)
        result = runner.run(make_loader(client, event_path, pr_number))

    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
