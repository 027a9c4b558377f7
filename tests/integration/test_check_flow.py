"""Integration tests for a full check run against a fake GitHub API."""

import json

import httpx
import pytest

from ticketlink.config import CheckConfig
from ticketlink.github import PullRequestClient
from ticketlink.runner import RunStatus, TicketCheckRunner

pytestmark = pytest.mark.integration


class FakeGitHub:
    """In-memory stand-in for the pull request endpoints."""

    def __init__(self, pulls: dict[int, dict], update_status: int = 200) -> None:
        self.pulls = pulls
        self.update_status = update_status
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        number = int(request.url.path.rsplit("/", 1)[-1])
        pull = self.pulls.get(number)
        if pull is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if request.method == "GET":
            return httpx.Response(200, json=pull)
        if request.method == "PATCH":
            if self.update_status != 200:
                return httpx.Response(self.update_status, json={"message": "Forbidden"})
            pull.update(json.loads(request.content))
            return httpx.Response(200, json=pull)
        return httpx.Response(405)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub(
        {
            1: {
                "number": 1,
                "title": "[ABC-1] Add login",
                "body": "Ticket: [ABC-1]\nAdds the login page.",
                "labels": [],
            },
            2: {
                "number": 2,
                "title": "Bump deps",
                "body": None,
                "labels": [{"name": "no-ticket"}],
            },
        }
    )


@pytest.fixture
def client(fake_github: FakeGitHub):
    pr_client = PullRequestClient(repo="owner/repo", token="test-token")
    pr_client._client = httpx.Client(
        base_url="https://api.github.com",
        headers={"Authorization": "Bearer test-token"},
        transport=httpx.MockTransport(fake_github.handler),
    )
    yield pr_client
    pr_client.close()


def test_links_ticket_and_saves_description(client, fake_github: FakeGitHub) -> None:
    """The body is rewritten once and the title is sent unchanged."""
    runner = TicketCheckRunner(CheckConfig(token="test-token"), client)

    result = runner.run(lambda: client.get_pull_request(1))

    assert result.status is RunStatus.PASSED
    assert result.body_updated is True
    assert fake_github.pulls[1]["body"] == (
        "Ticket: [ABC-1](https://app.clickup.com/t/ABC-1)Adds the login page."
    )
    patch_request = fake_github.requests[-1]
    assert patch_request.method == "PATCH"
    assert patch_request.url.path == "/repos/owner/repo/pulls/1"
    assert json.loads(patch_request.content)["title"] == "[ABC-1] Add login"


def test_second_run_is_noop(client, fake_github: FakeGitHub) -> None:
    """Re-running against a linked body sends no update."""
    runner = TicketCheckRunner(CheckConfig(token="test-token"), client)

    runner.run(lambda: client.get_pull_request(1))
    first_body = fake_github.pulls[1]["body"]
    result = runner.run(lambda: client.get_pull_request(1))

    assert result.status is RunStatus.PASSED
    assert result.body_updated is False
    assert fake_github.pulls[1]["body"] == first_body
    assert [r.method for r in fake_github.requests] == ["GET", "PATCH", "GET"]


def test_bypassed_pr_not_touched(client, fake_github: FakeGitHub) -> None:
    runner = TicketCheckRunner(CheckConfig(token="test-token"), client)

    result = runner.run(lambda: client.get_pull_request(2))

    assert result.status is RunStatus.BYPASSED
    assert [r.method for r in fake_github.requests] == ["GET"]


def test_rejected_update_still_passes(client, fake_github: FakeGitHub) -> None:
    """A refused update leaves the body alone and the check green."""
    fake_github.update_status = 403
    runner = TicketCheckRunner(CheckConfig(token="test-token"), client)

    result = runner.run(lambda: client.get_pull_request(1))

    assert result.status is RunStatus.PASSED
    assert result.body_updated is False
    assert fake_github.pulls[1]["body"] == "Ticket: [ABC-1]\nAdds the login page."


def test_missing_pr_is_an_error(client) -> None:
    runner = TicketCheckRunner(CheckConfig(token="test-token"), client)

    result = runner.run(lambda: client.get_pull_request(99))

    assert result.status is RunStatus.ERROR
    assert "404" in result.message
