"""Unit tests for the GitHubKitAdapter class and related GitHub operations."""

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from githubkit.exception import RequestFailed

from github_review_labeler.github.adapter import GitHubKitAdapter
from github_review_labeler.github.exceptions import GitHubRequestError


class DummyResponse:
    """A dummy response object to mock GitHub API responses."""

    def __init__(self, parsed_data: Any = None, link: str | None = None) -> None:
        """Initialize the dummy response with parsed data and an optional Link header."""
        self.parsed_data = parsed_data
        self.headers: dict[str, str] = {"link": link} if link is not None else {}


def make_request_failed(status_code: int, message: str) -> RequestFailed:
    """Build a RequestFailed error around a mocked response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = {"message": message}
    response.raw_response.url = "https://api.github.com/repos/acme/widgets/labels"
    return RequestFailed(response)


@pytest.mark.asyncio
async def test_get_page_returns_items_and_next_url() -> None:
    """Test that get_page decodes the body and extracts the next link."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.arequest = AsyncMock(
        return_value=DummyResponse(parsed_data=["a", "b"], link='<https://api.github.com/orgs/acme/repos?page=2>; rel="next"')
    )

    page = await adapter.get_page("/orgs/acme/repos", model=str)

    assert page.items == ["a", "b"]
    assert page.next_url == "https://api.github.com/orgs/acme/repos?page=2"
    adapter.client.arequest.assert_awaited_once()


@pytest.mark.asyncio
async def test_list_issue_comments_follows_pages() -> None:
    """Test that comments are collected from every page."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.arequest = AsyncMock(
        side_effect=[
            DummyResponse(parsed_data=[SimpleNamespace(body="one")], link='<https://api.github.com/c?page=2>; rel="next"'),
            DummyResponse(parsed_data=[SimpleNamespace(body="two")]),
        ]
    )

    comments = await adapter.list_issue_comments("acme", "widgets", 42)

    assert [comment.body for comment in comments] == ["one", "two"]
    assert adapter.client.arequest.await_count == 2
    first_url = adapter.client.arequest.await_args_list[0].args[1]
    assert first_url.startswith("/repos/acme/widgets/issues/42/comments")
    assert adapter.client.arequest.await_args_list[1].args[1] == "https://api.github.com/c?page=2"


@pytest.mark.asyncio
async def test_iter_org_issues_requests_all_issues_by_update() -> None:
    """Test that org issues are requested with the filter=all listing."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.arequest = AsyncMock(return_value=DummyResponse(parsed_data=[]))

    pages = [page async for page in adapter.iter_org_issues("acme")]

    assert pages == [[]]
    url = adapter.client.arequest.await_args.args[1]
    assert url.startswith("/orgs/acme/issues?filter=all&sort=updated&direction=desc")


@pytest.mark.asyncio
async def test_set_labels_on_issue_replaces_labels() -> None:
    """Test that a non-empty label set is written with a single set call."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.rest.issues.async_set_labels = AsyncMock()
    adapter.client.rest.issues.async_remove_all_labels = AsyncMock()

    await adapter.set_labels_on_issue("acme", "widgets", 42, ["caked", "team:x"])

    adapter.client.rest.issues.async_set_labels.assert_awaited_once_with(owner="acme", repo="widgets", issue_number=42, labels=["caked", "team:x"])
    adapter.client.rest.issues.async_remove_all_labels.assert_not_awaited()


@pytest.mark.asyncio
async def test_set_labels_on_issue_with_no_labels_removes_all() -> None:
    """Test that an empty label set removes every label."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.rest.issues.async_set_labels = AsyncMock()
    adapter.client.rest.issues.async_remove_all_labels = AsyncMock()

    await adapter.set_labels_on_issue("acme", "widgets", 42, [])

    adapter.client.rest.issues.async_remove_all_labels.assert_awaited_once_with(owner="acme", repo="widgets", issue_number=42)
    adapter.client.rest.issues.async_set_labels.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_label_addresses_current_name() -> None:
    """Test that a label is updated through its current name."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.rest.issues.async_update_label = AsyncMock(return_value=DummyResponse(parsed_data="label"))

    assert await adapter.update_label("acme", "widgets", "WIP", "wip", "207de5") == "label"
    adapter.client.rest.issues.async_update_label.assert_awaited_once_with(owner="acme", repo="widgets", name="WIP", new_name="wip", color="207de5")


@pytest.mark.asyncio
async def test_request_failure_is_raised_as_github_request_error() -> None:
    """Test that a failed request is raised with its status code and message."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.rest.issues.async_delete_label = AsyncMock(side_effect=make_request_failed(404, "Not Found"))

    with pytest.raises(GitHubRequestError) as exc_info:
        await adapter.delete_label("acme", "widgets", "Awaiting Cake")

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Not Found"
    assert exc_info.value.function == "delete_label"
    assert isinstance(exc_info.value.__cause__, RequestFailed)


@pytest.mark.asyncio
async def test_other_errors_propagate_unchanged() -> None:
    """Test that errors other than failed requests are not wrapped."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.rest.issues.async_get = AsyncMock(side_effect=ConnectionError("network down"))

    with pytest.raises(ConnectionError):
        await adapter.get_issue("acme", "widgets", 1)
