"""GitHub client adapter for the githubkit library."""

from functools import partial, wraps
from typing import Any, AsyncIterator, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import (
    Issue,
    IssueComment,
    Label,
    MinimalRepository,
)

from github_review_labeler.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_PER_PAGE

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client
from .exceptions import GitHubRequestError
from .pagination import Page, collect_pages, iter_pages, parse_next_page_url

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_errors(func: F) -> F:
    """Decorator to log failed GitHub requests and raise them as GitHubRequestError."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            try:
                error_data = exc.response.json()
            except ValueError:
                error_data = {}
            message = error_data.get("message", "Request failed") if isinstance(error_data, dict) else "Request failed"
            raw_url = getattr(getattr(exc.response, "raw_response", None), "url", None)
            url = str(raw_url) if raw_url is not None else None
            logger.error(
                "GitHub request failed",
                function=func.__name__,
                message=message,
                url=url,
                status_code=exc.response.status_code,
            )
            raise GitHubRequestError(func.__name__, exc.response.status_code, message, url) from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client

    @classmethod
    async def create(cls, github_access_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> Self:
        """Create a new GitHub client adapter.

        Args:
            github_access_token: Access token used for every request
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        logger.info("Creating client for GitHub instance", github_api_url=github_api_url)
        client = await get_github_client(github_access_token=github_access_token, github_api_url=github_api_url)
        return cls(client)

    # Generic paged GET
    @handle_github_errors
    async def get_page(self, url: str, model: Any) -> Page[Any]:
        """Fetch one page from url, decoding it as a list of model.

        url may be a path relative to the API base URL or an absolute URL
        taken from a previous Link header.
        """
        response: Response[list[Any]] = await self.client.arequest("GET", url, response_model=list[model])
        return Page(items=response.parsed_data, next_url=parse_next_page_url(response.headers.get("link")))

    # Organization listings
    def iter_org_repositories(self, org: str) -> AsyncIterator[list[MinimalRepository]]:
        """Yield the repositories of an organization one page at a time."""
        url = f"/orgs/{org}/repos?per_page={DEFAULT_PER_PAGE}"
        return iter_pages(partial(self.get_page, model=MinimalRepository), url)

    def iter_org_issues(self, org: str) -> AsyncIterator[list[Issue]]:
        """Yield the issues of an organization one page at a time, most recently updated first."""
        url = f"/orgs/{org}/issues?filter=all&sort=updated&direction=desc&per_page={DEFAULT_PER_PAGE}"
        return iter_pages(partial(self.get_page, model=Issue), url)

    # Issue operations
    @handle_github_errors
    async def get_issue(self, owner: str, repo: str, issue_number: int) -> Issue:
        """Get a single issue by number."""
        response: Response[Issue] = await self.client.rest.issues.async_get(owner=owner, repo=repo, issue_number=issue_number)
        return response.parsed_data

    async def list_issue_comments(self, owner: str, repo: str, issue_number: int) -> list[IssueComment]:
        """List every comment of an issue, handling pagination."""
        url = f"/repos/{owner}/{repo}/issues/{issue_number}/comments?per_page={DEFAULT_PER_PAGE}"
        return await collect_pages(partial(self.get_page, model=IssueComment), url)

    @handle_github_errors
    async def set_labels_on_issue(self, owner: str, repo: str, issue_number: int, labels: list[str]) -> None:
        """Replace all labels on an issue (or pull request - GitHub considers them the same for label purposes)."""
        if labels:
            await self.client.rest.issues.async_set_labels(
                owner=owner,
                repo=repo,
                issue_number=issue_number,
                labels=labels,
            )
        else:
            await self.client.rest.issues.async_remove_all_labels(
                owner=owner,
                repo=repo,
                issue_number=issue_number,
            )

    # Label CRUD
    async def list_labels(self, owner: str, repo: str) -> list[Label]:
        """List every label defined in a repository, handling pagination."""
        url = f"/repos/{owner}/{repo}/labels?per_page={DEFAULT_PER_PAGE}"
        return await collect_pages(partial(self.get_page, model=Label), url)

    @handle_github_errors
    async def create_label(self, owner: str, repo: str, name: str, color: str) -> Label:
        """Create a label for a repository."""
        response: Response[Label] = await self.client.rest.issues.async_create_label(owner=owner, repo=repo, name=name, color=color)
        return response.parsed_data

    @handle_github_errors
    async def update_label(self, owner: str, repo: str, name: str, new_name: str, color: str) -> Label:
        """Rename and recolor a label of a repository."""
        response: Response[Label] = await self.client.rest.issues.async_update_label(
            owner=owner,
            repo=repo,
            name=name,
            new_name=new_name,
            color=color,
        )
        return response.parsed_data

    @handle_github_errors
    async def delete_label(self, owner: str, repo: str, name: str) -> None:
        """Delete a label from a repository."""
        await self.client.rest.issues.async_delete_label(owner=owner, repo=repo, name=name)
        return None
