"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator

from github_review_labeler.github.pagination import Page


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients.

    Every method takes the owner and repository explicitly so a single client
    can serve a whole organization.
    """

    # Generic paged GET
    @abstractmethod
    async def get_page(self, url: str, model: Any) -> Page[Any]:
        """Fetch one page of a collection and the URL of the next page."""
        pass

    # Organization listings
    @abstractmethod
    def iter_org_repositories(self, org: str) -> AsyncIterator[list[Any]]:
        """Yield the repositories of an organization one page at a time."""
        pass

    @abstractmethod
    def iter_org_issues(self, org: str) -> AsyncIterator[list[Any]]:
        """Yield the issues of an organization one page at a time."""
        pass

    # Issue operations
    @abstractmethod
    async def get_issue(self, owner: str, repo: str, issue_number: int) -> Any:
        """Get a single issue by number."""
        pass

    @abstractmethod
    async def list_issue_comments(self, owner: str, repo: str, issue_number: int) -> list[Any]:
        """List every comment of an issue."""
        pass

    @abstractmethod
    async def set_labels_on_issue(self, owner: str, repo: str, issue_number: int, labels: list[str]) -> None:
        """Replace all labels on an issue (or pull request)."""
        pass

    # Label CRUD
    @abstractmethod
    async def list_labels(self, owner: str, repo: str) -> list[Any]:
        """List every label defined in a repository."""
        pass

    @abstractmethod
    async def create_label(self, owner: str, repo: str, name: str, color: str) -> Any:
        """Create a label for a repository."""
        pass

    @abstractmethod
    async def update_label(self, owner: str, repo: str, name: str, new_name: str, color: str) -> Any:
        """Rename and recolor a label of a repository."""
        pass

    @abstractmethod
    async def delete_label(self, owner: str, repo: str, name: str) -> None:
        """Delete a label from a repository."""
        pass
