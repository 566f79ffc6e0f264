"""Fixtures for unit tests."""

from types import SimpleNamespace
from typing import Any, AsyncIterator, Callable, Generator

import pytest
import structlog

from github_review_labeler.github.abc import GitHubClientBase
from github_review_labeler.github.pagination import Page


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


class FakeGitHubAdapter(GitHubClientBase):
    """In-memory GitHub client that records every write it receives.

    Set an entry of ``errors`` to make a method raise. Keys are either the
    method name or a tuple of the method name and its owner/repo (and issue
    number, where the method takes one).
    """

    def __init__(self) -> None:
        """Start with no repositories, issues, comments, or labels."""
        self.pages: dict[str, Page[Any]] = {}
        self.repository_pages: list[list[Any]] = []
        self.issue_pages: list[list[Any]] = []
        self.issues: dict[tuple[str, str, int], Any] = {}
        self.comments: dict[tuple[str, str, int], list[Any]] = {}
        self.labels: dict[tuple[str, str], list[Any]] = {}
        self.errors: dict[Any, Exception] = {}
        self.fetched_urls: list[str] = []
        self.label_writes: list[tuple[str, str, int, list[str]]] = []
        self.label_definition_writes: list[tuple[Any, ...]] = []
        self.get_issue_calls: list[tuple[str, str, int]] = []

    @property
    def write_count(self) -> int:
        """Return the number of calls that changed remote state."""
        return len(self.label_writes) + len(self.label_definition_writes)

    def _raise_if_failing(self, method: str, *key: Any) -> None:
        for candidate in ((method, *key), method):
            if candidate in self.errors:
                raise self.errors[candidate]

    async def get_page(self, url: str, model: Any) -> Page[Any]:
        """Return the page registered for url."""
        self.fetched_urls.append(url)
        self._raise_if_failing("get_page", url)
        return self.pages[url]

    async def iter_org_repositories(self, org: str) -> AsyncIterator[list[Any]]:
        """Yield the configured repository pages."""
        for page in self.repository_pages:
            yield page
        self._raise_if_failing("iter_org_repositories")

    async def iter_org_issues(self, org: str) -> AsyncIterator[list[Any]]:
        """Yield the configured issue pages."""
        for page in self.issue_pages:
            yield page
        self._raise_if_failing("iter_org_issues")

    async def get_issue(self, owner: str, repo: str, issue_number: int) -> Any:
        """Return a stored issue."""
        self.get_issue_calls.append((owner, repo, issue_number))
        self._raise_if_failing("get_issue", owner, repo, issue_number)
        return self.issues[(owner, repo, issue_number)]

    async def list_issue_comments(self, owner: str, repo: str, issue_number: int) -> list[Any]:
        """Return the stored comments of an issue."""
        self._raise_if_failing("list_issue_comments", owner, repo, issue_number)
        return list(self.comments.get((owner, repo, issue_number), []))

    async def set_labels_on_issue(self, owner: str, repo: str, issue_number: int, labels: list[str]) -> None:
        """Record the write and replace the labels of the stored issue."""
        self._raise_if_failing("set_labels_on_issue", owner, repo, issue_number)
        self.label_writes.append((owner, repo, issue_number, list(labels)))
        issue = self.issues.get((owner, repo, issue_number))
        if issue is not None:
            issue.labels = [SimpleNamespace(name=label) for label in labels]

    async def list_labels(self, owner: str, repo: str) -> list[Any]:
        """Return copies of the stored label definitions of a repository."""
        self._raise_if_failing("list_labels", owner, repo)
        return [SimpleNamespace(name=label.name, color=label.color) for label in self.labels.get((owner, repo), [])]

    async def create_label(self, owner: str, repo: str, name: str, color: str) -> Any:
        """Record and apply a label creation."""
        self._raise_if_failing("create_label", owner, repo)
        self.label_definition_writes.append(("create", owner, repo, name, color))
        label = SimpleNamespace(name=name, color=color)
        self.labels.setdefault((owner, repo), []).append(label)
        return label

    async def update_label(self, owner: str, repo: str, name: str, new_name: str, color: str) -> Any:
        """Record and apply a label update."""
        self._raise_if_failing("update_label", owner, repo)
        self.label_definition_writes.append(("update", owner, repo, name, new_name, color))
        for label in self.labels.get((owner, repo), []):
            if label.name == name:
                label.name = new_name
                label.color = color
                return label
        raise KeyError(name)

    async def delete_label(self, owner: str, repo: str, name: str) -> None:
        """Record and apply a label deletion."""
        self._raise_if_failing("delete_label", owner, repo)
        self.label_definition_writes.append(("delete", owner, repo, name))
        self.labels[(owner, repo)] = [label for label in self.labels.get((owner, repo), []) if label.name != name]


@pytest.fixture
def fake_github() -> FakeGitHubAdapter:
    """Return an empty in-memory GitHub client."""
    return FakeGitHubAdapter()


@pytest.fixture
def make_issue() -> Callable[..., SimpleNamespace]:
    """Return a factory for issues shaped like the ones githubkit returns."""

    def _make_issue(
        number: int,
        title: str = "Add feature",
        labels: list[str] | None = None,
        owner: str = "acme",
        repo: str = "widgets",
        pull_request: bool = True,
        body: str | None = "",
    ) -> SimpleNamespace:
        return SimpleNamespace(
            number=number,
            title=title,
            body=body,
            html_url=f"https://github.com/{owner}/{repo}/pull/{number}",
            url=f"https://api.github.com/repos/{owner}/{repo}/issues/{number}",
            labels=[SimpleNamespace(name=label) for label in labels or []],
            pull_request=SimpleNamespace(url=f"https://api.github.com/repos/{owner}/{repo}/pulls/{number}") if pull_request else None,
            repository=SimpleNamespace(name=repo, owner=SimpleNamespace(login=owner)),
        )

    return _make_issue


@pytest.fixture
def make_comment() -> Callable[[str], SimpleNamespace]:
    """Return a factory for issue comments."""
    return lambda body: SimpleNamespace(body=body)
